"""
Glint CLI — `glint` command.

Commands:
  glint chat [chat-id]     Interactive REPL chat
  glint send <message>     One-shot message
  glint chats <cmd>        List, create, rename, show chats
  glint keys <cmd>         Provider API keys
  glint lang [language]    Show or set the reply language
  glint media <cmd>        Attach or list photos and voice notes
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import Optional

try:
    import click
    from rich.console import Console
except ImportError:
    raise SystemExit("CLI requires extras: pip install glint-chat[cli]")

from glint_chat.client import AsyncGlint
from glint_chat.storage import DEFAULT_STORE_FILE

console = Console()


def _store_path(ctx: Optional[click.Context] = None) -> Path:
    ctx = ctx or click.get_current_context(silent=True)
    obj = (ctx.find_root().obj if ctx else None) or {}
    if obj.get("store"):
        return Path(obj["store"])
    home = os.environ.get("GLINT_HOME")
    return Path(home) / "storage.json" if home else DEFAULT_STORE_FILE


def _get_client() -> AsyncGlint:
    ctx = click.get_current_context(silent=True)
    obj = (ctx.find_root().obj if ctx else None) or {}
    return AsyncGlint(
        store_path=_store_path(ctx),
        voice_relay_url=obj.get("voice_relay_url"),
        reply_delay_s=obj.get("reply_delay", 1.0),
    )


def _run(coro):
    return asyncio.run(coro)


@click.group()
@click.version_option("0.1.0")
@click.option("--store", type=click.Path(dir_okay=False), default=None, help="Storage file (default $GLINT_HOME/storage.json)")
@click.option("--voice-relay-url", envvar="GLINT_VOICE_RELAY_URL", default=None, help="Relay endpoint for voice requests")
@click.option("--reply-delay", type=float, default=1.0, show_default=True, help="Seconds to wait before resolving a reply")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
@click.pass_context
def main(ctx, store, voice_relay_url, reply_delay, verbose):
    """Glint — chat with text, image, voice and coding AI providers."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj.update({"store": store, "voice_relay_url": voice_relay_url, "reply_delay": reply_delay})


# Register subcommands from separate modules
from glint_chat.cli.chat import chat_cmd, send_cmd
from glint_chat.cli.chats import chats
from glint_chat.cli.keys import keys, lang_cmd
from glint_chat.cli.media import media

main.add_command(chat_cmd)
main.add_command(send_cmd)
main.add_command(chats)
main.add_command(keys)
main.add_command(lang_cmd)
main.add_command(media)


if __name__ == "__main__":
    main()
