"""CLI: glint chat, glint send"""

import json
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from glint_chat.models.chat import MessageEntry, MessageKind, Role
from glint_chat.session import SessionEvent

console = Console()


def _get_client():
    from glint_chat.cli.main import _get_client
    return _get_client()


def _run(coro):
    from glint_chat.cli.main import _run
    return _run(coro)


def print_entry(entry: MessageEntry) -> None:
    if entry.role == Role.USER:
        if entry.kind in (MessageKind.IMAGE, MessageKind.VOICE):
            console.print(f"[cyan]You:[/cyan] [dim]<{entry.kind.value} {escape(entry.payload)}>[/dim]")
        else:
            console.print(f"[cyan]You:[/cyan] {escape(entry.payload)}")
    elif entry.kind == MessageKind.ERROR:
        console.print(f"[red]Glint:[/red] {escape(entry.payload)}")
    elif entry.kind == MessageKind.IMAGE:
        console.print(f"[green]Glint:[/green] 🖼️ Generated Image: {escape(entry.payload)}")
    else:
        console.print(f"[green]Glint:[/green] {escape(entry.payload)}")


def _print_pending(event: SessionEvent) -> None:
    if event.type == "pending":
        console.print(f"[dim]{event.data['category'].value.upper()} API se jawab aa raha hai...[/dim]")


@click.command("chat")
@click.argument("chat_id", required=False)
def chat_cmd(chat_id: Optional[str]):
    """Interactive chat."""

    async def _chat():
        client = _get_client()
        if chat_id:
            history = client.load_chat(chat_id)
            for entry in history.messages:
                print_entry(entry)
        else:
            chat = client.create_chat()
            console.print(f"[dim]Chat: {chat.id} ({chat.display_name})[/dim]")
        client.session.add_event_handler(_print_pending)
        console.print("[cyan]Type your message (Ctrl+C to exit)[/cyan]\n")
        try:
            while True:
                msg = click.prompt("You", prompt_suffix=": ")
                if msg.lower() in ("/quit", "/exit"):
                    break
                if not msg.strip():
                    continue
                print_entry(await client.submit(msg))
        except (KeyboardInterrupt, EOFError, click.Abort):
            pass
        finally:
            await client.close()

    _run(_chat())


@click.command("send")
@click.argument("message")
@click.option("-c", "--chat", "chat_id", default=None, help="Existing chat id")
@click.option("--json-output", "--json", is_flag=True)
def send_cmd(message: str, chat_id: Optional[str], json_output: bool):
    """Send a one-shot message."""

    async def _send():
        client = _get_client()
        try:
            if chat_id:
                client.load_chat(chat_id)
            else:
                chat = client.create_chat()
                if not json_output:
                    console.print(f"[dim]Chat: {chat.id}[/dim]")
            entry = await client.submit(message)
            if json_output:
                click.echo(json.dumps(entry.model_dump(mode="json"), ensure_ascii=False))
            else:
                print_entry(entry)
        finally:
            await client.close()

    _run(_send())
