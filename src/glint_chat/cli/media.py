"""CLI: glint media attach|list"""

import mimetypes
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from glint_chat.models.chat import MediaKind

console = Console()


def _get_client():
    from glint_chat.cli.main import _get_client
    return _get_client()


def _run(coro):
    from glint_chat.cli.main import _run
    return _run(coro)


@click.group()
def media():
    """Photos and voice notes attached to chats."""


@media.command("attach")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-c", "--chat", "chat_id", default=None, help="Chat id (default: new chat)")
@click.option("--kind", type=click.Choice([k.value for k in MediaKind]), default=None,
              help="photo or voice (guessed from the file type if omitted)")
def media_attach(path: Path, chat_id, kind):
    """Attach a photo or voice recording to a chat."""
    mime_type = mimetypes.guess_type(path.name)[0]
    if kind is None:
        kind = MediaKind.VOICE.value if (mime_type or "").startswith("audio/") else MediaKind.PHOTO.value

    async def _attach():
        client = _get_client()
        try:
            if chat_id:
                client.load_chat(chat_id)
            else:
                client.create_chat()
            asset = await client.session.attach_bytes(kind, path.read_bytes(), path.name, mime_type)
            console.print(f"[green]✅ {kind.capitalize()} saved: {asset.file_name} (ID: {asset.id}, chat {asset.chat_id})[/green]")
        finally:
            await client.close()

    _run(_attach())


@media.command("list")
@click.argument("chat_id")
def media_list(chat_id):
    """List media for a chat."""
    assets = _get_client().list_media(chat_id)
    table = Table(title=f"Media for {chat_id} ({len(assets)} files)")
    table.add_column("ID", style="bold")
    table.add_column("Kind")
    table.add_column("File")
    table.add_column("Saved")
    for asset in assets:
        table.add_row(asset.id, asset.kind.value, asset.file_name, asset.created_at.strftime("%H:%M:%S"))
    console.print(table)
