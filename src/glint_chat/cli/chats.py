"""CLI: glint chats list|new|rename|show"""

import click
from rich.console import Console
from rich.table import Table

from glint_chat.conversations import dump_history

console = Console()


def _get_client():
    from glint_chat.cli.main import _get_client
    return _get_client()


@click.group()
def chats():
    """Chat management."""


@chats.command("list")
@click.option("--limit", default=10, type=int)
def chats_list(limit):
    """List chats, newest first."""
    client = _get_client()
    items = client.list_chats()
    table = Table(title=f"Chats ({len(items)} total)")
    table.add_column("ID", style="bold")
    table.add_column("Name")
    table.add_column("Created")
    for chat in items[:limit]:
        table.add_row(chat.id, chat.display_name, chat.created_at.isoformat(timespec="seconds"))
    console.print(table)


@chats.command("new")
def chats_new():
    """Start a new chat."""
    chat = _get_client().create_chat()
    console.print(f"[green]Chat created: {chat.id} ({chat.display_name})[/green]")


@chats.command("rename")
@click.argument("chat_id")
@click.argument("name")
def chats_rename(chat_id, name):
    """Rename a chat."""
    chat = _get_client().conversations.rename_chat(chat_id, name)
    if chat is None:
        console.print(f"[red]No chat {chat_id}.[/red]")
        raise SystemExit(1)
    console.print(f"[green]Renamed {chat_id} to {chat.display_name}.[/green]")


@chats.command("show")
@click.argument("chat_id")
def chats_show(chat_id):
    """Dump a chat's history as JSON."""
    history = _get_client().conversations.load_chat(chat_id)
    click.echo(dump_history(history))
