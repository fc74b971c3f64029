"""CLI: glint keys status|set|clear, glint lang"""

from typing import Optional

import click
from rich.console import Console

from glint_chat.models.chat import Category, Language

console = Console()

CATEGORY_LABELS = {
    Category.TEXT: "🔤 Text API:",
    Category.IMAGE: "🖼️ Image API:",
    Category.VOICE: "🎤 Voice API:",
    Category.CODING: "💻 Coding API:",
}

CATEGORY_CHOICE = click.Choice([c.value for c in Category])


def _get_client():
    from glint_chat.cli.main import _get_client
    return _get_client()


@click.group()
def keys():
    """Provider API keys."""


@keys.command("status")
def keys_status():
    """Show which categories are configured."""
    client = _get_client()
    for category in Category:
        configured = client.get_credential_status(category)
        status = "[green]🟢 Configured[/green]" if configured else "[red]🔴 Not Configured[/red]"
        console.print(f"{CATEGORY_LABELS[category]} {status}")


@keys.command("set")
@click.argument("category", type=CATEGORY_CHOICE)
@click.option("--key", "value", prompt=True, hide_input=True, help="API key (prompted if omitted)")
def keys_set(category, value):
    """Save the API key for a category. An empty key clears it."""
    if _get_client().set_credential(category, value):
        console.print(f"[green]✅ {category.capitalize()} API key saved successfully![/green]")
    else:
        console.print(f"[yellow]⚠️ {category.capitalize()} API key cleared.[/yellow]")


@keys.command("clear")
@click.argument("category", type=CATEGORY_CHOICE)
def keys_clear(category):
    """Remove the API key for a category."""
    _get_client().set_credential(category, None)
    console.print(f"[yellow]⚠️ {category.capitalize()} API key cleared.[/yellow]")


@click.command("lang")
@click.argument("language", required=False, type=click.Choice([l.value for l in Language]))
def lang_cmd(language: Optional[str]):
    """Show or set the reply language."""
    client = _get_client()
    if language:
        console.print(f"[green]✅ Language saved: {client.set_language(language).value}[/green]")
    else:
        console.print(client.language.value)
