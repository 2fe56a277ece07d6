"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Character, Event

CHARACTER_DESCRIPTION_WIDTH = 60
EVENT_DESCRIPTION_WIDTH = 40


def truncate(text: str, width: int) -> str:
    """Corta `text` a `width` caracteres (sin puntos suspensivos)."""

    return text[:width]


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("Marvel Explorer", style="bold red")
    subtitle = Text("Personajes • Eventos • Primer encuentro", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="red", padding=(1, 4)))


def build_characters_table(characters: Iterable[Character]) -> Table:
    table = Table(title="Characters")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Description", style="dim")
    for character in characters:
        table.add_row(
            str(character.id),
            character.name,
            truncate(character.description, CHARACTER_DESCRIPTION_WIDTH),
        )
    return table


def build_events_table(events: Iterable[Event]) -> Table:
    table = Table(title="Events")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title", style="white")
    table.add_column("Date", style="magenta", no_wrap=True)
    table.add_column("Description", style="dim")
    for event in events:
        table.add_row(
            str(event.id),
            event.title,
            event.start or "",
            truncate(event.description, EVENT_DESCRIPTION_WIDTH),
        )
    return table


def build_event_panel(event: Event, *, name1: str, name2: str) -> Panel:
    """Panel con el primer evento compartido por dos personajes."""

    title = Text(f"{name1} × {name2}", style="bold yellow")
    body = Text()
    body.append(f"{event.title}\n", style="bold")
    body.append(f"Start: {event.start or 'unknown'}\n", style="magenta")
    body.append(f"ID: {event.id}\n", style="cyan")
    if event.description.strip():
        body.append("\n" + event.description.strip())
    return Panel(body, title=title, border_style="yellow")
