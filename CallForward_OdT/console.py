from __future__ import annotations

from rich.console import Console
from rich.table import Table

MENU_OPTIONS: tuple[tuple[str, str], ...] = (
    ('1', 'Configure immediate call forwarding'),
    ('2', 'Configure unanswered call forwarding (10 seconds)'),
    ('3', 'Backup current settings only'),
    ('4', 'Exit'),
)


def build_console() -> Console:
    return Console(highlight=False)


def create_menu_table(title: str, options: tuple[tuple[str, str], ...] = MENU_OPTIONS) -> Table:
    table = Table(title=title, box=None, title_style='bold cyan')
    table.add_column('Option', style='cyan', justify='right')
    table.add_column('Description')
    for key, description in options:
        table.add_row(key, description)
    return table


def print_info(console: Console, message: str) -> None:
    console.print(message)


def print_success(console: Console, message: str) -> None:
    console.print(f'[bold green]{message}[/]')


def print_warning(console: Console, message: str) -> None:
    console.print(f'[bold yellow]{message}[/]')


def print_error(console: Console, message: str) -> None:
    console.print(f'[bold red]{message}[/]')
