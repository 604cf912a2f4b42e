from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

from rich.console import Console
from rich.markup import escape

from .console import build_console, create_menu_table, print_error, print_info, print_success, print_warning
from .models import OperationSummary
from .operations import BulkOperations

MENU_TITLE = 'Webex Calling - Bulk Call Forwarding'
PROMPT = 'Select an option (1-4): '
PAUSE_PROMPT = 'Press Enter to continue...'
EXIT_CHOICE = '4'


class MenuState(str, Enum):
    MENU = 'menu'
    RUNNING_BACKUP = 'running_backup'
    RUNNING_IMMEDIATE = 'running_immediate'
    RUNNING_UNANSWERED = 'running_unanswered'
    EXIT = 'exit'


MENU_TRANSITIONS: dict[str, MenuState] = {
    '1': MenuState.RUNNING_IMMEDIATE,
    '2': MenuState.RUNNING_UNANSWERED,
    '3': MenuState.RUNNING_BACKUP,
    '4': MenuState.EXIT,
}


def next_state(choice: str) -> MenuState:
    """Anything outside 1-4 keeps the menu on screen."""
    return MENU_TRANSITIONS.get(choice.strip(), MenuState.MENU)


class MenuController:
    def __init__(
        self,
        operations: BulkOperations,
        logger: logging.Logger,
        *,
        console: Console | None = None,
        read_input: Callable[[str], str] | None = None,
    ):
        self.operations = operations
        self.logger = logger
        self.console = console or build_console()
        self.read_input = read_input or self.console.input
        self.state = MenuState.MENU
        self.input_closed = False

    def run(self) -> int:
        while self.state is not MenuState.EXIT:
            self.console.print(create_menu_table(MENU_TITLE))
            self.state = next_state(self._ask(PROMPT))
            if self.state is MenuState.MENU:
                print_warning(self.console, 'Invalid choice, please select 1-4.')
                continue
            if self.state is MenuState.EXIT:
                break
            self._run_selected()
            self._ask(PAUSE_PROMPT)
            self.state = MenuState.EXIT if self.input_closed else MenuState.MENU

        self.logger.info('Script completed')
        print_info(self.console, 'Exiting.')
        return 0

    def _ask(self, prompt: str) -> str:
        try:
            return self.read_input(prompt)
        except EOFError:
            # Closed stdin behaves like choosing Exit.
            self.input_closed = True
            return EXIT_CHOICE

    def _run_selected(self) -> None:
        handlers = {
            MenuState.RUNNING_IMMEDIATE: self.operations.configure_immediate,
            MenuState.RUNNING_UNANSWERED: self.operations.configure_unanswered,
            MenuState.RUNNING_BACKUP: self.operations.backup,
        }
        summary = handlers[self.state]()
        self._report(summary)

    def _report(self, summary: OperationSummary) -> None:
        if summary.aborted:
            print_error(self.console, escape(summary.error))
            return
        if summary.backup_path is not None:
            print_info(self.console, f'Backup written to {escape(str(summary.backup_path))}')
        message = (
            f'{summary.operation.value}: {summary.processed} users processed, '
            f'{summary.failed} failed. Output: {escape(str(summary.output_path))}'
        )
        if summary.failed:
            print_warning(self.console, message)
        else:
            print_success(self.console, message)
