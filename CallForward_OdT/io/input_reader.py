from __future__ import annotations

import csv
from pathlib import Path

from ..models import UserInput

EMAIL_HEADER = 'Email'
FORWARDING_NUMBER_HEADER = 'ForwardingNumber'


class InputFileError(RuntimeError):
    def __init__(self, path: Path, message: str):
        super().__init__(message)
        self.path = path


class InputFileNotFoundError(InputFileError):
    def __init__(self, path: Path):
        super().__init__(path, f'Input file not found: {path}')


def _header_map(fieldnames: list[str]) -> dict[str, str]:
    # Headers are matched case-insensitively; the file keeps its own spelling.
    return {name.strip().lower(): name for name in fieldnames if name}


def read_user_inputs(path: Path) -> list[UserInput]:
    """Read ``Email,ForwardingNumber`` rows in file order, duplicates included."""
    if not path.is_file():
        raise InputFileNotFoundError(path)
    try:
        return _parse_user_inputs(path)
    except (UnicodeDecodeError, OSError, csv.Error) as error:
        raise InputFileError(path, f'Cannot read input file {path}: {error}') from error


def _parse_user_inputs(path: Path) -> list[UserInput]:
    with path.open('r', encoding='utf-8-sig', newline='') as handle:
        reader = csv.DictReader(handle)
        if reader.fieldnames is None:
            return []

        headers = _header_map(list(reader.fieldnames))
        email_key = headers.get(EMAIL_HEADER.lower())
        if email_key is None:
            raise InputFileError(path, f'Input file {path} has no {EMAIL_HEADER} column')
        number_key = headers.get(FORWARDING_NUMBER_HEADER.lower())

        users: list[UserInput] = []
        # Row 1 is the header.
        for row_number, row in enumerate(reader, start=2):
            users.append(
                UserInput(
                    row_number=row_number,
                    email=(row.get(email_key) or '').strip(),
                    forwarding_number=(row.get(number_key) or '') if number_key else '',
                )
            )
    return users
