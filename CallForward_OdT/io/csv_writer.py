from __future__ import annotations

import csv
from pathlib import Path
from typing import Mapping, Sequence


Row = Mapping[str, object]


def write_csv(path: Path, rows: Sequence[Row], fieldnames: Sequence[str]) -> Path:
    """Write header plus rows straight to ``path``; the parent directory must exist."""
    with path.open('w', newline='', encoding='utf-8') as output_file:
        writer = csv.DictWriter(output_file, fieldnames=list(fieldnames))
        writer.writeheader()
        for row in rows:
            writer.writerow(row)
    return path
