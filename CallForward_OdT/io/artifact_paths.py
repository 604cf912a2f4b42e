from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class RunPaths:
    input_file: Path
    backup: Path
    current_settings: Path
    log: Path


def backup_path(run_dir: Path, timestamp: str) -> Path:
    return run_dir / f'backup_{timestamp}.csv'


def current_settings_path(run_dir: Path, timestamp: str) -> Path:
    return run_dir / f'current_settings_{timestamp}.csv'


def log_path(run_dir: Path, timestamp: str) -> Path:
    return run_dir / f'scriptlog_{timestamp}.log'


def run_paths(*, run_dir: Path, input_file: str, timestamp: str) -> RunPaths:
    return RunPaths(
        input_file=run_dir / input_file,
        backup=backup_path(run_dir, timestamp),
        current_settings=current_settings_path(run_dir, timestamp),
        log=log_path(run_dir, timestamp),
    )
