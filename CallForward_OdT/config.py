from __future__ import annotations

import datetime as dt
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Callable

DEFAULT_INPUT_FILE = 'users.csv'
DEFAULT_THROTTLE_SECONDS = 1.5
RUN_TIMESTAMP_FORMAT = '%Y%m%d_%H%M%S'


def run_timestamp(clock: Callable[[], dt.datetime] = dt.datetime.now) -> str:
    return clock().strftime(RUN_TIMESTAMP_FORMAT)


@dataclass(frozen=True)
class Settings:
    run_dir: Path = field(default_factory=Path.cwd)
    input_file: str = DEFAULT_INPUT_FILE
    org_id: str | None = None
    throttle_seconds: float = DEFAULT_THROTTLE_SECONDS
    include_voicemail: bool = True
    timestamp: str = field(default_factory=run_timestamp)

    @property
    def input_path(self) -> Path:
        return self.run_dir / self.input_file

    def with_run_dir(self, run_dir: Path) -> 'Settings':
        return replace(self, run_dir=run_dir.resolve())


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {'1', 'true', 'yes', 'on'}


def _env_float(value: str | None, default: float) -> float:
    if value is None or not value.strip():
        return default
    parsed = float(value)
    if parsed < 0:
        raise ValueError(f'CALLFWD_THROTTLE_SECONDS must be >= 0, got {value!r}')
    return parsed


def load_settings(clock: Callable[[], dt.datetime] = dt.datetime.now) -> Settings:
    """Build run settings from the environment; the run timestamp is fixed here."""
    run_dir = Path(os.getenv('CALLFWD_RUN_DIR') or Path.cwd()).resolve()
    return Settings(
        run_dir=run_dir,
        input_file=os.getenv('CALLFWD_INPUT_FILE') or DEFAULT_INPUT_FILE,
        org_id=os.getenv('CALLFWD_ORG_ID') or None,
        throttle_seconds=_env_float(os.getenv('CALLFWD_THROTTLE_SECONDS'), DEFAULT_THROTTLE_SECONDS),
        include_voicemail=_env_bool(os.getenv('CALLFWD_INCLUDE_VOICEMAIL'), True),
        timestamp=run_timestamp(clock),
    )
