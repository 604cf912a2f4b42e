from __future__ import annotations

import datetime as dt
from pathlib import Path

import pytest

from CallForward_OdT.config import DEFAULT_INPUT_FILE, Settings, load_settings


def _clock() -> dt.datetime:
    return dt.datetime(2026, 3, 4, 5, 6, 7)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        'CALLFWD_RUN_DIR',
        'CALLFWD_INPUT_FILE',
        'CALLFWD_ORG_ID',
        'CALLFWD_THROTTLE_SECONDS',
        'CALLFWD_INCLUDE_VOICEMAIL',
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    settings = load_settings(clock=_clock)

    assert settings.run_dir == tmp_path.resolve()
    assert settings.input_file == DEFAULT_INPUT_FILE
    assert settings.input_path == tmp_path.resolve() / 'users.csv'
    assert settings.org_id is None
    assert settings.throttle_seconds == 1.5
    assert settings.include_voicemail is True
    assert settings.timestamp == '20260304_050607'


def test_env_overrides(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv('CALLFWD_RUN_DIR', str(tmp_path))
    monkeypatch.setenv('CALLFWD_INPUT_FILE', 'batch.csv')
    monkeypatch.setenv('CALLFWD_ORG_ID', 'org-1')
    monkeypatch.setenv('CALLFWD_THROTTLE_SECONDS', '0')
    monkeypatch.setenv('CALLFWD_INCLUDE_VOICEMAIL', 'no')

    settings = load_settings(clock=_clock)

    assert settings.input_path == tmp_path.resolve() / 'batch.csv'
    assert settings.org_id == 'org-1'
    assert settings.throttle_seconds == 0
    assert settings.include_voicemail is False


def test_negative_throttle_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv('CALLFWD_THROTTLE_SECONDS', '-1')

    with pytest.raises(ValueError):
        load_settings(clock=_clock)


def test_with_run_dir_keeps_timestamp(tmp_path: Path) -> None:
    settings = Settings(timestamp='20260101_000000')

    moved = settings.with_run_dir(tmp_path)

    assert moved.run_dir == tmp_path.resolve()
    assert moved.timestamp == '20260101_000000'
