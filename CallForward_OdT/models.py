from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any


class Operation(str, Enum):
    BACKUP = 'backup'
    IMMEDIATE = 'configure_immediate'
    UNANSWERED = 'configure_unanswered'


@dataclass(frozen=True)
class UserInput:
    row_number: int
    email: str
    forwarding_number: str


@dataclass(frozen=True)
class ForwardingSnapshot:
    immediate_enabled: bool | None = None
    immediate_target_type: str | None = None
    immediate_target: str | None = None
    unanswered_enabled: bool | None = None
    unanswered_target_type: str | None = None
    unanswered_target: str | None = None
    unanswered_delay_seconds: int | None = None


@dataclass(frozen=True)
class VoicemailSnapshot:
    enabled: bool | None = None
    send_all_calls: bool | None = None
    send_busy_calls: bool | None = None
    busy_greeting: str | None = None
    send_unanswered_calls: bool | None = None
    unanswered_greeting: str | None = None
    unanswered_rings: int | None = None
    notifications_enabled: bool | None = None
    notification_destination: str | None = None
    transfer_enabled: bool | None = None
    transfer_target: str | None = None
    email_copy_enabled: bool | None = None
    email_copy_address: str | None = None
    storage_type: str | None = None
    mwi_enabled: bool | None = None
    fax_enabled: bool | None = None
    message_forwarding_enabled: bool | None = None


@dataclass(frozen=True)
class SettingsRecord:
    """One output row. ``voicemail`` is None when it could not be read."""

    email: str
    forwarding: ForwardingSnapshot
    voicemail: VoicemailSnapshot | None = None
    forwarding_number: str | None = None


@dataclass(frozen=True)
class UserSettings:
    email: str
    person_id: str
    forwarding: Any
    voicemail: Any | None = None
    voicemail_error: str | None = None


@dataclass(frozen=True)
class ReadOutcome:
    email: str
    settings: UserSettings | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.settings is not None


@dataclass(frozen=True)
class WriteOutcome:
    email: str
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class OperationSummary:
    operation: Operation
    processed: int = 0
    failed: int = 0
    output_path: Path | None = None
    backup_path: Path | None = None
    error: str | None = None

    @property
    def aborted(self) -> bool:
        return self.error is not None
