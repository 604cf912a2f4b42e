from __future__ import annotations

from typing import Any

from .models import ForwardingSnapshot, SettingsRecord, VoicemailSnapshot

NOT_AVAILABLE = 'N/A'
SECONDS_PER_RING = 5

TARGET_TYPE_VOICEMAIL = 'Voicemail'
TARGET_TYPE_SINGLE = 'SingleTarget'

FORWARDING_COLUMNS: tuple[tuple[str, str], ...] = (
    ('ImmediateForwardEnabled', 'immediate_enabled'),
    ('ImmediateForwardTargetType', 'immediate_target_type'),
    ('ImmediateForwardTarget', 'immediate_target'),
    ('UnansweredForwardEnabled', 'unanswered_enabled'),
    ('UnansweredForwardTargetType', 'unanswered_target_type'),
    ('UnansweredForwardTarget', 'unanswered_target'),
    ('UnansweredDelay', 'unanswered_delay_seconds'),
)

VOICEMAIL_COLUMNS: tuple[tuple[str, str], ...] = (
    ('VoicemailEnabled', 'enabled'),
    ('VoicemailSendAllCalls', 'send_all_calls'),
    ('VoicemailSendBusyCalls', 'send_busy_calls'),
    ('VoicemailBusyGreeting', 'busy_greeting'),
    ('VoicemailSendUnansweredCalls', 'send_unanswered_calls'),
    ('VoicemailUnansweredGreeting', 'unanswered_greeting'),
    ('VoicemailUnansweredRings', 'unanswered_rings'),
    ('VoicemailNotificationsEnabled', 'notifications_enabled'),
    ('VoicemailNotificationDestination', 'notification_destination'),
    ('VoicemailTransferEnabled', 'transfer_enabled'),
    ('VoicemailTransferTarget', 'transfer_target'),
    ('VoicemailEmailCopyEnabled', 'email_copy_enabled'),
    ('VoicemailEmailCopyAddress', 'email_copy_address'),
    ('VoicemailStorageType', 'storage_type'),
    ('VoicemailMwiEnabled', 'mwi_enabled'),
    ('VoicemailFaxEnabled', 'fax_enabled'),
    ('VoicemailMessageForwardingEnabled', 'message_forwarding_enabled'),
)

EMAIL_COLUMN = 'Email'
FORWARDING_NUMBER_COLUMN = 'ForwardingNumber'


def record_columns(*, include_voicemail: bool, with_forwarding_number: bool = False) -> list[str]:
    columns = [EMAIL_COLUMN, *(name for name, _ in FORWARDING_COLUMNS)]
    if include_voicemail:
        columns.extend(name for name, _ in VOICEMAIL_COLUMNS)
    if with_forwarding_number:
        columns.append(FORWARDING_NUMBER_COLUMN)
    return columns


def _attr(obj: Any, dotted_path: str) -> Any:
    current = obj
    for chunk in dotted_path.split('.'):
        if current is None:
            return None
        current = getattr(current, chunk, None)
    return current


def _enum_value(value: Any) -> str | None:
    if value is None:
        return None
    return getattr(value, 'value', value)


def _target_type(block: Any) -> str | None:
    if block is None:
        return None
    if getattr(block, 'destination_voicemail_enabled', False):
        return TARGET_TYPE_VOICEMAIL
    if getattr(block, 'destination', None):
        return TARGET_TYPE_SINGLE
    return None


def rings_to_seconds(rings: int | None) -> int | None:
    return None if rings is None else rings * SECONDS_PER_RING


def format_delay(seconds: int | None) -> str:
    if seconds is None:
        return ''
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f'{hours:02d}:{minutes:02d}:{secs:02d}'


def forwarding_snapshot(forwarding: Any) -> ForwardingSnapshot:
    always = _attr(forwarding, 'call_forwarding.always')
    no_answer = _attr(forwarding, 'call_forwarding.no_answer')
    return ForwardingSnapshot(
        immediate_enabled=_attr(always, 'enabled'),
        immediate_target_type=_target_type(always),
        immediate_target=_attr(always, 'destination') or None,
        unanswered_enabled=_attr(no_answer, 'enabled'),
        unanswered_target_type=_target_type(no_answer),
        unanswered_target=_attr(no_answer, 'destination') or None,
        unanswered_delay_seconds=rings_to_seconds(_attr(no_answer, 'number_of_rings')),
    )


def voicemail_snapshot(voicemail: Any) -> VoicemailSnapshot:
    return VoicemailSnapshot(
        enabled=_attr(voicemail, 'enabled'),
        send_all_calls=_attr(voicemail, 'send_all_calls.enabled'),
        send_busy_calls=_attr(voicemail, 'send_busy_calls.enabled'),
        busy_greeting=_enum_value(_attr(voicemail, 'send_busy_calls.greeting')),
        send_unanswered_calls=_attr(voicemail, 'send_unanswered_calls.enabled'),
        unanswered_greeting=_enum_value(_attr(voicemail, 'send_unanswered_calls.greeting')),
        unanswered_rings=_attr(voicemail, 'send_unanswered_calls.number_of_rings'),
        notifications_enabled=_attr(voicemail, 'notifications.enabled'),
        notification_destination=_attr(voicemail, 'notifications.destination'),
        transfer_enabled=_attr(voicemail, 'transfer_to_number.enabled'),
        transfer_target=_attr(voicemail, 'transfer_to_number.destination'),
        email_copy_enabled=_attr(voicemail, 'email_copy_of_message.enabled'),
        email_copy_address=_attr(voicemail, 'email_copy_of_message.email_id'),
        storage_type=_enum_value(_attr(voicemail, 'message_storage.storage_type')),
        mwi_enabled=_attr(voicemail, 'message_storage.mwi_enabled'),
        fax_enabled=_attr(voicemail, 'fax_message.enabled'),
        message_forwarding_enabled=_attr(voicemail, 'voice_message_forwarding_enabled'),
    )


def build_record(email: str, forwarding: Any, voicemail: Any | None = None) -> SettingsRecord:
    return SettingsRecord(
        email=email,
        forwarding=forwarding_snapshot(forwarding),
        voicemail=None if voicemail is None else voicemail_snapshot(voicemail),
    )


def _cell(value: Any) -> str:
    if value is None:
        return ''
    return str(value)


def record_to_row(record: SettingsRecord, *, include_voicemail: bool) -> dict[str, str]:
    """Flatten a record; the N/A substitution only happens here."""
    row = {EMAIL_COLUMN: record.email}
    for column, attr in FORWARDING_COLUMNS:
        value = getattr(record.forwarding, attr)
        row[column] = format_delay(value) if attr == 'unanswered_delay_seconds' else _cell(value)

    if include_voicemail:
        for column, attr in VOICEMAIL_COLUMNS:
            if record.voicemail is None:
                row[column] = NOT_AVAILABLE
            else:
                row[column] = _cell(getattr(record.voicemail, attr))

    if record.forwarding_number is not None:
        row[FORWARDING_NUMBER_COLUMN] = record.forwarding_number
    return row
