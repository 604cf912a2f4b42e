"""Remote reads and writes of a user's Webex Calling forwarding and voicemail settings.

Operational prerequisites:
- Admin token with ``spark-admin:people_read`` and ``spark-admin:people_write``.
- Target users with a Webex Calling license.

Nothing here logs or retries: each call returns an outcome and the caller
decides what to record.
"""

from __future__ import annotations

from typing import Any

from wxc_sdk.person_settings.forwarding import CallForwardingAlways, CallForwardingNoAnswer

from .models import ReadOutcome, UserSettings, WriteOutcome
from .records import SECONDS_PER_RING
from .sdk_client import AdminSession

UNANSWERED_TIMEOUT_SECONDS = 10
UNANSWERED_NUMBER_OF_RINGS = UNANSWERED_TIMEOUT_SECONDS // SECONDS_PER_RING


def describe_error(error: BaseException) -> str:
    return f'{error.__class__.__name__}: {error}'


class UserSettingsAccessor:
    def __init__(self, session: AdminSession, *, include_voicemail: bool = True):
        self.session = session
        self.include_voicemail = include_voicemail
        self._person_ids: dict[str, str] = {}

    @property
    def api(self) -> Any:
        return self.session.api

    def resolve_person_id(self, email: str) -> str:
        if not email:
            raise LookupError('empty email')
        cached = self._person_ids.get(email.lower())
        if cached:
            return cached
        people = self.api.people.list(email=email, org_id=self.session.org_id)
        person = next(iter(people), None)
        if person is None:
            raise LookupError(f'no Webex person found for {email}')
        self._person_ids[email.lower()] = person.person_id
        return person.person_id

    def _read_forwarding(self, person_id: str) -> Any:
        return self.api.person_settings.forwarding.read(entity_id=person_id, org_id=self.session.org_id)

    def read_settings(self, email: str) -> ReadOutcome:
        """Forwarding is required; voicemail failures only set ``voicemail_error``."""
        try:
            person_id = self.resolve_person_id(email)
            forwarding = self._read_forwarding(person_id)
        except Exception as error:  # noqa: BLE001 - per-user failure, reported to the caller
            return ReadOutcome(email=email, error=describe_error(error))

        voicemail = None
        voicemail_error = None
        if self.include_voicemail:
            try:
                voicemail = self.api.person_settings.voicemail.read(entity_id=person_id, org_id=self.session.org_id)
            except Exception as error:  # noqa: BLE001 - voicemail is optional
                voicemail_error = describe_error(error)
            else:
                if voicemail is None:
                    voicemail_error = 'no voicemail configuration'

        return ReadOutcome(
            email=email,
            settings=UserSettings(
                email=email,
                person_id=person_id,
                forwarding=forwarding,
                voicemail=voicemail,
                voicemail_error=voicemail_error,
            ),
        )

    def _configure(self, email: str, update_block: str, block: Any) -> WriteOutcome:
        try:
            person_id = self.resolve_person_id(email)
            # Start from the live settings so busy and business continuity stay untouched.
            forwarding = self._read_forwarding(person_id)
            setattr(forwarding.call_forwarding, update_block, block)
            self.api.person_settings.forwarding.configure(
                entity_id=person_id, forwarding=forwarding, org_id=self.session.org_id
            )
        except Exception as error:  # noqa: BLE001 - per-user failure, reported to the caller
            return WriteOutcome(email=email, error=describe_error(error))
        return WriteOutcome(email=email)

    def apply_immediate_forwarding(self, email: str, target_number: str) -> WriteOutcome:
        block = CallForwardingAlways(
            enabled=True,
            destination=target_number,
            destination_voicemail_enabled=False,
            ring_reminder_enabled=False,
        )
        return self._configure(email, 'always', block)

    def apply_unanswered_forwarding(self, email: str, target_number: str) -> WriteOutcome:
        block = CallForwardingNoAnswer(
            enabled=True,
            destination=target_number,
            destination_voicemail_enabled=False,
            number_of_rings=UNANSWERED_NUMBER_OF_RINGS,
        )
        return self._configure(email, 'no_answer', block)
