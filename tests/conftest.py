from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest
from wxc_sdk.common import (
    Greeting,
    StorageType,
    VoicemailEnabled,
    VoicemailMessageStorage,
    VoicemailTransferToNumber,
)
from wxc_sdk.person_settings.forwarding import PersonForwardingSetting
from wxc_sdk.person_settings.voicemail import UnansweredCalls, VoicemailEnabledWithGreeting, VoicemailSettings

from CallForward_OdT.accessor import UserSettingsAccessor
from CallForward_OdT.io.artifact_paths import run_paths
from CallForward_OdT.operations import BulkOperations
from CallForward_OdT.run_log import close_run_logger, setup_run_logger
from CallForward_OdT.sdk_client import AdminSession

TIMESTAMP = '20260101_120000'


def sample_voicemail() -> VoicemailSettings:
    return VoicemailSettings(
        enabled=True,
        send_all_calls=VoicemailEnabled(enabled=False),
        send_busy_calls=VoicemailEnabledWithGreeting(enabled=True, greeting=Greeting.default),
        send_unanswered_calls=UnansweredCalls(enabled=True, greeting=Greeting.custom, number_of_rings=3),
        transfer_to_number=VoicemailTransferToNumber(enabled=True, destination='+15550009999'),
        message_storage=VoicemailMessageStorage(mwi_enabled=True, storage_type=StorageType.internal),
    )


class FakePeople:
    def __init__(self, directory: dict[str, str]):
        self.directory = directory
        self.list_calls: list[str] = []

    def list(self, email: str = None, org_id: str = None, **params):
        self.list_calls.append(email)
        if email in self.directory:
            return iter([SimpleNamespace(person_id=self.directory[email])])
        return iter([])

    def me(self, calling_data: bool = False):
        return SimpleNamespace(emails=['admin@example.com'])


class FakeForwarding:
    def __init__(self):
        self.store: dict[str, PersonForwardingSetting] = {}
        self.read_failures: set[str] = set()
        self.write_failures: set[str] = set()
        # entity id -> 1-based read number that fails
        self.fail_on_read: dict[str, int] = {}
        self.read_counts: dict[str, int] = {}
        self.configured: list[tuple[str, PersonForwardingSetting, str | None]] = []

    def read(self, entity_id: str, org_id: str = None) -> PersonForwardingSetting:
        self.read_counts[entity_id] = self.read_counts.get(entity_id, 0) + 1
        if entity_id in self.read_failures:
            raise RuntimeError(f'forwarding read failed for {entity_id}')
        if self.fail_on_read.get(entity_id) == self.read_counts[entity_id]:
            raise RuntimeError(f'forwarding read {self.read_counts[entity_id]} failed for {entity_id}')
        current = self.store.setdefault(entity_id, PersonForwardingSetting.default())
        return current.model_copy(deep=True)

    def configure(self, entity_id: str, forwarding: PersonForwardingSetting, org_id: str = None):
        if entity_id in self.write_failures:
            raise RuntimeError(f'forwarding write failed for {entity_id}')
        self.configured.append((entity_id, forwarding, org_id))
        self.store[entity_id] = forwarding.model_copy(deep=True)


class FakeVoicemail:
    def __init__(self):
        self.failures: set[str] = set()
        self.reads: list[str] = []

    def read(self, entity_id: str, org_id: str = None) -> VoicemailSettings:
        self.reads.append(entity_id)
        if entity_id in self.failures:
            raise RuntimeError('voicemail not configured')
        return sample_voicemail()


def make_fake_api(directory: dict[str, str] | None = None) -> SimpleNamespace:
    directory = directory if directory is not None else {
        'a@x.com': 'person-a',
        'b@x.com': 'person-b',
    }
    return SimpleNamespace(
        people=FakePeople(directory),
        person_settings=SimpleNamespace(forwarding=FakeForwarding(), voicemail=FakeVoicemail()),
    )


@pytest.fixture
def fake_api() -> SimpleNamespace:
    return make_fake_api()


@pytest.fixture
def accessor(fake_api) -> UserSettingsAccessor:
    return UserSettingsAccessor(AdminSession(api=fake_api), include_voicemail=True)


@pytest.fixture
def paths(tmp_path: Path):
    return run_paths(run_dir=tmp_path, input_file='users.csv', timestamp=TIMESTAMP)


@pytest.fixture
def run_logger(paths):
    logger = setup_run_logger(paths.log, name='CallForward_OdT.tests')
    yield logger
    close_run_logger(logger)


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def operations(accessor, paths, run_logger, sleeps) -> BulkOperations:
    return BulkOperations(
        accessor=accessor,
        paths=paths,
        logger=run_logger,
        throttle_seconds=1.5,
        sleep=sleeps.append,
    )


def write_input(path: Path, rows: list[tuple[str, str]], header: str = 'Email,ForwardingNumber') -> Path:
    lines = [header, *(f'{email},{number}' for email, number in rows)]
    path.write_text('\n'.join(lines) + '\n', encoding='utf-8')
    return path


def log_lines(path: Path) -> list[str]:
    if not path.exists():
        return []
    return path.read_text(encoding='utf-8').splitlines()
