from __future__ import annotations

import logging
import time
from dataclasses import replace
from pathlib import Path
from typing import Callable

from .accessor import UNANSWERED_TIMEOUT_SECONDS, UserSettingsAccessor
from .io.artifact_paths import RunPaths
from .io.csv_writer import write_csv
from .io.input_reader import InputFileError, read_user_inputs
from .models import Operation, OperationSummary, ReadOutcome, SettingsRecord, UserInput, WriteOutcome
from .records import build_record, record_columns, record_to_row

ApplyCallable = Callable[[str, str], WriteOutcome]

OPERATION_LABELS = {
    Operation.BACKUP: 'backup',
    Operation.IMMEDIATE: 'immediate',
    Operation.UNANSWERED: 'unanswered',
}


class OutputWriteError(RuntimeError):
    def __init__(self, path: Path, error: OSError):
        super().__init__(f'Cannot write {path}: {error}')
        self.path = path


class BulkOperations:
    """The three menu operations: backup, immediate and unanswered forwarding."""

    def __init__(
        self,
        *,
        accessor: UserSettingsAccessor,
        paths: RunPaths,
        logger: logging.Logger,
        throttle_seconds: float = 1.5,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.accessor = accessor
        self.paths = paths
        self.logger = logger
        self.throttle_seconds = throttle_seconds
        self.sleep = sleep

    @property
    def include_voicemail(self) -> bool:
        return self.accessor.include_voicemail

    def backup(self) -> OperationSummary:
        self.logger.info('Starting backup of current settings')
        try:
            users = self._load_users()
            records, failed = self._backup_pass(users)
            self._write(self.paths.backup, records, with_forwarding_number=False)
        except (InputFileError, OutputWriteError) as error:
            self.logger.error(str(error))
            return OperationSummary(operation=Operation.BACKUP, error=str(error))

        summary = OperationSummary(
            operation=Operation.BACKUP,
            processed=len(records),
            failed=failed,
            output_path=self.paths.backup,
        )
        self._log_summary(summary)
        return summary

    def configure_immediate(self) -> OperationSummary:
        return self._configure(Operation.IMMEDIATE, self.accessor.apply_immediate_forwarding)

    def configure_unanswered(self) -> OperationSummary:
        return self._configure(Operation.UNANSWERED, self.accessor.apply_unanswered_forwarding)

    def _configure(self, operation: Operation, apply: ApplyCallable) -> OperationSummary:
        label = OPERATION_LABELS[operation]
        timeout = f' (timeout {UNANSWERED_TIMEOUT_SECONDS} seconds)' if operation is Operation.UNANSWERED else ''
        self.logger.info(f'Starting {label} forwarding configuration{timeout}')
        try:
            users = self._load_users()
            # A backup always precedes any change; user failures here do not stop the run.
            backup_records, _ = self._backup_pass(users)
            self._write(self.paths.backup, backup_records, with_forwarding_number=False)
        except (InputFileError, OutputWriteError) as error:
            self.logger.error(f'{error} - {label} forwarding configuration aborted')
            return OperationSummary(operation=operation, error=str(error))

        records: list[SettingsRecord] = []
        failed = 0
        for user in users:
            if not self._has_email(user):
                failed += 1
                continue
            record = self._configure_user(user, label=label, apply=apply)
            if record is None:
                failed += 1
            else:
                records.append(record)
            self._throttle()

        try:
            self._write(self.paths.current_settings, records, with_forwarding_number=True)
        except OutputWriteError as error:
            self.logger.error(str(error))
            return OperationSummary(
                operation=operation,
                processed=len(records),
                failed=failed,
                backup_path=self.paths.backup,
                error=str(error),
            )

        summary = OperationSummary(
            operation=operation,
            processed=len(records),
            failed=failed,
            output_path=self.paths.current_settings,
            backup_path=self.paths.backup,
        )
        self._log_summary(summary)
        return summary

    def _configure_user(self, user: UserInput, *, label: str, apply: ApplyCallable) -> SettingsRecord | None:
        outcome = apply(user.email, user.forwarding_number)
        if not outcome.ok:
            self.logger.error(f'Error configuring {label} forwarding for {user.email}: {outcome.error}')
            return None
        self.logger.info(f'Configured {label} forwarding for {user.email} to {user.forwarding_number}')

        # Left configured even if the read-back fails; nothing is rolled back.
        read = self.accessor.read_settings(user.email)
        if not read.ok:
            self.logger.error(f'Error reading settings after configuration for {user.email}: {read.error}')
            return None
        return replace(self._record_from(read), forwarding_number=user.forwarding_number)

    def _load_users(self) -> list[UserInput]:
        users = read_user_inputs(self.paths.input_file)
        self.logger.info(f'Loaded {len(users)} users from input file')
        return users

    def _backup_pass(self, users: list[UserInput]) -> tuple[list[SettingsRecord], int]:
        records: list[SettingsRecord] = []
        failed = 0
        for user in users:
            if not self._has_email(user):
                failed += 1
                continue
            outcome = self.accessor.read_settings(user.email)
            if outcome.ok:
                records.append(self._record_from(outcome))
                self.logger.info(f'Backed up settings for {user.email}')
            else:
                failed += 1
                self.logger.error(f'Error backing up settings for {user.email}: {outcome.error}')
            self._throttle()
        return records, failed

    def _record_from(self, outcome: ReadOutcome) -> SettingsRecord:
        settings = outcome.settings
        if settings.voicemail_error:
            self.logger.warning(
                f'Warning: voicemail settings unavailable for {settings.email}: {settings.voicemail_error}'
            )
        return build_record(settings.email, settings.forwarding, settings.voicemail)

    def _has_email(self, user: UserInput) -> bool:
        if user.email:
            return True
        self.logger.warning(f'Warning: skipping input row {user.row_number} with empty Email')
        return False

    def _write(self, path: Path, records: list[SettingsRecord], *, with_forwarding_number: bool) -> Path:
        rows = [record_to_row(record, include_voicemail=self.include_voicemail) for record in records]
        fieldnames = record_columns(
            include_voicemail=self.include_voicemail,
            with_forwarding_number=with_forwarding_number,
        )
        try:
            write_csv(path, rows, fieldnames)
        except OSError as error:
            raise OutputWriteError(path, error) from error
        self.logger.info(f'Wrote {len(rows)} records to {path}')
        return path

    def _throttle(self) -> None:
        if self.throttle_seconds > 0:
            self.sleep(self.throttle_seconds)

    def _log_summary(self, summary: OperationSummary) -> None:
        self.logger.info(
            f'{OPERATION_LABELS[summary.operation].capitalize()} finished: '
            f'processed={summary.processed} failed={summary.failed} output={summary.output_path}'
        )
