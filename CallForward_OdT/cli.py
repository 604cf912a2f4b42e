from __future__ import annotations

import argparse
import sys
from pathlib import Path

from wxc_sdk.rest import RestError

if __package__ in (None, ''):
    sys.path.insert(0, str(Path(__file__).resolve().parents[1]))
    from CallForward_OdT.accessor import UserSettingsAccessor
    from CallForward_OdT.config import load_settings
    from CallForward_OdT.io.artifact_paths import run_paths
    from CallForward_OdT.menu import MenuController
    from CallForward_OdT.operations import BulkOperations
    from CallForward_OdT.run_log import close_run_logger, setup_run_logger
    from CallForward_OdT.sdk_client import MissingTokenError, load_runtime_env, open_session
else:
    from .accessor import UserSettingsAccessor
    from .config import load_settings
    from .io.artifact_paths import run_paths
    from .menu import MenuController
    from .operations import BulkOperations
    from .run_log import close_run_logger, setup_run_logger
    from .sdk_client import MissingTokenError, load_runtime_env, open_session


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Back up and bulk-configure Webex Calling call forwarding')
    parser.add_argument('--token', default=None, help='Explicit Webex access token (overrides .env and WEBEX_ACCESS_TOKEN)')
    parser.add_argument('--run-dir', default=None, help='Directory holding the input file and receiving outputs')
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    load_runtime_env()
    settings = load_settings()
    if args.run_dir:
        settings = settings.with_run_dir(Path(args.run_dir))

    paths = run_paths(run_dir=settings.run_dir, input_file=settings.input_file, timestamp=settings.timestamp)
    logger = setup_run_logger(paths.log)
    logger.info(f'Script started in {settings.run_dir}')
    try:
        try:
            session = open_session(token=args.token, org_id=settings.org_id)
        except (MissingTokenError, RestError) as exc:
            logger.error(f'Could not connect to Webex: {exc}')
            print(f'Could not connect to Webex: {exc}')
            return 2
        logger.info(f'Connected to Webex as {session.admin_email or "unknown admin"}')

        accessor = UserSettingsAccessor(session, include_voicemail=settings.include_voicemail)
        operations = BulkOperations(
            accessor=accessor,
            paths=paths,
            logger=logger,
            throttle_seconds=settings.throttle_seconds,
        )
        return MenuController(operations, logger).run()
    finally:
        close_run_logger(logger)


if __name__ == '__main__':
    raise SystemExit(main())
