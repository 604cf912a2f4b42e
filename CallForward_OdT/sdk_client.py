from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv

if TYPE_CHECKING:
    from wxc_sdk import WebexSimpleApi


class MissingTokenError(RuntimeError):
    pass


@dataclass(frozen=True)
class AdminSession:
    """Authenticated Webex session shared by every component that calls the API."""

    api: Any
    org_id: str | None = None
    admin_email: str | None = None


def load_runtime_env() -> None:
    """Load .env files from CWD, its ancestors and the project root."""
    cwd = Path.cwd()
    package_root = Path(__file__).resolve().parents[1]

    env_candidates = [cwd / '.env', *[parent / '.env' for parent in cwd.parents], package_root / '.env']

    seen = set()
    for env_path in env_candidates:
        resolved = str(env_path.resolve())
        if resolved in seen:
            continue
        seen.add(resolved)
        if env_path.is_file():
            # .env wins over a stale WEBEX_ACCESS_TOKEN left in the shell.
            load_dotenv(dotenv_path=env_path, override=True)


def resolve_access_token(explicit_token: str | None = None) -> str:
    """Resolve access token from explicit CLI arg or .env/environment fallback."""
    selected_token = explicit_token
    if selected_token is None:
        load_runtime_env()
        selected_token = os.getenv('WEBEX_ACCESS_TOKEN')
    if not selected_token:
        raise MissingTokenError('WEBEX_ACCESS_TOKEN is required (or pass --token)')
    return selected_token


def create_api(token: str | None = None) -> 'WebexSimpleApi':
    from wxc_sdk import WebexSimpleApi

    selected_token = resolve_access_token(token)
    return WebexSimpleApi(tokens=selected_token)


def open_session(*, token: str | None = None, org_id: str | None = None, api: Any = None) -> AdminSession:
    """Create the API client and prove the token works with a people/me call.

    Any error here is fatal for the run and is not caught.
    """
    api = api if api is not None else create_api(token)
    me = api.people.me()
    emails = getattr(me, 'emails', None) or []
    return AdminSession(api=api, org_id=org_id, admin_email=emails[0] if emails else None)
