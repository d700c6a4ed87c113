"""OAuth credentials and Drive service construction for the Drive repository."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

from projsync.errors import AuthError

# Only files created by this app are visible to it.
DEFAULT_SCOPES: tuple[str, ...] = ("https://www.googleapis.com/auth/drive.file",)


@dataclass(slots=True, frozen=True)
class DriveAuth:
    """
    OAuth installed-app settings.

    ``client_secrets_file`` is the OAuth client JSON; ``token_file`` holds the
    authorized-user token and is created/refreshed as needed.
    """

    client_secrets_file: str
    token_file: str
    scopes: tuple[str, ...] = DEFAULT_SCOPES

    def __post_init__(self) -> None:
        for key in ("client_secrets_file", "token_file"):
            value = getattr(self, key)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"DriveAuth.{key} must be a non-empty string")
        if not self.scopes or not all(isinstance(s, str) and s.strip() for s in self.scopes):
            raise ValueError("DriveAuth.scopes must be a non-empty sequence of strings")


def load_credentials(auth: DriveAuth, *, interactive: bool = True) -> Any:
    """
    Return valid ``google.oauth2.credentials.Credentials``.

    Loads ``token_file``, refreshes it when expired, and falls back to the
    local-server consent flow when ``interactive`` is True.

    Raises:
        AuthError: on load/refresh/flow failures.
    """
    try:
        from google.auth.transport.requests import Request
        from google.oauth2.credentials import Credentials
        from google_auth_oauthlib.flow import InstalledAppFlow
    except ImportError as exc:  # pragma: no cover
        raise AuthError(
            "Google auth libraries are not available",
            details={"hint": "Install google-auth and google-auth-oauthlib"},
            cause=exc,
        ) from exc

    scopes = list(auth.scopes)
    creds = None
    if os.path.exists(auth.token_file):
        try:
            creds = Credentials.from_authorized_user_file(auth.token_file, scopes=scopes)
        except (OSError, ValueError) as exc:
            raise AuthError(
                "Failed to load token_file",
                details={"token_file": auth.token_file},
                cause=exc,
            ) from exc

        if not creds.valid and creds.refresh_token:
            try:
                creds.refresh(Request())
            except Exception as exc:
                raise AuthError(
                    "Failed to refresh OAuth credentials",
                    details={"token_file": auth.token_file},
                    cause=exc,
                ) from exc
            _save_token(auth, creds)

        if creds.valid:
            return creds

    if not interactive:
        raise AuthError("No valid token and interactive consent is disabled",
                        details={"token_file": auth.token_file})

    try:
        flow = InstalledAppFlow.from_client_secrets_file(auth.client_secrets_file, scopes=scopes)
        creds = flow.run_local_server(port=0)
    except Exception as exc:
        raise AuthError(
            "OAuth authorization flow failed",
            details={"client_secrets_file": auth.client_secrets_file},
            cause=exc,
        ) from exc
    _save_token(auth, creds)
    return creds


def build_drive_service(auth: DriveAuth, *, interactive: bool = True) -> Any:
    """Build a Drive v3 ``Resource`` with credentials from ``auth``."""
    try:
        from googleapiclient.discovery import build
    except ImportError as exc:  # pragma: no cover
        raise AuthError(
            "google-api-python-client is not available",
            details={"hint": "Install google-api-python-client"},
            cause=exc,
        ) from exc

    creds = load_credentials(auth, interactive=interactive)
    try:
        return build("drive", "v3", credentials=creds, cache_discovery=False)
    except Exception as exc:
        raise AuthError("Failed to build Drive service", cause=exc) from exc


def _save_token(auth: DriveAuth, creds: Any) -> None:
    token_dir = os.path.dirname(auth.token_file)
    try:
        if token_dir:
            os.makedirs(token_dir, exist_ok=True)
        with open(auth.token_file, "w", encoding="utf-8") as f:
            f.write(creds.to_json())
    except OSError as exc:
        raise AuthError(
            "Failed to save OAuth token file",
            details={"token_file": auth.token_file},
            cause=exc,
        ) from exc
