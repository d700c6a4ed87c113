"""Environment-driven configuration for projsync clients."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from projsync.auth import DriveAuth
from projsync.sync.local_cache import DEFAULT_NAMESPACE
from projsync.sync.scheduler import DEFAULT_AUTOSAVE_PERIOD_SEC

ENV_PREFIX = "PROJSYNC_"


def default_cache_path() -> Path:
    return Path.home() / ".projsync" / "projects.json"


@dataclass(slots=True, frozen=True)
class SyncConfig:
    """
    Client settings.

    Drive fields are optional; when ``drive_folder_id`` is set, both
    ``client_secrets_file`` and ``token_file`` are required.
    """

    cache_path: Path
    autosave_period_sec: float = DEFAULT_AUTOSAVE_PERIOD_SEC
    namespace: str = DEFAULT_NAMESPACE
    drive_folder_id: Optional[str] = None
    client_secrets_file: Optional[str] = None
    token_file: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.cache_path, Path):
            raise TypeError("SyncConfig.cache_path must be a Path")
        if not isinstance(self.autosave_period_sec, (int, float)) or self.autosave_period_sec <= 0:
            raise ValueError("SyncConfig.autosave_period_sec must be positive")
        if not self.namespace.strip():
            raise ValueError("SyncConfig.namespace must be a non-empty string")
        if self.drive_folder_id and not (self.client_secrets_file and self.token_file):
            raise ValueError(
                "SyncConfig: drive_folder_id requires client_secrets_file and token_file"
            )

    @property
    def drive_auth(self) -> Optional[DriveAuth]:
        if not self.drive_folder_id:
            return None
        return DriveAuth(
            client_secrets_file=self.client_secrets_file,  # type: ignore[arg-type]
            token_file=self.token_file,  # type: ignore[arg-type]
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> SyncConfig:
        """
        Read ``PROJSYNC_*`` variables.

        PROJSYNC_CACHE_PATH, PROJSYNC_AUTOSAVE_PERIOD, PROJSYNC_NAMESPACE,
        PROJSYNC_DRIVE_FOLDER_ID, PROJSYNC_CLIENT_SECRETS, PROJSYNC_TOKEN_FILE.
        """
        env = os.environ if environ is None else environ

        def get(name: str) -> Optional[str]:
            value = env.get(ENV_PREFIX + name, "").strip()
            return value or None

        cache_path = get("CACHE_PATH")
        period = get("AUTOSAVE_PERIOD")
        try:
            period_sec = float(period) if period is not None else DEFAULT_AUTOSAVE_PERIOD_SEC
        except ValueError as exc:
            raise ValueError(f"{ENV_PREFIX}AUTOSAVE_PERIOD must be a number") from exc

        return cls(
            cache_path=Path(cache_path).expanduser() if cache_path else default_cache_path(),
            autosave_period_sec=period_sec,
            namespace=get("NAMESPACE") or DEFAULT_NAMESPACE,
            drive_folder_id=get("DRIVE_FOLDER_ID"),
            client_secrets_file=get("CLIENT_SECRETS"),
            token_file=get("TOKEN_FILE"),
        )
