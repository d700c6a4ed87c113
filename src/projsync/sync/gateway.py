"""PersistenceGateway: local cache first, remote store opportunistically."""

from __future__ import annotations

import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Optional

from projsync.errors import NotFoundError, PersistenceError, ProjSyncError, SyncError
from projsync.models import FlushResult, Project

from .local_cache import LocalProjectCache
from .remote import RemoteStore

logger = logging.getLogger(__name__)


class PersistenceGateway:
    """
    Translates project snapshots to and from durable storage.

    The gateway never mutates tree structure: it writes snapshots out and
    hands back whole projects on load.
    """

    def __init__(
        self,
        cache: LocalProjectCache,
        remote: Optional[RemoteStore] = None,
        *,
        executor: Optional[Executor] = None,
    ) -> None:
        self._cache = cache
        self._remote = remote
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="projsync-sync"
        )

    @property
    def cache(self) -> LocalProjectCache:
        return self._cache

    @property
    def has_remote(self) -> bool:
        return self._remote is not None

    def flush(
        self,
        project: Project,
        revision: int,
        *,
        expected_version: Optional[int] = None,
    ) -> Future[FlushResult]:
        """
        Persist one snapshot.

        The local cache write happens before this returns; a failure there
        raises PersistenceError. The remote write runs on the executor and
        its outcome (never an exception for remote failures) resolves the
        returned future.
        """
        try:
            self._cache.write(project, pending_sync=self._remote is not None)
        except PersistenceError:
            logger.error("Flush of %s failed: local cache not writable", project.id)
            raise

        if self._remote is None:
            done: Future[FlushResult] = Future()
            done.set_result(FlushResult(status="saved", project_id=project.id, revision=revision))
            return done

        return self._executor.submit(self._push, project, revision, expected_version)

    def load(self, project_id: str) -> Project:
        """
        Load a project, preferring the remote copy when it is reachable.

        A cached snapshot still marked ``pending_sync`` wins over the remote
        so unsynced local edits are never dropped.
        """
        local = self._cache.read(project_id)
        if local is not None and self._cache.is_pending(project_id):
            logger.info("Using unsynced local copy of %s", project_id)
            return local

        if self._remote is None:
            if local is None:
                raise NotFoundError("Project not found", details={"project_id": project_id})
            return local

        try:
            remote = self._remote.fetch(project_id)
        except NotFoundError:
            if local is None:
                raise
            return local
        except SyncError as exc:
            if local is None:
                raise
            logger.warning("Remote unreachable, loading %s from local cache: %s", project_id, exc)
            return local

        self._cache.write(remote, pending_sync=False)
        return remote

    def has_unsynced(self, project_id: str) -> bool:
        return self._remote is not None and self._cache.is_pending(project_id)

    def load_all_summaries(self, *, include_content: bool = False) -> list[Project]:
        """Cached projects, newest first; file contents blanked by default."""
        projects = self._cache.list_projects()
        if include_content:
            return projects
        return [p.without_content() for p in projects]

    def delete(self, project_id: str) -> None:
        """Delete remotely first, then locally (a remote failure keeps both)."""
        if self._remote is not None:
            try:
                self._remote.delete(project_id)
            except NotFoundError:
                pass
        self._cache.delete(project_id)

    def close(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    # ----------------------------
    # Internals
    # ----------------------------
    def _push(self, project: Project, revision: int, expected_version: Optional[int]) -> FlushResult:
        try:
            stored = self._remote.push(project, expected_version)  # type: ignore[union-attr]
        except ProjSyncError as exc:
            logger.warning("Remote sync of %s failed (%s): %s", project.id, type(exc).__name__, exc)
            return FlushResult(
                status="failed",
                project_id=project.id,
                revision=revision,
                error_type=exc.__class__.__name__,
                error_message=str(exc),
            )

        try:
            self._cache.mark_synced(project, stored.version)
        except PersistenceError as exc:
            logger.warning("Could not record sync state of %s: %s", project.id, exc)

        logger.debug("Synced %s at version %d", project.id, stored.version)
        return FlushResult(
            status="saved",
            project_id=project.id,
            revision=revision,
            synced=True,
            remote_version=stored.version,
        )
