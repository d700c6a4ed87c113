"""ProjectWorkspace: owns the loaded project and drives its persistence."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from dataclasses import replace
from typing import Callable, Iterable, Optional

from projsync.codec import export_json, import_json
from projsync.config import SyncConfig
from projsync.controller import DriveDocumentController
from projsync.errors import InvalidStateError
from projsync.models import FlushResult, Project, Theme
from projsync.server import DriveProjectRepository, ProjectService
from projsync.sync import (
    AutosaveScheduler,
    DirtyTracker,
    FlushTicket,
    LocalProjectCache,
    PersistenceGateway,
    ServiceRemoteStore,
)
from projsync.sync.scheduler import DEFAULT_AUTOSAVE_PERIOD_SEC
from projsync.tree import FileTreeStore, new_project
from projsync.tree.templates import DEFAULT_TEMPLATE
from projsync.util.ids import new_project_id

logger = logging.getLogger(__name__)

FlushListener = Callable[[FlushResult], None]


class ProjectWorkspace:
    """
    Client-side entry point: one current project, its store, dirty tracker,
    autosave scheduler and persistence gateway.

    Tree edits go through ``workspace.store``. Flushes run in the
    background; a tick that finds a flush outstanding is skipped, and an
    explicit ``save()`` during a flush returns the outstanding future.
    """

    def __init__(
        self,
        gateway: PersistenceGateway,
        *,
        user_id: Optional[str] = None,
        autosave_period: float = DEFAULT_AUTOSAVE_PERIOD_SEC,
        on_flush: Optional[FlushListener] = None,
    ) -> None:
        self._gateway = gateway
        self._user_id = user_id
        self._autosave_period = autosave_period
        self._on_flush = on_flush

        self._tracker = DirtyTracker()
        self._store = FileTreeStore(on_mutation=self._on_store_mutation)
        self._lock = threading.RLock()
        self._scheduler: Optional[AutosaveScheduler] = None
        # Cleared by the completion callback, not by the future resolving.
        self._inflight: Optional[Future[FlushResult]] = None
        self._generation = 0
        self._remote_version = 0
        self._last_result: Optional[FlushResult] = None

    @classmethod
    def from_config(
        cls,
        config: SyncConfig,
        *,
        user_id: Optional[str] = None,
        service: Optional[ProjectService] = None,
        on_flush: Optional[FlushListener] = None,
    ) -> ProjectWorkspace:
        """
        Build a workspace from configuration.

        The remote is ``service`` when given, otherwise a Drive-backed
        service when ``config.drive_folder_id`` is set, otherwise none
        (local cache only).
        """
        cache = LocalProjectCache(config.cache_path, config.namespace)
        if service is None and config.drive_folder_id:
            controller = DriveDocumentController(config.drive_auth)  # type: ignore[arg-type]
            service = ProjectService(DriveProjectRepository(controller, config.drive_folder_id))
        remote = ServiceRemoteStore(service, user_id) if service is not None else None
        return cls(
            PersistenceGateway(cache, remote),
            user_id=user_id,
            autosave_period=config.autosave_period_sec,
            on_flush=on_flush,
        )

    # ----------------------------
    # State
    # ----------------------------
    @property
    def store(self) -> FileTreeStore:
        return self._store

    @property
    def project(self) -> Project:
        return self._store.project

    @property
    def is_dirty(self) -> bool:
        return self._tracker.is_dirty

    @property
    def autosave_running(self) -> bool:
        scheduler = self._scheduler
        return scheduler is not None and scheduler.running

    @property
    def flush_in_progress(self) -> bool:
        with self._lock:
            return self._inflight is not None

    @property
    def last_result(self) -> Optional[FlushResult]:
        return self._last_result

    # ----------------------------
    # Project lifecycle
    # ----------------------------
    def create_project(
        self,
        name: str,
        *,
        template: Optional[str] = DEFAULT_TEMPLATE,
        description: Optional[str] = None,
        tags: Iterable[str] = (),
        is_public: bool = False,
        force: bool = False,
    ) -> str:
        """Create a project, make it current and start persisting it."""
        if self._user_id is None:
            raise InvalidStateError("Creating a project requires a signed-in user")
        self._guard_unsaved(force)
        project = new_project(
            name,
            self._user_id,
            template=template,
            description=description,
            tags=tags,
            is_public=is_public,
        )
        self._activate(project, dirty=True)
        self.save()
        return project.id

    def open(self, project_id: str, *, force: bool = False) -> Project:
        """
        Load a project and make it current.

        Refuses (InvalidStateError) while the current project has unsaved
        edits, unless ``force`` is given.
        """
        self._guard_unsaved(force)
        project = self._gateway.load(project_id)
        self._activate(project, dirty=self._gateway.has_unsynced(project_id))
        return project

    def unload(self) -> None:
        """Drop the current project. Results of in-flight flushes are discarded."""
        self._stop_autosave()
        with self._lock:
            self._generation += 1
            self._store.unload()
            self._tracker.reset(None)
            self._inflight = None
            self._remote_version = 0

    def close(self) -> None:
        self.unload()
        self._gateway.close()

    def delete_project(self, project_id: str) -> None:
        current = self._store.project.id if self._store.loaded else None
        self._gateway.delete(project_id)
        if current == project_id:
            self.unload()

    def list_projects(self, *, include_content: bool = False) -> list[Project]:
        return self._gateway.load_all_summaries(include_content=include_content)

    def export_project(self) -> str:
        return export_json(self._store.project)

    def import_project(self, text: str, *, force: bool = False) -> str:
        """
        Import an exported document as a new current project.

        Node ids are kept; the project gets a fresh id and belongs to the
        current user (the original owner when anonymous).
        """
        imported = import_json(text)
        self._guard_unsaved(force)
        project = replace(
            imported,
            id=new_project_id(),
            owner_id=self._user_id or imported.owner_id,
            version=0,
        )
        self._activate(project, dirty=True)
        return project.id

    # ----------------------------
    # Settings
    # ----------------------------
    def update_settings(
        self,
        *,
        theme: Optional[Theme | str] = None,
        autosave: Optional[bool] = None,
    ) -> None:
        self._store.update_settings(theme=theme, autosave=autosave)
        self._sync_autosave()

    def set_autosave(self, enabled: bool) -> None:
        self.update_settings(autosave=enabled)

    # ----------------------------
    # Flushing
    # ----------------------------
    def save(self, *, force: bool = False) -> Future[FlushResult]:
        """
        Flush now, regardless of the dirty state.

        ``force`` drops the version precondition and overwrites the remote
        copy. Raises PersistenceError if the local cache cannot be written.
        """
        return self._flush(force=force, from_tick=False)  # type: ignore[return-value]

    def run_autosave_tick(self) -> Optional[Future[FlushResult]]:
        """One scheduler tick: flush a dirty project with autosave on, unless a flush is in flight."""
        if not self._store.loaded or not self._tracker.is_dirty:
            return None
        if not self._store.project.settings.autosave:
            return None
        return self._flush(force=False, from_tick=True)

    def _flush(self, *, force: bool, from_tick: bool) -> Optional[Future[FlushResult]]:
        with self._lock:
            if self._inflight is not None:
                if from_tick:
                    logger.debug("Autosave tick skipped: flush in progress")
                    return None
                return self._inflight

            ticket = self._tracker.begin_flush()
            if ticket is None:
                raise InvalidStateError("No project is loaded")
            # The cached snapshot carries the last version the remote confirmed.
            project = replace(self._store.project, version=self._remote_version)
            generation = self._generation
            expected = None if force else self._remote_version
            future = self._gateway.flush(project, ticket.revision, expected_version=expected)
            self._inflight = future

        future.add_done_callback(lambda f: self._complete_flush(generation, ticket, f))
        return future

    def _complete_flush(
        self,
        generation: int,
        ticket: FlushTicket,
        future: Future[FlushResult],
    ) -> None:
        try:
            result = future.result()
        except Exception as exc:
            logger.exception("Flush of %s raised unexpectedly", ticket.project_id)
            result = FlushResult(
                status="failed",
                project_id=ticket.project_id,
                revision=ticket.revision,
                error_type=exc.__class__.__name__,
                error_message=str(exc),
            )

        with self._lock:
            if self._inflight is future:
                self._inflight = None
            if generation != self._generation:
                logger.debug("Discarding flush result for unloaded project %s", ticket.project_id)
                return
            self._last_result = result
            if result.ok:
                if result.remote_version is not None:
                    self._remote_version = result.remote_version
                clean = self._tracker.complete_flush(ticket)
                logger.info(
                    "Saved %s (revision %d)%s",
                    ticket.project_id,
                    ticket.revision,
                    "" if clean else "; newer edits pending",
                )

        if self._on_flush is not None:
            self._on_flush(result)

    # ----------------------------
    # Internals
    # ----------------------------
    def _guard_unsaved(self, force: bool) -> None:
        if force or not self._store.loaded or not self._tracker.is_dirty:
            return
        raise InvalidStateError(
            "Current project has unsaved changes. Save first or pass force=True.",
            details={"project_id": self._store.project.id},
        )

    def _activate(self, project: Project, *, dirty: bool) -> None:
        self._stop_autosave()
        with self._lock:
            self._generation += 1
            self._store.load(project)
            self._tracker.reset(project.id, dirty=dirty)
            self._inflight = None
            self._remote_version = project.version
            first = self._store.first_file()
            if first is not None:
                self._store.set_active(first.id)
        self._sync_autosave()

    def _on_store_mutation(self, project_id: str) -> None:
        self._tracker.mark_dirty(project_id)
        # Settings can also change through `store.update_settings`.
        if self._store.project.settings.autosave != self.autosave_running:
            self._sync_autosave()

    def _sync_autosave(self) -> None:
        """Run the scheduler exactly when a project is loaded with autosave on."""
        wanted = self._store.loaded and self._store.project.settings.autosave
        if not wanted:
            self._stop_autosave()
            return
        if self.autosave_running:
            return
        scheduler = AutosaveScheduler(self.run_autosave_tick, self._autosave_period)
        self._scheduler = scheduler
        scheduler.start()

    def _stop_autosave(self) -> None:
        scheduler, self._scheduler = self._scheduler, None
        if scheduler is not None:
            scheduler.stop()
