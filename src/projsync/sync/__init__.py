"""Dirty tracking, autosave and persistence."""

from __future__ import annotations

from .dirty import DirtyTracker, FlushTicket
from .gateway import PersistenceGateway
from .local_cache import DEFAULT_NAMESPACE, LocalProjectCache
from .remote import RemoteStore, ServiceRemoteStore
from .scheduler import DEFAULT_AUTOSAVE_PERIOD_SEC, AutosaveScheduler

__all__ = [
    "DirtyTracker",
    "FlushTicket",
    "AutosaveScheduler",
    "DEFAULT_AUTOSAVE_PERIOD_SEC",
    "LocalProjectCache",
    "DEFAULT_NAMESPACE",
    "RemoteStore",
    "ServiceRemoteStore",
    "PersistenceGateway",
]
