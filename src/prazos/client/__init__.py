"""Prazos Client -- backend access, session, bulk mutations and list state

Public interface of the client package.
"""

from .api import DeadlineApiClient
from .bulk import (
    BulkFailure,
    BulkMutationCoordinator,
    BulkOperation,
    BulkResult,
    DeleteDeadlines,
    SetResponsible,
    SetStatus,
)
from .collection import DeadlineListController

# Configuration
from .config import ClientConfig, load_client_config

# Exceptions
from .exceptions import ApiError, PrazosClientError
from .session import FileTokenStore, MemoryTokenStore, Session, TokenStore

__all__ = [
    "DeadlineApiClient",
    "DeadlineListController",
    "BulkMutationCoordinator",
    "BulkOperation",
    "BulkResult",
    "BulkFailure",
    "SetStatus",
    "SetResponsible",
    "DeleteDeadlines",
    "Session",
    "TokenStore",
    "MemoryTokenStore",
    "FileTokenStore",
    "ClientConfig",
    "load_client_config",
    "PrazosClientError",
    "ApiError",
]
