"""tfvc-bridge: run TFVC operations through the tf command-line client."""

__version__ = "0.1.0"

# Public API
from tfvcbridge.config import Config, TfvcConfig, get_config, load_config
from tfvcbridge.context import CredentialInfo, ServerContext
from tfvcbridge.errors import MessageOption, TfvcError, TfvcErrorCode
from tfvcbridge.models import (
    AutoResolveType,
    Conflict,
    ConflictType,
    ItemInfo,
    PendingChange,
    SyncItemResult,
    SyncResults,
    SyncType,
    Workspace,
    WorkspaceMapping,
)
from tfvcbridge.process import CommandLine, ExecOptions, ExecutionResult, ProcessPool, ProcessRunner
from tfvcbridge.repository import Repository
from tfvcbridge.version import TfvcVersion

__all__ = [
    # Main entry point
    "Repository",
    # Process execution
    "CommandLine",
    "ExecOptions",
    "ExecutionResult",
    "ProcessPool",
    "ProcessRunner",
    # Server context
    "CredentialInfo",
    "ServerContext",
    # Errors
    "MessageOption",
    "TfvcError",
    "TfvcErrorCode",
    "TfvcVersion",
    # Results
    "AutoResolveType",
    "Conflict",
    "ConflictType",
    "ItemInfo",
    "PendingChange",
    "SyncItemResult",
    "SyncResults",
    "SyncType",
    "Workspace",
    "WorkspaceMapping",
    # Config
    "Config",
    "TfvcConfig",
    "load_config",
    "get_config",
]
