"""federalist-build: build static sites from repositories and publish them."""

from federalist_build.__version__ import __version__

from federalist_build.builder import SiteBuilder
from federalist_build.callbacks.handler import (
    BuildCallbackHandler,
    CompositeBuildCallbackHandler,
    LoggingBuildCallbackHandler,
)
from federalist_build.core.config import BuildConfig, RemoteSyncTarget
from federalist_build.core.constants import Engine, Platform, StepKind
from federalist_build.core.exceptions import (
    BuildError,
    CommandFailedError,
    CommandSpawnError,
    CommandTimeoutError,
    ConfigurationError,
    CredentialLookupError,
    ProcessError,
    PublishError,
    RemoteSyncError,
    TemplateError,
)
from federalist_build.core.types import (
    BuildRequest,
    BuildResult,
    Credential,
    ProcessResult,
    Site,
    StepRecord,
    SyncDescriptor,
    TokenSet,
    User,
)
from federalist_build.pipeline.pipeline import BuildPipeline
from federalist_build.process.runner import ProcessRunner, Runner
from federalist_build.publish.dispatcher import PublishDispatcher
from federalist_build.publish.remote import RemoteSync
from federalist_build.tokens.credentials import CredentialStore, InMemoryCredentialStore
from federalist_build.tokens.resolver import TokenResolver, resolve_tokens
from federalist_build.utils.logging import (
    configure_logging,
    configure_logging_from_config,
    get_logger,
)

__all__ = [
    "__version__",
    # Builder
    "SiteBuilder",
    "BuildPipeline",
    "PublishDispatcher",
    "TokenResolver",
    "resolve_tokens",
    "ProcessRunner",
    "Runner",
    "RemoteSync",
    "CredentialStore",
    "InMemoryCredentialStore",
    # Config
    "BuildConfig",
    "RemoteSyncTarget",
    # Constants
    "Engine",
    "Platform",
    "StepKind",
    # Types
    "BuildRequest",
    "BuildResult",
    "Credential",
    "ProcessResult",
    "Site",
    "StepRecord",
    "SyncDescriptor",
    "TokenSet",
    "User",
    # Callbacks
    "BuildCallbackHandler",
    "CompositeBuildCallbackHandler",
    "LoggingBuildCallbackHandler",
    # Exceptions
    "BuildError",
    "CommandFailedError",
    "CommandSpawnError",
    "CommandTimeoutError",
    "ConfigurationError",
    "CredentialLookupError",
    "ProcessError",
    "PublishError",
    "RemoteSyncError",
    "TemplateError",
    # Logging
    "configure_logging",
    "configure_logging_from_config",
    "get_logger",
]
