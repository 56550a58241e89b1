"""Application configuration helpers."""

from __future__ import annotations

from listingsync.common.logging import configure_logging

from .env import env_flag, env_int, optional_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .publishing import (
    GitPublishConfig,
    PublishConfig,
    PublishHookConfig,
    get_git_publish_config,
    get_publish_config,
    get_publish_hook_config,
)
from .storage import (
    DatabaseConfig,
    StorageConfig,
    get_database_config,
    get_database_uri,
    get_storage_config,
)
from .sync import SyncConfig, get_sync_config

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "GitPublishConfig",
    "MissingConfigurationError",
    "PublishConfig",
    "PublishHookConfig",
    "StorageConfig",
    "SyncConfig",
    "configure_logging",
    "env_flag",
    "env_int",
    "get_database_config",
    "get_database_uri",
    "get_git_publish_config",
    "get_publish_config",
    "get_publish_hook_config",
    "get_storage_config",
    "get_sync_config",
    "optional_env_var",
    "require_env_var",
    "require_env_vars",
]
