"""Publishing target configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError

PUBLISH_HOOK_TIMEOUT_SECONDS = 10.0
DEFAULT_CURRENT_FILENAME = "current.json"
DEFAULT_SOLD_FILENAME = "sold.json"


@dataclass(frozen=True, slots=True)
class GitPublishConfig:
    repo_path: Path
    current_filename: str = DEFAULT_CURRENT_FILENAME
    sold_filename: str = DEFAULT_SOLD_FILENAME


@dataclass(frozen=True, slots=True)
class PublishHookConfig:
    url: str
    username: str
    password: str
    timeout_seconds: float = PUBLISH_HOOK_TIMEOUT_SECONDS


@dataclass(frozen=True, slots=True)
class PublishConfig:
    git: GitPublishConfig | None = None
    hook: PublishHookConfig | None = None

    @property
    def enabled(self) -> bool:
        return self.git is not None


def get_git_publish_config() -> GitPublishConfig | None:
    repo_path = optional_env_var("LISTINGSYNC_GIT_PATH")
    if repo_path is None:
        return None
    return GitPublishConfig(
        repo_path=Path(repo_path).expanduser(),
        current_filename=(
            optional_env_var("LISTINGSYNC_GIT_CURRENT_FILE") or DEFAULT_CURRENT_FILENAME
        ),
        sold_filename=optional_env_var("LISTINGSYNC_GIT_SOLD_FILE") or DEFAULT_SOLD_FILENAME,
    )


def get_publish_hook_config() -> PublishHookConfig | None:
    url = optional_env_var("LISTINGSYNC_PUBLISH_HOOK_URL")
    if url is None:
        return None
    if not url.startswith(("http://", "https://")):
        raise ConfigurationError(
            f"LISTINGSYNC_PUBLISH_HOOK_URL must be an http(s) URL, got {url!r}"
        )
    values = require_env_vars(
        ("LISTINGSYNC_PUBLISH_HOOK_USER", "LISTINGSYNC_PUBLISH_HOOK_PASSWORD")
    )
    return PublishHookConfig(
        url=url,
        username=values["LISTINGSYNC_PUBLISH_HOOK_USER"],
        password=values["LISTINGSYNC_PUBLISH_HOOK_PASSWORD"],
    )


def get_publish_config() -> PublishConfig:
    return PublishConfig(git=get_git_publish_config(), hook=get_publish_hook_config())
