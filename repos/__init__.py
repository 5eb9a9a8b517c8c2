"""Package repositories for various index formats."""

from repos.base import BaseRepository, HttpTransport, NullProgress
from repos.config import RepoConfig, TransportSettings, load_repo_configs
from repos.osc import OSCRepository
from repos.registry import (
    REPOSITORY_TYPES,
    UnknownRepositoryType,
    build_repositories,
    create_repository,
)

__all__ = [
    "BaseRepository",
    "HttpTransport",
    "NullProgress",
    "OSCRepository",
    "REPOSITORY_TYPES",
    "RepoConfig",
    "TransportSettings",
    "UnknownRepositoryType",
    "build_repositories",
    "create_repository",
    "load_repo_configs",
]
