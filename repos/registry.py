"""Lookup of repository classes by index format."""

from typing import Iterable

from repos.base import BaseRepository
from repos.config import RepoConfig
from repos.osc import OSCRepository

REPOSITORY_TYPES: dict[str, type[BaseRepository]] = {
    OSCRepository.repo_type: OSCRepository,
}


class UnknownRepositoryType(ValueError):
    """Raised when a repository is configured with an unsupported format."""

    def __init__(self, repo_type: str):
        self.repo_type = repo_type
        supported = ", ".join(sorted(REPOSITORY_TYPES))
        super().__init__(f"Unknown repository type '{repo_type}' (supported: {supported})")


def create_repository(repo_type: str, url: str, name: str, **kwargs) -> BaseRepository:
    """Construct the repository class registered for ``repo_type``.

    Extra keyword arguments (transport, progress, logger, http_fallback) are
    passed to the repository constructor.
    """
    try:
        repo_class = REPOSITORY_TYPES[repo_type]
    except KeyError:
        raise UnknownRepositoryType(repo_type) from None
    return repo_class(url, name, **kwargs)


def build_repositories(configs: Iterable[RepoConfig], **kwargs) -> list[BaseRepository]:
    """Construct repositories for every enabled config entry."""
    return [
        create_repository(config.type, config.url, config.name, **kwargs)
        for config in configs
        if config.enabled
    ]
