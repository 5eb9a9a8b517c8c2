"""Repository list and transport configuration."""

import json
import os
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

DEFAULT_TIMEOUT = 30.0
DEFAULT_RETRIES = 3
DEFAULT_USER_AGENT = "repo-catalog/0.1"


class TransportSettings(BaseModel):
    """HTTP settings shared by every repository transport."""

    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="Seconds")
    retries: int = Field(
        default=DEFAULT_RETRIES, ge=0, description="Retries on 429/5xx responses"
    )
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls) -> "TransportSettings":
        """Build settings from REPO_HTTP_* environment variables."""
        values = {}
        timeout = os.environ.get("REPO_HTTP_TIMEOUT")
        if timeout:
            values["timeout"] = timeout
        retries = os.environ.get("REPO_HTTP_RETRIES")
        if retries:
            values["retries"] = retries
        user_agent = os.environ.get("REPO_USER_AGENT")
        if user_agent:
            values["user_agent"] = user_agent
        return cls(**values)


class RepoConfig(BaseModel):
    """One configured remote repository."""

    name: str = Field(min_length=1)
    url: str = Field(min_length=1)
    type: str = Field(default="osc", description="Index format identifier")
    enabled: bool = True

    @field_validator("url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        # Index paths are appended with a leading slash
        return value.rstrip("/")


def load_repo_configs(path: Path) -> list[RepoConfig]:
    """Load repository definitions from a JSON file.

    The file holds either ``{"repos": [...]}`` or a bare list of entries.

    Args:
        path: Path to the JSON file.

    Returns:
        List of validated RepoConfig objects, in file order.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file is not valid JSON or has the wrong shape.
        pydantic.ValidationError: If an entry is missing required fields.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get("repos", [])
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of repositories in {path}")

    return [RepoConfig.model_validate(entry) for entry in data]
