"""Base repository class and transport utilities."""

import logging
from abc import ABC, abstractmethod
from typing import Optional, Protocol

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from models import LoadResult, Package
from repos.config import TransportSettings

logger = logging.getLogger(__name__)

SECURE_SCHEME = "https"
INSECURE_SCHEME = "http"


class Transport(Protocol):
    """Fetches a URL into memory."""

    def fetch(self, url: str) -> tuple[bytes, bool]:
        """Return ``(body, success)``."""
        ...


class ProgressReporter(Protocol):
    """Receives coarse phase and per-item progress notifications."""

    def on_phase(self, phase: str, step: int, total: int) -> None: ...

    def on_item(self, total: int, index: int) -> None: ...


class NullProgress:
    """Progress reporter that discards every notification."""

    def on_phase(self, phase: str, step: int, total: int) -> None:
        pass

    def on_item(self, total: int, index: int) -> None:
        pass


def get_session(settings: Optional[TransportSettings] = None) -> requests.Session:
    """Create a requests session with retry logic."""
    settings = settings or TransportSettings()
    session = requests.Session()
    retry = Retry(
        total=settings.retries,
        backoff_factor=0.5,
        status_forcelist=[429, 500, 502, 503, 504],
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.headers["User-Agent"] = settings.user_agent
    return session


class HttpTransport:
    """Transport backed by a requests session.

    The session retries 429/5xx responses internally, so one ``fetch`` may
    issue several HTTP requests while still counting as a single attempt.
    """

    def __init__(
        self,
        settings: Optional[TransportSettings] = None,
        session: Optional[requests.Session] = None,
    ):
        self.settings = settings or TransportSettings()
        self.session = session or get_session(self.settings)

    def fetch(self, url: str) -> tuple[bytes, bool]:
        try:
            response = self.session.get(url, timeout=self.settings.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.warning("Failed to fetch %s: %s", url, e)
            return b"", False
        return response.content, True


class BaseRepository(ABC):
    """Abstract base class for remote package repositories.

    Callers only rely on ``load_packages``, ``get_type``, ``get_zip_url`` and
    ``get_icon_url``; each index format is one subclass.
    """

    repo_type: str = "unknown"

    def __init__(
        self,
        url: str,
        name: str,
        *,
        transport: Optional[Transport] = None,
        progress: Optional[ProgressReporter] = None,
        logger: Optional[logging.Logger] = None,
        http_fallback: bool = True,
    ):
        self.url = url
        self._name = name
        self.loaded = False
        self.transport = transport or HttpTransport()
        self.progress = progress or NullProgress()
        self.logger = logger or logging.getLogger(type(self).__module__)
        self.http_fallback = http_fallback
        self.errors: list[str] = []

    @property
    def name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"{type(self).__name__}(url={self.url!r}, name={self.name!r})"

    @abstractmethod
    def load_packages(self) -> list[Package]:
        """Fetch and parse the repository index.

        Network and format problems never raise. They produce an empty list,
        leave ``loaded`` False and are reported through ``errors`` and the
        logger.

        Returns:
            List of Package objects, possibly empty.
        """
        pass

    def get_type(self) -> str:
        """Return the short identifier of this index format."""
        return self.repo_type

    @abstractmethod
    def get_zip_url(self, package: Package) -> str:
        """Return the URL of the package's downloadable artifact."""
        pass

    @abstractmethod
    def get_icon_url(self, package: Package) -> str:
        """Return the URL of the package's icon, or an empty string."""
        pass

    def run(self) -> LoadResult:
        """Load packages and return them with the load's diagnostics."""
        packages = self.load_packages()
        return LoadResult(
            repo_name=self.name,
            repo_type=self.get_type(),
            url=self.url,
            loaded=self.loaded,
            packages=packages,
            total_count=len(packages),
            errors=list(self.errors),
        )

    def fetch_index(self, path: str) -> Optional[bytes]:
        """Fetch ``self.url + path``, falling back from https to http once.

        On a failed https fetch the stored ``url`` is rewritten to http in
        place before the single retry, and stays rewritten.

        Args:
            path: Index path appended to the repository URL.

        Returns:
            Response body, or None if every attempt failed.
        """
        body, success = self.transport.fetch(self.url + path)

        if not success and self.http_fallback and self.url.startswith(SECURE_SCHEME):
            self.report(
                f'Attempting http fallback for https repo "{self.name}" after loading failure'
            )
            self.url = INSECURE_SCHEME + self.url[len(SECURE_SCHEME):]
            body, success = self.transport.fetch(self.url + path)

        return body if success else None

    def report(self, message: str) -> None:
        """Record a diagnostic for the current load."""
        self.errors.append(message)
        self.logger.warning(message)
