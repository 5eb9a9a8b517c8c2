"""Repository loader for the JSON "contents" index format.

The index is served at ``<repo url>/api/v3/contents`` as a top-level array
of package objects::

    [
      {
        "slug": "appstore",
        "name": "App Store",
        "author": "...",
        "description": {"short": "...", "long": "line one\\nline two"},
        "version": "2.3",
        "release_date": 1700000000,
        "file_size": {"zip_compressed": 1024, "zip_uncompressed": 4096},
        "category": "tool",
        "url": {"zip": "https://...", "icon": "https://..."}
      }
    ]

Every key is optional except ``slug``.
"""

import json
from datetime import datetime
from typing import Any, Optional

from pydantic import ValidationError

from models import Operation, Package
from repos.base import BaseRepository
from repos.fields import get_int, get_obj, get_str

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_timestamp(timestamp: int) -> Optional[str]:
    """Render a Unix timestamp in local time, or None if it is out of range."""
    try:
        return datetime.fromtimestamp(timestamp).strftime(TIMESTAMP_FORMAT)
    except (OverflowError, OSError, ValueError):
        return None


class OSCRepository(BaseRepository):
    """Load packages from a JSON contents API."""

    repo_type = "osc"

    INDEX_PATH = "/api/v3/contents"

    def load_packages(self) -> list[Package]:
        self.errors = []

        body = self.fetch_index(self.INDEX_PATH)
        if body is None:
            self.report(f'Could not update repository metadata for "{self.name}" repo!')
            self.loaded = False
            return []

        self.progress.on_phase("updating", 1, 1)

        try:
            data = json.loads(body)
        except (ValueError, RecursionError):
            data = None

        if not isinstance(data, list):
            self.report(f"Invalid format in downloaded data for {self.url}")
            self.loaded = False
            return []

        packages = []
        total = len(data)
        for i, item in enumerate(data):
            self.progress.on_item(total, i + 1)

            try:
                package = self._parse_package(item)
            except ValidationError as e:
                self.report(
                    f'Invalid package {i + 1} on repo "{self.name}", skipping: '
                    f"{e.error_count()} invalid field(s)"
                )
                continue
            if package is None:
                self.report(f'Missing slug for package {i + 1} on repo "{self.name}", skipping')
                continue

            packages.append(package)

        self.loaded = True
        return packages

    def get_zip_url(self, package: Package) -> str:
        # The index already carries absolute locations
        return package.url

    def get_icon_url(self, package: Package) -> str:
        return package.icon_url

    def _parse_package(self, item: Any) -> Optional[Package]:
        """Build a Package from one index entry.

        Returns:
            The Package, or None if the entry has no usable slug.

        Raises:
            pydantic.ValidationError: If a string field cannot be stored, such
                as one holding a lone surrogate escape.
        """
        slug = get_str(item, "slug")
        if not slug:
            return None

        package = Package(
            pkg_name=slug,
            title=get_str(item, "name"),
            author=get_str(item, "author", ""),
            version=get_str(item, "version", ""),
            category=get_str(item, "category", ""),
            operation=Operation.GET,
            repo_name=self.name,
        )

        description = get_obj(item, "description")
        package.short_desc = get_str(description, "short", "")
        package.long_desc = get_str(description, "long", "").replace("\\n", "\n")

        release_date = get_int(item, "release_date")
        if release_date is not None:
            updated = format_timestamp(release_date)
            if updated is not None:
                package.updated = updated
                package.updated_timestamp = release_date

        file_size = get_obj(item, "file_size")
        package.add_sizes(
            compressed=_size(file_size, "zip_compressed"),
            uncompressed=_size(file_size, "zip_uncompressed"),
        )

        urls = get_obj(item, "url")
        package.url = get_str(urls, "zip", "")
        package.icon_url = get_str(urls, "icon", "")

        return package


def _size(obj: dict, key: str) -> int:
    # Negative sizes are treated as absent
    value = get_int(obj, key, 0)
    return value if value >= 0 else 0
