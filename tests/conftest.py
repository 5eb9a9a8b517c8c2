import json

import pytest


class FakeTransport:
    """Transport returning scripted responses and recording requested URLs."""

    def __init__(self, responses=None):
        # url -> bytes body; URLs not listed fail
        self.responses = dict(responses or {})
        self.requested = []

    def fetch(self, url):
        self.requested.append(url)
        if url in self.responses:
            return self.responses[url], True
        return b"", False


class RecordingProgress:
    def __init__(self):
        self.events = []

    def on_phase(self, phase, step, total):
        self.events.append(("phase", phase, step, total))

    def on_item(self, total, index):
        self.events.append(("item", total, index))


def index_body(entries) -> bytes:
    return json.dumps(entries).encode("utf-8")


@pytest.fixture()
def progress():
    return RecordingProgress()


@pytest.fixture()
def sample_entries():
    return [
        {
            "slug": "appstore",
            "name": "App Store",
            "author": "vgmoose",
            "description": {
                "short": "Browse and install homebrew",
                "long": "First line\\nSecond line",
            },
            "version": "2.3",
            "release_date": 1700000000,
            "file_size": {"zip_compressed": 1024, "zip_uncompressed": 4096},
            "category": "tool",
            "url": {
                "zip": "https://repo.example/zips/appstore.zip",
                "icon": "https://repo.example/packages/appstore/icon.png",
            },
        },
        {"slug": "minimal"},
    ]
