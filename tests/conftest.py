import pytest

from uc_updater import updater
from uc_updater.devtools import PageHandle
from uc_updater.errors import NotificationError, TransportError

ATOM_HEADER = '<?xml version="1.0" encoding="utf-8"?>\n<feed xmlns="http://www.w3.org/2005/Atom">\n<title>ungoogled-chromium binaries</title>\n'
RELEASES = "https://ungoogled-software.github.io/ungoogled-chromium-binaries/releases"


def atom_entry(title, href, entry_id=None):
    entry_id = entry_id or href
    return (
        "<entry>\n"
        f"  <title>{title}</title>\n"
        f'  <link href="{href}"/>\n'
        f"  <id>{entry_id}</id>\n"
        "  <updated>2023-11-10T00:00:00Z</updated>\n"
        "</entry>\n"
    )


def atom_feed(*entries):
    return ATOM_HEADER + "".join(entries) + "</feed>\n"


class FakeHost:
    """In-memory browser host recording every page and alert."""

    def __init__(self, version="119.0.6045.123", fail_version=False, fail_open=False, fail_alert=False):
        self.version = version
        self.fail_version = fail_version
        self.fail_open = fail_open
        self.fail_alert = fail_alert
        self.version_calls = 0
        self.opened = []
        self.alerts = []

    async def browser_version(self):
        self.version_calls += 1
        if self.fail_version:
            raise TransportError("host unavailable")
        return self.version

    async def open_page(self, url):
        if self.fail_open:
            raise NotificationError("tab creation refused")
        self.opened.append(url)
        return PageHandle(id=f"page-{len(self.opened)}", url=url, ws_url="ws://fake")

    async def active_page(self):
        return PageHandle(id="active", url="https://example.org/", ws_url="ws://fake")

    async def show_alert(self, page, message):
        if self.fail_alert:
            raise NotificationError(f"cannot script {page.url}")
        self.alerts.append((page.id, message))


@pytest.fixture
def host():
    return FakeHost()


@pytest.fixture
def serve_feed(monkeypatch):
    """Replace the feed fetch with one returning the given document; returns the requested URLs."""
    def _serve(document):
        requested = []

        async def fake_fetch(url, timeout=None):
            requested.append(url)
            return document

        monkeypatch.setattr(updater, "fetch_release_feed", fake_fetch)
        return requested
    return _serve


@pytest.fixture
def win64_feed():
    return atom_feed(
        atom_entry("Linux (Portable) 64-bit: 120.0.6099.5-1.1", f"{RELEASES}/linux_portable/64bit/120.0.6099.5-1.1"),
        atom_entry("Windows 64-bit: 119.0.6045.123-1.1", f"{RELEASES}/windows/64bit/119.0.6045.123-1.1"),
        atom_entry("Windows 64-bit: 118.0.5993.88-1.1", f"{RELEASES}/windows/64bit/118.0.5993.88-1.1"),
    )
