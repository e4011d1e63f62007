from conftest import RELEASES, FakeHost, atom_entry, atom_feed
from uc_updater import cli


def patch_feed(monkeypatch, document):
    async def fake_fetch(url, timeout=None):
        return document

    monkeypatch.setattr(cli, "fetch_release_feed", fake_fetch)


def test_latest_prints_version_and_link(monkeypatch, capsys, win64_feed):
    patch_feed(monkeypatch, win64_feed)
    assert cli.main(["latest"]) == 0
    out = capsys.readouterr().out
    assert "Latest release: 119.0.6045.123" in out
    assert f"{RELEASES}/windows/64bit/119.0.6045.123-1.1" in out


def test_latest_compare_outdated(monkeypatch, capsys, win64_feed):
    patch_feed(monkeypatch, win64_feed)
    assert cli.main(["latest", "--compare", "118.0.5993.88"]) == 1
    assert "Outdated: 118.0.5993.88" in capsys.readouterr().out


def test_latest_without_matching_entry_fails(monkeypatch, capsys):
    patch_feed(monkeypatch, atom_feed(atom_entry("Linux 1.2.3.4", "https://example.com/linux/")))
    assert cli.main(["latest"]) == 2
    assert "Update check failed" in capsys.readouterr().err


def test_check_uses_devtools_url_option(monkeypatch, capsys, serve_feed):
    created = []

    def make_host(endpoint):
        created.append(endpoint)
        return FakeHost()

    monkeypatch.setattr(cli, "DevToolsHost", make_host)
    serve_feed(atom_feed(atom_entry("Release 119.0.6045.123", "https://example.com/windows/64bit/")))
    assert cli.main(["--devtools-url", "http://127.0.0.1:9333", "check"]) == 0
    assert created == ["http://127.0.0.1:9333"]
    assert "up to date" in capsys.readouterr().out


def test_check_transport_failure(monkeypatch, capsys):
    monkeypatch.setattr(cli, "DevToolsHost", lambda endpoint: FakeHost(fail_version=True))
    assert cli.main(["check"]) == 2
    assert "host unavailable" in capsys.readouterr().err


def test_run_agent_applies_command_line_overrides(monkeypatch):
    from uc_updater import agent

    served = []
    monkeypatch.setattr(agent, "CONFIG", dict(agent.CONFIG))
    monkeypatch.setattr("uvicorn.run", lambda app, **kwargs: served.append((app, kwargs)))
    assert cli.main(["--devtools-url", "http://127.0.0.1:9333", "--feed-url", "https://mirror/feed.xml", "run-agent"]) == 0
    assert served[0][0] == "uc_updater.agent:APP"
    assert agent.CONFIG["devtools_url"] == "http://127.0.0.1:9333"
    assert agent.get_host().endpoint == "http://127.0.0.1:9333"
    assert agent.check_options()["feed_url"] == "https://mirror/feed.xml"
