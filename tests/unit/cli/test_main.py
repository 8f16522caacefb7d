"""Unit tests for the command line interface."""

from __future__ import annotations

import pytest

from cli import main as cli_main
from core.source_settings import load_source_settings
from ingest.endpoints import list_items_endpoint
from store.source_sdk import SharePointSourceClient
from tests.fixture_paths import fixture_path

_SETTINGS_PATH = str(fixture_path("sites.yaml"))


@pytest.fixture
def patched_cli(monkeypatch, source_config, fake_graph):
    """Route CLI commands through the fake Graph API."""
    monkeypatch.setattr(cli_main, "load_env_files", lambda env_name=None: None)
    monkeypatch.setattr(
        cli_main,
        "_build_client",
        lambda data_root: SharePointSourceClient(source_config, transport=fake_graph.transport()),
    )
    return fake_graph


def _register_lists(fake_graph, status_code: int = 200) -> None:
    settings = load_source_settings(_SETTINGS_PATH)
    for site in settings.sites:
        for list_config in site.lists:
            if list_config.title:
                fake_graph.add_json(
                    list_items_endpoint(site, list_config, settings.host),
                    {"value": [{"id": "1", "fields": {"Title": list_config.title}}]},
                    status_code=status_code,
                )


def test_ingest_prints_outcomes_and_summary(patched_cli, capsys) -> None:
    """Ingest prints one line per list and a summary line."""
    _register_lists(patched_cli)

    exit_code = cli_main.main(["ingest", _SETTINGS_PATH])

    lines = capsys.readouterr().out.splitlines()
    assert exit_code == 0
    assert lines[0] == "Intranet\tPages\tSharePointPagesList\tingested\t1\t0"
    assert lines[3] == "Intranet\t-\t-\tskipped\t0\t0"
    assert lines[-1] == "records=3 assets=0 diagnostics=1"


def test_ingest_returns_one_when_a_list_fails(patched_cli, capsys) -> None:
    """Failed lists turn into a non-zero exit code."""
    _register_lists(patched_cli, status_code=503)

    exit_code = cli_main.main(["ingest", _SETTINGS_PATH])

    assert exit_code == 1
    assert "\tfailed\t" in capsys.readouterr().out


def test_nodes_lists_ingested_nodes_by_type(patched_cli, capsys) -> None:
    """The nodes command reads back the flushed graph."""
    _register_lists(patched_cli)
    cli_main.main(["ingest", _SETTINGS_PATH])
    capsys.readouterr()

    exit_code = cli_main.main(["nodes", "--type", "SharePointVacanciesList"])

    lines = capsys.readouterr().out.splitlines()
    assert exit_code == 0
    assert len(lines) == 1
    assert lines[0].split("\t")[1:3] == ["SharePointVacanciesList", "-"]


def test_schema_prints_type_definitions(patched_cli, capsys) -> None:
    """The schema command prints one definition per image list."""
    exit_code = cli_main.main(["schema", _SETTINGS_PATH])

    output = capsys.readouterr().out
    assert exit_code == 0
    assert output.count("implements Node") == 2
    assert patched_cli.requests == []
