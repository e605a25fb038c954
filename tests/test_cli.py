"""
Command-line interface tests
"""

import json
from unittest.mock import patch

import pytest

from webgraph import cli
from webgraph.config import Strategy
from webgraph.core import crawl as real_crawl
from webgraph.errors import FetchError

SEED = "https://a.example/"


@pytest.fixture
def offline(seed_web):
    """Route cli.crawl through the fake web and record the config it was given"""
    calls = []

    def fake_crawl(start_url, config=None, verbose=False):
        calls.append(config)
        return real_crawl(start_url, config, fetch=seed_web, verbose=verbose)

    with patch("webgraph.cli.crawl", side_effect=fake_crawl):
        yield calls


def test_writes_graph_to_file(offline, tmp_path):
    out = tmp_path / "graph.json"
    assert cli.main([SEED, "--out", str(out)]) == 0

    data = json.loads(out.read_text(encoding="utf-8"))
    assert {n["url"]: n["group"] for n in data["nodes"]} == {
        SEED: 0,
        "https://a.example/x": 0,
        "https://b.example/y": 1,
    }
    assert len(data["links"]) == 2
    assert data["host_names"] == ["a.example", "b.example"]


def test_stdout_output(offline, capsys):
    assert cli.main([SEED, "--out", "-", "--pretty"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert len(data["nodes"]) == 3


def test_options_reach_config(offline, tmp_path):
    cli.main(
        [
            SEED,
            "--strategy", "dfs",
            "--max-nodes", "50",
            "--max-depth", "2",
            "--grouping", "known-host",
            "--selector", "main a",
            "--timeout", "3",
            "--deadline", "60",
            "--out", str(tmp_path / "g.json"),
        ]
    )
    config = offline[0]
    assert config.strategy is Strategy.DFS
    assert config.max_nodes == 50
    assert config.max_depth == 2
    assert config.grouping == "known-host"
    assert config.selector == "main a"
    assert config.timeout_s == 3.0
    assert config.deadline_s == 60.0


def test_verbose_prints_summary(offline, tmp_path, capsys):
    cli.main([SEED, "--verbose", "--out", str(tmp_path / "g.json")])
    err = capsys.readouterr().err
    assert "CRAWL SUMMARY" in err
    assert "Nodes discovered:       3" in err
    assert "Results written to:" in err


def test_crawl_error_exit_code(tmp_path):
    with patch("webgraph.cli.crawl", side_effect=FetchError(SEED, 500)):
        assert cli.main([SEED, "--strategy", "dfs", "--out", str(tmp_path / "g.json")]) == 1
    assert not (tmp_path / "g.json").exists()


def test_invalid_limits_rejected():
    with pytest.raises(SystemExit) as exc_info:
        cli.main([SEED, "--max-nodes", "0"])
    assert exc_info.value.code == 2


def test_generate_output_path(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = cli.generate_output_path("https://www.example.com/page")
    assert path.parent.name == "crawls"
    assert path.name.startswith("www_example_com_")
    assert path.suffix == ".json"


def test_summary_lists_errors(capsys):
    from webgraph.core import CrawlStats
    from webgraph.graph import GraphStore

    stats = CrawlStats()
    stats.record_error(None)
    stats.record_error(404)
    cli.print_summary(GraphStore(), stats)
    err = capsys.readouterr().err
    assert "Connection errors: 1" in err
    assert "HTTP 404: 1" in err
