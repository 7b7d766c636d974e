"""Unit tests for the GitDorker bulk discovery driver."""

import io
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from rich.console import Console

from .exceptions import ManifestParseError, ManifestReadError, NetworkError, ResultsFileError
from .gitdorker import process_gitdorker_results
from .models import Manifest, SearchResultItem
from .report import Reporter

SEARCH_URL = "https://github.com/search?q=%22acme%22+filename%3Apackage.json&type=Code"


def _item(n: int) -> SearchResultItem:
    return SearchResultItem(
        html_url=f"https://github.com/acme/repo{n}/blob/main/package.json",
        raw_url=f"https://raw.githubusercontent.com/acme/repo{n}/main/package.json",
    )


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def reporter(output):
    return Reporter(Console(file=output, width=200, color_system=None))


@pytest.fixture
def github():
    client = MagicMock()
    client.search_code.return_value = []
    return client


@pytest.fixture
def registry():
    client = MagicMock()
    client.exists.side_effect = lambda name: name == "left-pad"
    return client


def _results_file(tmp_path: Path, *lines: str) -> Path:
    path = tmp_path / "gitdorker.txt"
    path.write_text("\n".join(lines) + "\n")
    return path


def describe_process_gitdorker_results():
    def it_issues_one_search_per_matching_line(tmp_path, github, registry, reporter):
        path = _results_file(tmp_path, SEARCH_URL)

        stats = process_gitdorker_results(path, github, registry, reporter)

        github.search_code.assert_called_once_with(SEARCH_URL)
        assert stats.searches == 1

    def it_issues_no_searches_without_matching_lines(tmp_path, github, registry, reporter):
        path = _results_file(tmp_path, "GitDorker v2", "https://github.com/search?q=acme+filename%3A.env")

        stats = process_gitdorker_results(path, github, registry, reporter)

        github.search_code.assert_not_called()
        assert stats.searches == 0

    def it_scans_the_file_once(tmp_path, github, registry, reporter):
        path = _results_file(tmp_path, "noise", SEARCH_URL, "more noise", f"{SEARCH_URL}&p=2")

        process_gitdorker_results(path, github, registry, reporter)

        assert github.search_code.call_count == 2

    def it_reports_empty_searches(tmp_path, github, registry, reporter, output):
        path = _results_file(tmp_path, SEARCH_URL)

        process_gitdorker_results(path, github, registry, reporter)

        assert "No results found" in output.getvalue()
        github.fetch_manifest.assert_not_called()

    def it_checks_every_manifest_found(tmp_path, github, registry, reporter, output):
        github.search_code.return_value = [_item(1), _item(2)]
        github.fetch_manifest.side_effect = [
            Manifest({"left-pad": "1.3.0", "acme-internal": "1.0.0"}),
            Manifest({"acme-utils": "2.0.0"}),
        ]
        path = _results_file(tmp_path, SEARCH_URL)

        stats = process_gitdorker_results(path, github, registry, reporter)

        assert [c.args[0] for c in github.fetch_manifest.call_args_list] == [_item(1).raw_url, _item(2).raw_url]
        assert stats.manifests == 2
        assert (stats.summary.exists, stats.summary.missing) == (1, 2)
        assert stats.summary.missing_names == ["acme-internal", "acme-utils"]
        assert f"Checking package.json: {_item(1).raw_url}" in output.getvalue()

    def it_skips_manifests_that_fail_to_load(tmp_path, github, registry, reporter, output):
        github.search_code.return_value = [_item(1), _item(2), _item(3), _item(4)]
        github.fetch_manifest.side_effect = [
            ManifestParseError("not valid JSON"),
            ManifestReadError("HTTP 404"),
            NetworkError(_item(3).raw_url, "timed out"),
            Manifest({"left-pad": "1.3.0"}),
        ]
        path = _results_file(tmp_path, SEARCH_URL)

        stats = process_gitdorker_results(path, github, registry, reporter)

        assert stats.manifests_skipped == 3
        assert stats.manifests == 1
        assert stats.summary.exists == 1
        assert "Error fetching package.json: not valid JSON" in output.getvalue()

    def it_continues_after_a_failed_search(tmp_path, github, registry, reporter):
        github.search_code.side_effect = [NetworkError("https://api.github.com/search/code", "refused"), []]
        path = _results_file(tmp_path, SEARCH_URL, f"{SEARCH_URL}&p=2")

        stats = process_gitdorker_results(path, github, registry, reporter)

        assert stats.searches == 2
        assert stats.search_errors == 1

    def it_raises_for_a_missing_results_file(tmp_path, github, registry, reporter):
        with pytest.raises(ResultsFileError, match="Cannot read GitDorker results file"):
            process_gitdorker_results(tmp_path / "missing.txt", github, registry, reporter)

        github.search_code.assert_not_called()
