"""Tests for the BenchmarkDotNet report extractor."""

from __future__ import annotations

from snippetlink.extractors.benchmark import BenchmarkDotNetExtractor, strip_environment
from snippetlink.filesystem import LocalFileSystem
from snippetlink.options import QueryOptions
from snippetlink.result import Failure, Success
from tests._fixtures.fake_filesystem import FakeFileSystem

_RESULTS = "BenchmarkDotNet.Artifacts/results"

_REPORT = """
```
BenchmarkDotNet v0.14.0, Windows 11
Intel Core i7
```
| Method | Mean | Error | StdDev |
|------- |-----:|------:|-------:|
| Test1  | 1 ms | 0.1 ms| 0.2 ms |
"""

_TABLE = (
    "| Method | Mean | Error | StdDev |\n"
    "|------- |-----:|------:|-------:|\n"
    "| Test1  | 1 ms | 0.1 ms| 0.2 ms |"
)


def _report_path(framework: str) -> str:
    return f"Bench/bin/Release/{framework}/{_RESULTS}/Bench.Sorting-report-github.md"


def test_selects_numerically_greatest_framework() -> None:
    fs = FakeFileSystem(
        {
            _report_path("net9.0"): "| old |\n",
            _report_path("net10.0"): "| new |\n",
            _report_path("net8.0"): "| older |\n",
        }
    )
    extractor = BenchmarkDotNetExtractor(fs)

    outcome = extractor.extract("Bench", "Sorting", QueryOptions())

    assert isinstance(outcome, Success)
    assert outcome.value.content == "| new |"
    assert outcome.value.content_kind == "markdown"
    assert outcome.value.start_line is None
    assert outcome.value.end_line is None


def test_non_numeric_framework_folders_are_ignored() -> None:
    fs = FakeFileSystem(
        {
            _report_path("net8.0"): "| net8 |\n",
            _report_path("netstandard2.0"): "| standard |\n",
        }
    )
    outcome = BenchmarkDotNetExtractor(fs).extract("Bench", "Sorting", QueryOptions())
    assert isinstance(outcome, Success)
    assert outcome.value.content == "| net8 |"


def test_environment_block_is_stripped_by_default() -> None:
    fs = FakeFileSystem({_report_path("net10.0"): _REPORT})
    outcome = BenchmarkDotNetExtractor(fs).extract("Bench", "Sorting", QueryOptions())
    assert isinstance(outcome, Success)
    assert outcome.value.content == _TABLE


def test_environment_block_is_kept_on_request() -> None:
    fs = FakeFileSystem({_report_path("net10.0"): _REPORT})
    outcome = BenchmarkDotNetExtractor(fs).extract("Bench", "Sorting", QueryOptions("env=true"))
    assert isinstance(outcome, Success)
    assert outcome.value.content.startswith("```\nBenchmarkDotNet v0.14.0")
    assert outcome.value.content.endswith(_TABLE)


def test_can_handle_reports_missing_output() -> None:
    fs = FakeFileSystem({_report_path("net10.0"): _REPORT})
    extractor = BenchmarkDotNetExtractor(fs)
    assert extractor.can_handle("Bench", "Sorting", QueryOptions()) == Success()

    missing = extractor.can_handle("Bench", "Parsing", QueryOptions())
    assert missing == Failure(
        f"BenchmarkDotNet output file Bench/bin/Release/net10.0/{_RESULTS}/"
        "Bench.Parsing-report-github.md not found."
    )

    no_release = extractor.can_handle("Other", "Sorting", QueryOptions())
    assert isinstance(no_release, Failure)
    assert "Other/bin/Release/net*/" in no_release.message


def test_report_name_uses_project_directory_name() -> None:
    fs = FakeFileSystem(
        {f"benchmarks/Bench/bin/Release/net8.0/{_RESULTS}/Bench.Sorting-report-github.md": "| x |\n"}
    )
    outcome = BenchmarkDotNetExtractor(fs).extract("benchmarks/Bench", "Sorting", QueryOptions())
    assert isinstance(outcome, Success)
    assert outcome.value.content == "| x |"


def test_strip_environment_without_fence_returns_input() -> None:
    assert strip_environment("| a |") == "| a |"
    assert strip_environment("```\nunterminated") == "```\nunterminated"


def test_undecodable_report_is_reported(tmp_path) -> None:
    report = tmp_path / _report_path("net8.0")
    report.parent.mkdir(parents=True)
    report.write_bytes(b"| caf\xe9 |\n")
    extractor = BenchmarkDotNetExtractor(LocalFileSystem(tmp_path))

    outcome = extractor.extract("Bench", "Sorting", QueryOptions())

    assert isinstance(outcome, Failure)
    assert "is not valid UTF-8" in outcome.message
