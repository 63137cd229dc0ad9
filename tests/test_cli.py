"""
Tests for the command line and configuration.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from scholar_citations.cli import build_parser, main
from scholar_citations.config import Settings
from scholar_citations.core.errors import ConfigurationError
from scholar_citations.core.service import CitationService

from conftest import FakeScholar


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run in an empty directory with an API key in the environment."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SCHOLAR_API_KEY", "test-key")
    return tmp_path


@pytest.fixture
def fake_service(scholar: FakeScholar):
    """Patch the CLI to build services backed by the sample catalog."""
    client = scholar.client()

    def build(**kwargs) -> CitationService:
        return CitationService(
            client=client,
            cache=kwargs["cache"],
            citing_concurrency=kwargs["citing_concurrency"],
        )

    with patch("scholar_citations.cli.CitationService", side_effect=build) as factory:
        yield factory


class TestSettings:
    """Tests for Settings and API key resolution."""

    def test_key_from_environment(self, workdir: Path):
        """Test SCHOLAR_API_KEY is used when set."""
        assert Settings().resolve_api_key() == "test-key"

    def test_key_from_file(self, workdir: Path, monkeypatch: pytest.MonkeyPatch):
        """Test the first line of serpapi.key is used, without the newline."""
        monkeypatch.delenv("SCHOLAR_API_KEY")
        (workdir / "serpapi.key").write_text("file-key\nignored\n", encoding="utf-8")

        assert Settings().resolve_api_key() == "file-key"

    def test_missing_key(self, workdir: Path, monkeypatch: pytest.MonkeyPatch):
        """Test a missing key file raises ConfigurationError."""
        monkeypatch.delenv("SCHOLAR_API_KEY")
        with pytest.raises(ConfigurationError):
            Settings().resolve_api_key()

    def test_empty_key_file(self, workdir: Path, monkeypatch: pytest.MonkeyPatch):
        """Test an empty key file raises ConfigurationError."""
        monkeypatch.delenv("SCHOLAR_API_KEY")
        (workdir / "serpapi.key").write_text("\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="empty"):
            Settings().resolve_api_key()

    def test_environment_overrides(self, workdir: Path, monkeypatch: pytest.MonkeyPatch):
        """Test settings are read from SCHOLAR_ variables."""
        monkeypatch.setenv("SCHOLAR_CITING_CONCURRENCY", "4")
        monkeypatch.setenv("SCHOLAR_CACHE_LOOKUPS", "false")
        settings = Settings()
        assert settings.CITING_CONCURRENCY == 4
        assert settings.CACHE_LOOKUPS is False


class TestParser:
    """Tests for argument parsing."""

    def test_flags(self):
        """Test the short flags."""
        args = build_parser().parse_args(["-p", "Root Paper", "-f", "papers.txt", "-o", "out.csv"])
        assert args.paper == "Root Paper"
        assert args.file == Path("papers.txt")
        assert args.output == Path("out.csv")
        assert args.baseline_year is None
        assert not args.no_cache


class TestMain:
    """Tests for main()."""

    def test_no_arguments(self, capsys: pytest.CaptureFixture[str]):
        """Test running without flags prints usage and fails."""
        assert main([]) == 1
        out = capsys.readouterr().out
        assert "Error: using at least one flag is mandatory" in out
        assert "-p PAPER" in out

    def test_single_paper(self, workdir: Path, fake_service, capsys: pytest.CaptureFixture[str]):
        """Test the console report for one paper."""
        assert main(["-p", "Root Paper", "--baseline-year", "2016"]) == 0

        out = capsys.readouterr().out
        assert '> Obtaining citation counts for "Root Paper"' in out
        assert "  Total: 10, Average: " in out
        assert ", Organic: 9" in out

    def test_file_and_csv(self, workdir: Path, fake_service):
        """Test titles from -p then -f are exported to CSV in order."""
        (workdir / "papers.txt").write_text("Citing Two\n\nUncited Paper\n", encoding="utf-8")
        output = workdir / "citations.csv"

        assert main(["-p", "Root Paper", "-f", "papers.txt", "-o", str(output)]) == 0

        lines = output.read_text(encoding="utf-8").splitlines()
        assert lines[0] == "Title,Total,Average,Organic"
        assert [line.split(",")[0] for line in lines[1:]] == [
            '"Root Paper"',
            '"Citing Two"',
            '"Uncited Paper"',
        ]
        _, total, average, organic = lines[1].split(",")
        assert (total, organic) == ("10", "9")
        assert float(average) > 0

    def test_no_cache_flag(self, workdir: Path, fake_service):
        """Test --no-cache and --concurrency reach the service."""
        assert main(["-p", "Root Paper", "--no-cache", "--concurrency", "3"]) == 0

        kwargs = fake_service.call_args.kwargs
        assert kwargs["cache"] is False
        assert kwargs["citing_concurrency"] == 3
        assert kwargs["api_key"] == "test-key"
        assert kwargs["base_url"] == "https://serpapi.com"

    def test_base_url_from_environment(
        self, workdir: Path, fake_service, monkeypatch: pytest.MonkeyPatch
    ):
        """Test SCHOLAR_BASE_URL reaches the service."""
        monkeypatch.setenv("SCHOLAR_BASE_URL", "http://localhost:8080")
        assert main(["-p", "Root Paper"]) == 0

        assert fake_service.call_args.kwargs["base_url"] == "http://localhost:8080"

    def test_invalid_setting(
        self,
        workdir: Path,
        monkeypatch: pytest.MonkeyPatch,
        caplog: pytest.LogCaptureFixture,
    ):
        """Test a malformed environment value exits non-zero with a logged error."""
        monkeypatch.setenv("SCHOLAR_CITING_CONCURRENCY", "abc")
        assert main(["-p", "Root Paper"]) == 1
        assert "Invalid configuration" in caplog.text

    def test_upstream_failure_aborts(self, workdir: Path, fake_service):
        """Test a failing paper exits non-zero and writes no CSV."""
        output = workdir / "citations.csv"

        assert main(["-p", "Not In Scholar", "-o", str(output)]) == 1
        assert not output.exists()

    def test_missing_api_key(self, workdir: Path, monkeypatch: pytest.MonkeyPatch):
        """Test a missing API key exits non-zero."""
        monkeypatch.delenv("SCHOLAR_API_KEY")
        assert main(["-p", "Root Paper"]) == 1

    def test_missing_paper_file(self, workdir: Path, fake_service):
        """Test an unreadable paper list exits non-zero."""
        assert main(["-f", "missing.txt"]) == 1
