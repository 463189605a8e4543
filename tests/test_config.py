"""Tests for AnalyzerConfig defaults, validation and environment loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from doc_overlap.core.config import AnalyzerConfig
from doc_overlap.core.validation import ParameterValidationError

ENV_NAMES = [
    "DOC_OVERLAP_WINDOW_SIZE",
    "DOC_OVERLAP_MIN_TOKEN_LENGTH",
    "DOC_OVERLAP_NGRAM_SIZE",
    "DOC_OVERLAP_MAX_WORKERS",
    "DOC_OVERLAP_RANKING_METRIC",
    "DOC_OVERLAP_IDF_CONTAINMENT",
    "DOC_OVERLAP_LOG_LEVEL",
    "DOC_OVERLAP_LOG_DIR",
    "DOC_OVERLAP_SHOW_PROGRESS",
    "DOC_OVERLAP_LOG_COSINE_DIAGNOSTIC",
    "DOC_OVERLAP_STRUCTURED_LOGGING",
    "DOC_OVERLAP_TIMEOUT_SECONDS",
]


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    # setenv before delenv so monkeypatch removes anything a .env file adds
    for name in ENV_NAMES:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


@pytest.fixture
def empty_dotenv(tmp_path: Path) -> str:
    path = tmp_path / ".env"
    path.write_text("")
    return str(path)


class TestDefaults:
    def test_defaults(self) -> None:
        config = AnalyzerConfig()
        assert config.window_size == 5
        assert config.min_token_length == 4
        assert config.ranking_metric == "lexical"
        assert config.idf_containment == "substring"
        assert config.max_workers == 1
        assert config.timeout_seconds is None
        assert config.log_cosine_diagnostic is False

    def test_log_level_normalized(self) -> None:
        assert AnalyzerConfig(log_level="debug").log_level == "DEBUG"


class TestValidation:
    @pytest.mark.parametrize(
        "overrides",
        [
            {"window_size": 0},
            {"min_token_length": -1},
            {"ngram_size": 0},
            {"max_workers": 0},
            {"max_workers": 1000},
            {"ranking_metric": "levenshtein"},
            {"idf_containment": "regex"},
            {"log_level": "VERBOSE"},
            {"timeout_seconds": 0},
            {"timeout_seconds": "soon"},
            {"window_size": True},
        ],
    )
    def test_rejects_invalid_values(self, overrides: dict[str, object]) -> None:
        with pytest.raises(ParameterValidationError):
            AnalyzerConfig(**overrides)  # type: ignore[arg-type]

    def test_timeout_coerced_to_float(self) -> None:
        assert AnalyzerConfig(timeout_seconds=3).timeout_seconds == 3.0


class TestFromEnv:
    def test_reads_prefixed_variables(self, clean_env: pytest.MonkeyPatch, empty_dotenv: str) -> None:
        clean_env.setenv("DOC_OVERLAP_WINDOW_SIZE", "8")
        clean_env.setenv("DOC_OVERLAP_RANKING_METRIC", "ngram")
        clean_env.setenv("DOC_OVERLAP_SHOW_PROGRESS", "yes")
        clean_env.setenv("DOC_OVERLAP_TIMEOUT_SECONDS", "2.5")
        config = AnalyzerConfig.from_env(dotenv_path=empty_dotenv)
        assert config.window_size == 8
        assert config.ranking_metric == "ngram"
        assert config.show_progress is True
        assert config.timeout_seconds == pytest.approx(2.5)

    def test_blank_variables_use_defaults(self, clean_env: pytest.MonkeyPatch, empty_dotenv: str) -> None:
        clean_env.setenv("DOC_OVERLAP_WINDOW_SIZE", "  ")
        assert AnalyzerConfig.from_env(dotenv_path=empty_dotenv).window_size == 5

    def test_overrides_win(self, clean_env: pytest.MonkeyPatch, empty_dotenv: str) -> None:
        clean_env.setenv("DOC_OVERLAP_MAX_WORKERS", "4")
        assert AnalyzerConfig.from_env(dotenv_path=empty_dotenv, max_workers=2).max_workers == 2

    def test_loads_dotenv_file(self, clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        dotenv = tmp_path / ".env"
        dotenv.write_text("DOC_OVERLAP_WINDOW_SIZE=12\nDOC_OVERLAP_IDF_CONTAINMENT=token\n")
        config = AnalyzerConfig.from_env(dotenv_path=str(dotenv))
        assert config.window_size == 12
        assert config.idf_containment == "token"

    def test_environment_beats_dotenv(self, clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        dotenv = tmp_path / ".env"
        dotenv.write_text("DOC_OVERLAP_WINDOW_SIZE=12\n")
        clean_env.setenv("DOC_OVERLAP_WINDOW_SIZE", "7")
        assert AnalyzerConfig.from_env(dotenv_path=str(dotenv)).window_size == 7

    def test_invalid_integer(self, clean_env: pytest.MonkeyPatch, empty_dotenv: str) -> None:
        clean_env.setenv("DOC_OVERLAP_WINDOW_SIZE", "wide")
        with pytest.raises(ParameterValidationError) as exc_info:
            AnalyzerConfig.from_env(dotenv_path=empty_dotenv)
        assert exc_info.value.field == "DOC_OVERLAP_WINDOW_SIZE"

    def test_invalid_boolean(self, clean_env: pytest.MonkeyPatch, empty_dotenv: str) -> None:
        clean_env.setenv("DOC_OVERLAP_SHOW_PROGRESS", "maybe")
        with pytest.raises(ParameterValidationError):
            AnalyzerConfig.from_env(dotenv_path=empty_dotenv)


class TestResolveMaxWorkers:
    def test_bounded_by_pairs(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("doc_overlap.core.config.psutil.cpu_count", lambda logical=True: 16)
        assert AnalyzerConfig(max_workers=8).resolve_max_workers(3) == 3

    def test_bounded_by_cpus(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("doc_overlap.core.config.psutil.cpu_count", lambda logical=True: 2)
        assert AnalyzerConfig(max_workers=8).resolve_max_workers(100) == 2

    def test_unknown_cpu_count(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("doc_overlap.core.config.psutil.cpu_count", lambda logical=True: None)
        assert AnalyzerConfig(max_workers=8).resolve_max_workers(100) == 1

    def test_never_below_one(self) -> None:
        assert AnalyzerConfig().resolve_max_workers(0) == 1
