"""
Analyzer configuration.

Values come from keyword arguments or from ``DOC_OVERLAP_*`` environment
variables, optionally loaded from a ``.env`` file.
"""

import os
from dataclasses import dataclass
from typing import Optional

import psutil
from dotenv import load_dotenv

from .match_extractor import DEFAULT_WINDOW_SIZE
from .similarity import DEFAULT_NGRAM_SIZE
from .term_weighting import CONTAINMENT_MODES, SUBSTRING_CONTAINMENT
from .tokenizer import DEFAULT_MIN_TOKEN_LENGTH
from .validation import ParameterValidationError, ParameterValidator

ENV_PREFIX = "DOC_OVERLAP_"

LEXICAL_METRIC = "lexical"
COSINE_METRIC = "cosine"
NGRAM_METRIC = "ngram"
RANKING_METRICS = (LEXICAL_METRIC, COSINE_METRIC, NGRAM_METRIC)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _env_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ParameterValidationError(f"{name} must be a boolean, got {value!r}", field=name, value=value)


@dataclass
class AnalyzerConfig:
    """
    Settings for one analysis session.

    Attributes:
        window_size: Minimum character length of a reported match span
        min_token_length: Shortest token kept by the tokenizer
        ranking_metric: Score that drives ranking: lexical, cosine or ngram
        idf_containment: How idf decides a document contains a term
        ngram_size: Word n-gram size for the ngram metric
        max_workers: Worker threads for pair evaluation; 1 runs sequentially
        timeout_seconds: Time budget for one analysis run, None for no limit
        show_progress: Display a progress bar over document pairs
        log_cosine_diagnostic: Compute and log the cosine score of each pair
        log_level: Level passed to ``setup_logging`` by the runner
        log_dir: Directory for rotating log files
        structured_logging: JSON log lines instead of plain text
    """

    window_size: int = DEFAULT_WINDOW_SIZE
    min_token_length: int = DEFAULT_MIN_TOKEN_LENGTH
    ranking_metric: str = LEXICAL_METRIC
    idf_containment: str = SUBSTRING_CONTAINMENT
    ngram_size: int = DEFAULT_NGRAM_SIZE
    max_workers: int = 1
    timeout_seconds: Optional[float] = None
    show_progress: bool = False
    log_cosine_diagnostic: bool = False
    log_level: str = "INFO"
    log_dir: str = "logs"
    structured_logging: bool = True

    def __post_init__(self):
        self.validate()

    def validate(self) -> "AnalyzerConfig":
        """
        Check every field.

        Raises:
            ParameterValidationError: If a field is out of range
        """
        self.window_size = ParameterValidator.validate_positive_integer(self.window_size, "window_size")
        self.min_token_length = ParameterValidator.validate_positive_integer(self.min_token_length, "min_token_length")
        self.ngram_size = ParameterValidator.validate_positive_integer(self.ngram_size, "ngram_size")
        self.max_workers = ParameterValidator.validate_positive_integer(self.max_workers, "max_workers", max_value=256)
        ParameterValidator.validate_choice(self.ranking_metric, "ranking_metric", RANKING_METRICS)
        ParameterValidator.validate_choice(self.idf_containment, "idf_containment", CONTAINMENT_MODES)
        self.log_level = ParameterValidator.validate_string(self.log_level, "log_level").upper()
        ParameterValidator.validate_choice(self.log_level, "log_level", LOG_LEVELS)
        if self.timeout_seconds is not None:
            self.timeout_seconds = ParameterValidator.validate_positive_float(
                self.timeout_seconds, "timeout_seconds", min_value=0.001
            )
        return self

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None, **overrides) -> "AnalyzerConfig":
        """
        Build a configuration from ``DOC_OVERLAP_*`` environment variables.

        A ``.env`` file is loaded first without overriding variables that are
        already set. Keyword overrides win over the environment.
        """
        load_dotenv(dotenv_path=dotenv_path, override=False)

        values = {}
        int_fields = ("window_size", "min_token_length", "ngram_size", "max_workers")
        str_fields = ("ranking_metric", "idf_containment", "log_level", "log_dir")
        bool_fields = ("show_progress", "log_cosine_diagnostic", "structured_logging")

        for name in int_fields + str_fields + bool_fields + ("timeout_seconds",):
            env_name = ENV_PREFIX + name.upper()
            raw = os.getenv(env_name)
            if raw is None or raw.strip() == "":
                continue
            if name in int_fields:
                values[name] = ParameterValidator.validate_positive_integer(raw.strip(), env_name)
            elif name in bool_fields:
                values[name] = _env_bool(env_name, raw)
            elif name == "timeout_seconds":
                values[name] = ParameterValidator.validate_positive_float(raw.strip(), env_name, min_value=0.001)
            else:
                values[name] = raw.strip()

        values.update(overrides)
        return cls(**values)

    def resolve_max_workers(self, pair_count: int) -> int:
        """Worker count for a run, bounded by CPU cores and the number of pairs."""
        cpu_count = psutil.cpu_count(logical=True) or 1
        return max(1, min(self.max_workers, pair_count, cpu_count))
