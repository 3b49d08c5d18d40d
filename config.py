"""Global configuration defaults for nomoji."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional


@dataclass
class ClassifierConfig:
    """Configuration for emoji sequence matching."""

    # Longest RGI ZWJ sequence (kiss with two skin tones) is 10 scalar values
    max_sequence_length: int = 10


@dataclass
class ProcessingConfig:
    """Configuration for reading, cleaning, and writing files."""

    encoding: str = "utf-8"
    backup_suffix: str = ".bak"
    max_workers: int = 4


@dataclass
class ReportConfig:
    """Configuration for the summary report."""

    title: str = "nomoji"
    stdin_label: str = "stdin"


@dataclass
class NomojiConfig:
    """Top-level configuration values."""

    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    processing: ProcessingConfig = field(default_factory=ProcessingConfig)
    report: ReportConfig = field(default_factory=ReportConfig)

    encoding_env_var: str = "NOMOJI_ENCODING"
    max_workers_env_var: str = "NOMOJI_MAX_WORKERS"
    backup_suffix_env_var: str = "NOMOJI_BACKUP_SUFFIX"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "NomojiConfig":
        """Build a config from defaults overlaid with ``NOMOJI_*`` environment variables."""

        env = os.environ if environ is None else environ
        config = cls()

        encoding = env.get(config.encoding_env_var)
        if encoding:
            config.processing.encoding = encoding

        suffix = env.get(config.backup_suffix_env_var)
        if suffix:
            config.processing.backup_suffix = suffix

        workers = env.get(config.max_workers_env_var)
        if workers:
            try:
                config.processing.max_workers = max(1, int(workers))
            except ValueError as exc:
                raise ValueError(
                    f"{config.max_workers_env_var} must be an integer, got {workers!r}"
                ) from exc

        return config


DEFAULT_CONFIG = NomojiConfig()
