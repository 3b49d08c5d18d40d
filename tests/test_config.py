from __future__ import annotations

import pytest

from nomoji.config import DEFAULT_CONFIG, NomojiConfig


def test_defaults():
    assert DEFAULT_CONFIG.classifier.max_sequence_length == 10
    assert DEFAULT_CONFIG.processing.encoding == "utf-8"
    assert DEFAULT_CONFIG.processing.backup_suffix == ".bak"


def test_from_env_overrides():
    config = NomojiConfig.from_env(
        {
            "NOMOJI_ENCODING": "latin-1",
            "NOMOJI_MAX_WORKERS": "8",
            "NOMOJI_BACKUP_SUFFIX": ".orig",
        }
    )
    assert config.processing.encoding == "latin-1"
    assert config.processing.max_workers == 8
    assert config.processing.backup_suffix == ".orig"


def test_from_env_clamps_workers():
    assert NomojiConfig.from_env({"NOMOJI_MAX_WORKERS": "0"}).processing.max_workers == 1


def test_from_env_rejects_non_integer_workers():
    with pytest.raises(ValueError):
        NomojiConfig.from_env({"NOMOJI_MAX_WORKERS": "lots"})


def test_from_env_does_not_mutate_defaults():
    NomojiConfig.from_env({"NOMOJI_ENCODING": "cp1252"})
    assert DEFAULT_CONFIG.processing.encoding == "utf-8"
