from __future__ import annotations

import io
from pathlib import Path

import pytest

from nomoji.config import NomojiConfig


@pytest.fixture
def config() -> NomojiConfig:
    cfg = NomojiConfig()
    cfg.processing.max_workers = 2
    return cfg


@pytest.fixture
def write_file(tmp_path: Path):
    def _write(name: str, content: str | bytes) -> Path:
        path = tmp_path / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_bytes(content.encode("utf-8"))
        return path

    return _write


class FakeStdout:
    """Text stream stand-in exposing a byte buffer like ``sys.stdout``."""

    def __init__(self) -> None:
        self.buffer = io.BytesIO()

    def write(self, text: str) -> int:
        return self.buffer.write(text.encode("utf-8"))

    def flush(self) -> None:
        pass

    def getvalue(self) -> str:
        return self.buffer.getvalue().decode("utf-8")


@pytest.fixture
def fake_stdout() -> FakeStdout:
    return FakeStdout()
