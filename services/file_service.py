"""Read, clean, and write files or standard input.

Each file is an independent unit of work: it is decoded, scrubbed, and written
back by one worker thread, and failures are recorded on its ``FileResult``
instead of aborting the batch. Cleaned text destined for standard output is
emitted only after every worker has finished, in input order.
"""

from __future__ import annotations

import logging
import shutil
import sys
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from functools import partial
from pathlib import Path
from typing import BinaryIO, Iterable, List, Optional, TextIO, Union

from nomoji.config import DEFAULT_CONFIG, NomojiConfig
from nomoji.postprocessing.emoji_cleaner import ScrubResult, scrub

LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]


class FileProcessingError(RuntimeError):
    """Raised when a unit of input cannot be cleaned."""


class ReadFailure(FileProcessingError):
    """Raised when the source bytes cannot be read."""


class DecodeFailure(FileProcessingError):
    """Raised when the source bytes are not valid in the configured encoding."""


class BackupFailure(FileProcessingError):
    """Raised when the backup copy cannot be created."""


class WriteFailure(FileProcessingError):
    """Raised when cleaned text cannot be written."""


class OutputMode(str, Enum):
    STDOUT = "stdout"
    INPLACE = "inplace"
    BACKUP = "backup"


@dataclass
class FileResult:
    """Outcome of processing one file (or standard input)."""

    source: str
    emojis_found: int = 0
    success: bool = True
    error: Optional[str] = None
    # Cleaned text waiting to be written to stdout after the batch completes
    output: Optional[str] = None


def decode_bytes(data: bytes, encoding: str, what: str = "file") -> str:
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as exc:
        raise DecodeFailure(f"Failed to decode {what} as {encoding}: {exc}") from exc
    except LookupError as exc:
        raise DecodeFailure(f"Unknown encoding: {encoding}") from exc


def read_source(path: Path, encoding: str) -> str:
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise ReadFailure(f"Failed to read file: {exc}") from exc
    return decode_bytes(data, encoding)


def backup_path_for(path: Path, suffix: str) -> Path:
    return path.with_name(f"{path.name}{suffix}")


def write_cleaned(
    path: Path,
    text: str,
    *,
    mode: OutputMode,
    encoding: str,
    backup_suffix: str,
) -> Optional[Path]:
    """Overwrite ``path`` with ``text``, copying the original aside first in backup mode.

    Returns the backup path when one was created.
    """

    backup: Optional[Path] = None
    if mode is OutputMode.BACKUP:
        backup = backup_path_for(path, backup_suffix)
        try:
            shutil.copy2(path, backup)
        except OSError as exc:
            raise BackupFailure(f"Failed to create backup: {exc}") from exc
        LOGGER.debug("Backed up %s to %s", path, backup)

    try:
        path.write_bytes(text.encode(encoding))
    except (OSError, UnicodeEncodeError) as exc:
        raise WriteFailure(f"Failed to write file: {exc}") from exc
    return backup


def emit_stdout(text: str, encoding: str, stream: Optional[TextIO] = None) -> None:
    """Write ``text`` to standard output as bytes in ``encoding``."""

    stream = stream or sys.stdout
    buffer: Optional[BinaryIO] = getattr(stream, "buffer", None)
    if buffer is None:
        stream.write(text)
        stream.flush()
        return
    stream.flush()
    buffer.write(text.encode(encoding))
    buffer.flush()


def process_file(
    path: PathLike,
    *,
    mode: OutputMode = OutputMode.STDOUT,
    dry_run: bool = False,
    config: Optional[NomojiConfig] = None,
) -> FileResult:
    """Clean one file, recording any failure on the returned result."""

    settings = config or DEFAULT_CONFIG
    cfg = settings.processing
    max_length = settings.classifier.max_sequence_length
    source = Path(path)
    label = str(path)

    try:
        text = read_source(source, cfg.encoding)
    except FileProcessingError as exc:
        LOGGER.error("%s: %s", label, exc)
        return FileResult(source=label, success=False, error=str(exc))

    result: ScrubResult = scrub(text, max_length=max_length)
    LOGGER.info(
        "%s: %d emoji sequence(s) %s",
        label,
        result.removed_count,
        "found" if dry_run else "removed",
    )
    if result.sequences:
        LOGGER.debug("%s: sequence kinds %s", label, result.kind_counts())

    if dry_run:
        return FileResult(source=label, emojis_found=result.removed_count)

    if mode is OutputMode.STDOUT:
        return FileResult(source=label, emojis_found=result.removed_count, output=result.output)

    # Backup mode always leaves a .bak, even for files with nothing to remove
    if not result.removed_count and mode is OutputMode.INPLACE:
        LOGGER.debug("%s: unchanged; skipping write", label)
        return FileResult(source=label)

    try:
        write_cleaned(
            source,
            result.output,
            mode=mode,
            encoding=cfg.encoding,
            backup_suffix=cfg.backup_suffix,
        )
    except FileProcessingError as exc:
        LOGGER.error("%s: %s", label, exc)
        return FileResult(
            source=label,
            emojis_found=result.removed_count,
            success=False,
            error=str(exc),
        )
    return FileResult(source=label, emojis_found=result.removed_count)


def process_files(
    paths: Iterable[PathLike],
    *,
    mode: OutputMode = OutputMode.STDOUT,
    dry_run: bool = False,
    config: Optional[NomojiConfig] = None,
    max_workers: Optional[int] = None,
    stream: Optional[TextIO] = None,
) -> List[FileResult]:
    """Clean every path on a thread pool and return results in input order."""

    cfg = config or DEFAULT_CONFIG
    writes = mode is not OutputMode.STDOUT and not dry_run
    unique: List[PathLike] = []
    seen = set()
    for path in paths:
        # A file is rewritten by at most one worker, whatever path names it
        if writes:
            key = Path(path).resolve()
            if key in seen:
                LOGGER.warning("Skipping duplicate path %s (same file as an earlier argument)", path)
                continue
            seen.add(key)
        unique.append(path)
    if not unique:
        return []

    workers = max(1, min(max_workers or cfg.processing.max_workers, len(unique)))
    LOGGER.info("Processing %d file(s) with %d worker(s)", len(unique), workers)
    worker = partial(process_file, mode=mode, dry_run=dry_run, config=cfg)
    with ThreadPoolExecutor(max_workers=workers) as executor:
        results = list(executor.map(worker, unique))

    for result in results:
        if result.output is None:
            continue
        try:
            emit_stdout(result.output, cfg.processing.encoding, stream)
        except (OSError, UnicodeEncodeError) as exc:
            LOGGER.error("%s: failed to write to stdout: %s", result.source, exc)
            result.success = False
            result.error = f"Failed to write to stdout: {exc}"
        result.output = None

    return results


def process_stdin(
    *,
    dry_run: bool = False,
    config: Optional[NomojiConfig] = None,
    stdin: Optional[BinaryIO] = None,
    stream: Optional[TextIO] = None,
) -> FileResult:
    """Clean standard input and write the result to standard output."""

    cfg = config or DEFAULT_CONFIG
    label = cfg.report.stdin_label
    source = stdin if stdin is not None else sys.stdin.buffer

    try:
        data = source.read()
    except OSError as exc:
        LOGGER.error("Error reading from stdin: %s", exc)
        return FileResult(source=label, success=False, error=f"Failed to read input: {exc}")

    try:
        text = decode_bytes(data, cfg.processing.encoding, "input")
    except DecodeFailure as exc:
        LOGGER.error("Error reading from stdin: %s", exc)
        return FileResult(source=label, success=False, error=str(exc))

    result = scrub(text, max_length=cfg.classifier.max_sequence_length)
    LOGGER.info("%s: %d emoji sequence(s) found", label, result.removed_count)

    if not dry_run:
        try:
            emit_stdout(result.output, cfg.processing.encoding, stream)
        except (OSError, UnicodeEncodeError) as exc:
            LOGGER.error("Failed to write to stdout: %s", exc)
            return FileResult(
                source=label,
                emojis_found=result.removed_count,
                success=False,
                error=f"Failed to write to stdout: {exc}",
            )
    return FileResult(source=label, emojis_found=result.removed_count)
