"""Assemble the summary report printed after a run."""

from __future__ import annotations

import sys
from typing import List, Optional, Sequence, TextIO

from nomoji.config import DEFAULT_CONFIG
from nomoji.services.file_service import FileResult


def _heading(title: Optional[str]) -> str:
    return f"=== {title or DEFAULT_CONFIG.report.title} Report ==="


def assemble_report(
    results: Sequence[FileResult],
    *,
    dry_run: bool = False,
    title: Optional[str] = None,
) -> str:
    total = len(results)
    successful = sum(1 for result in results if result.success)
    total_emojis = sum(result.emojis_found for result in results)
    verb = "found" if dry_run else "removed"

    lines: List[str] = ["", _heading(title)]
    lines.append(f"Files processed: {total}")
    lines.append(f"Successful: {successful}")
    if total != successful:
        lines.append(f"Failed: {total - successful}")
    lines.append(f"Total emojis found: {total_emojis}")

    if results:
        lines.extend(["", "Per-file results:"])
        for result in results:
            if result.error:
                lines.append(f"  {result.source}: {result.emojis_found} emojis - ERROR: {result.error}")
            else:
                lines.append(f"  {result.source}: {result.emojis_found} emojis {verb}")

    return "\n".join(lines) + "\n"


def assemble_stdin_report(
    result: FileResult,
    *,
    dry_run: bool = False,
    title: Optional[str] = None,
) -> str:
    verb = "found" if dry_run else "removed"
    lines = ["", _heading(title)]
    if result.error:
        lines.append(f"Error processing stdin: {result.error}")
    else:
        lines.append(f"Emojis {verb} from stdin: {result.emojis_found}")
    return "\n".join(lines) + "\n"


def write_report(report: str, stream: Optional[TextIO] = None) -> None:
    stream = stream or sys.stderr
    stream.write(report)
    stream.flush()
