"""Remove emoji sequences from text and count what was removed."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from nomoji.classification.classifier import EmojiSequence, classify


@dataclass
class ScrubResult:
    """Cleaned text plus the emoji sequences removed from it."""

    output: str
    removed_count: int = 0
    sequences: List[EmojiSequence] = field(default_factory=list)

    def kind_counts(self) -> Dict[str, int]:
        return dict(Counter(sequence.kind.value for sequence in self.sequences))


def scrub(text: str, *, max_length: Optional[int] = None) -> ScrubResult:
    """Scan ``text`` left to right and drop every emoji sequence.

    Retained characters are copied verbatim and keep their order; each
    multi-scalar sequence adds one to ``removed_count``.
    """

    pieces: List[str] = []
    sequences: List[EmojiSequence] = []
    run_start = 0
    cursor = 0
    size = len(text)

    while cursor < size:
        decision = classify(text, cursor, max_length=max_length)
        if not decision.is_emoji:
            cursor += 1
            continue
        if run_start < cursor:
            pieces.append(text[run_start:cursor])
        sequences.append(EmojiSequence(start=cursor, length=decision.consumed, kind=decision.kind))
        cursor += decision.consumed
        run_start = cursor

    if not sequences:
        return ScrubResult(output=text)

    if run_start < size:
        pieces.append(text[run_start:])
    return ScrubResult(output="".join(pieces), removed_count=len(sequences), sequences=sequences)


def strip_emoji(text: str) -> str:
    return scrub(text).output


def count_emoji(text: str) -> int:
    return scrub(text).removed_count
