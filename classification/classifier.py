"""Decide whether the text at a position starts an emoji sequence.

Matching rules are checked in a fixed order: regional-indicator flag pair,
skin-tone modifier, variation selector, zero-width-joiner composite, and
finally a single scalar. Keycap and tag (subdivision flag) sequences are
matched for their own bases. The classifier always reports the maximal match
at a position and never consumes a skin-tone modifier, variation selector,
or zero-width joiner on its own.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple

from nomoji.classification.ranges import (
    BLACK_FLAG,
    is_cancel_tag,
    is_emoji_base,
    is_keycap_base,
    is_keycap_mark,
    is_modifier_base,
    is_regional_indicator,
    is_skin_tone_modifier,
    is_tag,
    is_variation_selector,
    is_zwj,
)
from nomoji.config import DEFAULT_CONFIG


class SequenceKind(str, Enum):
    SIMPLE = "simple"
    VARIATION = "variation"
    MODIFIER = "modifier"
    FLAG = "flag"
    ZWJ = "zwj"
    KEYCAP = "keycap"
    TAG = "tag"


@dataclass(frozen=True)
class Classification:
    """Outcome of classifying one position."""

    is_emoji: bool
    consumed: int
    kind: Optional[SequenceKind] = None


@dataclass(frozen=True)
class EmojiSequence:
    """A maximal run of scalar values forming one emoji."""

    start: int
    length: int
    kind: SequenceKind

    @property
    def end(self) -> int:
        return self.start + self.length


ORDINARY = Classification(is_emoji=False, consumed=1)


def _resolve_max_length(max_length: Optional[int]) -> int:
    limit = max_length if max_length is not None else DEFAULT_CONFIG.classifier.max_sequence_length
    return max(1, limit)


def _match_element(text: str, index: int, stop: int) -> Tuple[int, SequenceKind]:
    """Match an emoji base plus at most one skin-tone modifier or variation selector."""

    if index + 1 < stop:
        base = ord(text[index])
        follower = ord(text[index + 1])
        if is_modifier_base(base) and is_skin_tone_modifier(follower):
            return 2, SequenceKind.MODIFIER
        if is_variation_selector(follower):
            return 2, SequenceKind.VARIATION
    return 1, SequenceKind.SIMPLE


def _match_keycap(text: str, position: int, stop: int) -> int:
    cursor = position + 1
    if cursor < stop and is_variation_selector(ord(text[cursor])):
        cursor += 1
    if cursor < stop and is_keycap_mark(ord(text[cursor])):
        return cursor + 1 - position
    return 0


def _match_tag_sequence(text: str, position: int, stop: int) -> int:
    cursor = position + 1
    while cursor < stop and is_tag(ord(text[cursor])):
        cursor += 1
    if cursor == position + 1 or cursor >= stop:
        return 0
    if is_cancel_tag(ord(text[cursor])):
        return cursor + 1 - position
    return 0


def classify(text: str, position: int, *, max_length: Optional[int] = None) -> Classification:
    """Classify the scalar value at ``position`` in ``text``.

    Returns ``Classification(False, 1)`` for ordinary text. For emoji, the
    result carries the number of scalar values in the maximal sequence
    starting at ``position`` (never more than ``max_length`` and never past
    the end of ``text``) and its kind.
    """

    size = len(text)
    if not 0 <= position < size:
        raise IndexError(f"position {position} out of range for text of length {size}")

    stop = position + min(_resolve_max_length(max_length), size - position)
    code_point = ord(text[position])

    if is_regional_indicator(code_point):
        if position + 1 < stop and is_regional_indicator(ord(text[position + 1])):
            return Classification(True, 2, SequenceKind.FLAG)
        return Classification(True, 1, SequenceKind.SIMPLE)

    if is_keycap_base(code_point):
        consumed = _match_keycap(text, position, stop)
        if consumed:
            return Classification(True, consumed, SequenceKind.KEYCAP)
        return ORDINARY

    # Keycap marks are never retained, even without a keycap base
    if is_keycap_mark(code_point):
        return Classification(True, 1, SequenceKind.SIMPLE)

    if not is_emoji_base(code_point):
        return ORDINARY

    if code_point == BLACK_FLAG:
        consumed = _match_tag_sequence(text, position, stop)
        if consumed:
            return Classification(True, consumed, SequenceKind.TAG)

    length, kind = _match_element(text, position, stop)
    end = position + length
    while (
        end + 1 < stop
        and is_zwj(ord(text[end]))
        and is_emoji_base(ord(text[end + 1]))
    ):
        extra, _ = _match_element(text, end + 1, stop)
        end += 1 + extra
        kind = SequenceKind.ZWJ

    return Classification(True, end - position, kind)


def is_emoji_scalar(char: str) -> bool:
    """Return True when a single character is an emoji on its own."""

    if len(char) != 1:
        raise ValueError(f"Expected a single character, got {len(char)}")
    code_point = ord(char)
    return is_emoji_base(code_point) or is_regional_indicator(code_point) or is_keycap_mark(code_point)


def iter_sequences(text: str, *, max_length: Optional[int] = None) -> Iterator[EmojiSequence]:
    """Yield every maximal emoji sequence found in a left-to-right scan."""

    cursor = 0
    size = len(text)
    while cursor < size:
        decision = classify(text, cursor, max_length=max_length)
        if decision.is_emoji:
            yield EmojiSequence(start=cursor, length=decision.consumed, kind=decision.kind)
        cursor += decision.consumed
