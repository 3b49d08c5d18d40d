"""Static code-point tables used by the emoji classifier.

Every table is built once at import time from sorted, merged ``(low, high)``
spans and is never mutated afterwards. Lookups use ``bisect`` over the span
lower bounds.
"""

from __future__ import annotations

from bisect import bisect_right
from typing import Iterable, List, Tuple, Union

Span = Union[int, Tuple[int, int]]

ZWJ = 0x200D
KEYCAP_MARK = 0x20E3
BLACK_FLAG = 0x1F3F4
CANCEL_TAG = 0xE007F

_RI_MIN, _RI_MAX = 0x1F1E6, 0x1F1FF
_SKIN_TONE_MIN, _SKIN_TONE_MAX = 0x1F3FB, 0x1F3FF
_VS_MIN, _VS_MAX = 0xFE00, 0xFE0F
_TAG_MIN, _TAG_MAX = 0xE0020, 0xE007E

KEYCAP_BASES = frozenset(ord(ch) for ch in "0123456789#*")


class RangeTable:
    """Immutable set of code points stored as merged inclusive spans."""

    __slots__ = ("_lows", "_highs")

    def __init__(self, spans: Iterable[Span]) -> None:
        merged: List[Tuple[int, int]] = []
        for low, high in sorted(_as_pair(span) for span in spans):
            if merged and low <= merged[-1][1] + 1:
                merged[-1] = (merged[-1][0], max(merged[-1][1], high))
            else:
                merged.append((low, high))
        self._lows = tuple(low for low, _ in merged)
        self._highs = tuple(high for _, high in merged)

    def __contains__(self, code_point: object) -> bool:
        if not isinstance(code_point, int):
            return False
        idx = bisect_right(self._lows, code_point) - 1
        return idx >= 0 and code_point <= self._highs[idx]

    def __len__(self) -> int:
        return len(self._lows)

    def spans(self) -> Tuple[Tuple[int, int], ...]:
        return tuple(zip(self._lows, self._highs))


def _as_pair(span: Span) -> Tuple[int, int]:
    if isinstance(span, int):
        return span, span
    low, high = span
    if low > high:
        raise ValueError(f"Invalid span: {low:#x} > {high:#x}")
    return low, high


# Blocks whose assigned characters are emoji or emoji-style pictographs.
_EMOJI_BLOCKS: Tuple[Span, ...] = (
    (0x1F600, 0x1F64F),  # Emoticons
    (0x1F300, 0x1F5FF),  # Miscellaneous Symbols and Pictographs
    (0x1F680, 0x1F6FF),  # Transport and Map Symbols
    (0x1F900, 0x1F9FF),  # Supplemental Symbols and Pictographs
    (0x1FA00, 0x1FA6F),  # Chess Symbols
    (0x1FA70, 0x1FAFF),  # Symbols and Pictographs Extended-A
    (0x1F780, 0x1F7FF),  # Geometric Shapes Extended
    (0x2600, 0x26FF),  # Miscellaneous Symbols
    (0x2700, 0x27BF),  # Dingbats
    (0x1F100, 0x1F1FF),  # Enclosed Alphanumeric Supplement
    (0x1F200, 0x1F2FF),  # Enclosed Ideographic Supplement
)

# Emoji that live outside the blocks above.
_STANDALONE_EMOJI: Tuple[Span, ...] = (
    0x00A9,  # copyright
    0x00AE,  # registered
    0x203C,  # double exclamation
    0x2049,  # exclamation question
    0x2122,  # trade mark
    (0x231A, 0x231B),  # watch, hourglass
    0x2328,  # keyboard
    0x23CF,  # eject
    (0x23E9, 0x23F3),  # media controls, alarm clock, timers
    (0x23F8, 0x23FA),  # pause, stop, record
    (0x25FB, 0x25FE),  # medium squares
    (0x2B1B, 0x2B1C),  # large squares
    0x2B50,  # star
    0x2B55,  # heavy circle
    0x3030,  # wavy dash
    0x303D,  # part alternation mark
    0x3297,  # circled ideograph congratulation
    0x3299,  # circled ideograph secret
    0x1F004,  # mahjong red dragon
    0x1F0CF,  # playing card black joker
)

# Bases that accept a Fitzpatrick skin-tone modifier.
_MODIFIER_BASES: Tuple[Span, ...] = (
    0x261D,
    0x26F9,
    (0x270A, 0x270D),
    0x1F385,
    (0x1F3C2, 0x1F3C4),
    0x1F3C7,
    (0x1F3CA, 0x1F3CC),
    (0x1F442, 0x1F443),
    (0x1F446, 0x1F450),
    (0x1F466, 0x1F478),
    0x1F47C,
    (0x1F481, 0x1F483),
    (0x1F485, 0x1F487),
    0x1F48F,
    0x1F491,
    0x1F4AA,
    (0x1F574, 0x1F575),
    0x1F57A,
    0x1F590,
    (0x1F595, 0x1F596),
    (0x1F645, 0x1F647),
    (0x1F64B, 0x1F64F),
    0x1F6A3,
    (0x1F6B4, 0x1F6B6),
    0x1F6C0,
    0x1F6CC,
    0x1F90C,
    0x1F90F,
    (0x1F918, 0x1F91F),
    0x1F926,
    (0x1F930, 0x1F939),
    (0x1F93C, 0x1F93E),
    0x1F977,
    (0x1F9B5, 0x1F9B6),
    (0x1F9B8, 0x1F9B9),
    0x1F9BB,
    (0x1F9CD, 0x1F9CF),
    (0x1F9D1, 0x1F9DD),
    (0x1FAC3, 0x1FAC5),
    (0x1FAF0, 0x1FAF8),
)

EMOJI_TABLE = RangeTable(_EMOJI_BLOCKS + _STANDALONE_EMOJI)
MODIFIER_BASE_TABLE = RangeTable(_MODIFIER_BASES)


def is_regional_indicator(code_point: int) -> bool:
    return _RI_MIN <= code_point <= _RI_MAX


def is_skin_tone_modifier(code_point: int) -> bool:
    return _SKIN_TONE_MIN <= code_point <= _SKIN_TONE_MAX


def is_variation_selector(code_point: int) -> bool:
    return _VS_MIN <= code_point <= _VS_MAX


def is_zwj(code_point: int) -> bool:
    return code_point == ZWJ


def is_keycap_base(code_point: int) -> bool:
    return code_point in KEYCAP_BASES


def is_keycap_mark(code_point: int) -> bool:
    return code_point == KEYCAP_MARK


def is_tag(code_point: int) -> bool:
    return _TAG_MIN <= code_point <= _TAG_MAX


def is_cancel_tag(code_point: int) -> bool:
    return code_point == CANCEL_TAG


def is_modifier_base(code_point: int) -> bool:
    return code_point in MODIFIER_BASE_TABLE


def is_emoji_base(code_point: int) -> bool:
    """Return True when the code point can start (or join) an emoji sequence on its own.

    Skin-tone modifiers and regional indicators sit inside emoji blocks but
    only count as emoji in the sequences the classifier matches for them.
    """

    if is_skin_tone_modifier(code_point) or is_regional_indicator(code_point):
        return False
    return code_point in EMOJI_TABLE
