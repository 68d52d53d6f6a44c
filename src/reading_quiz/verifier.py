"""Answer verification for typed readings.

A reading may be typed in hiragana or katakana, and with stray spaces, so
both sides are normalized before comparison:

  1. leading/trailing whitespace is stripped and interior whitespace removed
     (``\\s`` in Unicode mode, which covers the ideographic space U+3000)
  2. every katakana with a hiragana counterpart is shifted down by 0x60

Nothing else is folded: no case-folding, no width normalization, no
long-vowel handling.
"""

import re

from reading_quiz.constants import KANA_OFFSET, KATAKANA_END, KATAKANA_START

_WHITESPACE = re.compile(r"\s+")

_KATAKANA_TO_HIRAGANA = {
    code: code - KANA_OFFSET for code in range(KATAKANA_START, KATAKANA_END + 1)
}


def normalize(value: str | None) -> str:
    """Return the comparison form of a reading.  ``None`` becomes ``""``."""
    if value is None:
        return ""
    text = _WHITESPACE.sub("", str(value).strip())
    return text.translate(_KATAKANA_TO_HIRAGANA)


def verify(submitted: str | None, canonical: str | None) -> bool:
    """True iff both readings normalize to the same string."""
    return normalize(submitted) == normalize(canonical)
