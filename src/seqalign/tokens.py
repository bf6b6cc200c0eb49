"""
Splitting of text into the sequences that are aligned
"""
import re
from enum import Enum
from typing import List, Sequence, Union


class TokenizeError(Exception):
    pass


class Unit(Enum):
    CHARS = "chars"
    WORDS = "words"
    LINES = "lines"


_WHITESPACE = re.compile(r"\s+")


def tokenize(text: str, unit: Union[Unit, str] = Unit.CHARS) -> Sequence[str]:
    """
    Split text into a sequence of tokens.

    For unit "chars", the text itself is returned since a string already
    is a sequence of characters.

    >>> tokenize("abc")
    'abc'
    >>> tokenize("  the quick\\tbrown fox ", "words")
    ['the', 'quick', 'brown', 'fox']
    >>> tokenize("first\\nsecond\\n", Unit.LINES)
    ['first', 'second']
    """
    if not isinstance(unit, Unit):
        try:
            unit = Unit(unit)
        except ValueError:
            raise TokenizeError(
                f"Unknown unit '{unit}'. Choose one of: "
                + ", ".join(u.value for u in Unit)
            ) from None
    if unit is Unit.CHARS:
        return text
    if unit is Unit.WORDS:
        return _WHITESPACE.split(text.strip()) if text.strip() else []
    lines: List[str] = text.splitlines()
    return lines
