"""
Routines for printing alignments and writing the JSON report.
"""
import json
import operator
from typing import Any, Callable, Iterable, List, Optional, Tuple


def _element_str(element: Any) -> str:
    if isinstance(element, bytes):
        return element.decode("ascii", "replace")
    return str(element)


def format_alignment(
    alignment: Iterable[Tuple[Any, Any]],
    gap: Any = None,
    gap_char: str = "-",
    equal: Optional[Callable[[Any, Any], bool]] = None,
) -> str:
    """
    Return a three-line text representation of an alignment: the first
    sequence, a line that marks matches with "|" and mismatches with "X", and
    the second sequence.

    If any element is longer than one character (for example, when aligning
    words), columns are padded to the same width and separated by spaces.

    >>> print(format_alignment([("a", "a"), ("b", None), ("c", "x")]))
    abc
    | X
    a-x
    >>> print(format_alignment([("the", "the"), ("cat", "dog"), (None, "sat")]))
    the cat -
    |   X
    the dog sat
    """
    if equal is None:
        equal = operator.eq
    columns = []
    for a, b in alignment:
        top = gap_char if a is gap else _element_str(a)
        bottom = gap_char if b is gap else _element_str(b)
        if a is gap or b is gap:
            mark = " "
        elif equal(a, b):
            mark = "|"
        else:
            mark = "X"
        columns.append((top, mark, bottom))

    width = max((max(len(top), len(bottom)) for top, _, bottom in columns), default=1)
    if width <= 1:
        lines = ["".join(column[row] for column in columns) for row in range(3)]
    else:
        lines = [
            " ".join(column[row].ljust(width) for column in columns) for row in range(3)
        ]
    return "\n".join(line.rstrip() for line in lines)


class OneLine:
    """Wrap any value in this class to print it on one line in the JSON file"""

    def __init__(self, value):
        self.value = value


def _is_flat(obj) -> bool:
    return isinstance(obj, tuple) and all(
        isinstance(v, (float, int, str, bool)) or v is None for v in obj
    )


def dumps(obj, indent: int = 2, _level: int = 0) -> str:
    """
    Encode an object hierarchy as JSON string.

    Parts of the hierarchy wrapped in OneLine and tuples of scalars (such as
    the columns of an alignment) are written on a single line.

    >>> print(dumps({"score": 2, "alignment": [("a", "a"), ("b", None)], "shape": OneLine([3, 2])}))
    {
      "score": 2,
      "alignment": [
        ["a", "a"],
        ["b", null]
      ],
      "shape": [3, 2]
    }
    >>> print(dumps({"results": []}))
    {
      "results": []
    }
    """
    if isinstance(obj, (float, int, str, bool, OneLine)) or obj is None:
        if isinstance(obj, OneLine):
            obj = obj.value
        return json.dumps(obj)
    if _is_flat(obj):
        return json.dumps(list(obj))

    start = "\n" + (_level + 1) * indent * " "
    sep = "," + start
    end = "\n" + _level * indent * " "
    if isinstance(obj, (tuple, list)):
        if not obj:
            return "[]"
        items: List[str] = [dumps(elem, indent, _level + 1) for elem in obj]
        return "[" + start + sep.join(items) + end + "]"
    elif isinstance(obj, dict):
        if not obj:
            return "{}"
        items = [
            json.dumps(k) + ": " + dumps(v, indent, _level + 1) for k, v in obj.items()
        ]
        return "{" + start + sep.join(items) + end + "}"
    else:
        raise ValueError(f"cannot serialize type {obj.__class__.__name__}")
