"""
Dynamic-programming matrix shared by the alignment and edit distance code
"""
from typing import Any, List, Optional, Sequence, Tuple


class DPMatrix:
    """
    Representation of the dynamic-programming matrix.

    Rows correspond to the elements of the first sequence, columns to the
    elements of the second sequence. Entry (i, j) belongs to the prefixes of
    length i and j. The matrix is allocated once per call and must not be
    shared between calls.

    Entries equal to *blank* (for example the edit distance "infinity") are
    shown as empty cells when the matrix is printed.
    """

    def __init__(self, seq1: Sequence, seq2: Sequence, fill: Any = 0, blank: Any = None):
        m = len(seq1)
        n = len(seq2)
        self.rows: List[List[Any]] = [[fill] * (n + 1) for _ in range(m + 1)]
        self.seq1 = seq1
        self.seq2 = seq2
        self.blank = blank

    @property
    def shape(self) -> Tuple[int, int]:
        return len(self.rows), len(self.rows[0])

    def __getitem__(self, index: Tuple[int, int]):
        i, j = index
        return self.rows[i][j]

    def __setitem__(self, index: Tuple[int, int], value) -> None:
        i, j = index
        self.rows[i][j] = value

    def __repr__(self):
        m, n = self.shape
        return f"DPMatrix(shape=({m}, {n}))"

    def _format_entry(self, value) -> str:
        if value is None or (self.blank is not None and value == self.blank):
            return ""
        if isinstance(value, float):
            return f"{value:g}"
        return str(value)

    def __str__(self):
        """
        Return a representation of the matrix as a string.
        """
        cells = [[self._format_entry(v) for v in row] for row in self.rows]
        labels1 = [""] + [_label(e) for e in self.seq1]
        labels2 = [""] + [_label(e) for e in self.seq2]
        width = max(
            [2]
            + [len(c) for row in cells for c in row]
            + [len(label) for label in labels2]
        )
        label_width = max(len(label) for label in labels1)
        lines = [
            " " * label_width + " " + " ".join(label.rjust(width) for label in labels2)
        ]
        for label, row in zip(labels1, cells):
            lines.append(
                label.ljust(label_width) + " " + " ".join(c.rjust(width) for c in row)
            )
        return "\n".join(lines)


def _label(element: Optional[Any]) -> str:
    if isinstance(element, bytes):
        return element.decode("ascii", "replace")
    return str(element)
