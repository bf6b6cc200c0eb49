"""
Global, prefix, suffix and infix alignment of two sequences

The alignment is computed with a Needleman-Wunsch style dynamic program over
a full (len1 + 1) x (len2 + 1) score matrix. Which ends of the second
sequence may be skipped at no cost is determined by the alignment mode.
"""
__all__ = [
    "Mode",
    "EndSkip",
    "GapPolicy",
    "InvalidMode",
    "Aligner",
    "align",
    "default_similarity",
]

import logging
from enum import Enum, IntFlag
from typing import Any, Callable, List, NamedTuple, Optional, Sequence, Tuple

from .matrix import DPMatrix

logger = logging.getLogger(__name__)

Pair = Tuple[Any, Any]


class InvalidMode(ValueError):
    pass


class EndSkip(IntFlag):
    """
    Flags that indicate which ends of the second sequence may be skipped at
    no cost. Setting both flags results in an infix alignment of the first
    sequence within the second.
    """

    SEQ2_START = 1  # a prefix of seq2 may be skipped at no cost
    SEQ2_STOP = 2  # a suffix of seq2 may be skipped at no cost


class Mode(Enum):
    GLOBAL = "global"
    PREFIX = "prefix"
    SUFFIX = "suffix"
    INFIX = "infix"

    @classmethod
    def from_value(cls, value: Any) -> "Mode":
        """
        Return the Mode for a Mode instance or its (case-insensitive) name.

        >>> Mode.from_value("Infix")
        <Mode.INFIX: 'infix'>
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                pass
        raise InvalidMode(
            f"Invalid alignment mode {value!r}. Choose one of: "
            + ", ".join(m.value for m in cls)
        )

    @property
    def end_skip(self) -> EndSkip:
        return _END_SKIP[self]


_END_SKIP = {
    Mode.GLOBAL: EndSkip(0),
    Mode.PREFIX: EndSkip.SEQ2_STOP,
    Mode.SUFFIX: EndSkip.SEQ2_START,
    Mode.INFIX: EndSkip.SEQ2_START | EndSkip.SEQ2_STOP,
}


class GapPolicy(NamedTuple):
    """
    Costs of horizontal steps (gaps in the first sequence), computed once
    per alignment from the mode and the gap penalty.

    leading: cost of a step within row 0
    inner: cost of a step in all other rows (also the cost of vertical steps)
    trailing: cost of a step within the last row
    """

    leading: float
    inner: float
    trailing: float

    @classmethod
    def from_mode(cls, mode: Mode, gap_penalty: float) -> "GapPolicy":
        flags = mode.end_skip
        return cls(
            leading=0 if flags & EndSkip.SEQ2_START else gap_penalty,
            inner=gap_penalty,
            trailing=0 if flags & EndSkip.SEQ2_STOP else gap_penalty,
        )

    def horizontal(self, i: int, last_row: int) -> float:
        """Return the cost of a horizontal step within row i"""
        if i == 0:
            if last_row == 0 and self.trailing == 0:
                # Row 0 is also the last row. The skippable end of seq2 can
                # only be skipped within it, so its cells are not j * gap_penalty.
                return 0
            return self.leading
        if i == last_row:
            return self.trailing
        return self.inner


def default_similarity(a: Any, b: Any) -> int:
    return 1 if a == b else -1


class Aligner:
    """
    Align two sequences using a linear gap penalty and an arbitrary
    similarity function. Higher scores are better.

    Sequences can be anything that supports len() and indexing: strings,
    lists, tuples, bytes etc. Elements are compared only through the
    similarity function.

    Gaps are represented in the alignment by the *gap* object (default: None).
    """

    def __init__(
        self,
        similarity: Optional[Callable[[Any, Any], float]] = None,
        gap_penalty: float = -1,
        mode: Any = Mode.GLOBAL,
        gap: Any = None,
    ):
        if similarity is None:
            similarity = default_similarity
        if not callable(similarity):
            raise TypeError(
                f"similarity must be callable, not {similarity.__class__.__name__}"
            )
        self.similarity = similarity
        self.gap_penalty = gap_penalty
        self.mode = Mode.from_value(mode)
        self.gap = gap
        self._policy = GapPolicy.from_mode(self.mode, gap_penalty)
        self._debug = False
        self.dpmatrix: Optional[DPMatrix] = None

    def __repr__(self):
        return (
            f"Aligner(mode={self.mode.value!r}, gap_penalty={self.gap_penalty!r}, "
            f"similarity={getattr(self.similarity, '__name__', self.similarity)})"
        )

    def enable_debug(self) -> None:
        """
        Store the DP matrix of the most recent call in the dpmatrix attribute
        and log it at DEBUG level
        """
        self._debug = True

    def score(self, seq1: Sequence, seq2: Sequence) -> float:
        """Return the score of an optimal alignment of seq1 and seq2"""
        matrix = self._fill(seq1, seq2)
        return matrix[len(seq1), len(seq2)]

    def align(self, seq1: Sequence, seq2: Sequence) -> Tuple[float, List[Pair]]:
        """
        Return a tuple (score, alignment), where alignment is a list of pairs
        (a, b). a is an element of seq1 or the gap object, b is an element of
        seq2 or the gap object. They are never both the gap object.
        """
        matrix = self._fill(seq1, seq2)
        return matrix[len(seq1), len(seq2)], self._backtrace(matrix)

    def _fill(self, seq1: Sequence, seq2: Sequence) -> DPMatrix:
        m = len(seq1)
        n = len(seq2)
        gap_penalty = self.gap_penalty
        similarity = self.similarity
        policy = self._policy

        matrix = DPMatrix(seq1, seq2)
        rows = matrix.rows
        first = rows[0]
        step = policy.horizontal(0, m)
        for j in range(1, n + 1):
            first[j] = first[j - 1] + step

        for i in range(1, m + 1):
            prev = rows[i - 1]
            row = rows[i]
            row[0] = prev[0] + gap_penalty
            step = policy.horizontal(i, m)
            a = seq1[i - 1]
            for j in range(1, n + 1):
                row[j] = max(
                    prev[j] + gap_penalty,
                    row[j - 1] + step,
                    prev[j - 1] + similarity(a, seq2[j - 1]),
                )

        if self._debug:
            self.dpmatrix = matrix
            logger.debug("Alignment DP matrix (mode %s):\n%s", self.mode.value, matrix)
        return matrix

    def _backtrace(self, matrix: DPMatrix) -> List[Pair]:
        seq1 = matrix.seq1
        seq2 = matrix.seq2
        rows = matrix.rows
        gap = self.gap
        gap_penalty = self.gap_penalty
        policy = self._policy
        m = i = len(seq1)
        j = len(seq2)
        pairs: List[Pair] = []
        # Ties are broken in this order: vertical, horizontal, diagonal
        while i > 0 or j > 0:
            score = rows[i][j]
            if i > 0 and score == rows[i - 1][j] + gap_penalty:
                pairs.append((seq1[i - 1], gap))
                i -= 1
            elif j > 0 and score == rows[i][j - 1] + policy.horizontal(i, m):
                pairs.append((gap, seq2[j - 1]))
                j -= 1
            else:
                assert i > 0 and j > 0
                pairs.append((seq1[i - 1], seq2[j - 1]))
                i -= 1
                j -= 1
        pairs.reverse()
        return pairs


def align(
    seq1: Sequence,
    seq2: Sequence,
    similarity: Optional[Callable[[Any, Any], float]] = None,
    gap_penalty: float = -1,
    mode: Any = Mode.GLOBAL,
    score_only: bool = False,
    gap: Any = None,
):
    """
    Align seq1 and seq2.

    Return the score if score_only is set, otherwise a tuple (score, alignment).
    See Aligner for a description of the parameters.

    >>> align("abc", "xabcx", mode="infix")
    (3, [(None, 'x'), ('a', 'a'), ('b', 'b'), ('c', 'c'), (None, 'x')])
    """
    aligner = Aligner(similarity, gap_penalty, mode, gap)
    if score_only:
        return aligner.score(seq1, seq2)
    return aligner.align(seq1, seq2)
