"""
Bounded edit distance

Ukkonen's algorithm: only a diagonal band of the DP matrix is computed, and
the computation stops as soon as no entry within the bound is left in a
column. Optionally, swapping two adjacent elements counts as a single edit
(restricted Damerau-Levenshtein distance).
"""
__all__ = [
    "NOT_FOUND",
    "EditAligner",
    "edit_distance",
]

import logging
import operator
from typing import Any, Callable, List, Optional, Sequence, Tuple

from .matrix import DPMatrix

logger = logging.getLogger(__name__)

Pair = Tuple[Any, Any]
# (first row, costs of rows first, first + 1, ...)
Column = Tuple[int, List[int]]

# Returned when the edit distance exceeds the maximum distance
NOT_FOUND = None


class EditAligner:
    """
    Compute the edit distance between two sequences and, optionally, an
    edit mapping that realizes it.

    Insertions, deletions and substitutions cost 1. If transpositions is set,
    exchanging two adjacent elements also costs 1.

    If max_distance is given, distances above it are not computed: the
    result is then NOT_FOUND (None). This is much faster than computing
    the full matrix if max_distance is small.
    """

    def __init__(
        self,
        max_distance: Optional[int] = None,
        transpositions: bool = False,
        gap: Any = None,
        equal: Optional[Callable[[Any, Any], bool]] = None,
    ):
        if max_distance is not None and max_distance < 0:
            raise ValueError(f"max_distance must not be negative, got {max_distance}")
        if equal is None:
            equal = operator.eq
        if not callable(equal):
            raise TypeError(f"equal must be callable, not {equal.__class__.__name__}")
        self.max_distance = max_distance
        self.transpositions = transpositions
        self.gap = gap
        self.equal = equal
        self._debug = False
        self.dpmatrix: Optional[DPMatrix] = None

    def __repr__(self):
        return (
            f"EditAligner(max_distance={self.max_distance}, "
            f"transpositions={self.transpositions})"
        )

    def enable_debug(self) -> None:
        self._debug = True

    def distance(self, s: Sequence, t: Sequence) -> Optional[int]:
        """Return the edit distance between s and t or NOT_FOUND"""
        filled = self._fill(s, t, keep_all=False)
        if filled is None:
            return NOT_FOUND
        return filled[0]

    def align(self, s: Sequence, t: Sequence) -> Optional[Tuple[int, List[Pair]]]:
        """
        Return a tuple (distance, mapping) or NOT_FOUND.

        The mapping is a list of pairs (a, b). For a deletion, b is the gap
        object; for an insertion, a is the gap object. Matches, substitutions
        and both elements of a transposition are pairs of actual elements.
        """
        filled = self._fill(s, t, keep_all=True)
        if filled is None:
            return NOT_FOUND
        distance, columns = filled
        return distance, self._backtrace(s, t, columns)

    def _fill(
        self, s: Sequence, t: Sequence, keep_all: bool
    ) -> Optional[Tuple[int, List[Column]]]:
        """
        Compute the band of the DP matrix column by column (one column per
        element of t) and return a tuple (distance, columns) or None.

        Column j is stored as (first, costs), where costs[i - first] is the
        entry in row i. Entries outside that slice are never computed and
        count as infinite. Unless keep_all is set or debugging is enabled,
        only the last three columns are kept.
        """
        m = len(s)  # index i
        n = len(t)  # index j
        if self.max_distance is not None and abs(m - n) > self.max_distance:
            return None
        if self.max_distance is None:
            k = m + n
        else:
            k = min(self.max_distance, m + n)
        inf = m + n + 1
        equal = self.equal
        transpositions = self.transpositions
        keep_all = keep_all or self._debug

        # Entry (i, j) can only be on a path with costs at most k if its
        # diagonal j - i lies within [-p - extra_below, p + extra_above]
        p = -(-(k - abs(m - n)) // 2)
        extra_above = max(0, n - m)
        extra_below = max(0, m - n)

        last = min(m, p + extra_below, k)
        columns: List[Column] = [(0, list(range(last + 1)))]
        # First and last row in the current column with an entry <= k
        p1 = 0
        p2 = last

        for j in range(1, n + 1):
            first = max(p1, j - extra_above - p, 0)
            last = min(m, j + extra_below + p)
            prev = columns[-1]
            prev2 = columns[-2] if transpositions and j > 1 else None
            tj = t[j - 1]
            costs: List[int] = []
            new_p1 = -1
            new_p2 = -1
            for i in range(first, last + 1):
                if i == 0:
                    d = j
                else:
                    si = s[i - 1]
                    d = min(
                        (costs[-1] if i > first else inf) + 1,
                        _entry(prev, i, inf) + 1,
                        _entry(prev, i - 1, inf) + (0 if equal(si, tj) else 1),
                        inf,
                    )
                    if (
                        prev2 is not None
                        and i > 1
                        and equal(s[i - 2], tj)
                        and equal(si, t[j - 2])
                    ):
                        d = min(d, _entry(prev2, i - 2, inf) + 1)
                costs.append(d)
                if d <= k:
                    if new_p1 < 0:
                        new_p1 = i
                    new_p2 = i
                elif i > p2 + 1:
                    # All following entries in this column are > k
                    break
            columns.append((first, costs))
            if new_p1 < 0:
                logger.debug("Edit distance exceeds %d (column %d), giving up", k, j)
                self._log_matrix(s, t, columns, inf)
                return None
            if not keep_all and len(columns) > 3:
                del columns[0]
            p1 = new_p1
            p2 = new_p2

        self._log_matrix(s, t, columns, inf)
        distance = _entry(columns[-1], m, inf)
        if distance > k:
            return None
        return distance, columns

    def _log_matrix(self, s: Sequence, t: Sequence, columns: List[Column], inf: int) -> None:
        if not self._debug:
            return
        matrix = DPMatrix(s, t, fill=inf, blank=inf)
        for j, (first, costs) in enumerate(columns):
            for offset, cost in enumerate(costs):
                matrix[first + offset, j] = cost
        self.dpmatrix = matrix
        logger.debug("Edit distance DP matrix:\n%s", matrix)

    def _backtrace(self, s: Sequence, t: Sequence, columns: List[Column]) -> List[Pair]:
        gap = self.gap
        equal = self.equal
        i = len(s)
        j = len(t)
        inf = i + j + 1

        def cost(i, j):
            return _entry(columns[j], i, inf)

        pairs: List[Pair] = []
        # Ties are broken in this order: deletion, insertion,
        # match/substitution, transposition
        while i > 0 or j > 0:
            d = cost(i, j)
            if i > 0 and d == cost(i - 1, j) + 1:
                pairs.append((s[i - 1], gap))
                i -= 1
            elif j > 0 and d == cost(i, j - 1) + 1:
                pairs.append((gap, t[j - 1]))
                j -= 1
            elif (
                i > 0
                and j > 0
                and d == cost(i - 1, j - 1) + (0 if equal(s[i - 1], t[j - 1]) else 1)
            ):
                pairs.append((s[i - 1], t[j - 1]))
                i -= 1
                j -= 1
            else:
                assert self.transpositions and i > 1 and j > 1
                assert d == cost(i - 2, j - 2) + 1
                pairs.append((s[i - 1], t[j - 1]))
                pairs.append((s[i - 2], t[j - 2]))
                i -= 2
                j -= 2
        pairs.reverse()
        return pairs


def _entry(column: Column, i: int, inf: int) -> int:
    first, costs = column
    if first <= i < first + len(costs):
        return costs[i - first]
    return inf



def edit_distance(
    s: Sequence,
    t: Sequence,
    max_distance: Optional[int] = None,
    transpositions: bool = False,
    score_only: bool = True,
    gap: Any = None,
    equal: Optional[Callable[[Any, Any], bool]] = None,
):
    """
    Return the edit distance between s and t.

    The edit distance is the sum of the numbers of insertions, deletions,
    and mismatches (and, if enabled, adjacent transpositions) that is
    minimally necessary to transform one sequence into the other.

    If score_only is False, return a tuple (distance, mapping) instead
    (see EditAligner.align). If the distance exceeds max_distance,
    return NOT_FOUND.

    >>> edit_distance("ab", "ba")
    2
    >>> edit_distance("ab", "ba", transpositions=True)
    1
    >>> edit_distance("kitten", "sitting", max_distance=2) is NOT_FOUND
    True
    """
    aligner = EditAligner(max_distance, transpositions, gap, equal)
    if score_only:
        return aligner.distance(s, t)
    return aligner.align(s, t)
