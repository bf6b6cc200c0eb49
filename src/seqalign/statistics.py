import operator
from typing import Any, Callable, Dict, Iterable, Optional, Tuple


class AlignmentStatistics:
    """
    Counts of the column types in an alignment or edit mapping.

    A column (a, b) is an insertion if a is the gap object, a deletion if b
    is the gap object, and a match or mismatch otherwise. Gap objects are
    recognized by identity.
    """

    def __init__(self) -> None:
        self.matches = 0
        self.mismatches = 0
        self.insertions = 0
        self.deletions = 0

    @classmethod
    def from_alignment(
        cls,
        alignment: Iterable[Tuple[Any, Any]],
        gap: Any = None,
        equal: Optional[Callable[[Any, Any], bool]] = None,
    ) -> "AlignmentStatistics":
        if equal is None:
            equal = operator.eq
        stats = cls()
        for a, b in alignment:
            if a is gap:
                stats.insertions += 1
            elif b is gap:
                stats.deletions += 1
            elif equal(a, b):
                stats.matches += 1
            else:
                stats.mismatches += 1
        return stats

    def __repr__(self):
        return (
            f"AlignmentStatistics(matches={self.matches}, mismatches={self.mismatches}, "
            f"insertions={self.insertions}, deletions={self.deletions})"
        )

    def __iadd__(self, other: Any):
        if not isinstance(other, self.__class__):
            raise ValueError("Cannot add")
        self.matches += other.matches
        self.mismatches += other.mismatches
        self.insertions += other.insertions
        self.deletions += other.deletions
        return self

    @property
    def length(self) -> int:
        """Number of alignment columns"""
        return self.matches + self.mismatches + self.insertions + self.deletions

    @property
    def errors(self) -> int:
        return self.mismatches + self.insertions + self.deletions

    @property
    def identity(self) -> float:
        """Fraction of columns that are matches (0.0 for an empty alignment)"""
        if not self.length:
            return 0.0
        return self.matches / self.length

    def as_json(self) -> Dict[str, Any]:
        return {
            "matches": self.matches,
            "mismatches": self.mismatches,
            "insertions": self.insertions,
            "deletions": self.deletions,
            "identity": round(self.identity, 4),
        }
