import os.path
from itertools import product

from seqalign.align import Mode


def datapath(path):
    return os.path.join(os.path.dirname(__file__), "data", path)


def all_strings(alphabet, max_length):
    """Yield all strings over the alphabet up to (and including) max_length"""
    for length in range(max_length + 1):
        for chars in product(alphabet, repeat=length):
            yield "".join(chars)


def naive_edit_distance(s, t, transpositions=False):
    """
    Full-matrix (restricted Damerau-) Levenshtein distance, used as a reference
    """
    m = len(s)
    n = len(t)
    d = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(m + 1):
        d[i][0] = i
    for j in range(n + 1):
        d[0][j] = j
    for i in range(1, m + 1):
        for j in range(1, n + 1):
            d[i][j] = min(
                d[i - 1][j] + 1,
                d[i][j - 1] + 1,
                d[i - 1][j - 1] + (s[i - 1] != t[j - 1]),
            )
            if (
                transpositions
                and i > 1
                and j > 1
                and s[i - 1] == t[j - 2]
                and s[i - 2] == t[j - 1]
            ):
                d[i][j] = min(d[i][j], d[i - 2][j - 2] + 1)
    return d[m][n]


def naive_global_score(s, t, similarity, gap_penalty):
    """Needleman-Wunsch score without any free end gaps"""
    previous = [j * gap_penalty for j in range(len(t) + 1)]
    for i in range(1, len(s) + 1):
        current = [i * gap_penalty]
        for j in range(1, len(t) + 1):
            current.append(
                max(
                    previous[j] + gap_penalty,
                    current[j - 1] + gap_penalty,
                    previous[j - 1] + similarity(s[i - 1], t[j - 1]),
                )
            )
        previous = current
    return previous[-1]


def naive_mode_score(s, t, similarity, gap_penalty, mode):
    """
    Score of the best global alignment of s against a substring of t that is
    allowed by the mode
    """
    mode = Mode.from_value(mode)
    n = len(t)
    starts = range(n + 1) if mode in (Mode.SUFFIX, Mode.INFIX) else [0]
    stops = range(n + 1) if mode in (Mode.PREFIX, Mode.INFIX) else [n]
    return max(
        naive_global_score(s, t[start:stop], similarity, gap_penalty)
        for start in starts
        for stop in stops
        if start <= stop
    )


def mapping_cost(mapping, transpositions=False, gap=None):
    """
    Cost of an edit mapping. If transpositions is set, adjacent swapped pairs
    count as a single edit.
    """
    cost = 0
    i = 0
    while i < len(mapping):
        a, b = mapping[i]
        if a is gap or b is gap:
            cost += 1
        elif a != b:
            if transpositions and i + 1 < len(mapping):
                c, d = mapping[i + 1]
                if c is not gap and d is not gap and a == d and b == c:
                    cost += 1
                    i += 2
                    continue
            cost += 1
        i += 1
    return cost


def ungapped(alignment, gap=None):
    """Return the two sequences contained in an alignment as lists"""
    first = [a for a, _ in alignment if a is not gap]
    second = [b for _, b in alignment if b is not gap]
    return first, second
