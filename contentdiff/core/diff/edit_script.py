"""
Shortest edit script over line sequences.

Implements the Myers O((N+M)D) greedy algorithm with a stored trace for
backtracking. Lines are compared as exact, atomic tokens.

The raw per-line moves are coalesced into runs, and every change block
between two equal runs is emitted as one DELETED run followed by one
INSERTED run so callers can rely on that ordering.
"""

from __future__ import annotations

from typing import Sequence

from contentdiff.core.models import EditOp, EditOpType


Move = tuple[EditOpType, str]


def compute_edit_script(
    original: Sequence[str],
    comparison: Sequence[str]
) -> list[EditOp]:
    """
    Compute a minimal edit script transforming one line sequence into another.

    Args:
        original: Lines of the original input
        comparison: Lines of the comparison input

    Returns:
        Ordered runs of EQUAL, DELETED and INSERTED lines
    """
    prefix = _common_prefix_length(original, comparison)
    suffix = _common_suffix_length(original, comparison, prefix)

    moves: list[Move] = [(EditOpType.EQUAL, line) for line in original[:prefix]]
    moves.extend(_myers_moves(
        original[prefix:len(original) - suffix],
        comparison[prefix:len(comparison) - suffix],
    ))
    moves.extend(
        (EditOpType.EQUAL, line)
        for line in original[len(original) - suffix:]
    )

    return _coalesce(moves)


def _common_prefix_length(a: Sequence[str], b: Sequence[str]) -> int:
    limit = min(len(a), len(b))
    i = 0
    while i < limit and a[i] == b[i]:
        i += 1
    return i


def _common_suffix_length(a: Sequence[str], b: Sequence[str], prefix: int) -> int:
    limit = min(len(a), len(b)) - prefix
    i = 0
    while i < limit and a[len(a) - 1 - i] == b[len(b) - 1 - i]:
        i += 1
    return i


def _myers_moves(a: Sequence[str], b: Sequence[str]) -> list[Move]:
    """Per-line moves of a shortest edit script, in document order."""
    n, m = len(a), len(b)
    max_d = n + m
    if max_d == 0:
        return []

    offset = max_d + 1
    v = [0] * (2 * max_d + 3)
    trace: list[list[int]] = []

    for d in range(max_d + 1):
        trace.append(v[:])
        for k in range(-d, d + 1, 2):
            if k == -d or (k != d and v[offset + k - 1] < v[offset + k + 1]):
                x = v[offset + k + 1]
            else:
                x = v[offset + k - 1] + 1
            y = x - k

            while x < n and y < m and a[x] == b[y]:
                x += 1
                y += 1

            v[offset + k] = x
            if x >= n and y >= m:
                return _backtrack(trace, a, b, offset)

    # Unreachable: d == n + m always reaches the end point
    return _backtrack(trace, a, b, offset)


def _backtrack(
    trace: list[list[int]],
    a: Sequence[str],
    b: Sequence[str],
    offset: int
) -> list[Move]:
    """Walk the trace from the end point back to the origin."""
    x, y = len(a), len(b)
    moves: list[Move] = []

    for d in range(len(trace) - 1, -1, -1):
        v = trace[d]
        k = x - y

        if k == -d or (k != d and v[offset + k - 1] < v[offset + k + 1]):
            prev_k = k + 1
        else:
            prev_k = k - 1

        prev_x = v[offset + prev_k]
        prev_y = prev_x - prev_k

        while x > prev_x and y > prev_y:
            moves.append((EditOpType.EQUAL, a[x - 1]))
            x -= 1
            y -= 1

        if d > 0:
            if x == prev_x:
                moves.append((EditOpType.INSERTED, b[y - 1]))
            else:
                moves.append((EditOpType.DELETED, a[x - 1]))

        x, y = prev_x, prev_y

    moves.reverse()
    return moves


def _coalesce(moves: list[Move]) -> list[EditOp]:
    """Group per-line moves into runs, deletions before insertions."""
    script: list[EditOp] = []
    equal: list[str] = []
    deleted: list[str] = []
    inserted: list[str] = []

    def flush_changes() -> None:
        if deleted:
            script.append(EditOp(EditOpType.DELETED, tuple(deleted)))
            deleted.clear()
        if inserted:
            script.append(EditOp(EditOpType.INSERTED, tuple(inserted)))
            inserted.clear()

    for op, line in moves:
        if op == EditOpType.EQUAL:
            flush_changes()
            equal.append(line)
            continue

        if equal:
            script.append(EditOp(EditOpType.EQUAL, tuple(equal)))
            equal.clear()
        if op == EditOpType.DELETED:
            deleted.append(line)
        else:
            inserted.append(line)

    flush_changes()
    if equal:
        script.append(EditOp(EditOpType.EQUAL, tuple(equal)))

    return script
