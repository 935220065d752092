# circle_matching/grouping/combinations.py
from __future__ import annotations

from math import comb
from typing import Iterator, List, Sequence, TypeVar

from ..config import MIN_GROUP_SIZE
from ..models import Participant

T = TypeVar("T")


def generate_combinations(items: Sequence[T], size: int) -> Iterator[List[T]]:
    """
    Yield every `size`-element subset of `items` (order irrelevant) via
    recursive backtracking.

    Subsets come out in lexicographic index order:
        [a, b, c, d], size=2 -> ab, ac, ad, bc, bd, cd
    """
    n = len(items)
    if size <= 0 or size > n:
        return

    current: List[T] = []

    def backtrack(start: int) -> Iterator[List[T]]:
        if len(current) == size:
            yield list(current)
            return

        # stop early once too few items remain to fill the subset
        for i in range(start, n - (size - len(current)) + 1):
            current.append(items[i])
            yield from backtrack(i + 1)
            current.pop()

    yield from backtrack(0)


def candidate_sizes(num_available: int, max_group_size: int) -> range:
    """Group sizes tried in one extraction round: 3..min(max, available)."""
    return range(MIN_GROUP_SIZE, min(max_group_size, num_available) + 1)


def count_candidate_combinations(num_available: int, max_group_size: int) -> int:
    """
    Number of subsets scored in a single extraction round:
        sum_{s=3}^{min(max, n)} C(n, s)
    """
    return sum(
        comb(num_available, s)
        for s in candidate_sizes(num_available, max_group_size)
    )


def has_repeated_user(members: Sequence[Participant]) -> bool:
    """True if two records in `members` share a user_id."""
    user_ids = [p.user_id for p in members]
    return len(set(user_ids)) != len(user_ids)
