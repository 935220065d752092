# circle_matching/grouping/engine.py
from __future__ import annotations

import logging
import random
from typing import List, Optional, Sequence, Set

from ..models import GroupProposal, MatchingPreferences, Participant
from ..config import MIN_GROUP_SIZE
from .combinations import (
    candidate_sizes,
    count_candidate_combinations,
    generate_combinations,
    has_repeated_user,
)
from .packing import solve_group_packing
from .scoring import score_group

LOG = logging.getLogger(__name__)

STRATEGIES = ("greedy", "packing")


class SearchBudgetExceeded(RuntimeError):
    """Raised when the exhaustive search would score more subsets than allowed."""

    def __init__(self, num_participants: int, combinations: int, budget: int):
        super().__init__(
            f"{num_participants} participants need {combinations} candidate "
            f"groups in the first round, above the budget of {budget}. "
            "Split the event or raise max_combinations."
        )
        self.num_participants = num_participants
        self.combinations = combinations
        self.budget = budget


def check_search_budget(
    num_participants: int,
    max_group_size: int,
    max_combinations: Optional[int],
) -> int:
    """
    Return the first-round combination count, raising SearchBudgetExceeded
    if it is above `max_combinations` (None = unbounded).
    """
    combinations = count_candidate_combinations(num_participants, max_group_size)
    if max_combinations is not None and combinations > max_combinations:
        raise SearchBudgetExceeded(num_participants, combinations, max_combinations)
    return combinations


def find_best_group_combination(
    participants: Sequence[Participant],
    preferences: MatchingPreferences,
) -> Optional[GroupProposal]:
    """
    Exhaustively score every subset of size 3..max_group_size and return the
    best one. The first subset to strictly beat the running best wins, so
    ties go to the earliest enumerated subset (smaller sizes first).
    Subsets holding two records of the same user_id are skipped.
    """
    best: Optional[GroupProposal] = None
    best_score = 0.0

    for size in candidate_sizes(len(participants), preferences.max_group_size):
        for combination in generate_combinations(participants, size):
            if has_repeated_user(combination):
                continue
            proposal = score_group(combination, preferences)
            if proposal.score > best_score:
                best_score = proposal.score
                best = proposal

    return best


def _greedy_groups(
    shuffled: List[Participant],
    preferences: MatchingPreferences,
) -> List[GroupProposal]:
    groups: List[GroupProposal] = []
    used: Set[str] = set()
    round_idx = 0

    while True:
        available = [p for p in shuffled if p.user_id not in used]
        if len(available) < MIN_GROUP_SIZE:
            break
        round_idx += 1

        best = find_best_group_combination(available, preferences)
        if best is None:
            LOG.debug("round %d: no group scored above 0, stopping", round_idx)
            break

        groups.append(best)
        used.update(best.member_ids)

        LOG.debug(
            "round %d: picked %s (score=%.3f) from %d available",
            round_idx, best.member_ids, best.score, len(available),
        )

    return groups


def create_optimal_groups(
    participants: Sequence[Participant],
    preferences: Optional[MatchingPreferences] = None,
    rng: Optional[random.Random] = None,
    max_combinations: Optional[int] = None,
    strategy: str = "greedy",
) -> List[GroupProposal]:
    """
    Partition event participants into groups of 3..max_group_size.

    Strategy "greedy" (default):
      - shuffle the participants once (rng; entropy-seeded if None)
      - while >= 3 participants are unused, pick the best-scoring subset among
        all subsets of the unused participants and mark its members used
      - participants left over (< 3) stay unmatched

    Strategy "packing":
      - score every candidate subset once and let the MILP in
        `packing.solve_group_packing` pick a disjoint set with maximum total score

    Returns proposals sorted by descending score; [] for fewer than 3 participants.
    Raises SearchBudgetExceeded only when `max_combinations` is given and the
    first round would exceed it.
    """
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown strategy: {strategy}")

    preferences = preferences or MatchingPreferences()

    if len(participants) < MIN_GROUP_SIZE:
        return []

    check_search_budget(len(participants), preferences.max_group_size, max_combinations)

    rng = rng or random.Random()
    shuffled = list(participants)
    rng.shuffle(shuffled)

    if strategy == "packing":
        status, groups = solve_group_packing(shuffled, preferences)
        if status not in ("Optimal", "Feasible"):
            LOG.warning("packing solver status %s, no groups produced", status)
    else:
        groups = _greedy_groups(shuffled, preferences)

    groups.sort(key=lambda g: g.score, reverse=True)

    LOG.info(
        "%s matching: %d groups from %d participants (%d unmatched)",
        strategy,
        len(groups),
        len(participants),
        len(participants) - sum(g.size for g in groups),
    )
    return groups
