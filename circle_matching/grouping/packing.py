# circle_matching/grouping/packing.py
from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

import pulp

from ..models import GroupProposal, MatchingPreferences, Participant
from .combinations import candidate_sizes, generate_combinations, has_repeated_user
from .scoring import score_group


def _build_candidates(
    participants: Sequence[Participant],
    preferences: MatchingPreferences,
) -> List[GroupProposal]:
    """
    Score every subset of size 3..max_group_size once; keep positive scores.
    Subsets holding two records of the same user_id are never candidates.
    """
    candidates: List[GroupProposal] = []
    for size in candidate_sizes(len(participants), preferences.max_group_size):
        for combination in generate_combinations(participants, size):
            if has_repeated_user(combination):
                continue
            proposal = score_group(combination, preferences)
            if proposal.score > 0:
                candidates.append(proposal)
    return candidates


def build_packing_model(
    candidates: List[GroupProposal],
) -> Tuple[pulp.LpProblem, Dict[int, pulp.LpVariable]]:
    """
    Set-packing MILP over pre-scored candidate groups.

    Variables:
        y[g] = 1 if candidate group g is selected.

    Objective:
        maximize sum_g score[g] * y[g]

    Constraints:
      1) Each participant (by user id) is in at most one selected group:
           ∀u: sum_{g ∋ u} y[g] <= 1
    """
    prob = pulp.LpProblem("Circle_Group_Packing", pulp.LpMaximize)

    y: Dict[int, pulp.LpVariable] = {
        g: pulp.LpVariable(f"y_{g}", lowBound=0, upBound=1, cat="Binary")
        for g in range(len(candidates))
    }

    # ---------- Objective ----------
    prob += pulp.lpSum(
        candidates[g].score * y[g] for g in y
    ), "Maximize_Total_Score"

    # ---------- Constraints ----------
    groups_by_user: Dict[str, List[int]] = {}
    for g, proposal in enumerate(candidates):
        for user_id in proposal.member_ids:
            groups_by_user.setdefault(user_id, []).append(g)

    for idx, (user_id, group_ids) in enumerate(sorted(groups_by_user.items())):
        prob += (
            pulp.lpSum(y[g] for g in group_ids) <= 1,
            f"At_most_one_group_u{idx}",
        )

    return prob, y


def solve_group_packing(
    participants: Sequence[Participant],
    preferences: MatchingPreferences,
) -> Tuple[str, List[GroupProposal]]:
    """
    Choose disjoint groups with the largest total score.

    Returns (status, proposals); proposals are empty unless the solver
    status is "Optimal" or "Feasible".
    """
    candidates = _build_candidates(participants, preferences)
    if not candidates:
        return "Optimal", []

    prob, y = build_packing_model(candidates)

    solver = pulp.PULP_CBC_CMD(msg=False)
    prob.solve(solver)

    status = pulp.LpStatus[prob.status]

    chosen: List[GroupProposal] = []
    if status in ("Optimal", "Feasible"):
        for g, var in y.items():
            val = var.varValue
            if val is not None and val > 0.5:
                chosen.append(candidates[g])

    chosen.sort(key=lambda p: p.score, reverse=True)
    return status, chosen
