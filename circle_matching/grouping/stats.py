# circle_matching/grouping/stats.py
from __future__ import annotations

from typing import List, Sequence

import pandas as pd

from ..models import GroupProposal, GroupStats

PROPOSAL_COLUMNS = [
    "size",
    "members",
    "score",
    "international_ratio",
    "gender_ratio",
    "language_compatibility",
    "schedule_compatibility",
]


def get_group_stats(groups: Sequence[GroupProposal]) -> GroupStats:
    """
    Aggregate metrics over a list of proposals. An empty list gives
    all-zero stats.
    """
    if not groups:
        return GroupStats()

    n = len(groups)
    total_participants = sum(g.size for g in groups)

    return GroupStats(
        total_participants=total_participants,
        total_groups=n,
        average_group_size=total_participants / n,
        average_score=sum(g.score for g in groups) / n,
        average_international_ratio=sum(g.international_ratio for g in groups) / n,
        average_gender_ratio=sum(g.gender_ratio for g in groups) / n,
    )


def proposals_to_frame(groups: Sequence[GroupProposal]) -> pd.DataFrame:
    """
    One row per proposal, indexed "Group 1".."Group n" in the given order.
    """
    rows: List[list] = [
        [
            g.size,
            ", ".join(g.member_ids),
            g.score,
            g.international_ratio,
            g.gender_ratio,
            g.language_compatibility,
            g.schedule_compatibility,
        ]
        for g in groups
    ]
    return pd.DataFrame(
        rows,
        index=[f"Group {i}" for i in range(1, len(groups) + 1)],
        columns=PROPOSAL_COLUMNS,
    )


def format_group_stats(stats: GroupStats) -> str:
    lines = [
        f"- Participants grouped : {stats.total_participants}",
        f"- Groups               : {stats.total_groups}",
        f"- Average group size   : {stats.average_group_size:.2f}",
        f"- Average score        : {stats.average_score:.3f}",
        f"- Avg intl. ratio      : {stats.average_international_ratio:.2f}",
        f"- Avg gender ratio     : {stats.average_gender_ratio:.2f}",
    ]
    return "\n".join(lines)
