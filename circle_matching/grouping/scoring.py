# circle_matching/grouping/scoring.py
from __future__ import annotations

import re
from collections import Counter
from typing import Dict, List, Optional, Sequence

from ..models import Availability, GroupProposal, MatchingPreferences, Participant
from ..config import (
    WEIGHT_INTERNATIONAL_RATIO,
    WEIGHT_GENDER_RATIO,
    WEIGHT_LANGUAGE,
    WEIGHT_SCHEDULE,
    SHARED_LANGUAGE_FACTOR,
    PRIMARY_LANGUAGE_BONUS,
    LANGUAGE_DIVERSITY_FACTOR,
    NEUTRAL_SCORE,
    HOURS_PER_DAY,
    DAYS_PER_WEEK,
)

_HOUR_RE = re.compile(r"\s*(\d+)")


def parse_hour(value: str) -> Optional[int]:
    """
    Integer hour of an "HH:MM" string (minutes are truncated).

    Malformed strings are not rejected: leading digits are used when present,
    otherwise None, which makes the interval cover no bucket.
    """
    match = _HOUR_RE.match(value or "")
    if match is None:
        return None
    return int(match.group(1))


def ratio_score(actual: float, target: float) -> float:
    # unclamped: below 0 when actual and target are more than 1 apart
    return 1 - abs(actual - target)


def international_ratio(members: Sequence[Participant]) -> float:
    count = sum(1 for m in members if m.profile.student_type == "international")
    return count / len(members)


def gender_ratio(members: Sequence[Participant]) -> float:
    """Share of members reporting gender "male"."""
    count = sum(1 for m in members if m.profile.gender == "male")
    return count / len(members)


def language_compatibility(
    members: Sequence[Participant],
    primary_language_id: Optional[str] = None,
) -> float:
    """
    Reward languages shared by two or more members, with an extra bonus for
    the primary language, plus a small diversity bonus. Capped at 1.0.
    """
    if not any(m.profile.languages for m in members):
        return NEUTRAL_SCORE

    speakers: Counter = Counter()
    for m in members:
        for skill in m.profile.languages:
            speakers[skill.language_id] += 1

    score = 0.0
    for language_id, count in speakers.items():
        if count >= 2:
            score += (count / len(members)) * SHARED_LANGUAGE_FACTOR
            if primary_language_id and language_id == primary_language_id:
                score += PRIMARY_LANGUAGE_BONUS

    diversity = min(len(speakers) / len(members), 1)
    score += diversity * LANGUAGE_DIVERSITY_FACTOR

    return min(score, 1.0)


def _day_buckets(day_availabilities: List[List[Availability]]) -> List[int]:
    """
    Per-hour coverage counts for one day: each member interval adds 1 to the
    hours in [start_hour, end_hour).
    """
    buckets = [0] * HOURS_PER_DAY
    for intervals in day_availabilities:
        for avail in intervals:
            start = parse_hour(avail.start_time)
            end = parse_hour(avail.end_time)
            if start is None or end is None:
                continue
            for hour in range(max(start, 0), min(end, HOURS_PER_DAY)):
                buckets[hour] += 1
    return buckets


def common_time_slots(day_availabilities: List[List[Availability]]) -> Dict[str, int]:
    """
    Returns {'common': hours covered at least twice,
             'total': hours covered at least once (minimum 1)}.
    """
    buckets = _day_buckets(day_availabilities)
    common = sum(1 for c in buckets if c >= 2)
    total = sum(1 for c in buckets if c > 0)
    return {"common": common, "total": max(total, 1)}


def schedule_compatibility(members: Sequence[Participant]) -> float:
    member_availabilities = [
        m.profile.availability for m in members if m.profile.availability
    ]
    if len(member_availabilities) < 2:
        return NEUTRAL_SCORE

    common_slots = 0
    total_slots = 0

    for day in range(DAYS_PER_WEEK):
        day_availabilities = [
            [a for a in availability if a.day_of_week == day]
            for availability in member_availabilities
        ]
        day_availabilities = [d for d in day_availabilities if d]

        if len(day_availabilities) < 2:
            continue

        slots = common_time_slots(day_availabilities)
        common_slots += slots["common"]
        total_slots += slots["total"]

    return common_slots / total_slots if total_slots > 0 else NEUTRAL_SCORE


def score_group(
    members: Sequence[Participant],
    preferences: MatchingPreferences,
) -> GroupProposal:
    """
    Build a GroupProposal for `members` with all derived metrics.

    Composite score:
        0.3 * international ratio score
      + 0.2 * gender ratio score
      + 0.3 * language compatibility   (if prioritize_language_skills)
      + 0.2 * schedule compatibility   (if prioritize_schedule_compatibility)

    Disabled terms are dropped, not redistributed.
    """
    intl = international_ratio(members)
    gender = gender_ratio(members)

    language = language_compatibility(members, preferences.primary_language_id)
    schedule = schedule_compatibility(members)

    total = 0.0
    total += ratio_score(intl, preferences.target_international_ratio) * WEIGHT_INTERNATIONAL_RATIO
    total += ratio_score(gender, preferences.target_gender_ratio) * WEIGHT_GENDER_RATIO

    if preferences.prioritize_language_skills:
        total += language * WEIGHT_LANGUAGE

    if preferences.prioritize_schedule_compatibility:
        total += schedule * WEIGHT_SCHEDULE

    return GroupProposal(
        members=list(members),
        score=total,
        international_ratio=intl,
        gender_ratio=gender,
        language_compatibility=language,
        schedule_compatibility=schedule,
    )
