# circle_matching/grouping/diagnostics.py
from __future__ import annotations

import re
from collections import Counter
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..models import MatchingPreferences, Participant
from ..config import MIN_GROUP_SIZE
from .combinations import candidate_sizes, count_candidate_combinations

_TIME_RE = re.compile(r"^(?:[01]\d|2[0-3]):[0-5]\d$|^24:00$")


def _malformed_times(participants: Sequence[Participant]) -> List[Tuple[str, int, str]]:
    """(user_id, day_of_week, bad value) for every availability string not in HH:MM."""
    bad: List[Tuple[str, int, str]] = []
    for p in participants:
        for a in p.profile.availability:
            for value in (a.start_time, a.end_time):
                if not _TIME_RE.match(value or ""):
                    bad.append((p.user_id, a.day_of_week, value))
    return bad


def min_unmatched(num_participants: int, max_group_size: int) -> int:
    """
    Fewest participants that must stay unmatched when groups may have any
    size in 3..max_group_size.
    """
    sizes = list(candidate_sizes(num_participants, max_group_size))

    # reachable[k]: k participants can be split exactly into allowed sizes
    reachable = [False] * (num_participants + 1)
    reachable[0] = True
    for k in range(1, num_participants + 1):
        reachable[k] = any(s <= k and reachable[k - s] for s in sizes)

    best = max(k for k in range(num_participants + 1) if reachable[k])
    return num_participants - best


def analyze_matching_feasibility(
    participants: Sequence[Participant],
    preferences: Optional[MatchingPreferences] = None,
    max_combinations: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Check whether an event's participants can be matched *before* running
    the exhaustive search.

    Returns a dict with:
      - 'ok': bool
      - 'messages': list[str] (human-readable diagnostics)
      - 'suggestion': str (summary)

      - 'num_participants': int
      - 'max_groups': int                 (upper bound: n // 3)
      - 'expected_unmatched': int         (fewest leftovers reachable with
                                           group sizes 3..max_group_size)
      - 'combinations_first_round': int   (subsets scored in round 1)
      - 'duplicate_user_ids': List[str]
      - 'malformed_times': List[Tuple[str, int, str]]
      - 'international_count': int
      - 'male_count': int
    """
    preferences = preferences or MatchingPreferences()
    messages: List[str] = []

    n = len(participants)
    max_size = preferences.max_group_size

    # ---------- 1. Enough people for one group ----------
    if n < MIN_GROUP_SIZE:
        messages.append(
            f"Not enough participants to form groups: {n} registered, "
            f"at least {MIN_GROUP_SIZE} are needed."
        )

    if max_size < MIN_GROUP_SIZE:
        messages.append(
            f"max_group_size={max_size} is below the minimum group size "
            f"{MIN_GROUP_SIZE}; no group can be proposed."
        )

    # ---------- 2. One record per participant ----------
    counts = Counter(p.user_id for p in participants)
    duplicate_user_ids = sorted(uid for uid, c in counts.items() if c > 1)
    if duplicate_user_ids:
        messages.append(
            f"Participants listed more than once: {', '.join(duplicate_user_ids)}. "
            "Pass one record per participant."
        )

    # ---------- 3. Search size ----------
    combinations = count_candidate_combinations(n, max_size)
    if max_combinations is not None and combinations > max_combinations:
        messages.append(
            f"{n} participants give {combinations} candidate groups in the "
            f"first round, above the budget of {max_combinations}."
        )

    ok = len(messages) == 0

    # ---------- 4. Data quality (warnings only) ----------
    malformed = _malformed_times(participants)
    if malformed:
        for uid, day, value in malformed:
            messages.append(
                f"Warning: {uid} has availability time {value!r} on day {day}, "
                "expected HH:MM; schedule overlap for them may be wrong."
            )

    international_count = sum(
        1 for p in participants if p.profile.student_type == "international"
    )
    male_count = sum(1 for p in participants if p.profile.gender == "male")

    max_groups = n // MIN_GROUP_SIZE
    expected_unmatched = min_unmatched(n, max_size)

    if ok:
        suggestion = (
            "No structural issues detected. "
            "Participants left over after grouping (< 3) stay unmatched."
        )
    else:
        suggestion = "Matching cannot run as configured. "
        if n < MIN_GROUP_SIZE:
            suggestion += "Wait for more registrations. "
        if duplicate_user_ids:
            suggestion += "Deduplicate the participant list. "
        if max_combinations is not None and combinations > max_combinations:
            suggestion += "Split the event into smaller pools or lower max_group_size."

    return {
        "ok": ok,
        "messages": messages,
        "suggestion": suggestion.strip(),
        "num_participants": n,
        "max_groups": max_groups,
        "expected_unmatched": expected_unmatched,
        "combinations_first_round": combinations,
        "duplicate_user_ids": duplicate_user_ids,
        "malformed_times": malformed,
        "international_count": international_count,
        "male_count": male_count,
    }
