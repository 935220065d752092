# run_toy.py

import logging
import os
import random

import pandas as pd

from circle_matching.config import (
    DEFAULT_SEED,
    MAX_COMBINATIONS_DEFAULT,
    NUM_PARTICIPANTS_DEFAULT,
    PARTICIPANTS_CSV_PATH,
)
from circle_matching.models import MatchingPreferences
from circle_matching.data_generation.toy_dataset import make_toy_event, make_toy_event_from_csv
from circle_matching.directory import GroupStore
from circle_matching.grouping.diagnostics import analyze_matching_feasibility
from circle_matching.grouping.engine import create_optimal_groups
from circle_matching.grouping.stats import format_group_stats, get_group_stats, proposals_to_frame


def print_participants(participants) -> None:
    rows = [
        [
            p.profile.student_type,
            p.profile.gender or "-",
            ", ".join(s.language_id for s in p.profile.languages) or "-",
            len(p.profile.availability),
        ]
        for p in participants
    ]
    df = pd.DataFrame(
        rows,
        index=[p.user_id for p in participants],
        columns=["student_type", "gender", "languages", "availability_slots"],
    )
    print("=== PARTICIPANTS ===")
    print(df)
    print()


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    # ---- Session settings ----
    event_id = "E1"
    preferences = MatchingPreferences(
        target_international_ratio=0.5,
        target_gender_ratio=0.5,
        max_group_size=6,
        prioritize_language_skills=True,
        prioritize_schedule_compatibility=True,
    )

    directory = None
    if os.path.exists(PARTICIPANTS_CSV_PATH):
        print(f"Found CSV at {PARTICIPANTS_CSV_PATH}. Loading participants...")
        directory = make_toy_event_from_csv(PARTICIPANTS_CSV_PATH, event_id=event_id)
    if directory is None:
        directory = make_toy_event(
            event_id=event_id,
            num_participants=NUM_PARTICIPANTS_DEFAULT,
            seed=DEFAULT_SEED,
        )

    participants = directory.participants_for_event(event_id)
    print_participants(participants)

    # ---- Structural check BEFORE the exhaustive search ----
    print("=== FEASIBILITY CHECK ===")
    diag = analyze_matching_feasibility(
        participants,
        preferences,
        max_combinations=MAX_COMBINATIONS_DEFAULT,
    )
    for msg in diag["messages"]:
        print("-", msg)
    print(f"- Candidate groups in first round: {diag['combinations_first_round']}")
    print("Suggestion:", diag["suggestion"])
    print()

    if not diag["ok"]:
        print("Matching skipped.")
        return

    # ---- Greedy extraction ----
    groups = create_optimal_groups(
        participants,
        preferences,
        rng=random.Random(DEFAULT_SEED),
        max_combinations=MAX_COMBINATIONS_DEFAULT,
    )

    if not groups:
        print("Not enough participants to form groups.")
        return

    print("=== GROUP PROPOSALS (greedy) ===")
    print(proposals_to_frame(groups).round(3))
    print()
    print(format_group_stats(get_group_stats(groups)))
    print()

    # ---- Set-packing alternative, for comparison ----
    packed = create_optimal_groups(
        participants,
        preferences,
        rng=random.Random(DEFAULT_SEED),
        max_combinations=MAX_COMBINATIONS_DEFAULT,
        strategy="packing",
    )
    print("=== GROUP PROPOSALS (set packing) ===")
    print(proposals_to_frame(packed).round(3))
    print()
    print(format_group_stats(get_group_stats(packed)))
    print()

    # ---- Commit greedy proposals ----
    store = GroupStore()
    committed = store.commit_groups(event_id, groups, preferences.primary_language_id)
    print("=== COMMITTED GROUPS ===")
    for g in committed:
        print(f"{g.name} [{g.status}]: {', '.join(g.member_ids)}")

    grouped = {uid for g in committed for uid in g.member_ids}
    unmatched = [p.user_id for p in participants if p.user_id not in grouped]
    print(f"Unmatched: {', '.join(unmatched) or '-'}")


if __name__ == "__main__":
    main()
