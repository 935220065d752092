# circle_matching/data_generation/participant_factory.py
from __future__ import annotations

import random
from typing import List, Optional

from ..models import Availability, LanguageSkill, Participant, Profile
from ..config import (
    DEFAULT_SEED,
    NUM_PARTICIPANTS_DEFAULT,
    GENDERS,
    PROFICIENCY_LEVELS,
    DAYS_PER_WEEK,
)
from .languages import get_default_languages


def _random_availability(rng: random.Random, max_slots: int) -> List[Availability]:
    """0..max_slots same-day blocks between 08:00 and 22:00."""
    slots: List[Availability] = []
    for _ in range(rng.randint(0, max_slots)):
        start = rng.randint(8, 19)
        end = rng.randint(start + 1, min(start + 4, 22))
        slots.append(
            Availability(
                day_of_week=rng.randrange(DAYS_PER_WEEK),
                start_time=f"{start:02d}:00",
                end_time=f"{end:02d}:00",
            )
        )
    return slots


def create_toy_participants(
    num_participants: int = NUM_PARTICIPANTS_DEFAULT,
    seed: int = DEFAULT_SEED,
    event_id: Optional[str] = "E1",
    international_share: float = 0.5,
    max_languages: int = 2,
    max_slots: int = 3,
) -> List[Participant]:
    """
    Create reproducible random participants:
      - student type drawn with P(international) = international_share
      - gender drawn uniformly from the recognised values
      - 0..max_languages languages from DEFAULT_LANGUAGES
      - 0..max_slots weekly availability blocks
    """
    if num_participants < 0:
        raise ValueError(f"num_participants must be >= 0, got {num_participants}.")
    if not (0.0 <= international_share <= 1.0):
        raise ValueError(
            f"international_share={international_share} must be between 0 and 1."
        )

    rng = random.Random(seed)
    all_languages = get_default_languages()

    participants: List[Participant] = []
    for idx in range(1, num_participants + 1):
        student_type = "international" if rng.random() < international_share else "domestic"

        k = rng.randint(0, min(max_languages, len(all_languages)))
        languages = [
            LanguageSkill(language_id=lang, proficiency=rng.choice(PROFICIENCY_LEVELS))
            for lang in rng.sample(all_languages, k=k)
        ]

        participants.append(
            Participant(
                user_id=f"U{idx:03d}",
                event_id=event_id,
                profile=Profile(
                    student_type=student_type,
                    gender=rng.choice(GENDERS),
                    languages=languages,
                    availability=_random_availability(rng, max_slots),
                ),
            )
        )

    return participants
