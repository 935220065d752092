# circle_matching/data_generation/toy_dataset.py
from __future__ import annotations
from dataclasses import replace
from typing import List, Optional

from ..models import Participant
from ..config import DEFAULT_SEED, NUM_PARTICIPANTS_DEFAULT
from ..directory import ParticipantDirectory
from .participant_factory import create_toy_participants
from .participant_loader import load_participants_csv


def make_toy_event(
    event_id: str = "E1",
    num_participants: int = NUM_PARTICIPANTS_DEFAULT,
    seed: int = DEFAULT_SEED,
    participants: Optional[List[Participant]] = None,
) -> ParticipantDirectory:
    """
    Return a directory holding one event's participants.
    If `participants` is provided (e.g. loaded from CSV), use them instead of
    random generation; records without an event id are copied with `event_id`
    set, leaving the caller's records untouched.
    """
    if participants is None:
        participants = create_toy_participants(
            num_participants=num_participants,
            seed=seed,
            event_id=event_id,
        )
    else:
        participants = [
            p if p.event_id is not None else replace(p, event_id=event_id)
            for p in participants
        ]

    return ParticipantDirectory(participants)


def make_toy_event_from_csv(
    csv_path: str,
    event_id: str = "E1",
) -> Optional[ParticipantDirectory]:
    """Like make_toy_event, reading participants from `csv_path`; None if missing."""
    participants = load_participants_csv(csv_path)
    if participants is None:
        return None
    return make_toy_event(event_id=event_id, participants=participants)
