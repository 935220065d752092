# circle_matching/data_generation/participant_loader.py
from __future__ import annotations

import csv
import os
from typing import List, Optional

from ..models import Availability, LanguageSkill, Participant, Profile
from ..config import PARTICIPANT_STATUSES, STUDENT_TYPES

REQUIRED_COLUMNS = ("user_id", "student_type")


def _parse_languages(cell: str) -> List[LanguageSkill]:
    """ "en:native;ja:beginner" -> [LanguageSkill('en','native'), ...] """
    skills: List[LanguageSkill] = []
    for item in (cell or "").split(";"):
        item = item.strip()
        if not item:
            continue
        language_id, _, proficiency = item.partition(":")
        skills.append(
            LanguageSkill(
                language_id=language_id.strip(),
                proficiency=proficiency.strip() or "intermediate",
            )
        )
    return skills


def _parse_availability(cell: str, user_id: str) -> List[Availability]:
    """ "1@09:00-12:00;3@13:00-15:00" -> [Availability(1,'09:00','12:00'), ...] """
    slots: List[Availability] = []
    for item in (cell or "").split(";"):
        item = item.strip()
        if not item:
            continue
        day, sep, span = item.partition("@")
        start, dash, end = span.partition("-")
        if not sep or not dash:
            raise ValueError(
                f"Bad availability {item!r} for {user_id}: expected DAY@HH:MM-HH:MM."
            )
        try:
            day_of_week = int(day)
        except ValueError:
            raise ValueError(f"Bad day {day!r} for {user_id}: expected 0-6.") from None
        if not 0 <= day_of_week <= 6:
            raise ValueError(f"Bad day {day_of_week} for {user_id}: expected 0-6.")
        slots.append(
            Availability(
                day_of_week=day_of_week,
                start_time=start.strip(),
                end_time=end.strip(),
            )
        )
    return slots


def load_participants_csv(path: str) -> Optional[List[Participant]]:
    """
    Load participants from CSV.
    Expected format (one row per participant; empty cells allowed):

        user_id,event_id,status,student_type,gender,languages,availability
        U001,E1,registered,international,male,en:native;ja:beginner,1@09:00-12:00;3@13:00-15:00

    Returns None when the file does not exist.
    """
    if not os.path.exists(path):
        return None

    participants: List[Participant] = []
    with open(path, "r", newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        missing = [c for c in REQUIRED_COLUMNS if c not in (reader.fieldnames or [])]
        if missing:
            raise ValueError(f"{path}: missing column(s) {', '.join(missing)}.")

        for row in reader:
            user_id = (row.get("user_id") or "").strip()
            if not user_id:
                continue

            student_type = (row.get("student_type") or "").strip()
            if student_type not in STUDENT_TYPES:
                raise ValueError(
                    f"{path}: {user_id} has student_type {student_type!r}, "
                    f"expected one of {STUDENT_TYPES}."
                )

            status = (row.get("status") or "").strip() or "registered"
            if status not in PARTICIPANT_STATUSES:
                raise ValueError(
                    f"{path}: {user_id} has status {status!r}, "
                    f"expected one of {PARTICIPANT_STATUSES}."
                )

            participants.append(
                Participant(
                    user_id=user_id,
                    event_id=(row.get("event_id") or "").strip() or None,
                    status=status,
                    profile=Profile(
                        student_type=student_type,
                        gender=(row.get("gender") or "").strip() or None,
                        languages=_parse_languages(row.get("languages", "")),
                        availability=_parse_availability(row.get("availability", ""), user_id),
                    ),
                )
            )

    return participants
