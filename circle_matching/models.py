# circle_matching/models.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional

from .config import (
    TARGET_INTERNATIONAL_RATIO_DEFAULT,
    TARGET_GENDER_RATIO_DEFAULT,
    MAX_GROUP_SIZE_DEFAULT,
)


@dataclass(frozen=True)
class LanguageSkill:
    language_id: str
    proficiency: str = "intermediate"


@dataclass(frozen=True)
class Availability:
    day_of_week: int     # 0..6
    start_time: str      # "HH:MM", 24h
    end_time: str        # "HH:MM", same day, exclusive


@dataclass
class Profile:
    student_type: str                  # "international" | "domestic"
    gender: Optional[str] = None       # "male" | "female" | "other" | "prefer_not_to_say"
    languages: List[LanguageSkill] = field(default_factory=list)
    availability: List[Availability] = field(default_factory=list)


@dataclass
class Participant:
    user_id: str
    profile: Profile
    event_id: Optional[str] = None
    status: str = "registered"


@dataclass(frozen=True)
class MatchingPreferences:
    target_international_ratio: float = TARGET_INTERNATIONAL_RATIO_DEFAULT
    target_gender_ratio: float = TARGET_GENDER_RATIO_DEFAULT
    primary_language_id: Optional[str] = None
    max_group_size: int = MAX_GROUP_SIZE_DEFAULT
    prioritize_language_skills: bool = True
    prioritize_schedule_compatibility: bool = True


@dataclass
class GroupProposal:
    members: List[Participant]
    score: float
    international_ratio: float
    gender_ratio: float
    language_compatibility: float
    schedule_compatibility: float

    @property
    def size(self) -> int:
        return len(self.members)

    @property
    def member_ids(self) -> List[str]:
        return [m.user_id for m in self.members]


@dataclass
class GroupStats:
    total_participants: int = 0
    total_groups: int = 0
    average_group_size: float = 0.0
    average_score: float = 0.0
    average_international_ratio: float = 0.0
    average_gender_ratio: float = 0.0


@dataclass
class CommittedGroup:
    """A proposal recorded by the group store for one event."""
    event_id: str
    name: str
    max_size: int
    target_international_ratio: float
    target_gender_ratio: float
    member_ids: List[str]
    status: str = "confirmed"
    primary_language_id: Optional[str] = None
