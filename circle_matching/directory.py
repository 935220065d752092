# circle_matching/directory.py
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from .models import CommittedGroup, GroupProposal, Participant

LOG = logging.getLogger(__name__)


class ParticipantDirectory:
    """
    In-memory participant lookup keyed by event id.

    Only participants whose status is "registered" are offered for matching.
    """

    def __init__(self, participants: Optional[Iterable[Participant]] = None):
        self._by_event: Dict[str, List[Participant]] = {}
        for p in participants or []:
            self.add(p)

    def add(self, participant: Participant) -> None:
        if participant.event_id is None:
            raise ValueError(f"Participant {participant.user_id} has no event_id.")
        self._by_event.setdefault(participant.event_id, []).append(participant)

    def participants_for_event(self, event_id: str) -> List[Participant]:
        return [
            p for p in self._by_event.get(event_id, [])
            if p.status == "registered"
        ]


class GroupStore:
    """
    In-memory record of committed groups per event. Committing replaces
    every group previously stored for that event.
    """

    def __init__(self):
        self._groups: Dict[str, List[CommittedGroup]] = {}

    def commit_groups(
        self,
        event_id: str,
        proposals: Sequence[GroupProposal],
        primary_language_id: Optional[str] = None,
    ) -> List[CommittedGroup]:
        """
        Store `proposals` as the event's groups, replacing earlier ones.
        An empty list is a no-op: earlier groups stay and [] is returned.
        """
        if not proposals:
            LOG.info("event %s: no groups to commit, keeping previous groups", event_id)
            return []

        committed = [
            CommittedGroup(
                event_id=event_id,
                name=f"Group {i}",
                max_size=p.size,
                target_international_ratio=p.international_ratio,
                target_gender_ratio=p.gender_ratio,
                member_ids=p.member_ids,
                primary_language_id=primary_language_id,
            )
            for i, p in enumerate(proposals, start=1)
        ]

        replaced = len(self._groups.get(event_id, []))
        self._groups[event_id] = committed
        LOG.info(
            "event %s: committed %d groups (replaced %d)",
            event_id, len(committed), replaced,
        )
        return list(committed)

    def groups_for_event(self, event_id: str) -> List[CommittedGroup]:
        return list(self._groups.get(event_id, []))

    def clear_event(self, event_id: str) -> int:
        return len(self._groups.pop(event_id, []))
