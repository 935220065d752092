import unittest
import random
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from circle_matching.models import MatchingPreferences
from circle_matching.data_generation.participant_factory import create_toy_participants
from circle_matching.grouping.engine import create_optimal_groups
from circle_matching.grouping.packing import build_packing_model, solve_group_packing
from circle_matching.grouping.scoring import score_group


class TestGroupPacking(unittest.TestCase):

    def verify_disjoint(self, groups, max_group_size):
        seen = set()
        for g in groups:
            self.assertTrue(3 <= g.size <= max_group_size)
            self.assertTrue(seen.isdisjoint(g.member_ids))
            seen.update(g.member_ids)

    def test_packing_is_disjoint_and_optimal(self):
        participants = create_toy_participants(num_participants=7, seed=13)
        prefs = MatchingPreferences(max_group_size=5)

        status, packed = solve_group_packing(participants, prefs)

        self.assertEqual(status, "Optimal")
        self.verify_disjoint(packed, 5)

        # the greedy partition is a feasible packing, so it cannot beat the MILP
        greedy = create_optimal_groups(participants, prefs, rng=random.Random(13))
        self.assertGreaterEqual(
            sum(g.score for g in packed) + 1e-6,
            sum(g.score for g in greedy),
        )

    def test_engine_packing_strategy(self):
        participants = create_toy_participants(num_participants=6, seed=17)

        groups = create_optimal_groups(
            participants, rng=random.Random(0), strategy="packing"
        )

        self.assertGreaterEqual(len(groups), 1)
        self.verify_disjoint(groups, 6)
        scores = [g.score for g in groups]
        self.assertEqual(scores, sorted(scores, reverse=True))

    def test_too_few_participants(self):
        participants = create_toy_participants(num_participants=2, seed=1)
        status, packed = solve_group_packing(participants, MatchingPreferences())
        self.assertEqual(status, "Optimal")
        self.assertEqual(packed, [])

    def test_model_has_one_constraint_per_participant(self):
        participants = create_toy_participants(num_participants=4, seed=2)
        prefs = MatchingPreferences()
        candidates = [
            score_group(participants[:3], prefs),
            score_group(participants[1:], prefs),
        ]

        prob, y = build_packing_model(candidates)

        self.assertEqual(len(y), 2)
        self.assertEqual(len(prob.constraints), 4)


if __name__ == '__main__':
    unittest.main()
