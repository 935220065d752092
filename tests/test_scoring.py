import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from circle_matching.models import (
    Availability,
    LanguageSkill,
    MatchingPreferences,
    Participant,
    Profile,
)
from circle_matching.grouping.scoring import (
    common_time_slots,
    gender_ratio,
    international_ratio,
    language_compatibility,
    parse_hour,
    ratio_score,
    schedule_compatibility,
    score_group,
)


def make_participant(user_id, student_type="domestic", gender=None, languages=(), availability=()):
    return Participant(
        user_id=user_id,
        profile=Profile(
            student_type=student_type,
            gender=gender,
            languages=[LanguageSkill(lang) for lang in languages],
            availability=list(availability),
        ),
    )


class TestRatios(unittest.TestCase):

    def test_international_and_gender_ratio(self):
        members = [
            make_participant("A", "international", "male"),
            make_participant("B", "international", "other"),
            make_participant("C", "domestic", "prefer_not_to_say"),
            make_participant("D", "domestic", None),
        ]
        self.assertAlmostEqual(international_ratio(members), 0.5)
        # only "male" counts toward the gender ratio
        self.assertAlmostEqual(gender_ratio(members), 0.25)

    def test_ratio_score_is_not_clamped(self):
        self.assertAlmostEqual(ratio_score(0.5, 0.5), 1.0)
        self.assertAlmostEqual(ratio_score(0.0, 0.9), 0.1)
        self.assertAlmostEqual(ratio_score(0.0, 1.5), -0.5)


class TestLanguageCompatibility(unittest.TestCase):

    def test_neutral_without_languages(self):
        members = [make_participant(u) for u in "ABC"]
        self.assertEqual(language_compatibility(members), 0.5)

    def test_shared_language_and_diversity(self):
        members = [
            make_participant("A", languages=["en"]),
            make_participant("B", languages=["en"]),
            make_participant("C", languages=["ja"]),
        ]
        # en: 2/3 * 0.5, diversity: 2/3 * 0.2
        self.assertAlmostEqual(language_compatibility(members), 2 / 3 * 0.5 + 2 / 3 * 0.2)

    def test_primary_language_bonus(self):
        members = [
            make_participant("A", languages=["en"]),
            make_participant("B", languages=["en"]),
            make_participant("C", languages=["ja"]),
        ]
        base = language_compatibility(members)
        self.assertAlmostEqual(language_compatibility(members, "en"), base + 0.3)
        # bonus only applies to languages shared by 2+ members
        self.assertAlmostEqual(language_compatibility(members, "ja"), base)

    def test_capped_at_one(self):
        members = [make_participant(u, languages=["en", "ja"]) for u in "ABC"]
        self.assertEqual(language_compatibility(members, "en"), 1.0)

    def test_one_member_with_languages_is_not_neutral(self):
        members = [
            make_participant("A", languages=["en"]),
            make_participant("B"),
            make_participant("C"),
        ]
        # no shared language; diversity 1/3 * 0.2
        self.assertAlmostEqual(language_compatibility(members), 0.2 / 3)


class TestScheduleCompatibility(unittest.TestCase):

    def test_neutral_with_fewer_than_two_schedules(self):
        members = [
            make_participant("A", availability=[Availability(1, "09:00", "12:00")]),
            make_participant("B"),
            make_participant("C"),
        ]
        self.assertEqual(schedule_compatibility(members), 0.5)

    def test_neutral_when_no_day_is_shared(self):
        members = [
            make_participant("A", availability=[Availability(1, "09:00", "12:00")]),
            make_participant("B", availability=[Availability(2, "09:00", "12:00")]),
            make_participant("C"),
        ]
        self.assertEqual(schedule_compatibility(members), 0.5)

    def test_partial_overlap(self):
        members = [
            make_participant("A", availability=[Availability(1, "09:00", "12:00")]),
            make_participant("B", availability=[Availability(1, "10:00", "12:00")]),
            make_participant("C"),
        ]
        # active 9,10,11 ; common 10,11
        self.assertAlmostEqual(schedule_compatibility(members), 2 / 3)

    def test_counts_accumulate_across_days(self):
        members = [
            make_participant("A", availability=[
                Availability(0, "09:00", "11:00"),
                Availability(3, "18:00", "20:00"),
            ]),
            make_participant("B", availability=[
                Availability(0, "10:00", "11:00"),
                Availability(3, "18:00", "20:00"),
            ]),
            make_participant("C", availability=[Availability(5, "09:00", "10:00")]),
        ]
        # day 0: common {10} of {9,10}; day 3: common {18,19} of {18,19}; day 5 skipped
        self.assertAlmostEqual(schedule_compatibility(members), 3 / 4)

    def test_minutes_are_truncated(self):
        members = [
            make_participant("A", availability=[Availability(2, "09:30", "11:45")]),
            make_participant("B", availability=[Availability(2, "09:00", "11:00")]),
        ]
        self.assertAlmostEqual(schedule_compatibility(members), 1.0)

    def test_sub_hour_intervals_on_shared_day(self):
        members = [
            make_participant("A", availability=[Availability(4, "10:00", "10:30")]),
            make_participant("B", availability=[Availability(4, "10:15", "10:45")]),
        ]
        # the day is compared but has no buckets: 0 common / max(0, 1) active
        self.assertEqual(schedule_compatibility(members), 0.0)

    def test_malformed_times_do_not_raise(self):
        members = [
            make_participant("A", availability=[Availability(1, "noon", "late")]),
            make_participant("B", availability=[Availability(1, "09:00", "10:00")]),
        ]
        self.assertAlmostEqual(schedule_compatibility(members), 0.0)

    def test_common_time_slots(self):
        slots = common_time_slots([
            [Availability(0, "08:00", "10:00")],
            [Availability(0, "09:00", "10:00"), Availability(0, "13:00", "14:00")],
        ])
        self.assertEqual(slots, {"common": 1, "total": 3})

    def test_parse_hour(self):
        self.assertEqual(parse_hour("07:45"), 7)
        self.assertEqual(parse_hour("23:00"), 23)
        self.assertIsNone(parse_hour("xx:00"))
        self.assertIsNone(parse_hour(""))


class TestScoreGroup(unittest.TestCase):

    def setUp(self):
        self.members = [
            make_participant("A", "international", "male", ["en"]),
            make_participant("B", "domestic", "female", ["en"]),
            make_participant("C", "domestic", "male", ["ja"]),
        ]

    def test_composite_weights(self):
        prefs = MatchingPreferences()
        proposal = score_group(self.members, prefs)

        intl_score = 1 - abs(1 / 3 - 0.5)
        gender_score = 1 - abs(2 / 3 - 0.5)
        expected = (
            0.3 * intl_score
            + 0.2 * gender_score
            + 0.3 * proposal.language_compatibility
            + 0.2 * proposal.schedule_compatibility
        )
        self.assertAlmostEqual(proposal.score, expected)
        self.assertEqual(proposal.member_ids, ["A", "B", "C"])

    def test_disabled_terms_are_not_renormalised(self):
        prefs = MatchingPreferences(
            prioritize_language_skills=False,
            prioritize_schedule_compatibility=False,
        )
        proposal = score_group(self.members, prefs)

        intl_score = 1 - abs(1 / 3 - 0.5)
        gender_score = 1 - abs(2 / 3 - 0.5)
        self.assertAlmostEqual(proposal.score, 0.3 * intl_score + 0.2 * gender_score)
        # sub-scores are still reported
        self.assertEqual(proposal.schedule_compatibility, 0.5)

    def test_targets_shift_ratio_scores(self):
        balanced = score_group(self.members, MatchingPreferences(target_international_ratio=1 / 3))
        skewed = score_group(self.members, MatchingPreferences(target_international_ratio=1.0))
        self.assertAlmostEqual(balanced.score - skewed.score, 0.3 * (2 / 3))


if __name__ == '__main__':
    unittest.main()
