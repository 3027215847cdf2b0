"""
Unit tests for classification and filtering.
"""

import unittest
from datetime import date

from hoopfinder.filters import (
    ALL_AGE_GROUPS,
    FilterSet,
    classify_age_groups,
    classify_cost,
    classify_gender,
    cost_label,
    events_for_day,
    is_free,
    is_program_active,
    is_season_expired,
    location_passes_filter,
    select_events,
)
from hoopfinder.model import FlatEvent, Location, Program, Session


IN_SEASON = date(2026, 5, 4)
AFTER_SEASON = date(2026, 10, 19)


def _event(**overrides) -> FlatEvent:
    fields = dict(
        location_name="Garfield Community Center",
        address="2323 E Cherry St",
        program="Adult Drop-in",
        ages="18 and older",
        cost="FREE",
        day="Monday",
        time="6-8pm",
        date_range="4/6-6/12",
        code="B100",
        program_type="drop-in",
    )
    fields.update(overrides)
    return FlatEvent(**fields)


class TestClassifyAgeGroups(unittest.TestCase):
    def test_documented_cases(self) -> None:
        self.assertEqual(classify_age_groups("18 and older"), {"adult"})
        self.assertEqual(classify_age_groups(""), ALL_AGE_GROUPS)
        self.assertEqual(classify_age_groups("8-10"), {"youth"})
        self.assertEqual(classify_age_groups("13-17"), {"teen"})

    def test_all_ages_and_missing(self) -> None:
        self.assertEqual(classify_age_groups(None), ALL_AGE_GROUPS)
        self.assertEqual(classify_age_groups("All Ages"), ALL_AGE_GROUPS)

    def test_and_older(self) -> None:
        self.assertEqual(classify_age_groups("18+"), {"adult"})
        self.assertEqual(classify_age_groups("6 and older"), ALL_AGE_GROUPS)
        self.assertEqual(classify_age_groups("13 and older"), {"teen", "adult"})
        self.assertEqual(classify_age_groups("21 and older"), {"adult"})

    def test_young_kids(self) -> None:
        self.assertEqual(classify_age_groups("5 and under"), {"youth"})
        self.assertEqual(classify_age_groups("Little Dribblers"), {"youth"})
        self.assertEqual(classify_age_groups("Ages 7"), {"youth"})

    def test_unrecognized_is_permissive(self) -> None:
        self.assertEqual(classify_age_groups("Seniors"), ALL_AGE_GROUPS)


class TestClassifyGender(unittest.TestCase):
    def test_womens_before_mens(self) -> None:
        self.assertEqual(classify_gender("Women's Basketball"), "womens")
        self.assertEqual(classify_gender("Womens Drop-in"), "womens")

    def test_mens(self) -> None:
        self.assertEqual(classify_gender("Men's League"), "mens")
        self.assertEqual(classify_gender("Adult Men Drop-in"), "mens")

    def test_open(self) -> None:
        self.assertEqual(classify_gender("Open Gym"), "open")
        self.assertEqual(classify_gender("Hoops for Mentors"), "open")
        self.assertEqual(classify_gender(None), "open")


class TestCost(unittest.TestCase):
    def test_free_values(self) -> None:
        for cost in (None, "", "FREE", "$0", 0, 0.0):
            with self.subTest(cost=cost):
                self.assertTrue(is_free(cost))
                self.assertEqual(classify_cost(cost), "free")
                self.assertEqual(cost_label(cost), "Free")

    def test_paid_values(self) -> None:
        self.assertEqual(classify_cost("$5"), "paid")
        self.assertEqual(classify_cost(40), "paid")
        self.assertEqual(cost_label("$5"), "$5")


class TestActive(unittest.TestCase):
    def test_inclusive_range(self) -> None:
        self.assertTrue(is_program_active("4/6-6/12", date(2026, 4, 6), 2026))
        self.assertTrue(is_program_active("4/6-6/12", date(2026, 6, 12), 2026))
        self.assertFalse(is_program_active("4/6-6/12", date(2026, 4, 5), 2026))
        self.assertFalse(is_program_active("4/6-6/12", date(2026, 6, 13), 2026))

    def test_season_year_is_used(self) -> None:
        self.assertFalse(is_program_active("4/6-6/12", date(2026, 5, 1), 2025))

    def test_missing_or_unparseable_range_is_active(self) -> None:
        self.assertTrue(is_program_active(None, AFTER_SEASON, 2026))
        self.assertTrue(is_program_active("Ongoing", AFTER_SEASON, 2026))

    def test_season_expired(self) -> None:
        events = [_event(), _event(day="Wednesday")]
        self.assertFalse(is_season_expired(events, IN_SEASON, 2026))
        self.assertTrue(is_season_expired(events, AFTER_SEASON, 2026))
        self.assertFalse(is_season_expired([], AFTER_SEASON, 2026))


class TestLocationFilter(unittest.TestCase):
    def setUp(self) -> None:
        self.court = Location(
            id="court-1", kind="outdoor_court", name="Judkins Park", address="", lat=None, lng=None
        )
        self.center = Location(
            id="center-garfield",
            kind="community_center",
            name="Garfield Community Center",
            address="2323 E Cherry St",
            lat=None,
            lng=None,
            programs=[
                Program(
                    program="Women's Drop-in",
                    ages="18+",
                    cost="$5",
                    date_range="4/6-6/12",
                    sessions=[Session(day="Tue", time="6-8pm")],
                )
            ],
        )

    def test_kind_filter(self) -> None:
        self.assertTrue(location_passes_filter(self.court, FilterSet(), IN_SEASON, 2026))
        self.assertFalse(
            location_passes_filter(self.court, FilterSet(kinds=frozenset({"indoor"})), IN_SEASON, 2026)
        )

    def test_unknown_kind_ignores_kind_toggles(self) -> None:
        pool = Location(id="pool-1", kind="aquatic_center", name="Medgar Evers Pool", address="", lat=None, lng=None)
        self.assertTrue(location_passes_filter(pool, FilterSet(kinds=frozenset({"indoor"})), IN_SEASON, 2026))
        self.assertTrue(location_passes_filter(pool, FilterSet(kinds=frozenset()), IN_SEASON, 2026))

    def test_require_schedule(self) -> None:
        filters = FilterSet(require_schedule=True)
        self.assertFalse(location_passes_filter(self.court, filters, IN_SEASON, 2026))
        self.assertTrue(location_passes_filter(self.center, filters, IN_SEASON, 2026))
        self.assertFalse(location_passes_filter(self.center, filters, AFTER_SEASON, 2026))

    def test_program_must_match_all_categories(self) -> None:
        self.assertTrue(location_passes_filter(self.center, FilterSet(), IN_SEASON, 2026))
        self.assertFalse(
            location_passes_filter(self.center, FilterSet(genders=frozenset({"mens"})), IN_SEASON, 2026)
        )
        self.assertFalse(
            location_passes_filter(self.center, FilterSet(costs=frozenset({"free"})), IN_SEASON, 2026)
        )
        self.assertFalse(
            location_passes_filter(self.center, FilterSet(ages=frozenset({"youth"})), IN_SEASON, 2026)
        )

    def test_no_current_programs_passes_on_kind(self) -> None:
        filters = FilterSet(genders=frozenset({"mens"}))
        self.assertTrue(location_passes_filter(self.center, filters, AFTER_SEASON, 2026))


class TestSelectEvents(unittest.TestCase):
    def test_select_keeps_order_and_drops_inactive(self) -> None:
        events = [
            _event(program="Adult Drop-in"),
            _event(program="Summer League", date_range="7/1-8/30"),
            _event(program="Youth Clinic", ages="8-10", cost="$40"),
        ]
        selected = select_events(events, FilterSet(), IN_SEASON, 2026)
        self.assertEqual([e.program for e in selected], ["Adult Drop-in", "Youth Clinic"])

        free_only = select_events(events, FilterSet(costs=frozenset({"free"})), IN_SEASON, 2026)
        self.assertEqual([e.program for e in free_only], ["Adult Drop-in"])

    def test_events_for_day(self) -> None:
        events = [_event(day="Monday"), _event(day="Tuesday", program="Tuesday Run")]
        todays = events_for_day(events, "Tuesday", FilterSet(), IN_SEASON, 2026)
        self.assertEqual([e.program for e in todays], ["Tuesday Run"])


if __name__ == "__main__":
    unittest.main()
