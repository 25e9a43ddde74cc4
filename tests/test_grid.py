import calendar
import unittest
from datetime import date, timedelta

from calendar_engine import (
    CalendarState,
    ViewMode,
    build_day_slots,
    build_month_grid,
    build_week_slots,
    month_bounds,
    resolve_range,
)


def _months(start_year: int, end_year: int):
    for year in range(start_year, end_year + 1):
        for month in range(1, 13):
            yield year, month


class MonthGridPropertyTests(unittest.TestCase):
    def test_grid_invariants_hold_for_every_month(self) -> None:
        today = date(2024, 2, 14)
        for year, month in _months(1999, 2031):
            with self.subTest(year=year, month=month):
                cells = build_month_grid(date(year, month, 15), today)

                self.assertEqual(len(cells) % 7, 0)
                self.assertIn(len(cells), (28, 35, 42))
                self.assertEqual(cells[0].date.isoweekday() % 7, 0)

                for previous, current in zip(cells, cells[1:]):
                    self.assertEqual(current.date, previous.date + timedelta(days=1))

                in_month = [cell.date for cell in cells if cell.is_current_period]
                days_in_month = calendar.monthrange(year, month)[1]
                self.assertEqual(len(in_month), days_in_month)
                self.assertEqual(in_month[0], date(year, month, 1))
                self.assertEqual(in_month[-1], date(year, month, days_in_month))

                self.assertLessEqual(sum(cell.is_today for cell in cells), 1)

    def test_grid_is_deterministic(self) -> None:
        first = build_month_grid(date(2024, 2, 10), date(2024, 2, 10))
        second = build_month_grid(date(2024, 2, 10), date(2024, 2, 10))
        self.assertEqual(first, second)


class MonthGridScenarioTests(unittest.TestCase):
    def test_leap_february_2024(self) -> None:
        cells = build_month_grid(date(2024, 2, 29), date(2024, 2, 14))

        leading = [cell for cell in cells if cell.date < date(2024, 2, 1)]
        trailing = [cell for cell in cells if cell.date > date(2024, 2, 29)]
        current = [cell for cell in cells if cell.is_current_period]

        self.assertEqual(len(leading), 4)
        self.assertEqual(len(current), 29)
        self.assertEqual(len(trailing), 2)
        self.assertEqual(len(cells), 35)
        self.assertEqual(cells[0].date, date(2024, 1, 28))
        self.assertEqual(cells[-1].date, date(2024, 3, 2))
        self.assertFalse(any(cell.is_current_period for cell in leading + trailing))

    def test_month_without_padding(self) -> None:
        cells = build_month_grid(date(2015, 2, 1), date(2015, 2, 1))
        self.assertEqual(len(cells), 28)
        self.assertTrue(all(cell.is_current_period for cell in cells))

    def test_six_week_month(self) -> None:
        cells = build_month_grid(date(2025, 3, 1), date(2025, 3, 1))
        self.assertEqual(len(cells), 42)
        self.assertEqual(cells[0].date, date(2025, 2, 23))
        self.assertEqual(cells[-1].date, date(2025, 4, 5))

    def test_december_trailing_days_roll_into_january(self) -> None:
        cells = build_month_grid(date(2024, 12, 1), date(2024, 12, 1))
        self.assertEqual(cells[-1].date, date(2025, 1, 4))
        self.assertEqual(len(cells), 35)

    def test_today_flag(self) -> None:
        cells = build_month_grid(date(2024, 2, 1), date(2024, 2, 14))
        flagged = [cell.date for cell in cells if cell.is_today]
        self.assertEqual(flagged, [date(2024, 2, 14)])

    def test_today_on_padding_day_is_flagged(self) -> None:
        cells = build_month_grid(date(2024, 2, 1), date(2024, 1, 30))
        flagged = [cell for cell in cells if cell.is_today]
        self.assertEqual(len(flagged), 1)
        self.assertFalse(flagged[0].is_current_period)

    def test_today_outside_grid(self) -> None:
        cells = build_month_grid(date(2024, 2, 1), date(2026, 10, 19))
        self.assertFalse(any(cell.is_today for cell in cells))

    def test_month_bounds(self) -> None:
        self.assertEqual(month_bounds(date(2024, 2, 10)), (date(2024, 1, 28), date(2024, 3, 2)))


class SlotBuilderTests(unittest.TestCase):
    def test_day_slots_cover_business_hours(self) -> None:
        slots = build_day_slots(date(2024, 2, 5))
        self.assertEqual([slot.hour for slot in slots], list(range(8, 18)))
        self.assertTrue(all(slot.date == date(2024, 2, 5) for slot in slots))

    def test_week_slots_run_sunday_to_saturday(self) -> None:
        slots = build_week_slots(date(2024, 2, 7))
        self.assertEqual(len(slots), 70)
        self.assertEqual(slots[0].date, date(2024, 2, 4))
        self.assertEqual(slots[0].hour, 8)
        self.assertEqual(slots[-1].date, date(2024, 2, 10))
        self.assertEqual(slots[-1].hour, 17)
        keys = [(slot.date, slot.hour) for slot in slots]
        self.assertEqual(keys, sorted(keys))

    def test_custom_hours(self) -> None:
        slots = build_day_slots(date(2024, 2, 5), hours=[20, 7])
        self.assertEqual([slot.hour for slot in slots], [7, 20])

    def test_invalid_hour(self) -> None:
        with self.assertRaises(ValueError):
            build_day_slots(date(2024, 2, 5), hours=[24])


class ResolveRangeTests(unittest.TestCase):
    def test_ranges_per_view(self) -> None:
        reference = date(2024, 2, 7)
        self.assertEqual(
            resolve_range(CalendarState(reference, ViewMode.MONTH)),
            (date(2024, 1, 28), date(2024, 3, 2)),
        )
        self.assertEqual(
            resolve_range(CalendarState(reference, ViewMode.WEEK)),
            (date(2024, 2, 4), date(2024, 2, 10)),
        )
        self.assertEqual(
            resolve_range(CalendarState(reference, ViewMode.DAY)),
            (reference, reference),
        )


if __name__ == "__main__":
    unittest.main()
