import unittest

from calendar_engine import (
    AppointmentStatus,
    StatusCategory,
    UnknownStatusError,
    category_for,
    parse_status,
    status_label,
    status_legend,
)


class StatusTaxonomyTests(unittest.TestCase):
    def test_every_status_has_a_distinct_category(self) -> None:
        categories = [category_for(status) for status in AppointmentStatus]
        self.assertEqual(len(set(categories)), len(list(AppointmentStatus)))

    def test_known_mapping(self) -> None:
        self.assertEqual(category_for("scheduled"), StatusCategory.INFO)
        self.assertEqual(category_for("confirmed"), StatusCategory.SUCCESS)
        self.assertEqual(category_for("completed"), StatusCategory.COMPLETE)
        self.assertEqual(category_for("cancelled"), StatusCategory.DANGER)
        self.assertEqual(category_for("no-show"), StatusCategory.WARNING)

    def test_parse_normalizes_case_and_underscore(self) -> None:
        self.assertIs(parse_status(" Confirmed "), AppointmentStatus.CONFIRMED)
        self.assertIs(parse_status("NO_SHOW"), AppointmentStatus.NO_SHOW)

    def test_unknown_status_is_rejected(self) -> None:
        for value in ("pending", "", None, 3):
            with self.subTest(value=value):
                with self.assertRaises(UnknownStatusError):
                    parse_status(value)

    def test_legend_order_and_labels(self) -> None:
        legend = status_legend()
        self.assertEqual(
            [entry.status.value for entry in legend],
            ["scheduled", "confirmed", "completed", "cancelled", "no-show"],
        )
        self.assertEqual(legend[-1].label, "No-show")
        self.assertEqual(status_label("scheduled"), "Scheduled")


if __name__ == "__main__":
    unittest.main()
