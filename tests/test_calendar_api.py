import json
import tempfile
import unittest
from datetime import date
from pathlib import Path
from unittest.mock import MagicMock

from connector import ClinicAPIError, InMemoryAppointmentSource, JsonFileAppointmentSource
from ui.calendar_api import create_app

from tests.factories import make_appointment


class CalendarAPITests(unittest.TestCase):
    def setUp(self) -> None:
        self.source = InMemoryAppointmentSource(
            [
                make_appointment(id="a1", doctor_ref="doctor-1", date=date(2024, 2, 1)),
                make_appointment(id="a2", doctor_ref="doctor-2", date=date(2024, 2, 1), start_time="13:00", end_time="13:30"),
            ]
        )
        app = create_app(self.source, today_provider=lambda: date(2024, 2, 14))
        app.testing = True
        self.client = app.test_client()

    def test_defaults_to_month_of_today(self) -> None:
        response = self.client.get("/calendar")

        self.assertEqual(response.status_code, 200)
        payload = response.get_json()
        self.assertEqual(payload["view_mode"], "month")
        self.assertEqual(payload["reference_date"], "2024-02-14")
        self.assertEqual(len(payload["cells"]), 35)

    def test_week_view_with_doctor(self) -> None:
        response = self.client.get("/calendar?date=2024-02-01&view=week&doctor=doctor-2")

        payload = response.get_json()
        placed = [
            (slot["date"], slot["hour"], a["id"])
            for slot in payload["slots"]
            for a in slot["appointments"]
        ]
        self.assertEqual(placed, [("2024-02-01", 13, "a2")])
        self.assertEqual(payload["title"], "Jan 28 - Feb 3, 2024")

    def test_bad_date(self) -> None:
        response = self.client.get("/calendar?date=02-01-2024")
        self.assertEqual(response.status_code, 400)
        self.assertIn("error", response.get_json())

    def test_bad_view(self) -> None:
        response = self.client.get("/calendar?view=year")
        self.assertEqual(response.status_code, 400)

    def test_source_failure(self) -> None:
        source = MagicMock()
        source.fetch_appointments.side_effect = ClinicAPIError("down")
        client = create_app(source, today_provider=lambda: date(2024, 2, 14)).test_client()

        with self.assertLogs("ui.calendar_api", level="ERROR"):
            response = client.get("/calendar")

        self.assertEqual(response.status_code, 502)

    def test_corrupt_appointment_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "appointments.json"
            path.write_text("{not json", encoding="utf-8")
            client = create_app(
                JsonFileAppointmentSource(path), today_provider=lambda: date(2024, 2, 14)
            ).test_client()

            with self.assertLogs("ui.calendar_api", level="ERROR"):
                response = client.get("/calendar")

        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.get_json(), {"error": "Appointment data is invalid"})

    def test_file_with_one_bad_record_still_renders(self) -> None:
        records = [
            make_appointment(id="good").to_dict(),
            {"id": "bad", "patient_ref": "p", "doctor_ref": "d", "date": "2024-02-01"},
        ]
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "appointments.json"
            path.write_text(json.dumps(records), encoding="utf-8")
            client = create_app(
                JsonFileAppointmentSource(path), today_provider=lambda: date(2024, 2, 14)
            ).test_client()

            response = client.get("/calendar?date=2024-02-01")

        self.assertEqual(response.status_code, 200)
        placed = [a["id"] for cell in response.get_json()["cells"] for a in cell["appointments"]]
        self.assertEqual(placed, ["good"])

    def test_legend(self) -> None:
        response = self.client.get("/legend")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            [entry["category"] for entry in response.get_json()],
            ["info", "success", "complete", "danger", "warning"],
        )


if __name__ == "__main__":
    unittest.main()
