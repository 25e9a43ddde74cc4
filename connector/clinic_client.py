"""HTTP client for the clinic REST API's appointment endpoint.

The client owns session handling, retries with backoff and structured error
reporting so the calendar engine can stay free of any I/O concerns.
"""
from __future__ import annotations

import logging
import os
from datetime import date
from typing import Any, Dict, List, Optional, Tuple, Union

import requests
from requests import Response
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from calendar_engine import Appointment

__all__ = ["ClinicAPIError", "ClinicAPIClient"]

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = os.getenv("CLINIC_API_BASE_URL", "http://localhost:5000/api")
DEFAULT_TOKEN = os.getenv("CLINIC_API_TOKEN")
DEFAULT_TIMEOUT_SECONDS = int(os.getenv("CLINIC_API_TIMEOUT", "30"))
DEFAULT_MAX_RETRIES = int(os.getenv("CLINIC_API_MAX_RETRIES", "3"))
DEFAULT_BACKOFF_FACTOR = 0.5


class ClinicAPIError(RuntimeError):
    """Raised when the clinic API cannot be reached or returns an error."""


class ClinicAPIClient:
    """Fetches appointments from the clinic API."""

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        token: Optional[str] = DEFAULT_TOKEN,
        timeout: int = DEFAULT_TIMEOUT_SECONDS,
        max_retries: int = DEFAULT_MAX_RETRIES,
        backoff_factor: float = DEFAULT_BACKOFF_FACTOR,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not base_url:
            raise ValueError("base_url must be provided")

        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._session = session or self._build_session(
            max_retries=max_retries, backoff_factor=backoff_factor
        )

    def _build_session(self, *, max_retries: int, backoff_factor: float) -> requests.Session:
        session = requests.Session()
        retry_strategy = Retry(
            total=max_retries,
            read=max_retries,
            connect=max_retries,
            status=max_retries,
            backoff_factor=backoff_factor,
            status_forcelist=(429, 500, 502, 503, 504),
            allowed_methods=("GET",),
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        return session

    def _request(
        self,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        expected_status: Union[int, Tuple[int, ...]] = (200,),
    ) -> Response:
        if isinstance(expected_status, int):
            expected_status = (expected_status,)

        url = f"{self.base_url}/{path.lstrip('/')}"
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            response = self._session.get(url, params=params, headers=headers, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error("Request to clinic API failed: %s", exc)
            raise ClinicAPIError("Failed to execute request to clinic API") from exc

        if response.status_code not in expected_status:
            logger.error(
                "Clinic API error response: status=%s body=%s",
                response.status_code,
                response.text[:2048],
            )
            raise ClinicAPIError(
                f"Clinic API responded with unexpected status {response.status_code}"
            )
        return response

    def fetch_appointments(
        self, start: date, end: date, doctor_ref: Optional[str] = None
    ) -> List[Appointment]:
        """Return the appointments dated between ``start`` and ``end`` inclusive."""

        params: Dict[str, Any] = {"startDate": start.isoformat(), "endDate": end.isoformat()}
        if doctor_ref:
            params["doctorId"] = doctor_ref

        response = self._request("appointments", params=params)
        try:
            payload = response.json()
        except ValueError as exc:
            raise ClinicAPIError("Clinic API response was not valid JSON") from exc

        if isinstance(payload, dict):
            payload = payload.get("appointments", payload.get("data"))
        if not isinstance(payload, list):
            raise ClinicAPIError("Clinic API response did not contain an appointment list")

        appointments: List[Appointment] = []
        for entry in payload:
            try:
                appointments.append(Appointment.from_mapping(entry))
            except ValueError as exc:
                logger.warning("Skipping malformed appointment payload: %s", exc)
        logger.info(
            "Fetched %d appointments for %s..%s", len(appointments), start.isoformat(), end.isoformat()
        )
        return appointments
