"""511.org SIRI stop-monitoring API client."""

from __future__ import annotations

import json
from typing import Any

import requests

from muni_board.logic.models import ArrivalRecord

SF511_API_BASE = "http://api.511.org/transit"


class StopMonitoringClientError(Exception):
    """Raised when a stop-monitoring request fails or returns an unusable response."""


def _text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def record_from_visit(visit: dict[str, Any]) -> ArrivalRecord:
    """Decode one MonitoredStopVisit into an ArrivalRecord."""
    journey = visit.get("MonitoredVehicleJourney") or {}
    call = journey.get("MonitoredCall") or {}
    destination = call.get("DestinationDisplay") or journey.get("DestinationName")
    return ArrivalRecord(
        stop_id=_text(call.get("StopPointRef")) or "",
        line=_text(journey.get("LineRef")),
        direction=_text(journey.get("DirectionRef")),
        destination=_text(destination),
        expected_arrival=_text(call.get("ExpectedArrivalTime")),
    )


def records_from_payload(payload: dict[str, Any]) -> list[ArrivalRecord]:
    """Decode a StopMonitoring response body into arrival records."""
    try:
        delivery = payload["ServiceDelivery"]["StopMonitoringDelivery"]
    except (KeyError, TypeError) as exc:
        raise StopMonitoringClientError("Stop-monitoring response is missing its delivery") from exc

    # Some responses wrap the delivery in a single-element list.
    if isinstance(delivery, list):
        delivery = delivery[0] if delivery else {}
    if not isinstance(delivery, dict):
        raise StopMonitoringClientError("Stop-monitoring delivery must be a mapping")

    visits = delivery.get("MonitoredStopVisit") or []
    return [record_from_visit(visit) for visit in visits if isinstance(visit, dict)]


class StopMonitoringClient:
    """Thin wrapper around the 511.org StopMonitoring endpoint using requests."""

    def __init__(
        self, api_key: str, base_url: str = SF511_API_BASE, timeout_seconds: float = 10
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds

    def get_arrivals(self, agency: str) -> list[ArrivalRecord]:
        """Fetch all monitored stop visits for an agency as arrival records."""
        payload = self._get("/StopMonitoring", params={"agency": agency, "format": "json"})
        return records_from_payload(payload)

    def _get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        url = f"{self._base_url}{path}"
        query = {"api_key": self._api_key, **(params or {})}
        try:
            response = requests.get(url, params=query, timeout=self._timeout_seconds)
        except requests.RequestException as exc:
            raise StopMonitoringClientError(f"Stop-monitoring request failed: {exc}") from exc

        if response.status_code != 200:
            body_text = response.text.strip()
            detail = f"Status {response.status_code}"
            if body_text:
                detail = f"{detail}, Body: {body_text}"
            raise StopMonitoringClientError(f"Stop-monitoring request failed: {detail}")

        # The feed prefixes its JSON body with a UTF-8 byte-order mark.
        try:
            payload = json.loads(response.content.decode("utf-8-sig"))
        except (UnicodeDecodeError, ValueError) as exc:
            raise StopMonitoringClientError("Stop-monitoring response was not valid JSON") from exc

        if not isinstance(payload, dict):
            raise StopMonitoringClientError("Stop-monitoring response must be a JSON object")
        return payload


__all__ = [
    "StopMonitoringClient",
    "StopMonitoringClientError",
    "record_from_visit",
    "records_from_payload",
]
