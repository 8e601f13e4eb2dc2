from __future__ import annotations

import json
from typing import Any
from unittest.mock import Mock, patch

import pytest
import requests

from muni_board.data.stop_monitoring_client import (
    StopMonitoringClient,
    StopMonitoringClientError,
    records_from_payload,
)
from muni_board.logic.models import ArrivalRecord


@pytest.fixture()
def client() -> StopMonitoringClient:
    return StopMonitoringClient("test-key", base_url="http://api.511.org/transit")


def _visit(
    stop: str = "15419",
    line: str | None = "N",
    direction: str | None = "IB",
    display: str | None = "Caltrain",
    name: str | None = None,
    expected: str | None = "2024-05-01T12:00:00Z",
) -> dict[str, Any]:
    return {
        "MonitoredVehicleJourney": {
            "LineRef": line,
            "DirectionRef": direction,
            "DestinationName": name,
            "MonitoredCall": {
                "StopPointRef": stop,
                "ExpectedArrivalTime": expected,
                "DestinationDisplay": display,
            },
        }
    }


def _payload(*visits: dict[str, Any]) -> dict[str, Any]:
    return {
        "ServiceDelivery": {
            "StopMonitoringDelivery": {"MonitoredStopVisit": list(visits)},
        }
    }


def _mock_response(status_code: int, body: bytes = b"", text: str = "") -> Mock:
    response = Mock()
    response.status_code = status_code
    response.content = body
    response.text = text
    return response


def test_records_from_payload_decodes_visit() -> None:
    records = records_from_payload(_payload(_visit()))

    assert records == [
        ArrivalRecord(
            stop_id="15419",
            line="N",
            direction="IB",
            destination="Caltrain",
            expected_arrival="2024-05-01T12:00:00Z",
        )
    ]


def test_records_from_payload_falls_back_to_destination_name() -> None:
    records = records_from_payload(_payload(_visit(display=None, name="Ocean Beach")))

    assert records[0].destination == "Ocean Beach"


def test_records_from_payload_keeps_missing_fields_as_none() -> None:
    records = records_from_payload(_payload(_visit(line=None, expected=None)))

    assert records[0].line is None
    assert records[0].expected_arrival is None


def test_records_from_payload_accepts_list_delivery() -> None:
    payload = {"ServiceDelivery": {"StopMonitoringDelivery": [{"MonitoredStopVisit": [_visit()]}]}}

    assert len(records_from_payload(payload)) == 1


def test_records_from_payload_empty_delivery() -> None:
    payload = {"ServiceDelivery": {"StopMonitoringDelivery": {}}}

    assert records_from_payload(payload) == []


def test_records_from_payload_missing_delivery_raises() -> None:
    with pytest.raises(StopMonitoringClientError):
        records_from_payload({"ServiceDelivery": {}})


def test_get_arrivals_strips_byte_order_mark(client: StopMonitoringClient) -> None:
    body = json.dumps(_payload(_visit())).encode("utf-8-sig")
    with patch("requests.get", return_value=_mock_response(200, body)) as mock_get:
        records = client.get_arrivals("SF")

    assert [record.line for record in records] == ["N"]
    mock_get.assert_called_once()
    args, kwargs = mock_get.call_args
    assert args[0] == "http://api.511.org/transit/StopMonitoring"
    assert kwargs["params"] == {"api_key": "test-key", "agency": "SF", "format": "json"}


def test_non_200_raises_client_error(client: StopMonitoringClient) -> None:
    with patch("requests.get", return_value=_mock_response(401, text="Invalid API key")):
        with pytest.raises(StopMonitoringClientError) as exc_info:
            client.get_arrivals("SF")

    assert "401" in str(exc_info.value)


def test_network_error_raises_client_error(client: StopMonitoringClient) -> None:
    with patch("requests.get", side_effect=requests.exceptions.ConnectionError("boom")):
        with pytest.raises(StopMonitoringClientError):
            client.get_arrivals("SF")


def test_invalid_json_raises_client_error(client: StopMonitoringClient) -> None:
    with patch("requests.get", return_value=_mock_response(200, b"<html>oops</html>")):
        with pytest.raises(StopMonitoringClientError):
            client.get_arrivals("SF")
