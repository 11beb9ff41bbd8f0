"""Shared fixtures: a canned timeapi.io stand-in and a scheduling request."""

from unittest.mock import MagicMock, patch

import pytest

from tzscheduler import config
from tzscheduler.models import SchedulingRequest


def make_response(status_code=200, body=None):
    """Build a requests.Response look-alike."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 300
    resp.text = str(body)
    if isinstance(body, Exception):
        resp.json.side_effect = body
    else:
        resp.json.return_value = body
    return resp


def conversion_body(from_zone, from_dt, to_zone, to_dt):
    return {
        "fromTimezone": from_zone,
        "fromDateTime": from_dt,
        "toTimeZone": to_zone,
        "conversionResult": {
            "year": int(to_dt[0:4]),
            "month": int(to_dt[5:7]),
            "day": int(to_dt[8:10]),
            "hour": int(to_dt[11:13]),
            "minute": int(to_dt[14:16]),
            "seconds": 0,
            "milliSeconds": 0,
            "dateTime": to_dt,
            "date": f"{to_dt[5:7]}/{to_dt[8:10]}/{to_dt[0:4]}",
            "time": to_dt[11:16],
            "timeZone": to_zone,
            "dstActive": True,
        },
    }


# 2024-08-14 23:06 in New York
CONVERTED = {
    "Europe/London": "2024-08-15T04:06:00",
    "America/Los_Angeles": "2024-08-14T20:06:00",
    "America/New_York": "2024-08-14T23:06:00",
}


@pytest.fixture(autouse=True)
def utc_host(monkeypatch):
    """Pin the host zone and config so results do not depend on the machine."""
    monkeypatch.setattr(config, "SCHEDULER_LOCAL_TZ", "UTC")
    monkeypatch.setattr(config, "SCHEDULER_CONCURRENT_CONVERSIONS", False)
    monkeypatch.setattr(config, "TIMEAPI_BASE_URL", "https://timeapi.io")
    monkeypatch.setattr(config, "ALLOWED_OUTGOING_DOMAINS", ["timeapi.io"])
    monkeypatch.setattr(config, "TOOLS_KEY", None)


@pytest.fixture
def time_api():
    """Patch requests.post in the converter; answers from CONVERTED by toTimeZone."""

    def answer(url, json=None, timeout=None):
        to_zone = json["toTimeZone"]
        if to_zone not in CONVERTED:
            return make_response(400, {"message": f"Invalid timezone {to_zone}"})
        return make_response(
            200,
            conversion_body(json["fromTimeZone"], json["dateTime"].replace(" ", "T"), to_zone, CONVERTED[to_zone]),
        )

    with patch("tzscheduler.timeapi.requests.post", side_effect=answer) as mock_post:
        yield mock_post


@pytest.fixture
def meeting_request():
    return SchedulingRequest(
        meeting_time="2024-08-14T23:06:00Z",
        user_timezone="America/Los_Angeles",
        from_timezone="America/New_York",
        target_timezone="Europe/London",
        duration_minutes=30,
    )
