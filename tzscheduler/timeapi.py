# tzscheduler/timeapi.py
import logging
from urllib.parse import urlparse

import requests
from pydantic import ValidationError

from tzscheduler import config
from tzscheduler.models import TimeZoneConversion

log = logging.getLogger(__name__)

CONVERT_PATH = "/api/Conversion/ConvertTimeZone"
INVALID_RESPONSE = "Invalid DateTime format from API."

class TimeApiError(Exception):
    pass

def _check_host(url: str):
    host = (urlparse(url).hostname or "").lower()
    if host not in config.ALLOWED_OUTGOING_DOMAINS:
        raise TimeApiError(f"Outgoing domain not allowed: {host or url}")

def convert_time_zone(from_zone: str, date_time: str, to_zone: str) -> TimeZoneConversion:
    """
    Ask timeapi.io to re-express date_time (yyyy-MM-dd HH:mm:ss, wall clock in
    from_zone) in to_zone. One request, no retry.
    """
    url = f"{config.TIMEAPI_BASE_URL}{CONVERT_PATH}"
    _check_host(url)

    payload = {
        "fromTimeZone": from_zone,
        "dateTime": date_time,
        "toTimeZone": to_zone,
        "dstAmbiguity": "",
    }
    log.debug("POST %s %s", url, payload)
    r = requests.post(url, json=payload, timeout=config.TIMEAPI_TIMEOUT)
    if not r.ok:
        log.warning("Time API returned %s for %s -> %s: %s", r.status_code, from_zone, to_zone, r.text)
        raise TimeApiError(INVALID_RESPONSE)

    try:
        conversion = TimeZoneConversion.model_validate(r.json())
    except (ValueError, ValidationError) as e:
        log.warning("Unreadable time API response: %s", e)
        raise TimeApiError(INVALID_RESPONSE) from e

    if conversion.conversion_result is None:
        log.warning("Time API response has no conversionResult: %s", r.text)
        raise TimeApiError(INVALID_RESPONSE)
    return conversion
