# tzscheduler/config.py
import os

def _get_bool(env_name: str, default: bool = False) -> bool:
    val = os.environ.get(env_name)
    if val is None:
        return default
    return val.strip().lower() not in {"0", "false", "no", "off", ""}

def _split_csv(env_name: str, default: str = "") -> list:
    raw = os.environ.get(env_name, default)
    return [s.strip().lower() for s in raw.split(",") if s.strip()]

TIMEAPI_BASE_URL = os.environ.get("TIMEAPI_BASE_URL", "https://timeapi.io").rstrip("/")
TIMEAPI_TIMEOUT = float(os.environ.get("TIMEAPI_TIMEOUT", "30"))

# Hosts the converter may call, e.g. "timeapi.io,www.timeapi.io"
ALLOWED_OUTGOING_DOMAINS = _split_csv("ALLOWED_OUTGOING_DOMAINS", "timeapi.io")

# Zone used to read naive date-times as wall-clock instants
SCHEDULER_LOCAL_TZ = os.environ.get("SCHEDULER_LOCAL_TZ", "UTC")
SCHEDULER_CONCURRENT_CONVERSIONS = _get_bool("SCHEDULER_CONCURRENT_CONVERSIONS", False)

TOOLS_KEY = os.environ.get("TOOLS_KEY")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
