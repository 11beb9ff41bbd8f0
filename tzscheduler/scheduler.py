# tzscheduler/scheduler.py
import logging
import math
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from datetime import datetime
from zoneinfo import ZoneInfo

from tzscheduler import config
from tzscheduler.date_formatter import format_datetime_for_api, parse_datetime, readable_time
from tzscheduler.models import (
    SchedulingFailure,
    SchedulingOutcome,
    SchedulingOutputs,
    SchedulingRequest,
    SchedulingSuccess,
)
from tzscheduler.timeapi import convert_time_zone

log = logging.getLogger(__name__)

def _local_zone() -> ZoneInfo:
    return ZoneInfo(config.SCHEDULER_LOCAL_TZ)

def _as_local(dt: datetime) -> datetime:
    # naive values are wall-clock time in the host zone
    if dt.tzinfo is None:
        return dt.replace(tzinfo=_local_zone())
    return dt.astimezone(_local_zone())

def _convert_both(from_zone: str, formatted: str, participant_zone: str, calendar_zone: str):
    if config.SCHEDULER_CONCURRENT_CONVERSIONS:
        pool = ThreadPoolExecutor(max_workers=2)
        try:
            participant = pool.submit(convert_time_zone, from_zone, formatted, participant_zone)
            calendar = pool.submit(convert_time_zone, from_zone, formatted, calendar_zone)
            # the first failure wins; the other request is not waited for
            done, _ = wait((participant, calendar), return_when=FIRST_EXCEPTION)
            for future in (participant, calendar):
                if future in done and future.exception() is not None:
                    raise future.exception()
            return participant.result(), calendar.result()
        finally:
            pool.shutdown(wait=False, cancel_futures=True)
    participant = convert_time_zone(from_zone, formatted, participant_zone)
    calendar = convert_time_zone(from_zone, formatted, calendar_zone)
    return participant, calendar

def schedule_meeting(request: SchedulingRequest) -> SchedulingOutcome:
    """
    Convert a proposed meeting time for the participant and the calendar.

    Both conversions start from meeting_time in from_timezone. The participant
    view goes to target_timezone; the calendar timestamps come from the
    conversion to user_timezone. Any failure yields a SchedulingFailure and no
    partial outputs.
    """
    try:
        formatted = format_datetime_for_api(request.meeting_time)
        participant, calendar = _convert_both(
            request.from_timezone,
            formatted,
            request.target_timezone,
            request.user_timezone,
        )

        user_time = _as_local(parse_datetime(calendar.conversion_result.date_time))
        meeting_epoch = user_time.timestamp()
        calendar_meeting_time = math.floor(meeting_epoch)

        origin_time = _as_local(parse_datetime(request.meeting_time))
        participant_time = parse_datetime(participant.conversion_result.date_time)

        calendar_end_time = math.floor(meeting_epoch + request.duration_minutes * 60)

        outputs = SchedulingOutputs(
            readable_time_origin=readable_time(origin_time),
            readable_time_participant=readable_time(participant_time),
            calendar_meeting_time=calendar_meeting_time,
            calendar_end_time=calendar_end_time,
        )
    except Exception as e:
        log.warning("Scheduling failed for %r: %s", request.meeting_time, e)
        return SchedulingFailure(error=f"Error converting time: {e}")

    log.info("outputs %s", outputs.model_dump())
    return SchedulingSuccess(outputs=outputs)
