from pydantic import BaseModel, ConfigDict, Field
from typing import Annotated, Literal, Optional, Union

class SchedulingRequest(BaseModel):
    meeting_time: str = Field(description="Proposed meeting time")
    user_timezone: str = Field(
        description="User's local date and time with timezone (e.g., 'August 14th, 2024 at 11:06 PM GMT+2')"
    )
    from_timezone: str = Field(description="Time zone proposed (e.g., 'America/New_York')")
    target_timezone: str = Field(description="Time zone of the meeting participant (e.g., 'Europe/London')")
    duration_minutes: float = Field(gt=0, description="Duration of the meeting in minutes")

class ConversionResult(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    date_time: str = Field(alias="dateTime")   # e.g. 2024-08-15T04:06:00, no offset
    date: Optional[str] = None                 # MM/dd/yyyy
    time: Optional[str] = None                 # HH:mm
    time_zone: Optional[str] = Field(default=None, alias="timeZone")
    dst_active: Optional[bool] = Field(default=None, alias="dstActive")

class TimeZoneConversion(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    from_timezone: Optional[str] = Field(default=None, alias="fromTimezone")
    from_date_time: Optional[str] = Field(default=None, alias="fromDateTime")
    to_timezone: Optional[str] = Field(default=None, alias="toTimeZone")
    conversion_result: Optional[ConversionResult] = Field(default=None, alias="conversionResult")

class SchedulingOutputs(BaseModel):
    readable_time_origin: str = Field(description="Readable meeting time in the proposed time zone")
    readable_time_participant: str = Field(description="Readable meeting time in the participant's time zone")
    calendar_meeting_time: int = Field(description="Meeting time in the user's timezone (epoch seconds)")
    calendar_end_time: int = Field(description="End time of the meeting in the user's time zone (epoch seconds)")

class SchedulingSuccess(BaseModel):
    status: Literal["ok"] = "ok"
    outputs: SchedulingOutputs

    def to_payload(self) -> dict:
        return {"outputs": self.outputs.model_dump()}

class SchedulingFailure(BaseModel):
    status: Literal["error"] = "error"
    error: str

    def to_payload(self) -> dict:
        return {"error": self.error}

SchedulingOutcome = Annotated[Union[SchedulingSuccess, SchedulingFailure], Field(discriminator="status")]
