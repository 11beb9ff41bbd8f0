# app.py
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Header, HTTPException
from pydantic import BaseModel, ValidationError

from tzscheduler import config
from tzscheduler.models import SchedulingOutputs, SchedulingRequest
from tzscheduler.scheduler import schedule_meeting

logging.basicConfig(level=config.LOG_LEVEL)
log = logging.getLogger(__name__)

app = FastAPI()

TOOL_NAME = "time_zone_scheduler"

class CallBody(BaseModel):
    name: str
    arguments: Dict[str, Any]

@app.get("/health")
def health():
    return {"ok": True}

@app.get("/tools/list")
def tools_list():
    return {
        "tools": [
            {
                "name": TOOL_NAME,
                "title": "Time Zone-Aware Meeting Scheduler",
                "description": "Converts a proposed meeting time to the participant's time zone and calculates the end time.",
                "input_schema": SchedulingRequest.model_json_schema(),
                "output_schema": SchedulingOutputs.model_json_schema(),
            }
        ]
    }

@app.post("/tools/call")
def tools_call(body: CallBody, x_tool_key: Optional[str] = Header(None)):
    # simple auth: require the shared secret header when one is configured
    if config.TOOLS_KEY and x_tool_key != config.TOOLS_KEY:
        raise HTTPException(status_code=401, detail="Bad tool key")

    if body.name != TOOL_NAME:
        raise HTTPException(status_code=400, detail=f"Unknown tool: {body.name}")

    try:
        request = SchedulingRequest.model_validate(body.arguments)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))

    return schedule_meeting(request).to_payload()

@app.post("/schedule")
def schedule(body: SchedulingRequest):
    """
    Same computation as the tool call, without the tool envelope.
    Failures come back as {"error": ...} with status 200.
    """
    return schedule_meeting(body).to_payload()
