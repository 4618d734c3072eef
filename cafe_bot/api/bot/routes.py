"""
Bot Framework webhook endpoint for the Cafe Bot.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.responses import JSONResponse
from botbuilder.schema import Activity

from cafe_bot.api.bot.runtime import BotRuntime

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["bot"])


def get_runtime(request: Request) -> BotRuntime:
    """Dependency returning the runtime created at startup."""
    runtime = getattr(request.app.state, "runtime", None)
    if runtime is None:
        raise HTTPException(status_code=503, detail="Bot runtime not initialized")
    return runtime


@router.post("/messages")
async def messages(request: Request, runtime: BotRuntime = Depends(get_runtime)):
    """
    Bot Framework messaging endpoint.
    Authentication is validated by the adapter from the Authorization header.
    """
    if "application/json" not in request.headers.get("Content-Type", ""):
        raise HTTPException(status_code=415, detail="Content-Type must be application/json")

    try:
        body = await request.json()
    except ValueError as e:
        logger.warning(f"Rejected activity with malformed JSON body: {e}")
        raise HTTPException(status_code=400, detail="Request body is not valid JSON")

    if not isinstance(body, dict):
        raise HTTPException(status_code=400, detail="Request body must be a JSON object")

    activity = Activity().deserialize(body)
    auth_header = request.headers.get("Authorization", "")

    logger.info(f"Received activity: {activity.type}")

    try:
        response = await runtime.adapter.process_activity(activity, auth_header, runtime.on_turn)
    except PermissionError as e:
        logger.warning(f"Rejected activity with invalid credentials: {e}")
        raise HTTPException(status_code=401, detail="Unauthorized")

    if response:
        return JSONResponse(content=response.body, status_code=response.status)

    return Response(status_code=201)
