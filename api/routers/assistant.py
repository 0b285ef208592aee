# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-13
# Description: assistant.py (tool-calling chat over server-sent events)
# -----------------------------------------------------------------------------
import json
import logging
from typing import Any, Dict, Iterator

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse

from api.dependencies import get_assistant_service, get_current_user_id
from api.schemas.assistant import AssistantMessageRequest, AssistantResponse
from chat.OpenAIChat import ChatProviderError
from services.CRMAssistantService import CRMAssistantService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/assistant", tags=["assistant"])


def _sse(events: Iterator[Dict[str, Any]]) -> Iterator[str]:
    for event in events:
        yield f"data: {json.dumps(event, default=str)}\n\n"


@router.post("/{thread_id}/messages")
def stream_message(
    thread_id: str,
    body: AssistantMessageRequest,
    user_id: str = Depends(get_current_user_id),
    svc: CRMAssistantService = Depends(get_assistant_service),
) -> StreamingResponse:
    logger.info("POST /assistant/%s/messages (stream)", thread_id)
    try:
        events = svc.run(user_id, thread_id, body.content)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return StreamingResponse(
        _sse(events),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )


@router.post("/{thread_id}/messages/sync", response_model=AssistantResponse)
def send_message(
    thread_id: str,
    body: AssistantMessageRequest,
    user_id: str = Depends(get_current_user_id),
    svc: CRMAssistantService = Depends(get_assistant_service),
) -> AssistantResponse:
    logger.info("POST /assistant/%s/messages/sync", thread_id)
    try:
        result = svc.respond(user_id, thread_id, body.content)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ChatProviderError as e:
        logger.error("Assistant provider failure (thread=%s): %s", thread_id, e)
        raise HTTPException(status_code=502, detail=f"Assistant failed: {e}")

    return AssistantResponse(**result)
