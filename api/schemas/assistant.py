# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-13
# Description: assistant.py
# -----------------------------------------------------------------------------
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class AssistantMessageRequest(BaseModel):
    content: str = Field(..., min_length=1)


class AssistantResponse(BaseModel):
    message: str
    tool_calls: Optional[List[Dict[str, Any]]] = None
