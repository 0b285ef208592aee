# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-13
# Description: threads.py
# -----------------------------------------------------------------------------
from typing import Any, List, Optional

from pydantic import BaseModel, Field


class ThreadCreateRequest(BaseModel):
    name: Optional[str] = Field(None, max_length=200)
    first_message: Optional[str] = None


class ThreadInfo(BaseModel):
    id: str
    name: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class MessageInfo(BaseModel):
    id: str
    thread_id: str
    role: str
    content: Optional[str] = None
    tool_calls: Optional[Any] = None
    tool_results: Optional[Any] = None
    created_at: Optional[str] = None


class ThreadDetail(ThreadInfo):
    messages: List[MessageInfo] = []
