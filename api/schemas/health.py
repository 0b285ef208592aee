# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-10
# Description: health.py
# -----------------------------------------------------------------------------
from typing import Dict, Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    message: str


class SmokeTestSummary(BaseModel):
    total: int
    passed: int
    failed: int


class DeepHealthResponse(BaseModel):
    status: str
    results: Dict[str, bool]
    summary: SmokeTestSummary


class KeepAliveDatabase(BaseModel):
    pinged: bool
    success: bool
    message: str
    last_ping: Optional[str] = None
    next_ping_due: Optional[str] = None
    days_until_next_ping: Optional[int] = None


class KeepAliveResponse(BaseModel):
    status: str
    timestamp: str
    database: KeepAliveDatabase
