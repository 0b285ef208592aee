# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-13
# Description: companies.py
# -----------------------------------------------------------------------------
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class CompanyCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=300)
    website: Optional[str] = None
    industry: Optional[str] = None
    address: Optional[str] = None
    description: Optional[str] = None


class CompanyUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=300)
    website: Optional[str] = None
    industry: Optional[str] = None
    address: Optional[str] = None
    description: Optional[str] = None


class CompanyInfo(BaseModel):
    id: str
    name: str
    website: Optional[str] = None
    industry: Optional[str] = None
    address: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class CompanyContact(BaseModel):
    id: str
    first_name: str
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    job_title: Optional[str] = None


class CompanyNote(BaseModel):
    id: str
    content: str
    created_at: Optional[str] = None


class CompanyListItem(CompanyInfo):
    contacts: List[CompanyContact] = []


class CompanyDetail(CompanyInfo):
    contacts: List[CompanyContact] = []
    notes: List[CompanyNote] = []
