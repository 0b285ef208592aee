# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-13
# Description: companies.py
# -----------------------------------------------------------------------------
import logging
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_company_service, get_current_user_id, get_pagination
from api.schemas.common import Page
from api.schemas.companies import (
    CompanyCreateRequest,
    CompanyDetail,
    CompanyInfo,
    CompanyListItem,
    CompanyUpdateRequest,
)
from services.CRMCompanyService import CRMCompanyService
from utility.pagination import PaginationParams

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/companies", tags=["companies"])


@router.get("", response_model=Page[CompanyListItem])
def list_companies(
    sort_by: Optional[Literal["name", "created_at"]] = None,
    sort_order: Literal["asc", "desc"] = "asc",
    query: Optional[str] = None,
    pagination: PaginationParams = Depends(get_pagination),
    user_id: str = Depends(get_current_user_id),
    svc: CRMCompanyService = Depends(get_company_service),
):
    return svc.list(user_id, pagination, sort_by=sort_by, sort_order=sort_order, query=query)


@router.get("/{company_id}", response_model=CompanyDetail)
def get_company(
    company_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: CRMCompanyService = Depends(get_company_service),
):
    company = svc.get(user_id, company_id)
    if company is None:
        raise HTTPException(status_code=404, detail="Company not found")
    return company


@router.post("", response_model=CompanyInfo, status_code=201)
def create_company(
    req: CompanyCreateRequest,
    user_id: str = Depends(get_current_user_id),
    svc: CRMCompanyService = Depends(get_company_service),
):
    logger.info("POST /companies name='%s'", req.name)
    return svc.create(user_id, req.model_dump())


@router.put("/{company_id}", response_model=CompanyInfo)
def update_company(
    company_id: str,
    req: CompanyUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    svc: CRMCompanyService = Depends(get_company_service),
):
    company = svc.update(user_id, company_id, req.model_dump(exclude_unset=True))
    if company is None:
        raise HTTPException(status_code=404, detail="Company not found")
    return company


@router.delete("/{company_id}", response_model=CompanyInfo)
def delete_company(
    company_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: CRMCompanyService = Depends(get_company_service),
):
    company = svc.delete(user_id, company_id)
    if company is None:
        raise HTTPException(status_code=404, detail="Company not found")
    return company
