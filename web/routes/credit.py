"""
Credit line 라우트

Credit line 생성/조회/상태 전이/자금 이동 및 거래 내역 API
"""

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from web.dependencies import get_credit_service, require_admin
from web.models.requests import CreditLineCreateRequest, MovementRequest
from web.models.responses import (
    CreditLineEnvelope,
    CreditLineListResponse,
    ErrorResponse,
    TransactionPageEnvelope,
)
from web.services.credit_service import CreditService

router = APIRouter(prefix="/api/credit", tags=["Credit"])

_ERRORS = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
}


@router.get("/lines", response_model=CreditLineListResponse)
async def list_credit_lines(
    page: str | None = Query(default=None, description="페이지 (최소 1로 클램프)"),
    page_size: str | None = Query(default=None, alias="pageSize", description="페이지 크기 (1~100 클램프, 기본 10)"),
    status: str | None = Query(default=None, description="상태 필터 (정확히 일치)"),
    borrower: str | None = Query(default=None, description="차입자 필터 (부분 일치)"),
    sort_by: str | None = Query(default=None, alias="sortBy", description="정렬 키 (기본 createdAt)"),
    sort_direction: str | None = Query(default=None, alias="sortDirection", description="asc/desc"),
    service: CreditService = Depends(get_credit_service),
):
    """Credit line 목록 조회

    잘못된 페이지 값은 오류 없이 클램프/기본값 처리.
    """
    return service.list_lines({
        "page": page,
        "pageSize": page_size,
        "status": status,
        "borrower": borrower,
        "sortBy": sort_by,
        "sortDirection": sort_direction,
    })


@router.post("/lines", status_code=201, response_model=CreditLineEnvelope, responses=_ERRORS)
async def create_credit_line(
    request: CreditLineCreateRequest,
    service: CreditService = Depends(get_credit_service),
):
    """Credit line 생성 (중복 id는 409)"""
    return service.create_line(request.id, request.status, request.borrower)


@router.get("/lines/{credit_line_id}", response_model=CreditLineEnvelope, responses=_ERRORS)
async def get_credit_line(
    credit_line_id: str = Path(..., description="Credit line ID"),
    service: CreditService = Depends(get_credit_service),
):
    """Credit line 단건 조회"""
    line = service.get_line(credit_line_id)
    if line is None:
        raise HTTPException(status_code=404, detail=f'Credit line "{credit_line_id}" not found.')
    return {"data": line}


@router.post(
    "/lines/{credit_line_id}/suspend",
    response_model=CreditLineEnvelope,
    responses=_ERRORS,
    dependencies=[Depends(require_admin)],
)
async def suspend_credit_line(
    credit_line_id: str = Path(..., description="Credit line ID"),
    service: CreditService = Depends(get_credit_service),
):
    """Credit line 정지 (관리자, active → suspended)"""
    return service.suspend_line(credit_line_id)


@router.post(
    "/lines/{credit_line_id}/close",
    response_model=CreditLineEnvelope,
    responses=_ERRORS,
    dependencies=[Depends(require_admin)],
)
async def close_credit_line(
    credit_line_id: str = Path(..., description="Credit line ID"),
    service: CreditService = Depends(get_credit_service),
):
    """Credit line 종료 (관리자, active/suspended → closed)"""
    return service.close_line(credit_line_id)


@router.post("/lines/{credit_line_id}/draw", response_model=CreditLineEnvelope, responses=_ERRORS)
async def draw_credit_line(
    request: MovementRequest,
    credit_line_id: str = Path(..., description="Credit line ID"),
    service: CreditService = Depends(get_credit_service),
):
    """인출 기록 (상태 변경 없음)"""
    return service.draw(credit_line_id, request.borrower_id, request.amount, request.currency)


@router.post("/lines/{credit_line_id}/repay", response_model=CreditLineEnvelope, responses=_ERRORS)
async def repay_credit_line(
    request: MovementRequest,
    credit_line_id: str = Path(..., description="Credit line ID"),
    service: CreditService = Depends(get_credit_service),
):
    """상환 기록 (상태 변경 없음)"""
    return service.repay(credit_line_id, request.borrower_id, request.amount, request.currency)


@router.get(
    "/lines/{credit_line_id}/transactions",
    response_model=TransactionPageEnvelope,
    responses=_ERRORS,
)
async def get_transactions(
    credit_line_id: str = Path(..., description="Credit line ID"),
    type: str | None = Query(default=None, description="draw/repayment/status_change"),
    from_: str | None = Query(default=None, alias="from", description="시작 시각 (ISO-8601, 포함)"),
    to: str | None = Query(default=None, description="종료 시각 (ISO-8601, 포함)"),
    page: str | None = Query(default=None, description="페이지 (1 이상 정수, 기본 1)"),
    limit: str | None = Query(default=None, description="페이지 크기 (1~100 정수, 기본 20)"),
    service: CreditService = Depends(get_credit_service),
):
    """거래 내역 조회

    잘못된 필터/페이지 값은 400 (클램프하지 않음).
    """
    return service.get_transactions(
        credit_line_id,
        {"type": type, "from": from_, "to": to},
        {"page": page, "limit": limit},
    )
