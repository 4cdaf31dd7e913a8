"""
요청 스키마 (Pydantic)

Web API 요청 데이터 검증
금액/상태 값의 도메인 검증은 Engine에서 수행 (오류 시 400 + 필드 이름)
"""

from typing import Any

from pydantic import BaseModel, Field


class CreditLineCreateRequest(BaseModel):
    """Credit line 생성 요청"""

    id: str = Field(..., min_length=1, max_length=256, description="Credit line ID")
    status: str | None = Field(default=None, description="초기 상태 (active/suspended/closed, 기본 active)")
    borrower: str | None = Field(default=None, max_length=256, description="차입자 (지갑 주소 등)")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"id": "line-1", "borrower": "wallet_aaa"},
            ]
        }
    }


class MovementRequest(BaseModel):
    """인출/상환 요청"""

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {"borrowerId": "wallet_aaa", "amount": "250.00", "currency": "USDC"},
            ]
        },
    }

    borrower_id: str = Field(..., alias="borrowerId", min_length=1, description="차입자 ID")
    # 원시 JSON 값 그대로 전달 (bool 등 형 변환 없이 Engine에서 검증)
    amount: Any = Field(..., description="금액 (양수, 숫자 또는 숫자 문자열)")
    currency: str | None = Field(default=None, max_length=16, description="통화")
