"""
web/routes/credit.py, web/routes/audit.py 테스트

HTTP 상태 매핑, 관리자 인증, 감사 로그 기록 테스트
"""

from typing import Any

import httpx
import pytest
import pytest_asyncio

from core.config.loader import AppSettings
from core.credit.engine import CreditLineEngine
from core.types import TransactionType
from web.app import create_app
from web.dependencies import get_app_settings
from web.services.audit_service import AuditLogService

ADMIN = {"X-Admin-Api-Key": "test-secret"}

pytestmark = pytest.mark.asyncio


class FailingAuditService(AuditLogService):
    """항상 실패하는 감사 로그 저장소"""

    def record(self, *args: Any, **kwargs: Any):
        raise RuntimeError("audit sink down")


def _make_client(engine: CreditLineEngine, audit: AuditLogService) -> httpx.AsyncClient:
    app = create_app(engine, audit)
    app.dependency_overrides[get_app_settings] = lambda: AppSettings(admin_api_keys=("test-secret",))
    transport = httpx.ASGITransport(app=app)
    return httpx.AsyncClient(transport=transport, base_url="http://test")


@pytest.fixture
def audit() -> AuditLogService:
    return AuditLogService()


@pytest_asyncio.fixture
async def client(engine: CreditLineEngine, audit: AuditLogService) -> httpx.AsyncClient:
    """테스트용 HTTP 클라이언트"""
    async with _make_client(engine, audit) as client:
        yield client


async def _create(client: httpx.AsyncClient, credit_line_id: str = "line-1", **body: Any) -> httpx.Response:
    response = await client.post("/api/credit/lines", json={"id": credit_line_id, **body})
    assert response.status_code == 201
    return response


class TestHealth:
    """헬스 체크 테스트"""

    async def test_health(self, client: httpx.AsyncClient) -> None:
        """상태/버전 반환"""
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert response.json()["version"] == "1.0.0"


class TestCreateAndGet:
    """생성/조회 테스트"""

    async def test_create(self, client: httpx.AsyncClient) -> None:
        """201 + created 이벤트"""
        response = await _create(client, borrower="wallet_aaa")

        data = response.json()["data"]
        assert data["id"] == "line-1"
        assert data["status"] == "active"
        assert data["borrower"] == "wallet_aaa"
        assert [e["action"] for e in data["events"]] == ["created"]

    async def test_create_duplicate_conflict(self, client: httpx.AsyncClient) -> None:
        """중복 id → 409"""
        await _create(client)

        response = await client.post("/api/credit/lines", json={"id": "line-1"})

        assert response.status_code == 409
        assert "already exists" in response.json()["error"]

    async def test_create_invalid_status(self, client: httpx.AsyncClient) -> None:
        """잘못된 초기 상태 → 400 + field"""
        response = await client.post("/api/credit/lines", json={"id": "x", "status": "frozen"})

        assert response.status_code == 400
        assert response.json()["field"] == "status"

    async def test_create_missing_body_field(self, client: httpx.AsyncClient) -> None:
        """요청 스키마 오류 → 400"""
        response = await client.post("/api/credit/lines", json={})

        assert response.status_code == 400
        assert "error" in response.json()

    async def test_get_not_found(self, client: httpx.AsyncClient) -> None:
        """없는 id → 404"""
        response = await client.get("/api/credit/lines/missing")

        assert response.status_code == 404
        assert response.json() == {"error": 'Credit line "missing" not found.'}

    async def test_list_clamps(self, client: httpx.AsyncClient) -> None:
        """목록 조회는 잘못된 값을 클램프"""
        await _create(client, "a")
        await _create(client, "b")

        response = await client.get("/api/credit/lines", params={"page": "0", "pageSize": "1000"})

        assert response.status_code == 200
        body = response.json()
        assert body["page"] == 1
        assert body["pageSize"] == 100
        assert body["total"] == 2
        assert [line["id"] for line in body["data"]] == ["a", "b"]

    @pytest.mark.parametrize("sort_by", ["events", "borrower", "nonexistent"])
    async def test_list_any_sort_key(self, client: httpx.AsyncClient, sort_by: str) -> None:
        """어떤 sortBy 값도 500이 되지 않음"""
        await _create(client, "a")
        await _create(client, "b", borrower="wallet_bbb")

        response = await client.get("/api/credit/lines", params={"sortBy": sort_by})

        assert response.status_code == 200
        assert response.json()["total"] == 2


class TestAdminTransitions:
    """관리자 상태 전이 테스트"""

    async def test_suspend_requires_admin(self, client: httpx.AsyncClient) -> None:
        """키 없음/불일치 → 401, 상태 불변"""
        await _create(client)

        missing = await client.post("/api/credit/lines/line-1/suspend")
        wrong = await client.post("/api/credit/lines/line-1/suspend", headers={"X-Admin-Api-Key": "nope"})

        assert missing.status_code == 401
        assert wrong.status_code == 401
        assert "error" in missing.json()
        line = (await client.get("/api/credit/lines/line-1")).json()["data"]
        assert line["status"] == "active"

    async def test_suspend_then_close(self, client: httpx.AsyncClient) -> None:
        """active → suspended → closed"""
        await _create(client)

        suspended = await client.post("/api/credit/lines/line-1/suspend", headers=ADMIN)
        closed = await client.post("/api/credit/lines/line-1/close", headers=ADMIN)

        assert suspended.status_code == 200
        assert suspended.json()["message"] == "Credit line suspended."
        assert closed.json()["data"]["status"] == "closed"
        assert [e["action"] for e in closed.json()["data"]["events"]] == ["created", "suspended", "closed"]

    async def test_invalid_transition_conflict(self, client: httpx.AsyncClient) -> None:
        """closed에서 suspend → 409"""
        await _create(client)
        await client.post("/api/credit/lines/line-1/close", headers=ADMIN)

        response = await client.post("/api/credit/lines/line-1/suspend", headers=ADMIN)

        assert response.status_code == 409
        assert response.json()["error"] == 'Cannot suspend credit line: current status is "closed".'

    async def test_transition_unknown_line(self, client: httpx.AsyncClient) -> None:
        """없는 id → 404"""
        response = await client.post("/api/credit/lines/missing/close", headers=ADMIN)

        assert response.status_code == 404


class TestMovements:
    """인출/상환 테스트"""

    async def test_draw_and_repay(self, client: httpx.AsyncClient) -> None:
        """거래 기록"""
        await _create(client)

        draw = await client.post(
            "/api/credit/lines/line-1/draw",
            json={"borrowerId": "wallet_aaa", "amount": "250.00", "currency": "USDC"},
        )
        repay = await client.post(
            "/api/credit/lines/line-1/repay",
            json={"borrowerId": "wallet_aaa", "amount": 100},
        )

        assert draw.status_code == 200
        assert draw.json()["message"] == "Draw recorded."
        assert repay.json()["message"] == "Repayment recorded."

    @pytest.mark.parametrize("amount", ["0", "-1", "abc", 0, True, False, None, [1], {"value": 1}])
    async def test_invalid_amount(self, client: httpx.AsyncClient, amount: object) -> None:
        """잘못된 금액 → 400 + field"""
        await _create(client)

        response = await client.post(
            "/api/credit/lines/line-1/draw",
            json={"borrowerId": "wallet_aaa", "amount": amount},
        )

        assert response.status_code == 400
        assert response.json()["field"] == "amount"

    async def test_boolean_amount_not_recorded(
        self,
        client: httpx.AsyncClient,
        engine: CreditLineEngine,
    ) -> None:
        """amount=true는 1로 변환되지 않고 거부"""
        await _create(client)

        response = await client.post(
            "/api/credit/lines/line-1/draw",
            json={"borrowerId": "wallet_aaa", "amount": True},
        )

        assert response.status_code == 400
        assert engine.ledger.count("line-1", TransactionType.DRAW) == 0

    async def test_draw_unknown_line(self, client: httpx.AsyncClient) -> None:
        """없는 id → 404"""
        response = await client.post(
            "/api/credit/lines/missing/draw",
            json={"borrowerId": "wallet_aaa", "amount": "1"},
        )

        assert response.status_code == 404


class TestTransactions:
    """거래 조회 테스트"""

    async def test_list_transactions(self, client: httpx.AsyncClient) -> None:
        """전체 거래 + 페이지 정보"""
        await _create(client)
        await client.post("/api/credit/lines/line-1/draw", json={"borrowerId": "w", "amount": "5"})

        response = await client.get("/api/credit/lines/line-1/transactions")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["total"] == 2
        assert data["page"] == 1
        assert data["limit"] == 20
        assert data["totalPages"] == 1
        assert [tx["type"] for tx in data["transactions"]] == ["status_change", "draw"]
        assert data["transactions"][1]["amount"] == "5"

    async def test_type_filter(self, client: httpx.AsyncClient) -> None:
        """type 필터"""
        await _create(client)

        response = await client.get(
            "/api/credit/lines/line-1/transactions", params={"type": "draw"}
        )

        assert response.json()["data"]["total"] == 0
        assert response.json()["data"]["totalPages"] == 1

    @pytest.mark.parametrize(
        "params,field",
        [
            ({"type": "fee"}, "type"),
            ({"from": "nope"}, "from"),
            ({"to": "2024-99-99"}, "to"),
            ({"page": "0"}, "page"),
            ({"limit": "101"}, "limit"),
            ({"limit": "abc"}, "limit"),
        ],
    )
    async def test_invalid_query(self, client: httpx.AsyncClient, params: dict, field: str) -> None:
        """잘못된 필터/페이지 → 400 + field (클램프하지 않음)"""
        await _create(client)

        response = await client.get("/api/credit/lines/line-1/transactions", params=params)

        assert response.status_code == 400
        assert response.json()["field"] == field

    async def test_unknown_line_before_validation(self, client: httpx.AsyncClient) -> None:
        """없는 id는 잘못된 파라미터가 있어도 404"""
        response = await client.get(
            "/api/credit/lines/missing/transactions", params={"limit": "0"}
        )

        assert response.status_code == 404


class TestAudit:
    """감사 로그 테스트"""

    async def test_mutations_are_audited(self, client: httpx.AsyncClient, audit: AuditLogService) -> None:
        """성공한 변경만 기록, actor는 X-User"""
        await client.post("/api/credit/lines", json={"id": "line-1"}, headers={"X-User": "ops"})
        await client.post("/api/credit/lines/line-1/suspend", headers=ADMIN)
        await client.post("/api/credit/lines/line-1/suspend", headers=ADMIN)

        entries = audit.list("line-1")

        assert [e.action for e in entries] == ["CREDIT_LINE_CREATED", "CREDIT_LINE_SUSPENDED"]
        assert entries[0].actor == "ops"
        assert entries[1].actor == "anonymous"

    async def test_audit_logs_endpoint(self, client: httpx.AsyncClient) -> None:
        """관리자 전용 조회"""
        await _create(client)

        denied = await client.get("/api/audit/logs")
        allowed = await client.get("/api/audit/logs", params={"resourceId": "line-1"}, headers=ADMIN)

        assert denied.status_code == 401
        assert allowed.status_code == 200
        assert allowed.json()["data"][0]["resourceId"] == "line-1"

    async def test_audit_failure_does_not_affect_response(self, engine: CreditLineEngine) -> None:
        """감사 로그 기록 실패는 요청 결과에 영향 없음"""
        async with _make_client(engine, FailingAuditService()) as client:
            response = await client.post("/api/credit/lines", json={"id": "line-1"})

        assert response.status_code == 201
        assert engine.get("line-1") is not None
