import pytest
from httpx import ASGITransport, AsyncClient

from koperasi_reports.database import get_ledger_store
from koperasi_reports.main import app


@pytest.fixture
def override_store():
    def _override(store):
        app.dependency_overrides[get_ledger_store] = lambda: store
    yield _override
    app.dependency_overrides.clear()


def client():
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.mark.asyncio
async def test_health_check():
    async with client() as ac:
        response = await ac.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_trial_balance_envelope(override_store, ledger_store):
    override_store(ledger_store)
    async with client() as ac:
        response = await ac.get("/api/reports/financial", params={
            "type": "trial_balance", "start_date": "2024-01-01", "end_date": "2024-01-31"
        })

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    body = response.json()
    assert body["success"] is True
    assert "generated_at" in body

    data = body["data"]
    assert data["report_type"] == "Trial Balance"
    kas = next(row for row in data["accounts"] if row["account_code"] == "1001")
    assert kas == {
        "account_code": "1001",
        "account_name": "Kas",
        "account_type": "asset",
        "debit": 500000,
        "credit": 200000,
        "balance": 300000
    }
    assert data["total_debit"] >= 500000
    assert data["total_credit"] >= 200000


@pytest.mark.asyncio
async def test_balance_sheet_ignores_start_date(override_store, ledger_store):
    override_store(ledger_store)
    async with client() as ac:
        response = await ac.get("/api/reports/financial", params={
            "type": "balance_sheet", "start_date": "2024-01-25", "end_date": "2024-01-31"
        })

    data = response.json()["data"]
    assert data["as_of_date"] == "2024-01-31"
    kas = next(row for row in data["assets"] if row["account_code"] == "1001")
    # Opening capital from 2023 included, February deposit excluded
    assert kas["balance"] == 1300000
    assert data["total_liabilities_equity"] == data["total_liabilities"] + data["total_equity"]


@pytest.mark.asyncio
async def test_income_statement_and_cash_flow_shapes(override_store, ledger_store):
    override_store(ledger_store)
    async with client() as ac:
        income = await ac.get("/api/reports/financial", params={
            "type": "income_statement", "start_date": "2024-01-01", "end_date": "2024-01-31"
        })
        cash = await ac.get("/api/reports/financial", params={
            "type": "cash_flow", "start_date": "2024-01-01", "end_date": "2024-01-31"
        })

    income_data = income.json()["data"]
    assert income_data["period"] == "2024-01-01 to 2024-01-31"
    assert income_data["net_income"] == 10000

    cash_data = cash.json()["data"]
    assert cash_data["report_type"] == "Cash Flow Statement"
    assert cash_data["operating_activities"] == [
        {"description": "savings_deposit JE-1", "amount": 500000, "date": "2024-01-05"}
    ]
    assert cash_data["net_cash_flow"] == 300000


@pytest.mark.asyncio
async def test_default_period(override_store, ledger_store):
    override_store(ledger_store)
    async with client() as ac:
        response = await ac.get("/api/reports/financial", params={"type": "income_statement"})

    assert response.status_code == 200
    assert response.json()["data"]["period"] == "2024-01-01 to 2024-12-31"


@pytest.mark.asyncio
async def test_same_request_twice_yields_same_body(override_store, ledger_store):
    override_store(ledger_store)
    params = {"type": "trial_balance", "start_date": "2024-01-01", "end_date": "2024-01-31"}
    async with client() as ac:
        first = await ac.get("/api/reports/financial", params=params)
        second = await ac.get("/api/reports/financial", params=params)

    assert first.json()["data"] == second.json()["data"]


@pytest.mark.asyncio
async def test_missing_type_is_rejected(override_store, ledger_store):
    override_store(ledger_store)
    async with client() as ac:
        response = await ac.get("/api/reports/financial")

    assert response.status_code == 400
    assert response.headers["access-control-allow-origin"] == "*"
    body = response.json()
    assert body == {"error": "Missing report type parameter"}
    assert "data" not in body
    assert ledger_store.queries == []


@pytest.mark.asyncio
async def test_unknown_type_is_rejected(override_store, ledger_store):
    override_store(ledger_store)
    async with client() as ac:
        response = await ac.get("/api/reports/financial", params={"type": "general_ledger"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid report type"}
    assert ledger_store.queries == []


@pytest.mark.asyncio
async def test_malformed_date_is_rejected(override_store, ledger_store):
    override_store(ledger_store)
    async with client() as ac:
        response = await ac.get("/api/reports/financial", params={"type": "cash_flow", "end_date": "31-01-2024"})

    assert response.status_code == 400
    assert "end_date" in response.json()["error"]


@pytest.mark.asyncio
async def test_store_failure_returns_500_with_details(override_store, failing_store):
    override_store(failing_store)
    async with client() as ac:
        response = await ac.get("/api/reports/financial", params={"type": "balance_sheet"})

    assert response.status_code == 500
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.json() == {"error": "Internal server error", "details": "ledger store unavailable"}


@pytest.mark.asyncio
async def test_preflight():
    async with client() as ac:
        response = await ac.options("/api/reports/financial")

    assert response.status_code == 204
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.headers["access-control-allow-methods"] == "GET, POST, OPTIONS"
    assert response.headers["access-control-allow-headers"] == "*"


@pytest.mark.asyncio
async def test_request_id_is_echoed(override_store, ledger_store):
    override_store(ledger_store)
    async with client() as ac:
        response = await ac.get(
            "/api/reports/financial",
            params={"type": "trial_balance"},
            headers={"X-Request-ID": "req-123"}
        )

    assert response.headers["x-request-id"] == "req-123"


@pytest.mark.asyncio
async def test_cent_amounts_are_json_numbers(override_store, store_factory, entry_factory, chart_of_accounts):
    override_store(store_factory(chart_of_accounts, [
        entry_factory("JE-1", "2024-01-02", "savings_deposit", [("1001", 0.1, 0), ("2001", 0, 0.1)]),
        entry_factory("JE-2", "2024-01-03", "savings_deposit", [("1001", 0.2, 0), ("2001", 0, 0.2)]),
    ]))
    async with client() as ac:
        response = await ac.get("/api/reports/financial", params={
            "type": "cash_flow", "start_date": "2024-01-01", "end_date": "2024-01-31"
        })

    data = response.json()["data"]
    assert [a["amount"] for a in data["operating_activities"]] == [0.1, 0.2]
    assert data["net_operating_cash_flow"] == 0.3
    assert data["net_cash_flow"] == 0.3
