import pytest

from transitie.main import app
from transitie.routers.dependencies import get_report_exporter

DOCUMENT = b"%PDF-1.7\n" + b"1" * 2048

PAYLOAD = {
    "employee_name": "Jan Jansen",
    "employer_name": "Acme B.V.",
    "start_date": "2020-03-01",
    "end_date": "2026-03-01",
    "monthly_base_salary": "3000",
}


class StubExporter:
    def __init__(self, document: bytes = DOCUMENT) -> None:
        self.document = document

    def render(self, request) -> bytes:
        return self.document


@pytest.fixture()
def exporter():
    stub = StubExporter()
    app.dependency_overrides[get_report_exporter] = lambda: stub
    return stub


def _create(client, **overrides) -> dict:
    response = client.post("/api/transitie", json={**PAYLOAD, **overrides})
    assert response.status_code == 201, response.text
    return response.json()


def test_evaluate_returns_result(client) -> None:
    response = client.post("/api/transitie/evaluate", json=PAYLOAD)

    assert response.status_code == 200
    body = response.json()
    assert body["tenure_total_months"] == 72
    assert body["total_monthly_salary"] == "3240.00"
    assert body["raw_amount"] == "6480.00"
    assert body["capped_amount"] == "6480.00"
    assert body["cap_applied"] is False
    assert body["bonus_monthly_equivalent"] is None


def test_evaluate_with_averaged_bonus(client) -> None:
    payload = {
        **PAYLOAD,
        "start_date": "2020-01-01",
        "end_date": "2026-01-01",
        "bonus": {"mode": "averaged", "year_totals": ["3600", "2400", "1200"]},
    }

    body = client.post("/api/transitie/evaluate", json=payload).json()

    assert body["bonus_monthly_equivalent"] == "200.00"
    assert body["bonus_reference_years"] == [2023, 2024, 2025]
    assert body["raw_amount"] == "6880.00"


def test_evaluate_reports_every_missing_field(client) -> None:
    response = client.post("/api/transitie/evaluate", json={})

    assert response.status_code == 422
    assert response.json()["detail"]["fields"] == [
        "start_date",
        "end_date",
        "monthly_base_salary",
    ]


def test_evaluate_unknown_cap_year(client) -> None:
    response = client.post(
        "/api/transitie/evaluate", json={**PAYLOAD, "end_date": "2030-01-01"}
    )

    assert response.status_code == 422
    assert response.json()["detail"]["fields"] == ["end_date"]


def test_negative_amount_rejected_by_payload(client) -> None:
    response = client.post(
        "/api/transitie/evaluate", json={**PAYLOAD, "overtime_monthly_amount": "-10"}
    )

    assert response.status_code == 422


def test_save_requires_employee_name(client) -> None:
    response = client.post("/api/transitie", json={"monthly_base_salary": "3000"})

    assert response.status_code == 422
    assert response.json()["detail"]["fields"] == ["employee_name", "start_date", "end_date"]


def test_create_get_and_list(client) -> None:
    created = _create(client)
    _create(client, employee_name="Piet Pietersen")

    fetched = client.get(f"/api/transitie/{created['id']}").json()
    listed = client.get("/api/transitie", params={"employee": "jansen"}).json()

    assert created["result"]["capped_amount"] == "6480.00"
    assert created["monthly_base_salary"] == "3000.00"
    assert created["bonus"] == {"mode": "none"}
    assert fetched == created
    assert [item["id"] for item in listed] == [created["id"]]
    assert len(client.get("/api/transitie").json()) == 2


def test_patch_recomputes_and_keeps_names(client) -> None:
    created = _create(client)

    response = client.patch(
        f"/api/transitie/{created['id']}",
        json={
            "start_date": "1989-01-01",
            "end_date": "2026-01-01",
            "monthly_base_salary": "10000",
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["employee_name"] == "Jan Jansen"
    assert body["employer_name"] == "Acme B.V."
    assert body["result"]["capped_amount"] == "129600.00"
    assert body["result"]["cap_applied"] is True


def test_patch_unknown_calculation(client) -> None:
    response = client.patch("/api/transitie/404", json=PAYLOAD)

    assert response.status_code == 404


def test_delete_is_idempotent(client) -> None:
    created = _create(client)
    url = f"/api/transitie/{created['id']}"

    first = client.delete(url)
    second = client.delete(url)

    assert first.status_code == second.status_code == 200
    assert first.json() == {"success": True}
    assert client.get(url).status_code == 404
    assert client.patch(url, json=PAYLOAD).status_code == 404
    assert client.get("/api/transitie").json() == []


def test_delete_unknown_calculation(client) -> None:
    assert client.delete("/api/transitie/9999").status_code == 404


def test_caps_are_listed(client) -> None:
    response = client.get("/api/transitie/caps")

    assert response.json() == {"2024": "94000.00", "2025": "98000.00", "2026": "102000.00"}


def test_export_without_exporter_is_not_implemented(client) -> None:
    created = _create(client)

    assert client.get(f"/api/transitie/{created['id']}/export").status_code == 501
    assert client.post("/api/transitie/export", json=PAYLOAD).status_code == 501


def test_export_saved_calculation(client, exporter) -> None:
    created = _create(client)

    response = client.get(f"/api/transitie/{created['id']}/export")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert "transitie-Jan-Jansen.pdf" in response.headers["content-disposition"]
    assert response.content == DOCUMENT


def test_export_unsaved_evaluation(client, exporter) -> None:
    response = client.post("/api/transitie/export", json=PAYLOAD)

    assert response.status_code == 200
    assert response.content == DOCUMENT


def test_export_with_invalid_input(client, exporter) -> None:
    response = client.post("/api/transitie/export", json={"employee_name": "Jan"})

    assert response.status_code == 422


def test_malformed_document_is_a_bad_gateway(client, exporter) -> None:
    exporter.document = b"%PDF-"

    response = client.post("/api/transitie/export", json=PAYLOAD)

    assert response.status_code == 502


def test_export_unknown_calculation(client, exporter) -> None:
    assert client.get("/api/transitie/77/export").status_code == 404


def test_health(client) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_patch_with_only_employer_keeps_employee(client) -> None:
    created = _create(client)
    body = {key: value for key, value in PAYLOAD.items() if key != "employee_name"}

    response = client.patch(
        f"/api/transitie/{created['id']}", json={**body, "employer_name": "Nieuw B.V."}
    )

    assert response.status_code == 200
    assert response.json()["employee_name"] == "Jan Jansen"
    assert response.json()["employer_name"] == "Nieuw B.V."
