from __future__ import annotations

from app.routers import reports as reports_router


def test_daily_production_endpoint(client) -> None:
    response = client.get("/api/v1/reports/daily-production", params={"date": "01-01-2024"})

    assert response.status_code == 200
    rows = response.json()
    assert [(r["lot_no"], r["count_of_catches"], r["total_quantity"]) for r in rows] == [
        ("L1", 2, 200),
        ("L2", 1, 70),
    ]
    assert rows[0]["exam_to"] == "05-03-2024"


def test_daily_production_summary_endpoint(client) -> None:
    response = client.get(
        "/api/v1/reports/daily-production/summary",
        params={"startDate": "01-01-2024", "endDate": "01-01-2024"},
    )

    assert response.status_code == 200
    assert response.json() == {
        "total_groups": 1,
        "total_lots": 2,
        "total_count_of_catches": 3,
        "total_projects": 1,
        "total_quantity": 270,
    }


def test_invalid_date_is_problem_details_400(client) -> None:
    response = client.get("/api/v1/reports/daily-production", params={"date": "2024-01-01"})

    assert response.status_code == 400
    assert response.headers["content-type"].startswith("application/problem+json")
    payload = response.json()
    assert payload["code"] == "INVALID_DATE_FORMAT"
    assert payload["detail"] == "Invalid date format. Use dd-MM-yyyy."


def test_quick_completion_endpoint_requires_dates(client) -> None:
    response = client.get("/api/v1/reports/quick-completion")

    assert response.status_code == 400
    assert response.json()["code"] == "DATE_RANGE_REQUIRED"


def test_quick_completion_endpoint(client) -> None:
    response = client.get(
        "/api/v1/reports/quick-completion",
        params={"date": "01-01-2024", "page": 1, "pageSize": 10},
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["total_items"] == 2
    assert payload["total_pages"] == 1
    assert payload["page_size"] == 10
    assert [item["event_id_a"] for item in payload["items"]] == [1, 2]


def test_quick_completion_caps_oversized_page(client) -> None:
    response = client.get(
        "/api/v1/reports/quick-completion",
        params={"date": "01-01-2024", "pageSize": 1000},
    )

    assert response.status_code == 200
    assert response.json()["page_size"] == 500


def test_daily_production_rejects_single_digit_day(client) -> None:
    response = client.get("/api/v1/reports/daily-production", params={"date": "1-01-2024"})

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_DATE_FORMAT"


def test_process_wise_endpoint(client) -> None:
    response = client.get("/api/v1/reports/process-wise/C-001")

    assert response.status_code == 200
    payload = response.json()
    assert [entry["process_id"] for entry in payload] == [5, 12]
    assert payload[0]["transactions"][0]["supervisor"] == "Asha Rao"


def test_process_wise_unknown_catch_is_404(client) -> None:
    response = client.get("/api/v1/reports/process-wise/NOPE")

    assert response.status_code == 404
    assert response.json()["code"] == "CATCH_NOT_FOUND"


def test_catches_by_lot_endpoint(client) -> None:
    response = client.get("/api/v1/reports/projects/1/lots/L1/catches")

    assert response.status_code == 200
    assert [(c["catch_no"], c["catch_status"]) for c in response.json()] == [
        ("C-001", "Completed"),
        ("C-002", "Running"),
    ]


def test_under_production_endpoint(client) -> None:
    response = client.get("/api/v1/reports/under-production")

    assert response.status_code == 200
    assert [(r["project_id"], r["lot_no"]) for r in response.json()] == [(1, "L1"), (1, "L2")]


def test_search_endpoint(client) -> None:
    response = client.get("/api/v1/reports/search", params={"query": "B", "groupId": 2})

    assert response.status_code == 200
    payload = response.json()
    assert payload["total_records"] == 1
    assert payload["results"][0]["catch_no"] == "B-100"

    blank = client.get("/api/v1/reports/search", params={"query": " "})
    assert blank.status_code == 400
    assert blank.json()["code"] == "SEARCH_QUERY_REQUIRED"


def test_lookup_endpoints(client) -> None:
    assert client.get("/api/v1/reports/groups").status_code == 200
    assert client.get("/api/v1/reports/projects/1/lots").json() == ["L1", "L2"]
    assert client.get("/api/v1/reports/groups/99/projects").status_code == 404


def test_unexpected_failure_becomes_server_problem(client, monkeypatch) -> None:
    def _explode(*, db):
        raise RuntimeError("gateway unavailable")

    monkeypatch.setattr(reports_router, "under_production_use_case", _explode)

    response = client.get("/api/v1/reports/under-production")

    assert response.status_code == 500
    payload = response.json()
    assert payload["code"] == "REPORT_FAILED"
    assert payload["detail"] == "gateway unavailable"
