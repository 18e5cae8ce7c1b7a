"""
Test HTTP API

Runs against a seeded session injected through dependency overrides.
"""

from datetime import date


def test_root_and_health(test_client):
    assert test_client.get("/").json()["status"] == "running"
    assert test_client.get("/health").json()["status"] == "healthy"


# ========================================
# CASES
# ========================================

def test_list_and_search_cases(test_client):
    cases = test_client.get("/api/cases/").json()
    assert len(cases) == 6

    found = test_client.get("/api/cases/search", params={"q": "fatima"}).json()
    assert [c["id"] for c in found] == ["sak33"]


def test_create_case(test_client):
    response = test_client.post(
        "/api/cases/",
        json={"name": "Arv", "case_number": "sak 50", "client_name": "Kari Nordmann"},
    )
    assert response.status_code == 200
    case_id = response.json()["id"]
    assert test_client.get(f"/api/cases/{case_id}").json()["name"] == "Arv"


def test_create_case_missing_field(test_client):
    response = test_client.post(
        "/api/cases/",
        json={"name": "Arv", "case_number": "", "client_name": "Kari Nordmann"},
    )
    assert response.status_code == 422


def test_unknown_case(test_client):
    assert test_client.get("/api/cases/nope").status_code == 404


# ========================================
# TIME ENTRIES
# ========================================

def test_create_time_entry_with_comma_hours(test_client):
    response = test_client.post("/api/time-entries/", json={
        "case_id": "sak9",
        "date": "2024-03-13",
        "hours_input": "2,5",
        "description": "Møte med klient",
        "activity_type": "Juridisk bistand",
    })
    assert response.status_code == 200
    data = response.json()
    assert data["hours"] == 2.5
    assert data["case_name"] == "Drap"
    assert data["billable"] is True


def test_create_time_entry_clamps_hours(test_client):
    response = test_client.post("/api/time-entries/", json={
        "case_id": "sak9",
        "date": "2024-03-13",
        "hours": 30,
        "description": "Lang dag",
        "activity_type": "Juridisk bistand",
    })
    assert response.json()["hours"] == 24


def test_create_time_entry_validation_errors(test_client):
    before = len(test_client.get("/api/time-entries/").json())
    response = test_client.post("/api/time-entries/", json={"date": "2024-03-13"})

    assert response.status_code == 422
    assert response.json() == {"errors": {
        "case": "Vennligst velg en sak",
        "activityType": "Vennligst velg en aktivitetstype",
        "description": "Vennligst skriv en beskrivelse",
    }}
    assert len(test_client.get("/api/time-entries/").json()) == before


def test_list_time_entries_filters(test_client):
    entries = test_client.get("/api/time-entries/", params={"case_id": "sak286"}).json()
    assert len(entries) == 3

    billable = test_client.get(
        "/api/time-entries/", params={"case_id": "sak286", "billable": "false"}
    ).json()
    assert [e["hours"] for e in billable] == [3.0]

    monday = test_client.get("/api/time-entries/", params={"date": "2024-03-11"}).json()
    assert len(monday) == 3


def test_update_and_delete_time_entry(test_client):
    entry = test_client.get("/api/time-entries/").json()[0]
    payload = {k: entry[k] for k in (
        "case_id", "date", "hours", "description", "activity_type", "billable"
    )}
    payload["description"] = "Endret"

    response = test_client.put(f"/api/time-entries/{entry['id']}", json=payload)
    assert response.json()["description"] == "Endret"

    assert test_client.delete(f"/api/time-entries/{entry['id']}").status_code == 200
    assert test_client.delete(f"/api/time-entries/{entry['id']}").status_code == 404


def test_update_unknown_time_entry(test_client):
    response = test_client.put("/api/time-entries/missing", json={
        "case_id": "sak9", "date": "2024-03-13", "hours": 1,
        "description": "X", "activity_type": "Admin", "billable": True,
    })
    assert response.status_code == 404


def test_week_overview(test_client):
    data = test_client.get("/api/time-entries/week", params={"date": "2024-03-13"}).json()
    assert data["week_start"] == "2024-03-11"
    assert len(data["days"]) == 7
    assert data["day_totals"][0] == 7.0


# ========================================
# SUGGESTIONS
# ========================================

def test_list_suggestions(test_client):
    data = test_client.get("/api/suggestions/").json()
    assert data["counts"] == {"completed": 5, "partially_completed": 4, "spam": 4}
    assert data["completed"][0]["case_name"] == "Drap"


def test_confirm_suggestion(test_client):
    response = test_client.post("/api/suggestions/sugg1/confirm")
    assert response.status_code == 200
    entry = response.json()
    assert entry["from_suggestion"] is True
    assert entry["activity_type"] == "Reisetid"

    data = test_client.get("/api/suggestions/").json()
    assert data["counts"]["completed"] == 4
    assert test_client.post("/api/suggestions/sugg1/confirm").status_code == 404


def test_bulk_confirm(test_client):
    response = test_client.post(
        "/api/suggestions/confirm", json={"suggestion_ids": ["sugg2", "sugg3", "missing"]}
    )
    assert response.json()["confirmed"] == 2
    assert test_client.get("/api/suggestions/").json()["counts"]["completed"] == 3


def test_update_suggestion_completes_it(test_client):
    response = test_client.put("/api/suggestions/sugg6", json={
        "case_id": "sak14",
        "type": "Forhandlinger",
        "description": "Møte: Rettsmøte",
        "hours": 5,
    })
    assert response.status_code == 200
    assert response.json()["case_name"] == "Skattesvik"

    counts = test_client.get("/api/suggestions/").json()["counts"]
    assert counts == {"completed": 6, "partially_completed": 3, "spam": 4}


def test_delete_suggestion(test_client):
    assert test_client.delete("/api/suggestions/sugg10").status_code == 200
    assert test_client.delete("/api/suggestions/sugg10").status_code == 404


# ========================================
# BILLING
# ========================================

def test_billing_overview(test_client):
    rows = test_client.get("/api/billing/cases", params={"q": "sak 286"}).json()
    assert len(rows) == 1
    assert rows[0]["billable_hours"] == 6
    assert rows[0]["amount"] == 9000
    assert rows[0]["amount_display"] == "9\u00a0000,00\u00a0kr"


def test_billing_overview_sort(test_client):
    rows = test_client.get(
        "/api/billing/cases", params={"sort": "hours", "direction": "desc"}
    ).json()
    hours = [r["billable_hours"] for r in rows]
    assert hours == sorted(hours, reverse=True)


def test_invoice_lifecycle(test_client):
    response = test_client.post(
        "/api/billing/invoices", json={"case_id": "sak14", "date": "2024-03-13"}
    )
    assert response.status_code == 200
    invoice = response.json()
    assert invoice["status"] == "draft"
    assert invoice["status_label"] == "Utkast"
    assert invoice["amount"] == 3000
    assert invoice["due_date"] == "2024-04-12"

    approved = test_client.post(f"/api/billing/invoices/{invoice['id']}/approve")
    assert approved.json()["status"] == "sent"

    again = test_client.post(f"/api/billing/invoices/{invoice['id']}/approve")
    assert again.status_code == 409
    assert test_client.delete(f"/api/billing/invoices/{invoice['id']}").status_code == 409


def test_delete_draft_invoice(test_client):
    assert test_client.delete("/api/billing/invoices/inv3").status_code == 200
    ids = [i["id"] for i in test_client.get("/api/billing/invoices").json()]
    assert "inv3" not in ids


def test_invoice_for_unknown_case(test_client):
    response = test_client.post("/api/billing/invoices", json={"case_id": "nope"})
    assert response.status_code == 404


def test_filter_invoices(test_client):
    drafts = test_client.get("/api/billing/invoices", params={"status": ["draft"]}).json()
    assert [i["id"] for i in drafts] == ["inv3"]

    bad = test_client.get("/api/billing/invoices", params={"period": "someday"})
    assert bad.status_code == 422


def test_export_invoice(test_client):
    data = test_client.get("/api/billing/invoices/inv1/export").json()
    assert data["format"] == "LEDES1998B"
    assert data["content"].startswith("LEDES1998B[]")
    assert test_client.get("/api/billing/invoices/nope/export").status_code == 404


# ========================================
# SETTINGS
# ========================================

def test_app_settings(test_client):
    data = test_client.get("/api/settings/app").json()
    assert data["hourly_rate"] == 1500
    assert data["currency"] == "NOK"

    types = test_client.get("/api/settings/activity-types").json()["activity_types"]
    assert "Reisetid" in types


def test_billing_overview_order_is_stable_across_requests(test_client):
    params = {"sort": "hours"}
    first = test_client.get("/api/billing/cases", params=params).json()
    second = test_client.get("/api/billing/cases", params=params).json()

    assert first == second
    hours = [r["billable_hours"] for r in first]
    assert hours == sorted(hours)


def test_create_time_entry_documents_form_errors(test_client):
    schema = test_client.get("/openapi.json").json()
    response_422 = schema["paths"]["/api/time-entries/"]["post"]["responses"]["422"]
    ref = response_422["content"]["application/json"]["schema"]["$ref"]
    assert ref.endswith("/FormErrorResponse")
