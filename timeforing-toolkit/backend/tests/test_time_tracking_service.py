"""
Test Time Tracking Service

This module tests:
- Entry form validation and submission
- Entry update / delete and inline editing
- Suggestion confirmation, bulk confirmation and editing
- Weekly overview
"""

import sys
from datetime import date

import pytest

from app.services.models import Case, TimeEntry, UnconfirmedSuggestion
from app.services.time_tracking_service import EntryForm, TimeTrackingService


@pytest.fixture
def session():
    return TimeTrackingService(
        cases=[Case(id="c1", name="Drap", case_number="sak 9", client_name="Per Gunnar")],
        suggestions=[
            UnconfirmedSuggestion(
                id="s1", case_id="c1", type="Reisetid", description="X",
                hours=2, date=date(2024, 3, 12),
            ),
            UnconfirmedSuggestion(
                id="s2", case_id="c1", type="Mekling", description="Y",
                hours=1.5, date=date(2024, 3, 13),
            ),
        ],
    )


def _filled_form(**overrides):
    values = dict(
        selected_date=date(2024, 3, 13),
        case_id="c1",
        activity_type="Juridisk bistand",
        description="Møte med klient",
    )
    values.update(overrides)
    return EntryForm(**values)


# ========================================
# ENTRY FORM
# ========================================

def test_empty_form_reports_every_missing_field(session):
    result = session.create_entry(EntryForm())

    assert not result.ok
    assert result.errors == {
        "case": "Vennligst velg en sak",
        "activityType": "Vennligst velg en aktivitetstype",
        "description": "Vennligst skriv en beskrivelse",
    }
    assert session.time_entries == []


def test_blank_description_is_missing(session):
    result = session.create_entry(_filled_form(description="   "))
    assert list(result.errors) == ["description"]
    assert session.time_entries == []


def test_selecting_case_clears_its_error():
    form = EntryForm()
    form.validate()
    form.select_case("c1")
    assert "case" not in form.errors
    assert "activityType" in form.errors

    form.select_activity_type("Mekling")
    assert "activityType" not in form.errors


def test_create_entry(session):
    form = _filled_form(billable=False)
    form.hours.type("2,5")
    result = session.create_entry(form)

    assert result.ok
    entry = result.entry
    assert entry.case_id == "c1"
    assert entry.date == date(2024, 3, 13)
    assert entry.hours == 2.5
    assert entry.billable is False
    assert entry.from_suggestion is None
    assert session.time_entries == [entry]


def test_create_entry_resets_form_but_keeps_case_and_date(session):
    form = _filled_form()
    form.hours.type("4")
    session.create_entry(form)

    assert form.case_id == "c1"
    assert form.selected_date == date(2024, 3, 13)
    assert form.description == ""
    assert form.activity_type == ""
    assert form.hours.hours == 1
    assert form.errors == {}


def test_created_entry_is_marked_recently_added(session):
    result = session.create_entry(_filled_form())
    assert session.recently_added_entry_id == result.entry.id


def test_recently_added_marker_expires(session, monkeypatch):
    result = session.create_entry(_filled_form())
    entry_id, expires_at = session._recently_added
    assert entry_id == result.entry.id

    tracking_module = sys.modules["app.services.time_tracking_service"]
    monkeypatch.setattr(tracking_module.time, "monotonic", lambda: expires_at)
    assert session.recently_added_entry_id is None


def test_entry_ids_are_unique(session):
    first = session.create_entry(_filled_form()).entry
    second = session.create_entry(_filled_form()).entry
    assert first.id != second.id


def test_date_navigation():
    form = EntryForm(selected_date=date(2024, 3, 1))
    assert form.previous_day() == date(2024, 2, 29)
    assert form.next_day() == date(2024, 3, 1)
    assert form.today() == date.today()


# ========================================
# UPDATE / DELETE
# ========================================

def test_update_entry_replaces_record(session):
    entry = session.create_entry(_filled_form()).entry
    changed = TimeEntry(**{**entry.__dict__, "description": "Endret", "hours": 3})

    assert session.update_entry(changed) == changed
    assert session.get_entry(entry.id).description == "Endret"
    assert len(session.time_entries) == 1


def test_update_unknown_entry(session):
    ghost = TimeEntry(
        id="missing", case_id="c1", date=date(2024, 3, 13), hours=1,
        description="X", activity_type="Admin",
    )
    assert session.update_entry(ghost) is None
    assert session.time_entries == []


def test_delete_entry(session):
    entry = session.create_entry(_filled_form()).entry
    assert session.delete_entry(entry.id)
    assert session.time_entries == []
    assert not session.delete_entry(entry.id)


def test_inline_entry_edit(session):
    entry = session.create_entry(_filled_form()).entry

    session.entry_edit.start(entry)
    assert session.entry_edit.editing_id == entry.id
    session.entry_edit.update(description="Rettsmøte", billable=False)
    session.entry_edit.hours.type("3,75")
    session.entry_edit.hours.blur()
    saved = session.save_entry_edit()

    assert saved.description == "Rettsmøte"
    assert saved.billable is False
    assert saved.hours == 3.75
    assert saved.date == entry.date
    assert session.entry_edit.editing_id is None


def test_inline_edit_rejects_read_only_fields(session):
    entry = session.create_entry(_filled_form()).entry
    session.entry_edit.start(entry)
    with pytest.raises(ValueError):
        session.entry_edit.update(date=date(2024, 1, 1))


def test_escape_cancels_inline_edit(session):
    entry = session.create_entry(_filled_form()).entry
    session.entry_edit.start(entry)
    session.entry_edit.update(description="Forkastet")

    assert session.entry_edit.key_down("Escape")
    assert session.save_entry_edit() is None
    assert session.get_entry(entry.id).description == entry.description


# ========================================
# SUGGESTIONS
# ========================================

def test_confirm_suggestion(session):
    entry = session.confirm_suggestion("s1")

    assert session.get_suggestion("s1") is None
    assert session.time_entries == [entry]
    assert entry.billable is True
    assert entry.from_suggestion is True
    assert entry.activity_type == "Reisetid"
    assert entry.case_id == "c1"
    assert entry.hours == 2
    assert entry.description == "X"
    assert entry.date == date(2024, 3, 12)


def test_confirm_unknown_suggestion(session):
    assert session.confirm_suggestion("missing") is None
    assert session.time_entries == []
    assert len(session.suggestions) == 2


def test_confirm_selected(session):
    session.selection.toggle("s1", True)
    session.selection.toggle("s2", True)
    session.selection.toggle("s2", False)
    assert session.selection.selected_ids == ["s1"]

    confirmed = session.confirm_selected()

    assert [e.description for e in confirmed] == ["X"]
    assert [s.id for s in session.suggestions] == ["s2"]
    assert not session.selection.has_selection


def test_confirm_drops_suggestion_from_selection(session):
    session.selection.toggle("s1", True)
    session.confirm_suggestion("s1")
    assert "s1" not in session.selection.selected


def test_inline_suggestion_edit_keeps_date(session):
    suggestion = session.get_suggestion("s2")
    session.suggestion_edit.start(suggestion)
    session.suggestion_edit.update(type="Forhandlinger", important=True)
    saved = session.save_suggestion_edit()

    assert saved.type == "Forhandlinger"
    assert saved.important is True
    assert saved.date == suggestion.date
    assert session.get_suggestion("s2") == saved


def test_delete_suggestion(session):
    assert session.delete_suggestion("s2")
    assert [s.id for s in session.suggestions] == ["s1"]
    assert not session.delete_suggestion("s2")


def test_seeded_categories(seeded):
    tracker, _ = seeded
    counts = tracker.categorized_suggestions().counts()
    assert counts == {"completed": 5, "partially_completed": 4, "spam": 4}


# ========================================
# CASES
# ========================================

def test_add_case_selects_it(session):
    case = session.add_case("Arv", "sak 50", "Kari Nordmann")
    assert session.get_case(case.id) == case
    assert session.form.case_id == case.id


def test_add_case_requires_all_fields(session):
    with pytest.raises(ValueError):
        session.add_case("Arv", "", "Kari Nordmann")
    assert len(session.cases) == 1


def test_search_cases(seeded):
    tracker, _ = seeded
    assert [c.id for c in tracker.search_cases("gunnar")] == ["sak9", "sak287"]
    assert [c.id for c in tracker.search_cases("sak 14")] == ["sak14"]
    assert tracker.search_cases("zzz") == []


def test_case_label_for_missing_case(session):
    assert session.case_label("c1") == "Drap"
    assert session.case_label("gone") == "Ukjent sak"


# ========================================
# WEEKLY OVERVIEW
# ========================================

def test_weekly_overview(seeded, today):
    tracker, _ = seeded
    overview = tracker.weekly_overview(today)

    assert overview["week_start"] == "2024-03-11"
    assert [d["day_name"] for d in overview["days"]][0] == "MANDAG"
    assert len(overview["rows"]) == 6

    monday = overview["day_totals"][0]
    assert monday == 7.0
    assert overview["week_total"] == sum(e.hours for e in tracker.time_entries)

    sak9 = next(r for r in overview["rows"] if r["case"]["id"] == "sak9")
    assert sak9["total_hours"] == 10.0
    assert len(sak9["cells"][0]) == 2


def test_weekly_overview_other_week_is_empty(seeded):
    tracker, _ = seeded
    overview = tracker.weekly_overview(date(2024, 1, 3))
    assert overview["week_total"] == 0
    assert all(r["total_hours"] == 0 for r in overview["rows"])


def test_weekly_overview_collects_entries_of_missing_cases(seeded, today):
    tracker, _ = seeded
    tracker.time_entries = [
        *tracker.time_entries,
        TimeEntry(
            id="orphan", case_id="deleted-case", date=date(2024, 3, 12), hours=1.5,
            description="Gammel sak", activity_type="Admin",
        ),
    ]
    overview = tracker.weekly_overview(today)

    assert len(overview["rows"]) == 7
    unknown = overview["rows"][-1]
    assert unknown["case"]["name"] == "Ukjent sak"
    assert unknown["total_hours"] == 1.5
    assert [e["id"] for e in unknown["cells"][1]] == ["orphan"]
    assert sum(r["total_hours"] for r in overview["rows"]) == overview["week_total"]
