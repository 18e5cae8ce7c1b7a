"""
Timeføring - Time Registration & Billing
Time Tracking Service

Owns the cases, time entries and unconfirmed suggestions of one session
and the interaction state around them:

- Entry form with field-level validation
- Inline editing of entries and suggestions
- Suggestion selection for bulk confirmation
- Weekly overview per case and day

Every mutation replaces the affected list; records are swapped with
dataclasses.replace, never edited in place.
"""
import logging
import time
from dataclasses import asdict, dataclass, field, replace
from datetime import date, timedelta
from typing import Any, Dict, List, Optional, Tuple, Union

from app.config import FORM_ERROR_MESSAGES, UNKNOWN_CASE_LABEL
from app.core.config import settings
from app.services.models import Case, TimeEntry, UnconfirmedSuggestion, new_id
from app.services.suggestion_service import CategorizedSuggestions, categorize_suggestions
from app.utils.decimal_input import HoursInput
from app.utils.formatting import week_dates, week_day_headers

logger = logging.getLogger(__name__)


# ========================================
# INTERACTION STATE
# ========================================

@dataclass
class EntryForm:
    """Quick registration form"""
    selected_date: date = field(default_factory=date.today)
    case_id: str = ""
    activity_type: str = ""
    description: str = ""
    billable: bool = True
    hours: HoursInput = field(default_factory=HoursInput)
    errors: Dict[str, str] = field(default_factory=dict)

    def validate(self) -> Dict[str, str]:
        """Check required fields and store the resulting error map"""
        errors = {}
        if not self.case_id:
            errors["case"] = FORM_ERROR_MESSAGES["case"]
        if not self.activity_type:
            errors["activityType"] = FORM_ERROR_MESSAGES["activityType"]
        if not self.description.strip():
            errors["description"] = FORM_ERROR_MESSAGES["description"]
        self.errors = errors
        return errors

    def select_case(self, case_id: str) -> None:
        self.case_id = case_id
        self.errors.pop("case", None)

    def select_activity_type(self, activity_type: str) -> None:
        self.activity_type = activity_type
        self.errors.pop("activityType", None)

    def previous_day(self) -> date:
        self.selected_date = self.selected_date - timedelta(days=1)
        return self.selected_date

    def next_day(self) -> date:
        self.selected_date = self.selected_date + timedelta(days=1)
        return self.selected_date

    def today(self) -> date:
        self.selected_date = date.today()
        return self.selected_date

    def reset_after_submit(self) -> None:
        # Case and date stay selected for the next registration
        self.hours.reset()
        self.description = ""
        self.activity_type = ""
        self.errors = {}


# Fields the inline editors may change, per record type
_EDITABLE_FIELDS = {
    TimeEntry: ("case_id", "activity_type", "description", "billable"),
    UnconfirmedSuggestion: ("case_id", "type", "description", "important"),
}

Editable = Union[TimeEntry, UnconfirmedSuggestion]


@dataclass
class InlineEdit:
    """Inline editor for one time entry or suggestion at a time"""
    record: Optional[Editable] = None
    fields: Dict[str, Any] = field(default_factory=dict)
    hours: HoursInput = field(default_factory=HoursInput)

    @property
    def editing_id(self) -> Optional[str]:
        return self.record.id if self.record else None

    def start(self, record: Editable) -> None:
        values = asdict(record)
        self.record = record
        self.fields = {name: values[name] for name in _EDITABLE_FIELDS[type(record)]}
        self.hours = HoursInput(hours=record.hours)

    def update(self, **changes) -> None:
        if self.record is None:
            return
        unknown = set(changes) - set(self.fields)
        if unknown:
            raise ValueError(f"Not editable: {', '.join(sorted(unknown))}")
        self.fields.update(changes)

    def cancel(self) -> None:
        self.record = None
        self.fields = {}

    def save(self) -> Optional[Editable]:
        """Build the updated record and leave edit mode"""
        if self.record is None:
            return None
        updated = replace(self.record, hours=self.hours.hours, **self.fields)
        self.cancel()
        return updated

    def key_down(self, key: str) -> bool:
        if key == "Escape" and self.record is not None:
            self.cancel()
            return True
        return False


@dataclass
class SuggestionSelection:
    """Checked suggestions awaiting bulk confirmation"""
    selected: Dict[str, bool] = field(default_factory=dict)

    def toggle(self, suggestion_id: str, checked: bool) -> None:
        self.selected = {**self.selected, suggestion_id: checked}

    @property
    def selected_ids(self) -> List[str]:
        return [sid for sid, checked in self.selected.items() if checked]

    @property
    def has_selection(self) -> bool:
        return any(self.selected.values())

    def clear(self) -> None:
        self.selected = {}


@dataclass
class EntryResult:
    """Outcome of submitting the entry form"""
    entry: Optional[TimeEntry] = None
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.entry is not None


# ========================================
# SERVICE
# ========================================

class TimeTrackingService:
    """
    Time registration for one lawyer's session.

    Features:
    - Case registry with search and "add new case"
    - Time entry create / update / delete
    - Suggestion review: categorize, edit, confirm, bulk confirm, delete
    - Weekly overview
    """

    def __init__(
        self,
        cases: Optional[List[Case]] = None,
        time_entries: Optional[List[TimeEntry]] = None,
        suggestions: Optional[List[UnconfirmedSuggestion]] = None,
    ):
        self.cases: List[Case] = list(cases or [])
        self.time_entries: List[TimeEntry] = list(time_entries or [])
        self.suggestions: List[UnconfirmedSuggestion] = list(suggestions or [])

        self.form = EntryForm()
        self.entry_edit = InlineEdit()
        self.suggestion_edit = InlineEdit()
        self.selection = SuggestionSelection()

        self._recently_added: Optional[Tuple[str, float]] = None

    def load(
        self,
        cases: List[Case],
        time_entries: List[TimeEntry],
        suggestions: List[UnconfirmedSuggestion],
    ) -> None:
        """Replace all collections, e.g. with seed data"""
        self.cases = list(cases)
        self.time_entries = list(time_entries)
        self.suggestions = list(suggestions)
        self.selection.clear()
        self._recently_added = None
        logger.info(
            "Loaded %d cases, %d time entries, %d suggestions",
            len(self.cases), len(self.time_entries), len(self.suggestions)
        )

    # ========================================
    # CASES
    # ========================================

    def get_case(self, case_id: str) -> Optional[Case]:
        return next((c for c in self.cases if c.id == case_id), None)

    def case_label(self, case_id: str) -> str:
        """Case name, or the fallback label for a dangling reference"""
        case = self.get_case(case_id)
        return case.name if case else UNKNOWN_CASE_LABEL

    def add_case(self, name: str, case_number: str, client_name: str) -> Case:
        """Create a case and select it in the entry form"""
        if not (name and case_number and client_name):
            raise ValueError("Case name, case number and client name are required")

        case = Case(
            id=new_id("sak"),
            name=name,
            case_number=case_number,
            client_name=client_name,
        )
        self.cases = [*self.cases, case]
        self.form.select_case(case.id)

        logger.info("Added case %s (%s)", case.name, case.case_number)
        return case

    def search_cases(self, query: str) -> List[Case]:
        """Match query against case name, case number and client name"""
        needle = query.lower()
        return [
            c for c in self.cases
            if needle in c.name.lower()
            or needle in c.case_number.lower()
            or needle in c.client_name.lower()
        ]

    # ========================================
    # TIME ENTRIES
    # ========================================

    def get_entry(self, entry_id: str) -> Optional[TimeEntry]:
        return next((e for e in self.time_entries if e.id == entry_id), None)

    def create_entry(self, form: Optional[EntryForm] = None) -> EntryResult:
        """
        Submit the entry form.

        Nothing is saved while any required field is missing; the field
        errors are returned instead. On success the form is reset for the
        next registration.
        """
        form = form or self.form
        errors = form.validate()
        if errors:
            logger.warning("Time entry refused: %s", ", ".join(sorted(errors)))
            return EntryResult(errors=errors)

        entry = TimeEntry(
            id=new_id("entry"),
            case_id=form.case_id,
            date=form.selected_date,
            hours=form.hours.hours,
            description=form.description,
            activity_type=form.activity_type,
            billable=form.billable,
        )
        self.time_entries = [*self.time_entries, entry]
        self._mark_recently_added(entry.id)
        form.reset_after_submit()

        logger.info(
            "Registered %sh on %s (%s)",
            entry.hours, self.case_label(entry.case_id), entry.id
        )
        return EntryResult(entry=entry)

    def update_entry(self, updated: TimeEntry) -> Optional[TimeEntry]:
        """Replace the entry with the same id; the record is trusted as-is"""
        if self.get_entry(updated.id) is None:
            return None

        self.time_entries = [
            updated if entry.id == updated.id else entry
            for entry in self.time_entries
        ]
        logger.info("Updated time entry %s", updated.id)
        return updated

    def delete_entry(self, entry_id: str) -> bool:
        before = len(self.time_entries)
        self.time_entries = [e for e in self.time_entries if e.id != entry_id]
        deleted = len(self.time_entries) < before
        if deleted:
            logger.info("Deleted time entry %s", entry_id)
        return deleted

    def save_entry_edit(self) -> Optional[TimeEntry]:
        """Persist the inline entry editor, if open"""
        updated = self.entry_edit.save()
        return self.update_entry(updated) if updated else None

    def _mark_recently_added(self, entry_id: str) -> None:
        expires_at = time.monotonic() + settings.HIGHLIGHT_SECONDS
        self._recently_added = (entry_id, expires_at)

    @property
    def recently_added_entry_id(self) -> Optional[str]:
        if self._recently_added is None:
            return None
        entry_id, expires_at = self._recently_added
        if time.monotonic() >= expires_at:
            self._recently_added = None
            return None
        return entry_id

    # ========================================
    # SUGGESTIONS
    # ========================================

    def get_suggestion(self, suggestion_id: str) -> Optional[UnconfirmedSuggestion]:
        return next((s for s in self.suggestions if s.id == suggestion_id), None)

    def categorized_suggestions(self) -> CategorizedSuggestions:
        return categorize_suggestions(self.suggestions)

    def confirm_suggestion(self, suggestion_id: str) -> Optional[TimeEntry]:
        """Turn a suggestion into a billable time entry and drop the suggestion"""
        suggestion = self.get_suggestion(suggestion_id)
        if suggestion is None:
            return None

        entry = TimeEntry(
            id=new_id("entry"),
            case_id=suggestion.case_id,
            date=suggestion.date,
            hours=suggestion.hours,
            description=suggestion.description,
            activity_type=suggestion.type,
            billable=True,
            from_suggestion=True,
        )
        self.time_entries = [*self.time_entries, entry]
        self.suggestions = [s for s in self.suggestions if s.id != suggestion_id]
        self.selection.selected = {
            sid: checked for sid, checked in self.selection.selected.items()
            if sid != suggestion_id
        }

        logger.info("Confirmed suggestion %s as %s", suggestion_id, entry.id)
        return entry

    def confirm_selected(self) -> List[TimeEntry]:
        """Confirm every checked suggestion and clear the selection"""
        confirmed = []
        for suggestion_id in self.selection.selected_ids:
            entry = self.confirm_suggestion(suggestion_id)
            if entry is not None:
                confirmed.append(entry)
        self.selection.clear()

        if confirmed:
            logger.info("Bulk confirmed %d suggestions", len(confirmed))
        return confirmed

    def update_suggestion(
        self,
        updated: UnconfirmedSuggestion
    ) -> Optional[UnconfirmedSuggestion]:
        if self.get_suggestion(updated.id) is None:
            return None

        self.suggestions = [
            updated if s.id == updated.id else s
            for s in self.suggestions
        ]
        logger.info("Updated suggestion %s", updated.id)
        return updated

    def save_suggestion_edit(self) -> Optional[UnconfirmedSuggestion]:
        updated = self.suggestion_edit.save()
        return self.update_suggestion(updated) if updated else None

    def delete_suggestion(self, suggestion_id: str) -> bool:
        before = len(self.suggestions)
        self.suggestions = [s for s in self.suggestions if s.id != suggestion_id]
        deleted = len(self.suggestions) < before
        if deleted:
            logger.info("Deleted suggestion %s", suggestion_id)
        return deleted

    # ========================================
    # WEEKLY OVERVIEW
    # ========================================

    def entries_for(self, case_id: str, day: date) -> List[TimeEntry]:
        return [
            e for e in self.time_entries
            if e.case_id == case_id and e.date == day
        ]

    def weekly_overview(self, selected_date: Optional[date] = None) -> Dict[str, Any]:
        """
        Cases in rows, Monday-Sunday in columns.

        Each cell lists the entries of that case and day. Entries pointing at
        a missing case are collected in a trailing "Ukjent sak" row, so the
        row totals always add up to the week total.
        """
        selected_date = selected_date or self.form.selected_date
        days = week_dates(selected_date)

        def row(case: Dict[str, Any], cells: List[List[TimeEntry]]) -> Dict[str, Any]:
            return {
                "case": case,
                "cells": [[asdict(e) for e in cell] for cell in cells],
                "total_hours": sum(e.hours for cell in cells for e in cell),
            }

        rows = [
            row(asdict(case), [self.entries_for(case.id, day) for day in days])
            for case in self.cases
        ]

        known = {case.id for case in self.cases}
        orphaned = [
            [e for e in self.time_entries if e.date == day and e.case_id not in known]
            for day in days
        ]
        if any(orphaned):
            unknown_case = {"id": None, "name": UNKNOWN_CASE_LABEL, "case_number": "", "client_name": ""}
            rows.append(row(unknown_case, orphaned))

        day_totals = [
            sum(e.hours for e in self.time_entries if e.date == day)
            for day in days
        ]

        return {
            "selected_date": selected_date.isoformat(),
            "week_start": days[0].isoformat(),
            "days": week_day_headers(selected_date),
            "rows": rows,
            "day_totals": day_totals,
            "week_total": sum(day_totals),
            "recently_added_entry_id": self.recently_added_entry_id,
        }


# Singleton instance
time_tracking_service = TimeTrackingService()
