"""
Timeføring - Time Registration & Billing
Suggestion Categorization

Suggestions are ingested from mail, calendar and document activity and are
often missing fields. They are grouped for review by how complete they are:

- completed: case, activity type, description and hours are all present
- spam: none of them are present
- partially_completed: everything in between
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List

from app.services.models import UnconfirmedSuggestion


class SuggestionCategory(str, Enum):
    """Review group of a suggestion"""
    COMPLETED = "completed"
    PARTIALLY_COMPLETED = "partially_completed"
    SPAM = "spam"


@dataclass
class CategorizedSuggestions:
    """Suggestions split into disjoint review groups"""
    completed: List[UnconfirmedSuggestion] = field(default_factory=list)
    partially_completed: List[UnconfirmedSuggestion] = field(default_factory=list)
    spam: List[UnconfirmedSuggestion] = field(default_factory=list)

    def counts(self) -> Dict[str, int]:
        return {
            SuggestionCategory.COMPLETED.value: len(self.completed),
            SuggestionCategory.PARTIALLY_COMPLETED.value: len(self.partially_completed),
            SuggestionCategory.SPAM.value: len(self.spam),
        }

    @property
    def total(self) -> int:
        return len(self.completed) + len(self.partially_completed) + len(self.spam)


def _present_fields(suggestion: UnconfirmedSuggestion) -> List[bool]:
    return [
        bool(suggestion.case_id),
        bool(suggestion.type),
        bool(suggestion.description),
        suggestion.hours > 0,
    ]


def suggestion_category(suggestion: UnconfirmedSuggestion) -> SuggestionCategory:
    """Review group for a single suggestion"""
    present = _present_fields(suggestion)
    if all(present):
        return SuggestionCategory.COMPLETED
    if not any(present):
        return SuggestionCategory.SPAM
    return SuggestionCategory.PARTIALLY_COMPLETED


def categorize_suggestions(
    suggestions: List[UnconfirmedSuggestion]
) -> CategorizedSuggestions:
    """
    Partition suggestions into completed / partially completed / spam.

    Every suggestion lands in exactly one group and the input order is kept
    within each group. The input list and its records are not modified.
    """
    result = CategorizedSuggestions()
    groups = {
        SuggestionCategory.COMPLETED: result.completed,
        SuggestionCategory.PARTIALLY_COMPLETED: result.partially_completed,
        SuggestionCategory.SPAM: result.spam,
    }

    for suggestion in suggestions:
        groups[suggestion_category(suggestion)].append(suggestion)

    return result
