"""
Timeføring - Time Registration & Billing
Domain Constants

Fixed tables used across services: activity types, status labels and the
Norwegian messages shown to the user.
"""

# Predefined activity types offered by the activity picker.
# Free text is accepted as well; this list only seeds the choices.
ACTIVITY_TYPES = [
    "Reisetid",
    "Juridisk bistand",
    "Mediakommunikasjon",
    "Møte med skatt",
    "Undersøkelser",
    "Forhandlinger",
    "Mekling",
    "Admin",
    "Kontraktgjennomgang",
]

# Label used whenever an entry, suggestion or invoice points at a case
# that does not exist
UNKNOWN_CASE_LABEL = "Ukjent sak"

# Field-level validation messages for the time entry form
FORM_ERROR_MESSAGES = {
    "case": "Vennligst velg en sak",
    "activityType": "Vennligst velg en aktivitetstype",
    "description": "Vennligst skriv en beskrivelse",
}

# Invoice status badges
INVOICE_STATUS_LABELS = {
    "draft": "Utkast",
    "sent": "Sendt",
    "paid": "Betalt",
    "overdue": "Forfalt",
}

# Suggestion groups
SUGGESTION_CATEGORY_LABELS = {
    "completed": "Fullført",
    "partially_completed": "Delvis fullført",
    "spam": "Spam",
}

# Billing overview periods
BILLING_PERIODS = {
    "all": "Alle perioder",
    "current-month": "Denne måneden",
    "last-month": "Forrige måned",
    "current-quarter": "Dette kvartalet",
    "last-quarter": "Forrige kvartal",
}

# Weekday names, Monday first
WEEKDAY_NAMES = [
    "MANDAG",
    "TIRSDAG",
    "ONSDAG",
    "TORSDAG",
    "FREDAG",
    "LØRDAG",
    "SØNDAG",
]

MONTH_ABBREVIATIONS = [
    "JAN", "FEB", "MAR", "APR", "MAI", "JUN",
    "JUL", "AUG", "SEP", "OKT", "NOV", "DES",
]
