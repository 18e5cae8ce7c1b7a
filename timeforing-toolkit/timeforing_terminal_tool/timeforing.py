#!/usr/bin/env python3
"""
timeforing.py - Terminal utility to:
  1) Review unconfirmed activity suggestions by completeness
  2) Print the weekly hours table per case and day
  3) Print the billing overview and export invoices in LEDES 1998B
  4) Check how an hours value typed with a decimal comma is read

Works on the demo data set, placed in the week of --date.
"""

from __future__ import annotations

import json
from datetime import date, datetime
from pathlib import Path
from typing import List, Optional

import typer

from app.db.seed_data import seed_services
from app.services.billing_service import BillingService, SortColumn, SortDirection
from app.services.time_tracking_service import TimeTrackingService
from app.utils.decimal_input import clamp_hours, format_number_with_comma, parse_decimal_input
from app.utils.formatting import format_currency, format_date, format_hours

app = typer.Typer(add_completion=False, help="Timeføring terminal helper: suggestions, weekly hours, billing.")


def _parse_day(value: Optional[str]) -> date:
    if not value:
        return date.today()
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise typer.BadParameter(f"Expected YYYY-MM-DD, got: {value}")


def _session(day: date) -> tuple[TimeTrackingService, BillingService]:
    tracker = TimeTrackingService()
    billing = BillingService(tracker)
    seed_services(tracker, billing, today=day)
    return tracker, billing


def _cell(text: str, width: int) -> str:
    return text[:width].ljust(width)


@app.command()
def suggestions(
    on_date: Optional[str] = typer.Option(None, "--date", help="Any day of the demo week (YYYY-MM-DD)."),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a listing."),
):
    """
    List unconfirmed suggestions grouped as completed, partially completed and spam.
    """
    tracker, _ = _session(_parse_day(on_date))
    grouped = tracker.categorized_suggestions()

    if as_json:
        typer.echo(json.dumps(grouped.counts()))
        return

    for title, items in (
        ("Fullført", grouped.completed),
        ("Delvis fullført", grouped.partially_completed),
        ("Spam", grouped.spam),
    ):
        typer.echo(f"\n{title} ({len(items)})")
        for s in items:
            case = tracker.case_label(s.case_id) if s.case_id else "-"
            typer.echo(
                f"  {format_date(s.date)}  {_cell(case, 30)} {_cell(s.type or '-', 20)} "
                f"{format_number_with_comma(s.hours) or '-':>6}  {s.description or '-'}"
            )


@app.command()
def week(
    on_date: Optional[str] = typer.Option(None, "--date", help="Any day of the week to show (YYYY-MM-DD)."),
):
    """
    Print hours per case and weekday, with row, day and week totals.
    """
    day = _parse_day(on_date)
    tracker, _ = _session(day)
    overview = tracker.weekly_overview(day)

    header = _cell("Sak", 32) + "".join(f"{d['day_name'][:3]:>7}" for d in overview["days"])
    typer.echo(header + f"{'Sum':>8}")
    for row in overview["rows"]:
        hours = [sum(e["hours"] for e in cell) for cell in row["cells"]]
        line = _cell(row["case"]["name"], 32)
        line += "".join(f"{format_hours(h) if h else '':>7}" for h in hours)
        typer.echo(line + f"{format_hours(row['total_hours']):>8}")

    totals = "".join(f"{format_hours(h):>7}" for h in overview["day_totals"])
    typer.echo(_cell("Totalt", 32) + totals + f"{format_hours(overview['week_total']):>8}")


@app.command()
def billing(
    q: str = typer.Option("", help="Filter on case name, client or case number."),
    sort: SortColumn = typer.Option(SortColumn.CASE, help="Sort column."),
    direction: SortDirection = typer.Option(SortDirection.ASC, help="Sort direction."),
    on_date: Optional[str] = typer.Option(None, "--date", help="Any day of the demo week (YYYY-MM-DD)."),
):
    """
    Print billable hours and amount per case.
    """
    _, service = _session(_parse_day(on_date))
    rows = service.case_summaries(q, sort, direction)
    if not rows:
        typer.echo("No billable hours.")
        raise typer.Exit(code=1)

    for r in rows:
        typer.echo(
            f"{_cell(r.case_name, 32)} {_cell(r.client_name, 18)} "
            f"{format_hours(r.billable_hours, ' t'):>8} {format_currency(r.amount):>16}"
        )


@app.command()
def export(
    case_id: str = typer.Argument(..., help="Case to invoice, e.g. sak9."),
    out: Optional[Path] = typer.Option(None, help="Write LEDES text to this file instead of stdout."),
    on_date: Optional[str] = typer.Option(None, "--date", help="Invoice date (YYYY-MM-DD)."),
):
    """
    Create a draft invoice for a case and print it in LEDES 1998B format.
    """
    day = _parse_day(on_date)
    _, service = _session(day)
    try:
        invoice = service.create_invoice(case_id, today=day)
    except KeyError:
        raise typer.BadParameter(f"Unknown case: {case_id}")

    content = service.export_invoice(invoice.id)
    if out is None:
        typer.echo(content)
        return
    out.write_text(content + "\n", encoding="utf-8")
    typer.echo(f"Wrote {out}")


@app.command("parse-hours")
def parse_hours(
    values: List[str] = typer.Argument(..., help='Typed values, e.g. "2,5" "abc" "30".'),
):
    """
    Show how typed hours are read and what the field shows after leaving it.
    """
    for raw in values:
        parsed = parse_decimal_input(raw)
        if parsed is None:
            typer.echo(f"{raw!r}: not a number")
            continue
        clamped = clamp_hours(parsed)
        typer.echo(f"{raw!r}: {parsed} -> {format_number_with_comma(clamped)}")


if __name__ == "__main__":
    app()
