"""CSV export of issues."""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable
from datetime import date, datetime

from civic_reporter.models.issue import Issue

CSV_HEADERS = [
    "ID",
    "Title",
    "Description",
    "Category",
    "Status",
    "Priority",
    "Address",
    "Reporter Name",
    "Reporter Email",
    "Reporter Phone",
    "Created",
    "Updated",
    "Admin Notes",
]


def _text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.isoformat(sep=" ")
    return str(value)


def _row(issue: Issue) -> list:
    return [
        issue.id,
        _text(issue.title),
        _text(issue.description),
        _text(issue.category),
        _text(issue.status),
        _text(issue.priority),
        _text(issue.address),
        _text(issue.reporter_name),
        _text(issue.reporter_email),
        _text(issue.reporter_phone),
        _text(issue.created_at),
        _text(issue.updated_at),
        _text(issue.admin_notes),
    ]


def issues_to_csv(issues: Iterable[Issue]) -> str:
    """Render issues as CSV: bare numeric id, every other field quoted."""
    buf = io.StringIO()
    buf.write(",".join(CSV_HEADERS) + "\n")
    writer = csv.writer(buf, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    for issue in issues:
        writer.writerow(_row(issue))
    return buf.getvalue()


def export_filename(today: date | None = None) -> str:
    return f"civic-issues-{(today or date.today()).isoformat()}.csv"
