"""CSV export tests."""

from datetime import date, datetime

from civic_reporter.models import Issue
from civic_reporter.services.export_service import CSV_HEADERS, export_filename, issues_to_csv


def test_csv_columns_and_quoting():
    issue = Issue(
        id=7,
        title='Sign says "STOP" backwards',
        description="Line one, line two",
        category="safety",
        status="in_progress",
        priority="high",
        address=None,
        reporter_name="Pat",
        reporter_email=None,
        reporter_phone="555-0101",
        created_at=datetime(2026, 3, 1, 9, 30, 0),
        updated_at=datetime(2026, 3, 2, 10, 0, 0),
        admin_notes=None,
    )

    lines = issues_to_csv([issue]).split("\n")

    assert lines[0] == ",".join(CSV_HEADERS)
    assert lines[0].startswith("ID,Title,Description,Category,Status,Priority,Address,")
    assert lines[0].endswith("Created,Updated,Admin Notes")
    assert lines[1] == (
        '7,"Sign says ""STOP"" backwards","Line one, line two","safety","in_progress","high",'
        '"","Pat","","555-0101","2026-03-01 09:30:00","2026-03-02 10:00:00",""'
    )
    assert lines[2] == ""


def test_export_filename_uses_date():
    assert export_filename(date(2026, 10, 17)) == "civic-issues-2026-10-17.csv"


def test_export_endpoint_honors_filters(client):
    for title, category in (("Leaking hydrant", "water"), ("Dead tree", "parks"), ("Burst pipe", "water")):
        client.post("/api/issues", data={"title": title, "description": "See title.", "category": category})

    r = client.get("/api/issues/export", params={"category": "water"})
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    assert "attachment" in r.headers["content-disposition"]

    rows = r.text.strip().split("\n")
    assert len(rows) == 3
    assert '"Burst pipe"' in rows[1]
    assert '"Leaking hydrant"' in rows[2]
