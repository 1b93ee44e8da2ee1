"""Issues API: citizen submissions and admin review."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile
from sqlalchemy.orm import Session

from civic_reporter.core.errors import IssueError, to_http_exception
from civic_reporter.db.session import get_db
from civic_reporter.schemas.issue import (
    IssueCreatedResponse,
    IssueFilter,
    IssueListResponse,
    IssueResponse,
    IssueStatusUpdate,
    MessageResponse,
)
from civic_reporter.services import export_service, issue_service
from civic_reporter.services.upload_service import discard_image, has_file, save_image

router = APIRouter(prefix="/issues", tags=["issues"])


def issue_filter(
    status: str | None = Query(default=None),
    category: str | None = Query(default=None),
    priority: str | None = Query(default=None),
    search: str | None = Query(default=None, max_length=200),
) -> IssueFilter:
    """Query-string filter shared by listing and export. Blank values are ignored."""
    return IssueFilter(status=status, category=category, priority=priority, search=search)


@router.get("", response_model=IssueListResponse)
def list_issues(
    filters: IssueFilter = Depends(issue_filter),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=1000),
    db: Session = Depends(get_db),
):
    """List issues newest first, with the total count of matches."""
    try:
        issues, total = issue_service.list_issues(db, filters, page, limit)
    except IssueError as e:
        raise to_http_exception(e)
    return IssueListResponse(
        issues=[IssueResponse.model_validate(i) for i in issues],
        total=total,
        page=page,
        limit=limit,
    )


@router.post("", response_model=IssueCreatedResponse, status_code=201)
def create_issue(
    title: str | None = Form(default=None),
    description: str | None = Form(default=None),
    category: str | None = Form(default=None),
    priority: str | None = Form(default=None),
    status: str | None = Form(default=None),
    latitude: str | None = Form(default=None),
    longitude: str | None = Form(default=None),
    address: str | None = Form(default=None),
    reporter_name: str | None = Form(default=None),
    reporter_email: str | None = Form(default=None),
    reporter_phone: str | None = Form(default=None),
    image: UploadFile | None = File(default=None),
    db: Session = Depends(get_db),
):
    """Submit a new issue with an optional photo. The stored status is always reported."""
    fields = {
        "title": title,
        "description": description,
        "category": category,
        "priority": priority,
        "status": status,
        "latitude": latitude,
        "longitude": longitude,
        "address": address,
        "reporter_name": reporter_name,
        "reporter_email": reporter_email,
        "reporter_phone": reporter_phone,
    }
    try:
        data = issue_service.parse_submission(fields)
        image_path = save_image(image) if has_file(image) else None
    except IssueError as e:
        raise to_http_exception(e)

    try:
        issue = issue_service.create_issue(db, data, image_path)
    except IssueError as e:
        if image_path:
            discard_image(image_path)
        raise to_http_exception(e)

    return IssueCreatedResponse(id=issue.id, status=issue.status)


# Fixed paths go before the {issue_id} path param


@router.get("/export")
def export_issues(
    filters: IssueFilter = Depends(issue_filter),
    db: Session = Depends(get_db),
):
    """Download all matching issues as CSV."""
    try:
        issues = issue_service.list_all_issues(db, filters)
    except IssueError as e:
        raise to_http_exception(e)
    return Response(
        content=export_service.issues_to_csv(issues),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{export_service.export_filename()}"'},
    )


@router.get("/{issue_id}", response_model=IssueResponse)
def get_issue(issue_id: int, db: Session = Depends(get_db)):
    """Get a single issue, e.g. for citizen status tracking."""
    try:
        return issue_service.get_issue(db, issue_id)
    except IssueError as e:
        raise to_http_exception(e)


@router.put("/{issue_id}/status", response_model=MessageResponse)
def update_issue_status(
    issue_id: int,
    data: IssueStatusUpdate,
    db: Session = Depends(get_db),
):
    """Admin status update. Any status may follow any other."""
    try:
        issue_service.update_status(db, issue_id, data.status, data.admin_notes)
    except IssueError as e:
        raise to_http_exception(e)
    return MessageResponse(message="Issue status updated successfully")
