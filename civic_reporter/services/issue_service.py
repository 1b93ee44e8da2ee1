"""Issue store: persistence operations for citizen-submitted issues."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

import pydantic
from sqlalchemy import Select, desc, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from civic_reporter.core.errors import NotFoundError, StorageError, ValidationError
from civic_reporter.models.issue import DEFAULT_PRIORITY, DEFAULT_STATUS, STATUSES, Issue
from civic_reporter.schemas.issue import CategoryCount, IssueCreate, IssueFilter, StatsResponse

logger = logging.getLogger(__name__)


@contextmanager
def _storage_errors(db: Session, action: str) -> Iterator[None]:
    """Roll back and re-raise database failures as StorageError."""
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Issue store failed to %s", action)
        raise StorageError(str(getattr(exc, "orig", None) or exc)) from exc


def _describe(exc: pydantic.ValidationError) -> str:
    parts = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err["loc"]) or "issue"
        parts.append(f"{field}: {err['msg']}")
    return "; ".join(parts)


def parse_submission(fields: Mapping[str, Any]) -> IssueCreate:
    """Validate raw submission fields. Raises ValidationError on bad input."""
    try:
        return IssueCreate.model_validate(dict(fields))
    except pydantic.ValidationError as exc:
        raise ValidationError(_describe(exc)) from exc


def create_issue(
    db: Session,
    data: IssueCreate | Mapping[str, Any],
    image_path: str | None = None,
) -> Issue:
    """Persist a new issue. Status is always reported, whatever was submitted."""
    if not isinstance(data, IssueCreate):
        data = parse_submission(data)

    if data.status and data.status != DEFAULT_STATUS:
        logger.debug("Ignoring submitted status %r on new issue", data.status)

    issue = Issue(
        title=data.title,
        description=data.description,
        category=data.category,
        status=DEFAULT_STATUS,
        priority=data.priority or DEFAULT_PRIORITY,
        latitude=data.latitude,
        longitude=data.longitude,
        address=data.address,
        image_path=image_path,
        reporter_name=data.reporter_name,
        reporter_email=data.reporter_email,
        reporter_phone=data.reporter_phone,
    )
    with _storage_errors(db, "create issue"):
        db.add(issue)
        db.commit()
        db.refresh(issue)

    logger.info("Issue %s reported (category=%s, image=%s)", issue.id, issue.category, image_path or "-")
    return issue


def get_issue(db: Session, issue_id: int) -> Issue:
    """Get an issue by id or raise NotFoundError."""
    with _storage_errors(db, "load issue"):
        issue = db.get(Issue, issue_id)
    if not issue:
        raise NotFoundError(issue_id)
    return issue


def _apply_filter(stmt: Select, filters: IssueFilter) -> Select:
    if filters.status:
        stmt = stmt.where(Issue.status == filters.status)
    if filters.category:
        stmt = stmt.where(Issue.category == filters.category)
    if filters.priority:
        stmt = stmt.where(Issue.priority == filters.priority)
    if filters.search:
        stmt = stmt.where(
            or_(
                Issue.title.icontains(filters.search, autoescape=True),
                Issue.description.icontains(filters.search, autoescape=True),
            )
        )
    return stmt


def _newest_first(stmt: Select) -> Select:
    return stmt.order_by(desc(Issue.created_at), desc(Issue.id))


def list_issues(
    db: Session,
    filters: IssueFilter | None = None,
    page: int = 1,
    limit: int = 10,
) -> tuple[list[Issue], int]:
    """Return one page of matching issues, newest first, and the total match count."""
    filters = filters or IssueFilter()
    if page < 1 or limit < 1:
        raise ValidationError("page and limit must be positive")

    offset = (page - 1) * limit
    stmt = _newest_first(_apply_filter(select(Issue), filters)).limit(limit).offset(offset)
    count_stmt = _apply_filter(select(func.count()).select_from(Issue), filters)

    with _storage_errors(db, "list issues"):
        issues = list(db.execute(stmt).scalars().all())
        total = db.scalar(count_stmt) or 0
    return issues, total


def list_all_issues(db: Session, filters: IssueFilter | None = None) -> list[Issue]:
    """All matching issues, newest first, unpaginated."""
    stmt = _newest_first(_apply_filter(select(Issue), filters or IssueFilter()))
    with _storage_errors(db, "list issues"):
        return list(db.execute(stmt).scalars().all())


def update_status(db: Session, issue_id: int, status: str, admin_notes: str | None = None) -> Issue:
    """Set status and admin notes and refresh updated_at. Any status may follow any other."""
    if status not in STATUSES:
        raise ValidationError(f"status must be one of {', '.join(STATUSES)}")

    issue = get_issue(db, issue_id)
    previous = issue.status
    with _storage_errors(db, "update issue status"):
        issue.status = status
        issue.admin_notes = admin_notes
        issue.updated_at = func.now()
        db.commit()
        db.refresh(issue)

    logger.info("Issue %s status %s -> %s", issue_id, previous, status)
    return issue


def get_stats(db: Session) -> StatsResponse:
    """Total, per-status and per-category counts."""
    by_status_stmt = select(Issue.status, func.count(Issue.id)).group_by(Issue.status)
    count_col = func.count(Issue.id).label("count")
    by_category_stmt = (
        select(Issue.category, count_col)
        .group_by(Issue.category)
        .order_by(desc(count_col), Issue.category)
    )

    with _storage_errors(db, "compute stats"):
        total = db.scalar(select(func.count(Issue.id))) or 0
        by_status = dict(db.execute(by_status_stmt).tuples().all())
        categories = [CategoryCount(category=c, count=n) for c, n in db.execute(by_category_stmt).tuples()]

    return StatsResponse(
        total=total,
        reported=by_status.get("reported", 0),
        in_progress=by_status.get("in_progress", 0),
        resolved=by_status.get("resolved", 0),
        categories=categories,
    )
