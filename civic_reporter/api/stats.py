"""Dashboard statistics API."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from civic_reporter.core.errors import IssueError, to_http_exception
from civic_reporter.db.session import get_db
from civic_reporter.schemas.issue import StatsResponse
from civic_reporter.services.issue_service import get_stats

router = APIRouter(tags=["stats"])


@router.get("/stats", response_model=StatsResponse)
def stats(db: Session = Depends(get_db)):
    """Issue counts: total, per status, and per category (most frequent first)."""
    try:
        return get_stats(db)
    except IssueError as e:
        raise to_http_exception(e)
