"""SQLAlchemy models."""

from __future__ import annotations

from civic_reporter.models.issue import Issue

__all__ = [
    "Issue",
]
