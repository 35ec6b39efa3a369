"""
Cursor pagination keyed by the last-seen row id.
"""
from typing import Optional

from sqlalchemy import and_, or_
from sqlalchemy.orm import Query, Session

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def newest_first_page(db: Session, query: Query, model, cursor: Optional[int], limit: int) -> list:
    """Return up to limit rows strictly older than the cursor row, newest first.

    Rows are ordered by (created_at, id) so rows sharing a timestamp still page
    deterministically. A cursor that does not resolve to a row yields an empty page.
    """
    if cursor is not None:
        anchor = db.get(model, cursor)
        if anchor is None:
            return []
        query = query.filter(
            or_(
                model.created_at < anchor.created_at,
                and_(model.created_at == anchor.created_at, model.id < anchor.id),
            )
        )
    return query.order_by(model.created_at.desc(), model.id.desc()).limit(limit).all()
