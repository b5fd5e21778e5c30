"""Public read access to published site content."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ableconnect.db.session import get_db
from ableconnect.models import Content
from ableconnect.schemas import content_payload

router = APIRouter()


@router.get("")
async def list_published_content(
    category: Optional[str] = Query(None, description="Comma-separated categories"),
    db: Session = Depends(get_db),
):
    """Published items, newest first, optionally limited to some categories."""
    query = db.query(Content).filter(Content.is_published.is_(True))

    if category:
        categories = [name.strip() for name in category.split(",") if name.strip()]
        if categories:
            query = query.filter(Content.category.in_(categories))

    items = query.order_by(Content.created_at.desc(), Content.id.desc()).all()
    return [content_payload(item) for item in items]
