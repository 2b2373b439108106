"""Public catalog: search and listing detail. No authentication."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.property import PropertyDetailResponse, PropertyListResponse
from app.services.properties import (
    DEFAULT_PAGE_LIMIT,
    get_property,
    pagination,
    search_properties,
    to_property_out,
)

router = APIRouter()


@router.get("", response_model=PropertyListResponse)
def list_public_properties(
    db: Annotated[Session, Depends(get_db)],
    tipe: str | None = None,
    lokasi: str | None = None,
    page: str | None = None,
    limit: str | None = None,
) -> PropertyListResponse:
    """
    Search listings by type (`tipe`) and location substring (`lokasi`).

    Featured listings come first, then newest. `total` counts every match,
    independent of `page` and `limit`.
    """
    page_num, limit_num = pagination(page, limit, DEFAULT_PAGE_LIMIT)
    rows, total = search_properties(db, tipe=tipe, lokasi=lokasi, page=page_num, limit=limit_num)
    return PropertyListResponse(
        data=[to_property_out(r) for r in rows],
        page=page_num,
        limit=limit_num,
        total=total,
    )


@router.get("/{property_id}", response_model=PropertyDetailResponse)
def get_public_property(
    property_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> PropertyDetailResponse:
    return PropertyDetailResponse(data=to_property_out(get_property(db, property_id)))
