"""Property listing queries, admin writes and catalog counts."""

import json
import logging
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from app.core.errors import NotFoundError, ValidationError
from app.models import Property, User
from app.schemas.property import PropertyInput, PropertyOut

logger = logging.getLogger(__name__)

DEFAULT_PAGE_LIMIT = 10
DEFAULT_ADMIN_PAGE_LIMIT = 20
MAX_PAGE_LIMIT = 100
ALL_TYPES = "Semua Tipe"
# Largest OFFSET a signed 64-bit SQL integer can carry.
MAX_OFFSET = 2**63 - 1

CREATE_DEFAULTS: dict[str, Any] = {
    "description": "",
    "price_formatted": "",
    "address": "",
    "bedrooms": 0,
    "bathrooms": 0,
    "land_area": 0,
    "building_area": 0,
    "property_type": "house",
    "status": "Dijual",
    "featured": False,
    "image_url": None,
}


def parse_positive_int(value: str | int | None, default: int) -> int:
    """Lenient query param parsing: missing, non-numeric or < 1 falls back to default."""
    try:
        n = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    return n if n >= 1 else default


def pagination(page: str | int | None, limit: str | int | None, default_limit: int) -> tuple[int, int]:
    return parse_positive_int(page, 1), min(parse_positive_int(limit, default_limit), MAX_PAGE_LIMIT)


def page_rows(query: Query, page: int, limit: int) -> list[Property]:
    """One page of an ordered query; pages past the largest SQL offset are empty."""
    offset = (page - 1) * limit
    if offset > MAX_OFFSET:
        return []
    return query.offset(offset).limit(limit).all()


def load_images(raw: str | list | None) -> list[str]:
    """Decode the stored images column; anything unreadable becomes an empty list."""
    if raw is None or raw == "":
        return []
    if isinstance(raw, list):
        return [str(i) for i in raw]
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        return []
    if not isinstance(data, list):
        return []
    return [str(i) for i in data if i is not None]


def normalize_images(value: list[str] | str | None) -> list[str] | None:
    """
    Canonical form for images supplied by clients.

    A list is kept; a JSON array string is decoded; any other non-empty string
    is a single reference. None (and an empty string) means "not supplied".
    """
    if value is None:
        return None
    if isinstance(value, list):
        return [v for v in (s.strip() for s in value) if v]
    value = value.strip()
    if not value:
        return None
    if value.startswith("["):
        try:
            data = json.loads(value)
        except json.JSONDecodeError as e:
            raise ValidationError("images must be a list of strings") from e
        if not isinstance(data, list) or not all(isinstance(i, str) for i in data):
            raise ValidationError("images must be a list of strings")
        return [i.strip() for i in data if i.strip()]
    return [value]


def dump_images(images: list[str]) -> str:
    return json.dumps(images)


def to_property_out(row: Property) -> PropertyOut:
    return PropertyOut(
        id=row.id,
        title=row.title,
        description=row.description or "",
        price=row.price,
        price_formatted=row.price_formatted or "",
        location=row.location,
        address=row.address or "",
        bedrooms=row.bedrooms or 0,
        bathrooms=row.bathrooms or 0,
        land_area=row.land_area or 0,
        building_area=row.building_area or 0,
        property_type=row.property_type,
        status=row.status,
        featured=bool(row.featured),
        image_url=row.image_url,
        images=load_images(row.images),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def search_properties(
    db: Session,
    tipe: str | None = None,
    lokasi: str | None = None,
    page: int = 1,
    limit: int = DEFAULT_PAGE_LIMIT,
) -> tuple[list[Property], int]:
    """
    Public catalog search.

    tipe: exact property_type (ignored when empty or "Semua Tipe").
    lokasi: case-insensitive substring of location.
    Ordered featured first, then newest id. Returns (page rows, filtered total).
    """
    query = db.query(Property)
    if tipe and tipe.strip() and tipe != ALL_TYPES:
        query = query.filter(Property.property_type == tipe.strip())
    if lokasi and lokasi.strip():
        query = query.filter(Property.location.icontains(lokasi.strip(), autoescape=True))

    total = query.order_by(None).count()
    rows = page_rows(query.order_by(Property.featured.desc(), Property.id.desc()), page, limit)
    return rows, total


def list_properties(db: Session, page: int = 1, limit: int = DEFAULT_ADMIN_PAGE_LIMIT) -> tuple[list[Property], int]:
    """Admin listing: every row, newest first."""
    total = db.query(func.count(Property.id)).scalar() or 0
    rows = page_rows(db.query(Property).order_by(Property.id.desc()), page, limit)
    return rows, total


def get_property(db: Session, property_id: int) -> Property:
    row = db.query(Property).filter(Property.id == property_id).first()
    if row is None:
        raise NotFoundError("Property not found")
    return row


def create_property(
    db: Session,
    body: PropertyInput,
    uploaded_image_url: str | None = None,
    uploaded_images: list[str] | None = None,
) -> Property:
    """Insert a listing. title, price and location are required."""
    if not body.title or not body.title.strip() or body.price is None or not body.location or not body.location.strip():
        raise ValidationError("title, price, location required")

    values = dict(CREATE_DEFAULTS)
    values.update(body.model_dump(exclude_none=True, exclude={"images"}))
    values["title"] = body.title.strip()
    values["location"] = body.location.strip()
    if not values["price_formatted"]:
        values["price_formatted"] = str(body.price)
    if uploaded_image_url:
        values["image_url"] = uploaded_image_url

    images = normalize_images(body.images) or []
    images.extend(uploaded_images or [])

    row = Property(**values, images=dump_images(images))
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def update_property(
    db: Session,
    property_id: int,
    body: PropertyInput,
    uploaded_image_url: str | None = None,
    uploaded_images: list[str] | None = None,
) -> Property:
    """
    Partial update: fields absent (or null) in body keep their stored value.

    Uploaded secondary images are appended to the supplied list, or to the
    stored list when the body carries no images field.
    """
    row = get_property(db, property_id)

    changes = body.model_dump(exclude_none=True, exclude={"images"})
    for field in ("title", "location"):
        if field in changes:
            changes[field] = changes[field].strip()
            if not changes[field]:
                raise ValidationError(f"{field} must not be empty")
    for field, value in changes.items():
        setattr(row, field, value)
    if uploaded_image_url:
        row.image_url = uploaded_image_url

    images = normalize_images(body.images)
    if images is not None or uploaded_images:
        base = images if images is not None else load_images(row.images)
        row.images = dump_images(base + list(uploaded_images or []))

    db.commit()
    db.refresh(row)
    return row


def delete_property(db: Session, property_id: int) -> None:
    row = get_property(db, property_id)
    db.delete(row)
    db.commit()


def count_stats(db: Session) -> dict[str, int]:
    return {
        "users": db.query(func.count(User.id)).scalar() or 0,
        "properties": db.query(func.count(Property.id)).scalar() or 0,
        "featured": db.query(func.count(Property.id)).filter(Property.featured.is_(True)).scalar()
        or 0,
    }
