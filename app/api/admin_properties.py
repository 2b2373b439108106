"""Admin back-office: listing CRUD and catalog stats. Every route requires the admin gate."""

import json
import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Request, UploadFile, status
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from app.api.deps import require_admin
from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.core.errors import ValidationError
from app.schemas.auth import Principal
from app.schemas.property import (
    AdminStats,
    AdminStatsResponse,
    MessageResponse,
    PropertyCreatedResponse,
    PropertyDetailResponse,
    PropertyInput,
    PropertyListResponse,
)
from app.services.properties import (
    DEFAULT_ADMIN_PAGE_LIMIT,
    count_stats,
    create_property,
    delete_property,
    get_property,
    list_properties,
    load_images,
    pagination,
    to_property_out,
    update_property,
)
from app.services.uploads import delete_stored_image, is_upload_file, save_image

logger = logging.getLogger(__name__)

# Router-level dependency: the gate runs before any handler touches the session.
router = APIRouter(dependencies=[Depends(require_admin)])


class ParsedBody:
    """Listing fields plus any image files sent alongside them, not yet stored."""

    def __init__(
        self,
        data: PropertyInput,
        image_file: UploadFile | None = None,
        image_files: list[UploadFile] | None = None,
    ) -> None:
        self.data = data
        self.image_file = image_file
        self.image_files = image_files or []
        self.image_url: str | None = None
        self.images: list[str] = []

    @property
    def stored(self) -> list[str]:
        return [u for u in (self.image_url, *self.images) if u]

    async def store_uploads(self, settings: Settings) -> None:
        """Write the pending files under UPLOAD_DIR; on a bad file, nothing is left behind."""
        try:
            if self.image_file is not None:
                self.image_url = await save_image(self.image_file, settings)
            for file in self.image_files:
                self.images.append(await save_image(file, settings))
        except Exception:
            self.discard_uploads(settings)
            raise

    def discard_uploads(self, settings: Settings) -> None:
        for url in self.stored:
            delete_stored_image(url, settings)
        self.image_url = None
        self.images = []


def _validate_input(raw: Any) -> PropertyInput:
    if not isinstance(raw, dict):
        raise ValidationError("Request body must be a JSON object.")
    try:
        return PropertyInput.model_validate(raw)
    except PydanticValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(p) for p in err.get("loc", ())) or "body"
        raise ValidationError(f"Invalid value for '{field}': {err.get('msg')}") from e


async def _parse_form(request: Request) -> ParsedBody:
    form = await request.form()
    raw: dict[str, Any] = {}
    text_images: list[str] = []
    image_file: UploadFile | None = None
    image_files: list[UploadFile] = []

    for key, value in form.multi_items():
        if is_upload_file(value):
            if not getattr(value, "filename", None):
                continue
            if key == "image":
                image_file = value
            elif key == "images":
                image_files.append(value)
            continue
        if value == "":
            continue
        if key == "images":
            text_images.append(value)
        else:
            raw[key] = value

    if len(text_images) == 1:
        raw["images"] = text_images[0]
    elif text_images:
        raw["images"] = text_images
    return ParsedBody(_validate_input(raw), image_file=image_file, image_files=image_files)


async def read_property_body(request: Request) -> ParsedBody:
    """Read a JSON body or a multipart/urlencoded form into a ParsedBody."""
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type in ("multipart/form-data", "application/x-www-form-urlencoded"):
        return await _parse_form(request)
    if content_type in ("application/json", ""):
        raw_bytes = await request.body()
        if not raw_bytes.strip():
            return ParsedBody(PropertyInput())
        try:
            body = json.loads(raw_bytes)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ValidationError(f"Invalid JSON: {e!s}") from e
        return ParsedBody(_validate_input(body))
    raise HTTPException(
        status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
        detail="Content-Type must be application/json or multipart/form-data.",
    )


@router.get("/properties", response_model=PropertyListResponse)
def admin_list_properties(
    db: Annotated[Session, Depends(get_db)],
    page: str | None = None,
    limit: str | None = None,
) -> PropertyListResponse:
    """All listings, newest first."""
    page_num, limit_num = pagination(page, limit, DEFAULT_ADMIN_PAGE_LIMIT)
    rows, total = list_properties(db, page=page_num, limit=limit_num)
    return PropertyListResponse(
        data=[to_property_out(r) for r in rows],
        page=page_num,
        limit=limit_num,
        total=total,
    )


@router.get("/properties/{property_id}", response_model=PropertyDetailResponse)
def admin_get_property(
    property_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> PropertyDetailResponse:
    return PropertyDetailResponse(data=to_property_out(get_property(db, property_id)))


@router.post(
    "/properties",
    response_model=PropertyCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def admin_create_property(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    admin: Annotated[Principal, Depends(require_admin)],
) -> PropertyCreatedResponse:
    """
    Create a listing from JSON or multipart form data.

    Required: title, price, location. Multipart may carry an `image` file
    (primary image) and repeated `images` files (gallery).
    """
    parsed = await read_property_body(request)
    await parsed.store_uploads(settings)
    try:
        row = create_property(db, parsed.data, parsed.image_url, parsed.images)
    except Exception:
        db.rollback()
        parsed.discard_uploads(settings)
        raise
    logger.info("Property created", extra={"property_id": row.id, "admin_id": admin.id})
    return PropertyCreatedResponse(message="Property created", id=row.id)


@router.put("/properties/{property_id}", response_model=MessageResponse)
async def admin_update_property(
    property_id: int,
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    admin: Annotated[Principal, Depends(require_admin)],
) -> MessageResponse:
    """
    Partial update; fields not sent keep their stored values.

    Stored files no longer referenced after the update (a replaced `image`,
    or gallery entries dropped from `images`) are removed from UPLOAD_DIR.
    """
    row = get_property(db, property_id)
    previous = dict.fromkeys([row.image_url, *load_images(row.images)])
    parsed = await read_property_body(request)
    await parsed.store_uploads(settings)
    try:
        row = update_property(db, property_id, parsed.data, parsed.image_url, parsed.images)
    except Exception:
        db.rollback()
        parsed.discard_uploads(settings)
        raise
    current = {row.image_url, *load_images(row.images)}
    for url in previous:
        if url not in current:
            delete_stored_image(url, settings)
    logger.info("Property updated", extra={"property_id": property_id, "admin_id": admin.id})
    return MessageResponse(message="Property updated")


@router.delete("/properties/{property_id}", response_model=MessageResponse)
def admin_delete_property(
    property_id: int,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    admin: Annotated[Principal, Depends(require_admin)],
) -> MessageResponse:
    row = get_property(db, property_id)
    stored = [row.image_url, *load_images(row.images)]
    delete_property(db, property_id)
    for url in stored:
        delete_stored_image(url, settings)
    logger.info("Property deleted", extra={"property_id": property_id, "admin_id": admin.id})
    return MessageResponse(message="Property deleted")


@router.get("/stats", response_model=AdminStatsResponse)
def admin_stats(db: Annotated[Session, Depends(get_db)]) -> AdminStatsResponse:
    """Counts for the back-office dashboard."""
    return AdminStatsResponse(data=AdminStats(**count_stats(db)))
