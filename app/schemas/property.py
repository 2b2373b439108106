"""Pydantic schemas for property listing endpoints."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

PropertyStatus = Literal["Dijual", "Disewa", "Terjual"]


class PropertyOut(BaseModel):
    """Listing as returned to clients; images is always a list."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str = ""
    price: int
    price_formatted: str = ""
    location: str
    address: str = ""
    bedrooms: int = 0
    bathrooms: int = 0
    land_area: int = 0
    building_area: int = 0
    property_type: str = "house"
    status: str = "Dijual"
    featured: bool = False
    image_url: str | None = None
    images: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PropertyInput(BaseModel):
    """
    Body for admin create and update (JSON or multipart form fields).

    Every field is optional here: create enforces title/price/location in the
    service layer, update only touches the fields that are present.
    images accepts a list, a JSON array string, or a single reference.
    """

    model_config = ConfigDict(extra="ignore")

    title: str | None = Field(default=None, max_length=255)
    description: str | None = None
    price: int | None = Field(default=None, ge=0)
    price_formatted: str | None = Field(default=None, max_length=64)
    location: str | None = Field(default=None, max_length=255)
    address: str | None = Field(default=None, max_length=512)
    bedrooms: int | None = Field(default=None, ge=0)
    bathrooms: int | None = Field(default=None, ge=0)
    land_area: int | None = Field(default=None, ge=0)
    building_area: int | None = Field(default=None, ge=0)
    property_type: str | None = Field(default=None, max_length=64)
    status: PropertyStatus | None = None
    featured: bool | None = None
    image_url: str | None = Field(default=None, max_length=1024)
    images: list[str] | str | None = None


class PropertyListResponse(BaseModel):
    success: bool = True
    data: list[PropertyOut]
    page: int
    limit: int
    total: int = Field(description="Number of listings matching the filters, ignoring pagination")


class PropertyDetailResponse(BaseModel):
    success: bool = True
    data: PropertyOut


class PropertyCreatedResponse(BaseModel):
    success: bool = True
    message: str
    id: int


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class AdminStats(BaseModel):
    users: int
    properties: int
    featured: int


class AdminStatsResponse(BaseModel):
    success: bool = True
    data: AdminStats
