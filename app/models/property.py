"""ORM model for property listings."""

from sqlalchemy import BigInteger, Boolean, Column, DateTime, Integer, String, Text, func

from app.models.base import Base


class Property(Base):
    """
    One listing in the public catalog.

    images holds the ordered secondary image references as a JSON array string;
    use app.services.properties.load_images / dump_images to convert.
    """

    __tablename__ = "properties"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    price = Column(BigInteger, nullable=False)
    price_formatted = Column(String(64), nullable=False, default="")
    location = Column(String(255), nullable=False, index=True)
    address = Column(String(512), nullable=False, default="")
    bedrooms = Column(Integer, nullable=False, default=0)
    bathrooms = Column(Integer, nullable=False, default=0)
    land_area = Column(Integer, nullable=False, default=0)
    building_area = Column(Integer, nullable=False, default=0)
    property_type = Column(String(64), nullable=False, default="house", index=True)
    status = Column(String(32), nullable=False, default="Dijual")
    featured = Column(Boolean, nullable=False, default=False)
    image_url = Column(String(1024), nullable=True)
    images = Column(Text, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
