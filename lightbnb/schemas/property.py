"""
Pydantic schemas for property inserts and property search filters.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional
from decimal import Decimal


# Column order of the properties insert statement
PROPERTY_COLUMNS = (
    "owner_id",
    "title",
    "description",
    "thumbnail_photo_url",
    "cover_photo_url",
    "cost_per_night",
    "street",
    "city",
    "province",
    "post_code",
    "country",
    "parking_spaces",
    "number_of_bathrooms",
    "number_of_bedrooms",
)


class PropertyCreate(BaseModel):
    """
    Schema for inserting a new property.
    cost_per_night is stored as given, in cents.
    """

    owner_id: int = Field(..., description="ID of the owning user", examples=[1])
    title: str = Field(..., description="Listing title", examples=["Speed lamp"])
    description: Optional[str] = Field(None, description="Listing description", examples=["description"])
    thumbnail_photo_url: str = Field(
        ...,
        description="Small listing image",
        examples=["https://images.pexels.com/photos/2086676/pexels-photo-2086676.jpeg?h=350"]
    )
    cover_photo_url: str = Field(
        ...,
        description="Large listing image",
        examples=["https://images.pexels.com/photos/2086676/pexels-photo-2086676.jpeg"]
    )
    cost_per_night: int = Field(..., description="Nightly cost in cents", examples=[93061])
    street: str = Field(..., examples=["536 Namsub Highway"])
    city: str = Field(..., examples=["Sotboske"])
    province: str = Field(..., examples=["Quebec"])
    post_code: str = Field(..., examples=["28142"])
    country: str = Field(..., examples=["Canada"])
    parking_spaces: int = Field(0, examples=[6])
    number_of_bathrooms: int = Field(0, examples=[4])
    number_of_bedrooms: int = Field(0, examples=[8])

    def insert_values(self) -> tuple:
        """Field values in insert column order."""
        return tuple(getattr(self, column) for column in PROPERTY_COLUMNS)


class PropertySearchFilters(BaseModel):
    """
    Optional filters for property search.
    Prices are in whole currency units; empty strings count as not supplied.
    """

    owner_id: Optional[int] = Field(
        None,
        description="Only properties owned by this user",
        examples=[1]
    )

    city: Optional[str] = Field(
        None,
        description="Case-sensitive substring of the city name",
        examples=["Van"]
    )

    minimum_price_per_night: Optional[Decimal] = Field(
        None,
        description="Minimum nightly cost in whole currency units",
        examples=[50]
    )

    maximum_price_per_night: Optional[Decimal] = Field(
        None,
        description="Maximum nightly cost in whole currency units",
        examples=[150]
    )

    minimum_rating: Optional[Decimal] = Field(
        None,
        description="Minimum average review rating",
        examples=[4]
    )

    model_config = {
        "extra": "ignore",
    }

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        """Treat empty form values as absent filters."""
        if isinstance(v, str) and not v.strip():
            return None
        return v
