from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


ProductStatus = Literal["In Stock", "Out of Stock"]


class ProductBase(BaseModel):
    name: str = Field(min_length=1)
    unit: str = Field(min_length=1)
    category: str = Field(min_length=1)
    brand: str = Field(min_length=1)
    stock: int = Field(ge=0)
    status: ProductStatus
    image: Optional[str] = None

    @field_validator("name", "unit", "category", "brand", mode="before")
    @classmethod
    def strip_text(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("image", mode="before")
    @classmethod
    def blank_image_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ProductCreate(ProductBase):
    pass


class ProductUpdate(ProductBase):
    """Full replacement of every mutable product field."""


class ProductRead(BaseModel):
    id: int
    name: str
    unit: str
    category: str
    brand: str
    stock: int
    status: str
    image: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ProductCreated(BaseModel):
    id: int


__all__ = [
    "ProductBase",
    "ProductCreate",
    "ProductCreated",
    "ProductRead",
    "ProductStatus",
    "ProductUpdate",
]
