"""
Ingredient API schemas (request models).
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field


class IngredientCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    price: Decimal | None = Field(default=None, ge=0)


class IngredientUpdateRequest(BaseModel):
    # At least one of the two must be present (checked by the router).
    name: str | None = Field(default=None, min_length=1)
    price: Decimal | None = Field(default=None, ge=0)
