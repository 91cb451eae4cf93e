"""
Recipe API schemas (request models).
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field


class RecipeCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)


class RecipeUpdateRequest(RecipeCreateRequest):
    """
    Same shape as create: a recipe only carries a name.
    """


class IngredientLinkRequest(BaseModel):
    ingredient: str = Field(..., min_length=1)
    amount: Decimal | None = Field(default=None, ge=0)
