# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for the recipe endpoints."""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator


# -- Requests --------------------------------------------------------------


class CreateCategoryRequest(BaseModel):
    category_tag: str = Field(min_length=3, max_length=60)


class CreateRecipeRequest(BaseModel):
    title: str = Field(min_length=6, max_length=60)
    header: str = Field(min_length=1)
    image_preview: str = Field(min_length=1)
    description: str = ""
    recipe_ingredients: Any = Field(...)  # opaque JSON, must be present
    category_id: int = Field(ge=1)
    estimated_time_minutes: int = Field(ge=3)

    @field_validator("recipe_ingredients")
    @classmethod
    def _ingredients_present(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("recipe_ingredients is required")
        return value


class UpdateRecipeRequest(BaseModel):
    # Omitted / empty fields keep their stored value
    title: Optional[str] = None
    header: Optional[str] = None
    image_preview: Optional[str] = None
    description: Optional[str] = None
    recipe_ingredients: Any = None
    category_id: Optional[int] = Field(default=None, ge=1)
    estimated_time_minutes: Optional[int] = Field(default=None, ge=3)


class CreateRatingRequest(BaseModel):
    rating: int = Field(ge=1, le=5)


# -- Responses -------------------------------------------------------------


class CategoryOut(BaseModel):
    category_id: int
    category_tag: str

    model_config = {"from_attributes": True}


class RecipeOut(BaseModel):
    recipe_id: int
    category_id: int
    title: str
    header: str
    image_preview: str
    description: str
    estimated_time_minutes: int
    recipe_ingredients: Any
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    message: str
    code: int


class CategoryResponse(MessageResponse):
    recipe_category: Optional[CategoryOut] = None


class CategoriesResponse(MessageResponse):
    recipe_categories: Optional[List[CategoryOut]] = None


class RecipeResponse(MessageResponse):
    recipe: Optional[RecipeOut] = None


class RecipesResponse(MessageResponse):
    recipes: Optional[List[RecipeOut]] = None


class RatingSummaryResponse(MessageResponse):
    average_rating: float
    rating_count: int
