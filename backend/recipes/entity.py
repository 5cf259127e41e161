# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Recipe, category and rating records."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class RecipeCategory:
    category_id: int
    category_tag: str


@dataclass(frozen=True)
class Recipe:
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


@dataclass(frozen=True)
class NewRecipe:
    category_id: int
    title: str
    header: str
    image_preview: str
    description: str
    estimated_time_minutes: int
    recipe_ingredients: Any


@dataclass(frozen=True)
class RatingSummary:
    average_rating: float
    rating_count: int
