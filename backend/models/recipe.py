# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""recipe_categories, recipes and recipe_ratings table definitions."""

from sqlalchemy import (
    JSON,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.sql import func

from database import Base


class RecipeCategoryRow(Base):
    __tablename__ = "recipe_categories"

    category_id = Column(Integer, primary_key=True, autoincrement=True)
    category_tag = Column(String(60), nullable=False)


class RecipeRow(Base):
    __tablename__ = "recipes"
    # same name as in migration 0001_initial
    __table_args__ = (Index("idx_recipes_category_id", "category_id"),)

    recipe_id = Column(Integer, primary_key=True, autoincrement=True)
    category_id = Column(
        Integer,
        ForeignKey("recipe_categories.category_id", ondelete="RESTRICT"),
        nullable=False,
    )
    title = Column(String(60), nullable=False)
    header = Column(Text, nullable=False)
    image_preview = Column(String(2048), nullable=False)
    description = Column(Text, nullable=False, server_default="")
    estimated_time_minutes = Column(Integer, nullable=False)
    # Free-form payload; never interpreted server-side.
    recipe_ingredients = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class RecipeRatingRow(Base):
    __tablename__ = "recipe_ratings"
    __table_args__ = (
        CheckConstraint("recipe_rating BETWEEN 1 AND 5", name="ck_recipe_rating_range"),
    )

    # One rating per (recipe, user)
    recipe_id = Column(
        Integer,
        ForeignKey("recipes.recipe_id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id = Column(
        Integer,
        ForeignKey("users.user_id", ondelete="CASCADE"),
        primary_key=True,
    )
    recipe_rating = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
