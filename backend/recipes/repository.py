# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Recipe store – categories, recipes and ratings.

Lookups return ``None`` / an empty list when nothing matches; updates and
deletes return whether a row was affected.  Turning those into ``NotFound``
is the usecase's job.
"""

import abc
from typing import Optional

from sqlalchemy import JSON, DateTime
from sqlalchemy.engine import Engine, Row
from sqlalchemy.exc import IntegrityError

from core.errors import Conflict
from core.logger import logger
from database import Statement, is_unique_violation
from recipes.entity import NewRecipe, RatingSummary, Recipe, RecipeCategory
from recipes.filters import (
    RECIPE_COLUMNS,
    RecipeQueryFilter,
    RecipeUpdateFilter,
    build_recipes_query,
    build_update_recipe_query,
)


class RecipeRepository(abc.ABC):
    # -- categories --------------------------------------------------------
    @abc.abstractmethod
    def create_category(self, category_tag: str) -> None: ...

    @abc.abstractmethod
    def get_category_by_id(self, category_id: int) -> Optional[RecipeCategory]: ...

    @abc.abstractmethod
    def get_categories(self) -> list[RecipeCategory]: ...

    # -- recipes -----------------------------------------------------------
    @abc.abstractmethod
    def create_recipe(self, recipe: NewRecipe) -> None: ...

    @abc.abstractmethod
    def get_recipe_by_id(self, recipe_id: int) -> Optional[Recipe]: ...

    @abc.abstractmethod
    def get_recipes(self, query_filter: RecipeQueryFilter) -> list[Recipe]: ...

    @abc.abstractmethod
    def update_recipe_by_id(self, recipe_id: int, update_filter: RecipeUpdateFilter) -> bool: ...

    @abc.abstractmethod
    def delete_recipe_by_id(self, recipe_id: int) -> bool: ...

    # -- ratings -----------------------------------------------------------
    @abc.abstractmethod
    def create_rating(self, recipe_id: int, user_id: int, rating: int) -> None: ...

    @abc.abstractmethod
    def get_rating_summary(self, recipe_id: int) -> Optional[RatingSummary]: ...


# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

CREATE_CATEGORY_QUERY = "INSERT INTO recipe_categories(category_tag) VALUES($1)"
GET_CATEGORY_BY_ID_QUERY = """
    SELECT category_id, category_tag
    FROM recipe_categories
    WHERE category_id = $1
    LIMIT 1
"""
GET_CATEGORIES_QUERY = "SELECT category_id, category_tag FROM recipe_categories"

CREATE_RECIPE_QUERY = """
    INSERT INTO recipes(category_id, title, header, image_preview, description,
                        estimated_time_minutes, recipe_ingredients, created_at, updated_at)
    VALUES($1, $2, $3, $4, $5, $6, $7, CURRENT_TIMESTAMP, CURRENT_TIMESTAMP)
"""
GET_RECIPE_BY_ID_QUERY = f"SELECT {RECIPE_COLUMNS} FROM recipes WHERE recipe_id = $1"
DELETE_RECIPE_QUERY = "DELETE FROM recipes WHERE recipe_id = $1"

CREATE_RATING_QUERY = """
    INSERT INTO recipe_ratings(recipe_id, user_id, recipe_rating, created_at, updated_at)
    VALUES($1, $2, $3, CURRENT_TIMESTAMP, CURRENT_TIMESTAMP)
"""
GET_RATING_SUMMARY_QUERY = """
    SELECT AVG(recipe_rating) AS average_rating, COUNT(recipe_rating) AS rating_count
    FROM recipe_ratings
    WHERE recipe_id = $1
    GROUP BY recipe_id
"""

# Result typing so JSON and timestamps decode the same on every backend
_RECIPE_RESULT_TYPES = {
    "recipe_ingredients": JSON,
    "created_at": DateTime(timezone=True),
    "updated_at": DateTime(timezone=True),
}


def _to_recipe(row: Row) -> Recipe:
    return Recipe(
        recipe_id=row.recipe_id,
        category_id=row.category_id,
        title=row.title,
        header=row.header,
        image_preview=row.image_preview,
        description=row.description or "",
        estimated_time_minutes=row.estimated_time_minutes,
        recipe_ingredients=row.recipe_ingredients,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlRecipeRepository(RecipeRepository):
    def __init__(self, engine: Engine):
        self._engine = engine

    # -- categories --------------------------------------------------------

    def create_category(self, category_tag: str) -> None:
        clause, params = Statement(CREATE_CATEGORY_QUERY, [category_tag]).compile()
        with self._engine.begin() as conn:
            conn.execute(clause, params)

    def get_category_by_id(self, category_id: int) -> Optional[RecipeCategory]:
        clause, params = Statement(GET_CATEGORY_BY_ID_QUERY, [category_id]).compile()
        with self._engine.connect() as conn:
            row = conn.execute(clause, params).first()
        if row is None:
            return None
        return RecipeCategory(category_id=row.category_id, category_tag=row.category_tag)

    def get_categories(self) -> list[RecipeCategory]:
        clause, params = Statement(GET_CATEGORIES_QUERY).compile()
        with self._engine.connect() as conn:
            rows = conn.execute(clause, params).all()
        return [RecipeCategory(category_id=r.category_id, category_tag=r.category_tag) for r in rows]

    # -- recipes -----------------------------------------------------------

    def create_recipe(self, recipe: NewRecipe) -> None:
        clause, params = Statement(
            CREATE_RECIPE_QUERY,
            [
                recipe.category_id,
                recipe.title,
                recipe.header,
                recipe.image_preview,
                recipe.description,
                recipe.estimated_time_minutes,
                recipe.recipe_ingredients,
            ],
            json_params=frozenset({7}),
        ).compile()
        with self._engine.begin() as conn:
            conn.execute(clause, params)

    def get_recipe_by_id(self, recipe_id: int) -> Optional[Recipe]:
        clause, params = Statement(GET_RECIPE_BY_ID_QUERY, [recipe_id]).compile()
        with self._engine.connect() as conn:
            row = conn.execute(clause.columns(**_RECIPE_RESULT_TYPES), params).first()
        return _to_recipe(row) if row is not None else None

    def get_recipes(self, query_filter: RecipeQueryFilter) -> list[Recipe]:
        statement = build_recipes_query(query_filter)
        logger.debug("[recipe_repository.get_recipes] %s %r", statement.sql, statement.args)
        clause, params = statement.compile()
        with self._engine.connect() as conn:
            rows = conn.execute(clause.columns(**_RECIPE_RESULT_TYPES), params).all()
        return [_to_recipe(r) for r in rows]

    def update_recipe_by_id(self, recipe_id: int, update_filter: RecipeUpdateFilter) -> bool:
        statement = build_update_recipe_query(recipe_id, update_filter)
        logger.debug("[recipe_repository.update_recipe_by_id] %s", statement.sql)
        clause, params = statement.compile()
        with self._engine.begin() as conn:
            affected = conn.execute(clause, params).rowcount
        return affected > 0

    def delete_recipe_by_id(self, recipe_id: int) -> bool:
        clause, params = Statement(DELETE_RECIPE_QUERY, [recipe_id]).compile()
        with self._engine.begin() as conn:
            affected = conn.execute(clause, params).rowcount
        return affected > 0

    # -- ratings -----------------------------------------------------------

    def create_rating(self, recipe_id: int, user_id: int, rating: int) -> None:
        """Raises ``Conflict`` when this user already rated this recipe."""
        clause, params = Statement(CREATE_RATING_QUERY, [recipe_id, user_id, rating]).compile()
        try:
            with self._engine.begin() as conn:
                conn.execute(clause, params)
        except IntegrityError as exc:
            if is_unique_violation(exc):
                raise Conflict() from exc
            raise

    def get_rating_summary(self, recipe_id: int) -> Optional[RatingSummary]:
        clause, params = Statement(GET_RATING_SUMMARY_QUERY, [recipe_id]).compile()
        with self._engine.connect() as conn:
            row = conn.execute(clause, params).first()
        if row is None:
            return None
        return RatingSummary(average_rating=float(row.average_rating), rating_count=int(row.rating_count))
