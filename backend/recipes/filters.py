# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Dynamic SQL for listing and updating recipes.

Only present filter fields contribute SQL, and every value is bound through
a ``$n`` placeholder.  The placeholder counter and the argument list advance
together, so ``args[n - 1]`` is always the value for ``$n``.
"""

from dataclasses import dataclass
from typing import Any, Optional

from database import Statement

DEFAULT_LIMIT = 10
DEFAULT_OFFSET = 0

RECIPE_COLUMNS = (
    "recipe_id, category_id, title, header, image_preview, description, "
    "estimated_time_minutes, recipe_ingredients, created_at, updated_at"
)

GET_RECIPES_QUERY = f"SELECT {RECIPE_COLUMNS} FROM recipes"
UPDATE_RECIPE_QUERY = "UPDATE recipes SET updated_at = CURRENT_TIMESTAMP"


@dataclass(frozen=True)
class RecipeQueryFilter:
    name: str = ""
    category_id: int = 0
    limit: int = DEFAULT_LIMIT
    offset: int = DEFAULT_OFFSET


@dataclass(frozen=True)
class RecipeUpdateFilter:
    """Sparse update: empty strings, zeros and ``None`` are left untouched."""

    title: Optional[str] = None
    header: Optional[str] = None
    image_preview: Optional[str] = None
    description: Optional[str] = None
    recipe_ingredients: Any = None
    category_id: Optional[int] = None
    estimated_time_minutes: Optional[int] = None


def build_recipes_query(query_filter: RecipeQueryFilter) -> Statement:
    """
    SELECT recipes matching *query_filter*.

    Conditions are AND-joined; LIMIT / OFFSET always take the next two
    positions, whether or not any condition was added.
    """
    conditions: list[str] = []
    args: list[Any] = []
    position = 1

    if query_filter.name:
        conditions.append(f"LOWER(title) = ${position}")
        args.append(query_filter.name.lower())
        position += 1
    if query_filter.category_id:
        conditions.append(f"category_id = ${position}")
        args.append(query_filter.category_id)
        position += 1

    sql = GET_RECIPES_QUERY
    if conditions:
        sql += " WHERE " + " AND ".join(conditions)
    sql += f" LIMIT ${position} OFFSET ${position + 1}"
    args.extend([query_filter.limit, query_filter.offset])
    return Statement(sql, args)


def build_update_recipe_query(recipe_id: int, update_filter: RecipeUpdateFilter) -> Statement:
    """
    UPDATE exactly one recipe by primary key.

    With no field set the statement still runs and only bumps ``updated_at``.
    """
    assignments: list[str] = []
    args: list[Any] = []
    json_params: set[int] = set()
    position = 1

    for column in ("title", "header", "image_preview", "description"):
        value = getattr(update_filter, column)
        if value:
            assignments.append(f"{column} = ${position}")
            args.append(value)
            position += 1
    if update_filter.recipe_ingredients is not None:
        assignments.append(f"recipe_ingredients = ${position}")
        args.append(update_filter.recipe_ingredients)
        json_params.add(position)
        position += 1
    for column in ("category_id", "estimated_time_minutes"):
        value = getattr(update_filter, column)
        if value:
            assignments.append(f"{column} = ${position}")
            args.append(value)
            position += 1

    sql = UPDATE_RECIPE_QUERY
    if assignments:
        sql += ", " + ", ".join(assignments)
    sql += f" WHERE recipe_id = ${position}"
    args.append(recipe_id)
    return Statement(sql, args, frozenset(json_params))
