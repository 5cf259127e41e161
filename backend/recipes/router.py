# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Recipe endpoints – categories, recipes and ratings.

Reads are public.  Category / recipe writes sit behind ``require_admin``:
a request that carries a valid token for a READER gets 403 before any
business logic runs.  Rating a recipe only needs a valid token.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request, status

from core.errors import InvalidId
from core.numbers import parse_int
from recipes.filters import DEFAULT_LIMIT, DEFAULT_OFFSET, RecipeQueryFilter
from recipes.schemas import (
    CategoriesResponse,
    CategoryOut,
    CategoryResponse,
    CreateCategoryRequest,
    CreateRatingRequest,
    CreateRecipeRequest,
    MessageResponse,
    RatingSummaryResponse,
    RecipeOut,
    RecipeResponse,
    RecipesResponse,
    UpdateRecipeRequest,
)
from recipes.usecase import RecipeUsecase
from users.entity import User
from users.gate import get_current_user, require_admin

router = APIRouter(prefix="/api/v1", tags=["recipes"])


def get_recipe_usecase(request: Request) -> RecipeUsecase:
    return request.app.state.recipe_usecase


def _parse_id(raw: str) -> int:
    """Path ids must be positive int64 values."""
    value = parse_int(raw)
    if value is None or value <= 0:
        raise InvalidId()
    return value


def _int_or(raw: Optional[str], default: int) -> int:
    value = parse_int(raw)
    return default if value is None else value


def _ok(message: str) -> MessageResponse:
    return MessageResponse(message=message, code=status.HTTP_200_OK)


# ---------------------------------------------------------------------------
# Recipe categories
# ---------------------------------------------------------------------------


@router.post("/recipe_category", response_model=MessageResponse)
def create_category(
    body: CreateCategoryRequest,
    admin: User = Depends(require_admin),
    usecase: RecipeUsecase = Depends(get_recipe_usecase),
):
    usecase.create_category(body.category_tag)
    return _ok("successfully created a new category")


@router.get("/recipe_categories", response_model=CategoriesResponse, response_model_exclude_none=True)
def list_categories(usecase: RecipeUsecase = Depends(get_recipe_usecase)):
    categories = usecase.get_categories()
    return CategoriesResponse(
        recipe_categories=[CategoryOut.model_validate(c) for c in categories],
        message="successfully retrieved recipe categories",
        code=status.HTTP_200_OK,
    )


@router.get("/recipe_category/{category_id}", response_model=CategoryResponse, response_model_exclude_none=True)
def get_category(category_id: str, usecase: RecipeUsecase = Depends(get_recipe_usecase)):
    category = usecase.get_category_by_id(_parse_id(category_id))
    return CategoryResponse(
        recipe_category=CategoryOut.model_validate(category),
        message="successfully retrieved recipe category by id",
        code=status.HTTP_200_OK,
    )


# ---------------------------------------------------------------------------
# Recipes
# ---------------------------------------------------------------------------


@router.post("/recipe", response_model=MessageResponse)
def create_recipe(
    body: CreateRecipeRequest,
    admin: User = Depends(require_admin),
    usecase: RecipeUsecase = Depends(get_recipe_usecase),
):
    usecase.create_recipe(body)
    return _ok("successfully created a new recipe")


@router.get("/recipes", response_model=RecipesResponse, response_model_exclude_none=True)
def list_recipes(
    name: Optional[str] = None,
    category_id: Optional[str] = None,
    limit: Optional[str] = None,
    offset: Optional[str] = None,
    usecase: RecipeUsecase = Depends(get_recipe_usecase),
):
    """
    Optional filters: ``name`` (case-insensitive exact title), ``category_id``.
    ``limit`` / ``offset`` fall back to 10 / 0 when absent or invalid.
    """
    limit_value = _int_or(limit, DEFAULT_LIMIT)
    offset_value = _int_or(offset, DEFAULT_OFFSET)
    query_filter = RecipeQueryFilter(
        name=name or "",
        category_id=max(_int_or(category_id, 0), 0),
        limit=limit_value if limit_value > 0 else DEFAULT_LIMIT,
        offset=offset_value if offset_value >= 0 else DEFAULT_OFFSET,
    )
    recipes = usecase.get_recipes(query_filter)
    return RecipesResponse(
        recipes=[RecipeOut.model_validate(r) for r in recipes],
        message="successfully retrieved recipes",
        code=status.HTTP_200_OK,
    )


@router.get("/recipe/{recipe_id}", response_model=RecipeResponse, response_model_exclude_none=True)
def get_recipe(recipe_id: str, usecase: RecipeUsecase = Depends(get_recipe_usecase)):
    recipe = usecase.get_recipe_by_id(_parse_id(recipe_id))
    return RecipeResponse(
        recipe=RecipeOut.model_validate(recipe),
        message="successfully retrieved recipe by id",
        code=status.HTTP_200_OK,
    )


@router.put("/recipe/{recipe_id}", response_model=MessageResponse)
def update_recipe(
    recipe_id: str,
    body: UpdateRecipeRequest,
    admin: User = Depends(require_admin),
    usecase: RecipeUsecase = Depends(get_recipe_usecase),
):
    usecase.update_recipe(_parse_id(recipe_id), body)
    return _ok("successfully updated recipe")


@router.delete("/recipe/{recipe_id}", response_model=MessageResponse)
def delete_recipe(
    recipe_id: str,
    admin: User = Depends(require_admin),
    usecase: RecipeUsecase = Depends(get_recipe_usecase),
):
    usecase.delete_recipe_by_id(_parse_id(recipe_id))
    return _ok("successfully deleted recipe")


# ---------------------------------------------------------------------------
# Ratings
# ---------------------------------------------------------------------------


@router.post("/recipe/{recipe_id}/rating", response_model=MessageResponse)
def rate_recipe(
    recipe_id: str,
    body: CreateRatingRequest,
    current_user: User = Depends(get_current_user),
    usecase: RecipeUsecase = Depends(get_recipe_usecase),
):
    usecase.create_rating(_parse_id(recipe_id), current_user.user_id, body.rating)
    return _ok("successfully rated recipe")


@router.get("/recipe/{recipe_id}/rating", response_model=RatingSummaryResponse)
def get_rating_summary(recipe_id: str, usecase: RecipeUsecase = Depends(get_recipe_usecase)):
    summary = usecase.get_rating_summary(_parse_id(recipe_id))
    return RatingSummaryResponse(
        average_rating=summary.average_rating,
        rating_count=summary.rating_count,
        message="successfully retrieved recipe rating summary",
        code=status.HTTP_200_OK,
    )
