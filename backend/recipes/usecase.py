# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Recipe usecase – thin orchestration over ``RecipeRepository``.

Repository results pass through unchanged except that "no rows" (``None``,
an empty list, zero affected rows) becomes ``NotFound`` here.
"""

from core.errors import BadRequest, NotFound
from core.logger import logger
from recipes.entity import NewRecipe, RatingSummary, Recipe, RecipeCategory
from recipes.filters import RecipeQueryFilter, RecipeUpdateFilter
from recipes.repository import RecipeRepository
from recipes.schemas import CreateRecipeRequest, UpdateRecipeRequest


class RecipeUsecase:
    def __init__(self, recipes: RecipeRepository):
        self._recipes = recipes

    # -- categories --------------------------------------------------------

    def create_category(self, category_tag: str) -> None:
        self._recipes.create_category(category_tag)
        logger.debug("[recipe_usecase.create_category] created recipe category %r", category_tag)

    def get_category_by_id(self, category_id: int) -> RecipeCategory:
        category = self._recipes.get_category_by_id(category_id)
        if category is None:
            logger.debug("[recipe_usecase.get_category_by_id] no row found for category_id: %d", category_id)
            raise NotFound()
        return category

    def get_categories(self) -> list[RecipeCategory]:
        categories = self._recipes.get_categories()
        if not categories:
            logger.debug("[recipe_usecase.get_categories] recipe categories are empty")
            raise NotFound()
        return categories

    # -- recipes -----------------------------------------------------------

    def create_recipe(self, body: CreateRecipeRequest) -> None:
        self._require_category(body.category_id)
        self._recipes.create_recipe(NewRecipe(
            category_id=body.category_id,
            title=body.title,
            header=body.header,
            image_preview=body.image_preview,
            description=body.description,
            estimated_time_minutes=body.estimated_time_minutes,
            recipe_ingredients=body.recipe_ingredients,
        ))

    def get_recipe_by_id(self, recipe_id: int) -> Recipe:
        recipe = self._recipes.get_recipe_by_id(recipe_id)
        if recipe is None:
            logger.debug("[recipe_usecase.get_recipe_by_id] no row found for recipe_id: %d", recipe_id)
            raise NotFound()
        return recipe

    def get_recipes(self, query_filter: RecipeQueryFilter) -> list[Recipe]:
        recipes = self._recipes.get_recipes(query_filter)
        if not recipes:
            logger.debug("[recipe_usecase.get_recipes] no rows found for %r", query_filter)
            raise NotFound()
        return recipes

    def update_recipe(self, recipe_id: int, body: UpdateRecipeRequest) -> None:
        if body.category_id:
            self._require_category(body.category_id)
        # every request field goes to its own column
        updated = self._recipes.update_recipe_by_id(recipe_id, RecipeUpdateFilter(
            title=body.title,
            header=body.header,
            image_preview=body.image_preview,
            description=body.description,
            recipe_ingredients=body.recipe_ingredients,
            category_id=body.category_id,
            estimated_time_minutes=body.estimated_time_minutes,
        ))
        if not updated:
            logger.debug("[recipe_usecase.update_recipe] no row found for recipe_id: %d", recipe_id)
            raise NotFound()

    def delete_recipe_by_id(self, recipe_id: int) -> None:
        if not self._recipes.delete_recipe_by_id(recipe_id):
            logger.debug("[recipe_usecase.delete_recipe_by_id] no row found for recipe_id: %d", recipe_id)
            raise NotFound()

    # -- ratings -----------------------------------------------------------

    def create_rating(self, recipe_id: int, user_id: int, rating: int) -> None:
        self.get_recipe_by_id(recipe_id)
        self._recipes.create_rating(recipe_id, user_id, rating)

    def get_rating_summary(self, recipe_id: int) -> RatingSummary:
        summary = self._recipes.get_rating_summary(recipe_id)
        if summary is None:
            logger.debug("[recipe_usecase.get_rating_summary] no ratings for recipe_id: %d", recipe_id)
            raise NotFound()
        return summary

    def _require_category(self, category_id: int) -> None:
        if self._recipes.get_category_by_id(category_id) is None:
            logger.debug("[recipe_usecase] unknown category_id: %d", category_id)
            raise BadRequest("invalid category")
