from recipes.filters import (
    GET_RECIPES_QUERY,
    UPDATE_RECIPE_QUERY,
    RecipeQueryFilter,
    RecipeUpdateFilter,
    build_recipes_query,
    build_update_recipe_query,
)


def _placeholders(sql):
    return [int(part.split()[0].rstrip(",")) for part in sql.split("$")[1:]]


# -- build_recipes_query ----------------------------------------------------


def test_default_filter_only_paginates():
    statement = build_recipes_query(RecipeQueryFilter())
    assert statement.sql == f"{GET_RECIPES_QUERY} LIMIT $1 OFFSET $2"
    assert statement.args == [10, 0]


def test_name_and_category():
    statement = build_recipes_query(RecipeQueryFilter(name="Pasta", category_id=5, limit=20, offset=40))
    assert statement.sql == (
        f"{GET_RECIPES_QUERY} WHERE LOWER(title) = $1 AND category_id = $2 LIMIT $3 OFFSET $4"
    )
    assert statement.args == ["pasta", 5, 20, 40]


def test_category_only_starts_at_first_placeholder():
    statement = build_recipes_query(RecipeQueryFilter(category_id=3))
    assert statement.sql == f"{GET_RECIPES_QUERY} WHERE category_id = $1 LIMIT $2 OFFSET $3"
    assert statement.args == [3, 10, 0]


def test_name_only():
    statement = build_recipes_query(RecipeQueryFilter(name="SOUP"))
    assert "category_id =" not in statement.sql
    assert statement.args == ["soup", 10, 0]


def test_placeholders_match_argument_count():
    for query_filter in (
        RecipeQueryFilter(),
        RecipeQueryFilter(name="a"),
        RecipeQueryFilter(category_id=1),
        RecipeQueryFilter(name="a", category_id=1, limit=1, offset=1),
    ):
        statement = build_recipes_query(query_filter)
        assert _placeholders(statement.sql) == list(range(1, len(statement.args) + 1))


def test_name_never_reaches_sql_text():
    hostile = "x' OR '1'='1"
    statement = build_recipes_query(RecipeQueryFilter(name=hostile))
    assert hostile.lower() not in statement.sql
    assert statement.args[0] == hostile.lower()


# -- build_update_recipe_query ----------------------------------------------


def test_empty_update_only_bumps_timestamp():
    statement = build_update_recipe_query(7, RecipeUpdateFilter())
    assert statement.sql == f"{UPDATE_RECIPE_QUERY} WHERE recipe_id = $1"
    assert statement.args == [7]
    assert statement.json_params == frozenset()


def test_empty_values_are_skipped():
    statement = build_update_recipe_query(
        7, RecipeUpdateFilter(title="", header="", category_id=0, estimated_time_minutes=0)
    )
    assert statement.args == [7]


def test_each_field_goes_to_its_own_column():
    statement = build_update_recipe_query(
        9, RecipeUpdateFilter(header="New header", image_preview="new.png")
    )
    assert statement.sql == (
        f"{UPDATE_RECIPE_QUERY}, header = $1, image_preview = $2 WHERE recipe_id = $3"
    )
    assert statement.args == ["New header", "new.png", 9]


def test_full_update():
    ingredients = {"flour": "200g"}
    statement = build_update_recipe_query(
        3,
        RecipeUpdateFilter(
            title="Pancakes",
            header="h",
            image_preview="i.png",
            description="d",
            recipe_ingredients=ingredients,
            category_id=2,
            estimated_time_minutes=15,
        ),
    )
    assert statement.sql == (
        f"{UPDATE_RECIPE_QUERY}, title = $1, header = $2, image_preview = $3, description = $4, "
        "recipe_ingredients = $5, category_id = $6, estimated_time_minutes = $7 WHERE recipe_id = $8"
    )
    assert statement.args == ["Pancakes", "h", "i.png", "d", ingredients, 2, 15, 3]
    assert statement.json_params == frozenset({5})


def test_empty_ingredient_list_is_still_written():
    statement = build_update_recipe_query(1, RecipeUpdateFilter(recipe_ingredients=[]))
    assert statement.args == [[], 1]
    assert statement.json_params == frozenset({1})


# -- Statement.compile ------------------------------------------------------


def test_compile_rewrites_placeholders_to_named_binds():
    clause, params = build_recipes_query(RecipeQueryFilter(name="Pasta", category_id=5)).compile()
    assert "$" not in clause.text
    assert ":p1" in clause.text and ":p4" in clause.text
    assert params == {"p1": "pasta", "p2": 5, "p3": 10, "p4": 0}
