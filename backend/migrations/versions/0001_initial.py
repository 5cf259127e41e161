"""Initial schema – users, recipe_categories, recipes, recipe_ratings

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19

Creates the four tables with the unique / check / foreign-key constraints
the repositories rely on (unique email, closed role enum, one rating per
user and recipe).
"""

from alembic import op
import sqlalchemy as sa

# Alembic revision identifiers
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    # -- users ----------------------------------------------------------
    op.create_table(
        "users",
        sa.Column("user_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "role",
            sa.Enum("ADMIN", "READER", name="user_role", create_constraint=True),
            nullable=False,
        ),
        sa.Column("email", sa.String(60), nullable=False, unique=True),
        # passlib hash string – never plaintext
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("name", sa.String(60), nullable=False),
        sa.Column("profile_image", sa.String(2048), nullable=False, server_default=""),
        *_timestamps(),
    )

    # -- recipe_categories ----------------------------------------------
    op.create_table(
        "recipe_categories",
        sa.Column("category_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("category_tag", sa.String(60), nullable=False),
    )

    # -- recipes --------------------------------------------------------
    op.create_table(
        "recipes",
        sa.Column("recipe_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "category_id",
            sa.Integer(),
            sa.ForeignKey("recipe_categories.category_id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("title", sa.String(60), nullable=False),
        sa.Column("header", sa.Text(), nullable=False),
        sa.Column("image_preview", sa.String(2048), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("estimated_time_minutes", sa.Integer(), nullable=False),
        sa.Column("recipe_ingredients", sa.JSON(), nullable=False),
        *_timestamps(),
    )
    op.create_index("idx_recipes_category_id", "recipes", ["category_id"])

    # -- recipe_ratings -------------------------------------------------
    op.create_table(
        "recipe_ratings",
        sa.Column(
            "recipe_id",
            sa.Integer(),
            sa.ForeignKey("recipes.recipe_id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.user_id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("recipe_rating", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("recipe_rating BETWEEN 1 AND 5", name="ck_recipe_rating_range"),
    )


def downgrade() -> None:
    op.drop_table("recipe_ratings")
    op.drop_index("idx_recipes_category_id", table_name="recipes")
    op.drop_table("recipes")
    op.drop_table("recipe_categories")
    op.drop_table("users")
    sa.Enum(name="user_role").drop(op.get_bind(), checkfirst=True)
