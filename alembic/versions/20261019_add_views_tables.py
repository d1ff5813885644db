# File: /alembic/versions/20261019_add_views_tables.py | Version: 1.0 | Title: Add views + view_filters tables
"""add views and view_filters tables"""

from alembic import op
import sqlalchemy as sa

revision = "add_views_20261019"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "views",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("table_name", sa.String(length=255), nullable=False),
        sa.Column("columns_json", sa.JSON(), nullable=False),
        sa.Column("permissions_json", sa.JSON(), nullable=False),
        sa.Column("subview_json", sa.JSON(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=True,
        ),
    )
    op.create_index("ix_views_table_name", "views", ["table_name"])

    op.create_table(
        "view_filters",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column(
            "view_id",
            sa.Integer(),
            sa.ForeignKey("views.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("where_json", sa.JSON(), nullable=False),
    )
    op.create_index("ix_view_filters_view_id", "view_filters", ["view_id"])


def downgrade():
    op.drop_index("ix_view_filters_view_id", table_name="view_filters")
    op.drop_table("view_filters")
    op.drop_index("ix_views_table_name", table_name="views")
    op.drop_table("views")
