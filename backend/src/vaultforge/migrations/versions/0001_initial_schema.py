"""initial schema

Revision ID: 0001
Revises:
"""

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def _entity_columns():
    return [
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("uuid", sa.String(36), nullable=False, unique=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("revision", sa.String(36), nullable=False),
        sa.Column("deleted", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.Text(), nullable=True),
        sa.Column("updated_at", sa.Text(), nullable=True),
    ]


def _revision_columns():
    return [
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("uuid", sa.String(36), nullable=False, unique=True),
        sa.Column("model", sa.String(36), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("label", sa.Text(), nullable=False),
        sa.Column("favorite", sa.Boolean(), nullable=False),
        sa.Column("hidden", sa.Boolean(), nullable=False),
        sa.Column("trashed", sa.Boolean(), nullable=False),
        sa.Column("cse_type", sa.String(10), nullable=False),
        sa.Column("sse_type", sa.String(10), nullable=False),
        sa.Column("client", sa.Text(), nullable=False),
        sa.Column("edited", sa.Text(), nullable=True),
        sa.Column("deleted", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.Text(), nullable=True),
        sa.Column("updated_at", sa.Text(), nullable=True),
    ]


def upgrade():
    for name in ("passwords", "folders", "tags"):
        op.create_table(name, *_entity_columns())
        op.create_index(f"ix_{name}_user_id", name, ["user_id"])

    op.create_table(
        "password_revisions",
        *_revision_columns(),
        sa.Column("folder", sa.String(36), nullable=True),
        sa.Column("username", sa.Text(), nullable=False),
        sa.Column("password", sa.Text(), nullable=False),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=False),
        sa.Column("custom_fields", sa.Text(), nullable=False),
        sa.Column("hash", sa.String(40), nullable=False),
        sa.Column("status", sa.Integer(), nullable=False),
    )
    op.create_index("ix_password_revisions_folder", "password_revisions", ["folder"])
    op.create_table(
        "folder_revisions",
        *_revision_columns(),
        sa.Column("parent", sa.String(36), nullable=True),
    )
    op.create_index("ix_folder_revisions_parent", "folder_revisions", ["parent"])
    op.create_table(
        "tag_revisions",
        *_revision_columns(),
        sa.Column("color", sa.String(16), nullable=False),
    )
    for name in ("password_revisions", "folder_revisions", "tag_revisions"):
        op.create_index(f"ix_{name}_model", name, ["model"])
        op.create_index(f"ix_{name}_user_id", name, ["user_id"])

    op.create_table(
        "password_tag_relations",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("uuid", sa.String(36), nullable=False, unique=True),
        sa.Column("password", sa.String(36), nullable=False),
        sa.Column("tag", sa.String(36), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("hidden", sa.Boolean(), nullable=False),
        sa.Column("client", sa.Text(), nullable=False),
        sa.Column("deleted", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.Text(), nullable=True),
        sa.Column("updated_at", sa.Text(), nullable=True),
    )
    for column in ("password", "tag", "user_id"):
        op.create_index(
            f"ix_password_tag_relations_{column}", "password_tag_relations", [column]
        )


def downgrade():
    op.drop_table("password_tag_relations")
    op.drop_table("tag_revisions")
    op.drop_table("folder_revisions")
    op.drop_table("password_revisions")
    op.drop_table("tags")
    op.drop_table("folders")
    op.drop_table("passwords")
