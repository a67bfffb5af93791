"""Table definitions for every VaultForge store.

Each logical object kind gets an entity table and a revision table. The
entity row points at its current revision through ``revision``; folder and
tag membership lives on the revision, never on the entity.
"""

import sqlalchemy as sa

metadata = sa.MetaData()


def _entity_table(name: str) -> sa.Table:
    return sa.Table(
        name,
        metadata,
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uuid", sa.String(36), nullable=False, unique=True),
        sa.Column("user_id", sa.String(64), nullable=False, index=True),
        sa.Column("revision", sa.String(36), nullable=False, default=""),
        sa.Column("deleted", sa.Boolean, nullable=False, default=False),
        sa.Column("created_at", sa.Text, nullable=True),
        sa.Column("updated_at", sa.Text, nullable=True),
    )


def _revision_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uuid", sa.String(36), nullable=False, unique=True),
        sa.Column("model", sa.String(36), nullable=False, index=True),
        sa.Column("user_id", sa.String(64), nullable=False, index=True),
        sa.Column("label", sa.Text, nullable=False, default=""),
        sa.Column("favorite", sa.Boolean, nullable=False, default=False),
        sa.Column("hidden", sa.Boolean, nullable=False, default=False),
        sa.Column("trashed", sa.Boolean, nullable=False, default=False),
        sa.Column("cse_type", sa.String(10), nullable=False, default="none"),
        sa.Column("sse_type", sa.String(10), nullable=False, default="none"),
        sa.Column("client", sa.Text, nullable=False, default=""),
        sa.Column("edited", sa.Text, nullable=True),
        sa.Column("deleted", sa.Boolean, nullable=False, default=False),
        sa.Column("created_at", sa.Text, nullable=True),
        sa.Column("updated_at", sa.Text, nullable=True),
    ]


passwords = _entity_table("passwords")
folders = _entity_table("folders")
tags = _entity_table("tags")

password_revisions = sa.Table(
    "password_revisions",
    metadata,
    *_revision_columns(),
    sa.Column("folder", sa.String(36), nullable=True, index=True),
    sa.Column("username", sa.Text, nullable=False, default=""),
    sa.Column("password", sa.Text, nullable=False, default=""),
    sa.Column("url", sa.Text, nullable=False, default=""),
    sa.Column("notes", sa.Text, nullable=False, default=""),
    sa.Column("custom_fields", sa.Text, nullable=False, default="[]"),
    sa.Column("hash", sa.String(40), nullable=False, default=""),
    sa.Column("status", sa.Integer, nullable=False, default=0),
)

folder_revisions = sa.Table(
    "folder_revisions",
    metadata,
    *_revision_columns(),
    sa.Column("parent", sa.String(36), nullable=True, index=True),
)

tag_revisions = sa.Table(
    "tag_revisions",
    metadata,
    *_revision_columns(),
    sa.Column("color", sa.String(16), nullable=False, default="#000000"),
)

# (password, tag) is expected to be unique among live rows; not enforced here.
password_tag_relations = sa.Table(
    "password_tag_relations",
    metadata,
    sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
    sa.Column("uuid", sa.String(36), nullable=False, unique=True),
    sa.Column("password", sa.String(36), nullable=False, index=True),
    sa.Column("tag", sa.String(36), nullable=False, index=True),
    sa.Column("user_id", sa.String(64), nullable=False, index=True),
    sa.Column("hidden", sa.Boolean, nullable=False, default=False),
    sa.Column("client", sa.Text, nullable=False, default=""),
    sa.Column("deleted", sa.Boolean, nullable=False, default=False),
    sa.Column("created_at", sa.Text, nullable=True),
    sa.Column("updated_at", sa.Text, nullable=True),
)


def create_schema(engine: sa.Engine) -> None:
    """Create every table that does not exist yet."""
    metadata.create_all(engine)


def drop_schema(engine: sa.Engine) -> None:
    metadata.drop_all(engine)
