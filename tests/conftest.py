"""
Pytest configuration and fixtures for DDLForge tests.
"""
import pytest

from ddlforge.config import CompilerSettings
from ddlforge.schema import Column, Command, CommandKind, LogicalType, Table


@pytest.fixture
def settings():
    """Default compiler settings."""
    return CompilerSettings()


@pytest.fixture
def users_table():
    """`users` table with an identity key and an email column."""
    return Table(
        name="users",
        columns=(
            Column("id", LogicalType.INTEGER, auto_increment=True, unsigned=True),
            Column("email", LogicalType.STRING, length=255, nullable=False),
        ),
    )


@pytest.fixture
def posts_table():
    """`posts` table referencing users."""
    return Table(
        name="posts",
        columns=(
            Column("id", LogicalType.INTEGER, auto_increment=True),
            Column("user_id", LogicalType.INTEGER, unsigned=True),
            Column("title", LogicalType.STRING, length=200),
            Column("body", LogicalType.TEXT, nullable=True),
        ),
    )


@pytest.fixture
def foreign_command():
    """posts.user_id -> users.id"""
    return Command(
        kind=CommandKind.FOREIGN,
        name="posts_user_id_foreign",
        columns=("user_id",),
        on="users",
        references=("id",),
    )


@pytest.fixture
def migration_yaml(tmp_path):
    """Write a small migration document and return its path."""
    path = tmp_path / "migration.yaml"
    path.write_text(
        """
tables:
  - name: users
    columns:
      - {name: id, type: integer, auto_increment: true}
      - {name: email, type: string, length: 255}
      - {name: active, type: boolean, default: true}
    commands:
      - create
      - {kind: unique, name: users_email_unique, columns: [email]}
  - name: posts
    columns:
      - {name: id, type: integer, auto_increment: true}
      - {name: user_id, type: integer}
    commands:
      - create
      - {kind: foreign, name: posts_user_id_foreign, columns: [user_id], on: users, references: [id]}
""",
        encoding="utf-8",
    )
    return path
