"""
Tests for the SQLite grammar.
"""
import pytest

from ddlforge.schema import (
    Command,
    IncompleteForeignKeyError,
    Table,
    UnsupportedCommandError,
    compile_command,
)


def sql(table, command):
    return compile_command(table, command, "sqlite")


class TestSQLiteGrammar:
    """Test SQLite statement templates."""

    def test_create(self, users_table):
        assert sql(users_table, Command(kind="create")) == [
            'CREATE TABLE "users" ("id" INTEGER NOT NULL PRIMARY KEY AUTOINCREMENT, '
            '"email" VARCHAR NOT NULL)'
        ]

    def test_add_one_statement_per_column(self, posts_table):
        assert sql(posts_table, Command(kind="add", columns=["title", "body"])) == [
            'ALTER TABLE "posts" ADD COLUMN "title" VARCHAR NOT NULL',
            'ALTER TABLE "posts" ADD COLUMN "body" TEXT NULL',
        ]

    def test_add_auto_increment_column_unsupported(self, posts_table):
        """Test that an AUTOINCREMENT key cannot be added to an existing table."""
        with pytest.raises(UnsupportedCommandError, match="AUTOINCREMENT"):
            sql(posts_table, Command(kind="add", columns=["id", "title"]))

    def test_implicit_add_with_auto_increment_unsupported(self, users_table):
        with pytest.raises(UnsupportedCommandError):
            sql(users_table, Command(kind="add"))

    def test_drop_column_one_statement_per_column(self):
        assert sql(Table("posts"), Command(kind="drop_column", columns=["a", "b"])) == [
            'ALTER TABLE "posts" DROP COLUMN "a"',
            'ALTER TABLE "posts" DROP COLUMN "b"',
        ]

    def test_rename(self):
        assert sql(Table("posts"), Command(kind="rename", to="articles")) == [
            'ALTER TABLE "posts" RENAME TO "articles"'
        ]

    def test_unique(self, users_table):
        command = Command(kind="unique", name="users_email_unique", columns=["email"])
        assert sql(users_table, command) == [
            'CREATE UNIQUE INDEX users_email_unique ON "users" (email)'
        ]

    @pytest.mark.parametrize("kind", ["drop_unique", "drop_index"])
    def test_drop_index(self, users_table, kind):
        assert sql(users_table, Command(kind=kind, name="users_email_unique")) == [
            "DROP INDEX users_email_unique"
        ]

    @pytest.mark.parametrize("command", [
        Command(kind="primary", name="pk", columns=["id"]),
        Command(kind="drop_primary", name="pk"),
        Command(kind="drop_foreign", name="fk"),
        Command(kind="fulltext", name="ft", columns=["email"]),
        Command(kind="drop_fulltext", name="ft"),
        Command(kind="foreign", name="fk", columns=["id"], on="accounts", references=["id"]),
    ])
    def test_unsupported_commands(self, users_table, command):
        """Test that constraint changes SQLite cannot express raise instead of emitting SQL."""
        with pytest.raises(UnsupportedCommandError, match="sqlite"):
            sql(users_table, command)

    def test_foreign_validation_precedes_support_check(self, users_table):
        command = Command(kind="foreign", name="fk", columns=["id"], on="accounts")
        with pytest.raises(IncompleteForeignKeyError):
            sql(users_table, command)
