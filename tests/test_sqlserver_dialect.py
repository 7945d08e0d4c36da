"""
Tests for the SQL Server grammar.
"""
import pytest

from ddlforge.config import CompilerSettings
from ddlforge.schema import (
    Column,
    Command,
    CommandKind,
    IncompleteForeignKeyError,
    InvalidReferentialActionError,
    LogicalType,
    MissingIdentifierError,
    Table,
    UnknownColumnError,
    compile_command,
)


def sql(table, command, settings=None):
    return compile_command(table, command, "sqlserver", settings)


class TestTableCommands:
    """Test create, add, drop and rename."""

    def test_create(self, users_table):
        assert sql(users_table, Command(kind=CommandKind.CREATE)) == [
            "CREATE TABLE [users] ([id] INT NOT NULL IDENTITY PRIMARY KEY, "
            "[email] NVARCHAR(255) NOT NULL)"
        ]

    def test_create_keeps_declared_order(self):
        """Test that every column appears exactly once, in declared order."""
        names = ["zeta", "alpha", "mid", "beta"]
        table = Table("t", columns=[Column(n, LogicalType.INTEGER) for n in names])
        statement = sql(table, Command(kind="create"))[0]
        body = statement[statement.index("(") + 1:-1]
        assert [part.split(" ")[0] for part in body.split(", ")] == [f"[{n}]" for n in names]

    def test_add_prefixes_each_column(self, users_table):
        assert sql(users_table, Command(kind="add")) == [
            "ALTER TABLE [users] ADD [id] INT NOT NULL IDENTITY PRIMARY KEY, "
            "ADD [email] NVARCHAR(255) NOT NULL"
        ]

    def test_add_selected_columns(self, users_table):
        assert sql(users_table, Command(kind="add", columns=["email"])) == [
            "ALTER TABLE [users] ADD [email] NVARCHAR(255) NOT NULL"
        ]

    def test_drop_column(self):
        table = Table("users")
        assert sql(table, Command(kind="drop_column", columns=["a", "b"])) == [
            "ALTER TABLE [users] DROP [a], DROP [b]"
        ]

    def test_drop_table(self, users_table):
        assert sql(users_table, Command(kind="drop")) == ["DROP TABLE [users]"]

    def test_rename(self):
        assert sql(Table("users"), Command(kind="rename", to="members")) == [
            "EXEC sp_rename 'users', 'members'"
        ]

    def test_prefix_applied(self, users_table):
        settings = CompilerSettings(prefix="app_")
        assert sql(users_table, Command(kind="drop"), settings) == ["DROP TABLE [app_users]"]


class TestKeysAndIndexes:
    """Test primary, unique, index and their drops."""

    def test_primary(self, users_table):
        command = Command(kind="primary", name="users_pk", columns=["id"])
        assert sql(users_table, command) == [
            "ALTER TABLE [users] ADD CONSTRAINT users_pk PRIMARY KEY (id)"
        ]

    def test_drop_primary(self, users_table):
        assert sql(users_table, Command(kind="drop_primary", name="users_pk")) == [
            "ALTER TABLE [users] DROP CONSTRAINT users_pk"
        ]

    def test_unique(self, users_table):
        command = Command(kind="unique", name="users_email_unique", columns=["email"])
        assert sql(users_table, command) == [
            "CREATE UNIQUE INDEX users_email_unique ON [users] (email)"
        ]

    def test_index(self, users_table):
        command = Command(kind="index", name="users_id_email_index", columns=["id", "email"])
        assert sql(users_table, command) == [
            "CREATE INDEX users_id_email_index ON [users] (id, email)"
        ]

    @pytest.mark.parametrize("kind", ["drop_unique", "drop_index"])
    def test_drop_key(self, users_table, kind):
        assert sql(users_table, Command(kind=kind, name="users_email_unique")) == [
            "DROP INDEX users_email_unique ON [users]"
        ]

    @pytest.mark.parametrize("kind", [
        "primary", "drop_primary", "unique", "drop_unique", "index", "drop_index",
        "fulltext", "drop_fulltext", "foreign", "drop_foreign",
    ])
    def test_name_required(self, users_table, kind):
        with pytest.raises(MissingIdentifierError) as exc_info:
            sql(users_table, Command(kind=kind, columns=["email"]))
        assert exc_info.value.table == "users"
        assert exc_info.value.kind == kind

    def test_unknown_column(self, users_table):
        command = Command(kind="unique", name="users_phone_unique", columns=["phone"])
        with pytest.raises(UnknownColumnError, match="phone"):
            sql(users_table, command)

    def test_index_requires_columns(self, users_table):
        with pytest.raises(MissingIdentifierError):
            sql(users_table, Command(kind="index", name="empty_index"))


class TestFullText:
    """Test catalog/index statement pairs."""

    def test_fulltext_catalog_first(self, posts_table):
        command = Command(
            kind="fulltext", name="posts_body_fulltext", columns=["title", "body"],
            catalog="posts_catalog", key="posts_pk",
        )
        assert sql(posts_table, command) == [
            "CREATE FULLTEXT CATALOG posts_catalog",
            "CREATE FULLTEXT INDEX ON [posts] (title, body) KEY INDEX posts_pk ON posts_catalog",
        ]

    def test_drop_fulltext_index_first(self, posts_table):
        command = Command(kind="drop_fulltext", name="posts_body_fulltext", catalog="posts_catalog")
        statements = sql(posts_table, command)
        assert statements == [
            "DROP FULLTEXT INDEX posts_body_fulltext",
            "DROP FULLTEXT CATALOG posts_catalog",
        ]
        assert statements[0].startswith("DROP FULLTEXT INDEX")
        assert statements[1].startswith("DROP FULLTEXT CATALOG")

    def test_fulltext_requires_catalog(self, posts_table):
        command = Command(kind="fulltext", name="ft", columns=["body"], key="posts_pk")
        with pytest.raises(MissingIdentifierError, match="catalog"):
            sql(posts_table, command)

    def test_fulltext_requires_key(self, posts_table):
        command = Command(kind="fulltext", name="ft", columns=["body"], catalog="cat")
        with pytest.raises(MissingIdentifierError, match="key"):
            sql(posts_table, command)


class TestForeignKeys:
    """Test foreign key creation and failures."""

    def test_foreign(self, posts_table, foreign_command):
        assert sql(posts_table, foreign_command) == [
            "ALTER TABLE [posts] ADD CONSTRAINT posts_user_id_foreign "
            "FOREIGN KEY (user_id) REFERENCES [users] (id)"
        ]

    def test_foreign_with_actions(self, posts_table):
        command = Command(
            kind="foreign", name="posts_user_id_foreign", columns=["user_id"],
            on="users", references=["id"], on_delete="cascade", on_update="no_action",
        )
        assert sql(posts_table, command)[0].endswith(
            "REFERENCES [users] (id) ON DELETE CASCADE ON UPDATE NO ACTION"
        )

    def test_foreign_prefix_applies_to_both_tables(self, posts_table, foreign_command):
        statement = sql(posts_table, foreign_command, CompilerSettings(prefix="app_"))[0]
        assert "[app_posts]" in statement
        assert "[app_users]" in statement

    def test_missing_references(self, posts_table):
        command = Command(kind="foreign", name="fk", columns=["user_id"], on="users")
        with pytest.raises(IncompleteForeignKeyError):
            sql(posts_table, command)

    def test_missing_on(self, posts_table):
        command = Command(kind="foreign", name="fk", columns=["user_id"], references=["id"])
        with pytest.raises(IncompleteForeignKeyError):
            sql(posts_table, command)

    def test_column_count_mismatch(self, posts_table):
        command = Command(
            kind="foreign", name="fk", columns=["user_id"], on="users", references=["id", "x"],
        )
        with pytest.raises(IncompleteForeignKeyError):
            sql(posts_table, command)

    def test_invalid_action(self, posts_table):
        command = Command(
            kind="foreign", name="fk", columns=["user_id"], on="users", references=["id"],
            on_delete="explode",
        )
        with pytest.raises(InvalidReferentialActionError):
            sql(posts_table, command)

    def test_drop_foreign(self, posts_table):
        assert sql(posts_table, Command(kind="drop_foreign", name="posts_user_id_foreign")) == [
            "ALTER TABLE [posts] DROP CONSTRAINT posts_user_id_foreign"
        ]


class TestDeterminism:

    def test_same_input_same_output(self, users_table, posts_table, foreign_command):
        """Test that compiling twice is byte-identical."""
        for table, command in [
            (users_table, Command(kind="create")),
            (posts_table, foreign_command),
        ]:
            assert sql(table, command) == sql(table, command)
