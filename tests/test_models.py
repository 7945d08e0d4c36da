"""
Unit tests for schema models.
"""
import pytest

from ddlforge.schema import (
    NO_DEFAULT,
    Column,
    Command,
    CommandKind,
    Dialect,
    DuplicateColumnError,
    InvalidColumnError,
    LogicalType,
    SchemaCompileError,
    Table,
    UnknownDialectError,
)


class TestColumn:
    """Test Column construction and invariants."""

    def test_type_string_is_coerced(self):
        """Test that a known type name becomes a LogicalType."""
        column = Column("email", "STRING", length=255)
        assert column.type is LogicalType.STRING

    def test_unknown_type_is_kept(self):
        """Test that an unknown type is kept for the type mapper to reject."""
        column = Column("location", "geometry")
        assert column.type == "geometry"

    def test_auto_increment_requires_integer(self):
        """Test that auto-increment on a non-integer column is rejected."""
        with pytest.raises(InvalidColumnError):
            Column("id", LogicalType.STRING, length=36, auto_increment=True)

    @pytest.mark.parametrize("params", [
        {"length": "255"},
        {"length": True},
        {"precision": 8.0},
        {"precision": 8, "scale": "2"},
    ])
    def test_type_parameters_must_be_integers(self, params):
        """Test that non-int (or bool) sizes fail with a schema error, not a TypeError."""
        with pytest.raises(InvalidColumnError, match="must be an integer") as excinfo:
            Column("a", LogicalType.DECIMAL, **params)
        assert isinstance(excinfo.value, SchemaCompileError)

    def test_empty_name_rejected(self):
        with pytest.raises(InvalidColumnError):
            Column("", LogicalType.INTEGER)

    def test_no_default_is_distinct_from_null(self):
        """Test that NO_DEFAULT and an explicit None default differ."""
        assert not Column("a", LogicalType.INTEGER).has_default
        assert Column("a", LogicalType.INTEGER, default=None).has_default
        assert Column("a", LogicalType.INTEGER).default is NO_DEFAULT

    def test_columns_are_immutable(self):
        column = Column("a", LogicalType.INTEGER)
        with pytest.raises(Exception):
            column.nullable = True


class TestCommand:
    """Test Command normalization."""

    def test_kind_string_is_coerced(self):
        assert Command(kind="drop_index", name="x").kind is CommandKind.DROP_INDEX

    def test_unknown_kind_rejected(self):
        with pytest.raises(SchemaCompileError):
            Command(kind="truncate")

    def test_single_reference_becomes_tuple(self):
        """Test that a single referenced column is normalized to a tuple."""
        command = Command(kind=CommandKind.FOREIGN, columns=["user_id"], references="id")
        assert command.columns == ("user_id",)
        assert command.references == ("id",)


class TestTable:
    """Test Table invariants and lookups."""

    def test_duplicate_columns_rejected(self):
        with pytest.raises(DuplicateColumnError) as exc_info:
            Table("users", columns=[
                Column("email", LogicalType.STRING, length=100),
                Column("email", LogicalType.TEXT),
            ])
        assert exc_info.value.table == "users"

    def test_column_lookup(self, users_table):
        assert users_table.column("email").length == 255
        assert users_table.column("missing") is None
        assert users_table.column_names == ("id", "email")

    def test_equal_tables_compare_equal(self):
        a = Table("t", columns=[Column("a", LogicalType.INTEGER)])
        b = Table("t", columns=[Column("a", LogicalType.INTEGER)])
        assert a == b


class TestDialect:
    """Test dialect name resolution."""

    @pytest.mark.parametrize("name,expected", [
        ("sqlserver", Dialect.SQLSERVER),
        ("MSSQL", Dialect.SQLSERVER),
        ("mariadb", Dialect.MYSQL),
        ("postgres", Dialect.POSTGRESQL),
        (" sqlite ", Dialect.SQLITE),
        (Dialect.MYSQL, Dialect.MYSQL),
    ])
    def test_from_name(self, name, expected):
        assert Dialect.from_name(name) is expected

    def test_unknown_dialect(self):
        with pytest.raises(UnknownDialectError):
            Dialect.from_name("oracle")
