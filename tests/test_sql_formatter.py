"""
Tests for script rendering.
"""
from ddlforge.config import CompilerSettings
from ddlforge.utils.sql_formatter import format_statement, render_script

STATEMENTS = [
    "CREATE TABLE [users] ([id] INT NOT NULL IDENTITY PRIMARY KEY)",
    "CREATE UNIQUE INDEX users_id_unique ON [users] (id)",
]


class TestRenderScript:

    def test_terminated_lines(self):
        assert render_script(STATEMENTS) == (
            "CREATE TABLE [users] ([id] INT NOT NULL IDENTITY PRIMARY KEY);\n"
            "CREATE UNIQUE INDEX users_id_unique ON [users] (id);\n"
        )

    def test_go_batches(self):
        script = render_script(STATEMENTS, CompilerSettings(batch_separator="GO"))
        assert script.count("\nGO") == 2
        assert script.endswith("GO\n")

    def test_empty(self):
        assert render_script([]) == ""

    def test_no_terminator(self):
        script = render_script(STATEMENTS[:1], CompilerSettings(terminator=""))
        assert script == STATEMENTS[0] + "\n"

    def test_pretty(self):
        script = render_script(STATEMENTS, CompilerSettings(pretty=True))
        assert script.startswith("CREATE TABLE")
        assert "users_id_unique" in script
        assert script.rstrip().endswith(";")


class TestFormatStatement:

    def test_keywords_uppercased(self):
        formatted = format_statement("create index idx on t (a)")
        assert formatted.startswith("CREATE INDEX")

    def test_blank_passthrough(self):
        assert format_statement("   ") == "   "
