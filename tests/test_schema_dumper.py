"""
Unit tests for schema_dumper.py
"""

import io

import pytest

from mysqldump.schema_dumper import SchemaDumper


class TestDumpSchema:
    """Tests for dump_schema method."""

    def test_full_section(self, fake_connection, make_options):
        output = io.StringIO()
        SchemaDumper(fake_connection, make_options()).dump_schema("users", output)

        assert output.getvalue() == (
            "\n\n--\n-- Table structure for table `users`\n--\n\n"
            "DROP TABLE IF EXISTS `users`;\n"
            "CREATE TABLE `users` (\n  `id` int NOT NULL,\n  `name` varchar(255)\n);\n"
        )

    def test_without_drop_table(self, fake_connection, make_options):
        output = io.StringIO()
        SchemaDumper(fake_connection, make_options(add_drop_table=False)).dump_schema("users", output)

        assert "DROP TABLE" not in output.getvalue()
        assert "CREATE TABLE `users`" in output.getvalue()

    def test_queries_create_statement(self, fake_connection, make_options):
        SchemaDumper(fake_connection, make_options()).dump_schema("users", io.StringIO())
        assert fake_connection.queries == ["SHOW CREATE TABLE `users`"]

    def test_query_error_propagates_before_writing(self, fake_connection, make_options):
        fake_connection.failures[("get_create_table", "users")] = RuntimeError("Table doesn't exist")
        output = io.StringIO()

        with pytest.raises(RuntimeError):
            SchemaDumper(fake_connection, make_options()).dump_schema("users", output)

        assert output.getvalue() == ""
