from src.hr_payroll.hr_payroll.database.bootstrap import _iter_sql_statements, _strip_create_db_and_use


def test_strip_create_database_and_use():
    sql = "CREATE DATABASE IF NOT EXISTS hr_payroll;\nUSE hr_payroll;\nCREATE TABLE a (id INT);\n"

    assert list(_iter_sql_statements(_strip_create_db_and_use(sql))) == ["CREATE TABLE a (id INT)"]


def test_splitter_keeps_semicolons_in_quotes_and_drops_comments():
    sql = (
        "-- bảng lương\n"
        "CREATE TABLE s (note VARCHAR(20) DEFAULT 'a;b');\n"
        "INSERT INTO s VALUES (\"x;y\"); -- trailing\n"
        "SELECT 1"
    )

    assert list(_iter_sql_statements(sql)) == [
        "CREATE TABLE s (note VARCHAR(20) DEFAULT 'a;b')",
        'INSERT INTO s VALUES ("x;y")',
        "SELECT 1",
    ]


def test_bundled_schema_defines_payroll_tables():
    from pathlib import Path

    schema = Path(__file__).resolve().parents[2] / "database" / "schema.sql"
    statements = list(_iter_sql_statements(_strip_create_db_and_use(schema.read_text(encoding="utf-8"))))

    created = [s.split("(")[0].split()[-1].strip("`") for s in statements if s.upper().startswith("CREATE TABLE")]
    assert {"attendance", "attendance_validations", "salary_settings", "salaries"} <= set(created)
