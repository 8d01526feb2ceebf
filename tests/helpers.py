from sqlalchemy.dialects import sqlite


def to_sql(stmt) -> str:
    """Compile a statement for SQLite and collapse whitespace."""
    return " ".join(str(stmt.compile(dialect=sqlite.dialect())).split())
