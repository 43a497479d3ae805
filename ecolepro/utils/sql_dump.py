# ecolepro/utils/sql_dump.py
"""Flat SQL statement rendering for collection exports."""
import json
from typing import Any, Dict, List


def sql_literal(value: Any) -> str:
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return "'" + value.replace("'", "''") + "'"
    # Nested objects and lists are stored as quoted JSON
    encoded = json.dumps(value, ensure_ascii=False)
    return "'" + encoded.replace("'", "''") + "'"


def rows_to_sql(table_name: str, rows: List[Dict[str, Any]]) -> str:
    """One INSERT per row under a table comment, empty for no rows."""
    if not rows:
        return ""

    lines = [f"-- Table: {table_name}"]
    for row in rows:
        columns = ", ".join(row.keys())
        values = ", ".join(sql_literal(v) for v in row.values())
        lines.append(f"INSERT INTO {table_name} ({columns}) VALUES ({values});")
    return "\n".join(lines) + "\n\n"
