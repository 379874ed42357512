from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

from src.io.snapshotting import write_text_atomic
from src.normalize.schema import StructuredCamp

SEED_COLUMNS = (
    "name",
    "slug",
    "category",
    "ages_min",
    "ages_max",
    "duration",
    "days_of_week",
    "location_name",
    "address",
    "city",
    "state",
    "price_min",
    "price_max",
    "price_note",
    "camp_type",
    "schedule_type",
    "region",
    "website",
    "registration_status",
    "registration_opens_date",
    "fills_fast",
    "notes",
    "tags",
    "is_active",
)


def sql_literal(value: Any) -> str:
    """Render one Python value as a Postgres literal."""

    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (list, tuple)):
        if not value:
            return "NULL"
        return f"ARRAY[{','.join(sql_literal(str(item)) for item in value)}]"
    escaped = str(value).replace("'", "''")
    return f"'{escaped}'"


def render_insert(camp: StructuredCamp) -> str:
    values = ", ".join(sql_literal(getattr(camp, column)) for column in SEED_COLUMNS)
    return f"INSERT INTO camps ({', '.join(SEED_COLUMNS)})\nVALUES ({values});\n"


def render_seed_sql(camps: Sequence[StructuredCamp], *, title: str = "Summer Camps - Seed Data") -> str:
    header = f"-- {title}\n-- Generated from spreadsheet data\n-- {len(camps)} camps\n\n"
    return header + "\n".join(render_insert(camp) for camp in camps)


def write_seed_sql(camps: Sequence[StructuredCamp], output_path: Path) -> Path:
    write_text_atomic(render_seed_sql(camps), output_path)
    return output_path
