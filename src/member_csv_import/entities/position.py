"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: position.py
@DateTime: 2026-02-16
@Docs: Position import/export configuration.
职位导入导出配置。

Name and abbreviation are unique independently of each other.
名称与缩写各自独立唯一。
"""

from member_csv_import.codecs import DatetimeCodec
from member_csv_import.importer import EntityImportSpec
from member_csv_import.models import Position
from member_csv_import.typing import CheckRowFn, PositionRepositoryLike, ProcessRowFn, RowValues
from member_csv_import.validation_rules import RowValidator

EXPECTED_HEADERS = ("name", "abbreviation")
SAMPLE_ROWS = (
    ("Senior Developer", "SD"),
    ("Junior Developer", "JD"),
    ("Team Leader", "TL"),
    ("Project Manager", "PM"),
    ("Business Analyst", "BA"),
)
EXPORT_HEADERS = ("ID", "Name", "Abbreviation", "Created At", "Updated At")

_ts = DatetimeCodec()


def _build_check_fn(positions: PositionRepositoryLike) -> CheckRowFn:
    async def check_row(row: RowValidator) -> None:
        name = row.text("name", label="Name", max_length=255, required=True)
        if name is not None and (row.is_repeated("name", name) or await positions.exists_by_name(name)):
            row.add(field="name", message=f"Position with name '{name}' already exists")

        abbreviation = row.text("abbreviation", label="Abbreviation", max_length=50, required=True)
        if abbreviation is not None and (
            row.is_repeated("abbreviation", abbreviation) or await positions.exists_by_abbreviation(abbreviation)
        ):
            row.add(field="abbreviation", message=f"Position with abbreviation '{abbreviation}' already exists")

        row.values.update(name=name, abbreviation=abbreviation)

    return check_row


def _build_process_fn(positions: PositionRepositoryLike) -> ProcessRowFn[Position]:
    async def process_row(values: RowValues) -> Position:
        return await positions.save(Position(name=values["name"], abbreviation=values["abbreviation"]))

    return process_row


def build_spec(positions: PositionRepositoryLike) -> EntityImportSpec[Position]:
    return EntityImportSpec(
        entity_name="Position",
        expected_headers=EXPECTED_HEADERS,
        check_row=_build_check_fn(positions),
        process_row=_build_process_fn(positions),
    )


def export_row(position: Position) -> list[str]:
    return [
        str(position.id),
        position.name,
        position.abbreviation,
        _ts.format(position.created_at),
        _ts.format(position.updated_at),
    ]
