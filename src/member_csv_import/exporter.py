"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: exporter.py
@DateTime: 2026-02-17
@Docs: Entity exports to timestamped CSV (polars) or XLSX (openpyxl) files.
实体导出为带时间戳的 CSV（polars）或 XLSX（openpyxl）文件。

Multi-valued relations are flattened into one cell per entity type:
user skills as `name:LEVEL:years` joined by `|`, project members as emails
joined by `;`.
多值关系按实体类型压平为单元格：用户技能以 `|` 连接 `name:LEVEL:years`，项目成员以 `;` 连接邮箱。
"""

import io
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from typing import Any

import polars as pl

from member_csv_import.entities import EXPORT_HEADERS, EXPORT_ROW_FNS
from member_csv_import.enums import EntityType
from member_csv_import.exceptions import ExportError
from member_csv_import.serializers import CSV_MEDIA_TYPE, FilePayload, XlsxSerializer

SUPPORTED_FORMATS = ("csv", "xlsx")


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def export_filename(entity: EntityType, fmt: str, now: datetime) -> str:
    return f"{entity.plural}_export_{now.strftime('%Y%m%d_%H%M%S')}.{fmt}"


def _to_csv_bytes(headers: Sequence[str], rows: list[list[str]]) -> bytes:
    schema = [(h, pl.String) for h in headers]
    df = pl.DataFrame(rows, schema=schema, orient="row") if rows else pl.DataFrame(schema=schema)
    buf = io.BytesIO()
    df.write_csv(buf, include_bom=True, line_terminator="\r\n")
    return buf.getvalue()


class Exporter:
    """
    Entity exporter.
    实体导出器。

    Args:
        clock: Returns "now" for the filename timestamp.
            返回用于文件名时间戳的当前时间。
    """

    def __init__(self, *, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or _utc_now

    def export(self, entity: EntityType, entities: Sequence[Any], *, fmt: str = "csv") -> FilePayload:
        """
        Serialize entities with the entity type's fixed header.
        使用实体类型的固定表头序列化实体。

        Args:
            entity: Entity type.
                实体类型。
            entities: Non-deleted entities to export.
                待导出的未删除实体。
            fmt: "csv" or "xlsx".
                "csv" 或 "xlsx"。

        Returns:
            FilePayload: Download payload.
                下载载荷。

        Raises:
            ExportError: When the format is not supported.
                格式不受支持时抛出。
        """
        fmt_norm = fmt.strip().lower()
        if fmt_norm not in SUPPORTED_FORMATS:
            raise ExportError(
                message=f"Unsupported export format: {fmt} / 不支持的导出格式: {fmt}",
                details={"supported": list(SUPPORTED_FORMATS)},
                error_code="unsupported_format",
            )
        headers = EXPORT_HEADERS[entity]
        to_row = EXPORT_ROW_FNS[entity]
        rows = [to_row(item) for item in entities]
        filename = export_filename(entity, fmt_norm, self._clock())

        if fmt_norm == "csv":
            return FilePayload(filename=filename, media_type=CSV_MEDIA_TYPE, content=_to_csv_bytes(headers, rows))

        serializer = XlsxSerializer(sheet_title=entity.plural)
        return FilePayload(
            filename=filename,
            media_type=serializer.media_type,
            content=serializer.serialize(headers=headers, rows=rows),
        )
