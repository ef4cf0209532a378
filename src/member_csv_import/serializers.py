"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: serializers.py
@DateTime: 2026-02-17
@Docs: Row serializers for CSV (stdlib csv) and XLSX (openpyxl).
CSV（标准库 csv）与 XLSX（openpyxl）行序列化器。
"""

import csv
import io
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, cast

from openpyxl import Workbook

CSV_MEDIA_TYPE = "text/csv; charset=utf-8"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@dataclass(frozen=True, slots=True)
class FilePayload:
    """
    In-memory file download.
    内存中的下载文件。

    Attributes:
        filename: Suggested file name.
        filename: 建议文件名。
        media_type: HTTP media type.
        media_type: HTTP 媒体类型。
        content: File bytes.
        content: 文件字节。
    """

    filename: str
    media_type: str
    content: bytes


class Serializer(Protocol):
    """Serializer protocol.
    序列化器协议。
    """

    media_type: str

    def serialize(self, *, headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> bytes: ...


class CsvSerializer:
    """CSV serializer using stdlib csv.writer.
    使用标准库 csv.writer 的 CSV 序列化器。

    Args:
        include_bom: Prefix a UTF-8 BOM so spreadsheet apps detect the encoding.
            添加 UTF-8 BOM，便于表格软件识别编码。
        line_ending: Record terminator.
            记录结束符。
    """

    media_type = CSV_MEDIA_TYPE

    def __init__(self, *, include_bom: bool = True, line_ending: str = "\r\n") -> None:
        self.include_bom = include_bom
        self.line_ending = line_ending

    def serialize(self, *, headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> bytes:
        """Serialize rows to CSV bytes.
        将数据行序列化为 CSV 字节。

        Args:
            headers: Header row.
                表头。
            rows: Data rows.
                数据行。

        Returns:
            bytes: Encoded CSV.
                编码后的 CSV。
        """
        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator=self.line_ending)
        writer.writerow(headers)
        writer.writerows(rows)
        encoding = "utf-8-sig" if self.include_bom else "utf-8"
        return buf.getvalue().encode(encoding)


class XlsxSerializer:
    """XLSX serializer using openpyxl.
    使用 openpyxl 的 XLSX 序列化器。

    Args:
        sheet_title: Worksheet title.
            工作表标题。
    """

    media_type = XLSX_MEDIA_TYPE

    def __init__(self, *, sheet_title: str = "Sheet1") -> None:
        self.sheet_title = sheet_title

    def serialize(self, *, headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> bytes:
        wb = Workbook()
        ws = wb.active
        if ws is None:
            raise RuntimeError("Workbook.active is None / Workbook.active 为空")
        ws = cast(Any, ws)
        # Excel limits sheet titles to 31 characters.
        ws.title = self.sheet_title[:31]
        ws.append(list(headers))
        for row in rows:
            ws.append(list(row))
        ws.freeze_panes = "A2"
        buf = io.BytesIO()
        wb.save(buf)
        return buf.getvalue()
