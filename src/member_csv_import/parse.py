"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: parse.py
@DateTime: 2026-02-12
@Docs: CSV record parsing and the exact header gate.
CSV 记录解析与严格表头校验。

Row numbers are 1-based and include the header record: the header is row 1,
the first data record is row 2. Empty physical lines are skipped but keep
their number, so a reported row always points at the record in the file.
Delimiter-only records such as `,` are ordinary data rows.
行号从 1 开始并包含表头：表头为第 1 行，首条数据为第 2 行。空的物理行会被跳过，
但仍占用行号，保证报错行号与文件中的记录对应；仅含分隔符的记录（如 `,`）按普通数据行处理。
"""

import csv
import io
from collections.abc import Sequence
from dataclasses import dataclass

from member_csv_import.exceptions import FileFormatError

_BOM = "\ufeff"


@dataclass(frozen=True, slots=True)
class ParsedTable:
    """
    Parsed CSV table.
    解析后的 CSV 表。

    Attributes:
        headers: Validated header cells.
        headers: 已校验的表头。
        rows: (row_number, cells) pairs of non-empty data records.
        rows: 非空数据记录的 (行号, 单元格) 列表。
    """

    headers: tuple[str, ...]
    rows: list[tuple[int, list[str]]]

    @property
    def total_rows(self) -> int:
        return len(self.rows)


def _decode(data: bytes, encoding: str) -> str:
    """Decode bytes, stripping a leading BOM.
    解码字节并去除前导 BOM。
    """
    codec = encoding.strip().lower().replace("_", "-")
    if codec in {"utf-8", "utf8"}:
        codec = "utf-8-sig"
    try:
        text = data.decode(codec)
    except LookupError as exc:
        raise FileFormatError(
            message=f"Unknown encoding: {encoding} / 未知编码: {encoding}",
            error_code="unknown_encoding",
        ) from exc
    except UnicodeDecodeError as exc:
        raise FileFormatError(
            message=f"Unable to decode file as {encoding} / 无法按 {encoding} 解码文件",
            details={"position": exc.start},
            error_code="decode_error",
        ) from exc
    return text.lstrip(_BOM)


def parse_csv_rows(data: bytes, *, encoding: str = "utf-8") -> list[list[str]]:
    """
    Parse raw bytes into CSV records.
    将原始字节解析为 CSV 记录。

    Quoted fields may contain the delimiter, doubled quotes and line breaks.
    带引号的字段可包含分隔符、成对引号与换行。

    Args:
        data: Raw file bytes.
            原始文件字节。
        encoding: Text encoding.
            文本编码。

    Returns:
        list[list[str]]: Records in file order.
        list[list[str]]: 按文件顺序的记录。

    Raises:
        FileFormatError: Empty file, undecodable bytes or broken quoting.
            空文件、无法解码或引号格式错误时抛出。
    """
    if not data or not data.strip():
        raise FileFormatError(message="File is empty / 文件为空", error_code="empty_file")
    text = _decode(data, encoding)
    try:
        records = list(csv.reader(io.StringIO(text, newline=""), strict=True))
    except csv.Error as exc:
        raise FileFormatError(
            message=f"Malformed CSV: {exc} / CSV 格式错误: {exc}",
            error_code="malformed_csv",
        ) from exc
    if not records or all(_is_blank(r) for r in records):
        raise FileFormatError(message="File is empty / 文件为空", error_code="empty_file")
    return records


def _is_blank(record: Sequence[str]) -> bool:
    return all(not cell.strip() for cell in record)


def _normalize_header(record: Sequence[str]) -> list[str]:
    cells = [cell.strip() for cell in record]
    while cells and not cells[-1]:
        cells.pop()
    return cells


def validate_headers(record: Sequence[str], expected: Sequence[str]) -> tuple[str, ...]:
    """
    Check the header record against the expected headers (case-sensitive, positional).
    按位置、区分大小写校验表头。

    Surrounding whitespace and trailing empty cells are ignored.
    忽略首尾空白与末尾空单元格。

    Args:
        record: First CSV record.
            第一条 CSV 记录。
        expected: Expected header names in order.
            按顺序的期望表头。

    Returns:
        tuple[str, ...]: The validated headers.
        tuple[str, ...]: 校验通过的表头。

    Raises:
        FileFormatError: When the headers do not match exactly.
            表头不完全匹配时抛出。
    """
    found = _normalize_header(record)
    if found != list(expected):
        raise FileFormatError(
            message=(
                f"Invalid CSV headers. Expected: {', '.join(expected)}. Found: {', '.join(found)}"
                " / CSV 表头不匹配"
            ),
            details={"expected": list(expected), "found": found},
            error_code="invalid_headers",
        )
    return tuple(expected)


def read_table(
    data: bytes,
    *,
    expected_headers: Sequence[str],
    encoding: str = "utf-8",
    max_rows: int = 0,
) -> ParsedTable:
    """
    Parse bytes, gate on the header and collect numbered data rows.
    解析字节、校验表头并收集带行号的数据行。

    Args:
        data: Raw file bytes.
            原始文件字节。
        expected_headers: Expected header names.
            期望表头。
        encoding: Text encoding.
            文本编码。
        max_rows: Max data rows (0 = unbounded).
            最大数据行数（0 表示不限）。

    Returns:
        ParsedTable: Headers and numbered rows.
        ParsedTable: 表头与带行号的数据行。

    Raises:
        FileFormatError: On any file-level problem.
            出现任何文件级问题时抛出。
    """
    records = parse_csv_rows(data, encoding=encoding)
    headers = validate_headers(records[0], expected_headers)
    # Empty physical lines are skipped, delimiter-only records are kept.
    rows = [(index, cells) for index, cells in enumerate(records[1:], start=2) if cells]
    if max_rows and len(rows) > max_rows:
        raise FileFormatError(
            message=f"Too many rows: {len(rows)} (max {max_rows}) / 数据行数超出上限: {len(rows)} (最大 {max_rows})",
            status_code=413,
            details={"rows": len(rows), "max_rows": max_rows},
            error_code="too_many_rows",
        )
    return ParsedTable(headers=headers, rows=rows)
