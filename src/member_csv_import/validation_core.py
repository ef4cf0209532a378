"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: validation_core.py
@DateTime: 2026-02-13
@Docs: Core validation primitives without business rules.
校验核心原语（不包含业务规则）。

It only provides:
仅提供如下内容：
- ErrorCollector: append standardized field errors.
    ErrorCollector：添加标准化字段错误。
- RowContext: per-row helper that reads cells by header position, emits
  errors and carries values resolved during validation.
    RowContext：按表头位置读取单元格、发射错误并携带校验期间解析出的值。
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from member_csv_import.schemas import FieldError


@dataclass(slots=True)
class ErrorCollector:
    """Collect errors from row validations.
    从行校验中收集错误。
    """

    errors: list[FieldError] = field(default_factory=list)

    def add(self, *, row_number: int, field: str, message: str) -> None:
        """Add an error item.
        添加一个错误项。

        Args:
            row_number: Row number.
                行号。
            field: Field name.
                字段名。
            message: Error message.
                错误消息。
        """
        self.errors.append(FieldError(row_number=int(row_number), field=field, message=message))

    @property
    def messages(self) -> list[str]:
        return [e.message for e in self.errors]


@dataclass(slots=True)
class RowContext:
    """Per-row helper to read cells and emit errors.
    每行校验助手，用于读取单元格和发射错误。

    Cells are addressed by header name but read by position: the header
    was validated once, so its order is the contract for every row.
    单元格按表头名访问、按位置读取：表头已校验，其顺序即每行的约定。

    Attributes:
        collector: Error sink.
            错误收集器。
        row_number: Row number.
            行号。
        cells: Raw cells of the row.
            行的原始单元格。
        headers: Validated header names.
            已校验的表头。
        values: Parsed values and resolved references keyed by field.
            按字段存放的解析值与已解析引用。
        seen: Natural keys claimed by earlier valid rows of the same run.
            同一次运行中较早的有效行已占用的自然键。
        claimed: Natural keys this row would claim once it is valid.
            本行有效后将占用的自然键。
    """

    collector: ErrorCollector
    row_number: int
    cells: Sequence[str]
    headers: Sequence[str]
    values: dict[str, Any] = field(default_factory=dict)
    seen: dict[str, set[str]] = field(default_factory=dict)
    claimed: list[tuple[str, str]] = field(default_factory=list)

    def add(self, *, field: str, message: str) -> None:
        self.collector.add(row_number=self.row_number, field=field, message=message)

    @property
    def errors(self) -> list[FieldError]:
        return self.collector.errors

    @property
    def is_valid(self) -> bool:
        return not self.collector.errors

    def get_raw(self, field: str) -> str:
        """Get the untrimmed cell for a header; missing trailing cells read as "".
        获取表头对应的原始单元格；缺失的尾部单元格返回空字符串。
        """
        index = self.headers.index(field)
        if index >= len(self.cells):
            return ""
        return self.cells[index] or ""

    def get_str(self, field: str) -> str:
        """Get a trimmed string value from the row.
        从行中获取去除首尾空白的字符串值。

        Args:
            field: Header name.
                表头名。

        Returns:
            str: String value (empty string when missing).
                字符串值（缺失时返回空字符串）。
        """
        return self.get_raw(field).strip()

    def is_repeated(self, field: str, value: str) -> bool:
        """Claim a natural key and tell whether an earlier row already holds it.
        占用自然键，并返回较早的行是否已占用该键。

        Keys compare trimmed and case-insensitively, like the store lookups.
        键比较时去除首尾空白且不区分大小写，与存储查询一致。
        """
        key = value.strip().lower()
        self.claimed.append((field, key))
        return key in self.seen.get(field, ())

    def commit_claims(self) -> None:
        """Publish this row's keys to later rows of the run / 将本行的键发布给本次运行的后续行。"""
        for field_name, key in self.claimed:
            self.seen.setdefault(field_name, set()).add(key)
