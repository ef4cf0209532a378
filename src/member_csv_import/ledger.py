"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: ledger.py
@DateTime: 2026-02-13
@Docs: Import result ledger.
导入结果台账。

The ledger is created fresh for each import call, filled by the engine while
rows are processed, and sealed by `close()`. After that it is read-only.
台账在每次导入时新建，由引擎在处理行时填充，并由 `close()` 封存，之后只读。
"""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from member_csv_import.schemas import FieldError, ImportResultResponse


TEntity = TypeVar("TEntity")


@dataclass(slots=True)
class ImportResult(Generic[TEntity]):
    """
    Import result.
    导入结果。

    Attributes:
        entity: Entity type name.
        entity: 实体类型名称。
        errors: Field errors in the order they were found.
        errors: 按发现顺序排列的字段错误。
        total_rows: Data rows seen.
        total_rows: 已处理数据行数。
        success_count: Rows persisted during the run (reported even when rolled back).
        success_count: 运行中成功保存的行数（回滚时仍会报告）。
        rolled_back: Whether the batch writes were discarded.
        rolled_back: 批次写入是否已被丢弃。
        created: Created entities; emptied when rolled back.
        created: 创建的实体；回滚时清空。
        file_error: File-level error that stopped the run before any row.
        file_error: 在处理任何行之前终止运行的文件级错误。
    """

    entity: str
    errors: list[FieldError] = field(default_factory=list)
    total_rows: int = 0
    success_count: int = 0
    rolled_back: bool = False
    created: list[TEntity] = field(default_factory=list)
    file_error: str | None = None
    _failed_rows: set[int] = field(default_factory=set, repr=False)
    _closed: bool = field(default=False, repr=False)

    @property
    def error_count(self) -> int:
        """Rows with at least one error / 至少有一个错误的行数。"""
        return len(self._failed_rows)

    @property
    def closed(self) -> bool:
        return self._closed

    def has_errors(self) -> bool:
        return self.error_count > 0

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("Import result is closed / 导入结果已封存")

    def start_row(self) -> None:
        """Count a data row / 计入一条数据行。"""
        self._ensure_open()
        self.total_rows += 1

    def add_error(self, row_number: int, field_name: str, message: str) -> None:
        """
        Append a field error; the row counts once toward error_count.
        追加字段错误；同一行只计入一次 error_count。

        Args:
            row_number: Row number.
                行号。
            field_name: Field name.
                字段名。
            message: Error message.
                错误消息。
        """
        self._ensure_open()
        self.errors.append(FieldError(row_number=row_number, field=field_name, message=message))
        self._failed_rows.add(row_number)

    def record_success(self, entity: TEntity) -> None:
        self._ensure_open()
        self.success_count += 1
        self.created.append(entity)

    def fail_file(self, message: str) -> None:
        """Record a file-level error / 记录文件级错误。"""
        self._ensure_open()
        self.file_error = message

    def close(self, *, rolled_back: bool) -> None:
        """
        Seal the ledger and set the rollback flag exactly once.
        封存台账并仅设置一次回滚标志。

        Raises:
            RuntimeError: When called twice.
                重复调用时抛出。
        """
        self._ensure_open()
        self.rolled_back = rolled_back
        if rolled_back:
            self.created.clear()
        self._closed = True

    def to_response(self) -> ImportResultResponse:
        return ImportResultResponse(
            entity=self.entity,
            total_rows=self.total_rows,
            success_count=self.success_count,
            error_count=self.error_count,
            rolled_back=self.rolled_back,
            has_errors=self.has_errors(),
            created_count=len(self.created),
            errors=list(self.errors),
            file_error=self.file_error,
        )
