"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: importer.py
@DateTime: 2026-02-15
@Docs: Generic preview/import engine configured per entity.
按实体配置的通用预览/导入引擎。

Lifecycle / 生命周期:
    parse -> header gate -> check rows -> (import only) persist in savepoints
    -> commit when clean, abort the whole batch otherwise.
    解析 -> 表头校验 -> 行校验 ->（仅导入）在保存点内保存 -> 无错误则提交，否则整批中止。

Preview and import run the same row rule function with the same per-run
registry of natural keys, so they report the same messages for the same file
and store state, including keys repeated inside the file.
预览与导入使用同一个行规则函数与同一种按运行维护的自然键登记表，
对相同文件与存储状态报告相同的消息，包括文件内重复的键。
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from member_csv_import.config import ImportConfig, resolve_config
from member_csv_import.exceptions import FileFormatError, PersistenceError
from member_csv_import.ledger import ImportResult
from member_csv_import.parse import ParsedTable, read_table
from member_csv_import.schemas import PreviewResult, PreviewRow
from member_csv_import.typing import CheckRowFn, ProcessRowFn, RowValues, UnitOfWork
from member_csv_import.validation_core import ErrorCollector
from member_csv_import.validation_rules import RowValidator

logger = logging.getLogger(__name__)

DATABASE_FIELD = "Database"

# field -> lowercased natural keys held by earlier valid rows
SeenKeys = dict[str, set[str]]


TEntity = TypeVar("TEntity")


@dataclass(frozen=True, slots=True)
class EntityImportSpec(Generic[TEntity]):
    """
    Capabilities that turn the generic engine into one entity's importer.
    将通用引擎变为某个实体导入器的能力集合。

    Attributes:
        entity_name: Entity label used in messages, e.g. "Team".
        entity_name: 消息中使用的实体名称，例如 "Team"。
        expected_headers: Exact header row.
        expected_headers: 精确表头。
        check_row: Row rule function shared by preview and import.
        check_row: 预览与导入共享的行规则函数。
        process_row: Builds and saves the entity from resolved values.
        process_row: 由已解析的值构建并保存实体。
    """

    entity_name: str
    expected_headers: tuple[str, ...]
    check_row: CheckRowFn
    process_row: ProcessRowFn[TEntity]


class CsvImportEngine(Generic[TEntity]):
    """
    Preview/import engine.
    预览/导入引擎。
    """

    def __init__(
        self,
        spec: EntityImportSpec[TEntity],
        *,
        config: ImportConfig | None = None,
    ) -> None:
        """
        Initialize the engine.
        初始化引擎。

        Args:
            spec: Entity capabilities.
                实体能力集合。
            config: Import config; resolved from the environment when omitted.
                导入配置；省略时从环境变量解析。
        """
        self.spec = spec
        self.config = config or resolve_config()

    def _read(self, data: bytes) -> ParsedTable:
        return read_table(
            data,
            expected_headers=self.spec.expected_headers,
            encoding=self.config.encoding,
            max_rows=self.config.max_rows,
        )

    async def _check(self, cells: Sequence[str], row_number: int, seen: SeenKeys | None) -> RowValidator:
        row = RowValidator(
            collector=ErrorCollector(),
            row_number=row_number,
            cells=cells,
            headers=self.spec.expected_headers,
            seen={} if seen is None else seen,
        )
        await self.spec.check_row(row)
        if row.is_valid:
            row.commit_claims()
        return row

    async def validate_row_for_preview(
        self, cells: Sequence[str], row_number: int, seen: SeenKeys | None = None
    ) -> list[str]:
        """
        Validate a row and return plain messages.
        校验单行并返回纯文本消息。

        Args:
            cells: Raw cells.
                原始单元格。
            row_number: File row number.
                文件行号。
            seen: Natural keys of earlier valid rows in the same run; shared across calls.
                同一次运行中较早有效行的自然键；在多次调用间共享。
        """
        row = await self._check(cells, row_number, seen)
        return row.collector.messages

    async def validate_row(
        self,
        cells: Sequence[str],
        row_number: int,
        result: ImportResult[Any],
        seen: SeenKeys | None = None,
    ) -> RowValues | None:
        """
        Validate a row and write its errors into the import result.
        校验单行并把错误写入导入结果。

        Returns:
            RowValues | None: Resolved values when valid, otherwise None.
                有效时返回已解析的值，否则返回 None。
        """
        row = await self._check(cells, row_number, seen)
        for error in row.errors:
            result.add_error(error.row_number, error.field, error.message)
        return row.values if row.is_valid else None

    async def preview(self, data: bytes) -> PreviewResult:
        """
        Validate every row without writing anything.
        校验所有行但不写入任何数据。

        Args:
            data: Raw file bytes.
                原始文件字节。

        Returns:
            PreviewResult: Bounded sample plus counts over all rows.
                有上限的行样本及全部行的计数。
        """
        try:
            table = self._read(data)
        except FileFormatError as exc:
            logger.info("Preview of %s rejected: %s", self.spec.entity_name, exc.message)
            return PreviewResult(entity=self.spec.entity_name, has_errors=True, error=exc.message)

        sample: list[PreviewRow] = []
        valid_rows = 0
        seen: SeenKeys = {}
        for row_number, cells in table.rows:
            messages = await self.validate_row_for_preview(cells, row_number, seen)
            if not messages:
                valid_rows += 1
            if len(sample) < self.config.preview_sample_size:
                sample.append(PreviewRow(row_number=row_number, data=list(cells), errors=messages, valid=not messages))

        invalid_rows = table.total_rows - valid_rows
        return PreviewResult(
            entity=self.spec.entity_name,
            headers=list(table.headers),
            rows=sample,
            total_rows=table.total_rows,
            valid_rows=valid_rows,
            invalid_rows=invalid_rows,
            has_errors=invalid_rows > 0,
        )

    async def import_data(self, data: bytes, unit_of_work: UnitOfWork) -> ImportResult[TEntity]:
        """
        Import a file all-or-nothing.
        以全有或全无方式导入文件。

        Args:
            data: Raw file bytes.
                原始文件字节。
            unit_of_work: Batch transaction boundary.
                批次事务边界。

        Returns:
            ImportResult: Sealed ledger; `rolled_back` is True when any row failed.
                已封存的台账；任一行失败时 `rolled_back` 为 True。
        """
        result: ImportResult[TEntity] = ImportResult(entity=self.spec.entity_name)
        try:
            table = self._read(data)
        except FileFormatError as exc:
            logger.info("Import of %s rejected: %s", self.spec.entity_name, exc.message)
            result.fail_file(exc.message)
            result.close(rolled_back=False)
            return result

        logger.info("Importing %d %s row(s)", table.total_rows, self.spec.entity_name)
        seen: SeenKeys = {}
        async with unit_of_work:
            for row_number, cells in table.rows:
                result.start_row()
                values = await self.validate_row(cells, row_number, result, seen)
                if values is None:
                    continue
                try:
                    async with unit_of_work.savepoint():
                        entity = await self.spec.process_row(values)
                except PersistenceError as exc:
                    logger.error("Row %d: failed to save %s: %s", row_number, self.spec.entity_name, exc.reason)
                    result.add_error(
                        row_number, DATABASE_FIELD, f"Failed to save {self.spec.entity_name.lower()}: {exc.reason}"
                    )
                    continue
                result.record_success(entity)

            if result.has_errors():
                await unit_of_work.abort()
                result.close(rolled_back=True)
                logger.warning(
                    "Import of %s rolled back: %d of %d row(s) failed",
                    self.spec.entity_name,
                    result.error_count,
                    result.total_rows,
                )
            else:
                await unit_of_work.commit()
                result.close(rolled_back=False)
                logger.info("Imported %d %s row(s)", result.success_count, self.spec.entity_name)
        return result
