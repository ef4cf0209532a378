"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: exceptions.py
@DateTime: 2026-02-12
@Docs: Import/export error hierarchy.
导入导出异常体系。

Row-level problems are never raised; they are recorded as values in the
import ledger. Only file-level, persistence and export failures are exceptions.
行级问题不会抛出异常，而是作为值记录到导入结果中；仅文件级、持久化与导出失败才抛出异常。
"""

from typing import Any


class ImportExportError(Exception):
    """
    Import/Export Errors.
    导入导出异常。

    Attributes:
        message: Error message.
        message: 错误消息。
        status_code: HTTP status code.
        status_code: HTTP 状态码。
        details: Error details.
        details: 错误详情。
        error_code: Stable error code.
        error_code: 稳定错误码。
    """

    def __init__(
        self,
        *,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
        error_code: str = "import_export_error",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details
        self.error_code = error_code


class FileFormatError(ImportExportError):
    """
    File-level format error (empty, undecodable, broken quoting, header mismatch).
    文件级格式错误（空文件、无法解码、引号错误、表头不匹配）。
    """

    def __init__(
        self,
        *,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
        error_code: str = "file_format_error",
    ) -> None:
        super().__init__(message=message, status_code=status_code, details=details, error_code=error_code)


class PersistenceError(ImportExportError):
    """
    Persistence error raised by a repository save.
    仓储保存时抛出的持久化错误。

    Attributes:
        reason: Short database-side reason, used in the "Database" row error.
        reason: 数据库侧简短原因，用于 "Database" 行错误。
    """

    def __init__(self, *, reason: str, details: Any | None = None) -> None:
        super().__init__(
            message=f"Persist failed: {reason} / 持久化失败: {reason}",
            status_code=409,
            details=details,
            error_code="persistence_error",
        )
        self.reason = reason


class ExportError(ImportExportError):
    """
    Export error.
    导出错误。
    """
