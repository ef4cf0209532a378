"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: schemas.py
@DateTime: 2026-02-12
@Docs: Pydantic models returned by preview and import.
预览与导入返回的 Pydantic 模型。
"""

from pydantic import BaseModel, ConfigDict, Field


class FieldError(BaseModel):
    """
    Row/field error item.
    行/字段错误项。

    Attributes:
        row_number: 1-based row number including the header row.
        row_number: 从 1 开始的行号（含表头行）。
        field: Column name, or "Database" for persistence failures.
        field: 列名；持久化失败时为 "Database"。
        message: Error message.
        message: 错误消息。
    """

    model_config = ConfigDict(frozen=True)

    row_number: int
    field: str
    message: str


class PreviewRow(BaseModel):
    """
    Preview row with its validation messages.
    带校验消息的预览行。
    """

    model_config = ConfigDict(frozen=True)

    row_number: int
    data: list[str]
    errors: list[str] = Field(default_factory=list)
    valid: bool


class PreviewResult(BaseModel):
    """
    Preview result.
    预览结果。

    Attributes:
        entity: Entity type name.
        entity: 实体类型名称。
        headers: Header row.
        headers: 表头。
        rows: Bounded sample of rows.
        rows: 有上限的行样本。
        total_rows: All data rows in the file.
        total_rows: 文件中全部数据行数。
        valid_rows: Rows without errors.
        valid_rows: 无错误的行数。
        invalid_rows: Rows with at least one error.
        invalid_rows: 至少有一个错误的行数。
        has_errors: Whether any row is invalid.
        has_errors: 是否存在无效行。
        error: File-level error; row details are empty when set.
        error: 文件级错误；存在时不提供行级详情。
    """

    model_config = ConfigDict(frozen=True)

    entity: str
    headers: list[str] = Field(default_factory=list)
    rows: list[PreviewRow] = Field(default_factory=list)
    total_rows: int = 0
    valid_rows: int = 0
    invalid_rows: int = 0
    has_errors: bool = False
    error: str | None = None


class ImportResultResponse(BaseModel):
    """
    Serializable import result.
    可序列化的导入结果。
    """

    entity: str
    total_rows: int
    success_count: int
    error_count: int
    rolled_back: bool
    has_errors: bool
    created_count: int
    errors: list[FieldError]
    file_error: str | None = None
