"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: config.py
@DateTime: 2026-02-12
@Docs: Import/export configuration helpers.
导入导出配置助手。

Configuration can be passed as function parameters or via environment
variables; parameters always win.
支持通过函数参数或环境变量进行配置，参数优先。

Environment variables / 环境变量:
        - MEMBER_IMPORT_ENCODING:
            Text encoding of uploaded CSV files (default: utf-8).
            上传 CSV 的文本编码（默认 utf-8）。
        - MEMBER_IMPORT_MAX_ROWS:
            Maximum data rows per file, 0 disables the limit (default: 10000).
            单文件最大数据行数，0 表示不限制（默认 10000）。
        - MEMBER_IMPORT_PREVIEW_SAMPLE_SIZE:
            Rows kept in a preview sample (default: 100).
            预览样本保留行数（默认 100）。
        - MEMBER_IMPORT_MAX_UPLOAD_MB:
            Max upload size in MB (default: 20).
            最大上传大小（MB，默认 20）。
        - MEMBER_IMPORT_ALLOWED_EXTENSIONS / MEMBER_IMPORT_ALLOWED_MIME_TYPES:
            Comma-separated upload allowlists.
            上传白名单（逗号分隔）。
        - MEMBER_IMPORT_DATABASE_URL:
            SQLAlchemy async database URL.
            SQLAlchemy 异步数据库 URL。

Examples:
        >>> from member_csv_import.config import resolve_config
        >>> cfg = resolve_config(max_rows=500)
        >>> cfg.max_rows
        500
"""

import os
from collections.abc import Iterable
from dataclasses import dataclass

DEFAULT_ENCODING = "utf-8"
DEFAULT_MAX_ROWS = 10000
DEFAULT_PREVIEW_SAMPLE_SIZE = 100
DEFAULT_MAX_UPLOAD_MB = 20
DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./members.db"
DEFAULT_ALLOWED_EXTENSIONS = (".csv",)
DEFAULT_ALLOWED_MIME_TYPES = (
    "text/csv",
    "application/csv",
    "text/plain",
    "application/vnd.ms-excel",
    "application/octet-stream",
)


@dataclass(frozen=True, slots=True)
class ImportConfig:
    """Import pipeline configuration.

    导入流程配置。

    Attributes:
        encoding: Text encoding of uploads.
            上传文件文本编码。
        max_rows: Max data rows per file (0 = unbounded).
            单文件最大数据行数（0 表示不限）。
        preview_sample_size: Max rows returned by preview.
            预览返回的最大行数。
        max_upload_mb: Max upload size in MB.
            最大上传大小（MB）。
        allowed_extensions: Allowed upload file extensions.
            允许上传的文件扩展名。
        allowed_mime_types: Allowed upload MIME types.
            允许上传的 MIME 类型。
        database_url: SQLAlchemy async database URL.
            SQLAlchemy 异步数据库 URL。
    """

    encoding: str = DEFAULT_ENCODING
    max_rows: int = DEFAULT_MAX_ROWS
    preview_sample_size: int = DEFAULT_PREVIEW_SAMPLE_SIZE
    max_upload_mb: int = DEFAULT_MAX_UPLOAD_MB
    allowed_extensions: tuple[str, ...] = DEFAULT_ALLOWED_EXTENSIONS
    allowed_mime_types: tuple[str, ...] = DEFAULT_ALLOWED_MIME_TYPES
    database_url: str = DEFAULT_DATABASE_URL

    @property
    def max_upload_bytes(self) -> int:
        """Return the upload limit in bytes.

        返回以字节为单位的上传上限。
        """
        return int(self.max_upload_mb) * 1024 * 1024


def _env_get(*names: str) -> str | None:
    """Get the first non-empty environment variable value.

    获取第一个非空环境变量值。

    Args:
        *names: Candidate environment variable names in priority order.
            候选环境变量名（按优先级顺序）。

    Returns:
        The first non-empty value, or None.
            返回第一个非空值；若都为空则返回 None。
    """
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip():
            return v.strip()
    return None


def _env_int(name: str) -> int | None:
    """Read an integer environment variable.

    读取整数环境变量。

    Raises:
        ValueError: When the value is not an integer.
            值不是整数时抛出。
    """
    raw = _env_get(name)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _split_csv(value: str | None) -> list[str]:
    """
    Split a comma-separated string into items.
    将逗号分隔字符串拆分为列表。
    """
    if value is None:
        return []
    return [v.strip() for v in value.split(",") if v.strip()]


def _normalize_extensions(values: Iterable[str]) -> tuple[str, ...]:
    """
    Normalize upload file extensions.
    规范化上传文件扩展名。

    Args:
        values: Extension values.
            扩展名列表。

    Returns:
        tuple[str, ...]: Normalized extensions.
        tuple[str, ...]: 规范化后的扩展名。
    """
    normalized = []
    for v in values:
        item = str(v).strip().lower()
        if not item:
            continue
        if not item.startswith("."):
            item = f".{item}"
        normalized.append(item)
    return tuple(sorted(set(normalized)))


def _normalize_mime_types(values: Iterable[str]) -> tuple[str, ...]:
    normalized = [str(v).strip().lower() for v in values if str(v).strip()]
    return tuple(sorted(set(normalized)))


def resolve_config(
    *,
    encoding: str | None = None,
    max_rows: int | None = None,
    preview_sample_size: int | None = None,
    max_upload_mb: int | None = None,
    allowed_extensions: Iterable[str] | None = None,
    allowed_mime_types: Iterable[str] | None = None,
    database_url: str | None = None,
    env_prefix: str = "MEMBER_IMPORT",
) -> ImportConfig:
    """Resolve configuration from parameters and environment variables.

    从参数和环境变量解析配置。

     Resolution order / 解析优先级:
        1) function parameters / 函数参数
        2) env: `{env_prefix}_*` / 环境变量 `{env_prefix}_*`
        3) defaults / 默认值

    Args:
        encoding: Upload text encoding.
            上传文本编码。
        max_rows: Max data rows per file.
            单文件最大数据行数。
        preview_sample_size: Preview sample cap.
            预览样本上限。
        max_upload_mb: Max upload size in MB.
            最大上传大小（MB）。
        allowed_extensions: Allowed upload file extensions.
            允许上传的文件扩展名。
        allowed_mime_types: Allowed upload MIME types.
            允许上传的 MIME 类型。
        database_url: SQLAlchemy async database URL.
            SQLAlchemy 异步数据库 URL。
        env_prefix: Prefix for environment variables.
            环境变量前缀（默认 MEMBER_IMPORT）。

    Returns:
        An ImportConfig instance.
            返回 ImportConfig 配置实例。

    Raises:
        ValueError: When a numeric setting is negative or not an integer.
            数值配置为负数或非整数时抛出。
    """
    resolved_max_rows = max_rows if max_rows is not None else _env_int(f"{env_prefix}_MAX_ROWS")
    resolved_sample = (
        preview_sample_size if preview_sample_size is not None else _env_int(f"{env_prefix}_PREVIEW_SAMPLE_SIZE")
    )
    resolved_upload = max_upload_mb if max_upload_mb is not None else _env_int(f"{env_prefix}_MAX_UPLOAD_MB")

    resolved_exts = _normalize_extensions(
        allowed_extensions
        if allowed_extensions is not None
        else (_split_csv(_env_get(f"{env_prefix}_ALLOWED_EXTENSIONS")) or DEFAULT_ALLOWED_EXTENSIONS)
    )
    resolved_mimes = _normalize_mime_types(
        allowed_mime_types
        if allowed_mime_types is not None
        else (_split_csv(_env_get(f"{env_prefix}_ALLOWED_MIME_TYPES")) or DEFAULT_ALLOWED_MIME_TYPES)
    )

    cfg = ImportConfig(
        encoding=encoding or _env_get(f"{env_prefix}_ENCODING") or DEFAULT_ENCODING,
        max_rows=DEFAULT_MAX_ROWS if resolved_max_rows is None else resolved_max_rows,
        preview_sample_size=DEFAULT_PREVIEW_SAMPLE_SIZE if resolved_sample is None else resolved_sample,
        max_upload_mb=DEFAULT_MAX_UPLOAD_MB if resolved_upload is None else resolved_upload,
        allowed_extensions=resolved_exts,
        allowed_mime_types=resolved_mimes,
        database_url=database_url or _env_get(f"{env_prefix}_DATABASE_URL") or DEFAULT_DATABASE_URL,
    )
    for name in ("max_rows", "preview_sample_size", "max_upload_mb"):
        if getattr(cfg, name) < 0:
            raise ValueError(f"{name} must not be negative")
    return cfg
