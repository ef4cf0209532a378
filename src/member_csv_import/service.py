"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: service.py
@DateTime: 2026-02-18
@Docs: Member import/export service.
成员导入导出服务。

This module provides `MemberImportService`, which wires the generic engine to
one database session per call:

该模块提供 `MemberImportService`，每次调用为通用引擎绑定一个数据库会话：

        - Preview an upload (validation only, nothing is written).
            预览上传文件（仅校验，不写入）。
        - Import an upload all-or-nothing in a single transaction.
            在单个事务中以全有或全无方式导入上传文件。
        - Download sample/template files.
            下载示例/模板文件。
        - Export non-deleted entities to CSV/XLSX.
            导出未删除实体为 CSV/XLSX。

No lock is held across calls and no result is stored server-side; callers
that need the errors again replay the file.
调用之间不持有锁，也不在服务端保存结果；如需再次获取错误，请重新提交文件。
"""

import logging
from pathlib import Path
from typing import Any, TypeAlias

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from member_csv_import.config import ImportConfig, resolve_config
from member_csv_import.entities import Repositories, build_import_spec
from member_csv_import.enums import EntityType
from member_csv_import.exceptions import ImportExportError
from member_csv_import.exporter import Exporter
from member_csv_import.importer import CsvImportEngine
from member_csv_import.ledger import ImportResult
from member_csv_import.schemas import PreviewResult
from member_csv_import.security import PasslibPasswordHasher
from member_csv_import.serializers import FilePayload
from member_csv_import.templates import build_sample, build_template
from member_csv_import.typing import PasswordHasher
from member_csv_import.unit_of_work import SqlAlchemyUnitOfWork

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 1024 * 1024

UploadSource: TypeAlias = UploadFile | bytes


def parse_entity(value: str) -> EntityType:
    """
    Resolve an entity type from a path segment ("user" or "users").
    从路径片段解析实体类型（"user" 或 "users"）。

    Raises:
        ImportExportError: 404 when the entity type is unknown.
            实体类型未知时抛出 404。
    """
    key = str(value or "").strip().lower()
    for entity in EntityType:
        if key in (entity.value, entity.plural):
            return entity
    raise ImportExportError(
        message=f"Unknown entity type: {value} / 未知实体类型: {value}",
        status_code=404,
        details={"supported": [e.value for e in EntityType]},
        error_code="unknown_entity",
    )


class MemberImportService:
    """
    Member import/export service.
    成员导入导出服务。

    Examples:
        >>> # svc = MemberImportService(session_factory=factory)
        >>> # result = await svc.import_file(EntityType.TEAM, upload)
    """

    def __init__(
        self,
        *,
        session_factory: async_sessionmaker[AsyncSession],
        config: ImportConfig | None = None,
        password_hasher: PasswordHasher | None = None,
        exporter: Exporter | None = None,
    ) -> None:
        """
        Initialize the service.
        初始化服务。

        Args:
            session_factory: Async session factory; one session per call.
                异步会话工厂；每次调用一个会话。
            config: Import config.
                导入配置。
            password_hasher: Hasher for imported user passwords.
                导入用户密码的哈希器。
            exporter: Exporter instance.
                导出器实例。
        """
        self.session_factory = session_factory
        self.config = config or resolve_config()
        self.password_hasher = password_hasher or PasslibPasswordHasher()
        self.exporter = exporter or Exporter()

    def _check_upload(self, file: UploadFile) -> None:
        filename = file.filename or "upload"
        ext = Path(filename).suffix.lower()
        allowed_exts = set(self.config.allowed_extensions)
        if allowed_exts and ext not in allowed_exts:
            raise ImportExportError(
                message=f"Unsupported file extension: {ext} / 不支持的文件扩展名: {ext}",
                status_code=415,
                error_code="unsupported_media_type",
            )
        content_type = str(file.content_type or "").split(";")[0].strip().lower()
        allowed_mimes = set(self.config.allowed_mime_types)
        if allowed_mimes and content_type and content_type not in allowed_mimes:
            raise ImportExportError(
                message=f"Unsupported content type: {content_type} / 不支持的内容类型: {content_type}",
                status_code=415,
                error_code="unsupported_media_type",
            )

    def _too_large(self) -> ImportExportError:
        return ImportExportError(
            message="File too large / 上传文件过大",
            status_code=413,
            details={"max_upload_mb": self.config.max_upload_mb},
            error_code="file_too_large",
        )

    async def read_upload(self, source: UploadSource) -> bytes:
        """
        Read an upload in chunks, enforcing the allowlists and the size limit.
        分块读取上传文件，并校验白名单与大小上限。

        Args:
            source: FastAPI UploadFile or raw bytes.
                FastAPI UploadFile 或原始字节。

        Returns:
            bytes: File content.
                文件内容。

        Raises:
            ImportExportError: 415 for a disallowed extension/content type, 413 when too large.
                扩展名/内容类型不允许时 415，文件过大时 413。
        """
        limit = self.config.max_upload_bytes
        if isinstance(source, bytes):
            if limit and len(source) > limit:
                raise self._too_large()
            return source

        self._check_upload(source)
        chunks: list[bytes] = []
        size = 0
        while True:
            chunk = await source.read(_CHUNK_SIZE)
            if not chunk:
                break
            size += len(chunk)
            if limit and size > limit:
                raise self._too_large()
            chunks.append(chunk)
        return b"".join(chunks)

    def _engine(self, entity: EntityType, repos: Repositories) -> CsvImportEngine[Any]:
        spec = build_import_spec(entity, repos, password_hasher=self.password_hasher)
        return CsvImportEngine(spec, config=self.config)

    async def preview(self, entity: EntityType, source: UploadSource) -> PreviewResult:
        """
        Preview an upload; the session is only read from.
        预览上传文件；会话只读。
        """
        data = await self.read_upload(source)
        async with self.session_factory() as session:
            engine = self._engine(entity, Repositories.for_session(session))
            return await engine.preview(data)

    async def import_file(self, entity: EntityType, source: UploadSource) -> ImportResult[Any]:
        """
        Import an upload all-or-nothing.
        以全有或全无方式导入上传文件。

        Args:
            entity: Entity type.
                实体类型。
            source: FastAPI UploadFile or raw bytes.
                FastAPI UploadFile 或原始字节。

        Returns:
            ImportResult: Sealed import ledger.
                已封存的导入台账。
        """
        data = await self.read_upload(source)
        async with self.session_factory() as session:
            engine = self._engine(entity, Repositories.for_session(session))
            result = await engine.import_data(data, SqlAlchemyUnitOfWork(session))
        logger.info(
            "%s import finished: total=%d success=%d errors=%d rolled_back=%s",
            entity.label,
            result.total_rows,
            result.success_count,
            result.error_count,
            result.rolled_back,
        )
        return result

    def sample(self, entity: EntityType) -> FilePayload:
        return build_sample(entity)

    def template(self, entity: EntityType) -> FilePayload:
        return build_template(entity)

    async def export(self, entity: EntityType, *, fmt: str = "csv") -> FilePayload:
        """
        Export every non-deleted entity of a type.
        导出某类型的全部未删除实体。
        """
        async with self.session_factory() as session:
            items = await Repositories.for_session(session).find_all_active(entity)
            return self.exporter.export(entity, items, fmt=fmt)
