"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: app.py
@DateTime: 2026-02-18
@Docs: FastAPI app exposing preview/import/sample/template/export endpoints.
提供预览/导入/示例/模板/导出端点的 FastAPI 应用。
"""

from typing import Any

from fastapi import FastAPI, File, Query, UploadFile
from fastapi.responses import JSONResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from member_csv_import.config import ImportConfig, resolve_config
from member_csv_import.database import create_engine, create_session_factory
from member_csv_import.exceptions import ImportExportError
from member_csv_import.serializers import FilePayload
from member_csv_import.service import MemberImportService, parse_entity
from member_csv_import.typing import PasswordHasher


def _download(payload: FilePayload) -> Response:
    return Response(
        content=payload.content,
        media_type=payload.media_type,
        headers={"Content-Disposition": f'attachment; filename="{payload.filename}"'},
    )


def create_app(
    session_factory: async_sessionmaker[AsyncSession] | None = None,
    config: ImportConfig | None = None,
    password_hasher: PasswordHasher | None = None,
) -> FastAPI:
    """Create the FastAPI app.
    创建 FastAPI 应用。

    Args:
        session_factory: Override session factory (tests) / 覆盖会话工厂（测试用）。
        config: Import config / 导入配置。
        password_hasher: Override password hasher / 覆盖密码哈希器。

    Returns:
        FastAPI app instance / FastAPI 应用实例。
    """
    cfg = config or resolve_config()
    factory = session_factory or create_session_factory(create_engine(cfg.database_url))
    svc = MemberImportService(session_factory=factory, config=cfg, password_hasher=password_hasher)
    app = FastAPI(title="Member CSV Import")

    @app.exception_handler(ImportExportError)
    async def _import_export_error_handler(request: Any, exc: ImportExportError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.message, "error_code": exc.error_code, "details": exc.details},
        )

    @app.post("/import/{entity}/preview")
    async def preview(entity: str, file: UploadFile = File(...)) -> dict[str, Any]:
        """Validate an upload without saving / 校验上传文件但不保存。"""
        result = await svc.preview(parse_entity(entity), file)
        return result.model_dump(mode="json")

    @app.post("/import/{entity}")
    async def import_file(entity: str, file: UploadFile = File(...)) -> dict[str, Any]:
        """Import an upload all-or-nothing / 全有或全无导入上传文件。"""
        result = await svc.import_file(parse_entity(entity), file)
        return result.to_response().model_dump(mode="json")

    @app.get("/import/{entity}/sample")
    async def sample(entity: str) -> Response:
        return _download(svc.sample(parse_entity(entity)))

    @app.get("/import/{entity}/template")
    async def template(entity: str) -> Response:
        return _download(svc.template(parse_entity(entity)))

    @app.get("/export/{entity}")
    async def export(entity: str, fmt: str = Query("csv")) -> Response:
        """Export non-deleted entities / 导出未删除实体。"""
        return _download(await svc.export(parse_entity(entity), fmt=fmt))

    return app
