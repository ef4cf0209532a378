"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: conftest.py
@DateTime: 2026-02-18
@Docs: Shared test fixtures for the member-csv-import test suite.
测试套件的公共 fixtures。
"""

import csv
import io
from collections.abc import AsyncIterator, Sequence
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest
from fastapi import UploadFile
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from member_csv_import.config import ImportConfig
from member_csv_import.database import create_engine, create_session_factory, init_models
from member_csv_import.service import MemberImportService


class FakeHasher:
    """Cheap reversible hasher so tests stay fast.
    可逆的简易哈希器，保证测试速度。
    """

    def hash(self, secret: str) -> str:
        return f"hashed:{secret}"

    def verify(self, secret: str, hashed: str) -> bool:
        return hashed == f"hashed:{secret}"


def make_upload_file(filename: str, content: bytes, content_type: str = "text/csv") -> UploadFile:
    """Create a mock UploadFile from bytes.
    从字节内容创建模拟 UploadFile。

    Args:
        filename: File name / 文件名。
        content: File content bytes / 文件内容字节。
        content_type: MIME type / MIME 类型。

    Returns:
        UploadFile: Mock upload file / 模拟上传文件。
    """
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        size=len(content),
        headers=MagicMock(get=lambda k, d=None: content_type if k == "content-type" else d),
    )


def make_csv(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> bytes:
    """Build CSV bytes from a header and rows.
    由表头与数据行构建 CSV 字节。
    """
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(headers)
    writer.writerows(rows)
    return buf.getvalue().encode("utf-8")


async def seed(factory: async_sessionmaker[AsyncSession], *entities: Any) -> None:
    """Persist entities in their own committed session.
    在独立会话中持久化并提交实体。
    """
    async with factory() as session:
        session.add_all(entities)
        await session.commit()


async def fetch_all(factory: async_sessionmaker[AsyncSession], model: type[Any]) -> list[Any]:
    """Load every row of a model, soft-deleted ones included.
    加载模型的全部行（含软删除记录）。
    """
    async with factory() as session:
        return list((await session.scalars(select(model).order_by(model.id))).all())


@pytest.fixture
async def session_factory(tmp_path: Path) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """File-backed SQLite database with all tables created.
    基于文件的 SQLite 数据库，已创建全部表。
    """
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'members.db'}")
    await init_models(engine)
    yield create_session_factory(engine)
    await engine.dispose()


@pytest.fixture
def import_config() -> ImportConfig:
    """Config with small limits for tests.
    测试用的小上限配置。
    """
    return ImportConfig(max_rows=50, preview_sample_size=10, max_upload_mb=1)


@pytest.fixture
def service(session_factory: async_sessionmaker[AsyncSession], import_config: ImportConfig) -> MemberImportService:
    """Service bound to the test database.
    绑定测试数据库的服务。
    """
    return MemberImportService(session_factory=session_factory, config=import_config, password_hasher=FakeHasher())
