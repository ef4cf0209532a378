"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: database.py
@DateTime: 2026-02-14
@Docs: Async engine and session factory helpers.
异步引擎与会话工厂助手。
"""

from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from member_csv_import.models import Base


def create_engine(url: str, **kwargs: Any) -> AsyncEngine:
    """
    Create an async engine; SQLite engines get working SAVEPOINT support.
    创建异步引擎；SQLite 引擎会启用可用的 SAVEPOINT 支持。

    The sqlite3 driver opens and commits transactions on its own, which breaks
    SAVEPOINT. Transaction control is handed back to SQLAlchemy by disabling
    the driver's handling and emitting BEGIN explicitly.
    sqlite3 驱动会自行开启/提交事务，导致 SAVEPOINT 失效；这里关闭驱动的事务处理并显式发送 BEGIN。

    Args:
        url: SQLAlchemy async URL.
            SQLAlchemy 异步 URL。
        **kwargs: Extra engine options.
            额外的引擎参数。

    Returns:
        AsyncEngine: Engine instance.
            引擎实例。
    """
    engine = create_async_engine(url, **kwargs)
    if engine.dialect.name == "sqlite":

        @event.listens_for(engine.sync_engine, "connect")
        def _on_connect(dbapi_connection: Any, connection_record: Any) -> None:
            dbapi_connection.isolation_level = None

        @event.listens_for(engine.sync_engine, "begin")
        def _on_begin(conn: Any) -> None:
            conn.exec_driver_sql("BEGIN")

    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


async def init_models(engine: AsyncEngine) -> None:
    """Create all tables / 创建所有表。"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
