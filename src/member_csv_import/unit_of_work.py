"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: unit_of_work.py
@DateTime: 2026-02-14
@Docs: SQLAlchemy unit of work for whole-batch imports.
整批导入的 SQLAlchemy 工作单元。

One transaction spans the whole file. Each row is written inside a SAVEPOINT
so a failed row can be undone while earlier rows stay pending; the batch is
then committed or aborted exactly once.
整个文件共用一个事务；每行在 SAVEPOINT 中写入，失败行可单独撤销而不影响之前的行；
最后整批只提交或中止一次。
"""

import logging
from typing import Any, Self

from sqlalchemy.ext.asyncio import AsyncSession, AsyncSessionTransaction

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork:
    """
    Unit of work over an AsyncSession.
    基于 AsyncSession 的工作单元。

    Examples:
        >>> # async with SqlAlchemyUnitOfWork(session) as uow:
        >>> #     async with uow.savepoint():
        >>> #         await repo.save(entity)
        >>> #     await uow.commit()
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self._finished = False
        self._entered = False

    @property
    def finished(self) -> bool:
        return self._finished

    async def __aenter__(self) -> Self:
        if self._entered:
            raise RuntimeError("Unit of work already entered / 工作单元已进入")
        self._entered = True
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        if not self._finished:
            if exc is not None:
                logger.warning("Rolling back unfinished import after %s", exc_type.__name__)
            self._finished = True
            await self.session.rollback()

    def savepoint(self) -> AsyncSessionTransaction:
        """Open a SAVEPOINT for one row / 为单行开启 SAVEPOINT。"""
        self._ensure_open()
        return self.session.begin_nested()

    async def commit(self) -> None:
        self._ensure_open()
        self._finished = True
        await self.session.commit()

    async def abort(self) -> None:
        """Discard every write of the batch / 丢弃整批写入。"""
        self._ensure_open()
        self._finished = True
        await self.session.rollback()

    def _ensure_open(self) -> None:
        if not self._entered:
            raise RuntimeError("Unit of work not entered / 工作单元尚未进入")
        if self._finished:
            raise RuntimeError("Unit of work already finished / 工作单元已结束")
