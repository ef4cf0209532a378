"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: repositories.py
@DateTime: 2026-02-14
@Docs: SQLAlchemy async repositories with soft-delete scoped natural-key lookups.
基于 SQLAlchemy 异步会话的仓储，自然键查询限定于未软删除记录。
"""

import logging
from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, exists, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute, selectinload

from member_csv_import.exceptions import PersistenceError
from member_csv_import.models import Position, Project, ProjectMember, Skill, Team, User, UserSkill

logger = logging.getLogger(__name__)


def _reason(exc: SQLAlchemyError) -> str:
    """Extract a short driver message from a SQLAlchemy error.
    从 SQLAlchemy 异常中提取简短的驱动消息。
    """
    orig = getattr(exc, "orig", None)
    return str(orig if orig is not None else exc).strip().splitlines()[0]


TModel = TypeVar("TModel", bound=Any)


class SqlAlchemyRepository(Generic[TModel]):
    """
    Base repository bound to one session.
    绑定单个会话的仓储基类。
    """

    model: type[TModel]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _active(self) -> Select[tuple[TModel]]:
        return select(self.model).where(self.model.deleted_at.is_(None))

    async def _exists_ci(self, column: InstrumentedAttribute[str], value: str) -> bool:
        stmt = select(
            exists().where(func.lower(column) == value.strip().lower(), self.model.deleted_at.is_(None))
        )
        return bool(await self.session.scalar(stmt))

    async def _find_ci(self, column: InstrumentedAttribute[str], value: str) -> TModel | None:
        stmt = (
            self._active()
            .where(func.lower(column) == value.strip().lower())
            .order_by(self.model.id)
            .limit(1)
        )
        return (await self.session.scalars(stmt)).first()

    async def save(self, entity: TModel) -> TModel:
        """
        Add and flush an entity so constraint violations surface now.
        添加并 flush 实体，使约束冲突立即暴露。

        Raises:
            PersistenceError: When the flush fails.
                flush 失败时抛出。
        """
        self.session.add(entity)
        try:
            await self.session.flush()
        except SQLAlchemyError as exc:
            reason = _reason(exc)
            logger.debug("Flush failed for %s: %s", self.model.__name__, reason)
            raise PersistenceError(reason=reason, details={"model": self.model.__name__}) from exc
        return entity

    async def find_all_active(self) -> Sequence[TModel]:
        return (await self.session.scalars(self._active().order_by(self.model.id))).all()


class SkillRepository(SqlAlchemyRepository[Skill]):
    model = Skill

    async def exists_by_name(self, name: str) -> bool:
        return await self._exists_ci(Skill.name, name)

    async def find_by_name(self, name: str) -> Skill | None:
        return await self._find_ci(Skill.name, name)


class TeamRepository(SqlAlchemyRepository[Team]):
    model = Team

    async def exists_by_name(self, name: str) -> bool:
        return await self._exists_ci(Team.name, name)

    async def find_by_name(self, name: str) -> Team | None:
        return await self._find_ci(Team.name, name)


class PositionRepository(SqlAlchemyRepository[Position]):
    model = Position

    async def exists_by_name(self, name: str) -> bool:
        return await self._exists_ci(Position.name, name)

    async def exists_by_abbreviation(self, abbreviation: str) -> bool:
        return await self._exists_ci(Position.abbreviation, abbreviation)


class UserRepository(SqlAlchemyRepository[User]):
    model = User

    async def exists_by_email(self, email: str) -> bool:
        return await self._exists_ci(User.email, email)

    async def find_by_email(self, email: str) -> User | None:
        return await self._find_ci(User.email, email)

    async def find_all_active(self) -> Sequence[User]:
        stmt = self._active().options(selectinload(User.skills).selectinload(UserSkill.skill)).order_by(User.id)
        return (await self.session.scalars(stmt)).all()


class ProjectRepository(SqlAlchemyRepository[Project]):
    model = Project

    async def find_all_active(self) -> Sequence[Project]:
        stmt = (
            self._active()
            .options(
                selectinload(Project.team),
                selectinload(Project.members).selectinload(ProjectMember.user),
            )
            .order_by(Project.id)
        )
        return (await self.session.scalars(stmt)).all()
