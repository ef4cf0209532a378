"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: __init__.py
@DateTime: 2026-02-16
@Docs: Entity registry: headers, samples, import specs and export rows per entity type.
实体注册表：按实体类型提供表头、示例、导入规格与导出行。
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from member_csv_import.entities import position, project, skill, team, user
from member_csv_import.enums import EntityType
from member_csv_import.importer import EntityImportSpec
from member_csv_import.models import Skill, Team
from member_csv_import.repositories import (
    PositionRepository,
    ProjectRepository,
    SkillRepository,
    TeamRepository,
    UserRepository,
)
from member_csv_import.typing import (
    NamedRepositoryLike,
    PasswordHasher,
    PositionRepositoryLike,
    ProjectRepositoryLike,
    UserRepositoryLike,
)

EXPECTED_HEADERS: dict[EntityType, tuple[str, ...]] = {
    EntityType.USER: user.EXPECTED_HEADERS,
    EntityType.SKILL: skill.EXPECTED_HEADERS,
    EntityType.POSITION: position.EXPECTED_HEADERS,
    EntityType.TEAM: team.EXPECTED_HEADERS,
    EntityType.PROJECT: project.EXPECTED_HEADERS,
}

SAMPLE_ROWS: dict[EntityType, tuple[tuple[str, ...], ...]] = {
    EntityType.USER: user.SAMPLE_ROWS,
    EntityType.SKILL: skill.SAMPLE_ROWS,
    EntityType.POSITION: position.SAMPLE_ROWS,
    EntityType.TEAM: team.SAMPLE_ROWS,
    EntityType.PROJECT: project.SAMPLE_ROWS,
}

EXPORT_HEADERS: dict[EntityType, tuple[str, ...]] = {
    EntityType.USER: user.EXPORT_HEADERS,
    EntityType.SKILL: skill.EXPORT_HEADERS,
    EntityType.POSITION: position.EXPORT_HEADERS,
    EntityType.TEAM: team.EXPORT_HEADERS,
    EntityType.PROJECT: project.EXPORT_HEADERS,
}

EXPORT_ROW_FNS: dict[EntityType, Callable[[Any], list[str]]] = {
    EntityType.USER: user.export_row,
    EntityType.SKILL: skill.export_row,
    EntityType.POSITION: position.export_row,
    EntityType.TEAM: team.export_row,
    EntityType.PROJECT: project.export_row,
}


@dataclass(frozen=True, slots=True)
class Repositories:
    """
    Repository bundle handed to entity specs.
    交给实体规格的仓储集合。
    """

    skills: NamedRepositoryLike[Skill]
    teams: NamedRepositoryLike[Team]
    positions: PositionRepositoryLike
    users: UserRepositoryLike
    projects: ProjectRepositoryLike

    @classmethod
    def for_session(cls, session: AsyncSession) -> "Repositories":
        return cls(
            skills=SkillRepository(session),
            teams=TeamRepository(session),
            positions=PositionRepository(session),
            users=UserRepository(session),
            projects=ProjectRepository(session),
        )

    async def find_all_active(self, entity: EntityType) -> Sequence[Any]:
        """Load every non-deleted entity of a type / 加载某类型的全部未删除实体。"""
        match entity:
            case EntityType.USER:
                return await self.users.find_all_active()
            case EntityType.SKILL:
                return await self.skills.find_all_active()
            case EntityType.POSITION:
                return await self.positions.find_all_active()
            case EntityType.TEAM:
                return await self.teams.find_all_active()
            case EntityType.PROJECT:
                return await self.projects.find_all_active()
        raise ValueError(f"Unknown entity type: {entity}")


def build_import_spec(
    entity: EntityType,
    repos: Repositories,
    *,
    password_hasher: PasswordHasher,
) -> EntityImportSpec[Any]:
    """
    Build the import spec for an entity type.
    构建实体类型的导入规格。

    Args:
        entity: Entity type.
            实体类型。
        repos: Repository bundle.
            仓储集合。
        password_hasher: Hasher for imported user passwords.
            导入用户密码的哈希器。

    Returns:
        EntityImportSpec: Spec for the engine.
            供引擎使用的规格。
    """
    match entity:
        case EntityType.USER:
            return user.build_spec(repos.users, repos.skills, password_hasher)
        case EntityType.SKILL:
            return skill.build_spec(repos.skills)
        case EntityType.POSITION:
            return position.build_spec(repos.positions)
        case EntityType.TEAM:
            return team.build_spec(repos.teams)
        case EntityType.PROJECT:
            return project.build_spec(repos.projects, repos.teams, repos.users)
    raise ValueError(f"Unknown entity type: {entity}")


__all__ = [
    "EXPECTED_HEADERS",
    "EXPORT_HEADERS",
    "EXPORT_ROW_FNS",
    "SAMPLE_ROWS",
    "Repositories",
    "build_import_spec",
]
