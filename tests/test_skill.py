"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: test_skill.py
@DateTime: 2026-02-18
@Docs: Skill import against a real SQLite database.
基于真实 SQLite 数据库的技能导入测试。
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from member_csv_import.entities import skill
from member_csv_import.enums import EntityType
from member_csv_import.models import Skill, utcnow
from member_csv_import.repositories import SkillRepository
from member_csv_import.service import MemberImportService
from tests.conftest import fetch_all, make_csv, seed


class TestSkillImport:
    """Tests for the skill import flow.
    技能导入流程测试。
    """

    @pytest.mark.asyncio
    async def test_active_duplicate_rejected(
        self, service: MemberImportService, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        """An active "Java" blocks "java" / 未删除的 "Java" 阻止导入 "java"。"""
        await seed(session_factory, Skill(name="Java"))
        result = await service.import_file(EntityType.SKILL, make_csv(skill.EXPECTED_HEADERS, [("java", "")]))
        assert result.rolled_back
        assert result.errors[0].message == "Skill with name 'java' already exists"
        assert len(await fetch_all(session_factory, Skill)) == 1

    @pytest.mark.asyncio
    async def test_soft_deleted_duplicate_accepted(
        self, service: MemberImportService, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        """A soft-deleted "Java" does not block a new one / 软删除的 "Java" 不阻止新建。"""
        await seed(session_factory, Skill(name="Java", deleted_at=utcnow()))
        result = await service.import_file(EntityType.SKILL, make_csv(skill.EXPECTED_HEADERS, [("Java", "JVM")]))
        assert not result.rolled_back
        assert result.success_count == 1
        rows = await fetch_all(session_factory, Skill)
        assert [(s.name, s.deleted_at is None) for s in rows] == [("Java", False), ("Java", True)]

    @pytest.mark.asyncio
    async def test_sample_imports_cleanly(
        self, service: MemberImportService, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        """The sample file is a valid upload / 示例文件是合法上传。"""
        result = await service.import_file(EntityType.SKILL, service.sample(EntityType.SKILL).content)
        assert not result.has_errors()
        assert result.success_count == len(skill.SAMPLE_ROWS)
        assert len(await fetch_all(session_factory, Skill)) == len(skill.SAMPLE_ROWS)

    @pytest.mark.asyncio
    async def test_concurrent_duplicate_name_becomes_database_error(
        self,
        service: MemberImportService,
        session_factory: async_sessionmaker[AsyncSession],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """The active-name index rejects a duplicate at flush / 未删除名称索引在 flush 时拒绝重复。"""
        await seed(session_factory, Skill(name="Java"))

        async def _never_exists(self: SkillRepository, name: str) -> bool:
            return False

        monkeypatch.setattr(SkillRepository, "exists_by_name", _never_exists)
        result = await service.import_file(EntityType.SKILL, make_csv(skill.EXPECTED_HEADERS, [("java", "")]))

        assert result.rolled_back
        assert [(e.row_number, e.field) for e in result.errors] == [(2, "Database")]
        assert result.errors[0].message.startswith("Failed to save skill: ")
        assert [s.name for s in await fetch_all(session_factory, Skill)] == ["Java"]
