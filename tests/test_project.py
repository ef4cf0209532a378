"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: test_project.py
@DateTime: 2026-02-18
@Docs: Project import against a real SQLite database.
基于真实 SQLite 数据库的项目导入测试。
"""

from datetime import date

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from member_csv_import.entities import project
from member_csv_import.enums import EntityType, MemberStatus, ProjectStatus, UserRole, UserStatus
from member_csv_import.models import Project, ProjectMember, Team, User, utcnow
from member_csv_import.service import MemberImportService
from tests.conftest import fetch_all, make_csv, seed


def _member(email: str, **kwargs: object) -> User:
    return User(
        name=email.split("@")[0],
        email=email,
        password_hash="x",
        role=UserRole.MEMBER,
        status=UserStatus.ACTIVE,
        **kwargs,
    )


@pytest.fixture
async def directory(session_factory: async_sessionmaker[AsyncSession]) -> None:
    """Seed one team and two users / 预置一个团队与两个用户。"""
    await seed(
        session_factory,
        Team(name="Backend Team"),
        _member("john.doe@example.com"),
        _member("jane.smith@example.com"),
        _member("gone@example.com", deleted_at=utcnow()),
    )


class TestProjectValidation:
    """Tests for project row rules.
    项目行规则测试。
    """

    @pytest.mark.asyncio
    @pytest.mark.usefixtures("directory")
    async def test_references_are_resolved(self, service: MemberImportService) -> None:
        """Unknown team and users are reported per item / 未知团队与用户逐项报告。"""
        emails = "nobody@example.com;gone@example.com"
        row = ("Apollo", "AP", "2024-01-01", "2024-06-30", "PLANNING", "Ghost Team", emails)
        preview = await service.preview(EntityType.PROJECT, make_csv(project.EXPECTED_HEADERS, [row]))
        assert preview.rows[0].errors == [
            "Team 'Ghost Team' does not exist",
            "User with email 'nobody@example.com' does not exist",
            "User with email 'gone@example.com' does not exist",
        ]

    @pytest.mark.asyncio
    @pytest.mark.usefixtures("directory")
    async def test_field_rules(self, service: MemberImportService) -> None:
        row = ("", "A" * 51, "2024-06-30", "2024-01-01", "SOMEDAY", "", "")
        preview = await service.preview(EntityType.PROJECT, make_csv(project.EXPECTED_HEADERS, [row]))
        assert preview.rows[0].errors == [
            "Name is required",
            "Abbreviation must not exceed 50 characters",
            "End date must be after start date",
            "Invalid status. Valid values: PLANNING, ONGOING, COMPLETED, CANCELLED",
            "Team name is required",
        ]

    @pytest.mark.asyncio
    @pytest.mark.usefixtures("directory")
    async def test_same_day_end_date_allowed(self, service: MemberImportService) -> None:
        row = ("Apollo", "", "2024-01-01", "2024-01-01", "ONGOING", "backend team", "")
        preview = await service.preview(EntityType.PROJECT, make_csv(project.EXPECTED_HEADERS, [row]))
        assert preview.rows[0].valid


class TestProjectImport:
    """Tests for the project import flow.
    项目导入流程测试。
    """

    @pytest.mark.asyncio
    @pytest.mark.usefixtures("directory")
    async def test_import_with_members(
        self, service: MemberImportService, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        """Team and members are linked, repeated emails collapse / 关联团队与成员，重复邮箱合并。"""
        row = (
            "Apollo",
            "AP",
            "2024-01-01",
            "",
            "ongoing",
            "Backend Team",
            "john.doe@example.com; jane.smith@example.com;JOHN.DOE@example.com",
        )
        result = await service.import_file(EntityType.PROJECT, make_csv(project.EXPECTED_HEADERS, [row]))
        assert not result.has_errors()

        async with session_factory() as session:
            saved = (
                await session.scalars(
                    select(Project).options(
                        selectinload(Project.team), selectinload(Project.members).selectinload(ProjectMember.user)
                    )
                )
            ).one()
        assert saved.team.name == "Backend Team"
        assert saved.status is ProjectStatus.ONGOING
        assert saved.start_date == date(2024, 1, 1)
        assert saved.end_date is None
        assert sorted(m.user.email for m in saved.members) == ["jane.smith@example.com", "john.doe@example.com"]
        assert all(m.status is MemberStatus.ACTIVE and m.joined_at is not None for m in saved.members)

    @pytest.mark.asyncio
    @pytest.mark.usefixtures("directory")
    async def test_bad_row_discards_good_project(
        self, service: MemberImportService, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        rows = [
            ("Apollo", "AP", "", "", "PLANNING", "Backend Team", ""),
            ("Gemini", "GE", "", "", "PLANNING", "Ghost Team", ""),
        ]
        result = await service.import_file(EntityType.PROJECT, make_csv(project.EXPECTED_HEADERS, rows))
        assert result.rolled_back
        assert result.errors[0].row_number == 3
        assert await fetch_all(session_factory, Project) == []
        assert await fetch_all(session_factory, ProjectMember) == []
