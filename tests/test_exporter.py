"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: test_exporter.py
@DateTime: 2026-02-18
@Docs: Tests for exporter.py module.
exporter.py 模块测试。
"""

import csv
import io
from datetime import UTC, datetime
from decimal import Decimal

import pytest
from openpyxl import load_workbook

from member_csv_import.enums import EntityType, MemberStatus, ProjectStatus, SkillLevel, UserRole, UserStatus
from member_csv_import.exceptions import ExportError
from member_csv_import.exporter import Exporter
from member_csv_import.models import Project, ProjectMember, Skill, Team, User, UserSkill
from member_csv_import.serializers import CSV_MEDIA_TYPE, XLSX_MEDIA_TYPE, CsvSerializer, Serializer, XlsxSerializer

STAMP = datetime(2024, 1, 2, 3, 4, 5)


def _exporter() -> Exporter:
    return Exporter(clock=lambda: datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC))


def _read_csv(content: bytes) -> list[list[str]]:
    return list(csv.reader(io.StringIO(content.decode("utf-8-sig"), newline="")))


def _user(email: str, user_id: int = 1, skills: list[UserSkill] | None = None) -> User:
    return User(
        id=user_id,
        name="John Doe",
        email=email,
        password_hash="x",
        birthday=None,
        role=UserRole.MEMBER,
        status=UserStatus.ACTIVE,
        skills=skills or [],
    )


class TestExporter:
    """Tests for Exporter class.
    Exporter 类测试。
    """

    def test_csv_team(self) -> None:
        """Timestamped name, BOM, CRLF and fixed header / 带时间戳文件名、BOM、CRLF 与固定表头。"""
        teams = [Team(id=1, name="Backend", description="APIs, jobs", created_at=STAMP, updated_at=STAMP)]
        payload = _exporter().export(EntityType.TEAM, teams)
        assert payload.filename == "teams_export_20240102_030405.csv"
        assert payload.media_type == CSV_MEDIA_TYPE
        assert payload.content.startswith(b"\xef\xbb\xbf")
        assert b"\r\n" in payload.content
        assert _read_csv(payload.content) == [
            ["ID", "Name", "Description", "Created At", "Updated At"],
            ["1", "Backend", "APIs, jobs", "2024-01-02 03:04:05", "2024-01-02 03:04:05"],
        ]

    def test_empty_export_has_header(self) -> None:
        """No entities still yields the header / 无实体时仍输出表头。"""
        payload = _exporter().export(EntityType.SKILL, [])
        assert _read_csv(payload.content) == [["ID", "Name", "Description", "Created At", "Updated At"]]

    def test_user_skills_joined_with_pipe(self) -> None:
        """User skills use `|` between items / 用户技能条目以 `|` 分隔。"""
        skills = [
            UserSkill(skill=Skill(name="Go"), level=SkillLevel.EXPERT, used_year_number=Decimal("3.50")),
            UserSkill(skill=Skill(name="SQL"), level=SkillLevel.BEGINNER, used_year_number=None),
        ]
        payload = _exporter().export(EntityType.USER, [_user("john@example.com", skills=skills)])
        rows = _read_csv(payload.content)
        assert rows[0] == ["ID", "Name", "Email", "Birthday", "Role", "Status", "Skills"]
        assert rows[1] == ["1", "John Doe", "john@example.com", "", "MEMBER", "ACTIVE", "Go:EXPERT:3.5|SQL:BEGINNER:0"]

    def test_project_members_joined_with_semicolon(self) -> None:
        """Only active members are listed, `;` separated / 仅列出在职成员，以 `;` 分隔。"""
        members = [
            ProjectMember(user=_user("a@example.com", 1), status=MemberStatus.ACTIVE),
            ProjectMember(user=_user("b@example.com", 2), status=MemberStatus.LEFT),
            ProjectMember(user=_user("c@example.com", 3), status=MemberStatus.ACTIVE),
        ]
        item = Project(
            id=9,
            name="Apollo",
            abbreviation=None,
            start_date=None,
            end_date=None,
            status=ProjectStatus.PLANNING,
            team=Team(name="Backend Team"),
            members=members,
        )
        rows = _read_csv(_exporter().export(EntityType.PROJECT, [item]).content)
        assert rows[1] == ["9", "Apollo", "", "", "", "PLANNING", "Backend Team", "a@example.com;c@example.com"]

    def test_xlsx(self) -> None:
        """XLSX export via openpyxl / 通过 openpyxl 导出 XLSX。"""
        teams = [Team(id=1, name="QA", description=None, created_at=STAMP, updated_at=STAMP)]
        payload = _exporter().export(EntityType.TEAM, teams, fmt="XLSX")
        assert payload.filename == "teams_export_20240102_030405.xlsx"
        assert payload.media_type == XLSX_MEDIA_TYPE
        ws = load_workbook(io.BytesIO(payload.content)).active
        assert ws is not None
        assert ws.title == "teams"
        assert [c.value for c in ws[1]] == ["ID", "Name", "Description", "Created At", "Updated At"]
        assert ws["B2"].value == "QA"

    def test_unsupported_format(self) -> None:
        with pytest.raises(ExportError) as exc_info:
            _exporter().export(EntityType.TEAM, [], fmt="pdf")
        assert exc_info.value.error_code == "unsupported_format"


class TestSerializers:
    """Tests for the Serializer implementations.
    Serializer 实现测试。
    """

    @pytest.mark.parametrize(
        ("serializer", "media_type"),
        [(CsvSerializer(), CSV_MEDIA_TYPE), (XlsxSerializer(), XLSX_MEDIA_TYPE)],
    )
    def test_protocol_surface(self, serializer: Serializer, media_type: str) -> None:
        """File suffix comes from the export format, not the serializer / 文件后缀取自导出格式而非序列化器。"""
        assert serializer.media_type == media_type
        assert serializer.serialize(headers=["name"], rows=[["QA"]])
        assert not hasattr(serializer, "extension")
