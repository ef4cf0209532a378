"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: project.py
@DateTime: 2026-02-16
@Docs: Project import/export configuration.
项目导入导出配置。

A project row resolves its team (required) and its members (optional, `;`
separated emails) against persisted data only, never against other rows of
the same file. The project and its memberships are written in the same row
savepoint, so a failed membership write also discards the project.
项目行仅根据已持久化数据解析团队（必填）与成员（可选，`;` 分隔的邮箱），不会引用同一文件的其它行。
项目与成员关系在同一行保存点内写入，成员写入失败时项目也会被撤销。
"""

from member_csv_import.codecs import DateCodec
from member_csv_import.enums import MemberStatus, ProjectStatus
from member_csv_import.importer import EntityImportSpec
from member_csv_import.models import Project, ProjectMember, Team, User, utcnow
from member_csv_import.typing import (
    CheckRowFn,
    NamedRepositoryLike,
    ProcessRowFn,
    ProjectRepositoryLike,
    RowValues,
    UserRepositoryLike,
)
from member_csv_import.validation_rules import RowValidator

EXPECTED_HEADERS = ("name", "abbreviation", "start_date", "end_date", "status", "team_name", "member_emails")
SAMPLE_ROWS = (
    (
        "E-Commerce Platform",
        "ECP",
        "2024-01-15",
        "2024-12-31",
        "ONGOING",
        "Backend Team",
        "john.doe@example.com;jane.smith@example.com",
    ),
    ("Mobile App", "MA", "2024-03-01", "", "PLANNING", "Mobile Team", "bob.wilson@example.com"),
    (
        "Internal Dashboard",
        "ID",
        "2023-06-01",
        "2023-12-15",
        "COMPLETED",
        "Frontend Team",
        "alice.brown@example.com;john.doe@example.com",
    ),
)
EXPORT_HEADERS = ("ID", "Name", "Abbreviation", "StartDate", "EndDate", "Status", "TeamName", "MemberEmails")

EMAIL_SEPARATOR = ";"

_date_codec = DateCodec()


async def _check_members(row: RowValidator, users: UserRepositoryLike) -> list[User]:
    members: list[User] = []
    seen: set[int] = set()
    for entry in row.get_str("member_emails").split(EMAIL_SEPARATOR):
        email = entry.strip()
        if not email:
            continue
        user = await users.find_by_email(email)
        if user is None:
            row.add(field="member_emails", message=f"User with email '{email}' does not exist")
            continue
        # Repeated emails collapse into one membership.
        if user.id not in seen:
            seen.add(user.id)
            members.append(user)
    return members


def _build_check_fn(teams: NamedRepositoryLike[Team], users: UserRepositoryLike) -> CheckRowFn:
    async def check_row(row: RowValidator) -> None:
        name = row.text("name", label="Name", max_length=255, required=True)
        abbreviation = row.text("abbreviation", label="Abbreviation", max_length=50)

        start_date = row.optional_date("start_date")
        end_date = row.optional_date("end_date")
        if start_date is not None and end_date is not None and end_date < start_date:
            row.add(field="end_date", message="End date must be after start date")

        status = row.choice("status", ProjectStatus, label="Status")

        team: Team | None = None
        team_name = row.get_str("team_name")
        if not team_name:
            row.add(field="team_name", message="Team name is required")
        else:
            team = await teams.find_by_name(team_name)
            if team is None:
                row.add(field="team_name", message=f"Team '{team_name}' does not exist")

        members = await _check_members(row, users)

        row.values.update(
            name=name,
            abbreviation=abbreviation,
            start_date=start_date,
            end_date=end_date,
            status=status,
            team=team,
            members=members,
        )

    return check_row


def _build_process_fn(projects: ProjectRepositoryLike) -> ProcessRowFn[Project]:
    async def process_row(values: RowValues) -> Project:
        project = await projects.save(
            Project(
                name=values["name"],
                abbreviation=values["abbreviation"],
                start_date=values["start_date"],
                end_date=values["end_date"],
                status=values["status"],
                team=values["team"],
                members=[],
            )
        )
        if values["members"]:
            joined_at = utcnow()
            project.members.extend(
                ProjectMember(user=user, status=MemberStatus.ACTIVE, joined_at=joined_at) for user in values["members"]
            )
            project = await projects.save(project)
        return project

    return process_row


def build_spec(
    projects: ProjectRepositoryLike,
    teams: NamedRepositoryLike[Team],
    users: UserRepositoryLike,
) -> EntityImportSpec[Project]:
    return EntityImportSpec(
        entity_name="Project",
        expected_headers=EXPECTED_HEADERS,
        check_row=_build_check_fn(teams, users),
        process_row=_build_process_fn(projects),
    )


def export_row(project: Project) -> list[str]:
    active_emails = [m.user.email for m in project.members if m.status == MemberStatus.ACTIVE]
    return [
        str(project.id),
        project.name,
        project.abbreviation or "",
        _date_codec.format(project.start_date),
        _date_codec.format(project.end_date),
        project.status.name,
        project.team.name,
        EMAIL_SEPARATOR.join(active_emails),
    ]
