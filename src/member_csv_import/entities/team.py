"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: team.py
@DateTime: 2026-02-16
@Docs: Team import/export configuration.
团队导入导出配置。
"""

from member_csv_import.codecs import DatetimeCodec
from member_csv_import.importer import EntityImportSpec
from member_csv_import.models import Team
from member_csv_import.typing import CheckRowFn, NamedRepositoryLike, ProcessRowFn, RowValues
from member_csv_import.validation_rules import RowValidator

EXPECTED_HEADERS = ("name", "description")
SAMPLE_ROWS = (
    ("Backend Team", "Team responsible for server-side development"),
    ("Frontend Team", "Team responsible for client-side development"),
    ("DevOps Team", "Team responsible for CI/CD and infrastructure"),
    ("QA Team", "Team responsible for quality assurance and testing"),
    ("Mobile Team", "Team responsible for mobile application development"),
)
EXPORT_HEADERS = ("ID", "Name", "Description", "Created At", "Updated At")

_ts = DatetimeCodec()


def _build_check_fn(teams: NamedRepositoryLike[Team]) -> CheckRowFn:
    async def check_row(row: RowValidator) -> None:
        name = row.text("name", label="Name", max_length=255, required=True)
        if name is not None and (row.is_repeated("name", name) or await teams.exists_by_name(name)):
            row.add(field="name", message=f"Team with name '{name}' already exists")
        row.values["name"] = name
        row.values["description"] = row.get_str("description") or None

    return check_row


def _build_process_fn(teams: NamedRepositoryLike[Team]) -> ProcessRowFn[Team]:
    async def process_row(values: RowValues) -> Team:
        return await teams.save(Team(name=values["name"], description=values["description"]))

    return process_row


def build_spec(teams: NamedRepositoryLike[Team]) -> EntityImportSpec[Team]:
    return EntityImportSpec(
        entity_name="Team",
        expected_headers=EXPECTED_HEADERS,
        check_row=_build_check_fn(teams),
        process_row=_build_process_fn(teams),
    )


def export_row(team: Team) -> list[str]:
    return [
        str(team.id),
        team.name,
        team.description or "",
        _ts.format(team.created_at),
        _ts.format(team.updated_at),
    ]
