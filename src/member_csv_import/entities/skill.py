"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: skill.py
@DateTime: 2026-02-16
@Docs: Skill import/export configuration.
技能导入导出配置。
"""

from member_csv_import.codecs import DatetimeCodec
from member_csv_import.importer import EntityImportSpec
from member_csv_import.models import Skill
from member_csv_import.typing import CheckRowFn, NamedRepositoryLike, ProcessRowFn, RowValues
from member_csv_import.validation_rules import RowValidator

EXPECTED_HEADERS = ("name", "description")
SAMPLE_ROWS = (
    ("Java", "A high-level, class-based, object-oriented programming language"),
    ("Spring Boot", "An open-source Java-based framework for creating microservices"),
    ("React", "A JavaScript library for building user interfaces"),
    ("Docker", "A platform for developing, shipping, and running applications in containers"),
    ("MySQL", "An open-source relational database management system"),
)
EXPORT_HEADERS = ("ID", "Name", "Description", "Created At", "Updated At")

_ts = DatetimeCodec()


def _build_check_fn(skills: NamedRepositoryLike[Skill]) -> CheckRowFn:
    async def check_row(row: RowValidator) -> None:
        name = row.text("name", label="Name", max_length=255, required=True)
        if name is not None and (row.is_repeated("name", name) or await skills.exists_by_name(name)):
            row.add(field="name", message=f"Skill with name '{name}' already exists")
        row.values["name"] = name
        row.values["description"] = row.get_str("description") or None

    return check_row


def _build_process_fn(skills: NamedRepositoryLike[Skill]) -> ProcessRowFn[Skill]:
    async def process_row(values: RowValues) -> Skill:
        return await skills.save(Skill(name=values["name"], description=values["description"]))

    return process_row


def build_spec(skills: NamedRepositoryLike[Skill]) -> EntityImportSpec[Skill]:
    return EntityImportSpec(
        entity_name="Skill",
        expected_headers=EXPECTED_HEADERS,
        check_row=_build_check_fn(skills),
        process_row=_build_process_fn(skills),
    )


def export_row(skill: Skill) -> list[str]:
    return [
        str(skill.id),
        skill.name,
        skill.description or "",
        _ts.format(skill.created_at),
        _ts.format(skill.updated_at),
    ]
