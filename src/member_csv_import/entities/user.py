"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: user.py
@DateTime: 2026-02-16
@Docs: User import/export configuration.
用户导入导出配置。

The skills cell holds `name:level[:years]` items joined by `;`. Every item is
checked on its own and each problem is reported, so one row can carry several
skill errors.
skills 单元格由 `;` 连接的 `name:level[:years]` 条目组成；每个条目独立校验并逐一报告问题，
因此一行可以包含多个技能错误。
"""

from dataclasses import dataclass
from decimal import Decimal

from member_csv_import.codecs import DateCodec, DecimalCodec, EnumCodec
from member_csv_import.enums import SkillLevel, UserRole, UserStatus
from member_csv_import.importer import EntityImportSpec
from member_csv_import.models import Skill, User, UserSkill
from member_csv_import.typing import (
    CheckRowFn,
    NamedRepositoryLike,
    PasswordHasher,
    ProcessRowFn,
    RowValues,
    UserRepositoryLike,
)
from member_csv_import.validation_rules import RowValidator, parse_decimal

EXPECTED_HEADERS = ("name", "email", "password", "birthday", "role", "status", "skills")
SAMPLE_ROWS = (
    (
        "John Doe",
        "john.doe@example.com",
        "password123",
        "1990-05-15",
        "MEMBER",
        "ACTIVE",
        "Java:ADVANCED:3;Spring Boot:INTERMEDIATE:2",
    ),
    (
        "Jane Smith",
        "jane.smith@example.com",
        "password123",
        "1985-08-22",
        "ADMIN",
        "ACTIVE",
        "React:EXPERT:5;Docker:ADVANCED:3",
    ),
    ("Bob Wilson", "bob.wilson@example.com", "password123", "1992-12-10", "MEMBER", "ACTIVE", "MySQL:INTERMEDIATE:2"),
    ("Alice Brown", "alice.brown@example.com", "password123", "1988-03-25", "MEMBER", "INACTIVE", ""),
)
EXPORT_HEADERS = ("ID", "Name", "Email", "Birthday", "Role", "Status", "Skills")

MIN_PASSWORD_LENGTH = 6
MAX_YEARS = Decimal("99.99")
SKILL_SEPARATOR = ";"
SKILL_PART_SEPARATOR = ":"
EXPORT_SKILL_SEPARATOR = "|"

_level_codec = EnumCodec(SkillLevel)
_date_codec = DateCodec()
_decimal_codec = DecimalCodec()


@dataclass(frozen=True, slots=True)
class SkillClaim:
    """
    One resolved `name:level[:years]` item.
    一个已解析的 `name:level[:years]` 条目。
    """

    skill: Skill
    level: SkillLevel
    years: Decimal | None


async def _check_skills(row: RowValidator, skills: NamedRepositoryLike[Skill]) -> list[SkillClaim]:
    claims: list[SkillClaim] = []
    seen: set[str] = set()
    for entry in row.get_str("skills").split(SKILL_SEPARATOR):
        item = entry.strip()
        if not item:
            continue
        parts = [p.strip() for p in item.split(SKILL_PART_SEPARATOR)]
        if len(parts) not in (2, 3) or not parts[0] or not parts[1]:
            row.add(field="skills", message=f"Invalid skill format: '{item}'. Expected: skill_name:level[:years]")
            continue

        name, level_text = parts[0], parts[1].upper()
        ok = True
        if name.lower() in seen:
            row.add(field="skills", message=f"Duplicate skill: '{name}'")
            ok = False
        skill = await skills.find_by_name(name)
        if skill is None:
            row.add(field="skills", message=f"Skill '{name}' does not exist")
            ok = False
        try:
            level = _level_codec.parse(level_text)
        except ValueError:
            level = None
            row.add(
                field="skills",
                message=f"Invalid skill level: '{level_text}'. Valid values: {', '.join(_level_codec.choices)}",
            )
            ok = False

        years: Decimal | None = None
        if len(parts) == 3 and parts[2]:
            years = parse_decimal(parts[2])
            if years is None:
                row.add(field="skills", message=f"Invalid years of experience: '{parts[2]}'. Must be a number")
                ok = False
            elif not Decimal(0) <= years <= MAX_YEARS:
                row.add(
                    field="skills",
                    message=f"Invalid years of experience: '{parts[2]}'. Must be between 0 and {MAX_YEARS}",
                )
                ok = False

        seen.add(name.lower())
        if ok and skill is not None and level is not None:
            claims.append(SkillClaim(skill=skill, level=level, years=years))
    return claims


def _build_check_fn(users: UserRepositoryLike, skills: NamedRepositoryLike[Skill]) -> CheckRowFn:
    async def check_row(row: RowValidator) -> None:
        name = row.text("name", label="Name", max_length=255, required=True)

        email = row.email("email")
        if email is not None and (row.is_repeated("email", email) or await users.exists_by_email(email)):
            row.add(field="email", message=f"User with email '{email}' already exists")

        password = row.get_str("password")
        if not password:
            row.add(field="password", message="Password is required")
        elif len(password) < MIN_PASSWORD_LENGTH:
            row.add(field="password", message=f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

        birthday = row.optional_date("birthday")
        role = row.choice("role", UserRole, label="Role")
        status = row.choice("status", UserStatus, label="Status")
        claims = await _check_skills(row, skills)

        row.values.update(
            name=name,
            email=email,
            password=password,
            birthday=birthday,
            role=role,
            status=status,
            skills=claims,
        )

    return check_row


def _build_process_fn(users: UserRepositoryLike, password_hasher: PasswordHasher) -> ProcessRowFn[User]:
    async def process_row(values: RowValues) -> User:
        user = User(
            name=values["name"],
            email=values["email"],
            password_hash=password_hasher.hash(values["password"]),
            birthday=values["birthday"],
            role=values["role"],
            status=values["status"],
            skills=[
                UserSkill(skill=claim.skill, level=claim.level, used_year_number=claim.years)
                for claim in values["skills"]
            ],
        )
        return await users.save(user)

    return process_row


def build_spec(
    users: UserRepositoryLike,
    skills: NamedRepositoryLike[Skill],
    password_hasher: PasswordHasher,
) -> EntityImportSpec[User]:
    return EntityImportSpec(
        entity_name="User",
        expected_headers=EXPECTED_HEADERS,
        check_row=_build_check_fn(users, skills),
        process_row=_build_process_fn(users, password_hasher),
    )


def _format_skill(user_skill: UserSkill) -> str:
    years = _decimal_codec.format(user_skill.used_year_number) or "0"
    return SKILL_PART_SEPARATOR.join([user_skill.skill.name, user_skill.level.name, years])


def export_row(user: User) -> list[str]:
    return [
        str(user.id),
        user.name,
        user.email,
        _date_codec.format(user.birthday),
        user.role.name,
        user.status.name,
        EXPORT_SKILL_SEPARATOR.join(_format_skill(us) for us in user.skills),
    ]
