"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: models.py
@DateTime: 2026-02-13
@Docs: SQLAlchemy ORM models for members, skills, positions, teams and projects.
成员、技能、职位、团队与项目的 SQLAlchemy ORM 模型。

All top-level tables are soft-deleted through `deleted_at`. Natural keys are
unique among non-deleted rows, compared case-insensitively.
所有顶层表均通过 `deleted_at` 进行软删除；自然键在未删除记录中唯一，且不区分大小写。
"""

from datetime import UTC, date, datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import Date, DateTime, Enum, ForeignKey, Index, Numeric, String, Text, UniqueConstraint, func, text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from member_csv_import.enums import MemberStatus, ProjectStatus, SkillLevel, UserRole, UserStatus


def utcnow() -> datetime:
    """Naive UTC timestamp / 不带时区的 UTC 时间戳。"""
    return datetime.now(tz=UTC).replace(tzinfo=None)


class Base(DeclarativeBase):
    """SQLAlchemy declarative base. / SQLAlchemy 声明式基类。"""


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


class SoftDeleteMixin(TimestampMixin):
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True, default=None)


class Skill(SoftDeleteMixin, Base):
    __tablename__ = "skills"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)


class Team(SoftDeleteMixin, Base):
    __tablename__ = "teams"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)


class Position(SoftDeleteMixin, Base):
    __tablename__ = "positions"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    abbreviation: Mapped[str] = mapped_column(String(50), nullable=False)


class User(SoftDeleteMixin, Base):
    """User table model.
    用户表模型。

    Email is unique among non-deleted users at the database level, so a
    concurrent duplicate insert fails at flush time.
    未删除用户的邮箱在数据库层唯一，并发重复插入会在 flush 时失败。
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    birthday: Mapped[date | None] = mapped_column(Date, nullable=True)
    role: Mapped[UserRole] = mapped_column(Enum(UserRole, native_enum=False), nullable=False)
    status: Mapped[UserStatus] = mapped_column(Enum(UserStatus, native_enum=False), nullable=False)

    skills: Mapped[list["UserSkill"]] = relationship(back_populates="user", cascade="all, delete-orphan")


class UserSkill(TimestampMixin, Base):
    __tablename__ = "user_skills"
    __table_args__ = (UniqueConstraint("user_id", "skill_id", name="uq_user_skills_user_skill"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    skill_id: Mapped[int] = mapped_column(ForeignKey("skills.id"), nullable=False)
    level: Mapped[SkillLevel] = mapped_column(Enum(SkillLevel, native_enum=False), nullable=False)
    used_year_number: Mapped[Decimal | None] = mapped_column(Numeric(4, 2), nullable=True)

    user: Mapped[User] = relationship(back_populates="skills")
    # One-way: appending here must not touch Skill collections.
    skill: Mapped[Skill] = relationship()


class Project(SoftDeleteMixin, Base):
    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    abbreviation: Mapped[str | None] = mapped_column(String(50), nullable=True)
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[ProjectStatus] = mapped_column(Enum(ProjectStatus, native_enum=False), nullable=False)
    team_id: Mapped[int] = mapped_column(ForeignKey("teams.id"), nullable=False)

    team: Mapped[Team] = relationship()
    members: Mapped[list["ProjectMember"]] = relationship(back_populates="project", cascade="all, delete-orphan")


class ProjectMember(TimestampMixin, Base):
    __tablename__ = "project_members"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    project_id: Mapped[int] = mapped_column(ForeignKey("projects.id"), nullable=False)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    status: Mapped[MemberStatus] = mapped_column(
        Enum(MemberStatus, native_enum=False), nullable=False, default=MemberStatus.ACTIVE
    )
    joined_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    left_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    project: Mapped[Project] = relationship(back_populates="members")
    user: Mapped[User] = relationship()


def _unique_while_active(name: str, *expressions: Any) -> Index:
    return Index(
        name,
        *expressions,
        unique=True,
        sqlite_where=text("deleted_at IS NULL"),
        postgresql_where=text("deleted_at IS NULL"),
    )


_unique_while_active("uq_skills_name_active", func.lower(Skill.name))
_unique_while_active("uq_teams_name_active", func.lower(Team.name))
_unique_while_active("uq_positions_name_active", func.lower(Position.name))
_unique_while_active("uq_positions_abbreviation_active", func.lower(Position.abbreviation))
_unique_while_active("uq_users_email_active", func.lower(User.email))
