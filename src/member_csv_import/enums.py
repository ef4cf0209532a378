"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: enums.py
@DateTime: 2026-02-12
@Docs: Domain enums shared by models, validators and exporters.
模型、校验器与导出器共享的领域枚举。
"""

from enum import StrEnum


class EntityType(StrEnum):
    """
    Importable entity types.
    可导入的实体类型。

    The value is also the filename stem: `users_sample.csv`, `user_import_template.csv`.
    值同时作为文件名前缀。
    """

    USER = "user"
    SKILL = "skill"
    POSITION = "position"
    TEAM = "team"
    PROJECT = "project"

    @property
    def plural(self) -> str:
        return f"{self.value}s"

    @property
    def label(self) -> str:
        """Human readable name used in row messages / 行错误消息中使用的名称。"""
        return self.value.capitalize()


class UserRole(StrEnum):
    ADMIN = "ADMIN"
    MEMBER = "MEMBER"


class UserStatus(StrEnum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class SkillLevel(StrEnum):
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"
    EXPERT = "EXPERT"


class ProjectStatus(StrEnum):
    PLANNING = "PLANNING"
    ONGOING = "ONGOING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class MemberStatus(StrEnum):
    """
    Project membership status.
    项目成员状态。
    """

    ACTIVE = "ACTIVE"
    LEFT = "LEFT"
