"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: typing.py
@DateTime: 2026-02-13
@Docs: Collaborator protocols consumed by the import engine.
导入引擎依赖的协作者协议。

The engine never reaches for global state: every repository, the unit of
work and the password hasher are passed in explicitly.
引擎不访问全局状态：仓储、工作单元与密码哈希器均显式传入。
"""

from collections.abc import Sequence
from contextlib import AbstractAsyncContextManager
from typing import Any, Protocol, Self, TypeAlias, TypeVar

from member_csv_import.models import Position, Project, Skill, Team, User
from member_csv_import.validation_rules import RowValidator

TEntity = TypeVar("TEntity")
TEntity_co = TypeVar("TEntity_co", covariant=True)
TNamed = TypeVar("TNamed", Skill, Team)

RowValues: TypeAlias = dict[str, Any]


class CheckRowFn(Protocol):
    """
    Row rule function protocol.
    行规则函数协议。

    Reads cells from `row`, reports errors on it and stores parsed values and
    resolved references in `row.values` for the persist step.
    从 `row` 读取单元格、报告错误，并把解析值与已解析引用写入 `row.values` 供保存步骤使用。
    """

    async def __call__(self, row: RowValidator) -> None: ...


class ProcessRowFn(Protocol[TEntity_co]):
    """
    Persist function protocol: build the entity from resolved values and save it.
    保存函数协议：由已解析的值构建实体并保存。

    Raises:
        PersistenceError: When the store rejects the write.
            存储拒绝写入时抛出。
    """

    async def __call__(self, values: RowValues) -> TEntity_co: ...


class NamedRepositoryLike(Protocol[TNamed]):
    """Repository of entities keyed by a case-insensitive name (Skill, Team).
    以不区分大小写名称为键的实体仓储（技能、团队）。
    """

    async def exists_by_name(self, name: str) -> bool: ...

    async def find_by_name(self, name: str) -> TNamed | None: ...

    async def save(self, entity: TNamed) -> TNamed: ...

    async def find_all_active(self) -> Sequence[TNamed]: ...


class PositionRepositoryLike(Protocol):
    async def exists_by_name(self, name: str) -> bool: ...

    async def exists_by_abbreviation(self, abbreviation: str) -> bool: ...

    async def save(self, entity: Position) -> Position: ...

    async def find_all_active(self) -> Sequence[Position]: ...


class UserRepositoryLike(Protocol):
    async def exists_by_email(self, email: str) -> bool: ...

    async def find_by_email(self, email: str) -> User | None: ...

    async def save(self, entity: User) -> User: ...

    async def find_all_active(self) -> Sequence[User]: ...


class ProjectRepositoryLike(Protocol):
    async def save(self, entity: Project) -> Project: ...

    async def find_all_active(self) -> Sequence[Project]: ...


class UnitOfWork(Protocol):
    """
    Whole-batch transaction boundary.
    整批事务边界。

    Entered before the first row; `commit()` or `abort()` is called exactly
    once at the end. Leaving the context while still open rolls back.
    在处理首行之前进入；结束时只调用一次 `commit()` 或 `abort()`。若离开上下文时仍未结束则回滚。
    """

    async def __aenter__(self) -> Self: ...

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> None: ...

    def savepoint(self) -> AbstractAsyncContextManager[Any]: ...

    async def commit(self) -> None: ...

    async def abort(self) -> None: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...

    def verify(self, password: str, hashed: str) -> bool: ...
