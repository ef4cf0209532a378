"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: security.py
@DateTime: 2026-02-14
@Docs: Password hashing for imported users.
导入用户的密码哈希。
"""

from passlib.context import CryptContext


class PasslibPasswordHasher:
    """
    PasswordHasher backed by a passlib CryptContext.
    基于 passlib CryptContext 的密码哈希器。

    Args:
        schemes: passlib scheme names, first one is used for new hashes.
            passlib 方案名，新哈希使用第一个方案。
    """

    def __init__(self, schemes: list[str] | None = None) -> None:
        self._context = CryptContext(schemes=schemes or ["pbkdf2_sha256"], deprecated="auto")

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        return self._context.verify(password, hashed)
