"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: builtins.py
@DateTime: 2026-02-12
@Docs: Built-in codecs for CSV cell values.
CSV 单元格值的内置编解码器。
"""

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import TypeVar

from member_csv_import.codecs.base import Codec

_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


def _blank(value: object | None) -> bool:
    if value is None:
        return True
    return not str(value).strip()


TEnum = TypeVar("TEnum", bound=Enum)


class EnumCodec(Codec[TEnum]):
    """Codec for Enum values, looked up by upper-cased member name.
    枚举类型编解码器（按大写成员名查找）。
    """

    def __init__(self, enum_type: type[TEnum]):
        self._enum_type = enum_type
        self._members = {member.name: member for member in enum_type}

    @property
    def choices(self) -> list[str]:
        """Member names in declaration order / 按声明顺序的成员名。"""
        return list(self._members)

    def parse(self, value: str | None) -> TEnum | None:
        if _blank(value):
            return None
        raw = str(value).strip().upper()
        member = self._members.get(raw)
        if member is None:
            raise ValueError(f"Invalid enum value: {raw}")
        return member

    def format(self, value: TEnum | None) -> str:
        if value is None:
            return ""
        return value.name


class DateCodec(Codec[date]):
    """Codec for `yyyy-MM-dd` dates; other ISO shapes are rejected.
    `yyyy-MM-dd` 日期编解码器；其它 ISO 格式一律拒绝。
    """

    def parse(self, value: str | None) -> date | None:
        if _blank(value):
            return None
        text = str(value).strip()
        if _DATE_PATTERN.fullmatch(text) is None:
            raise ValueError(f"Invalid date: {text}")
        return date.fromisoformat(text)

    def format(self, value: date | None) -> str:
        if value is None:
            return ""
        return value.isoformat()


class DatetimeCodec(Codec[datetime]):
    """Codec for `yyyy-MM-dd HH:mm:ss` timestamps used in exports.
    导出使用的 `yyyy-MM-dd HH:mm:ss` 时间戳编解码器。
    """

    fmt = "%Y-%m-%d %H:%M:%S"

    def parse(self, value: str | None) -> datetime | None:
        if _blank(value):
            return None
        return datetime.strptime(str(value).strip(), self.fmt)

    def format(self, value: datetime | None) -> str:
        if value is None:
            return ""
        return value.strftime(self.fmt)


class DecimalCodec(Codec[Decimal]):
    """Codec for finite Decimal values.
    有限 Decimal 类型编解码器。
    """

    def parse(self, value: str | None) -> Decimal | None:
        if _blank(value):
            return None
        text = str(value).strip()
        try:
            parsed = Decimal(text)
        except InvalidOperation as exc:
            raise ValueError(f"Invalid decimal: {text}") from exc
        if not parsed.is_finite():
            raise ValueError(f"Invalid decimal: {text}")
        return parsed

    def format(self, value: Decimal | None) -> str:
        if value is None:
            return ""
        exponent = value.as_tuple().exponent
        if isinstance(exponent, int) and exponent < 0:
            return format(value, "f").rstrip("0").rstrip(".")
        return str(value)
