"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: validation_rules.py
@DateTime: 2026-02-13
@Docs: Reusable field rules (required/length/format/enum/decimal).
可复用字段规则（必填/长度/格式/枚举/小数）。

Every rule reports at most one error per field and returns the parsed value,
or None when the field is blank or invalid.
每条规则对同一字段最多报告一个错误，并返回解析值；字段为空或无效时返回 None。
"""

import re
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import TypeVar

from member_csv_import.codecs import DateCodec, DecimalCodec, EnumCodec
from member_csv_import.validation_core import RowContext

TEnum = TypeVar("TEnum", bound=Enum)

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
DATE_FORMAT_MESSAGE = "Invalid date format. Expected: yyyy-MM-dd"

_date_codec = DateCodec()
_decimal_codec = DecimalCodec()


def is_email(value: str) -> bool:
    return EMAIL_PATTERN.fullmatch(value) is not None


def parse_decimal(value: str) -> Decimal | None:
    """Parse a decimal sub-field, returning None when invalid / 解析小数子字段，无效时返回 None。"""
    try:
        return _decimal_codec.parse(value)
    except ValueError:
        return None


class RowValidator(RowContext):
    """Per-row helper with field rules.
    带字段规则的行校验助手。
    """

    __slots__ = ()

    def text(
        self,
        field: str,
        *,
        label: str,
        max_length: int | None = None,
        required: bool = False,
    ) -> str | None:
        """Check a text cell for presence and length.
        校验文本单元格的必填与长度。

        Args:
            field: Header name.
                表头名。
            label: Field label used in messages, e.g. "Name".
                消息中使用的字段名称，例如 "Name"。
            max_length: Max length (optional).
                最大长度（可选）。
            required: Whether a blank value is an error.
                空值是否视为错误。

        Returns:
            str | None: Trimmed value, or None when blank/invalid.
                去除空白后的值；为空或无效时为 None。
        """
        value = self.get_str(field)
        if not value:
            if required:
                self.add(field=field, message=f"{label} is required")
            return None
        if max_length is not None and len(value) > max_length:
            self.add(field=field, message=f"{label} must not exceed {max_length} characters")
            return None
        return value

    def email(self, field: str) -> str | None:
        value = self.get_str(field)
        if not value:
            self.add(field=field, message="Email is required")
            return None
        if not is_email(value):
            self.add(field=field, message="Invalid email format")
            return None
        return value

    def optional_date(self, field: str) -> date | None:
        """Parse an optional `yyyy-MM-dd` date / 解析可选的 `yyyy-MM-dd` 日期。"""
        try:
            return _date_codec.parse(self.get_str(field))
        except ValueError:
            self.add(field=field, message=DATE_FORMAT_MESSAGE)
            return None

    def choice(self, field: str, enum_type: type[TEnum], *, label: str) -> TEnum | None:
        """Parse a required enum cell (case-insensitive).
        解析必填枚举单元格（不区分大小写）。

        Args:
            field: Header name.
                表头名。
            enum_type: Enum class.
                枚举类。
            label: Field label used in messages, e.g. "Role".
                消息中使用的字段名称，例如 "Role"。

        Returns:
            TEnum | None: Member, or None when blank/invalid.
                枚举成员；为空或无效时为 None。
        """
        codec = EnumCodec(enum_type)
        value = self.get_str(field)
        if not value:
            self.add(field=field, message=f"{label} is required")
            return None
        try:
            return codec.parse(value)
        except ValueError:
            self.add(
                field=field,
                message=f"Invalid {label.lower()}. Valid values: {', '.join(codec.choices)}",
            )
            return None
