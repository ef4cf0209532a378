"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: base.py
@DateTime: 2026-02-12
@Docs: Codec protocol for parsing/formatting cell values.
单元格值编解码器协议。
"""

from typing import Protocol, TypeVar

T = TypeVar("T")


class Codec(Protocol[T]):
    """Codec protocol for parsing and formatting values.
    用于解析与格式化值的协议。
    """

    def parse(self, value: str | None) -> T | None:
        """Parse a raw cell into a typed value.
        将原始单元格解析为类型化的值。

        Args:
            value: The raw string value to parse.
                要解析的原始字符串值。
        Returns:
            The parsed value, or None if the input is blank.
                解析后的值，如果输入为空则返回 None。
        Raises:
            ValueError: When the value cannot be parsed.
                无法解析时抛出。
        """
        ...

    def format(self, value: T | None) -> str:
        """Format a typed value into a cell string.
        将类型化的值格式化为单元格字符串。

        Args:
            value: The typed value to format.
                要格式化的类型化值。
        Returns:
            The formatted string, or an empty string if the value is None.
                格式化字符串，值为 None 时返回空字符串。
        """
        ...
