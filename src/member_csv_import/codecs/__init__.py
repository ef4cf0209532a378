"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: __init__.py
@DateTime: 2026-02-12
@Docs: Codec exports.
编解码器导出。
"""

from member_csv_import.codecs.base import Codec
from member_csv_import.codecs.builtins import DateCodec, DatetimeCodec, DecimalCodec, EnumCodec

__all__ = ["Codec", "DateCodec", "DatetimeCodec", "DecimalCodec", "EnumCodec"]
