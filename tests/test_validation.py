"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: test_validation.py
@DateTime: 2026-02-18
@Docs: Tests for validation_core.py and validation_rules.py modules.
validation_core.py 与 validation_rules.py 模块测试。
"""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from member_csv_import.enums import UserRole
from member_csv_import.validation_core import ErrorCollector, RowContext
from member_csv_import.validation_rules import DATE_FORMAT_MESSAGE, RowValidator, is_email, parse_decimal

HEADERS = ("name", "email", "birthday", "role")


def _row(cells: Sequence[str], row_number: int = 2) -> RowValidator:
    return RowValidator(collector=ErrorCollector(), row_number=row_number, cells=cells, headers=HEADERS)


class TestErrorCollector:
    """Tests for ErrorCollector.
    ErrorCollector 测试。
    """

    def test_add(self) -> None:
        """Errors are recorded in order / 按顺序记录错误。"""
        ec = ErrorCollector()
        ec.add(row_number=2, field="name", message="required")
        ec.add(row_number=2, field="email", message="bad")
        assert [e.field for e in ec.errors] == ["name", "email"]
        assert ec.messages == ["required", "bad"]


class TestRowContext:
    """Tests for RowContext.
    RowContext 测试。
    """

    def test_get_by_position(self) -> None:
        """Cells are read by header position / 按表头位置读取单元格。"""
        ctx = RowContext(collector=ErrorCollector(), row_number=3, cells=[" a ", "b"], headers=("x", "y"))
        assert ctx.get_raw("x") == " a "
        assert ctx.get_str("x") == "a"

    def test_missing_trailing_cell(self) -> None:
        """Short rows read as empty / 短行缺失的单元格视为空。"""
        ctx = RowContext(collector=ErrorCollector(), row_number=3, cells=["a"], headers=("x", "y"))
        assert ctx.get_str("y") == ""

    def test_add_uses_row_number(self) -> None:
        ctx = RowContext(collector=ErrorCollector(), row_number=7, cells=[], headers=("x",))
        ctx.add(field="x", message="oops")
        assert not ctx.is_valid
        assert ctx.errors[0].row_number == 7

    def test_repeated_keys_visible_after_commit(self) -> None:
        """Keys reach later rows only once committed / 键仅在提交后对后续行可见。"""
        seen: dict[str, set[str]] = {}
        first = RowContext(collector=ErrorCollector(), row_number=2, cells=["Ann"], headers=HEADERS, seen=seen)
        assert not first.is_repeated("name", " Ann ")
        second = RowContext(collector=ErrorCollector(), row_number=3, cells=["ann"], headers=HEADERS, seen=seen)
        assert not second.is_repeated("name", "ann")
        first.commit_claims()
        third = RowContext(collector=ErrorCollector(), row_number=4, cells=["ANN"], headers=HEADERS, seen=seen)
        assert third.is_repeated("name", "ANN")
        assert not third.is_repeated("email", "ann")


class TestHelpers:
    """Tests for module helpers.
    模块辅助函数测试。
    """

    def test_is_email(self) -> None:
        assert is_email("john.doe@example.com")
        assert not is_email("john.doe@example")
        assert not is_email("no at sign")

    def test_parse_decimal(self) -> None:
        assert parse_decimal("2.5") == Decimal("2.5")
        assert parse_decimal("abc") is None


class TestRowValidator:
    """Tests for RowValidator field rules.
    RowValidator 字段规则测试。
    """

    def test_text_required(self) -> None:
        row = _row(["", "a@b.co", "", "ADMIN"])
        assert row.text("name", label="Name", required=True) is None
        assert row.collector.messages == ["Name is required"]

    def test_text_optional_blank(self) -> None:
        """Blank optional text is not an error / 可选文本为空不报错。"""
        row = _row(["", "a@b.co", "", "ADMIN"])
        assert row.text("name", label="Name") is None
        assert row.is_valid

    def test_text_max_length(self) -> None:
        row = _row(["x" * 11, "a@b.co", "", "ADMIN"])
        assert row.text("name", label="Name", max_length=10) is None
        assert row.collector.messages == ["Name must not exceed 10 characters"]

    def test_email(self) -> None:
        assert _row(["n", " a@b.co ", "", ""]).email("email") == "a@b.co"
        blank = _row(["n", "", "", ""])
        blank.email("email")
        assert blank.collector.messages == ["Email is required"]
        bad = _row(["n", "nope", "", ""])
        bad.email("email")
        assert bad.collector.messages == ["Invalid email format"]

    def test_optional_date(self) -> None:
        """Blank date is allowed, bad date is reported / 空日期允许，错误日期报告。"""
        assert _row(["n", "e", "", ""]).optional_date("birthday") is None
        assert _row(["n", "e", "1990-05-15", ""]).optional_date("birthday") == date(1990, 5, 15)
        bad = _row(["n", "e", "15/05/1990", ""])
        assert bad.optional_date("birthday") is None
        assert bad.collector.messages == [DATE_FORMAT_MESSAGE]

    def test_choice(self) -> None:
        """Enum cells are case-insensitive and required / 枚举单元格不区分大小写且必填。"""
        assert _row(["n", "e", "", "admin"]).choice("role", UserRole, label="Role") is UserRole.ADMIN
        blank = _row(["n", "e", "", ""])
        blank.choice("role", UserRole, label="Role")
        assert blank.collector.messages == ["Role is required"]
        bad = _row(["n", "e", "", "OWNER"])
        bad.choice("role", UserRole, label="Role")
        assert bad.collector.messages == ["Invalid role. Valid values: ADMIN, MEMBER"]

    def test_errors_accumulate(self) -> None:
        """Every failing field is reported / 所有失败字段都会报告。"""
        row = _row(["", "bad", "nope", ""])
        row.text("name", label="Name", required=True)
        row.email("email")
        row.optional_date("birthday")
        row.choice("role", UserRole, label="Role")
        assert [e.field for e in row.errors] == ["name", "email", "birthday", "role"]
