"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: test_config.py
@DateTime: 2026-02-18
@Docs: Tests for config.py module.
config.py 模块测试。
"""

import pytest

from member_csv_import.config import ImportConfig, resolve_config


class TestImportConfig:
    """Tests for ImportConfig.
    ImportConfig 测试。
    """

    def test_defaults(self) -> None:
        """Defaults are applied / 使用默认值。"""
        cfg = ImportConfig()
        assert cfg.encoding == "utf-8"
        assert cfg.max_rows == 10000
        assert cfg.preview_sample_size == 100
        assert cfg.allowed_extensions == (".csv",)

    def test_max_upload_bytes(self) -> None:
        assert ImportConfig(max_upload_mb=2).max_upload_bytes == 2 * 1024 * 1024


class TestResolveConfig:
    """Tests for resolve_config.
    resolve_config 测试。
    """

    def test_env_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Environment variables are read / 读取环境变量。"""
        monkeypatch.setenv("MEMBER_IMPORT_MAX_ROWS", "25")
        monkeypatch.setenv("MEMBER_IMPORT_ENCODING", "gbk")
        monkeypatch.setenv("MEMBER_IMPORT_ALLOWED_EXTENSIONS", "csv, TXT")
        cfg = resolve_config()
        assert cfg.max_rows == 25
        assert cfg.encoding == "gbk"
        assert cfg.allowed_extensions == (".csv", ".txt")

    def test_params_override_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Parameters win over environment / 参数优先于环境变量。"""
        monkeypatch.setenv("MEMBER_IMPORT_MAX_ROWS", "25")
        assert resolve_config(max_rows=7).max_rows == 7

    def test_custom_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_PREVIEW_SAMPLE_SIZE", "3")
        assert resolve_config(env_prefix="APP").preview_sample_size == 3

    def test_zero_max_rows_allowed(self) -> None:
        """Zero disables the row limit / 0 表示不限行数。"""
        assert resolve_config(max_rows=0).max_rows == 0

    def test_negative_rejected(self) -> None:
        with pytest.raises(ValueError, match="max_rows"):
            resolve_config(max_rows=-1)

    def test_non_integer_env_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Non-integer env value raises / 非整数环境变量抛出异常。"""
        monkeypatch.setenv("MEMBER_IMPORT_MAX_UPLOAD_MB", "lots")
        with pytest.raises(ValueError, match="MEMBER_IMPORT_MAX_UPLOAD_MB"):
            resolve_config()

    def test_mime_types_normalized(self) -> None:
        cfg = resolve_config(allowed_mime_types=["Text/CSV", " text/csv "])
        assert cfg.allowed_mime_types == ("text/csv",)
