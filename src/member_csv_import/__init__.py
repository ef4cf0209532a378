"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: __init__.py
@DateTime: 2026-02-18
@Docs: Package exports for member_csv_import.
member_csv_import 包导出定义。
"""

import logging

from member_csv_import.config import ImportConfig, resolve_config
from member_csv_import.entities import Repositories, build_import_spec
from member_csv_import.enums import EntityType
from member_csv_import.exceptions import ExportError, FileFormatError, ImportExportError, PersistenceError
from member_csv_import.exporter import Exporter
from member_csv_import.importer import CsvImportEngine, EntityImportSpec
from member_csv_import.ledger import ImportResult
from member_csv_import.parse import ParsedTable, parse_csv_rows, read_table, validate_headers
from member_csv_import.schemas import FieldError, ImportResultResponse, PreviewResult, PreviewRow
from member_csv_import.serializers import FilePayload
from member_csv_import.service import MemberImportService
from member_csv_import.templates import build_sample, build_template, sample_csv
from member_csv_import.unit_of_work import SqlAlchemyUnitOfWork

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "CsvImportEngine",
    "EntityImportSpec",
    "EntityType",
    "ExportError",
    "Exporter",
    "FieldError",
    "FileFormatError",
    "FilePayload",
    "ImportConfig",
    "ImportExportError",
    "ImportResult",
    "ImportResultResponse",
    "MemberImportService",
    "ParsedTable",
    "PersistenceError",
    "PreviewResult",
    "PreviewRow",
    "Repositories",
    "SqlAlchemyUnitOfWork",
    "build_import_spec",
    "build_sample",
    "build_template",
    "parse_csv_rows",
    "read_table",
    "resolve_config",
    "sample_csv",
    "validate_headers",
]
