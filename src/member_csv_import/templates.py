"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: templates.py
@DateTime: 2026-02-17
@Docs: Sample and template files per entity type.
各实体类型的示例与模板文件。

Both are deterministic and start with the exact header row the importer
expects. The sample adds illustrative rows, the template is header-only.
两者均为确定性输出，且以导入器期望的表头开头；示例文件附带示例行，模板仅包含表头。
"""

from member_csv_import.entities import EXPECTED_HEADERS, SAMPLE_ROWS
from member_csv_import.enums import EntityType
from member_csv_import.serializers import CsvSerializer, FilePayload, Serializer

_serializer: Serializer = CsvSerializer(include_bom=True, line_ending="\n")
_plain_serializer: Serializer = CsvSerializer(include_bom=False, line_ending="\n")


def sample_filename(entity: EntityType) -> str:
    return f"{entity.plural}_sample.csv"


def template_filename(entity: EntityType) -> str:
    return f"{entity.value}_import_template.csv"


def sample_csv(entity: EntityType) -> str:
    """
    Sample CSV text (no BOM) for an entity type.
    实体类型的示例 CSV 文本（不含 BOM）。
    """
    return _plain_serializer.serialize(headers=EXPECTED_HEADERS[entity], rows=SAMPLE_ROWS[entity]).decode("utf-8")


def build_sample(entity: EntityType) -> FilePayload:
    """
    BOM-prefixed sample download.
    带 BOM 的示例文件下载。
    """
    return FilePayload(
        filename=sample_filename(entity),
        media_type=_serializer.media_type,
        content=_serializer.serialize(headers=EXPECTED_HEADERS[entity], rows=SAMPLE_ROWS[entity]),
    )


def build_template(entity: EntityType) -> FilePayload:
    return FilePayload(
        filename=template_filename(entity),
        media_type=_serializer.media_type,
        content=_serializer.serialize(headers=EXPECTED_HEADERS[entity], rows=()),
    )
