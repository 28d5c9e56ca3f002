"""
Loading of the Prisma DMMF document.

The generator consumes the DMMF as JSON, either the full document (with a
`datamodel` key) or just its datamodel section.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from zero_schema_generator.domain.models import DatamodelDocument, EnumInfo, ModelInfo
from zero_schema_generator.exceptions import SchemaDocumentError


logger = logging.getLogger(__name__)


def parse_document(data: Dict[str, Any]) -> DatamodelDocument:
    """
    Build a DatamodelDocument from a decoded DMMF dictionary.

    Raises:
        SchemaDocumentError: If a model, field or enum is missing required keys
    """
    if not isinstance(data, dict):
        raise SchemaDocumentError(
            f"DMMF document must be a JSON object, got {type(data).__name__}"
        )

    datamodel = data.get("datamodel", data)
    if not isinstance(datamodel, dict) or "models" not in datamodel:
        raise SchemaDocumentError("DMMF document has no 'models' list")

    raw_models = datamodel.get("models") or []
    raw_enums = datamodel.get("enums") or []
    if not isinstance(raw_models, list) or not isinstance(raw_enums, list):
        raise SchemaDocumentError("'models' and 'enums' must be lists")

    models = []
    for index, raw_model in enumerate(raw_models):
        model_name = raw_model.get("name") if isinstance(raw_model, dict) else None
        try:
            models.append(ModelInfo.from_dict(raw_model))
        except KeyError as e:
            raise SchemaDocumentError(
                f"Model at index {index} is missing required key {e}",
                model=model_name,
            ) from e
        except (TypeError, AttributeError) as e:
            raise SchemaDocumentError(
                f"Model at index {index} is malformed: {e}", model=model_name
            ) from e

    enums = []
    for index, raw_enum in enumerate(raw_enums):
        try:
            enums.append(EnumInfo.from_dict(raw_enum))
        except (KeyError, TypeError, AttributeError) as e:
            raise SchemaDocumentError(f"Enum at index {index} is malformed: {e}") from e

    logger.debug(f"Parsed DMMF document: {len(models)} models, {len(enums)} enums")
    return DatamodelDocument(models=models, enums=enums)


def load_document(path: Union[str, Path]) -> DatamodelDocument:
    """
    Read and parse a DMMF JSON file.

    Raises:
        SchemaDocumentError: If the file is missing, not JSON or malformed
    """
    document_path = Path(path)
    if not document_path.is_file():
        raise SchemaDocumentError(
            f"DMMF document not found: {document_path}",
            context={'path': str(document_path)},
        )

    try:
        with open(document_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise SchemaDocumentError(
            f"Error parsing DMMF JSON {document_path}: {e}",
            context={'path': str(document_path)},
        ) from e

    logger.debug(f"Loaded DMMF document from {document_path}")
    return parse_document(data)
