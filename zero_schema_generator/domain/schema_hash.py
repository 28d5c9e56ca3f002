"""
Structural hash of a datamodel.

Only the parts of the datamodel that change the generated schema are hashed,
so documentation or formatting changes in the Prisma schema keep the hash.
"""

import hashlib
import json
from typing import Any, Dict, List

from .models import EnumInfo, ModelInfo


def _model_structure(model: ModelInfo) -> Dict[str, Any]:
    return {
        "name": model.name,
        "dbName": model.db_name,
        "fields": [
            {
                "name": f.name,
                "type": f.type,
                "isRequired": f.is_required,
                "isList": f.is_list,
                "relationName": f.relation_name,
                "relationFromFields": f.relation_from_fields,
                "relationToFields": f.relation_to_fields,
                "default": f.default,
                "unique": f.is_unique,
            }
            for f in model.fields
        ],
        "primaryKey": model.primary_key,
        "uniqueFields": model.unique_fields,
        "uniqueIndexes": model.unique_indexes,
    }


def generate_schema_hash(models: List[ModelInfo], enums: List[EnumInfo]) -> str:
    """
    SHA-256 hex digest of the structural elements of models and enums.

    Args:
        models: Source models in document order
        enums: Source enums in document order

    Returns:
        64 character hex string
    """
    structure = {
        "models": [_model_structure(model) for model in models],
        "enums": [
            {
                "name": enum.name,
                "values": [{"name": v.name, "dbName": v.db_name} for v in enum.values],
            }
            for enum in enums
        ],
    }
    payload = json.dumps(structure, separators=(",", ":"), ensure_ascii=False, default=str)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()
