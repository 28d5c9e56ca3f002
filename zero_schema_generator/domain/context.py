"""
Per-run transformation context.

Holds the read-only lookups shared by the model transformer and the
relationship resolver: the model index, the resolved column names of every
model and the naming policy. Built once per transformation.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional

from .models import DatamodelDocument, ModelInfo
from .naming import NamingPolicy
from ..exceptions import SchemaDocumentError


logger = logging.getLogger(__name__)


def build_column_name_map(model: ModelInfo, naming: NamingPolicy) -> Dict[str, str]:
    """
    Map every column field of a model to its emitted column key.

    Relation fields and list fields are not columns and are left out.

    Raises:
        SchemaDocumentError: If two fields resolve to the same column key
    """
    column_names: Dict[str, str] = {}
    used_keys: Dict[str, str] = {}

    for model_field in model.fields:
        if model_field.is_relation or model_field.is_list:
            continue
        key, _ = naming.resolve_column(model_field)
        if key in used_keys:
            raise SchemaDocumentError(
                f"Fields '{used_keys[key]}' and '{model_field.name}' of model '{model.name}' "
                f"both map to column '{key}'",
                model=model.name,
                field=model_field.name,
                suggestions=[
                    "Rename one of the fields",
                    "Disable remapColumnsToCamelCase for this schema",
                ],
            )
        used_keys[key] = model_field.name
        column_names[model_field.name] = key

    return column_names


@dataclass(frozen=True)
class TransformationContext:
    """Read-only lookups for one transformation run."""

    naming: NamingPolicy
    models: Mapping[str, ModelInfo]
    column_names: Mapping[str, Mapping[str, str]]
    excluded_models: FrozenSet[str] = frozenset()

    @classmethod
    def build(
        cls,
        document: DatamodelDocument,
        naming: NamingPolicy,
        exclude_tables: Optional[Iterable[str]] = None,
    ) -> "TransformationContext":
        """
        Index the document.

        Args:
            document: Input datamodel, never modified
            naming: Remapping policy for this run
            exclude_tables: Model names to leave out of the output
        """
        excluded = frozenset(exclude_tables or ())

        # Excluded models are indexed (relations to them must still be recognized)
        # but never validated or mapped
        models: Dict[str, ModelInfo] = {}
        for model in document.models:
            if model.name in models:
                if model.name in excluded:
                    continue
                raise SchemaDocumentError(
                    f"Model '{model.name}' is declared more than once", model=model.name
                )
            models[model.name] = model

        unknown = sorted(excluded - models.keys())
        if unknown:
            logger.warning(f"excludeTables names unknown models: {', '.join(unknown)}")

        column_names = {
            model.name: MappingProxyType(build_column_name_map(model, naming))
            for model in document.models
            if model.name not in excluded
        }

        return cls(
            naming=naming,
            models=MappingProxyType(models),
            column_names=MappingProxyType(column_names),
            excluded_models=excluded,
        )

    def get_model(self, name: str) -> Optional[ModelInfo]:
        return self.models.get(name)

    def is_excluded(self, model_name: str) -> bool:
        return model_name in self.excluded_models

    def resolve_column_names(self, model_name: str, field_names: Iterable[str]) -> List[str]:
        """
        Map source field names of a model to emitted column keys, keeping order.

        Names that are not columns of the model are returned unchanged.
        """
        column_names = self.column_names.get(model_name, {})
        return [column_names.get(name, name) for name in field_names]
