"""
Model transformation domain logic for Zero Schema Generator.

Converts one Prisma model into one Zero table: columns, primary key, table
name and relationships.
"""

import logging
from typing import Dict, List, Optional

from .context import TransformationContext
from .field_mapping import FieldMapper
from .models import ColumnMapping, ModelInfo, TransformedModel
from .relationships import RelationshipResolver
from ..exceptions import PrimaryKeyError


logger = logging.getLogger(__name__)


class ModelTransformer:
    """Transforms source models into fully resolved Zero tables."""

    def __init__(
        self,
        context: TransformationContext,
        field_mapper: Optional[FieldMapper] = None,
        relationship_resolver: Optional[RelationshipResolver] = None,
    ):
        self.context = context
        self.field_mapper = field_mapper or FieldMapper()
        self.relationship_resolver = relationship_resolver or RelationshipResolver(context)

    def transform(self, model: ModelInfo) -> TransformedModel:
        """
        Transform a single model.

        Raises:
            PrimaryKeyError: If the model has no primary key
            RelationshipError: If a relation field cannot be resolved
        """
        table_name, original_table_name = self.context.naming.resolve_table(model)

        transformed = TransformedModel(
            table_name=table_name,
            original_table_name=original_table_name,
            model_name=model.name,
            zero_table_name=self.context.naming.zero_table_name(model.name),
            columns=self.map_columns(model),
            primary_key=self.resolve_primary_key(model),
        )
        transformed.relationships = self.relationship_resolver.resolve_relationships(model)

        logger.debug(
            f"Mapped model {model.name} -> table {table_name} "
            f"({len(transformed.columns)} columns, {len(transformed.relationships)} relationships)"
        )
        return transformed

    def map_columns(self, model: ModelInfo) -> Dict[str, ColumnMapping]:
        """Map the scalar and enum fields of a model, in field order."""
        columns: Dict[str, ColumnMapping] = {}

        for field_info in model.fields:
            if field_info.is_relation:
                continue
            if field_info.is_list:
                # Zero has no array columns
                logger.debug(f"Skipping list field {model.name}.{field_info.name}")
                continue

            key, original_column_name = self.context.naming.resolve_column(field_info)
            columns[key] = self.field_mapper.map_field(field_info, original_column_name)

        return columns

    def resolve_primary_key(self, model: ModelInfo) -> List[str]:
        """
        Emitted primary key columns: @@id fields in declared order, else the @id field.

        Raises:
            PrimaryKeyError: If neither is declared
        """
        key_fields = model.primary_key_fields
        if not key_fields:
            raise PrimaryKeyError(f"No primary key found or mapped for {model.name}", model=model.name)
        return self.context.resolve_column_names(model.name, key_fields)
