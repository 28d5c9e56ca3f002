"""
Schema assembly for Zero Schema Generator.

This module orchestrates the transformation of a Prisma datamodel into the
intermediate representation consumed by the code emitter:

1. Excluded models are dropped.
2. Each remaining model is transformed (columns, primary key, table name,
   relationships).
3. Prisma's implicit many-to-many join tables are synthesized, once per
   relation.
4. Enums are passed through unchanged.

The transformation is a pure function of the document and the options: it
never modifies the document and keeps no state between calls.

Example:
    >>> from zero_schema_generator.mapper import transform_schema
    >>> schema = transform_schema(document, remap_tables=True)
    >>> [model.table_name for model in schema.models]
"""

import logging
from typing import Any, Iterable, List, Optional, Set, Tuple

from zero_schema_generator.constants import ImplicitJoinTable
from zero_schema_generator.domain.context import TransformationContext
from zero_schema_generator.domain.field_mapping import FieldMapper
from zero_schema_generator.domain.models import (
    ColumnMapping,
    DatamodelDocument,
    ModelInfo,
    RelationshipInfo,
    RelationshipType,
    TransformedModel,
    TransformedSchema,
)
from zero_schema_generator.domain.naming import NamingPolicy
from zero_schema_generator.domain.relationships import (
    find_back_reference,
    get_implicit_join_table_name,
    get_join_identity_field,
)
from zero_schema_generator.domain.transformer import ModelTransformer


logger = logging.getLogger(__name__)


def create_implicit_join_model(
    model: ModelInfo,
    other_model: ModelInfo,
    relation_name: Optional[str],
    context: TransformationContext,
    field_mapper: Optional[FieldMapper] = None,
) -> TransformedModel:
    """
    Build the Zero table for Prisma's hidden many-to-many join table.

    Column A points at the model whose name sorts first, column B at the
    other one. Table remapping only applies to the table name; A and B are
    fixed.

    Raises:
        ImplicitJoinError: If either model has no single @id field
    """
    field_mapper = field_mapper or FieldMapper()
    naming = context.naming

    join_table_name = get_implicit_join_table_name(model.name, other_model.name, relation_name)
    model_a, model_b = sorted([model, other_model], key=lambda m: m.name)

    id_field_a = get_join_identity_field(model_a, relation_name)
    id_field_b = get_join_identity_field(model_b, relation_name)

    table_name, original_table_name = naming.resolve_table_name(join_table_name)

    columns = {
        ImplicitJoinTable.COLUMN_A: ColumnMapping(type=field_mapper.get_column_type(id_field_a)),
        ImplicitJoinTable.COLUMN_B: ColumnMapping(type=field_mapper.get_column_type(id_field_b)),
    }
    relationships = {
        ImplicitJoinTable.RELATIONSHIP_A: RelationshipInfo.direct(
            RelationshipType.ONE,
            source_field=[ImplicitJoinTable.COLUMN_A],
            dest_field=context.resolve_column_names(model_a.name, [id_field_a.name]),
            dest_schema=naming.zero_table_name(model_a.name),
        ),
        ImplicitJoinTable.RELATIONSHIP_B: RelationshipInfo.direct(
            RelationshipType.ONE,
            source_field=[ImplicitJoinTable.COLUMN_B],
            dest_field=context.resolve_column_names(model_b.name, [id_field_b.name]),
            dest_schema=naming.zero_table_name(model_b.name),
        ),
    }

    return TransformedModel(
        table_name=table_name,
        original_table_name=original_table_name,
        model_name=join_table_name,
        zero_table_name=naming.zero_table_name(join_table_name),
        columns=columns,
        primary_key=list(ImplicitJoinTable.PRIMARY_KEY),
        relationships=relationships,
    )


def collect_implicit_join_models(
    models: List[ModelInfo], context: TransformationContext
) -> List[TransformedModel]:
    """
    Synthesize the join tables of all many-to-many relations between kept models.

    A join table is built from the side whose model name sorts first
    (ordinal comparison), so each relation yields exactly one table. Self
    relations are deduplicated by join table name.
    """
    join_models: List[TransformedModel] = []
    seen: Set[Tuple[str, str, str]] = set()

    for model in models:
        for field_info in model.relation_fields:
            if not field_info.is_list:
                continue
            target = context.get_model(field_info.type)
            if target is None or context.is_excluded(target.name):
                continue
            if model.name > target.name:
                continue

            back_reference = find_back_reference(model, field_info, target)
            if back_reference is None or not back_reference.is_list:
                continue

            join_table_name = get_implicit_join_table_name(
                model.name, target.name, field_info.relation_name
            )
            key = (model.name, target.name, join_table_name)
            if key in seen:
                continue
            seen.add(key)

            logger.debug(f"Synthesizing implicit join table {join_table_name}")
            join_models.append(
                create_implicit_join_model(model, target, field_info.relation_name, context)
            )

    return join_models


def transform_schema(
    document: DatamodelDocument,
    exclude_tables: Optional[Iterable[str]] = None,
    remap_tables: bool = False,
    remap_columns: bool = False,
) -> TransformedSchema:
    """
    Transform a datamodel into the Zero intermediate representation.

    Args:
        document: Source datamodel, left untouched
        exclude_tables: Model names to leave out, with every relation to them
        remap_tables: Convert table names to camelCase
        remap_columns: Convert column names to camelCase

    Returns:
        Models in document order, then implicit join tables, then the enums

    Raises:
        ZeroSchemaGeneratorError: On any structurally inconsistent input.
            Nothing is returned in that case.
    """
    naming = NamingPolicy(remap_tables=remap_tables, remap_columns=remap_columns)
    context = TransformationContext.build(document, naming, exclude_tables)

    kept_models = [m for m in document.models if not context.is_excluded(m.name)]
    for model in document.models:
        if context.is_excluded(model.name):
            logger.debug(f"Excluding model {model.name}")

    transformer = ModelTransformer(context)
    models = [transformer.transform(model) for model in kept_models]
    join_models = collect_implicit_join_models(kept_models, context)

    return TransformedSchema(
        models=models + join_models,
        enums=list(document.enums),
    )


def build_intermediate_representation(document: DatamodelDocument, config: Any) -> TransformedSchema:
    """
    Transform a datamodel using the generator configuration.

    Args:
        document: Source datamodel
        config: Validated configuration (GeneratorConfigSchema)

    Returns:
        The transformed schema
    """
    logger.info("Building intermediate representation using domain services...")
    schema = transform_schema(
        document,
        exclude_tables=config.exclude_tables,
        remap_tables=config.remap_tables_to_camel_case,
        remap_columns=config.remap_columns_to_camel_case,
    )
    logger.info(
        f"Intermediate representation built: {len(schema.models)} tables, {len(schema.enums)} enums"
    )
    return schema
