"""
Domain module for Zero Schema Generator.

This module contains the schema transformation engine, separated from the
host concerns (configuration, file I/O, code emission). Everything here is
pure: it reads the datamodel and builds new objects.
"""

from .models import (
    FieldInfo,
    ModelInfo,
    EnumInfo,
    EnumValue,
    DatamodelDocument,
    ColumnMapping,
    RelationshipLink,
    RelationshipInfo,
    RelationshipType,
    TransformedModel,
    TransformedSchema,
)

from .naming import (
    NamingPolicy,
    to_camel_case,
    split_words,
)

from .field_mapping import (
    FieldMapper,
    map_field_type,
)

from .context import (
    TransformationContext,
    build_column_name_map,
)

from .relationships import (
    RelationshipResolver,
    find_back_reference,
    get_implicit_join_table_name,
)

from .transformer import ModelTransformer

from .schema_hash import generate_schema_hash

__all__ = [
    # Input descriptors
    'FieldInfo',
    'ModelInfo',
    'EnumInfo',
    'EnumValue',
    'DatamodelDocument',

    # Intermediate representation
    'ColumnMapping',
    'RelationshipLink',
    'RelationshipInfo',
    'RelationshipType',
    'TransformedModel',
    'TransformedSchema',

    # Naming
    'NamingPolicy',
    'to_camel_case',
    'split_words',

    # Field mapping
    'FieldMapper',
    'map_field_type',

    # Context
    'TransformationContext',
    'build_column_name_map',

    # Relationships
    'RelationshipResolver',
    'find_back_reference',
    'get_implicit_join_table_name',

    # Models
    'ModelTransformer',

    # Hashing
    'generate_schema_hash',
]
