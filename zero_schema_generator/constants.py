"""
Centralized constants for Zero Schema Generator.

This module contains the configuration defaults, the Prisma-to-Zero type
table and the fixed names used when synthesizing implicit join tables.
"""

from typing import Dict


# =============================================================================
# CORE CONFIGURATION
# =============================================================================

class DefaultConfig:
    """Default configuration values."""

    GENERATOR_NAME = "zero"
    OUTPUT_DIR = "generated/zero"
    OUTPUT_FILE = "schema.ts"

    REMAP_TABLES_TO_CAMEL_CASE = False
    REMAP_COLUMNS_TO_CAMEL_CASE = False
    ENUM_AS_UNION = False
    PRETTIER = False
    RESOLVE_PRETTIER_CONFIG = True


# =============================================================================
# FIELD TYPE MAPPINGS
# =============================================================================

class ZeroColumnTypes:
    """Zero column type expressions."""

    STRING = "string()"
    BOOLEAN = "boolean()"
    NUMBER = "number()"
    JSON = "json()"

    # Parameterized by the enum name
    ENUMERATION_TEMPLATE = "enumeration<{enum_name}>()"

    DEFAULT = STRING


# Prisma scalar type -> Zero column type. DateTime is stored as a timestamp number.
ZERO_TYPE_MAP: Dict[str, str] = {
    "String": ZeroColumnTypes.STRING,
    "Boolean": ZeroColumnTypes.BOOLEAN,
    "Int": ZeroColumnTypes.NUMBER,
    "Float": ZeroColumnTypes.NUMBER,
    "DateTime": ZeroColumnTypes.NUMBER,
    "Json": ZeroColumnTypes.JSON,
    "BigInt": ZeroColumnTypes.NUMBER,
    "Decimal": ZeroColumnTypes.NUMBER,
}


class FieldKinds:
    """DMMF field kinds."""

    SCALAR = "scalar"
    OBJECT = "object"
    ENUM = "enum"
    UNSUPPORTED = "unsupported"


# =============================================================================
# NAMING AND RELATIONSHIPS
# =============================================================================

class ImplicitJoinTable:
    """Fixed layout of Prisma's implicit many-to-many join tables."""

    PREFIX = "_"
    NAME_SEPARATOR = "To"
    COLUMN_A = "A"
    COLUMN_B = "B"
    PRIMARY_KEY = (COLUMN_A, COLUMN_B)
    RELATIONSHIP_A = "modelA"
    RELATIONSHIP_B = "modelB"


# Appended to the camel-cased model name to build the TS table variable
ZERO_TABLE_SUFFIX = "Table"
RELATIONSHIPS_SUFFIX = "Relationships"

ZERO_PACKAGE = "@rocicorp/zero"
GENERATED_HEADER = "// Generated by Zero Schema Generator"
