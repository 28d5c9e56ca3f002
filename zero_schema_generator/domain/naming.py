"""
Naming convention utilities for Zero Schema Generator.

This module converts Prisma model, table and column identifiers into the
camelCase names used by the generated Zero schema. Word splitting follows
the usual camelCase rules so that converting an already camelCased name is
a no-op, except where a name has consecutive single-letter words ("A_B_C").
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .models import FieldInfo, ModelInfo
from ..constants import ZERO_TABLE_SUFFIX


_LEADING_UNDERSCORES_RE = re.compile(r"^_+")
# lowercase or digit followed by an uppercase letter: "userId" -> "user", "Id"
_SPLIT_LOWER_UPPER_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
# acronym followed by a word: "XMLHttp" -> "XML", "Http"
_SPLIT_UPPER_UPPER_RE = re.compile(r"(?<=[A-Z])(?=[A-Z][a-z])")
# any run of characters that are not letters or digits
_SEPARATOR_RE = re.compile(r"[\W_]+")

_WORD_BREAK = "\0"


def split_words(value: str) -> List[str]:
    """
    Split an identifier into its words.

    Example:
        >>> split_words("primary_key_part_1")
        ['primary', 'key', 'part', '1']
        >>> split_words("XMLHttpRequest")
        ['XML', 'Http', 'Request']
    """
    result = value.strip()
    result = _SPLIT_LOWER_UPPER_RE.sub(_WORD_BREAK, result)
    result = _SPLIT_UPPER_UPPER_RE.sub(_WORD_BREAK, result)
    result = _SEPARATOR_RE.sub(_WORD_BREAK, result)
    result = result.strip(_WORD_BREAK)
    if not result:
        return []
    return result.split(_WORD_BREAK)


def _capitalize_word(word: str) -> str:
    # A word starting with a digit keeps a separator so "part_1" stays readable
    if word[0].isdigit():
        return "_" + word[0] + word[1:].lower()
    return word[0].upper() + word[1:].lower()


def to_camel_case(name: str) -> str:
    """
    Convert an identifier to camelCase, preserving a leading underscore prefix.

    Args:
        name: The identifier to convert

    Returns:
        The camelCase identifier. The empty string maps to itself.

    Example:
        >>> to_camel_case("_user_profile")
        '_userProfile'
        >>> to_camel_case("UserProfile")
        'userProfile'
        >>> to_camel_case("primary_key_part_1")
        'primaryKeyPart_1'
    """
    if not isinstance(name, str):
        raise TypeError(f"Expected string, got {type(name).__name__}")

    prefix_match = _LEADING_UNDERSCORES_RE.match(name)
    prefix = prefix_match.group(0) if prefix_match else ""
    words = split_words(name[len(prefix):])
    if not words:
        return prefix

    return prefix + words[0].lower() + "".join(_capitalize_word(word) for word in words[1:])


@dataclass(frozen=True)
class NamingPolicy:
    """
    Remapping policy for table and column names.

    Built once per generation run from the configuration and passed to every
    component that produces names, so no component reads global state.
    """

    remap_tables: bool = False
    remap_columns: bool = False

    def table_name(self, name: str) -> str:
        """Table name as it appears in the generated schema."""
        if self.remap_tables:
            return to_camel_case(name)
        return name

    def column_name(self, name: str) -> str:
        """Column name as it appears in the generated schema."""
        if self.remap_columns:
            return to_camel_case(name)
        return name

    def resolve_column(self, field_info: FieldInfo) -> Tuple[str, Optional[str]]:
        """
        Resolve the emitted column key for a field.

        Precedence:
        1. An explicit @map name wins: the key is the field name and the
           @map name is the override. Case remapping is not applied.
        2. With column remapping on, a name that changes under camelCase
           becomes the key and the field name is the override.
        3. Otherwise the field name is used as is.

        Returns:
            (column key, original database column name or None)
        """
        if field_info.db_name:
            override = field_info.db_name if field_info.db_name != field_info.name else None
            return field_info.name, override

        remapped = self.column_name(field_info.name)
        if remapped != field_info.name:
            return remapped, field_info.name
        return field_info.name, None

    def resolve_table(self, model: ModelInfo) -> Tuple[str, Optional[str]]:
        """
        Resolve the emitted table name for a model.

        The source table name is the @@map name or the model name. With table
        remapping on and a name that changes under camelCase, the camelCased
        name is used and the source name is returned as the original.

        Returns:
            (table name, original table name or None)
        """
        return self.resolve_table_name(model.source_table_name)

    def resolve_table_name(self, source_name: str) -> Tuple[str, Optional[str]]:
        remapped = self.table_name(source_name)
        if remapped != source_name:
            return remapped, source_name
        return source_name, None

    @staticmethod
    def zero_table_name(model_name: str) -> str:
        """
        TS variable holding the table definition, e.g. IssueLabel -> issueLabelTable.

        Always camelCased: it is a code identifier, not a database name.
        """
        return to_camel_case(model_name) + ZERO_TABLE_SUFFIX
