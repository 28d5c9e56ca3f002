"""
Field mapping domain logic for Zero Schema Generator.

Maps scalar and enum Prisma fields to Zero column type expressions.
"""

import logging
from typing import Optional

from .models import FieldInfo, ColumnMapping
from ..constants import ZERO_TYPE_MAP, ZeroColumnTypes


logger = logging.getLogger(__name__)


class FieldMapper:
    """
    Maps a Prisma field to a Zero column mapping.

    List fields are not supported by Zero columns; callers filter them out
    before mapping.
    """

    def __init__(self, type_map=None):
        """Initialize field mapper with an optional override of the type table."""
        self.type_map = dict(ZERO_TYPE_MAP if type_map is None else type_map)

    def map_field(
        self, field_info: FieldInfo, original_column_name: Optional[str] = None
    ) -> ColumnMapping:
        """
        Map a field to its column mapping.

        Args:
            field_info: Scalar or enum field
            original_column_name: Database column restored via .from(), as
                resolved by NamingPolicy.resolve_column

        Returns:
            Column mapping with type, optionality and the given override
        """
        if field_info.is_list:
            raise ValueError(f"List field '{field_info.name}' cannot be mapped to a column")

        return ColumnMapping(
            type=self.get_column_type(field_info),
            is_optional=not field_info.is_required,
            original_column_name=original_column_name,
        )

    def get_column_type(self, field_info: FieldInfo) -> str:
        """Get the Zero type expression for a field."""
        if field_info.is_enum:
            return ZeroColumnTypes.ENUMERATION_TEMPLATE.format(enum_name=field_info.type)

        column_type = self.type_map.get(field_info.type)
        if column_type is None:
            logger.debug(
                f"Unknown type '{field_info.type}' on field '{field_info.name}', using {ZeroColumnTypes.DEFAULT}"
            )
            return ZeroColumnTypes.DEFAULT
        return column_type


def map_field_type(field_info: FieldInfo) -> ColumnMapping:
    """Map a field using the default type table."""
    return FieldMapper().map_field(field_info)
