"""
Relationship resolution domain logic for Zero Schema Generator.

This module turns Prisma relation fields into Zero relationships. It covers
both sides of one-to-one and one-to-many relations (including composite
foreign keys and self relations) and implicit many-to-many relations, which
Zero expresses as a two-hop chain through Prisma's hidden join table.
"""

import logging
from typing import Dict, List, Optional, Tuple

from .context import TransformationContext
from .models import (
    FieldInfo,
    ModelInfo,
    RelationshipInfo,
    RelationshipLink,
    RelationshipType,
)
from ..constants import ImplicitJoinTable
from ..exceptions import ImplicitJoinError, PrimaryKeyError, RelationshipError


logger = logging.getLogger(__name__)


def get_implicit_join_table_name(
    model_name: str, other_model_name: str, relation_name: Optional[str] = None
) -> str:
    """
    Name of Prisma's implicit many-to-many join table.

    Example:
        >>> get_implicit_join_table_name("Post", "Category", "PostToCategory")
        '_PostToCategory'
        >>> get_implicit_join_table_name("Post", "Category")
        '_CategoryToPost'
    """
    if relation_name:
        return f"{ImplicitJoinTable.PREFIX}{relation_name}"
    first, second = sorted([model_name, other_model_name])
    return f"{ImplicitJoinTable.PREFIX}{first}{ImplicitJoinTable.NAME_SEPARATOR}{second}"


def find_back_reference(
    model: ModelInfo, field_info: FieldInfo, target: ModelInfo
) -> Optional[FieldInfo]:
    """
    Find the field on `target` completing the relation of `field_info`.

    It shares the relation name and points back at `model`. In a self
    relation the field itself is skipped so `children` finds `parent`.
    """
    for candidate in target.fields:
        if model.name == target.name and candidate.name == field_info.name:
            continue
        if candidate.relation_name == field_info.relation_name and candidate.type == model.name:
            return candidate
    return None


def is_first_join_side(
    model: ModelInfo, field_info: FieldInfo, target: ModelInfo, back_reference: FieldInfo
) -> bool:
    """
    Check if `model` owns join column A for this many-to-many relation.

    The model whose name sorts first (ordinal comparison) owns A. In a self
    relation both sides are the same model, so the field names decide.
    """
    if model.name == target.name:
        return field_info.name < back_reference.name
    return model.name < target.name


def get_join_identity_field(model: ModelInfo, relation_name: Optional[str]) -> FieldInfo:
    """
    The @id field a join column points at.

    Raises:
        ImplicitJoinError: If the model has no single @id field
    """
    id_field = model.id_field
    if id_field is None:
        raise ImplicitJoinError(
            f"Implicit relation {relation_name}: Model {model.name} has no @id field.",
            relation_name=relation_name,
            source_model=model.name,
        )
    return id_field


class RelationshipResolver:
    """
    Resolves the relation fields of a model into Zero relationships.

    Relations pointing at excluded models are dropped. Every key in the
    result is an emitted column name, so the code emitter never has to
    remap anything.
    """

    def __init__(self, context: TransformationContext):
        """Initialize with the run's read-only context."""
        self.context = context

    def resolve_relationships(self, model: ModelInfo) -> Dict[str, RelationshipInfo]:
        """
        Resolve all relation fields of a model.

        Args:
            model: Source model

        Returns:
            Relationship name -> relationship, in field order
        """
        relationships: Dict[str, RelationshipInfo] = {}

        for field_info in model.relation_fields:
            relationship = self.resolve_field(model, field_info)
            if relationship is not None:
                relationships[field_info.name] = relationship

        return relationships

    def resolve_field(self, model: ModelInfo, field_info: FieldInfo) -> Optional[RelationshipInfo]:
        """
        Resolve a single relation field.

        Returns:
            The relationship, or None if the target model is excluded

        Raises:
            RelationshipError: If the relation cannot be resolved
        """
        target = self.context.get_model(field_info.type)
        if target is None:
            raise RelationshipError(
                f"Target model {field_info.type} not found for relationship {field_info.name}",
                source_model=model.name,
                target_model=field_info.type,
                field=field_info.name,
            )

        if self.context.is_excluded(target.name):
            logger.debug(
                f"Skipping relation {model.name}.{field_info.name}: target model {target.name} is excluded"
            )
            return None

        back_reference = find_back_reference(model, field_info, target)

        if field_info.is_list:
            if back_reference is not None and back_reference.is_list:
                return self._resolve_many_to_many(model, field_info, target, back_reference)
            return self._resolve_one_to_many(model, field_info, target, back_reference)

        return self._resolve_to_one(model, field_info, target, back_reference)

    # --- Cardinality cases ---

    def _resolve_one_to_many(
        self,
        model: ModelInfo,
        field_info: FieldInfo,
        target: ModelInfo,
        back_reference: Optional[FieldInfo],
    ) -> RelationshipInfo:
        """Parent side of a one-to-many: our key -> child's foreign key."""
        if back_reference is None or not back_reference.relation_from_fields:
            raise RelationshipError(
                f"Relation {model.name}.{field_info.name} has no foreign key on {target.name}",
                source_model=model.name,
                target_model=target.name,
                field=field_info.name,
            )

        source_fields = self._primary_key_fields(model)
        dest_fields = list(back_reference.relation_from_fields)

        return self._direct(
            RelationshipType.MANY, model, field_info, target, source_fields, dest_fields
        )

    def _resolve_to_one(
        self,
        model: ModelInfo,
        field_info: FieldInfo,
        target: ModelInfo,
        back_reference: Optional[FieldInfo],
    ) -> RelationshipInfo:
        """Either side of a one-to-one, or the child side of a one-to-many."""
        if field_info.relation_from_fields:
            # Foreign key lives on this model
            source_fields = list(field_info.relation_from_fields)
            dest_fields = list(field_info.relation_to_fields) or self._primary_key_fields(target)
        elif back_reference is not None and back_reference.relation_from_fields:
            # Foreign key lives on the target
            source_fields = list(back_reference.relation_to_fields) or self._primary_key_fields(model)
            dest_fields = list(back_reference.relation_from_fields)
        else:
            raise RelationshipError(
                f"Relation {model.name}.{field_info.name} declares no foreign key on either side",
                source_model=model.name,
                target_model=target.name,
                field=field_info.name,
            )

        return self._direct(
            RelationshipType.ONE, model, field_info, target, source_fields, dest_fields
        )

    def _resolve_many_to_many(
        self,
        model: ModelInfo,
        field_info: FieldInfo,
        target: ModelInfo,
        back_reference: FieldInfo,
    ) -> RelationshipInfo:
        """Chain model -> implicit join table -> target."""
        relation_name = field_info.relation_name
        join_table_name = get_implicit_join_table_name(model.name, target.name, relation_name)

        source_id = get_join_identity_field(model, relation_name)
        target_id = get_join_identity_field(target, relation_name)

        if is_first_join_side(model, field_info, target, back_reference):
            own_column, other_column = ImplicitJoinTable.COLUMN_A, ImplicitJoinTable.COLUMN_B
        else:
            own_column, other_column = ImplicitJoinTable.COLUMN_B, ImplicitJoinTable.COLUMN_A

        naming = self.context.naming
        chain = [
            RelationshipLink(
                source_field=self.context.resolve_column_names(model.name, [source_id.name]),
                dest_field=[own_column],
                dest_schema=naming.zero_table_name(join_table_name),
            ),
            RelationshipLink(
                source_field=[other_column],
                dest_field=self.context.resolve_column_names(target.name, [target_id.name]),
                dest_schema=naming.zero_table_name(target.name),
            ),
        ]
        logger.debug(
            f"Resolved {model.name}.{field_info.name} as many-to-many through {join_table_name}"
        )
        return RelationshipInfo(relationship_type=RelationshipType.MANY, chain=chain)

    # --- Helpers ---

    def _primary_key_fields(self, model: ModelInfo) -> List[str]:
        fields = model.primary_key_fields
        if not fields:
            raise PrimaryKeyError(f"No primary key found or mapped for {model.name}", model=model.name)
        return fields

    def _direct(
        self,
        relationship_type: RelationshipType,
        model: ModelInfo,
        field_info: FieldInfo,
        target: ModelInfo,
        source_fields: List[str],
        dest_fields: List[str],
    ) -> RelationshipInfo:
        source_columns, dest_columns = self._remap_keys(model, target, source_fields, dest_fields)

        if not source_columns or len(source_columns) != len(dest_columns):
            raise RelationshipError(
                f"Relation {model.name}.{field_info.name} links {len(source_columns)} column(s) "
                f"to {len(dest_columns)} column(s)",
                source_model=model.name,
                target_model=target.name,
                field=field_info.name,
            )

        return RelationshipInfo.direct(
            relationship_type,
            source_field=source_columns,
            dest_field=dest_columns,
            dest_schema=self.context.naming.zero_table_name(target.name),
        )

    def _remap_keys(
        self,
        model: ModelInfo,
        target: ModelInfo,
        source_fields: List[str],
        dest_fields: List[str],
    ) -> Tuple[List[str], List[str]]:
        return (
            self.context.resolve_column_names(model.name, source_fields),
            self.context.resolve_column_names(target.name, dest_fields),
        )
