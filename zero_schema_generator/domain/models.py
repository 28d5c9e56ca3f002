"""
Core domain models for Zero Schema Generator.

Two groups of models live here:

- Input descriptors (FieldInfo, ModelInfo, EnumInfo, DatamodelDocument)
  mirroring the Prisma DMMF datamodel. They are built by the document loader
  and treated as read-only by the transformation.
- The intermediate representation (ColumnMapping, RelationshipInfo,
  TransformedModel, TransformedSchema) produced by the transformation and
  consumed by the code emitter. Every name and key in it is final.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional
from enum import Enum

from ..constants import FieldKinds


class RelationshipType(Enum):
    """Cardinality of a Zero relationship."""

    ONE = "one"
    MANY = "many"


# =============================================================================
# INPUT DESCRIPTORS
# =============================================================================

@dataclass
class FieldInfo:
    """
    A field of a Prisma model.

    Scalar and enum fields become columns; fields with a relation name are
    relation fields and become relationships.
    """

    name: str
    type: str
    kind: str = FieldKinds.SCALAR
    db_name: Optional[str] = None
    is_required: bool = True
    is_list: bool = False
    is_id: bool = False
    is_unique: bool = False
    relation_name: Optional[str] = None
    relation_from_fields: List[str] = field(default_factory=list)
    relation_to_fields: List[str] = field(default_factory=list)
    default: Optional[Any] = None

    @property
    def is_relation(self) -> bool:
        """Check if this field points at another model."""
        return bool(self.relation_name)

    @property
    def is_enum(self) -> bool:
        return self.kind == FieldKinds.ENUM

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FieldInfo":
        """Build from a DMMF field dictionary."""
        return cls(
            name=data["name"],
            type=data["type"],
            kind=data.get("kind") or FieldKinds.SCALAR,
            db_name=data.get("dbName"),
            is_required=bool(data.get("isRequired", True)),
            is_list=bool(data.get("isList", False)),
            is_id=bool(data.get("isId", False)),
            is_unique=bool(data.get("isUnique", False)),
            relation_name=data.get("relationName"),
            relation_from_fields=list(data.get("relationFromFields") or []),
            relation_to_fields=list(data.get("relationToFields") or []),
            default=data.get("default"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'name': self.name,
            'type': self.type,
            'kind': self.kind,
            'db_name': self.db_name,
            'is_required': self.is_required,
            'is_list': self.is_list,
            'is_id': self.is_id,
            'is_unique': self.is_unique,
            'relation_name': self.relation_name,
            'relation_from_fields': list(self.relation_from_fields),
            'relation_to_fields': list(self.relation_to_fields),
            'default': self.default,
        }


@dataclass
class ModelInfo:
    """A Prisma model with its fields and key declarations."""

    name: str
    fields: List[FieldInfo] = field(default_factory=list)
    db_name: Optional[str] = None
    primary_key: Optional[List[str]] = None  # @@id([...])
    unique_fields: List[List[str]] = field(default_factory=list)
    unique_indexes: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def source_table_name(self) -> str:
        """Database table name: @@map value or the model name."""
        return self.db_name or self.name

    @property
    def id_field(self) -> Optional[FieldInfo]:
        """The single @id field, if any."""
        for model_field in self.fields:
            if model_field.is_id:
                return model_field
        return None

    @property
    def primary_key_fields(self) -> List[str]:
        """Declared composite key, else the @id field, else empty."""
        if self.primary_key:
            return list(self.primary_key)
        id_field = self.id_field
        return [id_field.name] if id_field else []

    @property
    def relation_fields(self) -> List[FieldInfo]:
        return [f for f in self.fields if f.is_relation]

    def get_field_by_name(self, name: str) -> Optional[FieldInfo]:
        """Get a field by name."""
        for model_field in self.fields:
            if model_field.name == name:
                return model_field
        return None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ModelInfo":
        """Build from a DMMF model dictionary."""
        primary_key = data.get("primaryKey")
        return cls(
            name=data["name"],
            db_name=data.get("dbName"),
            fields=[FieldInfo.from_dict(f) for f in data.get("fields") or []],
            primary_key=list(primary_key["fields"]) if primary_key else None,
            unique_fields=[list(u) for u in data.get("uniqueFields") or []],
            unique_indexes=list(data.get("uniqueIndexes") or []),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'name': self.name,
            'db_name': self.db_name,
            'fields': [f.to_dict() for f in self.fields],
            'primary_key': list(self.primary_key) if self.primary_key else None,
            'unique_fields': [list(u) for u in self.unique_fields],
            'unique_indexes': list(self.unique_indexes),
        }


@dataclass
class EnumValue:
    name: str
    db_name: Optional[str] = None

    @property
    def value(self) -> str:
        """Value stored in the database."""
        return self.db_name or self.name


@dataclass
class EnumInfo:
    """A Prisma enum. Passed through the transformation unchanged."""

    name: str
    values: List[EnumValue] = field(default_factory=list)
    db_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EnumInfo":
        return cls(
            name=data["name"],
            values=[
                EnumValue(name=v["name"], db_name=v.get("dbName"))
                for v in data.get("values") or []
            ],
            db_name=data.get("dbName"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'values': [{'name': v.name, 'db_name': v.db_name} for v in self.values],
            'db_name': self.db_name,
        }


@dataclass
class DatamodelDocument:
    """The datamodel section of a DMMF document."""

    models: List[ModelInfo] = field(default_factory=list)
    enums: List[EnumInfo] = field(default_factory=list)

    def get_model_by_name(self, name: str) -> Optional[ModelInfo]:
        """Get a model by name."""
        for model in self.models:
            if model.name == name:
                return model
        return None


# =============================================================================
# INTERMEDIATE REPRESENTATION
# =============================================================================

@dataclass
class ColumnMapping:
    """
    A column of a generated Zero table.

    original_column_name is only set when the emitted key differs from the
    real database column, and becomes a `.from(...)` call.
    """

    type: str
    is_optional: bool = False
    original_column_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        data: Dict[str, Any] = {'type': self.type, 'is_optional': self.is_optional}
        if self.original_column_name is not None:
            data['original_column_name'] = self.original_column_name
        return data


@dataclass
class RelationshipLink:
    """One hop of a relationship: local columns -> columns of dest_schema."""

    source_field: List[str]
    dest_field: List[str]
    dest_schema: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'source_field': list(self.source_field),
            'dest_field': list(self.dest_field),
            'dest_schema': self.dest_schema,
        }


@dataclass
class RelationshipInfo:
    """
    A Zero relationship.

    Either a direct link or, for many-to-many, a chain of exactly two links
    through the implicit join table.
    """

    relationship_type: RelationshipType
    link: Optional[RelationshipLink] = None
    chain: Optional[List[RelationshipLink]] = None

    def __post_init__(self):
        """Post-initialization validation."""
        if (self.link is None) == (self.chain is None):
            raise ValueError("A relationship has either a direct link or a chain, not both")
        if self.chain is not None and len(self.chain) != 2:
            raise ValueError("A relationship chain has exactly two links")

    @classmethod
    def direct(
        cls,
        relationship_type: RelationshipType,
        source_field: List[str],
        dest_field: List[str],
        dest_schema: str,
    ) -> "RelationshipInfo":
        return cls(
            relationship_type=relationship_type,
            link=RelationshipLink(source_field, dest_field, dest_schema),
        )

    @property
    def is_chain(self) -> bool:
        return self.chain is not None

    @property
    def links(self) -> List[RelationshipLink]:
        """All links in traversal order."""
        return list(self.chain) if self.chain is not None else [self.link]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        data: Dict[str, Any] = {'type': self.relationship_type.value}
        if self.chain is not None:
            data['chain'] = [link.to_dict() for link in self.chain]
        else:
            data.update(self.link.to_dict())
        return data


@dataclass
class TransformedModel:
    """
    A fully resolved Zero table.

    This is what the emitter renders: names, keys and relationships are final.
    """

    table_name: str
    model_name: str
    zero_table_name: str
    columns: Dict[str, ColumnMapping] = field(default_factory=dict)
    primary_key: List[str] = field(default_factory=list)
    relationships: Dict[str, RelationshipInfo] = field(default_factory=dict)
    original_table_name: Optional[str] = None

    @property
    def has_relationships(self) -> bool:
        return bool(self.relationships)

    @property
    def relationship_types(self) -> List[str]:
        """Relationship builders used by this model, in 'one', 'many' order."""
        used = {rel.relationship_type for rel in self.relationships.values()}
        return [t.value for t in RelationshipType if t in used]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'table_name': self.table_name,
            'original_table_name': self.original_table_name,
            'model_name': self.model_name,
            'zero_table_name': self.zero_table_name,
            'columns': {name: col.to_dict() for name, col in self.columns.items()},
            'relationships': {
                name: rel.to_dict() for name, rel in self.relationships.items()
            },
            'primary_key': list(self.primary_key),
        }


@dataclass
class TransformedSchema:
    """Result of the transformation: models followed by join models, plus enums."""

    models: List[TransformedModel] = field(default_factory=list)
    enums: List[EnumInfo] = field(default_factory=list)

    @property
    def has_relationships(self) -> bool:
        return any(model.has_relationships for model in self.models)

    def get_model_by_name(self, model_name: str) -> Optional[TransformedModel]:
        """Get a transformed model by its source model name."""
        for model in self.models:
            if model.model_name == model_name:
                return model
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'models': [model.to_dict() for model in self.models],
            'enums': [enum.to_dict() for enum in self.enums],
        }
