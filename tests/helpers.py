"""
Builders for datamodel descriptors used across the test suite.
"""
from typing import Any, Dict, List, Optional

from zero_schema_generator.constants import FieldKinds
from zero_schema_generator.domain.models import (
    DatamodelDocument,
    EnumInfo,
    EnumValue,
    FieldInfo,
    ModelInfo,
)


def create_field(name: str, type: str = "String", **kwargs) -> FieldInfo:
    """Scalar field; pass is_id/is_required/db_name/... as keyword arguments."""
    kwargs.setdefault("kind", FieldKinds.SCALAR)
    return FieldInfo(name=name, type=type, **kwargs)


def create_id_field(name: str = "id", type: str = "String") -> FieldInfo:
    return create_field(name, type, is_id=True)


def create_enum_field(name: str, enum_name: str, **kwargs) -> FieldInfo:
    return FieldInfo(name=name, type=enum_name, kind=FieldKinds.ENUM, **kwargs)


def create_relation(
    name: str,
    target: str,
    relation_name: str,
    is_list: bool = False,
    from_fields: Optional[List[str]] = None,
    to_fields: Optional[List[str]] = None,
    is_required: bool = True,
) -> FieldInfo:
    return FieldInfo(
        name=name,
        type=target,
        kind=FieldKinds.OBJECT,
        is_list=is_list,
        is_required=is_required,
        relation_name=relation_name,
        relation_from_fields=list(from_fields or []),
        relation_to_fields=list(to_fields or []),
    )


def create_model(
    name: str,
    fields: List[FieldInfo],
    db_name: Optional[str] = None,
    primary_key: Optional[List[str]] = None,
) -> ModelInfo:
    return ModelInfo(name=name, fields=fields, db_name=db_name, primary_key=primary_key)


def create_enum(name: str, values: List[Any]) -> EnumInfo:
    """Enum from value names or (name, db_name) tuples."""
    enum_values = []
    for value in values:
        if isinstance(value, tuple):
            enum_values.append(EnumValue(name=value[0], db_name=value[1]))
        else:
            enum_values.append(EnumValue(name=value))
    return EnumInfo(name=name, values=enum_values)


def create_document(
    models: List[ModelInfo], enums: Optional[List[EnumInfo]] = None
) -> DatamodelDocument:
    return DatamodelDocument(models=models, enums=enums or [])


# --- Common schemas ---

def create_blog_document() -> DatamodelDocument:
    """User 1-n Post through authorId, plus a Role enum."""
    user = create_model(
        "User",
        [
            create_id_field(),
            create_field("email", is_unique=True),
            create_enum_field("role", "Role"),
            create_relation("posts", "Post", "UserPosts", is_list=True),
        ],
    )
    post = create_model(
        "Post",
        [
            create_id_field(),
            create_field("title"),
            create_field("authorId"),
            create_relation(
                "author", "User", "UserPosts", from_fields=["authorId"], to_fields=["id"]
            ),
        ],
    )
    return create_document([user, post], [create_enum("Role", ["ADMIN", ("USER", "user")])])


def create_many_to_many_document(
    post_id_type: str = "Int", category_id_type: str = "Int"
) -> DatamodelDocument:
    """Post n-m Category through Prisma's implicit join table."""
    post = create_model(
        "Post",
        [
            create_id_field(type=post_id_type),
            create_relation("categories", "Category", "PostToCategory", is_list=True),
        ],
    )
    category = create_model(
        "Category",
        [
            create_id_field(type=category_id_type),
            create_relation("posts", "Post", "PostToCategory", is_list=True),
        ],
    )
    return create_document([post, category])


def blog_dmmf() -> Dict[str, Any]:
    """The blog schema as a raw DMMF document."""
    return {
        "datamodel": {
            "models": [
                {
                    "name": "User",
                    "dbName": "users",
                    "fields": [
                        {"name": "id", "kind": "scalar", "type": "String", "isId": True,
                         "isRequired": True, "isList": False},
                        {"name": "firstName", "kind": "scalar", "type": "String",
                         "dbName": "first_name", "isRequired": False, "isList": False},
                        {"name": "role", "kind": "enum", "type": "Role",
                         "isRequired": True, "isList": False},
                        {"name": "posts", "kind": "object", "type": "Post", "isRequired": True,
                         "isList": True, "relationName": "UserPosts",
                         "relationFromFields": [], "relationToFields": []},
                    ],
                    "primaryKey": None,
                    "uniqueFields": [],
                    "uniqueIndexes": [],
                },
                {
                    "name": "Post",
                    "dbName": None,
                    "fields": [
                        {"name": "id", "kind": "scalar", "type": "Int", "isId": True,
                         "isRequired": True, "isList": False},
                        {"name": "title", "kind": "scalar", "type": "String",
                         "isRequired": True, "isList": False},
                        {"name": "authorId", "kind": "scalar", "type": "String",
                         "isRequired": True, "isList": False},
                        {"name": "author", "kind": "object", "type": "User", "isRequired": True,
                         "isList": False, "relationName": "UserPosts",
                         "relationFromFields": ["authorId"], "relationToFields": ["id"]},
                    ],
                    "primaryKey": None,
                    "uniqueFields": [],
                    "uniqueIndexes": [],
                },
            ],
            "enums": [
                {"name": "Role", "values": [{"name": "ADMIN", "dbName": None},
                                            {"name": "USER", "dbName": "user"}]},
            ],
        }
    }
