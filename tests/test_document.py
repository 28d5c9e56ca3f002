"""
Tests for DMMF document loading.
"""
import json

import pytest

from zero_schema_generator.constants import FieldKinds
from zero_schema_generator.document import load_document, parse_document
from zero_schema_generator.exceptions import SchemaDocumentError

from helpers import blog_dmmf


def test_parse_full_document():
    document = parse_document(blog_dmmf())

    assert [m.name for m in document.models] == ["User", "Post"]
    user = document.get_model_by_name("User")
    assert user.db_name == "users"
    assert user.source_table_name == "users"
    assert user.id_field.name == "id"
    assert user.get_field_by_name("firstName").db_name == "first_name"
    assert user.get_field_by_name("firstName").is_required is False
    assert user.get_field_by_name("role").kind == FieldKinds.ENUM

    post = document.get_model_by_name("Post")
    author = post.get_field_by_name("author")
    assert author.is_relation
    assert author.relation_from_fields == ["authorId"]
    assert author.relation_to_fields == ["id"]
    assert [f.name for f in post.relation_fields] == ["author"]

    assert document.enums[0].name == "Role"
    assert [v.value for v in document.enums[0].values] == ["ADMIN", "user"]


def test_parse_datamodel_section():
    document = parse_document(blog_dmmf()["datamodel"])
    assert len(document.models) == 2


def test_parse_composite_primary_key():
    data = {
        "models": [
            {
                "name": "Membership",
                "fields": [
                    {"name": "orgId", "type": "String"},
                    {"name": "userId", "type": "String"},
                ],
                "primaryKey": {"name": None, "fields": ["orgId", "userId"]},
            }
        ],
    }
    model = parse_document(data).models[0]
    assert model.primary_key == ["orgId", "userId"]
    assert model.primary_key_fields == ["orgId", "userId"]
    # Missing optional keys take DMMF defaults
    assert model.fields[0].kind == FieldKinds.SCALAR
    assert model.fields[0].is_required is True


def test_missing_models():
    with pytest.raises(SchemaDocumentError):
        parse_document({"datamodel": {"enums": []}})


def test_not_an_object():
    with pytest.raises(SchemaDocumentError):
        parse_document([])


def test_field_missing_type():
    data = {"models": [{"name": "User", "fields": [{"name": "id"}]}]}
    with pytest.raises(SchemaDocumentError) as exc_info:
        parse_document(data)
    assert exc_info.value.context["model"] == "User"


def test_load_document(tmp_path):
    path = tmp_path / "dmmf.json"
    path.write_text(json.dumps(blog_dmmf()), encoding="utf-8")
    document = load_document(path)
    assert [m.name for m in document.models] == ["User", "Post"]


def test_load_missing_document(tmp_path):
    with pytest.raises(SchemaDocumentError):
        load_document(tmp_path / "missing.json")


def test_load_invalid_json(tmp_path):
    path = tmp_path / "dmmf.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(SchemaDocumentError) as exc_info:
        load_document(path)
    assert exc_info.value.error_code == "DOCUMENT_ERROR"
