"""
Tests for the exception hierarchy.
"""
import unittest

from zero_schema_generator.exceptions import (
    CodeGenerationError,
    ConfigurationError,
    ImplicitJoinError,
    PrimaryKeyError,
    RelationshipError,
    SchemaDocumentError,
    ZeroSchemaGeneratorError,
)


class TestExceptions(unittest.TestCase):

    def test_hierarchy(self):
        for error_class in (
            ConfigurationError,
            SchemaDocumentError,
            PrimaryKeyError,
            RelationshipError,
            CodeGenerationError,
        ):
            self.assertTrue(issubclass(error_class, ZeroSchemaGeneratorError))
        self.assertTrue(issubclass(ImplicitJoinError, RelationshipError))

    def test_str_includes_code_context_and_suggestions(self):
        error = RelationshipError(
            "Target model Ghost not found", source_model="Post", target_model="Ghost", field="ghost"
        )
        text = str(error)
        self.assertTrue(text.startswith("Target model Ghost not found"))
        self.assertIn("Error Code: RELATIONSHIP_ERROR", text)
        self.assertIn("  target_model: Ghost", text)
        self.assertIn("Suggestions:", text)

    def test_implicit_join_error(self):
        error = ImplicitJoinError(
            "Model Tag has no @id field.", relation_name="PostToTag", source_model="Tag"
        )
        self.assertEqual(error.error_code, "IMPLICIT_JOIN_ERROR")
        self.assertEqual(error.context, {"relation_name": "PostToTag", "source_model": "Tag"})

    def test_custom_suggestions(self):
        error = PrimaryKeyError("No primary key", model="Log", suggestions=["Add an @id"])
        self.assertEqual(error.suggestions, ["Add an @id"])
        self.assertEqual(error.context, {"model": "Log"})
