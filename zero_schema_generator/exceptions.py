"""
Custom exception hierarchy for Zero Schema Generator.

This module provides the exception system used across the generator. Every
error carries context about where it happened and recovery suggestions so
the CLI can surface it verbatim.
"""

from typing import Dict, Any, Optional, List


class ZeroSchemaGeneratorError(Exception):
    """
    Base exception for all Zero Schema Generator errors.

    Provides rich context and error recovery guidance.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        error_code: Optional[str] = None
    ):
        """
        Initialize the exception with context and recovery suggestions.

        Args:
            message: Human-readable error message
            context: Additional context about where/why the error occurred
            suggestions: List of potential solutions or next steps
            error_code: Unique error code for programmatic handling
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        self.error_code = error_code

    def __str__(self) -> str:
        """Return formatted error message with context."""
        lines = [super().__str__()]

        if self.error_code:
            lines.append(f"Error Code: {self.error_code}")

        if self.context:
            lines.append("Context:")
            for key, value in self.context.items():
                lines.append(f"  {key}: {value}")

        if self.suggestions:
            lines.append("Suggestions:")
            for suggestion in self.suggestions:
                lines.append(f"  • {suggestion}")

        return "\n".join(lines)


class ConfigurationError(ZeroSchemaGeneratorError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, config_file: str = None, **kwargs):
        context = kwargs.get('context', {})
        if config_file:
            context['config_file'] = config_file

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check the configuration file syntax",
                "Verify option names match the documented generator options",
                "Make sure excludeTables is a list of model names",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="CONFIG_ERROR"
        )


class SchemaDocumentError(ZeroSchemaGeneratorError):
    """Raised when the datamodel document cannot be read or is malformed."""

    def __init__(self, message: str, model: str = None, field: str = None, **kwargs):
        context = kwargs.get('context', {})
        if model:
            context['model'] = model
        if field:
            context['field'] = field

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Regenerate the DMMF JSON from a schema that passes validation",
                "Check the document is the full DMMF or its 'datamodel' section",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="DOCUMENT_ERROR"
        )


class PrimaryKeyError(ZeroSchemaGeneratorError):
    """Raised when a model has neither a composite primary key nor an @id field."""

    def __init__(self, message: str, model: str = None, **kwargs):
        context = kwargs.get('context', {})
        if model:
            context['model'] = model

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Mark one field with @id or declare @@id([...]) on the model",
                "Add the model to excludeTables if it should not be synced",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="PRIMARY_KEY_ERROR"
        )


class RelationshipError(ZeroSchemaGeneratorError):
    """Raised when a relation field cannot be resolved."""

    error_code_value = "RELATIONSHIP_ERROR"

    def __init__(
        self,
        message: str,
        source_model: str = None,
        target_model: str = None,
        field: str = None,
        **kwargs
    ):
        context = kwargs.get('context', {})
        if source_model:
            context['source_model'] = source_model
        if target_model:
            context['target_model'] = target_model
        if field:
            context['field'] = field

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check both sides of the relation are declared",
                "Check @relation(fields: [...], references: [...]) lists have the same length",
                "Verify the target model exists in the document",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code=self.error_code_value
        )


class ImplicitJoinError(RelationshipError):
    """Raised when an implicit many-to-many join table cannot be built."""

    error_code_value = "IMPLICIT_JOIN_ERROR"

    def __init__(self, message: str, relation_name: str = None, **kwargs):
        context = kwargs.get('context', {})
        if relation_name:
            context['relation_name'] = relation_name
        kwargs['context'] = context
        if not kwargs.get('suggestions'):
            kwargs['suggestions'] = [
                "Give both models of the many-to-many relation a single @id field",
                "Model the join table explicitly instead of relying on an implicit one",
            ]
        super().__init__(message, **kwargs)


class CodeGenerationError(ZeroSchemaGeneratorError):
    """Raised when rendering, formatting or writing the schema file fails."""

    def __init__(self, message: str, component: str = None, path: str = None, **kwargs):
        context = kwargs.get('context', {})
        if component:
            context['component'] = component  # e.g., 'template', 'prettier', 'writer'
        if path:
            context['path'] = path

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check the output directory is writable",
                "Install prettier or disable the formatting pass",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="CODE_GENERATION_ERROR"
        )
