import json
import logging
from pathlib import Path
from typing import Any, Iterable, Optional

from jinja2 import (
    Environment,
    FileSystemLoader,
    TemplateError,
    select_autoescape,
)

from zero_schema_generator.constants import (
    GENERATED_HEADER,
    RELATIONSHIPS_SUFFIX,
    ZERO_PACKAGE,
)
from zero_schema_generator.domain.models import TransformedSchema
from zero_schema_generator.exceptions import CodeGenerationError


logger = logging.getLogger(__name__)

# Define the path to the templates directory relative to this file
TEMPLATE_DIR = Path(__file__).parent / "templates"
SCHEMA_TEMPLATE = "zero_schema.ts.j2"


def jinja2_tojson_compact_filter(value: Any) -> str:
    """
    Custom Jinja filter rendering a value as compact JSON.

    Matches JSON.stringify output (no spaces, no HTML escaping), which is
    what ends up in the relationship configs.
    """
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def jinja2_quote_list_filter(values: Iterable[Any], separator: str = ", ") -> str:
    """Custom Jinja filter joining values as double-quoted TS string literals."""
    return separator.join(jinja2_tojson_compact_filter(str(value)) for value in values)


def setup_jinja_env() -> Environment:
    """Sets up and returns the Jinja2 environment."""
    env = Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        # TypeScript output, never HTML-escaped
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,  # Remove first newline after a block tag
        lstrip_blocks=True,  # Strip leading whitespace from lines with block tags
    )
    env.filters["tojson_compact"] = jinja2_tojson_compact_filter
    env.filters["quote_list"] = jinja2_quote_list_filter
    return env


def generate_code(
    schema: TransformedSchema, config: Any = None, schema_hash: Optional[str] = None
) -> str:
    """
    Render the Zero schema module for a transformed schema.

    Args:
        schema: Intermediate representation built by the mapper
        config: Validated configuration; only `enum_as_union` is read
        schema_hash: Optional document hash written into the header comment

    Returns:
        The TypeScript source of schema.ts

    Raises:
        CodeGenerationError: If the template cannot be rendered
    """
    enum_as_union = bool(config.get("enum_as_union", False)) if config is not None else False
    context = {
        "header": GENERATED_HEADER,
        "schema_hash": schema_hash,
        "zero_package": ZERO_PACKAGE,
        "relationships_suffix": RELATIONSHIPS_SUFFIX,
        "enum_as_union": enum_as_union,
        "enums": schema.enums,
        "models": schema.models,
    }

    try:
        env = setup_jinja_env()
        template = env.get_template(SCHEMA_TEMPLATE)
        rendered_content = template.render(context)
    except TemplateError as e:
        logger.error(f"Error rendering template '{SCHEMA_TEMPLATE}': {e}")
        raise CodeGenerationError(
            f"Failed to render Zero schema: {e}", component="template", path=SCHEMA_TEMPLATE
        ) from e

    logger.debug(
        f"Rendered {len(schema.models)} tables and {len(schema.enums)} enums "
        f"({'unions' if enum_as_union else 'enums'})"
    )
    return rendered_content
