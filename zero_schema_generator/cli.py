import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from zero_schema_generator.codegen import generate_code
from zero_schema_generator.codegen_utils import format_typescript_code, write_output_file
from zero_schema_generator.config_validation import load_config
from zero_schema_generator.document import load_document
from zero_schema_generator.domain.schema_hash import generate_schema_hash
from zero_schema_generator.exceptions import ZeroSchemaGeneratorError
from zero_schema_generator.mapper import build_intermediate_representation

from zero_schema_generator.colored_logging import (
    setup_colored_logging,
    get_colored_logger,
    log_success,
    log_progress,
    log_highlight,
    log_section,
)

# Note: Colored logging will be configured after parsing args
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zero-schema-gen",
        description="Generate a Zero schema (schema.ts) from a Prisma DMMF document.",
    )
    parser.add_argument(
        "-d",
        "--document",
        required=True,
        help="Path to the Prisma DMMF JSON document.",
    )
    parser.add_argument(
        "-c",
        "--config",
        help="Path to the YAML configuration file (generator options).",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        help="Directory to write the schema file to. Overrides config file setting.",
    )
    parser.add_argument(
        "--output-file",
        help="Name of the generated schema file. Overrides config file setting.",
    )
    # Flags below default to None so only explicitly passed values override the file.
    # Boolean options take a --no-... form to switch off a value set in the file.
    parser.add_argument(
        "--exclude-tables",
        nargs="+",
        metavar="NAME",
        default=None,
        help="Model names to leave out of the generated schema.",
    )
    parser.add_argument(
        "--remap-tables-to-camel-case",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Convert table names to camelCase.",
    )
    parser.add_argument(
        "--remap-columns-to-camel-case",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Convert column names to camelCase.",
    )
    parser.add_argument(
        "--enum-as-union",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Emit enums as string union types.",
    )
    parser.add_argument(
        "--prettier",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Format the generated file with prettier.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose DEBUG logging for the generator tool.",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output (useful for CI/CD environments).",
    )
    return parser


def main(argv: Optional[List[str]] = None):
    args = build_parser().parse_args(argv)

    # --- Logging Setup ---
    use_colors = not args.no_color
    log_level = logging.DEBUG if args.verbose else logging.INFO
    setup_colored_logging(level=log_level, use_colors=use_colors)

    global logger
    logger = get_colored_logger(__name__)

    if args.verbose:
        logger.debug("Verbose mode enabled. DEBUG level logging activated.")
    if args.no_color:
        logger.debug("Color output disabled.")

    # --- Main Execution Pipeline ---
    try:
        # 1. Load Configuration
        log_progress(logger, "Loading configuration...")
        config = load_config(args.config, args)
        logger.debug(f"Effective configuration loaded: {config}")
        if config.exclude_tables:
            log_highlight(logger, f"Excluding models: {', '.join(config.exclude_tables)}")

        # 2. Load the DMMF document
        log_section(logger, "Datamodel")
        log_progress(logger, f"Loading DMMF document from {args.document}...")
        document = load_document(args.document)
        log_highlight(
            logger, f"Found {len(document.models)} models and {len(document.enums)} enums"
        )

        # 3. Build Intermediate Representation
        log_section(logger, "Intermediate Representation")
        log_progress(logger, "Transforming datamodel into Zero tables...")
        schema = build_intermediate_representation(document, config)
        log_success(logger, "Intermediate representation built successfully.")

        # 4. Emit the schema module
        log_section(logger, "Code Generation")
        log_progress(logger, "Hashing datamodel...")
        schema_hash = generate_schema_hash(document.models, document.enums)
        logger.debug(f"Schema hash: {schema_hash}")

        log_progress(logger, "Rendering Zero schema...")
        output = generate_code(schema, config, schema_hash=schema_hash)

        output_dir = Path(config.output_dir)
        if config.prettier:
            log_progress(logger, "Formatting generated code with prettier...")
            output = format_typescript_code(
                output,
                resolve_config=config.resolve_prettier_config,
                filepath=output_dir / config.output_file,
            )

        log_progress(logger, "Writing schema file...")
        output_path = write_output_file(output_dir, config.output_file, output)

        # --- Success ---
        log_section(logger, "Completion")
        log_success(logger, f"Zero schema written to {output_path}")

    # --- Error Handling ---
    except ZeroSchemaGeneratorError as e:
        logger.error(f"{type(e).__name__}: {e}", exc_info=args.verbose)
        sys.exit(1)
    except Exception as e:
        # Catch any other unexpected exceptions
        logger.error(
            f"An unexpected error occurred during generation: {e}", exc_info=True
        )  # Always show traceback for unexpected
        sys.exit(1)


# --- Script Entry Point ---
if __name__ == "__main__":
    main()
