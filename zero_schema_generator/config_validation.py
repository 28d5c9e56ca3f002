# File: zero_schema_generator/config_validation.py
from argparse import Namespace
import logging
from typing import List, Optional, Dict, Any
import yaml
from pathlib import Path

from pydantic import (
    BaseModel,
    Field,
    ValidationError,
    field_validator,
    ConfigDict,
)

from zero_schema_generator.constants import DefaultConfig
from zero_schema_generator.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


# --- Pydantic Models for Configuration Schema ---
class GeneratorConfigSchema(BaseModel):
    """Pydantic schema defining the generator options.

    Keys may be given in the Prisma generator block style (camelCase aliases)
    or as the Python field names.
    """

    name: str = Field(
        default=DefaultConfig.GENERATOR_NAME,
        min_length=1,
        description="Generator name.",
    )
    output_dir: str = Field(
        default=DefaultConfig.OUTPUT_DIR,
        min_length=1,
        alias="output",
        description="Directory the schema file is written to.",
    )
    output_file: str = Field(
        default=DefaultConfig.OUTPUT_FILE,
        min_length=1,
        alias="outputFile",
        description="Name of the generated schema file.",
    )
    exclude_tables: List[str] = Field(
        default_factory=list,
        alias="excludeTables",
        description="Model names left out of the generated schema.",
    )
    remap_tables_to_camel_case: bool = Field(
        default=DefaultConfig.REMAP_TABLES_TO_CAMEL_CASE,
        alias="remapTablesToCamelCase",
        description="Convert table names to camelCase, keeping the real name via .from().",
    )
    remap_columns_to_camel_case: bool = Field(
        default=DefaultConfig.REMAP_COLUMNS_TO_CAMEL_CASE,
        alias="remapColumnsToCamelCase",
        description="Convert column names to camelCase, keeping the real name via .from().",
    )
    enum_as_union: bool = Field(
        default=DefaultConfig.ENUM_AS_UNION,
        alias="enumAsUnion",
        description="Emit enums as string union types instead of TS enums.",
    )
    prettier: bool = Field(
        default=DefaultConfig.PRETTIER,
        description="Format the generated file with prettier.",
    )
    resolve_prettier_config: bool = Field(
        default=DefaultConfig.RESOLVE_PRETTIER_CONFIG,
        alias="resolvePrettierConfig",
        description="Let prettier pick up the project's own configuration.",
    )

    def __getitem__(self, key: str) -> Any:
        """Allow dictionary-style access for compatibility with existing code."""
        return getattr(self, key)

    def get(self, key: str, default: Any = None) -> Any:
        """Allow dict.get() style access for compatibility with existing code."""
        return getattr(self, key, default)

    # --- Custom Field Validators using @field_validator ---

    @field_validator("exclude_tables", mode="before")
    @classmethod
    def check_table_names_list(cls, v: Optional[List[Any]]) -> List[str]:
        """Ensure excludeTables is a list of non-empty strings."""
        if v is None:
            return []
        if not isinstance(v, list):
            raise ValueError("excludeTables must be an array")
        processed_list = []
        for index, item in enumerate(v):
            if not isinstance(item, str):
                raise ValueError(
                    f"Item at index {index} must be a string, found: {type(item).__name__}"
                )
            stripped_item = item.strip()
            if not stripped_item:
                raise ValueError(
                    f"Item at index {index} cannot be empty or just whitespace."
                )
            processed_list.append(stripped_item)
        return processed_list

    model_config = ConfigDict(
        extra="ignore",  # Allow and ignore extra fields from input dict
        populate_by_name=True,
    )


# --- Validation Function ---
def validate_and_parse_config(
    config_dict: Dict[str, Any], config_file: Optional[str] = None
) -> GeneratorConfigSchema:
    """
    Validates a raw configuration dictionary against the GeneratorConfigSchema.

    Raises:
        ConfigurationError: With one context entry per failing location
    """
    try:
        validated_config = GeneratorConfigSchema.model_validate(config_dict)
        logger.debug(
            "Configuration dictionary parsed and validated successfully against schema."
        )
        return validated_config
    except ValidationError as e:
        logger.critical(
            "Configuration validation failed! Please check your config file or arguments."
        )
        context: Dict[str, Any] = {}
        for error in e.errors():
            loc_parts = [str(loc_item) for loc_item in error.get("loc", ())]
            loc_str = " -> ".join(loc_parts) if loc_parts else "Model Level"
            context[loc_str] = error.get("msg", "Unknown validation error")
        raise ConfigurationError(
            "Invalid generator configuration",
            config_file=config_file,
            context=context,
        ) from e


def load_config(config_path: Optional[str], cli_args: Namespace) -> GeneratorConfigSchema:
    """
    Loads configuration from YAML file, merges with CLI arguments,
    validates the result, and returns a validated Pydantic model instance.

    Raises:
        ConfigurationError: If the file cannot be parsed or validation fails
    """
    raw_config: Dict[str, Any] = {}

    # 1. Load from YAML file if path is provided
    if config_path:
        config_file = Path(config_path)
        if not config_file.is_file():
            raise ConfigurationError(
                f"Config file not found at {config_path}", config_file=config_path
            )
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Error parsing YAML file {config_path}: {e}", config_file=config_path
            ) from e

        if yaml_config and isinstance(yaml_config, dict):
            raw_config.update(yaml_config)
            logger.debug(f"Loaded configuration from {config_path}")
        elif yaml_config:
            logger.warning(
                f"Content in config file {config_path} is not a dictionary. Ignoring file content."
            )

    # 2. Override with CLI arguments (only those explicitly provided)
    cli_dict = vars(cli_args)
    overridden_keys = set()
    for key, value in cli_dict.items():
        if value is None or key not in GeneratorConfigSchema.model_fields:
            continue
        # Drop the alias spelling from the file so the CLI value wins
        alias = GeneratorConfigSchema.model_fields[key].alias
        if alias:
            raw_config.pop(alias, None)
        raw_config[key] = value
        overridden_keys.add(key)
    if overridden_keys:
        logger.debug(f"Overridden config keys from CLI arguments: {sorted(overridden_keys)}")

    # 3. Validate
    logger.info("Validating final configuration...")
    validated_config = validate_and_parse_config(raw_config, config_file=config_path)

    # 4. Post-validation adjustments
    validated_config.output_dir = str(Path(validated_config.output_dir).resolve())

    logger.info("Configuration loaded and validated successfully.")
    return validated_config
