"""
Configuration schema and loading for entity_mapper.

The configuration only carries the physical naming policies and the
validation switches of the bootstrap sequence. It is read from YAML,
merged with explicit overrides and validated with pydantic.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    ValidationError,
)

from .constants import DefaultConfig, NamingDefaults
from .domain.naming import NamingPolicy
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


# --- Pydantic Models for Configuration Schema ---


class NamingPolicySettings(BaseModel):
    """Schema for one physical naming policy."""

    use_underscore: StrictBool = Field(
        default=NamingDefaults.USE_UNDERSCORE,
        description="Join words with underscores instead of camel-casing them.",
    )
    uppercase: StrictBool = Field(
        default=NamingDefaults.UPPERCASE,
        description="Fold physical names to upper case instead of lower case.",
    )

    model_config = ConfigDict(extra="forbid", frozen=True)

    def to_policy(self) -> NamingPolicy:
        """Convert to the domain naming policy."""
        return NamingPolicy(use_underscore=self.use_underscore, uppercase=self.uppercase)


class MapperConfigSchema(BaseModel):
    """Pydantic schema defining the expected structure and types for the configuration."""

    table_naming: NamingPolicySettings = Field(
        default_factory=NamingPolicySettings,
        description="Naming policy for physical table names.",
    )
    column_naming: NamingPolicySettings = Field(
        default_factory=NamingPolicySettings,
        description="Naming policy for physical column names.",
    )
    check_fields: bool = Field(
        default=DefaultConfig.CHECK_FIELDS,
        description="Validate column bindings of every admitted entity.",
    )
    check_ids: bool = Field(
        default=DefaultConfig.CHECK_IDS,
        description="Validate that every admitted entity declares exactly one id.",
    )
    output_format: Literal["yaml", "json", "text"] = Field(
        default=DefaultConfig.OUTPUT_FORMAT,
        description="Format of the exported schema ('yaml', 'json', 'text').",
    )

    model_config = ConfigDict(
        extra="ignore",  # Allow and ignore extra fields from input dict
    )

    @property
    def table_policy(self) -> NamingPolicy:
        return self.table_naming.to_policy()

    @property
    def column_policy(self) -> NamingPolicy:
        return self.column_naming.to_policy()


# --- Validation Function ---
def validate_and_parse_config(
    config_dict: Dict[str, Any], config_file: Optional[str] = None
) -> MapperConfigSchema:
    """
    Validates a raw configuration dictionary against the MapperConfigSchema.

    Raises:
        ConfigurationError: With one context entry per failing location
    """
    try:
        validated_config = MapperConfigSchema.model_validate(config_dict)
    except ValidationError as e:
        context = {}
        for error in e.errors():
            loc_parts = [str(loc_item) for loc_item in error.get("loc", ())]
            loc_str = " -> ".join(loc_parts) if loc_parts else "Model Level"
            context[loc_str] = error.get("msg", "Unknown validation error")
        raise ConfigurationError(
            "Configuration validation failed",
            config_file=config_file,
            context=context,
        ) from e

    logger.debug("Configuration dictionary parsed and validated successfully against schema.")
    return validated_config


def load_config(
    config_path: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None
) -> MapperConfigSchema:
    """
    Loads configuration from a YAML file, merges explicit overrides and
    returns a validated Pydantic model instance.

    Args:
        config_path: YAML file to read, None for defaults only
        overrides: Values taking precedence over the file; None values are ignored

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    raw_config: Dict[str, Any] = {}

    # 1. Load from YAML file if path is provided
    if config_path:
        config_file = Path(config_path)
        if not config_file.is_file():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                config_file=config_path,
            )
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML configuration: {e}", config_file=config_path
            ) from e

        if yaml_config is None:
            logger.warning(f"Config file {config_path} is empty. Using defaults.")
        elif not isinstance(yaml_config, dict):
            raise ConfigurationError(
                "Configuration file must contain a dictionary",
                config_file=config_path,
                context={"loaded_type": type(yaml_config).__name__},
            )
        else:
            raw_config.update(yaml_config)
            logger.debug(f"Loaded configuration from {config_path}")

    # 2. Override with explicitly provided values
    overridden_keys = set()
    for key, value in (overrides or {}).items():
        if value is not None and key in MapperConfigSchema.model_fields:
            raw_config[key] = value
            overridden_keys.add(key)
    if overridden_keys:
        logger.debug(f"Overridden config keys: {overridden_keys}")

    return validate_and_parse_config(raw_config, config_file=config_path)
