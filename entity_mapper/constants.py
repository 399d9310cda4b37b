"""
Centralized constants for entity_mapper.

This module contains the naming defaults, configuration defaults and the
type vocabulary understood by schema declarations.
"""

import datetime
import decimal
import uuid
from typing import Dict


# =============================================================================
# NAMING
# =============================================================================

class NamingDefaults:
    """Default physical naming settings."""

    SEPARATOR = "_"
    USE_UNDERSCORE = True
    UPPERCASE = False


# =============================================================================
# CORE CONFIGURATION
# =============================================================================

class DefaultConfig:
    """Default configuration values."""

    CHECK_FIELDS = True
    CHECK_IDS = True
    OUTPUT_FORMAT = "yaml"
    DECLARED_MODULE = "entity_mapper.declared"


class OutputFormats:
    """Formats the resolved schema can be exported to."""

    YAML = "yaml"
    JSON = "json"
    TEXT = "text"

    ALL = [YAML, JSON, TEXT]


# =============================================================================
# DECLARATION TYPES
# =============================================================================

# Type names accepted in schema declarations, mapped to the Python types
# stored on field descriptors.
DECLARED_TYPE_MAP: Dict[str, type] = {
    "int": int,
    "integer": int,
    "str": str,
    "string": str,
    "float": float,
    "bool": bool,
    "boolean": bool,
    "bytes": bytes,
    "decimal": decimal.Decimal,
    "date": datetime.date,
    "datetime": datetime.datetime,
    "time": datetime.time,
    "uuid": uuid.UUID,
}

