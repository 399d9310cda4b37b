"""
Export of the resolved physical schema.

The SQL generation layer needs, per entity, the table name, the column
names, the id column and the foreign-key count. This module exposes them as
plain data and renders them as YAML, JSON or a Jinja2 text report.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from jinja2 import Environment, FileSystemLoader, select_autoescape

from .constants import OutputFormats
from .domain.registry import SchemaRegistry
from .exceptions import ConfigurationError


logger = logging.getLogger(__name__)

# Define the path to the templates directory relative to this file
TEMPLATE_DIR = Path(__file__).parent / "templates"
REPORT_TEMPLATE = "schema_report.txt.j2"


def setup_jinja_env() -> Environment:
    """Sets up and returns the Jinja2 environment."""
    env = Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,  # Remove first newline after a block tag
        lstrip_blocks=True,  # Strip leading whitespace from lines with block tags
        keep_trailing_newline=True,
    )
    env.filters["flag"] = lambda value: "x" if value else ""
    env.filters["type_name"] = lambda t: getattr(t, "__name__", "-") if t is not None else "-"
    return env


def schema_to_dict(registry: SchemaRegistry) -> Dict[str, Any]:
    """Convert the registry to a dictionary, entities in admission order."""
    entities: List[Dict[str, Any]] = [entity.to_dict() for entity in registry]
    return {"entities": entities}


def render_text_report(registry: SchemaRegistry, env: Optional[Environment] = None) -> str:
    """Render the human-readable schema report."""
    env = env or setup_jinja_env()
    template = env.get_template(REPORT_TEMPLATE)
    return template.render(entities=list(registry), table_count=len(registry))


def dump_schema(registry: SchemaRegistry, fmt: str = OutputFormats.YAML) -> str:
    """
    Render the resolved schema.

    Args:
        registry: Validated registry
        fmt: One of 'yaml', 'json' or 'text'

    Raises:
        ConfigurationError: If the format is unknown
    """
    if fmt == OutputFormats.YAML:
        return yaml.safe_dump(schema_to_dict(registry), sort_keys=False, default_flow_style=False)
    if fmt == OutputFormats.JSON:
        return json.dumps(schema_to_dict(registry), indent=2) + "\n"
    if fmt == OutputFormats.TEXT:
        return render_text_report(registry)

    raise ConfigurationError(
        f"Unknown output format: {fmt}",
        context={"valid_options": OutputFormats.ALL},
    )


def save_schema(registry: SchemaRegistry, output_path: Path, fmt: str = OutputFormats.YAML) -> None:
    """Render the schema and write it to output_path."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(dump_schema(registry, fmt))
    logger.debug(f"Generated file: {output_path}")
