"""
Domain module for entity_mapper.

This module contains the mapping metadata model and its validation,
separated from configuration, declaration parsing and the command line.
"""

from .models import (
    EntityDescriptor,
    FieldDescriptor,
    LoadingPolicy,
)

from .inspector import (
    EntityInspector,
    EntityMarker,
    resolve_default_constructor,
)

from .naming import (
    NamingConventions,
    NamingPolicy,
    camel_case_to_separator,
    format_name,
    separator_to_camel,
)

from .registry import SchemaRegistry

__all__ = [
    # Core models
    'EntityDescriptor',
    'FieldDescriptor',
    'LoadingPolicy',

    # Inspection
    'EntityInspector',
    'EntityMarker',
    'resolve_default_constructor',

    # Naming
    'NamingConventions',
    'NamingPolicy',
    'camel_case_to_separator',
    'format_name',
    'separator_to_camel',

    # Registry
    'SchemaRegistry',
]
