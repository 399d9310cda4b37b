"""
entity_mapper: metadata layer of an object-relational mapper.

Converts class and field declarations into a validated schema description
with consistent physical table and column names.
"""

from .domain import (
    EntityDescriptor,
    EntityInspector,
    EntityMarker,
    FieldDescriptor,
    LoadingPolicy,
    NamingPolicy,
    SchemaRegistry,
    format_name,
)
from .mapper import assign_physical_names, build_schema

__version__ = "0.1.0"

__all__ = [
    'EntityDescriptor',
    'EntityInspector',
    'EntityMarker',
    'FieldDescriptor',
    'LoadingPolicy',
    'NamingPolicy',
    'SchemaRegistry',
    'assign_physical_names',
    'build_schema',
    'format_name',
]
