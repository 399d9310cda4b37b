"""
Naming pass and bootstrap sequence for entity_mapper.

This module turns inspected classes into a validated SchemaRegistry:

1. build an EntityDescriptor per class through the inspector
2. bind physical table and column names (custom names win over the policy)
3. run the explicit column and id checks enabled in the configuration
4. admit each entity into the registry

Any mapping error stops the sequence. An entity that fails a check is never
admitted; entities admitted before the failure stay in the registry, which
has no removal operation.

Example:
    >>> inspector, classes = load_declarations("schema.yaml")
    >>> registry = build_schema(classes, inspector, load_config("mapper.yaml"))
    >>> registry.get_entity_by_table_name("order_item")
"""

import logging
from typing import Iterable, Optional

from .config_validation import MapperConfigSchema
from .domain.inspector import EntityInspector
from .domain.models import EntityDescriptor
from .domain.naming import NamingConventions, NamingPolicy
from .domain.registry import SchemaRegistry


logger = logging.getLogger(__name__)


def assign_physical_names(
    entity: EntityDescriptor,
    table_policy: NamingPolicy,
    column_policy: NamingPolicy,
) -> EntityDescriptor:
    """
    Bind the physical table name of an entity and the column names of its fields.

    Args:
        entity: Entity whose names are still unbound
        table_policy: Policy applied to the class name
        column_policy: Policy applied to the attribute names

    Returns:
        The same entity, for chaining
    """
    entity.set_generated_name(NamingConventions.table_name(entity, table_policy))
    logger.debug(f"Entity {entity.original_full_name} -> table '{entity.generated_name}'")

    for f in entity.fields:
        f.set_generated_name(NamingConventions.column_name(f, column_policy))
        logger.debug(f"  {entity.original_name}.{f.original_name} -> column '{f.generated_name}'")

    return entity


def map_entity(
    entity_class: type,
    inspector: EntityInspector,
    config: MapperConfigSchema,
    registry: SchemaRegistry,
) -> EntityDescriptor:
    """Describe, name, validate and admit a single class."""
    entity = EntityDescriptor(entity_class, inspector)
    assign_physical_names(entity, config.table_policy, config.column_policy)

    # an entity failing a check is never admitted
    if config.check_fields:
        registry.check_conflicting_fields(entity)
    if config.check_ids:
        registry.check_id_binding(entity)

    registry.add_entity(entity)

    return entity


def build_schema(
    classes: Iterable[type],
    inspector: EntityInspector,
    config: Optional[MapperConfigSchema] = None,
    registry: Optional[SchemaRegistry] = None,
) -> SchemaRegistry:
    """
    Map every class into a registry.

    Args:
        classes: Classes to map, in admission order
        inspector: Collaborator describing the classes
        config: Naming policies and check switches; defaults if None
        registry: Registry to extend; a new one is created if None

    Returns:
        The registry holding every mapped entity

    Raises:
        EntityMapperError: The first mapping failure encountered
    """
    config = config or MapperConfigSchema()
    registry = registry if registry is not None else SchemaRegistry()

    logger.info("Mapping entities to physical schema...")
    for entity_class in classes:
        entity = map_entity(entity_class, inspector, config, registry)
        logger.info(f"Mapped {entity.original_name} to table '{entity.generated_name}'")

    logger.info(f"Schema mapping complete: {len(registry)} entities registered.")
    return registry
