"""
Schema registry for entity_mapper.

Holds the mapped entities and their physical table names, and performs the
validation that keeps physical names unique and primary keys well defined.
The registry is append-only for the lifetime of a mapping session.
"""

import logging
from typing import Dict, Iterator, List, Optional

from .models import EntityDescriptor
from ..exceptions import (
    DuplicateColumnNamesError,
    DuplicateTableNamesError,
    NotDeclaredIdError,
    TooManyIdError,
    UnmappedDataTypeError,
    UnmappedEntityError,
    UnmappedFieldError,
)


logger = logging.getLogger(__name__)


class SchemaRegistry:
    """
    Holds the object mapping scheme and its physical table names.

    Admission and validation are not thread safe. Callers that register
    from several threads must hold one lock across add_entity.
    """

    def __init__(self):
        """Initialize an empty mapping scheme."""
        self._entities: List[EntityDescriptor] = []
        self._table_index: Dict[str, EntityDescriptor] = {}

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[EntityDescriptor]:
        return iter(self._entities)

    def __contains__(self, entity: object) -> bool:
        return any(e is entity for e in self._entities)

    @property
    def entities(self) -> List[EntityDescriptor]:
        """All admitted entities, in admission order."""
        return list(self._entities)

    @property
    def table_index(self) -> Dict[str, EntityDescriptor]:
        """Mapping of physical table name to entity."""
        return dict(self._table_index)

    def table_names(self) -> List[str]:
        """Physical table names in admission order."""
        return [e.generated_name for e in self._entities]

    def add_entity(self, entity: EntityDescriptor) -> None:
        """
        Add the given entity to the mapping scheme.

        Precondition: the physical table name is bound. Re-adding an entity
        that is already admitted changes nothing.

        Raises:
            UnmappedEntityError: If no physical name was bound before
            DuplicateTableNamesError: If another entity already uses the name
        """
        if not entity.generated_name:
            raise UnmappedEntityError(entity.original_full_name)

        self._check_conflicting_entities(entity)

        if entity in self:
            logger.debug(f"Entity {entity.original_full_name} is already registered")
            return

        self._entities.append(entity)
        self._table_index[entity.generated_name] = entity
        logger.debug(
            f"Registered entity {entity.original_full_name} as table '{entity.generated_name}'"
        )

    def _check_conflicting_entities(self, entity: EntityDescriptor) -> None:
        for other in self._entities:
            if other is not entity and entity.same_table_as(other):
                raise DuplicateTableNamesError(
                    other.original_name, entity.original_name, entity.generated_name
                )

    def check_conflicting_fields(self, entity: EntityDescriptor) -> None:
        """
        Validate the column bindings of an entity.

        Precondition: names and types of the fields are bound.

        Raises:
            UnmappedFieldError: If a physical column name is not bound
            UnmappedDataTypeError: If a field has no data type
            DuplicateColumnNamesError: If two fields share a physical column name
        """
        for f in entity.fields:
            if not f.generated_name:
                raise UnmappedFieldError(f.original_name)

            if f.declared_type is None:
                raise UnmappedDataTypeError(f.original_name, entity.original_full_name)

            for g in entity.fields:
                if f is not g and f.same_column_as(g):
                    raise DuplicateColumnNamesError(
                        f.original_name, g.original_name, f.generated_name
                    )

    def check_id_binding(self, entity: EntityDescriptor) -> None:
        """
        Ensure exactly one field of the entity is flagged as its id.

        Raises:
            NotDeclaredIdError: If no field is an id
            TooManyIdError: If more than one field is an id
        """
        id_fields = [f.original_name for f in entity.fields if f.is_id]

        if not id_fields:
            raise NotDeclaredIdError(entity.original_full_name)
        if len(id_fields) > 1:
            raise TooManyIdError(entity.original_full_name, id_fields)

    def get_entity_by_table_name(self, table_name: str) -> Optional[EntityDescriptor]:
        """Return the entity with the given case-sensitive physical table name."""
        return self._table_index.get(table_name)

    def get_binded_entity(self, entity_class: type) -> Optional[EntityDescriptor]:
        """Return the entity mapping the given class, None if not found."""
        for e in self._entities:
            if e.type is entity_class:
                return e
        return None

    def get_entity_by_class_name(self, class_name: str) -> Optional[EntityDescriptor]:
        """
        Return an entity by its simple class name.

        WARNING: two entities may share a simple class name, e.g.
        shop.models.User and shop.admin.User. The first admitted one is
        returned in that case.
        """
        for e in self._entities:
            if e.original_name == class_name:
                return e
        return None
