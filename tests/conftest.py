# File: tests/conftest.py
# Contains pytest fixtures shared by the entity_mapper test modules.

from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest

from entity_mapper.domain.inspector import EntityMarker
from entity_mapper.domain.models import EntityDescriptor, FieldDescriptor
from entity_mapper.domain.naming import NamingPolicy
from entity_mapper.domain.registry import SchemaRegistry


class StubInspector:
    """In-memory inspector: classes are registered with their marker, fields and constructor."""

    def __init__(self):
        self._classes: Dict[type, Tuple[Optional[EntityMarker], List[FieldDescriptor], Any]] = {}

    def register(
        self,
        entity_class: type,
        fields: List[FieldDescriptor],
        marker: Optional[EntityMarker] = EntityMarker(),
        constructor: Any = "default",
    ) -> type:
        if constructor == "default":
            constructor = entity_class
        self._classes[entity_class] = (marker, fields, constructor)
        return entity_class

    def entity_marker(self, entity_class: type) -> Optional[EntityMarker]:
        return self._classes[entity_class][0]

    def fields(self, entity_class: type) -> List[FieldDescriptor]:
        return self._classes[entity_class][1]

    def default_constructor(self, entity_class: type):
        return self._classes[entity_class][2]


def make_class(name: str, module: str = "shop.models") -> type:
    return type(name, (), {"__module__": module})


def id_field(name: str = "id", generated_name: Optional[str] = None) -> FieldDescriptor:
    return FieldDescriptor(
        name, int, generated_name=generated_name, is_id=True, is_auto_increment=True
    )


# --- Fixtures ---


@pytest.fixture
def inspector() -> StubInspector:
    return StubInspector()


@pytest.fixture
def registry() -> SchemaRegistry:
    return SchemaRegistry()


@pytest.fixture
def snake_policy() -> NamingPolicy:
    return NamingPolicy(use_underscore=True, uppercase=False)


@pytest.fixture
def make_entity(inspector: StubInspector) -> Callable[..., EntityDescriptor]:
    """
    Factory building an EntityDescriptor through the stub inspector.

    A single auto-increment id field is used when no fields are given.
    """

    def _make_entity(
        name: str,
        fields: Optional[List[FieldDescriptor]] = None,
        generated_name: Optional[str] = None,
        table: Optional[str] = None,
        module: str = "shop.models",
    ) -> EntityDescriptor:
        entity_class = make_class(name, module)
        inspector.register(
            entity_class,
            fields if fields is not None else [id_field(generated_name="id")],
            marker=EntityMarker(table=table),
        )
        entity = EntityDescriptor(entity_class, inspector)
        if generated_name is not None:
            entity.set_generated_name(generated_name)
        return entity

    return _make_entity
