"""
Explicit schema declarations for entity_mapper.

A declaration document lists entities and their fields together with the
flags and overrides the mapping core needs. Loading one synthesizes a plain
Python class per entity and returns an inspector that answers for those
classes, so the core can map them like any other inspected class.

Example document:

    entities:
      - name: Order
        module: shop.models
        fields:
          - {name: id, type: int, id: true, auto_increment: true}
          - {name: customer, type: Customer, foreign_key: true, load: lazy}
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Literal, Optional, Tuple, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .constants import DECLARED_TYPE_MAP, DefaultConfig
from .domain.inspector import EntityMarker, resolve_default_constructor
from .domain.models import FieldDescriptor, LoadingPolicy
from .exceptions import DeclarationError

logger = logging.getLogger(__name__)


# --- Pydantic Models for the Declaration Document ---


class FieldDeclaration(BaseModel):
    """Schema for one declared field."""

    name: str = Field(..., min_length=1, description="Attribute name.")
    type: Optional[str] = Field(
        default=None,
        description="Type name: a builtin type name or the name of a declared entity.",
    )
    column: Optional[str] = Field(default=None, description="Custom column name.")
    id: bool = Field(default=False, description="Field is the entity id.")
    auto_increment: bool = Field(default=False, description="Field is auto-incremented.")
    foreign_key: bool = Field(default=False, description="Field references another entity.")
    load: Optional[Literal["eager", "lazy"]] = Field(
        default=None, description="Loading policy of a relationship field."
    )
    target_binding_field: Optional[str] = Field(
        default=None, description="Field of the target entity this one binds to."
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("name")
    @classmethod
    def check_identifier(cls, v: str) -> str:
        if not v.isidentifier():
            raise ValueError(f"'{v}' is not a valid attribute name")
        return v


class EntityDeclaration(BaseModel):
    """Schema for one declared entity."""

    name: str = Field(..., min_length=1, description="Simple class name.")
    module: str = Field(
        default=DefaultConfig.DECLARED_MODULE,
        min_length=1,
        description="Module the synthesized class pretends to live in.",
    )
    table: Optional[str] = Field(default=None, description="Custom table name.")
    entity: bool = Field(
        default=True, description="Whether the class carries the entity marker."
    )
    fields: List[FieldDeclaration] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @field_validator("name")
    @classmethod
    def check_identifier(cls, v: str) -> str:
        if not v.isidentifier():
            raise ValueError(f"'{v}' is not a valid class name")
        return v


class DeclarationDocument(BaseModel):
    """Top level of a declaration document."""

    entities: List[EntityDeclaration] = Field(..., description="Declared entities.")

    model_config = ConfigDict(extra="ignore")


# --- Inspector ---


class DeclarationInspector:
    """
    Entity inspector backed by declaration documents.

    It only knows the classes it synthesized itself.
    """

    def __init__(self):
        self._declarations: Dict[type, EntityDeclaration] = {}
        self._classes_by_name: Dict[str, type] = {}

    @property
    def classes(self) -> List[type]:
        """Synthesized classes in declaration order."""
        return list(self._declarations)

    def declare(self, declaration: EntityDeclaration) -> type:
        """Synthesize the class of a declared entity and remember its declaration."""
        entity_class = type(declaration.name, (), {"__module__": declaration.module})
        self._declarations[entity_class] = declaration
        self._classes_by_name.setdefault(declaration.name, entity_class)
        logger.debug(f"Declared class {declaration.module}.{declaration.name}")
        return entity_class

    def _declaration(self, entity_class: type) -> EntityDeclaration:
        try:
            return self._declarations[entity_class]
        except KeyError:
            raise DeclarationError(
                f"Class {entity_class.__qualname__} was not declared through this inspector",
                context={"class": repr(entity_class)},
            ) from None

    def entity_marker(self, entity_class: type) -> Optional[EntityMarker]:
        declaration = self._declaration(entity_class)
        if not declaration.entity:
            return None
        return EntityMarker(table=declaration.table)

    def fields(self, entity_class: type) -> List[FieldDescriptor]:
        return [
            FieldDescriptor(
                original_name=f.name,
                declared_type=self.resolve_type(f.type),
                is_id=f.id,
                is_auto_increment=f.auto_increment,
                is_foreign_key=f.foreign_key,
                custom_name=f.column,
                load_policy=LoadingPolicy(f.load) if f.load else None,
                target_binding_field=f.target_binding_field,
            )
            for f in self._declaration(entity_class).fields
        ]

    def default_constructor(self, entity_class: type) -> Optional[Callable[[], Any]]:
        self._declaration(entity_class)
        return resolve_default_constructor(entity_class)

    def resolve_type(self, type_name: Optional[str]) -> Optional[type]:
        """
        Resolve a declared type name.

        Builtin names win over entity names. Unknown names resolve to None,
        which the registry reports as an unmapped data type.
        """
        if not type_name:
            return None
        if type_name.lower() in DECLARED_TYPE_MAP:
            return DECLARED_TYPE_MAP[type_name.lower()]
        resolved = self._classes_by_name.get(type_name)
        if resolved is None:
            logger.warning(f"Unknown declared type '{type_name}'")
        return resolved


def load_declarations(
    source: Union[str, Path, Dict[str, Any]],
    inspector: Optional[DeclarationInspector] = None,
) -> Tuple[DeclarationInspector, List[type]]:
    """
    Parse a declaration document and synthesize its classes.

    Args:
        source: Path to a YAML file, or an already parsed document
        inspector: Inspector to extend; a new one is created if None

    Returns:
        The inspector and the newly declared classes in document order

    Raises:
        DeclarationError: If the document cannot be read or is invalid
    """
    source_name = None
    if isinstance(source, dict):
        raw = source
    else:
        source_name = str(source)
        path = Path(source)
        if not path.is_file():
            raise DeclarationError(f"Declaration file not found: {path}", source=source_name)
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise DeclarationError(f"Invalid YAML declarations: {e}", source=source_name) from e

    if not isinstance(raw, dict):
        raise DeclarationError(
            "Declaration document must contain a dictionary",
            source=source_name,
            context={"loaded_type": type(raw).__name__},
        )

    try:
        document = DeclarationDocument.model_validate(raw)
    except ValidationError as e:
        context = {}
        for error in e.errors():
            loc_str = " -> ".join(str(loc) for loc in error.get("loc", ())) or "Model Level"
            context[loc_str] = error.get("msg", "Unknown validation error")
        raise DeclarationError(
            "Declaration validation failed", source=source_name, context=context
        ) from e

    inspector = inspector or DeclarationInspector()
    classes = [inspector.declare(declaration) for declaration in document.entities]
    logger.debug(f"Loaded {len(classes)} entity declarations")
    return inspector, classes
