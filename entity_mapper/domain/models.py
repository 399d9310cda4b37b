"""
Core domain models for entity_mapper.

These models describe mapped classes and their attributes: their source
names, the physical names bound to them by the naming pass, and the flags
derived from their declarations. They are independent of any particular
declaration mechanism; an inspector supplies their raw content.
"""

from dataclasses import FrozenInstanceError, dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, TYPE_CHECKING

from ..exceptions import NameAlreadyBoundError, NoDefaultConstructorError, NotAnEntityError

if TYPE_CHECKING:
    from .inspector import EntityInspector


class LoadingPolicy(Enum):
    """Loading policy of relationship fields, consumed by the loading layer."""

    EAGER = "eager"
    LAZY = "lazy"


def _bind_name(owner: str, current: Optional[str], new_name: str) -> str:
    """Return the name to store, refusing to replace a different bound name."""
    if current and current != new_name:
        raise NameAlreadyBoundError(owner, current, new_name)
    return new_name


def _type_name(declared_type: Optional[type]) -> Optional[str]:
    if declared_type is None:
        return None
    return getattr(declared_type, "__name__", repr(declared_type))


_DECLARATION_FLAGS = frozenset({"is_id", "is_auto_increment", "is_foreign_key"})


@dataclass(eq=False)
class FieldDescriptor:
    """
    Represents one mapped attribute of an entity.

    Equality is object identity. Two fields share a physical column
    exactly when same_column_as() says so. The declaration flags are
    fixed once the descriptor is built.
    """

    original_name: str
    declared_type: Optional[type]

    # Bound by the naming pass
    generated_name: Optional[str] = None

    # Declaration flags
    is_id: bool = False
    is_auto_increment: bool = False
    is_foreign_key: bool = False

    # Declaration overrides and pass-through relationship settings
    custom_name: Optional[str] = None
    load_policy: Optional[LoadingPolicy] = None
    target_binding_field: Optional[str] = None

    def __post_init__(self):
        if not self.custom_name:
            self.custom_name = None

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _DECLARATION_FLAGS and name in self.__dict__:
            raise FrozenInstanceError(f"cannot assign to field '{name}'")
        super().__setattr__(name, value)

    def set_generated_name(self, generated_name: str) -> None:
        """Bind the physical column name."""
        self.generated_name = _bind_name(self.original_name, self.generated_name, generated_name)

    def same_column_as(self, other: "FieldDescriptor") -> bool:
        """Check if both fields resolve to the same physical column name."""
        return self.generated_name == other.generated_name

    @property
    def is_relationship(self) -> bool:
        """Check if this field references another entity."""
        return self.is_foreign_key or self.load_policy is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'name': self.original_name,
            'column': self.generated_name,
            'type': _type_name(self.declared_type),
            'is_id': self.is_id,
            'is_auto_increment': self.is_auto_increment,
            'is_foreign_key': self.is_foreign_key,
            'load_policy': self.load_policy.value if self.load_policy else None,
            'target_binding_field': self.target_binding_field,
        }


class EntityDescriptor:
    """
    Information holder for a mapped class.

    It keeps the original class names, the generated table name and the
    fields of the entity. Equality is object identity; two entities share a
    physical table exactly when same_table_as() says so.
    """

    def __init__(self, entity_class: type, inspector: "EntityInspector"):
        """
        Build the descriptor of an entity class.

        Args:
            entity_class: The mapped class
            inspector: Collaborator supplying the marker, fields and constructor

        Raises:
            NotAnEntityError: If the class carries no entity marker
            NoDefaultConstructorError: If no zero-argument constructor is found
        """
        full_name = f"{entity_class.__module__}.{entity_class.__qualname__}"

        marker = inspector.entity_marker(entity_class)
        if marker is None:
            raise NotAnEntityError(full_name)

        fields = list(inspector.fields(entity_class))
        default_constructor = inspector.default_constructor(entity_class)
        if default_constructor is None:
            raise NoDefaultConstructorError(full_name)

        self._type = entity_class
        self._original_name = entity_class.__name__
        self._original_full_name = full_name
        self._custom_name = marker.table or None
        self._fields = fields
        self._default_constructor = default_constructor
        self._generated_name: Optional[str] = None

    def __repr__(self) -> str:
        return (
            f"EntityDescriptor({self._original_full_name!r}, "
            f"generated_name={self._generated_name!r})"
        )

    @property
    def type(self) -> type:
        return self._type

    @property
    def original_name(self) -> str:
        return self._original_name

    @property
    def original_full_name(self) -> str:
        return self._original_full_name

    @property
    def custom_name(self) -> Optional[str]:
        return self._custom_name

    @property
    def generated_name(self) -> Optional[str]:
        return self._generated_name

    @property
    def fields(self) -> List[FieldDescriptor]:
        return self._fields

    @property
    def default_constructor(self) -> Callable[[], Any]:
        return self._default_constructor

    def set_generated_name(self, generated_name: str) -> None:
        """Bind the physical table name."""
        self._generated_name = _bind_name(
            self._original_full_name, self._generated_name, generated_name
        )

    def same_table_as(self, other: "EntityDescriptor") -> bool:
        """Check if both entities resolve to the same physical table name."""
        return self._generated_name == other.generated_name

    def auto_increment_field(self) -> Optional[FieldDescriptor]:
        """
        Return the first auto-increment field of this entity.

        Returns:
            The first field flagged auto-increment, None if there is none
        """
        for f in self._fields:
            if f.is_auto_increment:
                return f
        return None

    def id_field(self) -> Optional[FieldDescriptor]:
        """Return the id field, None unless exactly one is declared."""
        id_fields = [f for f in self._fields if f.is_id]
        if len(id_fields) == 1:
            return id_fields[0]
        return None

    def foreign_key_count(self) -> int:
        """Count the fields flagged as foreign keys."""
        return sum(1 for f in self._fields if f.is_foreign_key)

    def get_field(self, original_name: str) -> Optional[FieldDescriptor]:
        """Get a field by its original attribute name."""
        for f in self._fields:
            if f.original_name == original_name:
                return f
        return None

    def new_instance(self) -> Any:
        """Instantiate the mapped class through its default constructor."""
        return self._default_constructor()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        id_field = self.id_field()
        auto_increment = self.auto_increment_field()
        return {
            'name': self._original_name,
            'full_name': self._original_full_name,
            'table': self._generated_name,
            'id_column': id_field.generated_name if id_field else None,
            'auto_increment_column': auto_increment.generated_name if auto_increment else None,
            'foreign_key_count': self.foreign_key_count(),
            'columns': [f.to_dict() for f in self._fields],
        }
