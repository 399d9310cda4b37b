"""
Inspector seam for entity_mapper.

The core never scans classes for markers itself. An inspector hands it the
entity marker, the ordered field descriptors and the default constructor of
a class, whichever declaration mechanism produced them.
"""

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Protocol

from .models import FieldDescriptor


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntityMarker:
    """Entity declaration attached to a class, with its optional table override."""

    table: Optional[str] = None


class EntityInspector(Protocol):
    """Protocol for entity inspectors."""

    def entity_marker(self, entity_class: type) -> Optional[EntityMarker]:
        """Return the entity marker of the class, or None if it has none."""
        ...

    def fields(self, entity_class: type) -> List[FieldDescriptor]:
        """Return the mapped fields of the class in declaration order."""
        ...

    def default_constructor(self, entity_class: type) -> Optional[Callable[[], Any]]:
        """Return a zero-argument constructor for the class, or None."""
        ...


def resolve_default_constructor(entity_class: type) -> Optional[Callable[[], Any]]:
    """
    Return the class itself if it can be instantiated without arguments.

    Args:
        entity_class: Class to check

    Returns:
        The class as a constructor, or None when its __init__ requires arguments
    """
    try:
        signature = inspect.signature(entity_class)
    except (TypeError, ValueError):
        logger.debug(f"Could not read constructor signature of {entity_class!r}")
        return None

    for parameter in signature.parameters.values():
        if parameter.kind in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD):
            continue
        if parameter.default is parameter.empty:
            return None
    return entity_class
