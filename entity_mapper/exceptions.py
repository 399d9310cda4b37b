"""
Exception hierarchy for entity_mapper.

Every mapping failure is fatal to the admission or validation call that
raised it. The errors carry context and recovery hints so that the bootstrap
code can report a mapping-declaration defect to the operator.
"""

from typing import Dict, Any, Optional, List


class EntityMapperError(Exception):
    """
    Base exception for all entity_mapper errors.

    Provides rich context and error recovery guidance.
    """

    default_suggestions: List[str] = []
    error_code: Optional[str] = None

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        error_code: Optional[str] = None
    ):
        """
        Initialize the exception with context and recovery suggestions.

        Args:
            message: Human-readable error message
            context: Additional context about where/why the error occurred
            suggestions: List of potential solutions or next steps
            error_code: Unique error code for programmatic handling
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or list(self.default_suggestions)
        if error_code:
            self.error_code = error_code

    def __str__(self) -> str:
        """Return formatted error message with context."""
        lines = [self.message]

        if self.error_code:
            lines.append(f"Error Code: {self.error_code}")

        if self.context:
            lines.append("Context:")
            for key, value in self.context.items():
                lines.append(f"  {key}: {value}")

        if self.suggestions:
            lines.append("Suggestions:")
            for suggestion in self.suggestions:
                lines.append(f"  • {suggestion}")

        return "\n".join(lines)


class ConfigurationError(EntityMapperError):
    """Raised when configuration is invalid or missing."""

    error_code = "CONFIG_ERROR"
    default_suggestions = [
        "Check the configuration file syntax",
        "Verify naming policies only use 'use_underscore' and 'uppercase'",
    ]

    def __init__(self, message: str, config_file: str = None, **kwargs):
        context = kwargs.pop('context', None) or {}
        if config_file:
            context['config_file'] = config_file
        super().__init__(message, context=context, **kwargs)


class DeclarationError(EntityMapperError):
    """Raised when an entity declaration document cannot be parsed."""

    error_code = "DECLARATION_ERROR"
    default_suggestions = [
        "Check the declaration file is a mapping with an 'entities' list",
        "Every entity and field needs a non-empty 'name'",
    ]

    def __init__(self, message: str, source: str = None, **kwargs):
        context = kwargs.pop('context', None) or {}
        if source:
            context['source'] = source
        super().__init__(message, context=context, **kwargs)


# --- Entity construction ---


class NotAnEntityError(EntityMapperError):
    """Raised when a class without the entity marker is mapped."""

    error_code = "NOT_AN_ENTITY"
    default_suggestions = ["Mark the class as an entity before mapping it"]

    def __init__(self, class_name: str, **kwargs):
        super().__init__(
            f"{class_name} is not declared as an entity",
            context={'class': class_name},
            **kwargs
        )
        self.class_name = class_name


class NameAlreadyBoundError(EntityMapperError):
    """Raised when a bound physical name would be replaced by another one."""

    error_code = "NAME_ALREADY_BOUND"

    def __init__(self, original_name: str, bound_name: str, new_name: str, **kwargs):
        super().__init__(
            f"Physical name of {original_name} is already bound to "
            f"'{bound_name}', cannot rebind to '{new_name}'",
            context={
                'original_name': original_name,
                'bound_name': bound_name,
                'new_name': new_name,
            },
            **kwargs
        )


# --- Unresolved bindings ---


class UnmappedEntityError(EntityMapperError):
    """Raised when an entity reaches the registry without a physical table name."""

    error_code = "UNMAPPED_ENTITY"
    default_suggestions = ["Run the naming pass before admitting the entity"]

    def __init__(self, entity_name: str, **kwargs):
        super().__init__(
            f"Entity {entity_name} has no physical table name bound",
            context={'entity': entity_name},
            **kwargs
        )
        self.entity_name = entity_name


class UnmappedFieldError(EntityMapperError):
    """Raised when a field has no physical column name bound."""

    error_code = "UNMAPPED_FIELD"
    default_suggestions = ["Run the naming pass before validating the entity fields"]

    def __init__(self, field_name: str, **kwargs):
        super().__init__(
            f"Field {field_name} has no physical column name bound",
            context={'field': field_name},
            **kwargs
        )
        self.field_name = field_name


class UnmappedDataTypeError(EntityMapperError):
    """Raised when a field has no declared data type."""

    error_code = "UNMAPPED_DATA_TYPE"
    default_suggestions = ["Declare a supported type for the field"]

    def __init__(self, field_name: str, entity_name: str = None, **kwargs):
        context = {'field': field_name}
        if entity_name:
            context['entity'] = entity_name
        super().__init__(
            f"Field {field_name} has no data type bound",
            context=context,
            **kwargs
        )
        self.field_name = field_name


# --- Physical name conflicts ---


class DuplicateTableNamesError(EntityMapperError):
    """Raised when two distinct entities resolve to the same table name."""

    error_code = "DUPLICATE_TABLE_NAMES"
    default_suggestions = [
        "Give one of the entities a custom table name",
        "Check that the table naming policy does not collapse distinct class names",
    ]

    def __init__(self, existing: str, conflicting: str, table_name: str = None, **kwargs):
        context = {'existing_entity': existing, 'conflicting_entity': conflicting}
        if table_name:
            context['table_name'] = table_name
        super().__init__(
            f"Entities {existing} and {conflicting} map to the same table name",
            context=context,
            **kwargs
        )
        self.existing = existing
        self.conflicting = conflicting


class DuplicateColumnNamesError(EntityMapperError):
    """Raised when two fields of one entity resolve to the same column name."""

    error_code = "DUPLICATE_COLUMN_NAMES"
    default_suggestions = [
        "Give one of the fields a custom column name",
        "Check that the column naming policy does not collapse distinct field names",
    ]

    def __init__(self, first: str, second: str, column_name: str = None, **kwargs):
        context = {'field': first, 'conflicting_field': second}
        if column_name:
            context['column_name'] = column_name
        super().__init__(
            f"Fields {first} and {second} map to the same column name",
            context=context,
            **kwargs
        )
        self.first = first
        self.second = second


# --- Id cardinality ---


class NotDeclaredIdError(EntityMapperError):
    """Raised when an entity declares no id field."""

    error_code = "NOT_DECLARED_ID"
    default_suggestions = ["Mark exactly one field of the entity as its id"]

    def __init__(self, entity_name: str, message: str = None, **kwargs):
        super().__init__(
            message or f"Entity {entity_name} does not declare an id field",
            context={'entity': entity_name},
            **kwargs
        )
        self.entity_name = entity_name


class NoDefaultConstructorError(NotDeclaredIdError):
    """Raised when no zero-argument constructor can be resolved for an entity."""

    error_code = "NO_DEFAULT_CONSTRUCTOR"
    default_suggestions = ["Give the entity class a constructor that takes no arguments"]

    def __init__(self, class_name: str, **kwargs):
        super().__init__(
            class_name,
            message=f"Entity {class_name} has no default constructor",
            **kwargs
        )
        self.class_name = class_name


class TooManyIdError(EntityMapperError):
    """Raised when an entity declares more than one id field."""

    error_code = "TOO_MANY_ID"
    default_suggestions = ["Mark exactly one field of the entity as its id"]

    def __init__(self, entity_name: str, id_fields: List[str] = None, **kwargs):
        context = {'entity': entity_name}
        if id_fields:
            context['id_fields'] = ", ".join(id_fields)
        super().__init__(
            f"Entity {entity_name} declares more than one id field",
            context=context,
            **kwargs
        )
        self.entity_name = entity_name
