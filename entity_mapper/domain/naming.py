"""
Physical naming utilities for entity_mapper.

This module converts source-level identifiers (class and attribute names)
into the physical table and column names used in the backing store. All
functions are pure: the naming policy is always passed in explicitly.
"""

from dataclasses import dataclass
from typing import List, Optional, TYPE_CHECKING

from ..constants import NamingDefaults

if TYPE_CHECKING:
    from .models import EntityDescriptor, FieldDescriptor


SEPARATOR = NamingDefaults.SEPARATOR


@dataclass(frozen=True)
class NamingPolicy:
    """
    Physical naming configuration.

    Attributes:
        use_underscore: Join words with underscores. When False, separators
            are removed and the name is camel-cased instead.
        uppercase: Fold the result to upper case instead of lower case.
    """

    use_underscore: bool = NamingDefaults.USE_UNDERSCORE
    uppercase: bool = NamingDefaults.UPPERCASE


def format_name(original_name: str, policy: NamingPolicy) -> str:
    """
    Format an identifier into a physical name using the given policy.

    Args:
        original_name: Name of the field, table or anything else
        policy: Physical naming configuration

    Returns:
        The converted name, possibly empty

    Example:
        >>> format_name("URLBuilderConfiguration", NamingPolicy())
        'url_builder_configuration'
        >>> format_name("user_name", NamingPolicy(use_underscore=False, uppercase=True))
        'USERNAME'
    """
    if policy.use_underscore:
        name = camel_case_to_separator(original_name)
    else:
        # separators are not allowed in this style
        name = separator_to_camel(original_name)

    if policy.uppercase:
        # the upper-case result is always the upper-cased lower-case one
        return name.lower().upper()
    return name.lower()


def separator_to_camel(name: str) -> str:
    """
    Remove separators and upper-case the character following each one.

    The case of every other character is preserved.

    Example:
        >>> separator_to_camel("user_name")
        'userName'
        >>> separator_to_camel("_name")
        'Name'
    """
    chars: List[str] = []
    capitalize_next = False
    for char in name:
        if char == SEPARATOR:
            capitalize_next = True
            continue
        chars.append(char.upper() if capitalize_next else char)
        capitalize_next = False
    return "".join(chars)


def camel_case_to_separator(name: str) -> str:
    """
    Split a camel-cased identifier into words joined by the separator.

    A run of upper-case letters is an acronym, except for its last letter
    when a lower-case letter follows: that one starts the next word.
    Existing separators are kept and each chunk between them is split on
    its own. Word casing is left untouched.

    Example:
        >>> camel_case_to_separator("URLBuilderConfiguration")
        'URL_Builder_Configuration'
        >>> camel_case_to_separator("userName")
        'user_Name'
    """
    return SEPARATOR.join(
        SEPARATOR.join(_split_words(chunk)) for chunk in name.split(SEPARATOR)
    )


def _split_words(chunk: str) -> List[str]:
    """Segment a separator-free chunk into camel-case words."""
    words: List[str] = []
    start = 0
    upper_run = 0
    last_upper: Optional[int] = None
    previous_was_lower = False

    for i, char in enumerate(chunk):
        if char.isupper():
            if previous_was_lower:
                words.append(chunk[start:i])
                start = i
            upper_run += 1
            last_upper = i
            previous_was_lower = False
        elif char != char.upper():
            if upper_run > 1 and last_upper is not None and last_upper > start:
                # acronym ends one letter early, its last capital opens the next word
                words.append(chunk[start:last_upper])
                start = last_upper
            upper_run = 0
            previous_was_lower = True
        # caseless characters, and lower-case ones without an upper-case form,
        # stay in the current word

    if start < len(chunk) or not words:
        words.append(chunk[start:])
    return words


class NamingConventions:
    """
    Resolves physical table and column names.

    A non-empty custom name always wins over the policy-formatted original.
    """

    @staticmethod
    def table_name(entity: "EntityDescriptor", policy: NamingPolicy) -> str:
        """Physical table name for an entity."""
        if entity.custom_name:
            return entity.custom_name
        return format_name(entity.original_name, policy)

    @staticmethod
    def column_name(field: "FieldDescriptor", policy: NamingPolicy) -> str:
        """Physical column name for a field."""
        if field.custom_name:
            return field.custom_name
        return format_name(field.original_name, policy)
