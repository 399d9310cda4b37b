"""
Tests for the physical naming utilities.
"""

from unittest import TestCase

import pytest
from faker import Faker

from entity_mapper.domain.models import FieldDescriptor
from entity_mapper.domain.naming import (
    NamingConventions,
    NamingPolicy,
    camel_case_to_separator,
    format_name,
    separator_to_camel,
)

fake = Faker()
Faker.seed(4321)

ALL_POLICIES = [
    NamingPolicy(use_underscore=True, uppercase=False),
    NamingPolicy(use_underscore=True, uppercase=True),
    NamingPolicy(use_underscore=False, uppercase=False),
    NamingPolicy(use_underscore=False, uppercase=True),
]

# letters whose case mappings are not symmetric
UNUSUAL_CASING = ["\u00aab", "xª_Yz", "\u03f4", "stra\u00dfeName", "\u01c5emo"]


def _random_identifiers(count: int = 40):
    """Identifiers in assorted spellings: camel, acronyms, underscores, digits."""
    names = []
    for _ in range(count):
        words = fake.words(nb=fake.random_int(min=1, max=4))
        style = fake.random_element(["camel", "pascal", "snake", "acronym", "raw"])
        if style == "camel":
            name = words[0] + "".join(w.capitalize() for w in words[1:])
        elif style == "pascal":
            name = "".join(w.capitalize() for w in words)
        elif style == "snake":
            name = "_".join(words)
        elif style == "acronym":
            name = words[0].upper() + "".join(w.capitalize() for w in words[1:])
        else:
            name = fake.pystr(min_chars=1, max_chars=12) + str(fake.random_digit())
        names.append(name)
    return names


class TestCamelCaseToSeparator(TestCase):
    """Test cases for camel_case_to_separator"""

    def test_acronym_followed_by_words(self):
        """Test an acronym followed by capitalized words."""
        assert camel_case_to_separator("URLBuilderConfiguration") == "URL_Builder_Configuration"

    def test_lower_camel_case(self):
        """Test splitting lower camel case."""
        assert camel_case_to_separator("userName") == "user_Name"

    def test_pascal_case(self):
        """Test splitting Pascal case."""
        assert camel_case_to_separator("OrderItem") == "Order_Item"

    def test_trailing_acronym(self):
        """Test an acronym at the end of a name."""
        assert camel_case_to_separator("parseURL") == "parse_URL"

    def test_acronym_only(self):
        """Test a name made of a single acronym."""
        assert camel_case_to_separator("URL") == "URL"

    def test_two_capitals_then_lowercase(self):
        """Test two capitals followed by lower-case letters."""
        assert camel_case_to_separator("ABc") == "A_Bc"

    def test_single_word_untouched(self):
        """Test a single word is left as is."""
        assert camel_case_to_separator("order") == "order"

    def test_existing_separators_preserved(self):
        """Test existing separators are kept."""
        assert camel_case_to_separator("_name") == "_name"
        assert camel_case_to_separator("order_Item") == "order_Item"

    def test_digits_stay_in_word(self):
        """Test digits do not split words."""
        assert camel_case_to_separator("address2Line") == "address2_Line"
        assert camel_case_to_separator("ORDER2ITEM") == "ORDER2ITEM"

    def test_empty_string(self):
        """Test splitting an empty string."""
        assert camel_case_to_separator("") == ""


class TestSeparatorToCamel(TestCase):
    """Test cases for separator_to_camel"""

    def test_basic_conversion(self):
        """Test removing separators."""
        assert separator_to_camel("user_name") == "userName"

    def test_leading_separator(self):
        """Test a leading separator capitalizes the first letter."""
        assert separator_to_camel("_name") == "Name"

    def test_existing_case_preserved(self):
        """Test the case of other letters is preserved."""
        assert separator_to_camel("USER_name") == "USERName"

    def test_single_letter_after_separator(self):
        """Test a single letter after a separator is capitalized."""
        assert separator_to_camel("a_b") == "aB"

    def test_trailing_and_repeated_separators(self):
        """Test trailing and repeated separators."""
        assert separator_to_camel("name_") == "name"
        assert separator_to_camel("user__name") == "userName"

    def test_no_separator(self):
        """Test a name without separators is unchanged."""
        assert separator_to_camel("userName") == "userName"

    def test_empty_string(self):
        """Test camel-casing an empty string."""
        assert separator_to_camel("") == ""


class TestFormatName(TestCase):
    """Test cases for format_name"""

    def test_underscore_lowercase(self):
        """Test the lower-case underscore policy."""
        policy = NamingPolicy(use_underscore=True, uppercase=False)
        assert format_name("OrderItem", policy) == "order_item"
        assert format_name("URLBuilderConfiguration", policy) == "url_builder_configuration"

    def test_underscore_uppercase(self):
        """Test the upper-case underscore policy."""
        policy = NamingPolicy(use_underscore=True, uppercase=True)
        assert format_name("OrderItem", policy) == "ORDER_ITEM"

    def test_camel_lowercase(self):
        """Test the lower-case camel policy."""
        policy = NamingPolicy(use_underscore=False, uppercase=False)
        assert format_name("order_item", policy) == "orderitem"

    def test_camel_uppercase(self):
        """Test the upper-case camel policy."""
        policy = NamingPolicy(use_underscore=False, uppercase=True)
        assert format_name("user_name", policy) == "USERNAME"

    def test_empty_string(self):
        """Test formatting an empty string under every policy."""
        for policy in ALL_POLICIES:
            assert format_name("", policy) == ""

    def test_default_policy(self):
        """Test the default naming policy."""
        assert NamingPolicy() == NamingPolicy(use_underscore=True, uppercase=False)

    def test_policy_is_immutable(self):
        """Test naming policies cannot be modified."""
        policy = NamingPolicy()
        with self.assertRaises(AttributeError):
            policy.uppercase = True

    def test_letter_without_upper_form_does_not_open_word(self):
        """Test a lower-case letter without an upper-case form."""
        policy = NamingPolicy(use_underscore=True, uppercase=True)
        assert format_name("ªb", policy) == "ªB"
        assert format_name("ªB", policy) == "ªB"

    def test_uppercase_folds_through_lowercase(self):
        """Test upper-case folding of letters with asymmetric case mappings."""
        assert format_name("ϴ", NamingPolicy(uppercase=True)) == "Θ"
        assert format_name("ϴ", NamingPolicy(uppercase=False)) == "θ"


@pytest.mark.parametrize("policy", ALL_POLICIES)
def test_format_is_idempotent(policy):
    """Test formatting a formatted name changes nothing."""
    fixed = ["URLBuilderConfiguration", "_name", "a1B2c3", "ID"]
    for name in _random_identifiers() + fixed + UNUSUAL_CASING:
        once = format_name(name, policy)
        assert format_name(once, policy) == once, name


@pytest.mark.parametrize("use_underscore", [True, False])
def test_uppercase_is_case_folding_of_lowercase(use_underscore):
    """Test the upper-case policy only folds the lower-case result."""
    upper = NamingPolicy(use_underscore=use_underscore, uppercase=True)
    lower = NamingPolicy(use_underscore=use_underscore, uppercase=False)
    for name in _random_identifiers() + UNUSUAL_CASING:
        assert format_name(name, upper) == format_name(name, lower).upper(), name


class TestNamingConventions(TestCase):
    """Test cases for NamingConventions"""

    def test_column_name_from_policy(self):
        """Test the column name comes from the policy."""
        field = FieldDescriptor("createdAt", str)
        assert NamingConventions.column_name(field, NamingPolicy()) == "created_at"

    def test_custom_column_name_wins(self):
        """Test a custom column name wins over the policy."""
        field = FieldDescriptor("createdAt", str, custom_name="CreationTS")
        assert NamingConventions.column_name(field, NamingPolicy(uppercase=True)) == "CreationTS"

    def test_empty_custom_column_name_is_unset(self):
        """Test an empty custom column name is ignored."""
        field = FieldDescriptor("createdAt", str, custom_name="")
        assert field.custom_name is None
        assert NamingConventions.column_name(field, NamingPolicy()) == "created_at"
