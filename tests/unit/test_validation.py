"""
Unit tests for the shared field validation rules.

Verifies:
- Username normalization, length bounds and character set
- Password bounds (no trimming)
- Item name / quantity / owner id bounds
- Every rejection names its field
"""

import pytest

from stock_kernel.domain.validation import (
    normalize_username,
    validate_item_id,
    validate_item_name,
    validate_owner_id,
    validate_password,
    validate_quantity,
    validate_username,
)
from stock_kernel.exceptions import InvalidInputError


class TestValidateUsername:

    def test_returns_trimmed_lower_case(self, store_config):
        assert validate_username("  Bob_99 ", store_config) == "bob_99"

    def test_normalize_matches_validated_form(self, store_config):
        assert normalize_username(" ALICE ") == validate_username(" ALICE ", store_config)

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_empty_rejected(self, store_config, raw):
        with pytest.raises(InvalidInputError) as exc_info:
            validate_username(raw, store_config)
        assert exc_info.value.field == "username"

    def test_too_short_after_trim(self, store_config):
        with pytest.raises(InvalidInputError, match="3-20"):
            validate_username("  ab  ", store_config)

    def test_exact_bounds_accepted(self, store_config):
        assert validate_username("abc", store_config) == "abc"
        assert validate_username("a" * 20, store_config) == "a" * 20

    def test_too_long(self, store_config):
        with pytest.raises(InvalidInputError):
            validate_username("a" * 21, store_config)

    @pytest.mark.parametrize("raw", ["bob-99", "bob 99", "bob.smith", "böb_1", "bob@x"])
    def test_invalid_characters(self, store_config, raw):
        with pytest.raises(InvalidInputError, match="letters, numbers, and underscores"):
            validate_username(raw, store_config)

    def test_trailing_newline_is_trimmed_not_matched(self, store_config):
        assert validate_username("bob_99\n", store_config) == "bob_99"


class TestValidatePassword:

    def test_valid_password_returned_untouched(self, store_config):
        assert validate_password(" Secret123 ", store_config) == " Secret123 "

    @pytest.mark.parametrize("raw", [None, ""])
    def test_empty_rejected(self, store_config, raw):
        with pytest.raises(InvalidInputError) as exc_info:
            validate_password(raw, store_config)
        assert exc_info.value.field == "password"

    def test_too_short(self, store_config):
        with pytest.raises(InvalidInputError, match="8-64"):
            validate_password("short", store_config)

    def test_too_long(self, store_config):
        with pytest.raises(InvalidInputError):
            validate_password("x" * 65, store_config)

    def test_whitespace_only_password_of_valid_length_allowed(self, store_config):
        # Passwords are not trimmed, so spaces count as characters
        assert validate_password(" " * 8, store_config) == " " * 8


class TestItemFields:

    def test_name_trimmed(self, store_config):
        assert validate_item_name("  Widget  ", store_config) == "Widget"

    @pytest.mark.parametrize("raw", [None, "", "  "])
    def test_name_empty(self, store_config, raw):
        with pytest.raises(InvalidInputError) as exc_info:
            validate_item_name(raw, store_config)
        assert exc_info.value.field == "name"

    def test_name_too_long(self, store_config):
        with pytest.raises(InvalidInputError, match="255"):
            validate_item_name("n" * 256, store_config)

    @pytest.mark.parametrize("qty", [0, 1, 999999])
    def test_quantity_in_range(self, store_config, qty):
        assert validate_quantity(qty, store_config) == qty

    @pytest.mark.parametrize("qty", [-1, 1000000])
    def test_quantity_out_of_range(self, store_config, qty):
        with pytest.raises(InvalidInputError, match="between 0 and 999999"):
            validate_quantity(qty, store_config)

    @pytest.mark.parametrize("qty", [True, 1.5, "3", None])
    def test_quantity_must_be_int(self, store_config, qty):
        with pytest.raises(InvalidInputError):
            validate_quantity(qty, store_config)

    def test_owner_trimmed(self, store_config):
        assert validate_owner_id(" 7 ", store_config) == "7"

    def test_owner_too_long(self, store_config):
        with pytest.raises(InvalidInputError) as exc_info:
            validate_owner_id("9" * 101, store_config)
        assert exc_info.value.field == "owner_id"

    @pytest.mark.parametrize("item_id", [0, -1, True])
    def test_item_id_must_be_positive(self, item_id):
        with pytest.raises(InvalidInputError):
            validate_item_id(item_id)
