import pytest

from leadform.services.phone_mask import PhoneMask, apply_mask, digits_only, phone_mask


def test_digits_only():
    assert digits_only("+55 (11) 98765-4321") == "5511987654321"
    assert digits_only("a1b2-3") == "123"
    assert digits_only("") == ""
    assert digits_only("abc") == ""


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("", "+55"),
        ("1", "+55 (1"),
        ("11", "+55 (11"),
        ("119", "+55 (11) 9"),
        ("119876", "+55 (11) 9876"),
        ("1198765", "+55 (11) 9876-5"),
        ("1198765432", "+55 (11) 9876-5432"),
        ("11987654321", "+55 (11) 98765-4321"),
    ],
)
def test_apply_mask_renders_progressively(raw, expected):
    assert apply_mask(raw) == expected


def test_apply_mask_keeps_existing_country_code():
    assert apply_mask("5511987654321") == "+55 (11) 98765-4321"
    assert apply_mask("+55 (11) 98765-4321") == "+55 (11) 98765-4321"
    assert apply_mask("+55 ") == "+55"


def test_apply_mask_adds_country_code_to_formatted_input():
    assert apply_mask("(11) 98765-4321") == "+55 (11) 98765-4321"
    assert apply_mask("11 3456-7890") == "+55 (11) 3456-7890"


def test_apply_mask_truncates_to_eleven_local_digits():
    assert apply_mask("11987654321999") == "+55 (11) 98765-4321"
    assert apply_mask("5511987654321999") == "+55 (11) 98765-4321"


def test_apply_mask_digit_count_and_prefix():
    source = "12345678901"
    for n in range(len(source) + 1):
        typed = source[:n]
        masked = apply_mask(typed)
        assert masked.startswith("+55")
        assert digits_only(masked) == "55" + typed
        assert len(masked) <= len("+55 (12) 34567-8901")


def test_apply_mask_is_idempotent():
    source = "21987654321"
    for n in range(len(source) + 1):
        once = apply_mask(source[:n])
        assert apply_mask(once) == once


def test_custom_country_code():
    uk = PhoneMask(country_code="44")
    assert uk.apply_mask("2071234567") == "+44 (20) 7123-4567"
    assert uk.initial_value() == "+44 "


def test_initial_value_and_backspace_guard():
    assert phone_mask.initial_value() == "+55 "
    assert phone_mask.blocks_backspace(0) is True
    assert phone_mask.blocks_backspace(4) is True
    assert phone_mask.blocks_backspace(5) is False


def test_on_input_moves_cursor_with_inserted_separator():
    # typing "5" after "+55 (11) 9876" makes the mask insert a dash
    result = phone_mask.on_input("+55 (11) 98765", 14)
    assert result.value == "+55 (11) 9876-5"
    assert result.cursor == 15


def test_on_input_cursor_unchanged_when_length_stable():
    result = phone_mask.on_input("+55 (11) 9876", 13)
    assert result.value == "+55 (11) 9876"
    assert result.cursor == 13


def test_reposition_cursor_is_clamped():
    assert phone_mask.reposition_cursor("abcdef", "a", 0) == 0
    assert phone_mask.reposition_cursor("ab", "abcd", 10) == 4
