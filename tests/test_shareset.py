"""Tests for decoding share documents."""

import pytest
from sssr.core.shareset import ShareSet, decode_share_set, decode_value
from sssr.crypto.shamir import Share
from sssr.errors import DecodeError


def document(**shares):
    """Build a share document with n=len(shares), k=2."""
    doc = {"keys": {"n": len(shares), "k": 2}}
    doc.update(shares)
    return doc


class TestDecodeValue:
    """Tests for positional-notation decoding."""

    def test_binary(self):
        assert decode_value("111", 2) == 7

    def test_base_36(self):
        """1Z = 1*36 + 35."""
        assert decode_value("1Z", 36) == 71

    def test_case_insensitive(self):
        assert decode_value("ff", 16) == decode_value("FF", 16) == 255

    def test_signs(self):
        assert decode_value("-101", 2) == -5
        assert decode_value("+12", 10) == 12

    def test_large_value(self):
        """Values are unbounded."""
        value = "z" * 100
        assert decode_value(value, 36) == 36**100 - 1

    def test_digit_out_of_range(self):
        with pytest.raises(ValueError, match="digit '2' is invalid in base 2"):
            decode_value("102", 2)

    def test_base_out_of_range(self):
        with pytest.raises(ValueError, match="base must be in"):
            decode_value("1", 37)
        with pytest.raises(ValueError, match="base must be in"):
            decode_value("1", 1)

    @pytest.mark.parametrize("value", ["", "-", "0x1f", "1_000", " 12", "1.5"])
    def test_rejects_non_positional_spellings(self, value):
        with pytest.raises(ValueError):
            decode_value(value, 16)


class TestDecodeShareSet:
    """Tests for document structure handling."""

    def test_end_to_end_document(self):
        doc = {
            "keys": {"n": 4, "k": 3},
            "1": {"base": 10, "value": "3"},
            "2": {"base": 10, "value": "6"},
            "3": {"base": 10, "value": "9"},
            "4": {"base": 10, "value": "12"},
        }

        share_set = decode_share_set(doc)

        assert share_set == ShareSet(
            n=4,
            k=3,
            shares=(Share(1, 3), Share(2, 6), Share(3, 9), Share(4, 12)),
        )
        assert len(share_set) == 4

    def test_preserves_document_order(self):
        """Shares are not sorted by x."""
        doc = document(**{
            "7": {"base": 10, "value": "1"},
            "2": {"base": 10, "value": "2"},
            "5": {"base": 10, "value": "3"},
        })

        xs = [share.x for share in decode_share_set(doc).shares]
        assert xs == [7, 2, 5]

    def test_mixed_bases(self):
        doc = document(**{
            "1": {"base": 2, "value": "111"},
            "2": {"base": 36, "value": "1Z"},
        })

        assert decode_share_set(doc).shares == (Share(1, 7), Share(2, 71))

    def test_large_identifier(self):
        key = str(10**40)
        doc = document(**{key: {"base": 10, "value": "1"}})
        assert decode_share_set(doc).shares[0].x == 10**40

    def test_string_integer_fields(self):
        doc = {
            "keys": {"n": "2", "k": "2"},
            "1": {"base": "16", "value": "a"},
        }

        share_set = decode_share_set(doc)
        assert (share_set.n, share_set.k) == (2, 2)
        assert share_set.shares == (Share(1, 10),)

    def test_no_shares(self):
        """Threshold checks happen at reconstruction, not decoding."""
        share_set = decode_share_set({"keys": {"n": 3, "k": 3}})
        assert share_set.shares == ()

    def test_missing_threshold_key(self):
        with pytest.raises(DecodeError) as exc_info:
            decode_share_set({"1": {"base": 10, "value": "3"}})

        assert exc_info.value.key == "keys"

    def test_missing_k(self):
        with pytest.raises(DecodeError, match="keys.k"):
            decode_share_set({"keys": {"n": 3}})

    def test_threshold_not_an_object(self):
        with pytest.raises(DecodeError, match="expected an object"):
            decode_share_set({"keys": [3, 2]})

    def test_zero_threshold(self):
        with pytest.raises(DecodeError, match="must be at least 1"):
            decode_share_set({"keys": {"n": 3, "k": 0}})

    def test_negative_total(self):
        with pytest.raises(DecodeError, match="must be non-negative"):
            decode_share_set({"keys": {"n": -1, "k": 1}})

    @pytest.mark.parametrize("raw", [True, 2.5, None, "two", [2]])
    def test_threshold_wrong_type(self, raw):
        with pytest.raises(DecodeError) as exc_info:
            decode_share_set({"keys": {"n": 3, "k": raw}})

        assert exc_info.value.key == "keys.k"

    def test_non_integer_identifier(self):
        doc = document(abc={"base": 10, "value": "3"})

        with pytest.raises(DecodeError) as exc_info:
            decode_share_set(doc)

        assert exc_info.value.key == "abc"

    def test_non_integer_base(self):
        doc = document(**{"1": {"base": "ten", "value": "3"}})

        with pytest.raises(DecodeError) as exc_info:
            decode_share_set(doc)

        assert exc_info.value.key == "1.base"

    def test_invalid_digit_names_key(self):
        doc = document(**{
            "1": {"base": 10, "value": "3"},
            "2": {"base": 8, "value": "19"},
        })

        with pytest.raises(DecodeError) as exc_info:
            decode_share_set(doc)

        assert exc_info.value.key == "2.value"
        assert "invalid in base 8" in str(exc_info.value)

    def test_value_not_a_string(self):
        doc = document(**{"1": {"base": 10, "value": 3}})

        with pytest.raises(DecodeError, match="1.value"):
            decode_share_set(doc)

    def test_missing_value(self):
        doc = document(**{"1": {"base": 10}})

        with pytest.raises(DecodeError, match="missing field"):
            decode_share_set(doc)

    def test_share_record_not_an_object(self):
        doc = document(**{"1": "3"})

        with pytest.raises(DecodeError) as exc_info:
            decode_share_set(doc)

        assert exc_info.value.key == "1"

    def test_root_not_an_object(self):
        with pytest.raises(DecodeError, match="<root>"):
            decode_share_set([1, 2, 3])

    def test_decode_error_is_value_error(self):
        with pytest.raises(ValueError):
            decode_share_set({})


class TestLongNumbers:
    """Decoding is not capped by the interpreter's str-to-int digit limit."""

    def test_5000_digit_decimal_value(self):
        assert decode_value("9" * 5000, 10) == 10**5000 - 1

    def test_5000_digit_base_36_value(self):
        assert decode_value("-" + "1" * 5000, 36) == -((36**5000 - 1) // 35)

    def test_5000_digit_identifier(self):
        key = "1" + "0" * 5000
        doc = document(**{key: {"base": 10, "value": "7"}})

        assert decode_share_set(doc).shares == (Share(10**5000, 7),)

    def test_5000_digit_string_threshold(self):
        doc = {"keys": {"n": "9" * 5000, "k": "1"}}
        assert decode_share_set(doc).n == 10**5000 - 1
