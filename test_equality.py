"""Tests for semantic equality, hashing and JsonKey."""

import pytest
from jsoncompare import (
    ComparisonOptions,
    JsonArray,
    JsonEqualityComparer,
    JsonKey,
    MAX_DEPTH,
    MaxDepthExceededError,
    NameComparison,
    NullComparison,
    ValueComparison,
    ValueHasher,
    parse_json,
)

EQUAL_PAIRS = [
    ('{"a": 1.50, "b": [1, "x"]}', '{"b": [1.0, "x"], "a": 1.5}'),
    ('"2024-01-01T00:00:00Z"', '"2024-01-01T00:00:00.000Z"'),
    ('"2024-01-01T01:00:00+01:00"', '"2024-01-01T00:00:00Z"'),
    ('"2024-01-01T10:30:00"', '"2024-01-01T10:30:00.0000000"'),
    ('"A1B2C3D4-E5F6-4711-8899-AABBCCDDEEFF"', '"a1b2c3d4-e5f6-4711-8899-aabbccddeeff"'),
    ('1e2', '100'),
    ('0', '-0.0'),
    ('{"a": {"b": [null, true]}}', '{"a": {"b": [null, true]}}'),
    ('1e-9999999999999999999', '0'),
    ('-1e-9999999999999999999', '1e-9999999999999999999'),
    ('[1e-9999999999999999999, -0]', '[0.0, 0]'),
]


class TestJsonEqualityComparer:
    """Test equality and hash consistency."""

    def setup_method(self):
        self.comparer = JsonEqualityComparer()

    @pytest.mark.parametrize("left,right", EQUAL_PAIRS)
    def test_equal_values_hash_equal(self, left, right):
        """Test that equal documents produce equal hashes."""
        assert self.comparer.equals(left, right) is True
        assert self.comparer.hash(left) == self.comparer.hash(right)

    def test_unequal_values(self):
        """Test that different documents are not equal."""
        assert self.comparer.equals('{"a": 1}', '{"a": 2}') is False
        assert self.comparer.hash('[1, 2]') != self.comparer.hash('[2, 1]')

    def test_exact_mode(self):
        """Test that exact comparison hashes the literal text."""
        comparer = JsonEqualityComparer(ComparisonOptions(value_comparison=ValueComparison.EXACT))
        assert comparer.equals('1.50', '1.5') is False
        assert comparer.hash('1.50') != comparer.hash('1.5')
        assert comparer.hash('{"a": 1, "b": 2}') == comparer.hash('{"b": 2, "a": 1}')

    def test_exact_mode_string_escapes(self):
        """Test that exact comparison hashes strings as written."""
        comparer = JsonEqualityComparer(ComparisonOptions(value_comparison=ValueComparison.EXACT))
        assert comparer.equals('"\\u00e9"', '"é"') is False
        assert comparer.hash('"\\u00e9"') != comparer.hash('"é"')
        assert comparer.hash('["\\u00e9"]') == comparer.hash('[ "\\u00e9" ]')
        assert self.comparer.hash('"\\u00e9"') == self.comparer.hash('"é"')

    def test_hash_depth_limit(self):
        """Test that trees nesting too deep are rejected rather than overflowing."""
        tree = JsonArray()
        for _ in range(MAX_DEPTH + 1):
            tree = JsonArray((tree,))
        with pytest.raises(MaxDepthExceededError):
            ValueHasher().hash(tree)

    def test_semantic_nulls(self):
        """Test that null members do not affect the hash under semantic nulls."""
        comparer = JsonEqualityComparer(ComparisonOptions(null_comparison=NullComparison.SEMANTIC))
        assert comparer.equals('{"a": 1, "b": null}', '{"a": 1}') is True
        assert comparer.hash('{"a": 1, "b": null}') == comparer.hash('{"a": 1}')

    def test_ignore_case_names(self):
        """Test that names hash case-insensitively when matched that way."""
        comparer = JsonEqualityComparer(
            ComparisonOptions(property_name_comparison=NameComparison.IGNORE_CASE)
        )
        assert comparer.equals('{"Name": 1}', '{"name": 1}') is True
        assert comparer.hash('{"Name": 1}') == comparer.hash('{"name": 1}')

    def test_none_handling(self):
        """Test null references."""
        assert self.comparer.equals(None, None) is True
        assert self.comparer.equals(None, '1') is False
        assert self.comparer.equals('1', None) is False
        assert self.comparer.hash(None) == 0

    def test_hash_accepts_trees(self):
        """Test that text and parsed trees hash the same."""
        text = '{"a": [1, 2]}'
        assert self.comparer.hash(text) == self.comparer.hash(parse_json(text))

    def test_hash_is_64_bit_and_stable(self):
        """Test that hashes fit 64 bits and do not depend on the instance."""
        tree = parse_json('{"a": "b"}')
        value = ValueHasher().hash(tree)
        assert 0 <= value < 2 ** 64
        assert ValueHasher().hash(parse_json('{"a": "b"}')) == value


class TestJsonKey:
    """Test using documents as set and dict keys."""

    def test_set_membership(self):
        """Test that semantically equal documents collapse in a set."""
        keys = {
            JsonKey('{"a": 1, "b": 2}'),
            JsonKey('{"b": 2, "a": 1.0}'),
            JsonKey('[1]'),
        }
        assert len(keys) == 2
        assert JsonKey('{"a": 1.00, "b": 2}') in keys

    def test_dict_lookup(self):
        """Test dict lookups by document."""
        cache = {JsonKey('{"id": "2024-01-01T00:00:00Z"}'): "hit"}
        assert cache[JsonKey('{"id": "2024-01-01T00:00:00.0Z"}')] == "hit"

    def test_custom_comparer(self):
        """Test keys built from a configured comparer."""
        comparer = JsonEqualityComparer(ComparisonOptions(value_comparison=ValueComparison.EXACT))
        assert comparer.key('1.50') != comparer.key('1.5')
        assert comparer.key('1.50') == comparer.key('1.50')

    def test_repr(self):
        """Test the compact representation."""
        assert repr(JsonKey('{ "a" : 1 }')) == 'JsonKey({"a":1})'


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
