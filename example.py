"""Example usage of the jsoncompare engine."""

import json
from jsoncompare import (
    ComparisonOptions,
    JsonComparer,
    JsonKey,
    NullComparison,
    ValueComparison,
    assert_json,
)

# Response recorded from the legacy system
expected = """
{
    "id": "INV-001",
    "customerId": "A1B2C3D4-E5F6-4711-8899-AABBCCDDEEFF",
    "total": 100.00,
    "status": "paid",
    "createdAt": "2025-02-02T10:30:00Z",
    "updatedAt": "2025-02-02T11:00:00Z",
    "discount": null,
    "lineItems": [
        {"sku": "WIDGET-001", "quantity": 5, "unitPrice": 10.00},
        {"sku": "GADGET-002", "quantity": 2, "unitPrice": 25.50}
    ]
}
"""

# Same invoice from the new system
actual = """
{
    "lineItems": [
        {"sku": "WIDGET-001", "quantity": 5, "unitPrice": 10},
        {"sku": "GADGET-002", "quantity": 2, "unitPrice": 25.5}
    ],
    "status": "paid",
    "total": 100,
    "createdAt": "2025-02-02T11:30:00.000+01:00",
    "updatedAt": "2025-02-02T11:05:00Z",
    "customerId": "a1b2c3d4-e5f6-4711-8899-aabbccddeeff",
    "id": "INV-001"
}
"""


def main():
    print("=" * 60)
    print("jsoncompare - Example")
    print("=" * 60)

    # Semantic values, but a null member still differs from a missing one
    comparer = JsonComparer(ComparisonOptions())
    result = comparer.compare_json(expected, actual, ["updatedAt"])

    print(f"\nEqual: {result.are_equal}")
    print(result.to_display_string())

    print("\nWith semantic nulls:")
    options = ComparisonOptions(null_comparison=NullComparison.SEMANTIC)
    result = JsonComparer(options).compare_json(expected, actual, ["updatedAt"])
    print(result.to_display_string())

    print("\n" + "-" * 60)
    print("Full JSON Report:")
    print(json.dumps(result.to_dict(), indent=2))


def example_exact():
    """Exact comparison reports every differently written value."""
    print("\n" + "=" * 60)
    print("Example with Exact Comparison")
    print("=" * 60)

    options = ComparisonOptions(
        value_comparison=ValueComparison.EXACT,
        null_comparison=NullComparison.SEMANTIC,
        max_differences=3
    )
    result = JsonComparer(options).compare_json(expected, actual, ["updatedAt"])

    print(f"\nDifferences found: {result.difference_count}")
    for diff in result.differences:
        print(f"  - [{diff.kind.value}] {diff.path}")
        print(f"    {diff.message}")
    if result.truncated:
        print(f"  (stopped after {result.max_differences})")


def example_assertion():
    """Assertion helpers raise AssertionError with the difference listing."""
    print("\n" + "=" * 60)
    print("Example with Assertions")
    print("=" * 60)

    try:
        assert_json(expected, actual, "updatedAt", options=ComparisonOptions(preamble="Invoice INV-001"))
    except AssertionError as e:
        print(f"\n{e}")

    print("\nDistinct documents:")
    seen = {JsonKey(expected), JsonKey(actual), JsonKey('{"id": "INV-001"}')}
    print(f"  {len(seen)} distinct of 3")


if __name__ == "__main__":
    main()
    example_exact()
    example_assertion()
