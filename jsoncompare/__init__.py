"""
jsoncompare - Structural JSON Comparison Engine

Decides whether two JSON documents are semantically equal, at which paths
they diverge and why. Object member order is never significant; value
equivalence, null handling, member-name matching, ignored paths and the
difference cap are tunable through ComparisonOptions.
"""

from .engine import JsonComparer, compare_json, compare_trees, compare_values
from .models import (
    ComparisonOptions,
    ComparisonResult,
    Difference,
    DifferenceKind,
    NameComparison,
    NullComparison,
    ValueComparison,
)
from .values import (
    JsonKind,
    JsonValue,
    JsonNull,
    JsonBoolean,
    JsonNumber,
    JsonString,
    JsonArray,
    JsonObject,
    parse_json,
    from_python,
    to_python,
    MAX_DEPTH,
)
from .paths import PathTracker, normalize_path, ROOT_PATH
from .collector import DifferenceCollector
from .hasher import ValueHasher
from .equality import JsonEqualityComparer, JsonKey
from .serializer import JsonSerializer, StandardJsonSerializer
from .config import (
    get_default_options,
    set_default_options,
    reset_default_options,
    load_options,
)
from .assertions import assert_json, assert_values
from .runner import CaseRunner, CaseResult, RunReport, run_cases
from .exceptions import (
    JsonCompareError,
    ValidationError,
    JsonParseError,
    MaxDepthExceededError,
    SerializationError,
    ConfigError,
)

__version__ = "1.0.0"
__all__ = [
    # Engine
    "JsonComparer",
    "compare_json",
    "compare_trees",
    "compare_values",
    # Options and results
    "ComparisonOptions",
    "ComparisonResult",
    "Difference",
    "DifferenceKind",
    "NameComparison",
    "NullComparison",
    "ValueComparison",
    # Value model
    "JsonKind",
    "JsonValue",
    "JsonNull",
    "JsonBoolean",
    "JsonNumber",
    "JsonString",
    "JsonArray",
    "JsonObject",
    "parse_json",
    "from_python",
    "to_python",
    "MAX_DEPTH",
    # Traversal
    "PathTracker",
    "normalize_path",
    "ROOT_PATH",
    "DifferenceCollector",
    # Equality and hashing
    "ValueHasher",
    "JsonEqualityComparer",
    "JsonKey",
    # Serialization
    "JsonSerializer",
    "StandardJsonSerializer",
    # Configuration
    "get_default_options",
    "set_default_options",
    "reset_default_options",
    "load_options",
    # Assertions
    "assert_json",
    "assert_values",
    # Case runner
    "CaseRunner",
    "CaseResult",
    "RunReport",
    "run_cases",
    # Errors
    "JsonCompareError",
    "ValidationError",
    "JsonParseError",
    "MaxDepthExceededError",
    "SerializationError",
    "ConfigError",
]
