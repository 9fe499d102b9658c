"""Runs folders of comparison case files."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from .config import get_default_options, options_from_config
from .engine import JsonComparer
from .exceptions import JsonCompareError, ValidationError
from .models import ComparisonOptions
from .serializer import StandardJsonSerializer
from .values import JsonKind, JsonValue, from_python, parse_json, to_python

logger = logging.getLogger(__name__)

CASE_PATTERNS = ("*.json", "*.yaml", "*.yml")

# YAML may load timestamps as date objects
_DATA = StandardJsonSerializer()


@dataclass
class CaseResult:
    """Result of a single comparison case."""
    name: str
    case_path: str
    passed: bool
    expected_equal: bool = True
    comparison: Optional[dict] = None
    error: Optional[str] = None

    def to_dict(self) -> dict:
        result = {
            "name": self.name,
            "case_path": self.case_path,
            "passed": self.passed,
            "expected_equal": self.expected_equal,
        }
        if self.comparison:
            result["comparison"] = self.comparison
        if self.error:
            result["error"] = self.error
        return result


@dataclass
class RunReport:
    """Report across all cases of a run."""
    total: int = 0
    passed: int = 0
    failed: int = 0
    cases: list[CaseResult] = field(default_factory=list)
    timestamp: str = ""

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')

    @property
    def pass_rate(self) -> str:
        return f"{(self.passed / self.total * 100):.1f}%" if self.total > 0 else "0.0%"

    def add(self, result: CaseResult):
        self.cases.append(result)
        self.total += 1
        if result.passed:
            self.passed += 1
        else:
            self.failed += 1

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "summary": {
                "total_cases": self.total,
                "passed": self.passed,
                "failed": self.failed,
                "pass_rate": self.pass_rate,
            },
            "cases": [c.to_dict() for c in self.cases],
        }

    def print_summary(self):
        print(f"\nCase Results: {self.passed}/{self.total} passed ({self.pass_rate})")
        if self.failed > 0:
            print(f"  Failed: {self.failed}")
            for case in self.cases:
                if not case.passed:
                    reason = case.error or (
                        "expected equal documents" if case.expected_equal
                        else "expected differences, none found"
                    )
                    print(f"    {case.name}: {reason}")


def load_case(path: Union[str, Path]) -> dict:
    """
    Load a case file.

    JSON case files are parsed with the engine's own parser so that numbers
    keep their literal text; YAML case files go through ``yaml.safe_load``.
    """
    path = Path(path)
    content = path.read_text(encoding='utf-8')

    if path.suffix.lower() == ".json":
        tree = parse_json(content, str(path))
        if tree.kind != JsonKind.OBJECT:
            raise ValidationError(f"Case file must contain an object: {path}")
        case = {}
        for name, value in tree.members:
            case.setdefault(name, value)
        return case

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ValidationError(f"Failed to parse case file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValidationError(f"Case file must contain a mapping: {path}")
    return data


def _plain(value: Any) -> Any:
    return to_python(value) if isinstance(value, JsonValue) else value


class CaseRunner:
    """
    Runs comparison cases.

    Each case holds ``left`` and ``right`` documents plus optional
    ``name``, ``ignore_paths``, ``expected_equal`` (default true) and
    ``options`` overriding the runner's options.
    """

    def __init__(self, options: Optional[ComparisonOptions] = None):
        self.options = options or get_default_options()

    def run_case(self, case: dict, name: str, case_path: str = "") -> CaseResult:
        """Run a single case; errors fail the case instead of propagating."""
        expected_equal = True
        try:
            value = _plain(case.get("expected_equal", True))
            if not isinstance(value, bool):
                raise ValidationError("expected_equal must be a boolean")
            expected_equal = value
            if "left" not in case or "right" not in case:
                raise ValidationError("case requires both 'left' and 'right'")

            options = self.options
            overrides = _plain(case.get("options"))
            if overrides:
                options = ComparisonOptions.from_dict({**options.to_dict(), **overrides}, name)
            _, ignore_paths = options_from_config(
                {"ignore_paths": _plain(case.get("ignore_paths"))}, name
            )

            result = JsonComparer(options).compare_trees(
                from_python(_DATA.to_data(case["left"]), "left"),
                from_python(_DATA.to_data(case["right"]), "right"),
                ignore_paths
            )
        except (JsonCompareError, TypeError) as e:
            logger.debug("Case %s failed with error: %s", name, e)
            return CaseResult(
                name=name,
                case_path=case_path,
                passed=False,
                expected_equal=expected_equal,
                error=str(e)
            )

        return CaseResult(
            name=name,
            case_path=case_path,
            passed=result.has_differences() != expected_equal,
            expected_equal=expected_equal,
            comparison=result.to_dict()
        )

    def run_folder(self, folder: Union[str, Path], print_report: bool = True) -> RunReport:
        """Run all case files in a folder."""
        folder_path = Path(folder)
        if not folder_path.is_dir():
            raise FileNotFoundError(f"Case folder not found: {folder_path}")

        case_files = sorted({p for pattern in CASE_PATTERNS for p in folder_path.glob(pattern)})
        report = RunReport()

        for case_file in case_files:
            try:
                case = load_case(case_file)
            except JsonCompareError as e:
                result = CaseResult(
                    name=case_file.stem,
                    case_path=str(case_file),
                    passed=False,
                    error=str(e)
                )
            else:
                name = str(_plain(case.get("name")) or case_file.stem)
                result = self.run_case(case, name, str(case_file))

            report.add(result)
            if print_report:
                print(f"{'PASS' if result.passed else 'FAIL'}: {result.name}")

        if print_report:
            report.print_summary()

        return report


def run_cases(
    folder: Union[str, Path],
    options: Optional[ComparisonOptions] = None,
    print_report: bool = True
) -> RunReport:
    """
    Run every case file in a folder.

        from jsoncompare import run_cases
        report = run_cases("tests/cases")

    Returns:
        RunReport with all results
    """
    return CaseRunner(options).run_folder(folder, print_report)
