"""Tests for the case runner and the command line interface."""

import json

import pytest
from jsoncompare import CaseRunner, run_cases
from jsoncompare.cli import main
from jsoncompare.runner import load_case


@pytest.fixture
def case_folder(tmp_path):
    """Create a folder with passing, failing and broken case files."""
    (tmp_path / "a_prices.json").write_text(json.dumps({
        "name": "prices",
        "left": {"v": 1},
        "right": {"v": 2},
        "expected_equal": False,
    }))
    (tmp_path / "b_dates.yaml").write_text(
        "name: dates\n"
        "left:\n"
        "  created: 2024-01-01\n"
        "right:\n"
        "  created: \"2024-01-01\"\n"
    )
    (tmp_path / "c_broken.json").write_text('{"left": ')
    (tmp_path / "d_mismatch.json").write_text(json.dumps({
        "left": {"a": 1, "etag": "x"},
        "right": {"a": 2, "etag": "y"},
        "ignore_paths": ["etag"],
    }))
    (tmp_path / "notes.txt").write_text("not a case")
    return tmp_path


class TestCaseRunner:
    """Test running comparison cases."""

    def setup_method(self):
        self.runner = CaseRunner()

    def test_json_case_keeps_number_text(self, tmp_path):
        """Test that JSON case files keep literal number text for exact options."""
        path = tmp_path / "exact.json"
        path.write_text(
            '{"left": {"v": 1.50}, "right": {"v": 1.5},'
            ' "options": {"value_comparison": "exact"}, "expected_equal": false}'
        )
        result = self.runner.run_case(load_case(path), "exact")
        assert result.passed is True
        assert result.comparison["differences"][0]["path"] == "$.v"

    def test_case_options_override(self):
        """Test per-case options layered over the runner options."""
        case = {
            "left": {"Name": 1},
            "right": {"name": 1},
            "options": {"property_name_comparison": "ignore_case"},
        }
        assert self.runner.run_case(case, "names").passed is True

    def test_missing_side(self):
        """Test that a case without both sides fails with an error."""
        result = self.runner.run_case({"left": {}}, "half")
        assert result.passed is False
        assert "'left' and 'right'" in result.error

    def test_invalid_expected_equal(self):
        """Test that expected_equal must be a boolean."""
        result = self.runner.run_case({"left": 1, "right": 1, "expected_equal": "yes"}, "flag")
        assert result.passed is False
        assert "expected_equal" in result.error

    def test_invalid_options(self):
        """Test that bad case options fail the case."""
        result = self.runner.run_case({"left": 1, "right": 1, "options": {"colour": "red"}}, "opts")
        assert result.passed is False
        assert "unknown option" in result.error

    def test_run_folder(self, case_folder):
        """Test running a folder of case files."""
        report = run_cases(case_folder, print_report=False)
        assert report.total == 4
        assert report.passed == 2
        assert report.failed == 2
        assert report.pass_rate == "50.0%"

        by_name = {case.name: case for case in report.cases}
        assert by_name["prices"].passed is True
        assert by_name["dates"].passed is True
        assert by_name["c_broken"].error is not None
        assert by_name["d_mismatch"].passed is False
        assert by_name["d_mismatch"].comparison["differences"][0]["path"] == "$.a"

    def test_report_dict(self, case_folder):
        """Test the report's serializable form."""
        data = run_cases(case_folder, print_report=False).to_dict()
        assert data["summary"]["total_cases"] == 4
        assert data["timestamp"].endswith("Z")
        json.dumps(data)

    def test_printed_report(self, case_folder, capsys):
        """Test console output."""
        run_cases(case_folder)
        out = capsys.readouterr().out
        assert "PASS: prices" in out
        assert "FAIL: d_mismatch" in out
        assert "Case Results: 2/4 passed (50.0%)" in out

    def test_missing_folder(self, tmp_path):
        """Test that a missing folder raises."""
        with pytest.raises(FileNotFoundError):
            run_cases(tmp_path / "missing", print_report=False)


class TestCli:
    """Test the command line interface."""

    @pytest.fixture
    def files(self, tmp_path):
        def write(name, content):
            path = tmp_path / name
            path.write_text(content)
            return str(path)
        return write

    def test_diff_equal(self, files, capsys):
        """Test exit code 0 for equal documents."""
        code = main(["diff", files("l.json", '{"a": 1.50}'), files("r.json", '{"a": 1.5}')])
        assert code == 0
        assert "No differences detected." in capsys.readouterr().out

    def test_diff_different(self, files, capsys):
        """Test exit code 1 and the difference listing."""
        code = main(["diff", files("l.json", '{"a": 1}'), files("r.json", '{"a": 2}')])
        assert code == 1
        assert "Path '$.a': Value is not equal: 1 != 2." in capsys.readouterr().out

    def test_diff_flags(self, files):
        """Test option flags."""
        left = files("l.json", '{"a": 1.50, "Name": null}')
        right = files("r.json", '{"a": 1.5, "name": null}')
        assert main(["diff", left, right]) == 1
        assert main(["diff", left, right, "--ignore-case-names"]) == 0
        assert main(["diff", left, right, "--ignore-case-names", "--exact"]) == 1
        assert main(["diff", left, right, "--semantic-nulls"]) == 0
        assert main(["diff", left, right, "-i", "Name", "-i", "name"]) == 0
        assert main(["diff", left, right, "-i", "Name", "-i", "name", "--case-sensitive-paths"]) == 0
        assert main(["diff", left, right, "-i", "NAME", "-i", "name", "--case-sensitive-paths"]) == 1

    def test_diff_json_output(self, files, capsys):
        """Test machine readable output."""
        code = main(["diff", files("l.json", '[1, 2, 3]'), files("r.json", '[1, 2]'), "--json"])
        assert code == 1
        data = json.loads(capsys.readouterr().out)
        assert data["differences"][0]["kind"] == "ARRAY_LENGTH_MISMATCH"

    def test_diff_json_output_long_integers(self, files, capsys):
        """Test machine readable output for integers too long for int()."""
        left, right = "1" * 5000, "2" * 5000
        code = main(["diff", files("l.json", f'{{"n": {left}}}'), files("r.json", f'{{"n": {right}}}'), "--json"])
        assert code == 1
        data = json.loads(capsys.readouterr().out)
        assert str(data["differences"][0]["left"]) == left
        assert str(data["differences"][0]["right"]) == right

    def test_diff_config(self, files):
        """Test options and ignore paths from a configuration file."""
        config = files("compare.yaml", "max_differences: 1\nignore_paths:\n  - meta\n")
        left = files("l.json", '{"a": 1, "meta": {"etag": "x"}}')
        right = files("r.json", '{"a": 1, "meta": {"etag": "y"}}')
        assert main(["diff", left, right, "-c", config]) == 0

    def test_diff_errors(self, files, capsys):
        """Test exit code 2 for input errors."""
        left = files("l.json", '{"a": 1}')
        assert main(["diff", left, files("r.json", '{"a": }')]) == 2
        assert "JSON is not considered valid for 'right'" in capsys.readouterr().err
        assert main(["diff", left, left + ".missing"]) == 2
        assert main(["diff", left, left, "-m", "0"]) == 2

    def test_run(self, case_folder, tmp_path, capsys):
        """Test the run command and its report file."""
        report = tmp_path / "out" / "report.json"
        report.parent.mkdir()
        code = main(["run", str(case_folder), "-q", "-r", str(report)])
        assert code == 1
        assert capsys.readouterr().out == ""
        assert json.loads(report.read_text())["summary"]["failed"] == 2


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
