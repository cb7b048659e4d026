"""Tests for ``dsro solve`` CLI command."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import patch

from click.testing import CliRunner

from dsro.cli import main
from dsro.runtime.errors import ConvergenceTimeoutError

if TYPE_CHECKING:
    from pathlib import Path

_VALID_YAML = """\
version: "1"
name: three-resources
problem:
  p_target: 0.1
  v_target: 4
  resources:
    - p: [0.1, 0.4, 0.5]
      c: [0, 1, 2]
      copies: 2
    - p: [0.5, 0.5]
      c: [0, 5]
blackboard:
  cluster_size: 2
"""


def _write(tmp_path: Path, text: str = _VALID_YAML) -> Path:
    f = tmp_path / "run.yaml"
    f.write_text(text)
    return f


class TestSolveCommand:
    def test_dry_run(self, tmp_path: Path) -> None:
        f = _write(tmp_path)

        result = CliRunner().invoke(main, ["solve", str(f), "--dry-run"])

        assert result.exit_code == 0
        assert "validated successfully" in result.output
        assert "three-resources" in result.output
        assert "Resources: 3" in result.output

    def test_dry_run_invalid_yaml(self, tmp_path: Path) -> None:
        f = _write(tmp_path, "name: only-name\n")

        result = CliRunner().invoke(main, ["solve", str(f), "--dry-run"])

        assert result.exit_code != 0
        assert "Validation error" in result.output

    def test_dry_run_rejects_odd_degree(self, tmp_path: Path) -> None:
        text = _VALID_YAML + "gossip:\n  topology:\n    type: small_world\n    k: 3\n    p: 0.2\n"
        f = _write(tmp_path, text)

        result = CliRunner().invoke(main, ["solve", str(f), "--dry-run"])

        assert result.exit_code == 1
        assert "Validation error" in result.output
        assert "validated successfully" not in result.output

    def test_missing_file(self) -> None:
        result = CliRunner().invoke(main, ["solve", "/nonexistent/run.yaml"])
        assert result.exit_code != 0

    def test_gossip(self, tmp_path: Path) -> None:
        f = _write(tmp_path)

        result = CliRunner().invoke(main, ["solve", str(f)])

        assert result.exit_code == 0
        assert "Solution (gossip)" in result.output
        assert "Cost: 4" in result.output
        assert "[0, 1]" in result.output

    def test_blackboard_override(self, tmp_path: Path) -> None:
        f = _write(tmp_path)

        result = CliRunner().invoke(main, ["solve", str(f), "--protocol", "blackboard"])

        assert result.exit_code == 0
        assert "Solution (blackboard)" in result.output
        assert "Cycles: 2" in result.output

    def test_infeasible(self, tmp_path: Path) -> None:
        f = _write(tmp_path, _VALID_YAML.replace("v_target: 4", "v_target: 6"))

        result = CliRunner().invoke(main, ["solve", str(f)])

        assert result.exit_code == 0
        assert "infeasible" in result.output
        assert "(none)" in result.output

    def test_json(self, tmp_path: Path) -> None:
        f = _write(tmp_path)

        result = CliRunner().invoke(main, ["solve", str(f), "--json"])

        assert result.exit_code == 0
        assert '"protocol": "gossip"' in result.output
        assert '"cost": 4.0' in result.output

    def test_compare_optimal(self, tmp_path: Path) -> None:
        f = _write(tmp_path)

        result = CliRunner().invoke(main, ["solve", str(f), "--compare-optimal"])

        assert result.exit_code == 0
        assert "optimal" in result.output
        assert "Solutions" in result.output

    def test_verbose_flag(self, tmp_path: Path) -> None:
        f = _write(tmp_path)

        result = CliRunner().invoke(main, ["solve", str(f), "--verbose"])

        assert result.exit_code == 0
        assert "Solving: three-resources with gossip" in result.output

    def test_telemetry_flag(self, tmp_path: Path) -> None:
        f = _write(tmp_path)

        result = CliRunner().invoke(main, ["solve", str(f), "--dry-run", "--telemetry"])

        assert result.exit_code == 0

    def test_execution_error(self, tmp_path: Path) -> None:
        f = _write(tmp_path)

        with patch("dsro.sdk.runspec.RunSpecRunner.run", side_effect=ConvergenceTimeoutError(1.0, 0, 3)):
            result = CliRunner().invoke(main, ["solve", str(f)])

        assert result.exit_code == 1
        assert "Execution error" in result.output

    def test_version(self) -> None:
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output
