"""Tests for RunSpecLoader."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from dsro.sdk.errors import RunSpecValidationError
from dsro.sdk.runspec import RunSpecLoader

if TYPE_CHECKING:
    from pathlib import Path

_VALID_YAML = """\
version: "1"
name: three-resources
protocol: blackboard
problem:
  p_target: 0.1
  v_target: 4
  resources:
    - p: [0.1, 0.4, 0.5]
      c: [0, 1, 2]
      copies: 2
    - p: [0.5, 0.5]
      c: [0, 5]
gossip:
  topology:
    type: small_world
    k: 2
    p: 0.2
    seed: 9
blackboard:
  cluster_size: 2
"""


class TestRunSpecLoader:
    def test_load_valid(self, tmp_path: Path) -> None:
        f = tmp_path / "run.yaml"
        f.write_text(_VALID_YAML)

        spec = RunSpecLoader(f).load()

        assert spec.name == "three-resources"
        assert spec.protocol == "blackboard"
        assert spec.problem.size == 3
        assert spec.gossip.topology.type == "small_world"
        assert spec.blackboard.cluster_size == 2

    def test_env_var_interpolation(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DSRO_V_TARGET", "5")
        f = tmp_path / "run.yaml"
        f.write_text(_VALID_YAML.replace("v_target: 4", "v_target: ${DSRO_V_TARGET}"))

        spec = RunSpecLoader(f).load()

        assert spec.problem.v_target == 5

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(RunSpecValidationError, match="Cannot read"):
            RunSpecLoader(tmp_path / "nope.yaml").load()

    def test_yaml_parse_error(self, tmp_path: Path) -> None:
        f = tmp_path / "bad.yaml"
        f.write_text("problem: [unclosed\n")
        with pytest.raises(RunSpecValidationError, match="YAML parse error"):
            RunSpecLoader(f).load()

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        f = tmp_path / "list.yaml"
        f.write_text("- 1\n- 2\n")
        with pytest.raises(RunSpecValidationError, match="must be a mapping"):
            RunSpecLoader(f).load()

    def test_schema_error(self, tmp_path: Path) -> None:
        f = tmp_path / "schema.yaml"
        f.write_text("name: only-name\n")
        with pytest.raises(RunSpecValidationError, match="problem"):
            RunSpecLoader(f).load()
