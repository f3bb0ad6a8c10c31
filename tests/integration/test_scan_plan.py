"""Integration tests for scan followed by plan.

Runs the CLI against a real directory tree: scan writes the registry,
plan reads it back and narrows the mounts.
"""

import json
from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

from agentmounts.cli.main import app
from agentmounts.mounts.models import MountSpec
from typer.testing import CliRunner

runner = CliRunner()


def test_scan_then_plan(isolated_env: Path, make_workspace: Callable[[str], Path]) -> None:
    """Workspaces found by scan become the planned mounts."""
    alpha = make_workspace("ws/alpha")
    beta = make_workspace("ws/team/beta")
    make_workspace("ws/node_modules/ignored")
    root = isolated_env / "ws"

    scan = runner.invoke(app, ["scan", str(root)])
    assert scan.exit_code == 0

    with patch(
        "agentmounts.cli.commands.plan.require_scan_mounts",
        return_value=[MountSpec("/", "/host")],
    ):
        plan = runner.invoke(app, ["-q", "plan", "--format", "json"])

    assert plan.exit_code == 0
    data = json.loads(plan.output)
    assert data["narrowed"] is True
    assert sorted(m["source"] for m in data["mounts"]) == sorted([str(alpha), str(beta)])
    assert all(m["source"] == m["dest"] for m in data["mounts"])


def test_removed_workspace_is_dropped(
    isolated_env: Path, make_workspace: Callable[[str], Path]
) -> None:
    """A workspace deleted after the scan is left out of the plan."""
    keep = make_workspace("ws/keep")
    gone = make_workspace("ws/gone")
    runner.invoke(app, ["scan", str(isolated_env / "ws")])

    for child in sorted(gone.rglob("*"), reverse=True):
        child.rmdir()
    gone.rmdir()

    with (
        patch(
            "agentmounts.cli.commands.plan.require_scan_mounts",
            return_value=[MountSpec("/", "/host")],
        ),
        patch("agentmounts.mounts.planner.logger") as mock_logger,
    ):
        plan = runner.invoke(app, ["-q", "plan", "--format", "json"])

    data = json.loads(plan.output)
    mock_logger.warning.assert_called_once_with("Skipping missing host path %s", str(gone))
    assert [m["source"] for m in data["mounts"]] == [str(keep)]
    assert data["missing"] == [str(gone)]
