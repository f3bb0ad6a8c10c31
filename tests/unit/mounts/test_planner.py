"""Unit tests for the mount planner."""

import logging

import pytest
from agentmounts.core.settings import Settings
from agentmounts.mounts.models import MountSpec
from agentmounts.mounts.planner import (
    NoMountsAvailableError,
    build_mount_plan,
    dedupe_mounts,
    detect_scan_mounts,
    flatten_mounts,
    map_workspace_path,
    plan_mounts,
    require_scan_mounts,
)

WIDE = [
    MountSpec("/", "/host"),
    MountSpec("/mnt/c", "/mnt/c"),
    MountSpec("/mnt/d", "/mnt/d"),
]


def _everything_exists(path: str) -> bool:
    return True


def _exists_in(*paths: str):
    known = set(paths)
    return lambda path: path in known


class TestMapWorkspacePath:
    """Tests for map_workspace_path function."""

    def test_host_prefix_stripped(self) -> None:
        """Paths under /host map back to the host path."""
        spec = map_workspace_path("/host/home/me/proj")

        assert spec == MountSpec(source="/home/me/proj", dest="/host/home/me/proj")

    def test_host_root(self) -> None:
        """/host itself is the host root."""
        assert map_workspace_path("/host") == MountSpec(source="/", dest="/host")

    @pytest.mark.parametrize("path", ["/mnt/c/src/app", "/data/proj", "/hostile/proj"])
    def test_mirrored_paths(self, path: str) -> None:
        """Paths outside /host are mounted at the same location."""
        assert map_workspace_path(path) == MountSpec(source=path, dest=path)

    def test_path_normalized_first(self) -> None:
        """Redundant separators and dot segments are collapsed."""
        spec = map_workspace_path("/host//home/./me/proj/")

        assert spec == MountSpec(source="/home/me/proj", dest="/host/home/me/proj")


class TestBuildMountPlan:
    """Tests for build_mount_plan and plan_mounts."""

    def test_empty_discovery_keeps_wide_mounts(self) -> None:
        """Nothing discovered means the wide mounts unchanged, in order."""
        plan = build_mount_plan([], WIDE, exists=_everything_exists)

        assert plan.mounts == tuple(WIDE)
        assert plan.narrowed is False
        assert plan_mounts([], WIDE, exists=_everything_exists) == WIDE

    def test_narrows_to_workspaces(self) -> None:
        """Discovered workspaces replace the wide mounts."""
        discovered = ["/host/home/me/proj", "/mnt/c/work/app"]

        plan = build_mount_plan(discovered, WIDE, exists=_everything_exists)

        assert plan.narrowed is True
        assert plan.mounts == (
            MountSpec("/home/me/proj", "/host/home/me/proj"),
            MountSpec("/mnt/c/work/app", "/mnt/c/work/app"),
        )

    def test_duplicates_collapse(self) -> None:
        """Different spellings of one workspace give one mount."""
        discovered = ["/host/home/me/proj", "/host/home/me/proj/", "/host//home/me/proj"]

        mounts = plan_mounts(discovered, WIDE, exists=_everything_exists)

        assert mounts == [MountSpec("/home/me/proj", "/host/home/me/proj")]

    def test_missing_host_path_dropped(self, caplog: pytest.LogCaptureFixture) -> None:
        """Workspaces whose host path is gone are skipped with a warning."""
        discovered = ["/host/home/me/gone", "/host/home/me/proj"]

        with caplog.at_level(logging.WARNING, logger="agentmounts"):
            plan = build_mount_plan(discovered, WIDE, exists=_exists_in("/home/me/proj"))

        assert plan.mounts == (MountSpec("/home/me/proj", "/host/home/me/proj"),)
        assert plan.missing == ("/home/me/gone",)
        assert "Skipping missing host path /home/me/gone" in caplog.text

    def test_all_missing_keeps_wide_mounts(self) -> None:
        """If every workspace is dropped the wide mounts are used."""
        plan = build_mount_plan(["/host/a", "/mnt/c/b"], WIDE, exists=_exists_in())

        assert plan.mounts == tuple(WIDE)
        assert plan.narrowed is False
        assert plan.missing == ("/a", "/mnt/c/b")

    def test_same_host_path_from_different_mounts(self) -> None:
        """One host directory seen through two mounts keeps both destinations."""
        discovered = ["/host/mnt/c/proj", "/mnt/c/proj"]

        mounts = plan_mounts(discovered, WIDE, exists=_everything_exists)

        assert mounts == [
            MountSpec("/mnt/c/proj", "/host/mnt/c/proj"),
            MountSpec("/mnt/c/proj", "/mnt/c/proj"),
        ]


class TestHelpers:
    """Tests for dedupe_mounts and flatten_mounts."""

    def test_dedupe_keeps_first_order(self) -> None:
        """Duplicates are removed, first occurrence wins."""
        mounts = [MountSpec("/b", "/b"), MountSpec("/a", "/a"), MountSpec("/b", "/b")]

        assert dedupe_mounts(mounts) == [MountSpec("/b", "/b"), MountSpec("/a", "/a")]

    def test_flatten(self) -> None:
        """Each mount becomes a -v pair."""
        assert flatten_mounts(WIDE[:2]) == ["-v", "/:/host", "-v", "/mnt/c:/mnt/c"]


class TestDetectScanMounts:
    """Tests for detect_scan_mounts and require_scan_mounts."""

    def test_root_and_drives(self) -> None:
        """The host root goes to /host and existing drives mirror 1:1."""
        mounts = detect_scan_mounts(Settings(), exists=_exists_in("/", "/mnt/c", "/mnt/e"))

        assert mounts == [
            MountSpec("/", "/host"),
            MountSpec("/mnt/c", "/mnt/c"),
            MountSpec("/mnt/e", "/mnt/e"),
        ]

    def test_configured_roots_included(self) -> None:
        """Existing scan and extra roots are mirrored after the host root."""
        settings = Settings(scan_roots=["D:\\code", "/missing"], extra_roots=["/srv/ws"])
        exists = _exists_in("/", "/mnt/d/code", "/srv/ws")

        mounts = detect_scan_mounts(settings, exists=exists)

        assert mounts == [
            MountSpec("/", "/host"),
            MountSpec("/mnt/d/code", "/mnt/d/code"),
            MountSpec("/srv/ws", "/srv/ws"),
        ]

    def test_no_duplicate_drive_mounts(self) -> None:
        """A configured root equal to a drive mount appears once."""
        settings = Settings(scan_roots=["/mnt/c"])

        mounts = detect_scan_mounts(settings, exists=_exists_in("/mnt/c"))

        assert mounts == [MountSpec("/mnt/c", "/mnt/c")]

    def test_require_raises_when_empty(self) -> None:
        """No mounts at all is an error."""
        with pytest.raises(NoMountsAvailableError, match="AGENT_SCAN_ROOTS"):
            require_scan_mounts(Settings(), exists=_exists_in())

    def test_require_returns_mounts(self) -> None:
        """require_scan_mounts passes through a non-empty result."""
        assert require_scan_mounts(Settings(), exists=_exists_in("/")) == [
            MountSpec("/", "/host")
        ]
