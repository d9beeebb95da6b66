"""Custom build hook for Hatchling to generate build info."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any

from hatchling.builders.hooks.plugin.interface import BuildHookInterface

BUILD_INFO_PATH = "linemark/_build_info.py"


class CustomBuildHook(BuildHookInterface):
    """Embed the git commit and date into the built package."""

    def initialize(self, version: str, build_data: dict[str, Any]) -> None:
        target_path = Path(self.root) / BUILD_INFO_PATH
        commit = self._run_git(["rev-parse", "HEAD"])
        date = self._run_git(["show", "-s", "--format=%cI", "HEAD"])
        target_path.write_text(
            "# Auto-generated at build time.\n"
            f"COMMIT = {commit!r}\n"
            f"DATE = {date!r}\n",
            encoding="utf-8",
        )
        build_data.setdefault("artifacts", []).append(BUILD_INFO_PATH)

    def _run_git(self, args: list[str]) -> str | None:
        try:
            out = subprocess.check_output(
                ["git", *args], cwd=self.root, stderr=subprocess.DEVNULL
            )
            return out.decode().strip() or None
        except (subprocess.CalledProcessError, OSError):
            # A build without git still succeeds, just without commit info
            return None
