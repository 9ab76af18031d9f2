"""Detect phase.

The buildpack participates only when the workspace is managed by dep, which
is signalled by a ``Gopkg.toml`` at the workspace root.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

GOPKG_TOML = "Gopkg.toml"
PROVIDES = "dep-ensure"
REQUIRES = "dep"


@dataclass(frozen=True)
class DetectResult:
    """Outcome of the detect phase."""

    passed: bool
    reason: str = ""
    plan: dict[str, Any] = field(default_factory=dict)


def detect(working_dir: Path) -> DetectResult:
    """Decide whether this buildpack applies to a workspace.

    Args:
        working_dir: Application source directory.

    Returns:
        Passing DetectResult with the build plan, or a failing one with a
        reason.
    """
    gopkg = Path(working_dir) / GOPKG_TOML
    if not gopkg.is_file():
        return DetectResult(passed=False, reason=f"no {GOPKG_TOML} in {working_dir}")

    return DetectResult(
        passed=True,
        plan={
            "provides": [{"name": PROVIDES}],
            "requires": [{"name": REQUIRES}, {"name": PROVIDES}],
        },
    )


def write_plan(plan: dict[str, Any], plan_path: Path) -> Path:
    """Write the build plan as TOML for the lifecycle.

    Args:
        plan: Build plan with ``provides`` and ``requires`` entries.
        plan_path: Destination file passed by the lifecycle.

    Returns:
        The written path.
    """
    lines: list[str] = []
    for section in ("provides", "requires"):
        for entry in plan.get(section, []):
            lines.append(f"[[{section}]]")
            lines.append(f"  name = \"{entry['name']}\"")
            lines.append("")

    plan_path = Path(plan_path)
    plan_path.write_text("\n".join(lines))
    return plan_path


__all__ = ["GOPKG_TOML", "DetectResult", "detect", "write_plan"]
