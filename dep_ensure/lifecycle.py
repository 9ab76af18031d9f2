"""Lifecycle runtime boundary.

This module handles:
- Reading the buildpack identity from ``buildpack.toml``
- Assembling the BuildContext for one invocation
- Persisting the returned layers as layer metadata
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Callable
from pathlib import Path

from dep_ensure.layers import write_layer_metadata
from dep_ensure.types import BuildContext, BuildpackInfo, BuildResult

logger = logging.getLogger(__name__)

BUILDPACK_TOML = "buildpack.toml"


class BuildpackConfigError(Exception):
    """Raised when buildpack.toml is missing or malformed."""

    def __init__(self, message: str, code: str = "buildpack_config_error") -> None:
        super().__init__(message)
        self.code = code


def load_buildpack_info(cnb_path: Path) -> BuildpackInfo:
    """Read the ``[buildpack]`` table of a buildpack directory.

    Args:
        cnb_path: Buildpack root containing ``buildpack.toml``.

    Returns:
        BuildpackInfo with id, name and version.

    Raises:
        BuildpackConfigError: If the file is missing, unparsable, or lacks
            name/version.
    """
    path = Path(cnb_path) / BUILDPACK_TOML
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except OSError as e:
        raise BuildpackConfigError(f"failed to read {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise BuildpackConfigError(f"failed to parse {path}: {e}") from e

    table = data.get("buildpack")
    if not isinstance(table, dict):
        raise BuildpackConfigError(f"{path} has no [buildpack] table")

    missing = [key for key in ("name", "version") if not table.get(key)]
    if missing:
        raise BuildpackConfigError(
            f"{path} is missing buildpack {', '.join(missing)}"
        )

    return BuildpackInfo(
        name=str(table["name"]),
        version=str(table["version"]),
        id=str(table.get("id", "")),
    )


def run_build(
    build_func: Callable[[BuildContext], BuildResult],
    working_dir: Path,
    cnb_path: Path,
    layers_path: Path,
    platform_path: Path | None = None,
    stack: str = "",
) -> BuildResult:
    """Invoke a build function the way the lifecycle does.

    Args:
        build_func: Build function bound to its collaborators.
        working_dir: Application source directory.
        cnb_path: Buildpack root directory.
        layers_path: Root directory for this buildpack's layers.
        platform_path: Platform directory, if any.
        stack: Stack identifier.

    Returns:
        The BuildResult, after its layers were persisted.
    """
    context = BuildContext(
        working_dir=Path(working_dir),
        cnb_path=Path(cnb_path),
        stack=stack,
        buildpack_info=load_buildpack_info(cnb_path),
        layers_path=Path(layers_path),
        platform_path=Path(platform_path) if platform_path else None,
    )

    result = build_func(context)

    for layer in result.layers:
        write_layer_metadata(layer)
    logger.debug("Persisted %d layer(s) under %s", len(result.layers), layers_path)

    return result


__all__ = [
    "BUILDPACK_TOML",
    "BuildpackConfigError",
    "load_buildpack_info",
    "run_build",
]
