"""Shared type definitions for dep_ensure.

This module contains the dataclasses exchanged between the build step and the
lifecycle runtime, kept here to avoid circular imports between subpackages.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

Environment = Mapping[str, str]


@dataclass(frozen=True)
class BuildpackInfo:
    """Identity of the buildpack running the build step."""

    name: str
    version: str
    id: str = ""


@dataclass(frozen=True)
class Layer:
    """A named, filesystem-backed unit of build state.

    Attributes:
        name: Stable layer identifier.
        path: Absolute location, always ``layers_root / name``.
        build: Whether later build steps can see the layer.
        launch: Whether the layer is exported into the runtime image.
        cache: Whether the layer is restored on the next build of the app.
        shared_env: Variables exported for both build and launch.
        build_env: Variables exported for build only.
        launch_env: Variables exported for launch only.
        process_launch_env: Launch variables keyed by process type.

    Environment sets are stored as read-only mappings, so a Layer is not
    hashable but cannot be changed after construction.
    """

    name: str
    path: Path
    build: bool = False
    launch: bool = False
    cache: bool = False
    shared_env: Environment = field(default_factory=dict)
    build_env: Environment = field(default_factory=dict)
    launch_env: Environment = field(default_factory=dict)
    process_launch_env: Mapping[str, Environment] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in ("shared_env", "build_env", "launch_env"):
            object.__setattr__(
                self, name, MappingProxyType(dict(getattr(self, name)))
            )
        object.__setattr__(
            self,
            "process_launch_env",
            MappingProxyType(
                {
                    process_type: MappingProxyType(dict(env))
                    for process_type, env in self.process_launch_env.items()
                }
            ),
        )


@dataclass(frozen=True)
class BuildContext:
    """Input bundle for one build invocation. Read-only to the build step."""

    working_dir: Path
    cnb_path: Path
    stack: str
    buildpack_info: BuildpackInfo
    layers_path: Path
    platform_path: Path | None = None


@dataclass(frozen=True)
class BuildResult:
    """Ordered layer records returned by a successful build step."""

    layers: tuple[Layer, ...] = ()


__all__ = [
    "BuildContext",
    "BuildResult",
    "BuildpackInfo",
    "Environment",
    "Layer",
]
