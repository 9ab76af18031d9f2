"""Build phase orchestration.

This module handles:
- Acquiring the ``depcachedir`` cache layer
- Running the injected build process once against the workspace
- Timing the run with an injected clock and reporting it

Any failure aborts the build step; retries are left to the lifecycle runtime.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

from dep_ensure.layers import get_layer
from dep_ensure.logs import Emitter, format_duration
from dep_ensure.types import BuildContext, BuildResult

logger = logging.getLogger(__name__)

DEP_CACHE_LAYER_NAME = "depcachedir"


class BuildProcess(Protocol):
    """Performs dependency resolution against a workspace."""

    def execute(self, workspace: Path) -> None:
        """Resolve dependencies; raise to abort the build."""


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Clock:
    """Time source used only to measure elapsed build time.

    Args:
        now: Callable returning the current time.
    """

    def __init__(self, now: Callable[[], datetime] = _utc_now) -> None:
        self._now = now

    def now(self) -> datetime:
        """Return the current time from the wrapped callable."""
        return self._now()


def build(
    context: BuildContext,
    build_process: BuildProcess,
    emitter: Emitter,
    clock: Clock,
) -> BuildResult:
    """Run the build step for one build invocation.

    Args:
        context: Build inputs from the lifecycle runtime.
        build_process: Dependency-resolution process to run.
        emitter: Sink for user-facing build output.
        clock: Time source for the elapsed-time report.

    Returns:
        BuildResult holding the single ``depcachedir`` layer.

    Raises:
        LayerAcquisitionError: If the cache layer directory is unusable.
        Exception: Whatever ``build_process.execute`` raised, unchanged.
    """
    info = context.buildpack_info
    emitter.title(f"{info.name} {info.version}")

    layer = get_layer(context.layers_path, DEP_CACHE_LAYER_NAME)

    emitter.process("Executing build process")
    started_at = clock.now()
    try:
        build_process.execute(context.working_dir)
    except Exception:
        logger.debug("Build process failed after %s", clock.now() - started_at)
        raise
    finished_at = clock.now()

    emitter.action(f"Completed in {format_duration(finished_at - started_at)}")
    emitter.break_()

    return BuildResult(layers=(layer,))


def make_build(
    build_process: BuildProcess,
    emitter: Emitter,
    clock: Clock,
) -> Callable[[BuildContext], BuildResult]:
    """Bind collaborators into a build function taking only the context."""

    def build_func(context: BuildContext) -> BuildResult:
        return build(context, build_process, emitter, clock)

    return build_func


__all__ = [
    "DEP_CACHE_LAYER_NAME",
    "BuildProcess",
    "Clock",
    "build",
    "make_build",
]
