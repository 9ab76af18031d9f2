"""Layer provisioning for the build step.

This module handles:
- Resolving a layer name to its directory under the layers root
- Creating the directory idempotently
- Writing layer metadata for the lifecycle runtime (``<name>.toml``)

Restoring and evicting cached layer contents is owned by the lifecycle
runtime; nothing here deletes a layer.
"""

from __future__ import annotations

import logging
from pathlib import Path

from dep_ensure.types import Environment, Layer

logger = logging.getLogger(__name__)


class LayerAcquisitionError(Exception):
    """Raised when a layer directory cannot be created or accessed."""

    def __init__(
        self,
        message: str,
        path: Path,
        code: str = "layer_acquisition_error",
    ) -> None:
        super().__init__(message)
        self.path = path
        self.code = code


def _describe_os_error(exc: OSError) -> str:
    """Return the OS error text in the lower-case form shells print."""
    if exc.strerror:
        return exc.strerror.lower()
    return str(exc)


def get_layer(layers_root: Path, name: str) -> Layer:
    """Return a cache-only layer, creating its directory if absent.

    Args:
        layers_root: Directory under which layers are materialized.
        name: Layer name.

    Returns:
        Layer with ``cache=True``, ``build=False``, ``launch=False`` and
        empty environment sets.

    Raises:
        LayerAcquisitionError: If the directory cannot be created or is not
            a directory.
    """
    path = Path(layers_root).absolute() / name

    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        message = (
            f"failed to acquire layer '{name}' at {path}: {_describe_os_error(e)}"
        )
        logger.debug(message)
        raise LayerAcquisitionError(message, path=path) from e

    logger.debug("Layer ready: %s", path)

    return Layer(
        name=name,
        path=path,
        build=False,
        launch=False,
        cache=True,
        shared_env={},
        build_env={},
        launch_env={},
        process_launch_env={},
    )


def _write_env_dir(env_dir: Path, env: Environment) -> None:
    env_dir.mkdir(parents=True, exist_ok=True)
    for key, value in env.items():
        (env_dir / key).write_text(value)


def write_layer_metadata(layer: Layer) -> Path:
    """Persist a layer record the way the lifecycle runtime reads it.

    Writes ``<layers_root>/<name>.toml`` with the export flags and one file
    per environment variable under the layer's ``env*`` directories.

    Args:
        layer: Layer returned from a build.

    Returns:
        Path to the written TOML file.

    Raises:
        LayerAcquisitionError: If the metadata cannot be written.
    """
    toml_path = layer.path.parent / f"{layer.name}.toml"
    content = (
        "[types]\n"
        f"  build = {str(layer.build).lower()}\n"
        f"  cache = {str(layer.cache).lower()}\n"
        f"  launch = {str(layer.launch).lower()}\n"
    )

    try:
        toml_path.write_text(content)

        if layer.shared_env:
            _write_env_dir(layer.path / "env", layer.shared_env)
        if layer.build_env:
            _write_env_dir(layer.path / "env.build", layer.build_env)
        if layer.launch_env:
            _write_env_dir(layer.path / "env.launch", layer.launch_env)
        for process_type, env in layer.process_launch_env.items():
            if env:
                _write_env_dir(layer.path / "env.launch" / process_type, env)
    except OSError as e:
        message = (
            f"failed to write metadata for layer '{layer.name}': "
            f"{_describe_os_error(e)}"
        )
        raise LayerAcquisitionError(message, path=toml_path) from e

    logger.debug("Wrote layer metadata: %s", toml_path)
    return toml_path


__all__ = ["LayerAcquisitionError", "get_layer", "write_layer_metadata"]
