"""dep-ensure buildpack - Cloud Native Buildpack step for Go `dep` projects.

This package provides the detect and build phases that provision the
dependency cache layer and run `dep ensure` against an application workspace.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
