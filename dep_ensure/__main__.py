"""Allow running the buildpack with ``python -m dep_ensure``."""

from dep_ensure.cli import app

if __name__ == "__main__":
    app()
