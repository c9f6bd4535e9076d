"""multilaunch: run a set of named shell commands side by side in one terminal."""

__all__ = ["__version__"]

from importlib.metadata import PackageNotFoundError, version as _pkg_version

# Read from installed metadata so the number only lives in pyproject.toml
try:
    __version__ = _pkg_version("multilaunch")
except PackageNotFoundError:
    # Source checkout without an install
    __version__ = "0.0.0+dev"
