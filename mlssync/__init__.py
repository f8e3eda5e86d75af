"""
mlssync package initializer.

This package synchronizes MLS listings exposed through a RESO/OData web API
into a local listing store, keeping media and an audit log of sync runs.

The package exposes a ``__version__`` attribute indicating the installed
version of mlssync. The version is read from pyproject.toml via
importlib.metadata – this is the single source of truth.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("mlssync")
except PackageNotFoundError:
    # Package is not installed (running from source without pip install -e .)
    __version__ = "0.0.0.dev"

__all__: list[str] = ["__version__"]
