"""litbuild: static documentation sites from annotated, executed examples.

Typical embedding use::

    from litbuild import Settings, build_site

    report = build_site(Settings(examples={"dir": "snippets"}))
"""

from __future__ import annotations

import warnings
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("litbuild")
except PackageNotFoundError:
    # Running from a checkout that was never installed.
    warnings.warn(
        "Package metadata for 'litbuild' not found; using fallback version '0.0.0+unknown'.",
        RuntimeWarning,
        stacklevel=2,
    )
    __version__ = "0.0.0+unknown"

# Imported after __version__ so cli.py can read it during package import
from litbuild.config import Settings  # noqa: E402
from litbuild.errors import BuildError, ErrorCode  # noqa: E402
from litbuild.models.build import BuildReport  # noqa: E402
from litbuild.pipeline import build_site  # noqa: E402

__all__ = [
    "__version__",
    "Settings",
    "BuildError",
    "ErrorCode",
    "BuildReport",
    "build_site",
]
