"""wsver: keep every package of a Cargo workspace on one version."""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
