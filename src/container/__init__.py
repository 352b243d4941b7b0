"""Package access layer — read-only view over a presentation's zip container.

Exposes the named XML parts of a .pptx file to the extractor without
leaking zipfile details, and turns unreadable input into PackageError.
"""

from .zip_package import PackageError, PresentationPackage, open_package

__all__ = ["PackageError", "PresentationPackage", "open_package"]
