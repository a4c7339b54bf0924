"""Custom exceptions for templating context."""

from pathlib import Path
from typing import Optional


class InvalidTemplateConfigError(ValueError):
    """
    Exception raised when a preset or template catalog file is malformed.

    Raised only while loading configuration files; composing a document from a
    valid catalog never raises.
    """

    pass


class UnknownLayoutTypeError(InvalidTemplateConfigError):
    """
    Exception raised when a template entry names a layout type that does not exist.

    Attributes:
        template_id: Template whose entry is invalid
        layout_type: The offending value
        catalog_path: Catalog file the entry came from
    """

    def __init__(
        self,
        template_id: str,
        layout_type: str,
        catalog_path: Optional[Path] = None,
    ):
        self.template_id = template_id
        self.layout_type = layout_type
        self.catalog_path = catalog_path

        parts = [f"Template '{template_id}' has unknown layout type '{layout_type}'"]
        if catalog_path:
            parts.append(f"\nCatalog: {catalog_path}")

        super().__init__("\n".join(parts))
