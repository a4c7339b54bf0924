"""Custom exceptions for rendering context."""

from typing import List, Optional


class RenderBackendError(RuntimeError):
    """
    Exception raised when a backend cannot produce a document.

    Attributes:
        errors: Parsed compiler errors (first ones first)
        log_excerpt: Tail of the compiler log, if one was written
    """

    def __init__(self, message: str, errors: Optional[List[str]] = None, log_excerpt: str = ""):
        self.errors = list(errors or [])
        self.log_excerpt = log_excerpt

        parts = [message]
        for error in self.errors[:5]:
            parts.append(f"  - {error}")
        if len(self.errors) > 5:
            parts.append(f"  ... and {len(self.errors) - 5} more errors")

        super().__init__("\n".join(parts))
