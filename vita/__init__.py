"""
VITA - Visual Itemized Typesetting Architecture

Document-templating and rendering core of a resume builder. Given a structured
resume record and a declarative layout/theme configuration, VITA composes a
paginated document tree and hands it to a rendering backend.

Architecture:
- Templating Context: Theme cascade, rich text, section rendering, column layout
- Rendering Context: Backends that turn the composed tree into document bytes
"""

__version__ = "0.1.0"
