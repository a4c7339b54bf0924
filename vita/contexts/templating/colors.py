"""
Color Resolution

A template lets the user pick one accent color and decides, through an
allow-list of visual roles ("targets"), which parts of the document use it.
ColorResolver is that decision as a plain value: renderers receive it instead
of a closure, so it can be compared, serialized and tested on its own.

Known targets: headings, name, title, subtext, meta, text, links, icons,
decorations.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, FrozenSet, Iterable, Optional

from vita.contexts.templating.defaults import NEUTRAL_COLOR


@dataclass(frozen=True)
class ColorResolver:
    """
    Maps a semantic target to a color.

    Attributes:
        accent_color: User/template accent color
        allowed_targets: Targets that take the accent color
        default_fallback: Color for non-accent targets when the caller gives no fallback
        text_color: Column text color; when set it wins over any caller fallback

    Example:
        >>> colors = ColorResolver("#2563eb", frozenset({"headings"}))
        >>> colors.get_color("headings")
        '#2563eb'
        >>> colors.get_color("text", "#333333")
        '#333333'
    """

    accent_color: str
    allowed_targets: FrozenSet[str] = frozenset()
    default_fallback: str = NEUTRAL_COLOR
    text_color: Optional[str] = None

    @classmethod
    def create(
        cls,
        accent_color: str,
        allowed_targets: Iterable[str],
        default_fallback: Optional[str] = None,
    ) -> "ColorResolver":
        return cls(
            accent_color=accent_color,
            allowed_targets=frozenset(allowed_targets),
            default_fallback=default_fallback or NEUTRAL_COLOR,
        )

    def get_color(self, target: str, fallback: Optional[str] = None) -> str:
        """Accent color iff target is allowed, else fallback, else the neutral default."""
        if target in self.allowed_targets:
            return self.accent_color
        if self.text_color:
            return self.text_color
        if fallback is not None:
            return fallback
        return self.default_fallback

    def uses_accent(self, target: str) -> bool:
        return target in self.allowed_targets

    def with_text_color(self, text_color: Optional[str]) -> "ColorResolver":
        """
        Column-scoped resolver for regions with their own text color.

        Accent targets still resolve to the accent; everything else resolves to
        text_color. Returns self unchanged when text_color is empty.
        """
        if not text_color:
            return self
        return replace(self, text_color=text_color)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "accent_color": self.accent_color,
            "allowed_targets": sorted(self.allowed_targets),
            "default_fallback": self.default_fallback,
            "text_color": self.text_color,
        }
