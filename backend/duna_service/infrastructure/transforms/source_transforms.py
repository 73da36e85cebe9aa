"""Reversible transforms applied to generated source before it is stored.

``reverse`` reverses the code-point sequence. It hides nothing; it exists so
stored sources can be kept in the reversed form some clients expect.
"""

from duna_service.application.interfaces.source_transform import SourceTransform


class IdentityTransform(SourceTransform):
    """No-op transform."""

    @property
    def name(self) -> str:
        return "none"

    def apply(self, text: str) -> str:
        return text

    def invert(self, text: str) -> str:
        return text


class ReverseTransform(SourceTransform):
    """Reverses the order of code points; self-inverse."""

    @property
    def name(self) -> str:
        return "reverse"

    def apply(self, text: str) -> str:
        return text[::-1]

    def invert(self, text: str) -> str:
        return text[::-1]


_TRANSFORMS: dict[str, type[SourceTransform]] = {
    "none": IdentityTransform,
    "reverse": ReverseTransform,
}


def get_source_transform(name: str) -> SourceTransform:
    """Look up a transform by its settings name (case-insensitive)."""
    key = (name or "none").strip().lower()
    try:
        return _TRANSFORMS[key]()
    except KeyError:
        raise ValueError(
            f"Unknown source transform '{name}'; expected one of {sorted(_TRANSFORMS)}"
        ) from None
