"""Registry of named style guides. Presets are authoritative and never merged with inferred rules."""

from dataclasses import dataclass
from enum import Enum

from lintinit.models import ConfigFragment


class UnsupportedStyleGuideError(Exception):
    """Raised when a style guide name is not in the registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"You referenced an unsupported guide: {name!r}")


class StyleGuide(Enum):
    GOOGLE = "google"
    AIRBNB = "airbnb"
    STANDARD = "standard"


@dataclass(frozen=True)
class StyleGuidePreset:
    extends: str
    plugins: tuple[str, ...] = ()

    def to_fragment(self) -> ConfigFragment:
        return ConfigFragment(extends=self.extends, plugins=list(self.plugins))


STYLE_GUIDES: dict[StyleGuide, StyleGuidePreset] = {
    StyleGuide.GOOGLE: StyleGuidePreset(extends="google"),
    StyleGuide.AIRBNB: StyleGuidePreset(extends="airbnb", plugins=("react",)),
    StyleGuide.STANDARD: StyleGuidePreset(extends="standard", plugins=("standard",)),
}


def style_guide_names() -> list[str]:
    return [guide.value for guide in StyleGuide]


def resolve_style_guide(name: str) -> ConfigFragment:
    """Return a fresh fragment for the named style guide.

    Raises:
        UnsupportedStyleGuideError: If ``name`` is not a known guide.
    """
    try:
        guide = StyleGuide(name)
    except ValueError:
        raise UnsupportedStyleGuideError(name) from None
    return STYLE_GUIDES[guide].to_fragment()
