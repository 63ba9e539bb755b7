"""Urgency indicator formatters -- one pure formatter per render variant

The classifier output is variant-agnostic; each formatter turns it into a
view model for a single variant. IndicatorView is a tagged union over
``variant``.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from .models.enums import IndicatorSize, RenderVariant, UrgencyLevel
from .models.urgency import UrgencyDescriptor

ANIMATION_CLASS = "animate-pulse"

# Size classes per size and element
SIZE_CLASSES: dict[IndicatorSize, dict[str, str]] = {
    IndicatorSize.SM: {"badge": "px-2 py-1 text-xs", "dot": "w-2 h-2", "bar": "h-1", "text": "text-xs"},
    IndicatorSize.MD: {"badge": "px-3 py-1 text-sm", "dot": "w-3 h-3", "bar": "h-2", "text": "text-sm"},
    IndicatorSize.LG: {"badge": "px-4 py-2 text-base", "dot": "w-4 h-4", "bar": "h-3", "text": "text-base"},
}

# Overdue uses a darker background than the other red levels
_BG_SHADE_OVERRIDES: dict[UrgencyLevel, int] = {UrgencyLevel.OVERDUE: 700}


class ToneClasses(BaseModel):
    """Color classes derived from the descriptor tone"""

    model_config = ConfigDict(frozen=True)

    bg: str
    text: str
    border: str


class _IndicatorBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: UrgencyLevel
    label: str | None = Field(default=None, description="Label, None when hidden")
    tone: ToneClasses
    animate: bool = False
    size_class: str = Field(description="Size-dependent class of the main element")
    text_class: str = Field(description="Size-dependent text class")


class BadgeView(_IndicatorBase):
    """Pill with icon and optional label"""

    variant: Literal["badge"] = "badge"
    icon: str
    title: str = Field(description="Tooltip, e.g. 'Prioridade: 4/5'")


class DotView(_IndicatorBase):
    """Colored dot with optional label"""

    variant: Literal["dot"] = "dot"
    title: str


class BarView(_IndicatorBase):
    """Full-width bar with optional centered label"""

    variant: Literal["bar"] = "bar"
    title: str


class CardView(_IndicatorBase):
    """Bordered card with icon and heading"""

    variant: Literal["card"] = "card"
    icon: str
    heading: str
    color: str


IndicatorView = Annotated[
    BadgeView | DotView | BarView | CardView,
    Field(discriminator="variant"),
]


def tone_classes(descriptor: UrgencyDescriptor) -> ToneClasses:
    """Background, text and border classes for a descriptor"""
    color = descriptor.color
    bg_shade = _BG_SHADE_OVERRIDES.get(descriptor.level, 600)
    return ToneClasses(
        bg=f"bg-{color}-{bg_shade}",
        text=f"text-{color}-600",
        border=f"border-{color}-600",
    )


def _common(
    descriptor: UrgencyDescriptor,
    size: IndicatorSize,
    element: str,
    show_label: bool,
) -> dict:
    sizes = SIZE_CLASSES[size]
    return {
        "level": descriptor.level,
        "label": descriptor.label if show_label else None,
        "tone": tone_classes(descriptor),
        "animate": descriptor.should_animate,
        "size_class": sizes[element],
        "text_class": sizes["text"],
    }


def format_badge(
    descriptor: UrgencyDescriptor,
    size: IndicatorSize = IndicatorSize.MD,
    show_label: bool = True,
) -> BadgeView:
    return BadgeView(
        icon=descriptor.icon,
        title=f"Prioridade: {descriptor.priority}/5",
        **_common(descriptor, size, "badge", show_label),
    )


def format_dot(
    descriptor: UrgencyDescriptor,
    size: IndicatorSize = IndicatorSize.MD,
    show_label: bool = True,
) -> DotView:
    return DotView(title=descriptor.label, **_common(descriptor, size, "dot", show_label))


def format_bar(
    descriptor: UrgencyDescriptor,
    size: IndicatorSize = IndicatorSize.MD,
    show_label: bool = True,
) -> BarView:
    return BarView(title=descriptor.label, **_common(descriptor, size, "bar", show_label))


def format_card(
    descriptor: UrgencyDescriptor,
    size: IndicatorSize = IndicatorSize.MD,
    show_label: bool = True,
) -> CardView:
    heading = (
        "VENCIDO" if descriptor.level == UrgencyLevel.OVERDUE else descriptor.level.value.upper()
    )
    # Cards have no size-specific outer element; the text class drives sizing
    common = _common(descriptor, size, "text", show_label)
    return CardView(icon=descriptor.icon, heading=heading, color=descriptor.color, **common)


_FORMATTERS = {
    RenderVariant.BADGE: format_badge,
    RenderVariant.DOT: format_dot,
    RenderVariant.BAR: format_bar,
    RenderVariant.CARD: format_card,
}


def render_indicator(
    descriptor: UrgencyDescriptor,
    variant: RenderVariant = RenderVariant.BADGE,
    size: IndicatorSize = IndicatorSize.MD,
    show_label: bool = True,
) -> IndicatorView:
    """Format a descriptor for one render variant

    Args:
        descriptor: output of classify()
        variant: badge / dot / bar / card
        size: sm / md / lg
        show_label: whether the label is rendered

    Returns:
        The variant's view model
    """
    formatter = _FORMATTERS[RenderVariant(variant)]
    return formatter(descriptor, IndicatorSize(size), show_label)
