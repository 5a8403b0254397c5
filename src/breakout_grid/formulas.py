"""
Derived grid properties.

Each derived property is a fixed formula over token values. Formulas take a
resolver (token name -> text) so the same definition renders both the
stylesheet (resolver returns ``var(--base-gap)``) and the live document
overrides (resolver returns the literal, e.g. ``1rem``). Nothing here
evaluates CSS; the browser does.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

Resolve = Callable[[str], str]

# Breakpoint ids whose gap-scale token drives --gap
GAP_SCALE_KEYS = ("default", "lg", "xl")


def gap(v: Resolve, scale: str = "default") -> str:
    return f"clamp({v('baseGap')}, {v('gapScale.' + scale)}, {v('maxGap')})"


def computed_gap(v: Resolve) -> str:
    return "max(var(--gap), calc((100vw - var(--content)) / 10))"


def _content_clamp(v: Resolve) -> str:
    return f"clamp({v('contentMin')}, {v('contentBase')}, {v('contentMax')})"


def content(v: Resolve) -> str:
    return f"min({_content_clamp(v)}, 100% - var(--gap) * 2)"


def content_inset(v: Resolve) -> str:
    return f"min({_content_clamp(v)}, calc(100% - var(--gap)))"


def content_half(v: Resolve) -> str:
    return "calc(var(--content) / 2)"


def full_track(v: Resolve) -> str:
    return "minmax(var(--gap), 1fr)"


def _feature_clamp(v: Resolve) -> str:
    return f"clamp({v('featureMin')}, {v('featureScale')}, {v('featureMax')})"


def feature_track(v: Resolve) -> str:
    return f"minmax(0, {_feature_clamp(v)})"


def popout_track(v: Resolve) -> str:
    return f"minmax(0, {v('popoutWidth')})"


def breakout_padding(v: Resolve) -> str:
    return f"clamp({v('breakoutMin')}, {v('breakoutScale')}, {v('popoutWidth')})"


def feature_to_content(v: Resolve) -> str:
    return f"calc({_feature_clamp(v)} + {v('popoutWidth')})"


@dataclass(frozen=True)
class DerivedProperty:
    """
    A computed custom property.

    Attributes:
        name: Custom property name (``--popout``)
        render: Formula taking a resolver
        inputs: Token names the formula reads; empty when it only reads other
            derived properties through ``var()``
        comment: Comment emitted before this property in the stylesheet
        responsive: Formula takes a gap-scale key as second argument
    """

    name: str
    render: Callable[..., str]
    inputs: frozenset[str] = field(default_factory=frozenset)
    comment: str | None = None
    responsive: bool = False

    @property
    def live(self) -> bool:
        """Whether the live synchronizer pushes this property on edits."""
        return bool(self.inputs)

    def expression(self, resolve: Resolve, scale: str = "default") -> str:
        if self.responsive:
            return self.render(resolve, scale)
        return self.render(resolve)


_CONTENT_INPUTS = frozenset({"contentMin", "contentBase", "contentMax"})
_FEATURE_INPUTS = frozenset({"featureMin", "featureScale", "featureMax"})
_BREAKOUT_INPUTS = frozenset({"breakoutMin", "breakoutScale", "popoutWidth"})

DERIVED_PROPERTIES: tuple[DerivedProperty, ...] = (
    DerivedProperty(
        name="--gap",
        render=gap,
        inputs=frozenset({"baseGap", "maxGap"} | {f"gapScale.{k}" for k in GAP_SCALE_KEYS}),
        comment="Responsive gap: scales between base and max based on viewport",
        responsive=True,
    ),
    DerivedProperty(
        name="--computed-gap",
        render=computed_gap,
        comment="Computed gap: larger value for full-width spacing",
    ),
    DerivedProperty(
        name="--content",
        render=content,
        inputs=_CONTENT_INPUTS,
        comment="Content width: fluid between min/max, respects gap on both sides",
    ),
    DerivedProperty(
        name="--content-inset",
        render=content_inset,
        inputs=_CONTENT_INPUTS,
        comment="Content inset: for left/right aligned grids (single gap)",
    ),
    DerivedProperty(
        name="--content-half",
        render=content_half,
        comment="Half content: used for center alignment",
    ),
    DerivedProperty(
        name="--full",
        render=full_track,
        comment="Track definitions for grid-template-columns",
    ),
    DerivedProperty(name="--feature", render=feature_track, inputs=_FEATURE_INPUTS),
    DerivedProperty(name="--popout", render=popout_track, inputs=frozenset({"popoutWidth"})),
    DerivedProperty(
        name="--breakout-padding",
        render=breakout_padding,
        inputs=_BREAKOUT_INPUTS,
        comment="Alignment padding: for aligning content inside wider columns",
    ),
    DerivedProperty(name="--popout-to-content", render=breakout_padding, inputs=_BREAKOUT_INPUTS),
    DerivedProperty(
        name="--feature-to-content",
        render=feature_to_content,
        inputs=_FEATURE_INPUTS | {"popoutWidth"},
    ),
)

DERIVED_BY_NAME: dict[str, DerivedProperty] = {prop.name: prop for prop in DERIVED_PROPERTIES}

LIVE_DERIVED: tuple[DerivedProperty, ...] = tuple(p for p in DERIVED_PROPERTIES if p.live)


def affected_by(token_name: str) -> list[DerivedProperty]:
    """Live derived properties whose formula reads ``token_name``."""
    return [prop for prop in LIVE_DERIVED if token_name in prop.inputs]
