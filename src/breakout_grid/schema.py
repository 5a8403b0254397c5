"""
Config schema for the breakout grid.

The closed set of layout tokens the grid understands, each with its default
literal, documentation string and the custom properties it maps to. The
generator, the config exporter and the parser all walk ``TOKENS`` in order,
so a new token is added here (and as a field on ``GridConfig``) and nowhere
else.

Token names are the keys used in persisted snapshots. Tokens that live in a
nested group use a dotted name (``gapScale.lg``, ``breakpoints.xl``).
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .errors import UnknownTokenError

# =============================================================================
# Enums
# =============================================================================


class TokenGroup(StrEnum):
    """Registry group a token belongs to."""

    BASE = "base"
    GAP_SCALE = "gap_scale"
    BREAKOUT = "breakout"
    BREAKPOINT = "breakpoint"


class TokenKind(StrEnum):
    """How a token's literal is interpreted."""

    LENGTH = "length"  # <number><unit>
    KEYWORD = "keyword"  # one of TokenSpec.options
    PIXELS = "pixels"  # unitless pixel count, emitted with a px suffix


# =============================================================================
# Sections
# =============================================================================


class SectionSpec(BaseModel):
    """A commented group of declarations in the editable block."""

    model_config = ConfigDict(frozen=True)

    key: str
    label: str = Field(description="Short comment used in copied config blocks")
    heading: str = Field(description="Comment used in the generated stylesheet")


SECTIONS: tuple[SectionSpec, ...] = (
    SectionSpec(key="content", label="Content (text width)", heading="Content (text width)"),
    SectionSpec(
        key="default_col",
        label="Default column",
        heading="Default column for children without col-* class",
    ),
    SectionSpec(key="tracks", label="Track widths", heading="Track widths"),
    SectionSpec(key="feature", label="Feature track", heading="Feature track"),
    SectionSpec(key="gap", label="Outer margins", heading="Outer margins"),
    SectionSpec(key="gap_scale", label="Responsive scale", heading="Responsive scale"),
    SectionSpec(key="breakout", label="Breakout padding", heading="Breakout padding"),
    SectionSpec(
        key="breakpoints",
        label="Breakpoints",
        heading="Breakpoints (used in media queries below)",
    ),
)

SECTIONS_BY_KEY: dict[str, SectionSpec] = {section.key: section for section in SECTIONS}

# Sections offered by the editor's per-section copy buttons.
COPY_SECTIONS: dict[str, tuple[str, ...]] = {
    "content": ("content",),
    "defaultCol": ("default_col",),
    "tracks": ("tracks",),
    "feature": ("feature",),
    "gap": ("gap", "gap_scale"),
    "breakout": ("breakout",),
}


# =============================================================================
# Tokens
# =============================================================================


class TokenSpec(BaseModel):
    """
    A named, schema-defined layout parameter.

    Example:
        TokenSpec(
            name="baseGap",
            group=TokenGroup.BASE,
            default="1rem",
            description="Minimum gap between columns. Use rem.",
            css_var="--base-gap",
            live_var="--base-gap",
            config_var="--config-base-gap",
            section="gap",
            floor=0,
        )
    """

    model_config = ConfigDict(frozen=True)

    name: str
    group: TokenGroup
    default: str
    description: str
    css_var: str = Field(description="Declaration name in the editable block and exports")
    live_var: str | None = Field(default=None, description="Property set on the live document")
    config_var: str | None = Field(default=None, description="Documentation-only --config-* name")
    section: str
    kind: TokenKind = TokenKind.LENGTH
    options: tuple[str, ...] = ()
    floor: float | None = None


TOKENS: tuple[TokenSpec, ...] = (
    # Content
    TokenSpec(
        name="contentMin",
        group=TokenGroup.BASE,
        default="50rem",
        description="Min width for content column (~848px). Use rem.",
        css_var="--content-min",
        live_var="--content-min",
        config_var="--config-content-min",
        section="content",
    ),
    TokenSpec(
        name="contentBase",
        group=TokenGroup.BASE,
        default="75vw",
        description="Preferred width for content (fluid). Use vw.",
        css_var="--content-base",
        live_var="--content-base",
        config_var="--config-content-base",
        section="content",
    ),
    TokenSpec(
        name="contentMax",
        group=TokenGroup.BASE,
        default="55rem",
        description="Max width for content column (~976px). Use rem.",
        css_var="--content-max",
        live_var="--content-max",
        config_var="--config-content-max",
        section="content",
    ),
    TokenSpec(
        name="defaultCol",
        group=TokenGroup.BASE,
        default="content",
        description="Default column when no col-* class",
        css_var="--default-col",
        live_var="--default-col",
        config_var="--config-default-col",
        section="default_col",
        kind=TokenKind.KEYWORD,
        options=("content", "popout", "feature", "full"),
    ),
    # Tracks
    TokenSpec(
        name="popoutWidth",
        group=TokenGroup.BASE,
        default="5rem",
        description="Popout extends beyond content. Use rem.",
        css_var="--popout-width",
        live_var="--popout-width",
        config_var="--config-popout",
        section="tracks",
        floor=0,
    ),
    TokenSpec(
        name="fullLimit",
        group=TokenGroup.BASE,
        default="115rem",
        description="Max width for col-full-limit. Use rem.",
        css_var="--full-limit",
        live_var="--full-limit",
        config_var="--config-full-limit",
        section="tracks",
    ),
    # Feature
    TokenSpec(
        name="featureMin",
        group=TokenGroup.BASE,
        default="0rem",
        description="Minimum feature track width (floor)",
        css_var="--feature-min",
        live_var="--feature-min",
        config_var="--config-feature-min",
        section="feature",
        floor=0,
    ),
    TokenSpec(
        name="featureScale",
        group=TokenGroup.BASE,
        default="12vw",
        description="Fluid feature track scaling",
        css_var="--feature-scale",
        live_var="--feature-scale",
        config_var="--config-feature-scale",
        section="feature",
        floor=0,
    ),
    TokenSpec(
        name="featureMax",
        group=TokenGroup.BASE,
        default="12rem",
        description="Maximum feature track width (ceiling)",
        css_var="--feature-max",
        live_var="--feature-max",
        config_var="--config-feature-max",
        section="feature",
        floor=0,
    ),
    # Outer margins
    TokenSpec(
        name="baseGap",
        group=TokenGroup.BASE,
        default="1rem",
        description="Minimum gap between columns. Use rem.",
        css_var="--base-gap",
        live_var="--base-gap",
        config_var="--config-base-gap",
        section="gap",
        floor=0,
    ),
    TokenSpec(
        name="maxGap",
        group=TokenGroup.BASE,
        default="15rem",
        description="Maximum gap cap for ultra-wide. Use rem.",
        css_var="--max-gap",
        live_var="--max-gap",
        config_var="--config-max-gap",
        section="gap",
    ),
    # Responsive gap scale
    TokenSpec(
        name="gapScale.default",
        group=TokenGroup.GAP_SCALE,
        default="4vw",
        description="Mobile/default gap scaling. Use vw.",
        css_var="--gap-scale-default",
        live_var="--gap-scale-default",
        config_var="--config-gap-scale-default",
        section="gap_scale",
    ),
    TokenSpec(
        name="gapScale.lg",
        group=TokenGroup.GAP_SCALE,
        default="5vw",
        description="Large screens (1024px+). Use vw.",
        css_var="--gap-scale-lg",
        live_var="--gap-scale-lg",
        config_var="--config-gap-scale-lg",
        section="gap_scale",
    ),
    TokenSpec(
        name="gapScale.xl",
        group=TokenGroup.GAP_SCALE,
        default="6vw",
        description="Extra large (1280px+). Use vw.",
        css_var="--gap-scale-xl",
        live_var="--gap-scale-xl",
        config_var="--config-gap-scale-xl",
        section="gap_scale",
    ),
    # Breakout padding (max is popoutWidth)
    TokenSpec(
        name="breakoutMin",
        group=TokenGroup.BREAKOUT,
        default="1rem",
        description="Minimum breakout padding (floor)",
        css_var="--breakout-min",
        live_var="--breakout-min",
        config_var="--config-breakout-min",
        section="breakout",
    ),
    TokenSpec(
        name="breakoutScale",
        group=TokenGroup.BREAKOUT,
        default="5vw",
        description="Fluid breakout scaling",
        css_var="--breakout-scale",
        live_var="--breakout-scale",
        config_var="--config-breakout-scale",
        section="breakout",
    ),
    # Breakpoints are documentation only in the stylesheet
    TokenSpec(
        name="breakpoints.lg",
        group=TokenGroup.BREAKPOINT,
        default="1024",
        description="Large breakpoint (px)",
        css_var="--breakpoint-lg",
        config_var="--config-breakpoint-lg",
        section="breakpoints",
        kind=TokenKind.PIXELS,
    ),
    TokenSpec(
        name="breakpoints.xl",
        group=TokenGroup.BREAKPOINT,
        default="1280",
        description="Extra large breakpoint (px)",
        css_var="--breakpoint-xl",
        config_var="--config-breakpoint-xl",
        section="breakpoints",
        kind=TokenKind.PIXELS,
    ),
)

TOKENS_BY_NAME: dict[str, TokenSpec] = {token.name: token for token in TOKENS}

# Lookup tables used by the parser, keyed by declaration name.
BASE_VARS: dict[str, TokenSpec] = {
    t.css_var: t for t in TOKENS if t.group in (TokenGroup.BASE, TokenGroup.BREAKOUT)
}
GAP_SCALE_VARS: dict[str, TokenSpec] = {
    t.css_var: t for t in TOKENS if t.group == TokenGroup.GAP_SCALE
}
BREAKPOINT_VARS: dict[str, TokenSpec] = {
    t.css_var: t for t in TOKENS if t.group == TokenGroup.BREAKPOINT
}


def get_token(name: str) -> TokenSpec:
    """Look up a token by name, raising UnknownTokenError if it is not in the schema."""
    try:
        return TOKENS_BY_NAME[name]
    except KeyError:
        raise UnknownTokenError(name) from None


def tokens_in_section(section: str) -> list[TokenSpec]:
    """Tokens of one section, in registry order."""
    return [token for token in TOKENS if token.section == section]


def default_values() -> dict[str, str]:
    """Token name -> default literal for every token."""
    return {token.name: token.default for token in TOKENS}


# =============================================================================
# Config
# =============================================================================


def _coerce_literal(value: Any) -> Any:
    """Accept bare numbers (e.g. breakpoints stored as 1024) as literal text."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int | float):
        return str(value)
    return value


LiteralValue = Annotated[str | None, BeforeValidator(_coerce_literal)]


class GapScale(BaseModel):
    """Gap-scale tokens keyed by breakpoint id."""

    model_config = ConfigDict(frozen=True)

    default: LiteralValue = None
    lg: LiteralValue = None
    xl: LiteralValue = None


class Breakpoints(BaseModel):
    """Breakpoint tokens as unitless pixel counts."""

    model_config = ConfigDict(frozen=True)

    lg: LiteralValue = None
    xl: LiteralValue = None


class GridConfig(BaseModel):
    """
    A (possibly partial) set of token values.

    Absent fields are ``None``; ``complete()`` fills them from the schema
    defaults. Serialized with camelCase keys so snapshots read like::

        {"baseGap": "1rem", "gapScale": {"lg": "5vw"}, "breakpoints": {"lg": "1024"}}
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    content_min: LiteralValue = None
    content_base: LiteralValue = None
    content_max: LiteralValue = None
    default_col: LiteralValue = None
    popout_width: LiteralValue = None
    full_limit: LiteralValue = None
    feature_min: LiteralValue = None
    feature_scale: LiteralValue = None
    feature_max: LiteralValue = None
    base_gap: LiteralValue = None
    max_gap: LiteralValue = None
    gap_scale: GapScale = Field(default_factory=GapScale)
    breakout_min: LiteralValue = None
    breakout_scale: LiteralValue = None
    breakpoints: Breakpoints = Field(default_factory=Breakpoints)

    @field_validator("gap_scale", "breakpoints", mode="before")
    @classmethod
    def _none_group_is_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    # -------------------------------------------------------------------------
    # Token-name access
    # -------------------------------------------------------------------------

    def to_flat(self) -> dict[str, str]:
        """Present values keyed by token name, in registry order."""
        data = self.to_json_dict()
        flat: dict[str, str] = {}
        for token in TOKENS:
            group, _, key = token.name.partition(".")
            value = data.get(group, {}).get(key) if key else data.get(group)
            if value is not None:
                flat[token.name] = value
        return flat

    @classmethod
    def from_flat(cls, values: Mapping[str, str]) -> GridConfig:
        """Build a config from a token-name keyed mapping. Unknown names raise."""
        nested: dict[str, Any] = {}
        for name, value in values.items():
            get_token(name)
            group, _, key = name.partition(".")
            if key:
                nested.setdefault(group, {})[key] = value
            else:
                nested[name] = value
        return cls.model_validate(nested)

    def get(self, name: str) -> str | None:
        """Value for a token name, or None if absent."""
        get_token(name)
        return self.to_flat().get(name)

    def value(self, name: str) -> str:
        """Value for a token name, falling back to the schema default."""
        found = self.get(name)
        return found if found is not None else TOKENS_BY_NAME[name].default

    def with_values(self, values: Mapping[str, str]) -> GridConfig:
        """Return a copy with the given token values set."""
        return GridConfig.from_flat({**self.to_flat(), **values})

    def merged_over(self, base: GridConfig) -> GridConfig:
        """Overlay this config's present values on top of ``base``."""
        return GridConfig.from_flat({**base.to_flat(), **self.to_flat()})

    def complete(self) -> GridConfig:
        """Return a config with every token present."""
        return GridConfig.from_flat({**default_values(), **self.to_flat()})

    def is_complete(self) -> bool:
        return len(self.to_flat()) == len(TOKENS)

    def to_json_dict(self) -> dict[str, Any]:
        """camelCase dict without absent values (the snapshot format)."""
        return self.model_dump(by_alias=True, exclude_none=True)


def default_config() -> GridConfig:
    """The complete config made of schema defaults."""
    return GridConfig.from_flat(default_values())
