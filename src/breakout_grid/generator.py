"""
CSS generator for the breakout grid.

Turns a (possibly partial) GridConfig into the standalone stylesheet:
documentation header, the editable configuration block, computed values,
responsive gap overrides and the structural rule library. Output depends
only on the config and version tag, so identical input gives identical text.

Also renders the compact ``:root`` block used for copy/paste round-trips
and the per-section snippets copied from the editor.
"""

from __future__ import annotations

from .css_loader import get_structural_css
from .errors import UnknownSectionError
from .formulas import DERIVED_BY_NAME, DERIVED_PROPERTIES
from .schema import (
    COPY_SECTIONS,
    SECTIONS,
    GridConfig,
    TokenKind,
    TokenSpec,
    get_token,
    tokens_in_section,
)
from .units import strip_px

DEFAULT_VERSION = "dev"

DOCS_URL = "https://github.com/astuteo-llc/breakout-grid"

CONFIG_START_MARKER = "CONFIGURATION VARIABLES"
CONFIG_END_MARKER = "END CONFIGURATION"
COMPUTED_MARKER = "COMPUTED VALUES - DO NOT EDIT"

_RULE = "=" * 76

_HEADER = """\
/**
 * Breakout Grid - Objects Layer (ITCSS)
 * Version: {version}
 *
 * Documentation: {docs_url}
 *
 * {rule}
 * TABLE OF CONTENTS
 * {rule}
 *
 * CONFIGURATION
 *   - Configuration Variables ........... Customizable :root variables
 *   - Computed Values ................... Auto-calculated (do not edit)
 *
 * GRID CONTAINERS
 *   - Grid Container - Main ............. .grid-cols-breakout
 *   - Subgrid ........................... .grid-cols-breakout-subgrid
 *   - Left/Right Aligned Variants ....... .grid-cols-{{area}}-{{left|right}}
 *   - Breakout Modifiers ................ .breakout-to-{{content|popout|feature}}
 *   - Breakout None ..................... .breakout-none, .breakout-none-flex
 *
 * COLUMN UTILITIES
 *   - Basic ............................. .col-{{full|feature|popout|content|center}}
 *   - Start/End ......................... .col-start-*, .col-end-*
 *   - Left/Right Spans .................. .col-*-left, .col-*-right
 *   - Advanced Spans .................... .col-*-to-*
 *   - Full Limit ........................ .col-full-limit
 *
 * SPACING UTILITIES
 *   - Padding ........................... .p-breakout, .p-gap, .p-*-to-content
 *   - Margins ........................... .m-breakout, .m-gap, .-m-*
 *
 * {rule}
 * INTEGRATION (ITCSS + Tailwind v4)
 * {rule}
 *
 * Add this file to your Objects layer. In your main CSS file:
 *
 *   @import 'tailwindcss';
 *
 *   @import './_settings.fonts.css';
 *   @import './_objects.breakout-grid.css';   <-- Add here (Objects layer)
 *   @import './_utilities.global.css';
 *
 *   @layer components {{
 *       @import './_components.hero.css';
 *       ...
 *   }}
 *
 * {rule}
 * QUICK START
 * {rule}
 *
 *   <main class="grid-cols-breakout">
 *     <article class="col-content">Reading width</article>
 *     <figure class="col-feature">Wider for images</figure>
 *     <div class="col-full">Edge to edge</div>
 *   </main>
 *
 */"""


def _banner(title: str, *body: str) -> list[str]:
    """A boxed section comment."""
    lines = [f"/* {_RULE}", f"   {title}", f"   {_RULE}"]
    if body:
        lines.extend(f"   {line}" for line in body)
        lines.append(f"   {_RULE} */")
    else:
        lines[-1] += " */"
    return lines


def _declaration(token: TokenSpec, value: str) -> str:
    """One custom-property declaration; breakpoints are commented documentation."""
    if token.kind == TokenKind.PIXELS:
        return f"/* {token.css_var}: {strip_px(value)}px; */"
    return f"{token.css_var}: {value};"


def _var(name: str) -> str:
    return f"var({get_token(name).css_var})"


def _generate_config_lines(config: GridConfig, *, compact: bool, indent: int = 2) -> list[str]:
    """
    Generate the editable ``:root`` block.

    Args:
        config: Complete config
        compact: Short section labels and no blank lines (copy/paste form)
        indent: Number of spaces for indentation

    Returns:
        List of CSS lines including the ``:root {`` and ``}`` lines
    """
    prefix = " " * indent
    lines = [":root {"]
    for index, section in enumerate(SECTIONS):
        tokens = tokens_in_section(section.key)
        if not tokens:
            continue
        if index and not compact:
            lines.append("")
        lines.append(f"{prefix}/* {section.label if compact else section.heading} */")
        for token in tokens:
            lines.append(prefix + _declaration(token, config.value(token.name)))
    lines.append("}")
    return lines


def _generate_computed_lines(indent: int = 2) -> list[str]:
    """Derived properties, rendered with var() references."""
    prefix = " " * indent
    lines = [":root {"]
    for index, prop in enumerate(DERIVED_PROPERTIES):
        if prop.comment:
            if index:
                lines.append("")
            lines.append(f"{prefix}/* {prop.comment} */")
        lines.append(f"{prefix}{prop.name}: {prop.expression(_var)};")
    lines.append("}")
    return lines


def _generate_breakpoint_lines(config: GridConfig) -> list[str]:
    """Redeclare --gap at each breakpoint with that breakpoint's gap scale."""
    gap = DERIVED_BY_NAME["--gap"]
    lines = ["/* Responsive gap scaling */"]
    for key in ("lg", "xl"):
        width = strip_px(config.value(f"breakpoints.{key}"))
        lines.append(f"@media (min-width: {width}px) {{")
        lines.append("  :root {")
        lines.append(f"    {gap.name}: {gap.expression(_var, key)};")
        lines.append("  }")
        lines.append("}")
        lines.append("")
    return lines[:-1]


def generate_css(config: GridConfig | None = None, version: str = DEFAULT_VERSION) -> str:
    """
    Generate the standalone breakout grid stylesheet.

    Missing tokens fall back to schema defaults. The structural library is
    the same for every call.

    Args:
        config: Token values (partial configs are completed from defaults)
        version: Version tag embedded in the header

    Returns:
        Complete stylesheet text
    """
    config = (config or GridConfig()).complete()

    lines: list[str] = [_HEADER.format(version=version, docs_url=DOCS_URL, rule=_RULE), ""]

    lines.extend(
        _banner(
            CONFIG_START_MARKER,
            f"To restore this grid in the visualizer, copy from here to {CONFIG_END_MARKER}.",
            'Paste into the "Restore" dialog at:',
            DOCS_URL,
        )
    )
    lines.append("")
    lines.extend(_generate_config_lines(config, compact=False))
    lines.append("")
    lines.extend(_banner(CONFIG_END_MARKER))
    lines.extend(["", ""])

    lines.extend(
        _banner(
            COMPUTED_MARKER,
            "These are calculated from the customizable variables above.",
            "Editing these directly will break the grid calculations.",
        )
    )
    lines.append("")
    lines.extend(_generate_computed_lines())
    lines.append("")
    lines.extend(_generate_breakpoint_lines(config))
    lines.append("")

    return "\n".join(lines) + "\n" + get_structural_css()


def export_config_block(config: GridConfig | None = None) -> str:
    """
    Render the minimal ``:root`` block for copy/paste.

    Contains every base, gap-scale and breakout token plus the commented
    breakpoints; this is the shape ``parse_config`` reads back.
    """
    config = (config or GridConfig()).complete()
    return "\n".join(_generate_config_lines(config, compact=True))


def section_declarations(config: GridConfig | None, section: str) -> str:
    """
    Declarations for one editor copy section (``content``, ``gap``, ...).

    Raises:
        UnknownSectionError: If the section is not defined
    """
    try:
        section_keys = COPY_SECTIONS[section]
    except KeyError:
        raise UnknownSectionError(section) from None

    config = (config or GridConfig()).complete()
    lines = []
    for key in section_keys:
        for token in tokens_in_section(key):
            lines.append(f"{token.css_var}: {config.value(token.name)};")
    return "\n".join(lines)
