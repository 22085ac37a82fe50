"""Color theme for diskcare's Rich output.

The palette comes from the bundled ``data/theme.toml``. A ``theme.toml``
in the user config directory may override any subset of its keys; a
user file that cannot be read or validated is logged and ignored.
"""

import logging
import re
import tomllib
from functools import lru_cache
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, ValidationError
from rich.theme import Theme

from diskcare.core.paths import get_config_dir

logger = logging.getLogger(__name__)

THEME_FILE_NAME = "theme.toml"

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}){1,2}")


def _hex_color(value: str) -> str:
    color = value.strip()
    if not _HEX_COLOR.fullmatch(color):
        msg = f"expected #RGB or #RRGGBB, got {value!r}"
        raise ValueError(msg)
    return color


HexColor = Annotated[str, AfterValidator(_hex_color)]


class ThemeColors(BaseModel):
    """Palette keyed by the names used in theme.toml."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    muted: HexColor = "#b2bec3"
    header: HexColor = "#69B9A1"
    border: HexColor = "#29526d"

    success: HexColor = "#03b971"
    warning: HexColor = "#f5b332"
    error: HexColor = "#f53263"
    info: HexColor = "#0ec1c8"

    eligible: HexColor = "#c1ff62"
    caution: HexColor = "#faf870"
    blocked: HexColor = "#f53263"

    risk_safe: HexColor = "#03b971"
    risk_caution: HexColor = "#f5b332"
    risk_do_not_touch: HexColor = "#d44ebc"


# Rich style name -> (palette key, extra style attributes)
STYLE_SOURCES: dict[str, tuple[str, str]] = {
    "muted": ("muted", ""),
    "border": ("border", ""),
    "bold_header": ("header", "bold"),
    "success": ("success", ""),
    "warning": ("warning", ""),
    "error": ("error", "bold"),
    "info": ("info", ""),
    "status.eligible": ("eligible", "bold"),
    "status.caution": ("caution", ""),
    "status.blocked": ("blocked", ""),
    "risk.safe": ("risk_safe", ""),
    "risk.caution": ("risk_caution", ""),
    "risk.do-not-touch": ("risk_do_not_touch", "bold"),
}


def _read_colors(source: Path | Traversable) -> dict[str, Any]:
    """Return the ``[colors]`` table of a theme file, or {} when unusable."""
    try:
        with source.open("rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", source, e)
        return {}

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: [colors] is not a table", source)
        return {}
    return colors


def load_theme_colors(user_path: Path | None = None) -> ThemeColors:
    """Merge the bundled palette with the user's overrides.

    Args:
        user_path: Override file (defaults to ``<config dir>/theme.toml``).

    Returns:
        Validated palette. Defaults when the merged colors are invalid.
    """
    bundled = _read_colors(resources.files("diskcare.data").joinpath(THEME_FILE_NAME))
    overrides = _read_colors(user_path or get_config_dir() / THEME_FILE_NAME)
    if overrides:
        logger.debug("Applying %d theme override(s)", len(overrides))

    try:
        return ThemeColors(**{**bundled, **overrides})
    except ValidationError as e:
        logger.warning("Invalid theme colors, using defaults: %s", e)
        return ThemeColors()


def build_rich_theme(colors: ThemeColors) -> Theme:
    """Map the palette onto the style names used in markup and tables."""
    styles: dict[str, str] = {}
    for style, (key, attributes) in STYLE_SOURCES.items():
        color = getattr(colors, key)
        styles[style] = f"{attributes} {color}" if attributes else color
    return Theme(styles)


@lru_cache(maxsize=1)
def get_theme() -> Theme:
    """Rich theme for the shared consoles, built once per process."""
    return build_rich_theme(load_theme_colors())
