"""Terminal color theme.

Colors come from the bundled ``data/theme.toml``. A ``theme.toml`` in the
config directory may override any subset of them; an unreadable or
invalid override is ignored with a warning.
"""

import logging
import tomllib
from functools import cache
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, ValidationError
from rich.theme import Theme

from aptsync.core.paths import get_theme_path

logger = logging.getLogger(__name__)

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def _hex_color(value: str) -> str:
    color = value.strip()
    digits = color[1:]
    if not color.startswith("#") or len(digits) not in (3, 6) or not set(digits) <= _HEX_DIGITS:
        msg = f"expected #RGB or #RRGGBB, got {value!r}"
        raise ValueError(msg)
    return color


HexColor = Annotated[str, AfterValidator(_hex_color)]


class Palette(BaseModel):
    """Named colors of the CLI theme."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    muted: HexColor = "#b2bec3"
    header: HexColor = "#69B9A1"
    border: HexColor = "#29526d"
    success: HexColor = "#03b971"
    warning: HexColor = "#f5b332"
    error: HexColor = "#f53263"
    info: HexColor = "#0ec1c8"
    added: HexColor = "#c1ff62"
    removed: HexColor = "#f53263"
    changed: HexColor = "#0e8ac8"
    package_manual: HexColor = "#69B9A1"
    package_auto: HexColor = "#226666"


# Markup style name -> (palette color, extra attributes)
STYLES: dict[str, tuple[str, str]] = {
    "muted": ("muted", ""),
    "border": ("border", ""),
    "bold_header": ("header", "bold"),
    "success": ("success", ""),
    "warning": ("warning", ""),
    "error": ("error", "bold"),
    "info": ("info", ""),
    "added": ("added", ""),
    "removed": ("removed", ""),
    "changed": ("changed", ""),
    "package_manual": ("package_manual", "bold"),
    "package_auto": ("package_auto", ""),
}


def bundled_theme() -> Traversable:
    """Return the theme file shipped with the package."""
    return resources.files("aptsync.data") / "theme.toml"


def read_colors(source: Traversable | Path) -> dict[str, Any]:
    """Return the ``[colors]`` table of a theme file.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file is not valid TOML or ``colors`` is not a table.
    """
    with source.open("rb") as f:
        data = tomllib.load(f)
    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        msg = "'colors' must be a table"
        raise ValueError(msg)
    return colors


def load_palette(user_path: Path | None = None) -> Palette:
    """Load the bundled palette with the user's overrides applied.

    Args:
        user_path: Override file. Defaults to ``theme.toml`` in the config dir.

    Returns:
        The merged Palette, or the bundled one if the overrides are unusable.
    """
    colors = read_colors(bundled_theme())
    path = user_path or get_theme_path()

    try:
        overrides = read_colors(path)
    except FileNotFoundError:
        return Palette.model_validate(colors)
    except (OSError, ValueError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return Palette.model_validate(colors)

    try:
        palette = Palette.model_validate({**colors, **overrides})
    except ValidationError as e:
        logger.warning("Ignoring invalid colors in %s: %s", path, e)
        return Palette.model_validate(colors)

    logger.debug("Applied %d theme override(s) from %s", len(overrides), path)
    return palette


def build_theme(palette: Palette) -> Theme:
    """Map every markup style name to its palette color."""
    return Theme(
        {
            name: f"{attrs} {getattr(palette, color)}".strip()
            for name, (color, attrs) in STYLES.items()
        }
    )


@cache
def get_theme() -> Theme:
    """Return the Rich theme, built once per process."""
    return build_theme(load_palette())
