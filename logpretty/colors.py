"""Color policy — color mode resolution and the per-category ANSI palette."""

from dataclasses import dataclass, fields, replace
from enum import Enum

ESC = "\033["

# Reset foreground and background independently
RESET = f"{ESC}39m{ESC}49m"

# SGR foreground codes; backgrounds are +10 and spelled "on_<name>"
_FG_CODES = {
    "black": 30,
    "red": 31,
    "green": 32,
    "yellow": 33,
    "blue": 34,
    "magenta": 35,
    "cyan": 36,
    "white": 37,
    "bright_black": 90,
    "bright_red": 91,
    "bright_green": 92,
    "bright_yellow": 93,
    "bright_blue": 94,
    "bright_magenta": 95,
    "bright_cyan": 96,
    "bright_white": 97,
}

# Upper-cased level -> palette slot
LEVEL_CATEGORIES = {
    "CRIT": "critical",
    "CRITICAL": "critical",
    "ERRO": "error",
    "ERROR": "error",
    "WARN": "warning",
    "WARNING": "warning",
    "INFO": "info",
}


class ColorMode(Enum):
    NEVER = "never"
    AUTO = "auto"
    ALWAYS = "always"

    @classmethod
    def parse(cls, value: str) -> "ColorMode":
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Invalid color option: '{value}'") from None


def color_directive(name: str) -> str:
    """Translate a color name ("cyan", "on_bright_red") into an escape sequence.

    Strings that already start with ESC are passed through unchanged.
    """
    if name.startswith("\033"):
        return name
    key = name.strip().lower()
    background = key.startswith("on_")
    if background:
        key = key[3:]
    if key not in _FG_CODES:
        raise ValueError(f"Unknown color: '{name}'")
    code = _FG_CODES[key] + (10 if background else 0)
    return f"{ESC}{code}m"


@dataclass(frozen=True)
class ColorPalette:
    critical: str = color_directive("on_bright_red")
    error: str = color_directive("bright_red")
    warning: str = color_directive("bright_yellow")
    info: str = color_directive("bright_green")
    # Color of the key in key:value pairs
    key: str = color_directive("cyan")

    def with_overrides(self, overrides: dict[str, str]) -> "ColorPalette":
        """Return a copy with the named slots replaced."""
        slots = {f.name for f in fields(self)}
        changes = {}
        for slot, color in overrides.items():
            if slot not in slots:
                raise ValueError(f"Unknown palette slot: '{slot}'")
            changes[slot] = color_directive(str(color))
        return replace(self, **changes)

    def for_level(self, level: str) -> str | None:
        category = level_category(level)
        return getattr(self, category) if category else None


def level_category(level: str) -> str | None:
    """Map a level string to its palette slot, case-insensitively."""
    return LEVEL_CATEGORIES.get(level.upper())


def resolve_color_mode(mode: ColorMode, stream) -> bool:
    """Collapse a ColorMode to a bool, checking the stream for a TTY only for AUTO."""
    if mode is ColorMode.AUTO:
        isatty = getattr(stream, "isatty", None)
        return bool(isatty and isatty())
    return mode is ColorMode.ALWAYS


def build_palette(mode: ColorMode | bool, overrides: dict[str, str] | None = None) -> ColorPalette | None:
    """Build the palette for a resolved mode; None means colors are disabled."""
    if mode is ColorMode.AUTO:
        raise ValueError("ColorMode.AUTO must be resolved before building a palette")
    if mode is ColorMode.NEVER or mode is False:
        return None
    palette = ColorPalette()
    if overrides:
        palette = palette.with_overrides(overrides)
    return palette


def colorize(text: str, directive: str | None) -> str:
    """Wrap text in a directive followed by a full reset; plain text when directive is None."""
    if directive is None:
        return text
    return f"{directive}{text}{RESET}"
