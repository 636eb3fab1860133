"""ANSI color codes for level names"""

from typing import Dict

RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"

LEVEL_COLORS: Dict[str, str] = {
    "trace": "\033[37m",        # White
    "debug": "\033[36m",        # Cyan
    "info": "\033[32m",         # Green
    "informational": "\033[32m",
    "notice": "\033[94m",       # Bright blue
    "warn": "\033[33m",         # Yellow
    "warning": "\033[33m",
    "error": "\033[31m",        # Red
    "critical": "\033[97;101m",  # White on bright red
    "alert": "\033[97;101m",
    "emergency": "\033[97;101m",
}


def colorize(text: str, level_name: str) -> str:
    """Wrap text in the color of a level; unknown levels are left plain."""
    code = LEVEL_COLORS.get(level_name)
    if code is None:
        return text
    return f"{code}{text}{RESET}"
