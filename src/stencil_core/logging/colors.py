"""ANSI color codes for terminal output.

All colors use the 256-color palette.

Usage:
    from stencil_core.logging.colors import GREEN, RESET

    print(f"{GREEN}Rendered{RESET}")
"""

RESET = "\033[0m"

# Status
GREEN = "\033[38;5;82m"  # Success
RED = "\033[38;5;196m"  # Errors
YELLOW = "\033[38;5;226m"  # Warnings
ORANGE = "\033[38;5;208m"  # Style engine

# Information
LIGHT_BLUE = "\033[38;5;153m"  # Context / metrics
CYAN = "\033[38;5;51m"  # Info
MAGENTA = "\033[38;5;201m"  # Pipeline

__all__ = [
    "RESET",
    "GREEN",
    "RED",
    "YELLOW",
    "ORANGE",
    "LIGHT_BLUE",
    "CYAN",
    "MAGENTA",
]
