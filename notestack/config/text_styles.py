"""
Settings that define the visual appearance of text outputs.
"""

## Colors

COLOR_EMPH = "bright_green"

COLOR_HINT = "italic dim"

COLOR_KEY = "bright_blue"

COLOR_ERROR = "bold red"

## Emojis

EMOJI_WARN = "∆"

EMOJI_ERROR = "‼︎"

EMOJI_ACTIVE = "▶"
