"""Text utilities for showing RTL source lines in terminals."""

import arabic_reshaper
from bidi.algorithm import get_display

from ..core.transcoder import strip_directional_marks


def terminal_display(text: str) -> str:
    """
    Prepare a line of Hebrew/Arabic source text for display in a terminal.

    Most terminals ignore Unicode BiDi control characters, so the LRO marks
    are dropped and the text is algorithmically reordered for LTR display.

    Args:
        text: Decoded line, with or without LRO marks

    Returns:
        Text reordered for correct visual display in LTR terminals
    """
    reshaped = arabic_reshaper.reshape(strip_directional_marks(text))
    return get_display(reshaped)
