"""graphvis.labels

Multi-line node labels. A label is broken into roughly three lines, but a
line is never narrower than 15 characters nor wider than 30, unless a single
word is longer than that.
"""

from __future__ import annotations

from typing import List

MIN_LINE = 15
MAX_LINE = 30
LINE_HEIGHT = 1.2


def max_line_length(name: str) -> float:
    return min(MAX_LINE, max(len(name) / 3, MIN_LINE))


def wrap_label(name: str) -> List[str]:
    """
    Greedily pack the words of ``name`` into lines. Hyphenated compounds may
    break after the hyphen. Always returns at least one line.
    """
    limit = max_line_length(name)
    words = name.replace("-", "- ").split(" ")
    lines: List[str] = []
    for word in words:
        if not lines:
            lines.append(word)
        elif len(lines[-1]) + 1 + len(word) <= limit:
            lines[-1] = lines[-1] + " " + word
        else:
            lines.append(word)
    return lines


def label_offsets(lines: List[str], font_size: float = 12) -> List[float]:
    """Vertical offset of each line so the block is centred on the node."""
    step = LINE_HEIGHT * font_size
    first = (len(lines) - 1) * -0.5 * step
    return [first + i * step for i in range(len(lines))]
