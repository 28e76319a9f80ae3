"""Plain text and ANSI rendering for tables measured in character cells."""

from __future__ import annotations

from vtable.util.measure import style_value
from vtable.util.table import HEADER_FACE, Line, Table

RESET = '\u001b[0m'
ANSI_BOLD = '\u001b[1m'
ANSI_UNDERLINE = '\u001b[4m'

# RGB colours a style may carry, mapped to the nearest of Discord's ANSI colours.
_ANSI_COLORS: dict[tuple[int, int, int], str] = {
    (79, 84, 92): '\u001b[30m',
    (220, 50, 47): '\u001b[31m',
    (133, 153, 0): '\u001b[32m',
    (181, 137, 0): '\u001b[33m',
    (38, 139, 210): '\u001b[34m',
    (211, 54, 130): '\u001b[35m',
    (42, 161, 152): '\u001b[36m',
    (255, 255, 255): '\u001b[37m',
}


def ansi_code(style) -> str:
    code = ''
    if style_value(style, 'bold'):
        code += ANSI_BOLD
    color = style_value(style, 'color')
    if color is not None:
        nearest = min(_ANSI_COLORS, key=lambda c: sum((a - b) ** 2 for a, b in zip(c, color)))
        code += _ANSI_COLORS[nearest]
    return code


def _line_text(line: Line, ansi: bool) -> str:
    parts = []
    for span in line.spans:
        text = ' ' * round(span.pad) if span.is_padding else span.text
        code = ansi_code(span.style) if ansi and not span.is_padding else ''
        parts.append(code + text + RESET if code else text)
    text = ''.join(parts).rstrip(' ')
    if ansi and line.face == HEADER_FACE:
        text = ANSI_UNDERLINE + text + RESET
    return text


def as_text(table: Table, *, ansi: bool = False) -> str:
    """Render a table built with :func:`vtable.util.measure.cell_width`.

    Padding widths are rounded to whole characters, so columns only line up
    when the table was measured in terminal cells.
    """
    return '\n'.join(_line_text(line, ansi) for line in table.lines)
