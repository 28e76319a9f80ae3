"""Measure callbacks for :func:`vtable.util.table.build_table`.

Each callback is called as ``measure(text, style)`` and returns the rendered
width of ``text``. ``style`` is whatever the caller attached to a cell; the
backends only look at a few keys of a mapping (``bold``, ``color``,
``background``) and ignore anything else.
"""

import unicodedata
from collections.abc import Mapping

# Terminal cells taken by each East Asian width class.
CELL_WIDTHS = {'F': 2, 'H': 1, 'W': 2, 'Na': 1, 'N': 1, 'A': 1}


def style_value(style, key, default=None):
    if isinstance(style, Mapping):
        return style.get(key, default)
    return default


def cell_width(text, style=None):
    """Width of ``text`` in terminal character cells."""
    return sum(0 if unicodedata.combining(c) else CELL_WIDTHS[unicodedata.east_asian_width(c)]
               for c in text)
