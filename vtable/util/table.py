"""Column-major layout of tables whose cell widths come from a font measure.

Widths are never character counts: every decision goes through the ``measure``
callback, so the same code lays out a table for a proportional font (pixels)
or for a terminal (character cells).
"""

import logging

logger = logging.getLogger(__name__)

# Column widths are given in multiples of this glyph. A digit is used so that
# numeric columns are not under-measured by narrow letters.
REFERENCE_CHAR = '8'
DEFAULT_SEPARATOR_GAP = 10
HEADER_FACE = 'header'


class TableError(Exception):
    pass


class TableShapeError(TableError):
    def __init__(self, row_index, row_len, ncols):
        super().__init__(f'Row {row_index} has {row_len} cells, expected {ncols}.')
        self.row_index = row_index


class ColumnSpec:
    def __init__(self, name, width=None):
        self.name = name
        self.width = width

    def __repr__(self):
        return f'ColumnSpec({self.name!r}, width={self.width!r})'


class Cell:
    """A cell's display text, its opaque style and the value it sorts by."""

    def __init__(self, text, style=None, value=None):
        self.text = str(text)
        self.style = style
        self.value = text if value is None else value

    @classmethod
    def coerce(cls, obj):
        return obj if isinstance(obj, Cell) else cls(obj)

    def __repr__(self):
        return f'Cell({self.text!r})'


class Span:
    __slots__ = ('text', 'style', 'column', 'value', 'pad', '_width')

    def __init__(self, text='', style=None, *, column=None, value=None, pad=None):
        self.text = text
        self.style = style
        self.column = column
        self.value = value
        # Padding spans carry their width directly instead of text.
        self.pad = pad
        self._width = None

    @classmethod
    def padding(cls, width, style=None):
        return cls(' ', style, pad=width)

    @property
    def is_padding(self):
        return self.pad is not None

    def width(self, measure):
        if self.pad is not None:
            return self.pad
        if self._width is None:
            self._width = measure(self.text, self.style)
        return self._width

    def __len__(self):
        return len(self.text)

    def __repr__(self):
        if self.is_padding:
            return f'Span(pad={self.pad!r})'
        return f'Span({self.text!r}, column={self.column!r})'


class Line:
    def __init__(self):
        self.spans = []
        self.row = None
        self.payload = None
        self.sortable = False
        self.face = None

    @property
    def is_data(self):
        return self.row is not None

    @property
    def text(self):
        return ''.join(span.text for span in self.spans)

    def append(self, span):
        self.spans.append(span)

    def width(self, measure):
        return sum(span.width(measure) for span in self.spans)

    def cells(self):
        return [span for span in self.spans if not span.is_padding]

    def __len__(self):
        return sum(len(span) for span in self.spans)


class Table:
    def __init__(self, columns, measure, separator_gap=DEFAULT_SEPARATOR_GAP):
        self.columns = list(columns)
        self.measure = measure
        self.separator_gap = separator_gap
        self.lines = [Line()]

    @property
    def header(self):
        return self.lines[0]

    def data_range(self):
        """Returns the ``range`` of line indices holding table rows.

        The data region starts right after the header and ends at the first
        line without an attached row; lines appended by a caller after the
        table are never part of it.
        """
        end = 1
        while end < len(self.lines) and self.lines[end].is_data:
            end += 1
        return range(1, end)

    def data_lines(self):
        return [self.lines[i] for i in self.data_range()]

    def _data_line(self, line_index):
        if line_index not in self.data_range():
            return None
        return self.lines[line_index]

    def row_at(self, line_index):
        line = self._data_line(line_index)
        return None if line is None else line.row

    def payload_at(self, line_index):
        line = self._data_line(line_index)
        return None if line is None else line.payload

    def column_at(self, offset):
        """Column index tagged at character ``offset`` of the header line, or None."""
        if offset < 0:
            return None
        pos = 0
        for span in self.header.spans:
            pos += len(span)
            if offset < pos:
                return span.column
        return None

    def column_at_x(self, x):
        """Column index under horizontal coordinate ``x`` (in measure units) of the header."""
        if x < 0:
            return None
        pos = 0
        for span in self.header.spans:
            pos += span.width(self.measure)
            if x < pos:
                return span.column
        return None

    def line_width(self, line_index):
        return self.lines[line_index].width(self.measure)

    def width(self):
        return max(line.width(self.measure) for line in self.lines)

    def __len__(self):
        return len(self.lines)

    def __str__(self):
        return '\n'.join(line.text for line in self.lines)


def limit(text, budget, measure, style=None):
    """Truncate ``text`` from the right until it measures within ``budget``.

    At least one character is always kept, even if it still does not fit.
    Text that already fits is returned unchanged.
    """
    if budget is None or not text:
        return text
    end = len(text)
    while end > 1 and measure(text[:end], style) > budget:
        end -= 1
    return text if end == len(text) else text[:end]


def column_budget(column, measure):
    if column.width is None:
        return None
    return measure(REFERENCE_CHAR * column.width, None)


def _check_shape(columns, rows):
    ncols = len(columns)
    for i, row in enumerate(rows):
        if len(row) != ncols:
            raise TableShapeError(i, len(row), ncols)


def _pad_to(line, target, measure):
    # Padding takes the style of the preceding span so backgrounds continue.
    style = line.spans[-1].style if line.spans else None
    line.append(Span.padding(max(target - line.width(measure), 0), style))


def build_table(columns, rows, payloads=None, separator_gap=DEFAULT_SEPARATOR_GAP, *, measure):
    """Lay out ``rows`` under ``columns`` and return a :class:`Table`.

    The table is built one column at a time: each column is truncated, measured
    and padded before the next is placed, so the padding of column ``i`` only
    depends on columns ``0..i``.
    """
    columns = [column if isinstance(column, ColumnSpec) else ColumnSpec(*column)
               for column in columns]
    rows = [[Cell.coerce(cell) for cell in row] for row in rows]
    _check_shape(columns, rows)

    table = Table(columns, measure, separator_gap)
    header = table.header
    data = [Line() for _ in rows]
    table.lines.extend(data)

    last = len(columns) - 1
    for i, column in enumerate(columns):
        budget = column_budget(column, measure)
        header.append(Span(limit(column.name, budget, measure), column=i))
        for line, row in zip(data, rows):
            cell = row[i]
            line.append(Span(limit(cell.text, budget, measure, cell.style),
                             cell.style, value=cell.value))
        if i == last:
            continue
        max_width = max(line.width(measure) for line in table.lines)
        for line in table.lines:
            _pad_to(line, max_width + separator_gap, measure)

    for line, row in zip(data, rows):
        line.row = tuple(cell.value for cell in row)
    if payloads is not None:
        for line, payload in zip(data, payloads):
            line.payload = payload

    if columns:
        _pad_to(header, header.width(measure) + separator_gap, measure)
    header.sortable = True
    header.face = HEADER_FACE

    logger.debug(f'Built table with {len(columns)} columns and {len(rows)} rows')
    return table
