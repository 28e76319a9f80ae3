import html
import io
import math

import cairo
import gi
gi.require_version('Pango', '1.0')
gi.require_version('PangoCairo', '1.0')
from gi.repository import Pango, PangoCairo

from vtable import constants
from vtable.util.measure import style_value
from vtable.util.table import HEADER_FACE

SMOKE_WHITE = (250, 250, 250)
BLACK = (10, 10, 10)
DISCORD_GRAY = (54, 62, 63)
ROW_COLORS = ((242, 242, 242), (230, 230, 230))

BORDER_MARGIN = 20
HEADER_SPACING = 1.25
ROW_PADDING = 1.2


def markup(text, style=None):
    text = html.escape(text)
    if style_value(style, 'bold'):
        text = f'<b>{text}</b>'
    return text


def _rgb(color):
    return [x / 255.0 for x in color]


class PangoMeasure:
    """Pixel widths of text laid out by Pango on a cairo surface.

    The same font description is used by :func:`get_table_image`, so a table
    measured with this callback draws with aligned columns.
    """

    def __init__(self, font=constants.FONT, size=constants.FONT_SIZE):
        self.font_description = Pango.font_description_from_string(f'{font} {size}')
        surface = cairo.ImageSurface(cairo.FORMAT_ARGB32, 1, 1)
        self.layout = self.create_layout(cairo.Context(surface))
        self.layout.set_text('Ag', -1)
        self.line_height = self.layout.get_pixel_size()[1]

    def create_layout(self, context):
        layout = PangoCairo.create_layout(context)
        layout.set_font_description(self.font_description)
        return layout

    def __call__(self, text, style=None):
        self.layout.set_markup(markup(text, style), -1)
        _, logical = self.layout.get_extents()
        return logical.width / Pango.SCALE


def get_table_image(table, measure):
    """Draw ``table`` onto a PNG and return it as a seekable byte stream.

    ``measure`` must be the :class:`PangoMeasure` the table was built with. The
    header is drawn on a dark band; data rows alternate background colours
    unless a span's style asks for its own ``background``.
    """
    line_height = measure.line_height * ROW_PADDING
    header_height = line_height * HEADER_SPACING
    width = math.ceil(table.width()) + 2 * BORDER_MARGIN
    height = math.ceil(header_height + line_height * (len(table) - 1)) + 2 * BORDER_MARGIN

    surface = cairo.ImageSurface(cairo.FORMAT_ARGB32, width, height)
    context = cairo.Context(surface)
    context.set_source_rgb(*_rgb(SMOKE_WHITE))
    context.rectangle(0, 0, width, height)
    context.fill()
    layout = measure.create_layout(context)

    def draw_line(line, y, h, bg, fg):
        context.set_source_rgb(*_rgb(bg))
        context.rectangle(0, y, width, h)
        context.fill()
        x = BORDER_MARGIN
        for span in line.spans:
            w = span.width(measure)
            span_bg = style_value(span.style, 'background')
            if span_bg is not None:
                context.set_source_rgb(*_rgb(span_bg))
                context.rectangle(x, y, w, h)
                context.fill()
            if not span.is_padding:
                context.set_source_rgb(*_rgb(style_value(span.style, 'color', fg)))
                context.move_to(x, y + (h - measure.line_height) / 2)
                layout.set_markup(markup(span.text, span.style), -1)
                PangoCairo.show_layout(context, layout)
            x += w

    y = BORDER_MARGIN
    for i, line in enumerate(table.lines):
        if i == 0:
            fg = SMOKE_WHITE if line.face == HEADER_FACE else BLACK
            draw_line(line, y, header_height, DISCORD_GRAY, fg)
            y += header_height
        else:
            draw_line(line, y, line_height, ROW_COLORS[i % 2], BLACK)
            y += line_height

    image_data = io.BytesIO()
    surface.write_to_png(image_data)
    image_data.seek(0)
    return image_data
