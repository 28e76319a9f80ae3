from PIL import Image, ImageDraw, ImageFont

from vtable import constants
from vtable.util import font_downloader
from vtable.util.measure import style_value
from vtable.util.table import HEADER_FACE

SMOKE_WHITE = (250, 250, 250)
BLACK = (0, 0, 0)
HEADER_BG = (54, 62, 63)
ROW_COLORS = ((242, 242, 242), (230, 230, 230))

START_X, START_Y = 20, 20
HEADER_SPACING = 1.5


class PillowMeasure:
    """Pixel widths from TrueType fonts loaded through Pillow."""

    def __init__(self, regular, bold=None):
        self.regular = regular
        self.bold = bold or regular
        ascent, descent = regular.getmetrics()
        self.line_height = ascent + descent

    @classmethod
    def from_files(cls, size=constants.FONT_SIZE, *,
                   regular=constants.NOTO_SANS_CJK_REGULAR_FONT_PATH,
                   bold=constants.NOTO_SANS_CJK_BOLD_FONT_PATH):
        font_downloader.maybe_download([regular, bold])
        return cls(ImageFont.truetype(regular, size), ImageFont.truetype(bold, size))

    def font_for(self, style):
        return self.bold if style_value(style, 'bold') else self.regular

    def __call__(self, text, style=None):
        return self.font_for(style).getlength(text)


def get_table_image(table, measure):
    """Return a PIL image of ``table``, which must have been built with ``measure``."""
    y_inc = int(measure.line_height * 1.25)
    header_inc = int(y_inc * HEADER_SPACING)
    width = int(table.width()) + 2 * START_X + 1
    height = header_inc + y_inc * (len(table) - 1) + 2 * START_Y
    img = Image.new('RGB', (width, height), color=SMOKE_WHITE)
    draw = ImageDraw.Draw(img)

    def draw_row(line, y, h, bg, fg):
        draw.rectangle((0, y, width, y + h), fill=bg)
        x = START_X
        for span in line.spans:
            w = span.width(measure)
            span_bg = style_value(span.style, 'background')
            if span_bg is not None:
                draw.rectangle((x, y, x + w, y + h), fill=tuple(span_bg))
            if not span.is_padding:
                color = tuple(style_value(span.style, 'color', fg))
                draw.text((x, y + (h - measure.line_height) // 2), span.text,
                          fill=color, font=measure.font_for(span.style))
            x += w

    y = START_Y
    header = table.header
    draw_row(header, y, header_inc, HEADER_BG,
             SMOKE_WHITE if header.face == HEADER_FACE else BLACK)
    y += header_inc
    for i, line in enumerate(table.lines[1:], start=1):
        draw_row(line, y, y_inc, ROW_COLORS[i % 2], BLACK)
        y += y_inc

    return img
