"""Tests for vtable.util.cairo_common — Pango measurement and PNG rendering."""

import pytest

pytest.importorskip('cairo')
pytest.importorskip('gi')
pytest.importorskip('gi.repository.PangoCairo')

from vtable.util.cairo_common import PangoMeasure, get_table_image, markup  # noqa: E402
from vtable.util.table import ColumnSpec, build_table  # noqa: E402


class TestMarkup:
    def test_escapes(self):
        assert markup('a<b>&') == 'a&lt;b&gt;&amp;'

    def test_bold(self):
        assert markup('x', {'bold': True}) == '<b>x</b>'

    def test_opaque_style(self):
        assert markup('x', 'whatever') == 'x'


class TestPangoMeasure:
    def test_proportional(self):
        m = PangoMeasure()
        assert 0 < m('iiii') < m('mmmm')

    def test_monotonic(self):
        m = PangoMeasure()
        widths = [m('Wolfgang'[:n]) for n in range(1, 9)]
        assert widths == sorted(widths)

    def test_line_height(self):
        assert PangoMeasure().line_height > 0


class TestGetTableImage:
    def test_png(self):
        m = PangoMeasure()
        rows = [['A thing', 'Yes'], ['A wide thing that needs chopping', 'And more']]
        t = build_table([ColumnSpec('First', 10), ColumnSpec('Second')], rows, measure=m)
        image = get_table_image(t, m)
        assert image.read(8) == b'\x89PNG\r\n\x1a\n'
