"""Tests for vtable.util.measure — character cell widths and style lookups."""

from vtable.util.measure import cell_width, style_value


class TestCellWidth:
    def test_ascii(self):
        assert cell_width('hello') == 5

    def test_empty(self):
        assert cell_width('') == 0

    def test_east_asian_wide(self):
        assert cell_width('你好') == 4

    def test_mixed(self):
        assert cell_width('hi你') == 4

    def test_fullwidth_forms(self):
        assert cell_width('ＡＢ') == 4

    def test_combining_marks_take_no_cell(self):
        assert cell_width('e\u0301') == 1

    def test_style_ignored(self):
        assert cell_width('abc', {'bold': True}) == 3


class TestStyleValue:
    def test_mapping(self):
        assert style_value({'bold': True}, 'bold') is True

    def test_missing_key(self):
        assert style_value({'bold': True}, 'color', (1, 2, 3)) == (1, 2, 3)

    def test_opaque_style(self):
        assert style_value('highlight', 'bold') is None
        assert style_value(None, 'color', 'x') == 'x'
