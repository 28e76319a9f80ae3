"""Tests for vtable.util.render — text and ANSI output of cell-measured tables."""

from vtable.util.measure import cell_width
from vtable.util.render import ANSI_BOLD, ANSI_UNDERLINE, RESET, ansi_code, as_text
from vtable.util.sort import sort_by_column
from vtable.util.table import Cell, ColumnSpec, build_table


def _scores(**kwargs):
    columns = [ColumnSpec('Name'), ColumnSpec('Score')]
    rows = [['Alice', '100'], ['Bob', '95']]
    return build_table(columns, rows, separator_gap=2, measure=cell_width, **kwargs)


class TestAsText:
    def test_plain(self):
        assert as_text(_scores()).split('\n') == [
            'Name   Score',
            'Alice  100',
            'Bob    95',
        ]

    def test_truncated_column(self):
        t = build_table([ColumnSpec('Player', 3), ColumnSpec('Pts')],
                        [['Alexander', '1'], ['Bo', '22']], separator_gap=1, measure=cell_width)
        assert as_text(t).split('\n') == [
            'Pla Pts',
            'Ale 1',
            'Bo  22',
        ]

    def test_wide_characters_align(self):
        t = build_table([ColumnSpec('Name'), ColumnSpec('X')], [['你好', '1'], ['abcde', '2']],
                        separator_gap=1, measure=cell_width)
        lines = as_text(t).split('\n')
        assert lines[1] == '你好  1'
        assert lines[2] == 'abcde 2'

    def test_after_sort(self):
        t = _scores()
        sort_by_column(t, 1)
        assert as_text(t).split('\n')[1:] == ['Alice  100', 'Bob    95']
        sort_by_column(t, 0, reverse=True)
        assert as_text(t).split('\n')[1:] == ['Bob    95', 'Alice  100']

    def test_header_only(self):
        t = build_table([ColumnSpec('A'), ColumnSpec('B')], [], separator_gap=2,
                        measure=cell_width)
        assert as_text(t) == 'A  B'

    def test_ansi_header_underlined(self):
        text = as_text(_scores(), ansi=True)
        header = text.split('\n')[0]
        assert header.startswith(ANSI_UNDERLINE)
        assert header.endswith(RESET)

    def test_ansi_styled_cell(self):
        rows = [[Cell('Alice', {'bold': True}), '100']]
        t = build_table([ColumnSpec('Name'), ColumnSpec('Score')], rows, separator_gap=2,
                        measure=cell_width)
        line = as_text(t, ansi=True).split('\n')[1]
        assert line.startswith(ANSI_BOLD + 'Alice' + RESET)
        assert line.endswith('100')


class TestAnsiCode:
    def test_no_style(self):
        assert ansi_code(None) == ''
        assert ansi_code('opaque') == ''

    def test_bold(self):
        assert ansi_code({'bold': True}) == ANSI_BOLD

    def test_nearest_color(self):
        assert ansi_code({'color': (230, 40, 40)}) == '\u001b[31m'
        assert ansi_code({'color': (250, 250, 250)}) == '\u001b[37m'

    def test_bold_and_color(self):
        assert ansi_code({'bold': True, 'color': (40, 140, 200)}) == ANSI_BOLD + '\u001b[34m'
