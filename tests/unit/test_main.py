"""Tests for the `vtable render` command line."""

import pytest

from vtable.__main__ import main

CSV = 'Name,Score\nAlice,100\nBob,95\n'


@pytest.fixture
def csv_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / 'scores.csv'
    path.write_text(CSV, encoding='utf-8')
    return path.name


class TestRender:
    def test_text(self, csv_file, capsys):
        assert main(['render', csv_file]) == 0
        assert capsys.readouterr().out.split('\n')[:3] == [
            'Name   Score',
            'Alice  100',
            'Bob    95',
        ]

    def test_sorted_reversed(self, csv_file, capsys):
        assert main(['render', csv_file, '--sort', 'score', '--reverse']) == 0
        assert capsys.readouterr().out.split('\n')[1:3] == ['Bob    95', 'Alice  100']

    def test_widths_and_gap(self, csv_file, capsys):
        assert main(['render', csv_file, '--widths', '2,', '--gap', '1']) == 0
        assert capsys.readouterr().out.split('\n')[:3] == ['Na Score', 'Al 100', 'Bo 95']

    def test_unknown_sort_column(self, csv_file):
        assert main(['render', csv_file, '--sort', 'Age']) == 1

    def test_wrong_width_count(self, csv_file):
        assert main(['render', csv_file, '--widths', '1,2,3']) == 1

    @pytest.mark.parametrize('widths', ['0,', '-3,', ',0'])
    def test_non_positive_width(self, csv_file, capsys, widths):
        assert main(['render', csv_file, f'--widths={widths}']) == 1
        assert capsys.readouterr().out == ''

    def test_missing_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert main(['render', 'nope.csv']) == 1

    def test_creates_log_directory(self, csv_file, tmp_path):
        main(['render', csv_file])
        assert (tmp_path / 'logs').is_dir()
