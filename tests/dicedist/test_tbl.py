"""
Test table formatting logic
"""
import dicedist.tbl
from dicedist.dist import Distribution


def test_max_col_width():
    lines = [
        ['aa', 'aaa', 'aa', 'aa'],
        ['a', 'aa', 'aa', 'aaaa'],
    ]
    assert dicedist.tbl.max_col_width(lines) == [2, 3, 2, 4]


def test_format_header():
    header = ['Value', 'Ways', 'Percent']
    expect = """Value | Ways | Percent
----- | ---- | -------
"""
    assert dicedist.tbl.format_header(header, pads=dicedist.tbl.max_col_width([header])) == expect


def test_format_line_simple():
    data = ['a phrase', 3344, 5553, 'another phrase']
    expect = 'a phrase | 3344 | 5553 | another phrase'
    assert dicedist.tbl.format_line(data) == expect


def test_format_line_separator():
    data = ['a phrase', 3344, 5553, 'another phrase']
    expect = 'a phrase$$3344$$5553$$another phrase'
    assert dicedist.tbl.format_line(data, sep='$$') == expect


def test_format_line_pad_different():
    data = ['a phrase', 3344, 5553, 'another phrase']
    pads = [15, 7, 7, 20]
    expect = 'a phrase        | 3344    | 5553    | another phrase'
    assert dicedist.tbl.format_line(data, pads=pads) == expect


def test_format_line_pad_center():
    data = ['a phrase', 3344, 5553, 'another phrase']
    pads = [15, 7, 7, 20]
    expect = '   a phrase     |  3344   |  5553   |    another phrase'
    assert dicedist.tbl.format_line(data, pads=pads, center=True) == expect


def test_format_table():
    lines = [
        ['Value', 'Ways', 'Percent'],
        [2, 1, '2.78%'],
        [7, 6, '16.67%'],
        [12, 1, '2.78%'],
    ]
    expect = """Value | Ways | Percent
2     | 1    | 2.78%
7     | 6    | 16.67%
12    | 1    | 2.78%"""
    assert dicedist.tbl.format_table(lines) == expect


def test_format_table_header():
    lines = [
        ['Value', 'Ways'],
        [2, 1],
        [12, 1],
    ]
    expect = """Value | Ways
----- | ----
2     | 1
12    | 1"""
    assert dicedist.tbl.format_table(lines, header=True) == expect


def test_format_bar():
    assert dicedist.tbl.format_bar(0.5, 1.0, 10) == '#####'
    assert dicedist.tbl.format_bar(1.0, 1.0, 10) == '#' * 10
    assert dicedist.tbl.format_bar(0.2, 0, 10) == ''


def test_distribution_lines():
    lines = dicedist.tbl.distribution_lines(Distribution({2: 3, 1: 1}), width=4)
    assert lines == [
        ['Value', 'Ways', 'Percent', ''],
        [1, 1, '25.00%', '#'],
        [2, 3, '75.00%', '####'],
    ]


def test_distribution_lines_table(f_dist_2d6):
    text = dicedist.tbl.format_table(dicedist.tbl.distribution_lines(f_dist_2d6, width=6), header=True)
    rows = text.split('\n')
    assert len(rows) == 2 + 11
    assert rows[2].startswith('2     | 1    | 2.78%')
    assert rows[7].endswith('######')


def test_format_summary():
    expect = """Min     : 1
Max     : 2
Mean    : 1.5000
Std Dev : 0.5000
Outcomes: 2"""
    assert dicedist.tbl.format_summary(Distribution({1: 1, 2: 1})) == expect


def test_format_summary_thousands():
    summary = dicedist.tbl.format_summary(Distribution({1: 1500}))
    assert summary.endswith('Outcomes: 1,500')
