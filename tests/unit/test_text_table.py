import pytest

from orthanc_api_client.util.text_table import TableWriter


def test_write_table():
    table = TableWriter('ID', 'Modality', 'Description')
    table.append_row('r1', 'MR', 'T1 weighted')
    table.append_row('r22', 'CT', None)

    assert table.write() == (
        'ID  | Modality | Description\n'
        '----+----------+------------\n'
        'r1  | MR       | T1 weighted\n'
        'r22 | CT       |\n'
    )


def test_write_table_without_rows():
    table = TableWriter('ID', 'Size')

    assert table.write() == (
        'ID | Size\n'
        '---+-----\n'
    )


def test_write_table_numbers():
    table = TableWriter('Index', 'Size')
    table.append_row(12, 1024.5)

    assert table.write().splitlines()[2] == '12    | 1024.5'


def test_write_table_without_columns():
    assert TableWriter().write() == ''


def test_append_row_wrong_length():
    table = TableWriter('ID', 'Size')

    with pytest.raises(ValueError):
        table.append_row('r1')
