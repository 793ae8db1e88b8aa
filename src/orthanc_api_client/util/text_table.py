def write_cell(value: str | int | float | None) -> str:
    if value is None:
        return ''

    return str(value)


class TableWriter:
    """
    Writer for a text table with a header, that is, a table of the form:

    Field 1 | Field 2 | Field 3
    --------+---------+--------
    Value 1 | Value 2 | Value 3
    ...
    """

    header: list[str]
    rows: list[list[str]]

    def __init__(self, *header: str):
        self.header = list(header)
        self.rows = []

    def append_row(self, *cells: str | int | float | None):
        if len(cells) != len(self.header):
            raise ValueError(f"Expected {len(self.header)} cells, got {len(cells)}.")

        self.rows.append(list(map(write_cell, cells)))

    def get_column_widths(self) -> list[int]:
        """
        Get the longest cell length of each column, header included, used for padding.
        """

        return [max(map(len, column)) for column in zip(self.header, *self.rows)]

    def write(self) -> str:
        """
        Serialize the text table into a string, or an empty string if the table has no columns.
        """

        if not self.header:
            return ''

        widths = self.get_column_widths()
        lines = [
            write_line(self.header, widths),
            '-+-'.join('-' * width for width in widths),
            *(write_line(row, widths) for row in self.rows),
        ]

        return '\n'.join(lines) + '\n'


def write_line(cells: list[str], widths: list[int]) -> str:
    return ' | '.join(cell.ljust(width) for cell, width in zip(cells, widths)).rstrip()
