"""Plain text tables with aligned columns.

    t = Table()
    t.set_titles([Cell("Fruit"), Cell("Price")])
    t.add_row([Cell("Apple"), Cell("10", align=Align.RIGHT)])
    print(t, end="")

    Fruit | Price
    ------+------
    Apple |    10
"""

from dataclasses import dataclass
from enum import Enum

SEPARATOR = " | "


class Align(Enum):
    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"


@dataclass
class Cell:
    content: str = ""
    pad_left: int = 0
    pad_right: int = 0
    align: Align = Align.LEFT

    @property
    def text(self) -> str:
        return " " * self.pad_left + self.content + " " * self.pad_right

    def format(self, width: int) -> str:
        text = self.text
        if self.align is Align.RIGHT:
            return text.rjust(width)
        if self.align is Align.CENTER:
            left = (width - len(text)) // 2
            return (" " * left + text).ljust(width)
        return text.ljust(width)


class Table:
    """Rows of cells rendered with a title row and separator line."""

    def __init__(self):
        self.titles: list[Cell] | None = None
        self.rows: list[list[Cell]] = []

    def set_titles(self, row: list[Cell]) -> None:
        self.titles = list(row)

    def add_row(self, row: list[Cell]) -> None:
        self.rows.append(list(row))

    def _all_rows(self) -> list[list[Cell]]:
        if self.titles is None:
            return self.rows
        return [self.titles] + self.rows

    def column_widths(self) -> list[int]:
        widths: list[int] = []
        for row in self._all_rows():
            for i, cell in enumerate(row):
                if i == len(widths):
                    widths.append(0)
                widths[i] = max(widths[i], len(cell.text))
        return widths

    def _render_row(self, row: list[Cell], widths: list[int]) -> str:
        cells = [
            (row[i] if i < len(row) else Cell()).format(width)
            for i, width in enumerate(widths)
        ]
        return SEPARATOR.join(cells).rstrip() + "\n"

    def _render_separator(self, widths: list[int]) -> str:
        last = len(widths) - 1
        runs = ["-" * (width + (i > 0) + (i < last)) for i, width in enumerate(widths)]
        return "+".join(runs) + "\n"

    def render(self) -> str:
        widths = self.column_widths()
        if not widths:
            return ""
        lines = []
        if self.titles is not None:
            lines.append(self._render_row(self.titles, widths))
            lines.append(self._render_separator(widths))
        for row in self.rows:
            lines.append(self._render_row(row, widths))
        return "".join(lines)

    def __str__(self) -> str:
        return self.render()
