"""Layout of fixed-width text tables with spanning cells and margins."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TextIO, Union


class Align(enum.Enum):
    """Horizontal alignment of a cell's contents."""

    LEFT = 0
    CENTER = 1
    RIGHT = 2

    def lpad(self, s: str, width: int) -> str:
        """Return s with left padding that aligns it within width columns."""
        if self is Align.LEFT:
            return s
        if self is Align.CENTER:
            # Truncating division; a negative pad still yields its magnitude.
            pad = int((width - len(s)) / 2)
            return " " * abs(pad) + s
        if width < 0:
            return s.ljust(-width)
        return s.rjust(width)


@dataclass(frozen=True)
class _LeftMargin:
    margin: str


CellOption = Union[Align, _LeftMargin]


def left_margin(margin: str) -> _LeftMargin:
    """Return a cell option that sets the cell's left margin."""
    return _LeftMargin(margin)


@dataclass
class _Cell:
    row: int
    col: int
    span: int
    value: str
    left_margin: str
    alignment: Align


class Table:
    """Builds a text table cell by cell and lays it out.

    The building methods return the table so calls can be chained.
    """

    def __init__(self) -> None:
        self._cells: list[_Cell] = []
        self._cols = 0
        self._shrink: list[bool] = []
        self._cur_row = 0
        self._cur_col = 0

    @property
    def cur_col(self) -> int:
        """The index of the current column."""
        return self._cur_col

    def row(self) -> Table:
        """Start a new row."""
        if self._cells:
            self._cur_row += 1
        self._cur_col = 0
        return self

    def col(self, col: int) -> Table:
        """Skip forward to column col (numbered from 0)."""
        if col < self._cur_col:
            raise ValueError(
                f"cannot move from column {self._cur_col} to earlier column {col}"
            )
        self._cur_col = col
        return self

    def cell(self, value: str, *args: CellOption) -> Table:
        """Add a single-column cell at the current position."""
        return self.span(1, value, *args)

    def span(self, cols: int, value: str, *args: CellOption) -> Table:
        """Add a cell spanning cols columns at the current position."""
        margin = "" if self._cur_col == 0 or not value else " "
        cell = _Cell(self._cur_row, self._cur_col, cols, value, margin, Align.LEFT)
        for opt in args:
            if isinstance(opt, Align):
                cell.alignment = opt
            elif isinstance(opt, _LeftMargin):
                cell.left_margin = opt.margin
            else:
                raise TypeError(f"unknown cell option {opt!r}")
        self._cells.append(cell)
        self._cur_col += cols
        self._cols = max(self._cols, self._cur_col)
        return self

    def set_shrink(self, col: int, shrink: bool) -> None:
        """Mark col as a shrink column, which keeps its minimum width."""
        if len(self._shrink) < col + 1:
            self._shrink.extend([False] * (col + 1 - len(self._shrink)))
        self._shrink[col] = shrink

    def _is_shrink(self, col: int) -> bool:
        return col < len(self._shrink) and self._shrink[col]

    def _column_widths(self, lmargin: list[int]) -> list[int]:
        ws = [0] * self._cols
        for cell in sorted(self._cells, key=lambda c: c.span):
            w = len(cell.value) + lmargin[cell.col]
            cols = range(cell.col, cell.col + cell.span)
            if cell.span == 1:
                ws[cell.col] = max(ws[cell.col], w)
                continue
            if sum(ws[c] for c in cols) >= w:
                continue
            # Spread the missing width over the growable columns,
            # widest first so their excess is redistributed.
            grow = []
            for c in cols:
                if self._is_shrink(c):
                    w -= ws[c]
                else:
                    grow.append(c)
            grow.sort(key=lambda c: ws[c], reverse=True)
            remaining = len(grow)
            for c in grow:
                avg = -(-w // remaining)
                ws[c] = max(ws[c], avg)
                w -= ws[c]
                remaining -= 1
        return ws

    def format(self, out: TextIO) -> None:
        """Lay out the table and write it to out."""
        lmargin = [0] * self._cols
        for cell in self._cells:
            lmargin[cell.col] = max(lmargin[cell.col], len(cell.left_margin))

        ws = self._column_widths(lmargin)
        offs = [0]
        for w in ws:
            offs.append(offs[-1] + w)

        row = off = 0
        for cell in sorted(self._cells, key=lambda c: (c.row, c.col)):
            if not cell.value.strip() and not cell.left_margin.strip():
                continue
            while cell.row > row:
                out.write("\n")
                row += 1
                off = 0
            spaces = offs[cell.col] - off
            margin_width = lmargin[cell.col]
            out.write(" " * abs(spaces) + cell.left_margin.rjust(margin_width))
            off += spaces + margin_width
            width = offs[cell.col + cell.span] - offs[cell.col] - margin_width
            text = cell.alignment.lpad(cell.value, width)
            out.write(text)
            off += len(text)
        if self._cells:
            out.write("\n")