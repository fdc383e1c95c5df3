"""
Grid addressing shared by every stage.

Cells are addressed by a real composite key rather than a formatted string,
and neighbourhood queries go through ``CellIndex``.
"""

from typing import Dict, Iterable, Iterator, NamedTuple, Optional, Protocol, Tuple


class CellKey(NamedTuple):
    """Composite (week, day) key for one grid cell."""

    week: int
    day: int


# 4-connected and 8-connected neighbour offsets as (d_week, d_day)
ORTHOGONAL_OFFSETS: Tuple[Tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
MOORE_OFFSETS: Tuple[Tuple[int, int], ...] = tuple(
    (dw, dd) for dw in (-1, 0, 1) for dd in (-1, 0, 1) if (dw, dd) != (0, 0)
)


class LeveledCell(Protocol):
    week: int
    day: int
    level: int


def manhattan(a: Tuple[int, int], b: Tuple[int, int]) -> int:
    """Manhattan distance between two (week, day) pairs."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


class CellIndex:
    """Lookup of cells by ``CellKey`` for neighbourhood queries."""

    def __init__(self, cells: Iterable[LeveledCell]):
        self._cells: Dict[CellKey, LeveledCell] = {
            CellKey(cell.week, cell.day): cell for cell in cells
        }

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, key) -> bool:
        return key in self._cells

    def get(self, week: int, day: int) -> Optional[LeveledCell]:
        return self._cells.get(CellKey(week, day))

    def neighbors(self, week: int, day: int) -> Iterator[LeveledCell]:
        """Yield the up-to-8 existing Moore neighbours of a cell."""
        for dw, dd in MOORE_OFFSETS:
            cell = self._cells.get(CellKey(week + dw, day + dd))
            if cell is not None:
                yield cell


def compute_richness(cell: LeveledCell, index: CellIndex, max_level: int) -> float:
    """
    Normalised average level of a cell's neighbours.

    Args:
        cell: Cell to evaluate
        index: Lookup containing the cell's neighbours
        max_level: Top of the level scale used for normalisation

    Returns:
        Richness in [0, 1]; 0 when the cell has no neighbours
    """
    neighbor_sum = 0
    count = 0
    for neighbor in index.neighbors(cell.week, cell.day):
        neighbor_sum += neighbor.level
        count += 1
    if count == 0:
        return 0.0
    return neighbor_sum / (count * max(max_level, 1))
