"""
The DE-9IM intersection matrix.

A 3x3 grid indexed by the position of a point relative to geometry A (row)
and geometry B (column), each one of Inside, OnBoundary or Outside. Each
cell holds the highest dimension of the intersection found so far. Cells are
only ever raised, never lowered.

The string form is the OGC one: nine characters from ``F012`` in row-major
order (I-I, I-B, I-E, B-I, B-B, B-E, E-I, E-B, E-E).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import numpy as np

from ..coordinate_position import CoordPos
from ..dimensions import Dimensions, boundary_dimensions, dimensions
from ..types import Geometry
from ..validation import InvalidMatrixError

if TYPE_CHECKING:
    from typing_extensions import Self

_POSITIONS = (CoordPos.INSIDE, CoordPos.ON_BOUNDARY, CoordPos.OUTSIDE)
_EXACT = {"0": Dimensions.POINT, "1": Dimensions.LINE, "2": Dimensions.AREA}

I, B, E = CoordPos.INSIDE, CoordPos.ON_BOUNDARY, CoordPos.OUTSIDE


class IntersectionMatrix:
    """
    DE-9IM matrix of two geometries.

    Produced by ``relate``. The matrix returned by ``relate`` is frozen:
    its cells can be read but no longer raised.

    Example:
        >>> im = IntersectionMatrix.from_string("212101212")
        >>> im.is_overlaps()
        True
        >>> str(im.transpose())
        '212101212'
    """

    __slots__ = ("_cells",)

    def __init__(self, cells: Optional[np.ndarray] = None) -> None:
        if cells is None:
            cells = np.full((3, 3), Dimensions.EMPTY, dtype=np.int8)
        self._cells = cells

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def empty(cls) -> Self:
        """Every cell EMPTY."""
        return cls()

    @classmethod
    def empty_disjoint(cls) -> Self:
        """The matrix of two empty geometries: only the exteriors meet."""
        matrix = cls()
        matrix._cells[E, E] = Dimensions.AREA
        return matrix

    @classmethod
    def from_string(cls, code: str) -> Self:
        """
        Parse a 9-character DE-9IM code such as ``"FF2FF1212"``.

        Raises:
            InvalidMatrixError: If the code is not 9 characters of ``F012``
        """
        matrix = cls()
        matrix.set_at_least_from_string(code)
        return matrix

    # -------------------------------------------------------------------------
    # Raising cells
    # -------------------------------------------------------------------------

    def set_at_least(self, pos_a: CoordPos, pos_b: CoordPos, minimum: Dimensions) -> None:
        if self._cells[pos_a, pos_b] < minimum:
            self._cells[pos_a, pos_b] = minimum

    def set_at_least_if_in_both(
        self,
        pos_a: Optional[CoordPos],
        pos_b: Optional[CoordPos],
        minimum: Dimensions,
    ) -> None:
        """Raise a cell only when both positions are known."""
        if pos_a is not None and pos_b is not None:
            self.set_at_least(pos_a, pos_b, minimum)

    def set_at_least_from_string(self, code: str) -> None:
        """
        Raise every cell to at least the dimension given in a DE-9IM code.

        ``F`` leaves a cell unchanged.

        Raises:
            InvalidMatrixError: If the code is not 9 characters of ``F012``
        """
        if len(code) != 9:
            raise InvalidMatrixError(
                f"DE-9IM code must have exactly 9 characters, got {len(code)}"
            )
        for k, char in enumerate(code):
            if char == "F":
                continue
            if char not in _EXACT:
                raise InvalidMatrixError(f"Expected one of '0', '1', '2', 'F', got {char!r}")
            self.set_at_least(_POSITIONS[k // 3], _POSITIONS[k % 3], _EXACT[char])

    def compute_disjoint(self, geom_a: Geometry, geom_b: Geometry) -> None:
        """
        Fill the exterior row and column for two geometries known not to meet.

        Each geometry's interior and boundary lie wholly in the other's
        exterior.
        """
        self.set_at_least(I, E, dimensions(geom_a))
        self.set_at_least(B, E, boundary_dimensions(geom_a))
        self.set_at_least(E, I, dimensions(geom_b))
        self.set_at_least(E, B, boundary_dimensions(geom_b))

    def freeze(self) -> None:
        """Make the matrix read-only."""
        self._cells.setflags(write=False)

    # -------------------------------------------------------------------------
    # Reading
    # -------------------------------------------------------------------------

    def get(self, pos_a: CoordPos, pos_b: CoordPos) -> Dimensions:
        """Dimension of the intersection of A's ``pos_a`` with B's ``pos_b``."""
        return Dimensions(int(self._cells[pos_a, pos_b]))

    def transpose(self) -> IntersectionMatrix:
        """The matrix with the roles of A and B exchanged."""
        return IntersectionMatrix(self._cells.T.copy())

    def matches(self, pattern: str) -> bool:
        """
        Test the matrix against a DE-9IM pattern.

        Pattern characters:
            ``0``, ``1``, ``2``: the cell has exactly that dimension
            ``F``/``f``: the cell is empty
            ``T``/``t``: the cell is not empty
            ``*``: anything

        Args:
            pattern: 9-character pattern in row-major order

        Returns:
            True if every cell satisfies its pattern character

        Raises:
            InvalidMatrixError: If the pattern is malformed
        """
        if len(pattern) != 9:
            raise InvalidMatrixError(
                f"DE-9IM pattern must have exactly 9 characters, got {len(pattern)}"
            )
        cells = self._cells.ravel()
        result = True
        for char, cell in zip(pattern, cells):
            if char == "*":
                continue
            if char in "Ff":
                ok = cell == Dimensions.EMPTY
            elif char in "Tt":
                ok = cell != Dimensions.EMPTY
            elif char in _EXACT:
                ok = cell == _EXACT[char]
            else:
                raise InvalidMatrixError(
                    f"Expected one of '0', '1', '2', 'F', 'T', '*', got {char!r}"
                )
            result = result and bool(ok)
        return result

    # -------------------------------------------------------------------------
    # Named predicates
    # -------------------------------------------------------------------------

    def _empty(self, pos_a: CoordPos, pos_b: CoordPos) -> bool:
        return self._cells[pos_a, pos_b] == Dimensions.EMPTY

    def is_disjoint(self) -> bool:
        """``FF*FF****``: the geometries have no point in common."""
        return self._empty(I, I) and self._empty(I, B) and self._empty(B, I) and self._empty(B, B)

    def is_intersects(self) -> bool:
        """The geometries have at least one point in common."""
        return not self.is_disjoint()

    def is_within(self) -> bool:
        """``T*F**F***``"""
        return not self._empty(I, I) and self._empty(I, E) and self._empty(B, E)

    def is_contains(self) -> bool:
        """``T*****FF*``"""
        return not self._empty(I, I) and self._empty(E, I) and self._empty(E, B)

    def is_equal_topo(self) -> bool:
        """
        ``T*F**FFF*``: the geometries are topologically equal.

        Two empty geometries are also equal.
        """
        if self == IntersectionMatrix.empty_disjoint():
            return True
        return (
            not self._empty(I, I)
            and self._empty(I, E)
            and self._empty(E, I)
            and self._empty(E, B)
            and self._empty(B, E)
        )

    def is_covered_by(self) -> bool:
        """``T*F**F***``, ``*TF**F***``, ``**FT*F***`` or ``**F*TF***``."""
        if not (self._empty(I, E) and self._empty(B, E)):
            return False
        return not (
            self._empty(I, I) and self._empty(I, B) and self._empty(B, I) and self._empty(B, B)
        )

    def is_covers(self) -> bool:
        """``T*****FF*``, ``*T****FF*``, ``***T**FF*`` or ``****T*FF*``."""
        if not (self._empty(E, I) and self._empty(E, B)):
            return False
        return not (
            self._empty(I, I) and self._empty(I, B) and self._empty(B, I) and self._empty(B, B)
        )

    def is_touches(self) -> bool:
        """``FT*******``, ``F**T*****`` or ``F***T****``."""
        return self._empty(I, I) and not (
            self._empty(I, B) and self._empty(B, I) and self._empty(B, B)
        )

    def is_crosses(self) -> bool:
        """
        The interiors meet in a lower dimension than the larger interior.

        The dimension of each geometry is read from the matrix itself, as the
        largest cell of A's interior row and of B's interior column.
        """
        dims_a = self._cells[I, :].max()
        dims_b = self._cells[:, I].max()
        if dims_a < dims_b:
            return not self._empty(I, I) and not self._empty(I, E)
        if dims_a > dims_b:
            return not self._empty(I, I) and not self._empty(E, I)
        if dims_a == Dimensions.LINE:
            return self._cells[I, I] == Dimensions.POINT
        return False

    def is_overlaps(self) -> bool:
        """
        The geometries share interior points of their own dimension, and
        each has interior points outside the other.
        """
        dims_a = self._cells[I, :].max()
        dims_b = self._cells[:, I].max()
        if dims_a != dims_b:
            return False
        if dims_a == Dimensions.LINE:
            return (
                self._cells[I, I] == Dimensions.LINE
                and not self._empty(I, E)
                and not self._empty(E, I)
            )
        if dims_a in (Dimensions.POINT, Dimensions.AREA):
            return not self._empty(I, I) and not self._empty(I, E) and not self._empty(E, I)
        return False

    # -------------------------------------------------------------------------
    # Dunder
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IntersectionMatrix):
            return NotImplemented
        return bool(np.array_equal(self._cells, other._cells))

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return "".join(Dimensions(int(cell)).to_char() for cell in self._cells.ravel())

    def __repr__(self) -> str:
        return f"IntersectionMatrix({str(self)!r})"


__all__ = ["IntersectionMatrix"]
