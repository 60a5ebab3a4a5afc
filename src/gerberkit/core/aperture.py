"""Aperture declarations and per-layer deduplication.

Every stroked primitive asks for an aperture (shape and size). A layer
declares each distinct aperture once, as ``%ADD<index>...*%``, and selects it
by index before drawing. Sizes that agree to the coordinate resolution
(one nanometer) share a declaration.
"""

from dataclasses import dataclass
from enum import Enum

from gerberkit.core.rs274x import (
    REGION_APERTURE_INDEX,
    REGION_APERTURE_SIZE,
    TextSink,
    to_units,
)


class Shape(Enum):
    """Aperture shape used by stroked primitives."""

    RECT = "R"
    CIRCLE = "C"


ApertureKey = tuple[Shape, int]


@dataclass(frozen=True, slots=True)
class Aperture:
    """A Gerber aperture (tool shape and size).

    Attributes:
        shape: Circle or square
        size: Diameter or side length in millimeters
    """

    shape: Shape
    size: float

    @property
    def key(self) -> ApertureKey:
        """Identity used for deduplication, quantized like coordinates."""
        return (self.shape, to_units(self.size))

    def write_gerber(self, w: TextSink, index: int) -> None:
        """Write the aperture definition.

        Args:
            w: Output stream
            index: D-code assigned to this aperture
        """
        if self.shape is Shape.CIRCLE:
            w.write(f"%ADD{index}C,{self.size:0.5f}*%\n")
        else:
            w.write(f"%ADD{index}R,{self.size:0.5f}X{self.size:0.5f}*%\n")


REGION_APERTURE = Aperture(Shape.CIRCLE, REGION_APERTURE_SIZE)


class ApertureTable:
    """Ordered aperture declarations of one layer.

    The built-in region aperture always occupies index 10; apertures
    registered by primitives are numbered contiguously after it in the
    order they were first seen.
    """

    FIRST_INDEX = REGION_APERTURE_INDEX + 1

    def __init__(self) -> None:
        self._apertures: list[Aperture] = []
        self._index: dict[ApertureKey, int] = {}

    def register(self, aperture: Aperture) -> int:
        """Declare an aperture if not already known.

        Args:
            aperture: Aperture requested by a primitive

        Returns:
            D-code index of the (possibly pre-existing) declaration
        """
        key = aperture.key
        index = self._index.get(key)
        if index is None:
            index = self.FIRST_INDEX + len(self._apertures)
            self._apertures.append(aperture)
            self._index[key] = index
        return index

    def index_of(self, aperture: Aperture) -> int:
        """Look up the D-code of a registered aperture.

        Raises:
            KeyError: If the aperture was never registered
        """
        return self._index[aperture.key]

    def __len__(self) -> int:
        return len(self._apertures)

    def __iter__(self):
        return iter(self._apertures)

    def items(self) -> list[tuple[int, Aperture]]:
        """Declared apertures with their indices, in allocation order."""
        return [(self.FIRST_INDEX + i, a) for i, a in enumerate(self._apertures)]

    def write_gerber(self, w: TextSink) -> None:
        """Write the built-in aperture followed by every declaration."""
        REGION_APERTURE.write_gerber(w, REGION_APERTURE_INDEX)
        for index, aperture in self.items():
            aperture.write_gerber(w, index)
