"""A single Gerber layer: primitives plus their aperture table."""

import io

import structlog

from gerberkit.core import rs274x
from gerberkit.core.aperture import ApertureTable
from gerberkit.core.primitives import Primitive
from gerberkit.core.rs274x import TextSink
from gerberkit.domain import Rect

logger = structlog.get_logger(__name__)


class Layer:
    """An ordered list of primitives written to one Gerber file.

    Layers are created by the Design factory methods. ``add`` is the only
    mutation: primitives are appended, apertures are declared on first use,
    and nothing is ever removed or reordered.

    Attributes:
        filename: File name of the layer (e.g. "coil.gtl")
        primitives: Primitives in drawing order
        apertures: Aperture declarations requested by the primitives
    """

    def __init__(self, filename: str) -> None:
        self.filename = filename
        self.primitives: list[Primitive] = []
        self.apertures = ApertureTable()

    def __repr__(self) -> str:
        return f"Layer({self.filename!r}, primitives={len(self.primitives)})"

    def add(self, *primitives: Primitive) -> "Layer":
        """Append primitives, declaring any new aperture they need.

        Returns:
            This layer, for chaining
        """
        for primitive in primitives:
            aperture = primitive.aperture()
            if aperture is not None:
                self.apertures.register(aperture)
            self.primitives.append(primitive)
        return self

    def write_gerber(self, w: TextSink) -> None:
        """Write the complete Gerber program for this layer.

        Order: format/unit/polarity header, aperture declarations, the draw
        commands of every primitive, end of program.
        """
        w.write(rs274x.HEADER)
        self.apertures.write_gerber(w)
        for primitive in self.primitives:
            aperture = primitive.aperture()
            index = rs274x.REGION_APERTURE_INDEX
            if aperture is not None:
                index = self.apertures.index_of(aperture)
                rs274x.select_aperture(w, index)
            primitive.write_gerber(w, index)
        w.write(rs274x.END_OF_PROGRAM)

    def to_gerber(self) -> str:
        """Serialize the layer to a string."""
        buf = io.StringIO()
        self.write_gerber(buf)
        return buf.getvalue()

    def mbb(self) -> Rect:
        """Union of all primitive bounding boxes (empty for an empty layer)."""
        mbb = Rect.empty()
        for primitive in self.primitives:
            mbb.join(primitive.mbb())
        logger.debug("Layer MBB computed", layer=self.filename, primitives=len(self.primitives))
        return mbb
