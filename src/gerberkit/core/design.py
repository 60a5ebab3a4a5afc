"""Design container: every layer of one PCB.

A Design owns its layers, writes them as individual Gerber files plus a zip
bundle for the fabricator, and computes the bounding box of the whole board
once, using one worker per layer.
"""

import threading
import zipfile
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

import structlog

from gerberkit.config import GerberSettings
from gerberkit.core.layer import Layer
from gerberkit.domain import Rect

logger = structlog.get_logger(__name__)


class Design:
    """The set of layers needed to build a PCB.

    Example:
        design = Design("bifilar-coil")
        top = design.top_copper()
        top.add(Circle(0, 0, 0.5))
        design.write_gerber()   # bifilar-coil.gtl + bifilar-coil.zip

    Attributes:
        filename_prefix: Base file name shared by all layer files
        layers: Layers in creation order
    """

    def __init__(self, filename_prefix: str, settings: GerberSettings | None = None) -> None:
        """Create an empty design.

        Args:
            filename_prefix: Base file name (e.g. "bifilar-coil")
            settings: Output settings (defaults if None)
        """
        self.filename_prefix = filename_prefix
        self.settings = settings or GerberSettings()
        self.layers: list[Layer] = []
        self._mbb: Rect | None = None
        self._mbb_once = threading.Lock()

    def __repr__(self) -> str:
        return f"Design({self.filename_prefix!r}, layers={len(self.layers)})"

    def _new_layer(self, extension: str) -> Layer:
        layer = Layer(f"{self.filename_prefix}.{extension}")
        self.layers.append(layer)
        return layer

    def top_copper(self) -> Layer:
        """Add a top copper layer (.gtl) and return it."""
        return self._new_layer("gtl")

    def top_solder_mask(self) -> Layer:
        """Add a top solder mask layer (.gts) and return it."""
        return self._new_layer("gts")

    def top_silkscreen(self) -> Layer:
        """Add a top silkscreen layer (.gto) and return it."""
        return self._new_layer("gto")

    def bottom_copper(self) -> Layer:
        """Add a bottom copper layer (.gbl) and return it."""
        return self._new_layer("gbl")

    def bottom_solder_mask(self) -> Layer:
        """Add a bottom solder mask layer (.gbs) and return it."""
        return self._new_layer("gbs")

    def bottom_silkscreen(self) -> Layer:
        """Add a bottom silkscreen layer (.gbo) and return it."""
        return self._new_layer("gbo")

    def layer_n(self, n: int) -> Layer:
        """Add numbered inner copper layer n (.g<n>l) and return it."""
        if n < 1:
            raise ValueError(f"inner layer number must be positive, got {n}")
        return self._new_layer(f"g{n}l")

    def drill(self) -> Layer:
        """Add a drill layer (.xln) and return it."""
        return self._new_layer("xln")

    def outline(self) -> Layer:
        """Add a board outline layer (.gko) and return it."""
        return self._new_layer("gko")

    @property
    def output_dir(self) -> Path:
        return self.settings.output.output_dir or Path(".")

    @property
    def zip_path(self) -> Path:
        return self.output_dir / f"{self.filename_prefix}.zip"

    def write_gerber(self) -> list[Path]:
        """Write every layer to its own file and to the zip bundle.

        Layers are written one at a time. The first I/O error aborts the run
        and propagates unchanged; files written before it stay on disk.

        Returns:
            Paths of the layer files followed by the zip file

        Raises:
            OSError: If a file or archive entry cannot be written
        """
        out_dir = self.output_dir
        written: list[Path] = []

        logger.info(
            "Writing Gerber files",
            prefix=self.filename_prefix,
            layers=len(self.layers),
            output_dir=str(out_dir),
        )

        with zipfile.ZipFile(self.zip_path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for layer in self.layers:
                data = layer.to_gerber().encode("utf-8")
                path = out_dir / layer.filename
                path.write_bytes(data)
                zf.writestr(Path(layer.filename).name, data)
                written.append(path)
                logger.debug("Layer written", file=str(path), bytes=len(data))

        written.append(self.zip_path)
        logger.info("Gerber files written", files=len(written), zip=str(self.zip_path))
        return written

    def mbb(self) -> Rect:
        """Bounding box of the whole design.

        The first call computes every layer's bounding box in parallel and
        caches the union; later calls return the cached rect without any
        new work. The returned rect must not be mutated.
        """
        if self._mbb is not None:
            return self._mbb
        with self._mbb_once:
            if self._mbb is None:
                self._mbb = self._compute_mbb()
        return self._mbb

    def _compute_mbb(self) -> Rect:
        result = Rect.empty()
        if not self.layers:
            return result

        merge_lock = threading.Lock()

        def merge(layer: Layer) -> None:
            layer_mbb = layer.mbb()
            with merge_lock:
                result.join(layer_mbb)

        with ThreadPoolExecutor(max_workers=self.settings.output.max_workers) as executor:
            futures = [executor.submit(merge, layer) for layer in self.layers]
            for future in as_completed(futures):
                future.result()

        logger.debug("Design MBB computed", prefix=self.filename_prefix, mbb=result.to_dict())
        return result
