"""gerberkit - Write Gerber RS274X files for printed circuit boards.

gerberkit builds PCB fabrication artwork from simple primitives (arcs,
circles, lines, filled polygons and silkscreen text) and writes one Gerber
file per layer plus a zip bundle ready to submit to a board house.

Example:
    >>> from gerberkit.core import Circle, Design
    >>> design = Design("coil")
    >>> design.top_copper().add(Circle(10, 10, 2))
    >>> design.write_gerber()

This will create coil.gtl and coil.zip.
"""

__version__ = "0.1.0"
__author__ = "gerberkit contributors"

__all__ = ["__author__", "__version__"]
