"""Glyph path interpreter.

Turns a glyph's path steps into flattened subpaths (closed polylines in
font units). Lines are copied through; quadratic and cubic curves are
sampled at a segment count derived from their length.

The interpreter carries its state in an explicit PathState object, so each
run is independent of every other run.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

import structlog

from gerberkit.core._bezier import flatten_curve
from gerberkit.domain import PathStep, Point
from gerberkit.exceptions import PathCommandError

logger = structlog.get_logger(__name__)

# Number of parameters consumed by one repetition of each command.
GROUP_SIZES: dict[str, int] = {
    "M": 2,
    "L": 2,
    "H": 1,
    "V": 1,
    "C": 6,
    "S": 4,
    "Q": 4,
    "T": 2,
    "Z": 0,
}

CUBIC_COMMANDS = "CcSs"
QUADRATIC_COMMANDS = "QqTt"


@dataclass
class Subpath:
    """A flattened outline piece ready to be filled.

    Attributes:
        points: Polyline vertices in font units
        index: Position of the subpath in the outline, counting every
            subpath started (dropped degenerate ones included); selects the
            subpath's character in the glyph polarity string
    """

    points: list[Point]
    index: int

    @property
    def start(self) -> Point:
        return self.points[0]


@dataclass
class PathState:
    """Interpreter state threaded through the path steps.

    Attributes:
        pen: Current pen position
        origin: Glyph origin (reference for absolute H/V)
        start: First vertex of the current subpath
        points: Vertices of the subpath being accumulated
        last_control: Control point of the previous curve segment
        last_command: Command letter of the previous step
        flushed: Subpaths flushed so far
    """

    pen: Point = field(default_factory=lambda: Point(0.0, 0.0))
    origin: Point = field(default_factory=lambda: Point(0.0, 0.0))
    start: Point = field(default_factory=lambda: Point(0.0, 0.0))
    points: list[Point] = field(default_factory=list)
    last_control: Point | None = None
    last_command: str = ""
    flushed: int = 0

    def reflected_control(self, family: str) -> Point:
        """Control point implied by a smooth (S/T) curve command.

        The previous control point mirrored through the pen when the
        previous command belongs to the same curve family, otherwise the
        pen itself.
        """
        if self.last_control is not None and self.last_command and self.last_command in family:
            return Point(
                2.0 * self.pen.x - self.last_control.x,
                2.0 * self.pen.y - self.last_control.y,
            )
        return self.pen


class PathInterpreter:
    """Flattens glyph path steps into subpaths.

    Example:
        interpreter = PathInterpreter(resolution=5.0)
        for subpath in interpreter.run(glyph.path_steps):
            print(subpath.index, len(subpath.points))
    """

    def __init__(self, resolution: float, min_steps: int = 4, max_steps: int = 100) -> None:
        """Initialize the interpreter.

        Args:
            resolution: Target chord length for curves, in font units
            min_steps: Minimum segments per curve
            max_steps: Maximum segments per curve
        """
        if resolution <= 0:
            raise ValueError(f"resolution must be positive, got {resolution}")
        self.resolution = resolution
        self.min_steps = min_steps
        self.max_steps = max_steps

    def run(self, path_steps: Iterable[PathStep]) -> Iterator[Subpath]:
        """Interpret path steps, yielding each subpath as it is completed.

        Args:
            path_steps: Outline commands of one glyph

        Yields:
            Subpath objects in traversal order

        Raises:
            PathCommandError: If a command is unsupported or has a
                malformed parameter list
        """
        state = PathState()
        for step in path_steps:
            yield from self._step(state, step)
        if state.points:
            yield from self._flush(state)

    def _step(self, state: PathState, step: PathStep) -> Iterator[Subpath]:
        cmd = step.command
        upper = cmd.upper()
        if upper not in GROUP_SIZES:
            raise PathCommandError(cmd, "unsupported path command")

        size = GROUP_SIZES[upper]
        params = step.params
        if size == 0:
            if params:
                raise PathCommandError(cmd, f"expected no parameters, got {len(params)}")
            if state.points:
                state.points.append(state.points[0])
                yield from self._flush(state)
                state.pen = state.start
            state.last_command = cmd
            state.last_control = None
            return

        if not params or len(params) % size != 0:
            raise PathCommandError(
                cmd, f"expected a multiple of {size} parameters, got {len(params)}"
            )

        relative = cmd.islower()
        for i in range(0, len(params), size):
            group = params[i : i + size]
            if upper == "M":
                if i == 0:
                    if state.points:
                        yield from self._flush(state)
                    state.pen = self._resolve(state, group[0], group[1], relative)
                    state.points = [state.pen]
                    state.start = state.pen
                else:
                    # Extra moveto pairs are implicit linetos.
                    self._line_to(state, self._resolve(state, group[0], group[1], relative))
                state.last_control = None
            elif upper == "L":
                self._line_to(state, self._resolve(state, group[0], group[1], relative))
                state.last_control = None
            elif upper == "H":
                x = state.pen.x + group[0] if relative else state.origin.x + group[0]
                self._line_to(state, Point(x, state.pen.y))
                state.last_control = None
            elif upper == "V":
                y = state.pen.y + group[0] if relative else state.origin.y + group[0]
                self._line_to(state, Point(state.pen.x, y))
                state.last_control = None
            elif upper == "C":
                c1 = self._resolve(state, group[0], group[1], relative)
                c2 = self._resolve(state, group[2], group[3], relative)
                end = self._resolve(state, group[4], group[5], relative)
                self._curve_to(state, (state.pen, c1, c2, end), c2)
            elif upper == "S":
                c1 = state.reflected_control(CUBIC_COMMANDS)
                c2 = self._resolve(state, group[0], group[1], relative)
                end = self._resolve(state, group[2], group[3], relative)
                self._curve_to(state, (state.pen, c1, c2, end), c2)
            elif upper == "Q":
                c1 = self._resolve(state, group[0], group[1], relative)
                end = self._resolve(state, group[2], group[3], relative)
                self._curve_to(state, (state.pen, c1, end), c1)
            elif upper == "T":
                c1 = state.reflected_control(QUADRATIC_COMMANDS)
                end = self._resolve(state, group[0], group[1], relative)
                self._curve_to(state, (state.pen, c1, end), c1)
            state.last_command = cmd

    @staticmethod
    def _resolve(state: PathState, x: float, y: float, relative: bool) -> Point:
        if relative:
            return Point(state.pen.x + x, state.pen.y + y)
        return Point(state.origin.x + x, state.origin.y + y)

    @staticmethod
    def _ensure_open(state: PathState) -> None:
        # Drawing after a closepath without a moveto starts at the pen.
        if not state.points:
            state.points = [state.pen]
            state.start = state.pen

    def _line_to(self, state: PathState, pt: Point) -> None:
        self._ensure_open(state)
        state.points.append(pt)
        state.pen = pt

    def _curve_to(self, state: PathState, control_points: tuple[Point, ...], last_control: Point) -> None:
        self._ensure_open(state)
        state.points.extend(
            flatten_curve(control_points, self.resolution, self.min_steps, self.max_steps)
        )
        state.pen = control_points[-1]
        state.last_control = last_control

    @staticmethod
    def _flush(state: PathState) -> Iterator[Subpath]:
        points, state.points = state.points, []
        index = state.flushed
        state.flushed += 1
        if len(points) < 2:
            logger.debug("Dropping degenerate subpath", points=len(points))
            return
        yield Subpath(points=points, index=index)


def iter_subpaths(
    path_steps: Iterable[PathStep],
    resolution: float,
    min_steps: int = 4,
    max_steps: int = 100,
) -> Iterator[Subpath]:
    """Flatten path steps into subpaths.

    Convenience wrapper around PathInterpreter.run().
    """
    return PathInterpreter(resolution, min_steps, max_steps).run(path_steps)
