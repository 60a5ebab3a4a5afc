"""Unit tests for curve flattening and the glyph path interpreter."""

import pytest

from gerberkit.core._bezier import (
    cubic_point,
    curve_steps,
    flatten_curve,
    quadratic_point,
)
from gerberkit.core.path import PathInterpreter, PathState, iter_subpaths
from gerberkit.domain import PathStep, Point
from gerberkit.exceptions import PathCommandError


def run(steps: list[PathStep], resolution: float = 1.0):
    return list(iter_subpaths(steps, resolution))


class TestBezier:
    """Tests for Bezier evaluation and step counts."""

    def test_quadratic_midpoint(self) -> None:
        """Test quadratic curve evaluation at t=0.5."""
        pt = quadratic_point(Point(0, 0), Point(1, 2), Point(2, 0), 0.5)
        assert pt.x == pytest.approx(1.0)
        assert pt.y == pytest.approx(1.0)

    def test_cubic_endpoints(self) -> None:
        """Test cubic curve evaluation at its ends."""
        p0, p1, p2, p3 = Point(0, 0), Point(0, 1), Point(1, 1), Point(1, 0)
        assert cubic_point(p0, p1, p2, p3, 0.0) == p0
        assert cubic_point(p0, p1, p2, p3, 1.0) == p3

    def test_curve_steps_monotonic(self) -> None:
        """Test step counts never decrease with length and stay within bounds."""
        previous = 0
        for i in range(0, 2401):
            steps = curve_steps(i * 0.05, 1.0, 4, 100)
            assert 4 <= steps <= 100
            assert steps >= previous
            previous = steps

    def test_flattened_sample_count_grows_with_length(self) -> None:
        """Test straight cubics of increasing length get non-decreasing samples."""
        counts = []
        for length in [0.5, 2, 4, 7.5, 12, 30, 60, 99, 150, 400]:
            curve = (Point(0, 0), Point(length / 3, 0), Point(2 * length / 3, 0), Point(length, 0))
            counts.append(len(flatten_curve(curve, 1.0, 4, 100)))
        assert counts == sorted(counts)
        assert counts[0] == 4
        assert counts[-1] == 100

    def test_curve_steps_clamped(self) -> None:
        """Test that step counts stay within bounds."""
        assert curve_steps(1000.0, 0.1, 4, 100) == 100
        assert curve_steps(0.1, 1.0, 4, 100) == 4
        assert curve_steps(50.0, 1.0, 4, 100) == 50

    def test_flatten_excludes_start(self) -> None:
        """Test that samples start after t=0 and end at the end point."""
        pts = flatten_curve((Point(0, 0), Point(5, 10), Point(10, 0)), 1000.0, 4, 100)
        assert len(pts) == 4
        assert pts[-1] == Point(10, 0)
        assert Point(0, 0) not in pts


class TestPathInterpreter:
    """Tests for interpreting path steps into subpaths."""

    def test_closed_square(self) -> None:
        """Test a closed subpath repeats its first point."""
        subpaths = run(
            [
                PathStep("M", (0, 0)),
                PathStep("L", (10, 0, 10, 10, 0, 10)),
                PathStep("Z"),
            ]
        )
        assert len(subpaths) == 1
        sp = subpaths[0]
        assert sp.index == 0
        assert sp.points[0] == sp.points[-1] == Point(0, 0)
        assert len(sp.points) == 5

    def test_relative_commands(self) -> None:
        """Test lower-case commands relative to the pen."""
        sp = run([PathStep("m", (5, 5)), PathStep("l", (10, 0)), PathStep("v", (10,)), PathStep("z")])[0]
        assert sp.points == [Point(5, 5), Point(15, 5), Point(15, 15), Point(5, 5)]

    def test_absolute_horizontal_vertical(self) -> None:
        """Test upper-case H and V relative to the glyph origin."""
        sp = run([PathStep("M", (5, 5)), PathStep("H", (20,)), PathStep("V", (30,))])[0]
        assert sp.points == [Point(5, 5), Point(20, 5), Point(20, 30)]

    def test_implicit_lineto(self) -> None:
        """Test extra moveto pairs drawing lines."""
        sp = run([PathStep("M", (0, 0, 10, 0, 10, 10)), PathStep("Z")])[0]
        assert sp.points == [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 0)]

    def test_subpath_indices(self) -> None:
        """Test indices count the subpaths flushed before each one."""
        steps = [
            PathStep("M", (0, 0)),
            PathStep("L", (10, 0, 10, 10)),
            PathStep("Z"),
            PathStep("M", (2, 2)),
            PathStep("L", (8, 2, 8, 8)),
            PathStep("Z"),
        ]
        assert [sp.index for sp in run(steps)] == [0, 1]

    def test_moveto_flush_advances_index(self) -> None:
        """Test an outline ended by a moveto still takes its own index."""
        steps = [
            PathStep("M", (0, 0)),
            PathStep("L", (10, 0, 10, 10)),
            PathStep("M", (2, 2)),
            PathStep("L", (8, 2, 8, 8)),
            PathStep("Z"),
            PathStep("M", (20, 0)),
            PathStep("L", (30, 0, 30, 10)),
        ]
        assert [sp.index for sp in run(steps)] == [0, 1, 2]

    def test_dropped_subpath_keeps_index(self) -> None:
        """Test a lone moveto still counts towards later indices."""
        steps = [
            PathStep("M", (5, 5)),
            PathStep("M", (0, 0)),
            PathStep("L", (10, 0, 10, 10)),
            PathStep("Z"),
        ]
        assert [sp.index for sp in run(steps)] == [1]

    def test_draw_after_close_starts_new_subpath(self) -> None:
        """Test drawing after closepath continues from the subpath start."""
        steps = [
            PathStep("M", (0, 0)),
            PathStep("L", (10, 0, 10, 10)),
            PathStep("Z"),
            PathStep("l", (5, 5, 0, 5)),
            PathStep("z"),
        ]
        subpaths = run(steps)
        assert len(subpaths) == 2
        assert subpaths[1].points[0] == Point(0, 0)
        assert subpaths[1].points[1] == Point(5, 5)

    def test_quadratic_curve_min_steps(self) -> None:
        """Test a short curve flattened with the minimum step count."""
        sp = run([PathStep("M", (0, 0)), PathStep("Q", (5, 10, 10, 0))], resolution=1000.0)[0]
        assert len(sp.points) == 1 + 4
        assert sp.points[-1] == Point(10, 0)

    def test_smooth_quadratic_reflection(self) -> None:
        """Test T mirrors the previous Q control point."""
        sp = run(
            [PathStep("M", (0, 0)), PathStep("Q", (5, 10, 10, 0)), PathStep("T", (20, 0))],
            resolution=1000.0,
        )[0]
        # Mirrored control point (15, -10) pulls the second arch below the axis.
        second_arch = sp.points[5:]
        assert min(pt.y for pt in second_arch) < 0

    def test_reflected_control(self) -> None:
        """Test control point reflection rules."""
        state = PathState(pen=Point(10, 0), last_control=Point(10, 10), last_command="C")
        assert state.reflected_control("CcSs") == Point(10, -10)
        assert state.reflected_control("QqTt") == Point(10, 0)

    def test_lone_moveto_dropped(self) -> None:
        """Test that a degenerate subpath is not emitted."""
        assert run([PathStep("M", (0, 0)), PathStep("M", (5, 5))]) == []

    def test_unsupported_command(self) -> None:
        """Test elliptical arcs are rejected."""
        with pytest.raises(PathCommandError):
            run([PathStep("M", (0, 0)), PathStep("A", (1, 1, 0, 0, 1, 5, 5))])

    def test_bad_parameter_count(self) -> None:
        """Test a parameter list that is not a multiple of the group size."""
        with pytest.raises(PathCommandError):
            run([PathStep("M", (0, 0)), PathStep("L", (1, 2, 3))])

    def test_bad_resolution(self) -> None:
        """Test a non-positive resolution."""
        with pytest.raises(ValueError):
            PathInterpreter(0.0)


def flat(steps: list[PathStep]) -> list[float]:
    # Two samples per curve: t=0.5 and t=1.
    sp = list(iter_subpaths(steps, 1.0, min_steps=2, max_steps=2))[0]
    return [c for pt in sp.points for c in (pt.x, pt.y)]


class TestCurveCommands:
    """Tests for curve commands run through the interpreter."""

    def test_cubic_absolute(self) -> None:
        """Test C sampled at its midpoint and end."""
        assert flat([PathStep("M", (0, 0)), PathStep("C", (0, 10, 10, 10, 10, 0))]) == pytest.approx(
            [0, 0, 5, 7.5, 10, 0]
        )

    def test_cubic_relative(self) -> None:
        """Test c relative to the pen."""
        assert flat([PathStep("m", (10, 10)), PathStep("c", (0, 10, 10, 10, 10, 0))]) == pytest.approx(
            [10, 10, 15, 17.5, 20, 10]
        )

    def test_cubic_repeated_groups(self) -> None:
        """Test each c group resolved against the end of the previous one."""
        steps = [PathStep("m", (0, 0)), PathStep("c", (0, 10, 10, 10, 10, 0, 0, -10, 10, -10, 10, 0))]
        assert flat(steps) == pytest.approx([0, 0, 5, 7.5, 10, 0, 15, -7.5, 20, 0])

    def test_smooth_cubic_reflects(self) -> None:
        """Test S after C mirrors the second control point."""
        steps = [
            PathStep("M", (0, 0)),
            PathStep("C", (0, 10, 10, 10, 10, 0)),
            PathStep("S", (20, -10, 20, 0)),
        ]
        assert flat(steps) == pytest.approx([0, 0, 5, 7.5, 10, 0, 15, -7.5, 20, 0])

    def test_smooth_cubic_relative(self) -> None:
        """Test s after c gives the same curve as the absolute form."""
        steps = [
            PathStep("m", (0, 0)),
            PathStep("c", (0, 10, 10, 10, 10, 0)),
            PathStep("s", (10, -10, 10, 0)),
        ]
        assert flat(steps) == pytest.approx([0, 0, 5, 7.5, 10, 0, 15, -7.5, 20, 0])

    def test_smooth_cubic_after_line(self) -> None:
        """Test S after L starts with a zero tangent."""
        steps = [PathStep("M", (0, 0)), PathStep("L", (10, 0)), PathStep("S", (20, 10, 20, 0))]
        assert flat(steps) == pytest.approx([0, 0, 10, 0, 15, 3.75, 20, 0])

    def test_smooth_cubic_after_quadratic(self) -> None:
        """Test S after Q ignores the quadratic control point."""
        steps = [
            PathStep("M", (0, 0)),
            PathStep("Q", (5, 10, 10, 0)),
            PathStep("S", (20, 10, 20, 0)),
        ]
        assert flat(steps) == pytest.approx([0, 0, 5, 5, 10, 0, 15, 3.75, 20, 0])

    def test_quadratic_relative_with_smooth(self) -> None:
        """Test q then t mirroring the control point."""
        steps = [PathStep("m", (0, 0)), PathStep("q", (5, 10, 10, 0)), PathStep("t", (10, 0))]
        assert flat(steps) == pytest.approx([0, 0, 5, 5, 10, 0, 15, -5, 20, 0])

    def test_smooth_quadratic_after_cubic(self) -> None:
        """Test T after C starts with a zero tangent."""
        steps = [
            PathStep("M", (0, 0)),
            PathStep("C", (0, 10, 10, 10, 10, 0)),
            PathStep("T", (20, 0)),
        ]
        assert flat(steps) == pytest.approx([0, 0, 5, 7.5, 10, 0, 15, 0, 20, 0])

    def test_relative_horizontal_vertical(self) -> None:
        """Test h and v relative to the pen."""
        sp = run(
            [
                PathStep("m", (5, 5)),
                PathStep("h", (10,)),
                PathStep("v", (10,)),
                PathStep("h", (-10,)),
                PathStep("z"),
            ]
        )[0]
        assert sp.points == [Point(5, 5), Point(15, 5), Point(15, 15), Point(5, 15), Point(5, 5)]
