"""Font, glyph and path-step representation.

Fonts are read-only during rendering. A glyph outline is an ordered list of
path steps using the SVG path-data vocabulary:

    MoveTo: M, m
    LineTo: L, l, H, h, V, v
    Cubic Bezier Curve: C, c, S, s
    Quadratic Bezier Curve: Q, q, T, t
    ClosePath: Z, z

Upper-case commands are absolute (relative to the glyph origin), lower-case
commands are relative to the current pen position.
"""

from dataclasses import dataclass, field
from typing import Any

DARK = "d"
CLEAR = "c"


@dataclass(frozen=True, slots=True)
class PathStep:
    """A single outline command.

    Attributes:
        command: Command letter (e.g. "M", "q", "Z")
        params: Numeric parameters of the command
    """

    command: str
    params: tuple[float, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        if not self.params:
            return {"c": self.command}
        return {"c": self.command, "p": list(self.params)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PathStep":
        """Deserialize from dictionary."""
        return cls(command=data["c"], params=tuple(data.get("p", ())))


@dataclass
class Glyph:
    """A single character outline.

    Attributes:
        advance_width: Horizontal advance in font units
        unicode: The character(s) this glyph renders
        polarity: One character per subpath, "d" (dark) or "c" (clear);
            empty when not yet computed
        path_steps: Outline commands
    """

    advance_width: float
    unicode: str = ""
    polarity: str = ""
    path_steps: list[PathStep] = field(default_factory=list)

    def is_empty(self) -> bool:
        """Check if glyph has no outline (e.g. space)."""
        return len(self.path_steps) == 0

    def subpath_count(self) -> int:
        """Count the subpaths the outline starts.

        Every moveto starts a subpath, and a drawing command after a
        closepath without an intervening moveto starts another one.
        """
        count = 0
        open_path = False
        for step in self.path_steps:
            cmd = step.command
            if cmd in "Mm":
                count += 1
                open_path = True
            elif cmd in "Zz":
                open_path = False
            elif not open_path:
                count += 1
                open_path = True
        return count

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for the JSON font format."""
        return {
            "advance_width": self.advance_width,
            "unicode": self.unicode,
            "polarity": self.polarity,
            "path_steps": [s.to_dict() for s in self.path_steps],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Glyph":
        """Deserialize from dictionary."""
        return cls(
            advance_width=data["advance_width"],
            unicode=data.get("unicode", ""),
            polarity=data.get("polarity", ""),
            path_steps=[PathStep.from_dict(s) for s in data.get("path_steps", [])],
        )


@dataclass
class Font:
    """A font mapping unicode strings to glyphs.

    Attributes:
        font_id: Lower-case identifier used to look the font up
        advance_width: Default horizontal advance in font units
        units_per_em: Font design units per em
        ascent: Ascender height in font units
        descent: Descender depth in font units (usually negative)
        missing_advance_width: Advance of the font's missing-glyph outline
        glyphs: Glyphs keyed by the unicode string they render
    """

    font_id: str
    advance_width: float
    units_per_em: float = 1000.0
    ascent: float = 800.0
    descent: float = -200.0
    missing_advance_width: float = 0.0
    glyphs: dict[str, Glyph] = field(default_factory=dict)

    @property
    def line_height(self) -> float:
        """Distance between baselines in font units."""
        return self.ascent - self.descent

    def get_glyph(self, char: str) -> Glyph | None:
        """Look up the glyph for a character."""
        return self.glyphs.get(char)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for the JSON font format."""
        return {
            "id": self.font_id,
            "advance_width": self.advance_width,
            "units_per_em": self.units_per_em,
            "ascent": self.ascent,
            "descent": self.descent,
            "missing_advance_width": self.missing_advance_width,
            "glyphs": {key: g.to_dict() for key, g in self.glyphs.items()},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Font":
        """Deserialize from dictionary."""
        return cls(
            font_id=data["id"],
            advance_width=data["advance_width"],
            units_per_em=data.get("units_per_em", 1000.0),
            ascent=data.get("ascent", 800.0),
            descent=data.get("descent", -200.0),
            missing_advance_width=data.get("missing_advance_width", 0.0),
            glyphs={key: Glyph.from_dict(g) for key, g in data.get("glyphs", {}).items()},
        )
