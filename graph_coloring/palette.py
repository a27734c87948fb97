from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

Color = str

# Built-in catalog, in the order colors are tried by the solver.
CATALOG: Tuple[Tuple[Color, str], ...] = (
    ("yellow", "#f1c40f"),
    ("blue", "#1f77b4"),
    ("red", "#d62728"),
    ("green", "#2ca02c"),
    ("gray", "#7f7f7f"),
    ("pink", "#e377c2"),
)

CATALOG_SIZE = len(CATALOG)

UNCOLORED_HEX = "#cccccc"

_CATALOG_HEX: Dict[Color, str] = dict(CATALOG)


class PaletteError(ValueError):
    pass


def _check_count(m: Any) -> int:
    if isinstance(m, bool) or not isinstance(m, int):
        raise PaletteError(f"Color count must be an integer (got {m!r})")
    if m < 1:
        raise PaletteError(f"Color count must be at least 1 (got {m})")
    return m


def _normalize_hex(color: str) -> Optional[str]:
    if not color.startswith("#"):
        return None
    digits = color[1:].lower()
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    if len(digits) != 6 or any(ch not in "0123456789abcdef" for ch in digits):
        return None
    return f"#{digits}"


def _fallback_colors(count: int) -> List[str]:
    """Distinct display colors for tokens with no color of their own."""
    import plotly.colors as pc

    pool: List[str] = []
    for seq in (pc.qualitative.D3, pc.qualitative.Plotly, pc.qualitative.Dark24, pc.qualitative.Light24, pc.qualitative.Alphabet):
        for c in seq:
            norm = _normalize_hex(c)
            if norm is not None and norm not in pool:
                pool.append(norm)
    if count > len(pool):
        extra = count - len(pool)
        pool += pc.sample_colorscale(pc.sequential.Turbo, [(i + 0.5) / extra for i in range(extra)])
    return pool


@lru_cache(maxsize=128)
def _hex_map(colors: Tuple[Color, ...]) -> Dict[Color, str]:
    # First pass: catalog names and hex tokens keep their own color unless an
    # earlier token already claimed it.
    out: Dict[Color, str] = {}
    taken = {UNCOLORED_HEX}
    for c in colors:
        own = _CATALOG_HEX.get(c) or _normalize_hex(c)
        if own is not None and own not in taken:
            out[c] = own
            taken.add(own)

    pending = [c for c in colors if c not in out]
    if pending:
        free = iter(h for h in _fallback_colors(len(pending) + len(taken)) if h not in taken)
        for c in pending:
            out[c] = next(free)
    return out


@dataclass(frozen=True)
class Palette:
    """An ordered sequence of distinct color tokens."""

    colors: Tuple[Color, ...]

    def __post_init__(self) -> None:
        if not self.colors:
            raise PaletteError("Palette needs at least one color")
        seen = set()
        for c in self.colors:
            if not isinstance(c, str) or not c.strip():
                raise PaletteError(f"Palette colors must be non-blank strings (got {c!r})")
            if c in seen:
                raise PaletteError(f"Duplicate palette color: {c!r}")
            seen.add(c)

    @staticmethod
    def from_catalog(m: int) -> "Palette":
        """Take the first `m` catalog colors.

        Requests beyond the catalog size are rejected rather than clamped, so a
        caller never gets fewer colors than it asked for without noticing.
        """
        _check_count(m)
        if m > CATALOG_SIZE:
            raise PaletteError(
                f"Requested {m} colors but the built-in catalog only has {CATALOG_SIZE}; "
                "pass a custom palette to use more"
            )
        return Palette(tuple(name for name, _hex in CATALOG[:m]))

    @staticmethod
    def custom(colors: Iterable[Color]) -> "Palette":
        if isinstance(colors, (str, bytes)) or not isinstance(colors, Iterable):
            raise PaletteError(f"Custom palette must be a list of color names (got {colors!r})")
        return Palette(tuple(colors))

    def first(self, m: int) -> "Palette":
        _check_count(m)
        if m > len(self.colors):
            raise PaletteError(f"Cannot take {m} colors from a palette of {len(self.colors)}")
        return Palette(self.colors[:m])

    def hex_for(self, color: Color) -> str:
        """Display color for a token, unique within this palette.

        Catalog names and hex codes keep their own color when no earlier token
        has it; every other token gets an unused color.
        """
        try:
            return _hex_map(self.colors)[color]
        except KeyError as e:
            raise KeyError(f"Color {color!r} is not in the palette") from e

    def __contains__(self, color: object) -> bool:
        return color in self.colors

    def __iter__(self) -> Iterator[Color]:
        return iter(self.colors)

    def __len__(self) -> int:
        return len(self.colors)
