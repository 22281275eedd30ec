"""ConvertContext: the single mutable state object flowing through all transforms.

Per-polygon results -> PolygonData (pieces, display)
Whole-batch results -> ConvertContext (root tree, errors, counts)
"""

from __future__ import annotations

from dataclasses import dataclass, field

from polydisplay.display.display import Display
from polydisplay.engine.config import ConvertConfig
from polydisplay.geometry.polygon import Polygon


@dataclass
class PolygonData:
    """One input polygon and what the stages made of it."""

    id: str
    # Input polygon as supplied
    source: Polygon
    # Simplified, orientation-normalised polygon (the conversion boundary)
    polygon: Polygon | None = None
    # Convex pieces from the decomposer
    pieces: list[Polygon] = field(default_factory=list)
    # Nested display tree covering every piece
    display: Display | None = None
    # Set when a stage rejected this polygon; later stages skip it
    failed: bool = False

    @property
    def active(self) -> bool:
        return not self.failed

    @property
    def display_count(self) -> int:
        return self.display.get_total_display_count() if self.display is not None else 0


@dataclass
class ConvertContext:
    """Shared state flowing through the entire pipeline."""

    polygons: list[PolygonData] = field(default_factory=list)
    config: ConvertConfig = field(default_factory=ConvertConfig)

    # Final nested tree, styled (populated by Layer 3)
    root: Display | None = None

    # --- Pipeline metadata ---
    completed_transforms: set[str] = field(default_factory=set)
    # Keyed by polygon id for per-polygon failures, by transform id otherwise
    errors: dict[str, str] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def from_polygons(cls, polygons: list[Polygon], config: ConvertConfig | None = None) -> ConvertContext:
        return cls(
            polygons=[PolygonData(id=f"P{i + 1}", source=p) for i, p in enumerate(polygons)],
            config=config or ConvertConfig(),
        )

    def active_polygons(self) -> list[PolygonData]:
        return [pd for pd in self.polygons if pd.active]

    def fail(self, pd: PolygonData, error: Exception) -> None:
        pd.failed = True
        self.errors[pd.id] = f"{type(error).__name__}: {error}"

    @property
    def polygon_count(self) -> int:
        return len(self.polygons)

    @property
    def vertex_count(self) -> int:
        return sum(pd.source.vertex_count for pd in self.polygons)

    @property
    def display_count(self) -> int:
        return self.root.get_total_display_count() if self.root is not None else 0
