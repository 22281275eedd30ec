"""Pipeline orchestrator: runs conversion stages in dependency order with mode gating."""

from __future__ import annotations

import importlib
import logging
import pkgutil
import time
from collections.abc import Sequence

from polydisplay.engine.config import ColorMode, ConvertConfig
from polydisplay.engine.context import ConvertContext
from polydisplay.engine.registry import Layer, TransformRegistry, get_registry
from polydisplay.geometry.polygon import Polygon

logger = logging.getLogger(__name__)

_LAYER_PACKAGES = ["layer0", "layer1", "layer2", "layer3"]


class Pipeline:
    """Orchestrates the conversion stages."""

    def __init__(self, registry: TransformRegistry | None = None) -> None:
        self.registry = registry or get_registry()

    def run(self, ctx: ConvertContext) -> ConvertContext:
        """Run every applicable stage on the given context."""
        start = time.perf_counter()

        skip_ids = self._mode_gate(ctx)
        requested = {s.id for s in self.registry.all()} - skip_ids
        ordered = self.registry.resolve_order(requested)

        logger.info(
            "Pipeline: %d polygons, %d transforms queued (%d skipped)",
            ctx.polygon_count,
            len(ordered),
            len(skip_ids),
        )

        for spec in ordered:
            self._run_one(spec, ctx)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d/%d transforms, %d displays, %d polygon errors in %.0fms",
            len(ctx.completed_transforms),
            len(ordered),
            ctx.display_count,
            sum(1 for pd in ctx.polygons if pd.failed),
            total,
        )
        return ctx

    def run_layer(self, ctx: ConvertContext, layer: Layer) -> ConvertContext:
        """Run only the stages of one layer (gating still applies)."""
        skip_ids = self._mode_gate(ctx)
        for spec in self.registry.get_layer(layer):
            if spec.id not in skip_ids:
                self._run_one(spec, ctx)
        return ctx

    def _run_one(self, spec, ctx: ConvertContext) -> None:
        t0 = time.perf_counter()
        try:
            spec.fn(ctx)
            ctx.completed_transforms.add(spec.id)
            logger.debug("  %s completed in %.1fms", spec.id, (time.perf_counter() - t0) * 1000)
        except Exception as e:
            ctx.errors[spec.id] = str(e)
            logger.warning("  %s FAILED: %s", spec.id, e)

    def _mode_gate(self, ctx: ConvertContext) -> set[str]:
        """Stages tagged for a colour mode run only in that mode."""
        skip: set[str] = set()
        if ctx.config.color_mode != ColorMode.MULTICOLOR:
            skip |= self.registry.with_tag("multicolor")
        return skip


def load_transforms() -> None:
    """Import every stage module so the @transform decorators fire."""
    for layer_name in _LAYER_PACKAGES:
        package = importlib.import_module(f"polydisplay.engine.{layer_name}")
        for _, module_name, _ in pkgutil.iter_modules(package.__path__):
            importlib.import_module(f"{package.__name__}.{module_name}")


def create_pipeline() -> Pipeline:
    """Pipeline over the module registry with every stage loaded."""
    load_transforms()
    return Pipeline()


def convert_polygons(polygons: Sequence[Polygon], config: ConvertConfig | None = None) -> ConvertContext:
    """Decompose, convert, nest and style a batch. Failures are per polygon, see ``ctx.errors``."""
    ctx = ConvertContext.from_polygons(list(polygons), config)
    return create_pipeline().run(ctx)
