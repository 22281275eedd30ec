"""POST /api/convert: polygons or SVG in, display tree and summon command out."""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Depends

from polydisplay.config import Settings
from polydisplay.dependencies import get_settings
from polydisplay.engine.pipeline import convert_polygons
from polydisplay.models.requests import ConvertRequest
from polydisplay.models.responses import ConvertResponse
from polydisplay.svg.parser import parse_svg

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/convert", response_model=ConvertResponse)
def convert(req: ConvertRequest, settings: Settings = Depends(get_settings)) -> ConvertResponse:
    start = time.perf_counter()

    if req.svg is not None:
        sample_rate = req.options.sample_rate or settings.default_sample_rate
        polygons = parse_svg(req.svg, sample_rate)
    else:
        polygons = [p.to_polygon() for p in req.polygons]

    ctx = convert_polygons(polygons, req.options.to_config())

    display = command = None
    if ctx.root is not None:
        display = ctx.root.serialize()
        command = ctx.root.command()
    command_length = len(command) if command else 0
    too_long = command_length > settings.max_command_length
    if too_long:
        logger.warning("Command is %d chars, limit %d", command_length, settings.max_command_length)

    elapsed = (time.perf_counter() - start) * 1000
    return ConvertResponse(
        display=display,
        command=command,
        command_length=command_length,
        command_too_long=too_long,
        polygon_count=ctx.polygon_count,
        vertex_count=ctx.vertex_count,
        display_count=ctx.display_count,
        processing_time_ms=round(elapsed, 1),
        errors=ctx.errors,
        warnings=ctx.warnings,
    )
