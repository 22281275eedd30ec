"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from polydisplay import __version__
from polydisplay.config import settings
from polydisplay.engine.pipeline import load_transforms

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.polydisplay_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="polydisplay",
        description="Filled polygons and SVG shapes to nested parallelogram display entities",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Stage modules register themselves on import
    load_transforms()

    from polydisplay.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
