"""
Palette Studio API application.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from palette_studio import __version__
from palette_studio.api.v1 import router as v1_router
from palette_studio.config import config
from palette_studio.schemas import HealthResponse
from palette_studio.services.palettes import PaletteStore
from palette_studio.utils.logging import get_logger

logger = get_logger()

app = FastAPI(
    title="Palette Studio",
    description="Dominant color extraction, palette curation and WCAG contrast checks",
    version=__version__
)

allowed_origins = config.allowed_origins()
if allowed_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition"]
    )

app.state.palette_store = PaletteStore(config.PALETTE_STORE)
app.include_router(v1_router)

logger.info("Palette Studio initialized",
            extra={"version": __version__, "palette_store": str(app.state.palette_store.path)})


@app.get("/healthz", response_model=HealthResponse)
def health_check():
    """Health check endpoint."""
    return HealthResponse(ok=True, version=__version__)


@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": "Palette Studio API",
        "version": __version__,
        "docs": "/docs"
    }
