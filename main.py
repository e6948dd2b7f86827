from __future__ import annotations

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from src.services.bitplane_stego import __version__
from src.services.bitplane_stego.main import router as stego_router
from src.utility.constants_manager import ConstantsManager

settings = ConstantsManager()

# Configure logging
logging.basicConfig(level=settings.get_log_level())
logger = logging.getLogger(__name__)


app = FastAPI(title="Bit-Plane Stego", version=__version__)

# Ensure output directories exist
os.makedirs(settings.get_output_dir(), exist_ok=True)
os.makedirs(settings.get_bit_planes_dir(), exist_ok=True)

app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.mount("/files", StaticFiles(directory=settings.get_output_dir()), name="stego")
app.mount("/visualizations", StaticFiles(directory=settings.get_bit_planes_dir()), name="visualizations")

app.include_router(stego_router)

logger.info(f"Bit-Plane Stego {__version__} ready, default bit position {settings.get_default_bit_position()}")
