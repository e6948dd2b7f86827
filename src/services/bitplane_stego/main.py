"""
Main entry point for the Bit-Plane Steganography Service

This file provides the router that can be included in the main FastAPI application.
"""

from .api.routes import router

__all__ = ["router"]
