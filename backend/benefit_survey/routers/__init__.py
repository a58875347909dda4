"""Benefit Survey - API Routers"""
from .feedback import router as feedback_router

__all__ = [
    "feedback_router",
]
