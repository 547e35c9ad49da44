"""API routers."""
from .ping_results import router as ping_results_router

__all__ = ["ping_results_router"]
