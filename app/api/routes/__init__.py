"""Route package — exports every FastAPI router."""

from .health import router as health_router
from .kittens import router as kittens_router
from .sample_data import router as sample_data_router
from .weights import router as weights_router

__all__ = ["health_router", "kittens_router", "sample_data_router", "weights_router"]
