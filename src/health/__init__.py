from src.health.views import router as health_router

__all__ = ['health_router']
