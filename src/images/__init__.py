from src.images.views import download_router
from src.images.views import router as images_router

__all__ = ['images_router', 'download_router']
