from fastapi import APIRouter

from src.health import health_router
from src.images import download_router, images_router


main_router = APIRouter()

main_router.include_router(health_router, tags=['Служебное'])
main_router.include_router(
    images_router,
    prefix='/images',
    tags=['Изображения'],
)
main_router.include_router(
    download_router,
    prefix='/download',
    tags=['Изображения'],
)
