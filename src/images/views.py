import logging
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Response, UploadFile, status

from src.images.dependencies import get_catalog_service, get_image_id
from src.images.responses import (
    CREATE_RESPONSES,
    DELETE_RESPONSES,
    DOWNLOAD_RESPONSES,
    LIST_RESPONSES,
)
from src.images.schemas import ImageRecord
from src.images.services import ImageCatalogService
from src.images.validators import validate_image_upload


router = APIRouter()
download_router = APIRouter()
logger = logging.getLogger('app')


def attachment_header(filename: str) -> str:
    """Значение Content-Disposition для скачивания файла."""
    quoted = quote(filename)
    if quoted != filename:
        return f"attachment; filename*=utf-8''{quoted}"
    return f'attachment; filename="{filename}"'


@router.get(
    '',
    response_model=list[ImageRecord],
    summary='Получение списка изображений',
    responses=LIST_RESPONSES,
)
async def list_images(
    service: ImageCatalogService = Depends(get_catalog_service),
) -> list[ImageRecord]:
    """Возвращает метаданные всех изображений по возрастанию ID."""
    return await service.list()


@router.post(
    '',
    response_model=ImageRecord,
    status_code=status.HTTP_200_OK,
    summary='Загрузка изображения',
    responses=CREATE_RESPONSES,
)
async def upload_image(
    image: UploadFile | None = File(None),
    service: ImageCatalogService = Depends(get_catalog_service),
) -> ImageRecord:
    """Загрузить изображение из поля формы image."""
    payload = await validate_image_upload(image)
    logger.info(
        'Загрузка файла %s (%s байт)',
        image.filename,
        len(payload),
        extra={'component': 'api'},
    )
    return await service.create(
        payload,
        image.filename,
        image.content_type,
    )


@router.delete(
    '/{image_id}',
    status_code=status.HTTP_204_NO_CONTENT,
    summary='Удаление изображения',
    responses=DELETE_RESPONSES,
)
async def delete_image(
    image_id: int = Depends(get_image_id),
    service: ImageCatalogService = Depends(get_catalog_service),
) -> Response:
    """Удалить файл изображения и его метаданные."""
    await service.delete(image_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@download_router.get(
    '/{image_id}',
    response_class=Response,
    summary='Скачивание изображения',
    responses=DOWNLOAD_RESPONSES,
)
async def download_image(
    image_id: int = Depends(get_image_id),
    service: ImageCatalogService = Depends(get_catalog_service),
) -> Response:
    """Получить файл изображения в бинарном виде."""
    image = await service.download(image_id)
    return Response(
        content=image.data,
        media_type=image.content_type,
        headers={
            'Content-Disposition': attachment_header(image.object_key),
        },
    )
