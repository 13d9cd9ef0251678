from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
import uvicorn

from src.api import main_router
from src.common.exception_handlers import add_exception_handlers
from src.common.exceptions import BlobStoreError
from src.common.logging import (
    initialize_system_logging,
    log_system_error,
    log_system_event,
    setup_uvicorn_system_logging,
)
from src.common.middleware import RequestLoggingMiddleware
from src.config import settings
from src.database import create_tables, engine
from src.images.dependencies import create_default_metadata_store
from src.storage import create_blob_store


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Управляет жизненным циклом FastAPI-приложения."""
    initialize_system_logging()

    if app.state.metadata_store is None:
        await create_tables(engine)
        log_system_event('Схема таблицы images проверена')

    if app.state.blob_store is None:
        app.state.blob_store = create_blob_store(settings.storage)
        if settings.storage.CREATE_BUCKET:
            try:
                await app.state.blob_store.ensure_bucket()
            except BlobStoreError as e:
                log_system_error('Подготовка бакета', e)
                raise

    yield

    await engine.dispose()


def create_app() -> FastAPI:
    """Создаёт приложение каталога изображений."""
    app = FastAPI(title='Image Catalog', lifespan=lifespan)
    app.state.metadata_store = create_default_metadata_store()
    app.state.blob_store = None

    app.add_middleware(RequestLoggingMiddleware)
    add_exception_handlers(app)
    app.include_router(main_router)
    return app


app = create_app()


if __name__ == '__main__':
    setup_uvicorn_system_logging()
    uvicorn.run(
        'src.main:app',
        host=settings.catalog.HOST,
        port=settings.catalog.PORT,
    )
