from fastapi import APIRouter
from fastapi.responses import PlainTextResponse


router = APIRouter()

HEALTH_MESSAGE = 'System is Running'


@router.get(
    '/health',
    response_class=PlainTextResponse,
    summary='Проверка работоспособности сервиса',
)
async def health() -> str:
    """Возвращает 200, пока процесс обслуживает запросы."""
    return HEALTH_MESSAGE
