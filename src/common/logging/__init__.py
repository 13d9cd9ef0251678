from src.common.logging.config import logger
from src.common.logging.decorators import log_action
from src.common.logging.system_logger import (
    initialize_system_logging,
    log_system_api_request,
    log_system_error,
    log_system_event,
    setup_uvicorn_system_logging,
    system_logger,
)


__all__ = [
    'logger',
    'log_action',
    'system_logger',
    'log_system_api_request',
    'log_system_error',
    'log_system_event',
    'setup_uvicorn_system_logging',
    'initialize_system_logging',
]
