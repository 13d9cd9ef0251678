from typing import Any, Dict

from src.common.responses import (
    BINARY_RESPONSES,
    ERROR_400_RESPONSE,
    ERROR_404_RESPONSE,
    ERROR_413_RESPONSE,
    ERROR_500_RESPONSE,
    NO_CONTENT_RESPONSES,
    OK_RESPONSES,
)


LIST_RESPONSES: Dict[int | str, Dict[str, Any]] = {
    **OK_RESPONSES,
    **ERROR_500_RESPONSE,
}

CREATE_RESPONSES: Dict[int | str, Dict[str, Any]] = {
    **OK_RESPONSES,
    **ERROR_400_RESPONSE,
    **ERROR_413_RESPONSE,
    **ERROR_500_RESPONSE,
}

DELETE_RESPONSES: Dict[int | str, Dict[str, Any]] = {
    **NO_CONTENT_RESPONSES,
    **ERROR_400_RESPONSE,
    **ERROR_404_RESPONSE,
    **ERROR_500_RESPONSE,
}

DOWNLOAD_RESPONSES: Dict[int | str, Dict[str, Any]] = {
    **BINARY_RESPONSES,
    **ERROR_400_RESPONSE,
    **ERROR_404_RESPONSE,
    **ERROR_500_RESPONSE,
}
