from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AssetInventoryError(ValueError):
    """Base class for caller-visible, non-retryable domain failures."""

    http_status = status.HTTP_400_BAD_REQUEST
    code = 'invalid_request'

    def payload(self) -> dict:
        return {'detail': str(self), 'error': self.code}


class NotFoundError(AssetInventoryError):
    http_status = status.HTTP_404_NOT_FOUND
    code = 'not_found'

    def __init__(self, entity: str, identifier: object = None) -> None:
        self.entity = entity
        self.identifier = identifier
        label = entity.capitalize()
        if identifier is None:
            super().__init__(f'{label} not found')
        else:
            super().__init__(f'{label} with id {identifier} not found')

    def payload(self) -> dict:
        return {**super().payload(), 'entity': self.entity}


class ConflictError(AssetInventoryError):
    http_status = status.HTTP_409_CONFLICT
    code = 'conflict'

    def __init__(self, field: str, value: object = None) -> None:
        self.field = field
        self.value = value
        super().__init__(f"{field.replace('_', ' ').capitalize()} already exists")

    def payload(self) -> dict:
        return {**super().payload(), 'field': self.field}


class InvalidInputError(AssetInventoryError):
    http_status = 422
    code = 'invalid_input'

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f'{field}: {reason}')

    def payload(self) -> dict:
        return {**super().payload(), 'field': self.field}


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AssetInventoryError)
    async def asset_inventory_error_handler(request: Request, exc: AssetInventoryError):
        logger.info('%s %s rejected: %s', request.method, request.url.path, exc)
        return JSONResponse(status_code=exc.http_status, content=exc.payload())
