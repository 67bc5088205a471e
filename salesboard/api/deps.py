from fastapi import Request

from salesboard.core.config import Settings
from salesboard.core.gateway import PersistenceGateway


def get_gateway(request: Request) -> PersistenceGateway:
    return request.app.state.gateway


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_cache(request: Request):
    # None when REDIS_URL is not configured
    return request.app.state.cache
