import secrets

from fastapi import Header

from autoinspect.config import settings
from autoinspect.utils.exceptions import AppException


async def verify_api_key(x_api_key: str = Header(default="")) -> None:
    if not settings.api_key:
        return
    if not secrets.compare_digest(x_api_key, settings.api_key):
        raise AppException("Invalid or missing API key", status_code=403)
