"""API dependency wiring."""

from functools import lru_cache

from ..config import get_settings
from ..service import ChatService, create_chat_service


@lru_cache(maxsize=1)
def get_chat_service() -> ChatService:
    """
    Create the command facade (cached singleton).

    Service factory handles all construction logic - deps.py is just thin DI glue.
    One service means one shared HTTP connection pool for the process.
    """
    return create_chat_service(get_settings())


async def close_chat_service() -> None:
    """Close the shared pool if the singleton was ever built."""
    if get_chat_service.cache_info().currsize:
        await get_chat_service().aclose()
        get_chat_service.cache_clear()
