"""FastAPI dependency injection."""

from functools import lru_cache

from src.config import settings
from src.data.deal_repository import DealRepository, SqlDealRepository
from src.data.make_apr import MakeAprStore, SqlMakeAprStore


@lru_cache(maxsize=1)
def get_deal_repository() -> DealRepository:
    return SqlDealRepository(settings.database_url, echo=settings.debug)


@lru_cache(maxsize=1)
def get_make_apr_store() -> MakeAprStore:
    return SqlMakeAprStore(settings.database_url, echo=settings.debug)
