import logging
from functools import lru_cache

from src.config.settings import settings
from src.email_service import EmailServiceBase, get_email_service
from src.rsvps.repository.csv_store import CsvRecordStore
from src.rsvps.repository.store import RecordStore

logger = logging.getLogger(__name__)


@lru_cache
def get_record_store() -> RecordStore:
    """Dependency to get the shared record store. One instance per process."""
    logger.info("Opening RSVP file %s", settings.csv_path)
    return CsvRecordStore.open(settings.csv_path)


def close_record_store() -> None:
    if get_record_store.cache_info().currsize:
        store = get_record_store()
        if isinstance(store, CsvRecordStore):
            store.close()
        get_record_store.cache_clear()


def get_notifier() -> EmailServiceBase:
    """Dependency to get the admin notification service."""
    return get_email_service()
