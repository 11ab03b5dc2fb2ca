from tempshortener.dao.memory.link_record import LinkRecord
from tempshortener.dao.memory.expiry_scheduler import ExpiryScheduler
from tempshortener.dao.memory.short_link_memory_dao import ShortLinkMemoryDAO


__all__ = [
    'LinkRecord',
    'ExpiryScheduler',
    'ShortLinkMemoryDAO',
]
