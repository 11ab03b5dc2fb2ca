from tempshortener.dao.base.short_link_base_dao import ShortLinkBaseDAO


__all__ = [
    'ShortLinkBaseDAO',
]
