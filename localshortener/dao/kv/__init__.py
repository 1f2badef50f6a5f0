from localshortener.dao.kv.key_schema import KeySchema
from localshortener.dao.kv.mixins import KeyValueDocumentMixin
from localshortener.dao.kv.short_url_kv_dao import ShortURLKeyValueDAO
from localshortener.dao.kv.user_kv_dao import UserKeyValueDAO
from localshortener.dao.kv.event_log_kv_dao import EventLogKeyValueDAO


__all__ = [
    'KeySchema',
    'KeyValueDocumentMixin',
    'ShortURLKeyValueDAO',
    'UserKeyValueDAO',
    'EventLogKeyValueDAO',
]
