from localshortener.dao.base.key_value_base_store import KeyValueBaseStore
from localshortener.dao.base.short_url_base_dao import ShortURLBaseDAO
from localshortener.dao.base.user_base_dao import UserBaseDAO
from localshortener.dao.base.event_log_base_dao import EventLogBaseDAO


__all__ = [
    'KeyValueBaseStore',
    'ShortURLBaseDAO',
    'UserBaseDAO',
    'EventLogBaseDAO',
]
