INVALID_BODY = 'SHORTEN_INVALID_BODY'
INVALID_FIELDS = 'SHORTEN_INVALID_FIELDS'
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'
