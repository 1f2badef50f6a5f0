INVALID_BODY = 'AUTH_INVALID_BODY'
MISSING_FIELDS = 'AUTH_MISSING_FIELDS'
INVALID_CREDENTIALS = 'AUTH_INVALID_CREDENTIALS'
ACCOUNT_EXISTS = 'AUTH_ACCOUNT_EXISTS'
LOGIN_SUCCESS = 'AUTH_LOGIN_SUCCESS'
REGISTER_SUCCESS = 'AUTH_REGISTER_SUCCESS'
LOGOUT_SUCCESS = 'AUTH_LOGOUT_SUCCESS'
