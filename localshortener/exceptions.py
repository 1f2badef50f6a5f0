class LocalShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:localshortener_error'


class ConfigurationError(LocalShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'


class AuthError(LocalShortenerError):
    """Base exception for authentication errors."""

    error_code = 'auth:auth_error'


class InvalidCredentialsError(AuthError):
    """Raised when an email/password pair doesn't match a known account.

    The message never tells an unknown email apart from a wrong password.
    """

    error_code = 'auth:invalid_credentials_error'

    def __init__(self, message: str = 'Invalid email or password'):
        super().__init__(message)


class ValidationError(LocalShortenerError):
    """Base exception for user-correctable input errors."""

    error_code = 'validation:validation_error'


class BatchValidationError(ValidationError):
    """Raised when one or more entries of a shorten request batch are invalid.

    Attributes:
        errors (dict[str, str]):
            Field errors keyed as '<field>_<index>', e.g. 'longURL_0'.
    """

    error_code = 'validation:batch_validation_error'

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        super().__init__(f'{len(self.errors)} invalid field(s) in batch: {", ".join(sorted(self.errors))}')
