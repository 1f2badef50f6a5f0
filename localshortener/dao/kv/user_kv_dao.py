"""Key-value implementation of UserBaseDAO

Storage layout (see KeySchema):
    <prefix>:users            -> JSON list of UserModel documents
    <prefix>:demo_passwords   -> JSON object {email: password}
    <prefix>:current_user     -> JSON UserModel document, absent when logged out

Classes:
    UserKeyValueDAO:
        DAO for user accounts, credentials and the current user pointer.
"""

import logging

from beartype import beartype

from localshortener.models import UserModel
from localshortener.dao.base import UserBaseDAO
from localshortener.dao.kv.mixins import KeyValueDocumentMixin
from localshortener.dao.exceptions import UserAlreadyExistsError, UserDoesNotExistError


logger = logging.getLogger(__name__)


class UserKeyValueDAO(KeyValueDocumentMixin, UserBaseDAO):
    """Key-value based Data Access Object (DAO) for user accounts

    Emails are compared exactly (case-sensitive).
    """

    @beartype
    def all(self) -> list[UserModel]:
        users = []
        for document in self._load_document(self.keys.users_key(), default=[]):
            try:
                users.append(UserModel.from_dict(document))
            except (KeyError, TypeError, ValueError, AttributeError):
                logger.warning('Skipping malformed user record.', extra={'record': document})
        return users

    @beartype
    def get(self, email: str) -> UserModel:
        for user in self.all():
            if user.email == email:
                return user
        raise UserDoesNotExistError(f"User with email '{email}' does not exist.")

    @beartype
    def exists(self, email: str) -> bool:
        return any(user.email == email for user in self.all())

    @beartype
    def insert(self, user: UserModel) -> 'UserKeyValueDAO':
        users = self.all()
        if any(u.email == user.email for u in users):
            raise UserAlreadyExistsError()

        users.append(user)
        self._save_document(self.keys.users_key(), [u.to_dict() for u in users])
        return self

    @beartype
    def password(self, email: str) -> str | None:
        password = self._load_document(self.keys.passwords_key(), default={}).get(email)
        return password if isinstance(password, str) else None

    @beartype
    def set_password(self, email: str, password: str) -> 'UserKeyValueDAO':
        passwords = self._load_document(self.keys.passwords_key(), default={})
        passwords[email] = password
        self._save_document(self.keys.passwords_key(), passwords)
        return self

    @beartype
    def current(self) -> UserModel | None:
        document = self._load_document(self.keys.current_user_key(), default={})
        if not document:
            return None

        try:
            return UserModel.from_dict(document)
        except (KeyError, TypeError, ValueError, AttributeError):
            logger.warning('Ignoring malformed current user record.', extra={'record': document})
            return None

    @beartype
    def set_current(self, user: UserModel | None) -> 'UserKeyValueDAO':
        if user is None:
            self.store.remove(self.keys.current_user_key())
        else:
            self._save_document(self.keys.current_user_key(), user.to_dict())
        return self

    def __repr__(self) -> str:
        return f'<{type(self).__name__}>'
