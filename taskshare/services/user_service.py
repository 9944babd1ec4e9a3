import logging
from typing import List

from rest_framework.exceptions import ValidationError as DRFValidationError

from taskshare.constants.messages import ValidationErrors
from taskshare.dto.user_dto import UserDTO
from taskshare.exceptions.user_exceptions import (
    MissingEmailException,
    UserAlreadyExistsException,
)
from taskshare.models.user import ExternalIdentityAssertion, UserModel
from taskshare.repositories.abstract_repository import AbstractUserRepository

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, user_repository: AbstractUserRepository):
        self.user_repository = user_repository

    def resolve_identity(self, assertion: ExternalIdentityAssertion) -> UserModel:
        """
        Map a verified identity-provider assertion to the local user, creating
        it on first sight. Repeat logins return the stored record unchanged,
        so a stale name or picture is kept.
        """
        if not assertion.external_id:
            raise DRFValidationError({"external_id": ValidationErrors.MISSING_EXTERNAL_ID})

        user = self.user_repository.get_by_external_id(assertion.external_id)
        if user:
            return user

        if not assertion.email:
            raise MissingEmailException()

        try:
            user = self.user_repository.create(
                {
                    "email": assertion.email,
                    "name": assertion.name or assertion.email,
                    "picture": assertion.picture or None,
                    "external_id": assertion.external_id,
                }
            )
        except UserAlreadyExistsException:
            # Lost a race with a concurrent first login for the same identity
            existing = self.user_repository.get_by_external_id(assertion.external_id)
            if existing is None:
                raise
            logger.info("Concurrent first login resolved to existing user %s", existing.id)
            return existing

        logger.info("Created user %s on first login", user.id)
        return user

    def get_team_members(self) -> List[UserDTO]:
        return [UserDTO.from_model(user) for user in self.user_repository.list_all_by_name()]
