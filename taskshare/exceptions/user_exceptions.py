from taskshare.constants.messages import RepositoryErrors, ValidationErrors


class UserAlreadyExistsException(Exception):
    """Insert rejected by a uniqueness constraint on external_id or email."""

    def __init__(self, field: str = "external_id"):
        self.field = field
        self.message = RepositoryErrors.USER_ALREADY_EXISTS.format(field)
        super().__init__(self.message)


class MissingEmailException(Exception):
    def __init__(self, message: str = ValidationErrors.MISSING_EMAIL):
        self.message = message
        super().__init__(self.message)
