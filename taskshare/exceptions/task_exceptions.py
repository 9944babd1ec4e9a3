from taskshare.constants.messages import ApiErrors, RepositoryErrors


class TaskNotFoundException(Exception):
    def __init__(self, task_id: int | None = None, message: str = ApiErrors.TASK_NOT_FOUND):
        # The id is kept for logging only; the message stays generic
        self.task_id = task_id
        self.message = message
        super().__init__(self.message)


class TaskPermissionDeniedException(Exception):
    def __init__(self, message: str = ApiErrors.FORBIDDEN_TITLE):
        self.message = message
        super().__init__(self.message)


class ReferentialIntegrityException(Exception):
    def __init__(self, user_id: int | None = None):
        self.user_id = user_id
        self.message = RepositoryErrors.DANGLING_USER_REFERENCE.format(user_id)
        super().__init__(self.message)
