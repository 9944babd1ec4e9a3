from taskshare.constants.messages import ApiErrors


class BaseGoogleException(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class GoogleAuthException(BaseGoogleException):
    def __init__(self, message: str = ApiErrors.GOOGLE_AUTH_FAILED):
        super().__init__(message)


class GoogleDomainNotAllowedException(GoogleAuthException):
    def __init__(self, domain: str):
        self.domain = domain
        super().__init__(ApiErrors.DOMAIN_NOT_ALLOWED.format(domain))


class GoogleAPIException(BaseGoogleException):
    def __init__(self, message: str = ApiErrors.GOOGLE_API_ERROR):
        super().__init__(message)
