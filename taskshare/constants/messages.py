# Application Messages
class AppMessages:
    TASK_DELETED = "Task deleted successfully"
    LOGOUT_SUCCESS = "Logged out successfully"
    GOOGLE_LOGIN_URL_GENERATED = "Google OAuth URL generated successfully"


# Repository error messages
class RepositoryErrors:
    USER_ALREADY_EXISTS = "A user with this {0} already exists"
    DANGLING_USER_REFERENCE = "Task references a user that does not exist: {0}"
    UNKNOWN_STORAGE_BACKEND = "Unknown storage backend: {0}"


# API error messages
class ApiErrors:
    SERVER_ERROR = "Server Error"
    INTERNAL_SERVER_ERROR = "Internal server error"
    VALIDATION_ERROR = "Validation Error"
    TASK_NOT_FOUND = "Task not found"
    RESOURCE_NOT_FOUND_TITLE = "Resource Not Found"
    FORBIDDEN_TITLE = "Forbidden"
    NOT_AUTHORIZED_TO_UPDATE = "Not authorized to update this task"
    NOT_AUTHORIZED_TO_DELETE = "Not authorized to delete this task"
    CONFLICT_TITLE = "Conflict"
    AUTHENTICATION_FAILED = "Authentication failed"
    GOOGLE_AUTH_FAILED = "Google authentication failed"
    GOOGLE_API_ERROR = "Google API error"
    TOKEN_EXCHANGE_FAILED = "Failed to exchange authorization code"
    USER_INFO_FETCH_FAILED = "Failed to fetch user info: {0}"
    MISSING_USER_INFO_FIELDS = "Missing user info fields: {0}"
    DOMAIN_NOT_ALLOWED = "Accounts outside {0} are not allowed"


# Authentication error messages
class AuthErrorMessages:
    AUTHENTICATION_REQUIRED = "Authentication required"
    NO_ACCESS_TOKEN = "No access token provided"
    TOKEN_EXPIRED = "Access token has expired"
    TOKEN_EXPIRED_TITLE = "Token Expired"
    TOKEN_INVALID = "Invalid token"
    INVALID_TOKEN_TITLE = "Invalid Token"
    REFRESH_TOKEN_EXPIRED = "Refresh token has expired"
    UNKNOWN_TOKEN_SUBJECT = "Token does not belong to a known user"


# Validation error messages
class ValidationErrors:
    BLANK_TITLE = "Title must not be blank."
    MISSING_ASSIGNEE = "assignedToId is required."
    UNKNOWN_ASSIGNEE = "User {0} does not exist."
    INVALID_TASK_ID_FORMAT = "Task ID must be a positive integer."
    MISSING_EXTERNAL_ID = "External identity id is required"
    MISSING_EMAIL = "No email provided by the identity provider"


# Redirect error flags appended to the login page URL
class LoginErrorFlags:
    AUTH_ERROR = "auth_error"
    AUTH_FAILED = "auth_failed"
    MISSING_CODE = "missing_code"
    INVALID_STATE = "invalid_state"
    DOMAIN_NOT_ALLOWED = "domain_not_allowed"
