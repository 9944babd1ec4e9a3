import logging
from typing import List

from django.conf import settings
from rest_framework import status
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.response import Response
from rest_framework.utils.serializer_helpers import ReturnDict
from rest_framework.views import exception_handler as drf_exception_handler

from taskshare.constants.messages import ApiErrors, AuthErrorMessages
from taskshare.dto.responses.error_response import ApiErrorDetail, ApiErrorResponse, ApiErrorSource
from taskshare.exceptions.task_exceptions import TaskNotFoundException, TaskPermissionDeniedException
from taskshare.exceptions.user_exceptions import (
    MissingEmailException,
    UserAlreadyExistsException,
)
from .auth_exceptions import (
    AuthenticationRequiredError,
    RefreshTokenExpiredError,
    TokenExpiredError,
    TokenInvalidError,
    TokenMissingError,
)
from .google_auth_exceptions import GoogleAPIException, GoogleAuthException

logger = logging.getLogger(__name__)


def format_validation_errors(errors) -> List[ApiErrorDetail]:
    formatted_errors = []
    if isinstance(errors, ReturnDict | dict):
        for field, messages in errors.items():
            details = messages if isinstance(messages, list) else [messages]
            for message_detail in details:
                if isinstance(message_detail, dict):
                    nested_errors = format_validation_errors(message_detail)
                    formatted_errors.extend(nested_errors)
                else:
                    formatted_errors.append(
                        ApiErrorDetail(
                            detail=str(message_detail),
                            source={ApiErrorSource.PARAMETER: field},
                            title=ApiErrors.VALIDATION_ERROR,
                        )
                    )
    elif isinstance(errors, list):
        for message_detail in errors:
            formatted_errors.append(ApiErrorDetail(detail=str(message_detail), title=ApiErrors.VALIDATION_ERROR))
    return formatted_errors


def handle_exception(exc, context):
    response = drf_exception_handler(exc, context)
    task_id = context.get("kwargs", {}).get("task_id")

    error_list = []
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    if isinstance(exc, TokenExpiredError | RefreshTokenExpiredError):
        status_code = status.HTTP_401_UNAUTHORIZED
        error_list.append(
            ApiErrorDetail(
                source={ApiErrorSource.HEADER: "Cookie"},
                title=AuthErrorMessages.TOKEN_EXPIRED_TITLE,
                detail=str(exc),
            )
        )
    elif isinstance(exc, TokenMissingError | AuthenticationRequiredError):
        status_code = status.HTTP_401_UNAUTHORIZED
        error_list.append(
            ApiErrorDetail(
                source={ApiErrorSource.HEADER: "Cookie"},
                title=AuthErrorMessages.AUTHENTICATION_REQUIRED,
                detail=str(exc),
            )
        )
    elif isinstance(exc, TokenInvalidError):
        status_code = status.HTTP_401_UNAUTHORIZED
        error_list.append(
            ApiErrorDetail(
                source={ApiErrorSource.HEADER: "Cookie"},
                title=AuthErrorMessages.INVALID_TOKEN_TITLE,
                detail=str(exc),
            )
        )
    elif isinstance(exc, GoogleAuthException):
        status_code = status.HTTP_400_BAD_REQUEST
        error_list.append(
            ApiErrorDetail(
                source={ApiErrorSource.PARAMETER: "google_auth"},
                title=ApiErrors.GOOGLE_AUTH_FAILED,
                detail=str(exc),
            )
        )
    elif isinstance(exc, GoogleAPIException):
        status_code = status.HTTP_502_BAD_GATEWAY
        error_list.append(
            ApiErrorDetail(
                source={ApiErrorSource.PARAMETER: "google_api"},
                title=ApiErrors.GOOGLE_API_ERROR,
                detail=str(exc),
            )
        )
    elif isinstance(exc, TaskNotFoundException):
        status_code = status.HTTP_404_NOT_FOUND
        error_list.append(
            ApiErrorDetail(
                source={ApiErrorSource.PATH: "task_id"} if task_id else None,
                title=ApiErrors.RESOURCE_NOT_FOUND_TITLE,
                detail=str(exc),
            )
        )
    elif isinstance(exc, TaskPermissionDeniedException):
        status_code = status.HTTP_403_FORBIDDEN
        error_list.append(
            ApiErrorDetail(
                source={ApiErrorSource.PATH: "task_id"} if task_id else None,
                title=ApiErrors.FORBIDDEN_TITLE,
                detail=str(exc),
            )
        )
    elif isinstance(exc, UserAlreadyExistsException):
        status_code = status.HTTP_409_CONFLICT
        error_list.append(ApiErrorDetail(title=ApiErrors.CONFLICT_TITLE, detail=str(exc)))
    elif isinstance(exc, MissingEmailException):
        status_code = status.HTTP_400_BAD_REQUEST
        error_list.append(
            ApiErrorDetail(
                source={ApiErrorSource.PARAMETER: "email"},
                title=ApiErrors.VALIDATION_ERROR,
                detail=str(exc),
            )
        )
    elif isinstance(exc, DRFValidationError):
        status_code = status.HTTP_400_BAD_REQUEST
        error_list = format_validation_errors(exc.detail)
        if not error_list and exc.detail:
            error_list.append(ApiErrorDetail(detail=str(exc.detail), title=ApiErrors.VALIDATION_ERROR))

    elif response is not None:
        status_code = response.status_code
        if isinstance(response.data, dict) and "detail" in response.data:
            detail_str = str(response.data["detail"])
            error_list.append(ApiErrorDetail(detail=detail_str, title=detail_str))
        else:
            error_list.append(ApiErrorDetail(detail=str(response.data), title=str(exc)))
    else:
        logger.exception("Unhandled error in %s", context.get("view").__class__.__name__)
        error_list.append(
            ApiErrorDetail(
                detail=str(exc) if settings.DEBUG else ApiErrors.INTERNAL_SERVER_ERROR,
                title=ApiErrors.SERVER_ERROR,
            )
        )

    final_response_data = ApiErrorResponse(
        statusCode=status_code,
        message=error_list[0].detail if error_list else str(exc),
        errors=error_list,
    )
    return Response(data=final_response_data.model_dump(mode="json", exclude_none=True), status=status_code)
