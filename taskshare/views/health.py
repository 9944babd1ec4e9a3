from django.conf import settings
from django.db import connection
from django.db.utils import OperationalError
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework.response import Response
from rest_framework.views import APIView

from taskshare.constants.health import AppHealthStatus, ComponentHealthStatus
from taskshare.repositories.registry import POSTGRES_BACKEND


class HealthView(APIView):
    @extend_schema(
        operation_id="health_check",
        summary="Health check",
        description="Check the health status of the application and its storage backend",
        tags=["health"],
        responses={
            200: OpenApiResponse(description="Application is healthy"),
            503: OpenApiResponse(description="Application is unhealthy"),
        },
    )
    def get(self, request):
        backend = settings.STORAGE_BACKEND
        if backend == POSTGRES_BACKEND:
            is_storage_healthy = self._check_database()
        else:
            # The in-memory arena lives in this process
            is_storage_healthy = True

        storage_status = ComponentHealthStatus.UP.name if is_storage_healthy else ComponentHealthStatus.DOWN.name
        overall_status = AppHealthStatus.UP if is_storage_healthy else AppHealthStatus.DOWN

        response = {
            "status": overall_status.name,
            "components": {
                backend: {"status": storage_status},
            },
        }
        return Response(response, overall_status.http_status)

    def _check_database(self) -> bool:
        try:
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1")
                result = cursor.fetchone()
                return bool(result and result[0] == 1)
        except OperationalError:
            return False
