from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiExample, OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from taskshare.constants.messages import AppMessages
from taskshare.constants.task import TaskStatus, TaskView
from taskshare.dto.responses.message_response import MessageResponse
from taskshare.dto.task_dto import CreateTaskDTO, TaskDTO, UpdateTaskDTO
from taskshare.middlewares.jwt_auth import get_actor
from taskshare.repositories.registry import get_repositories
from taskshare.serializers.create_task_serializer import CreateTaskSerializer
from taskshare.serializers.get_tasks_serializer import GetTaskQueryParamsSerializer
from taskshare.serializers.task_id_serializer import TaskIdSerializer
from taskshare.serializers.update_task_serializer import UpdateTaskSerializer
from taskshare.services.task_service import TaskService

STATUS_QUERY_PARAMETER = OpenApiParameter(
    name="status",
    type=OpenApiTypes.STR,
    location=OpenApiParameter.QUERY,
    description="Only return tasks in this status (pending, in-progress, completed)",
    required=False,
)

TASK_EXAMPLE = OpenApiExample(
    "Task",
    value={
        "id": 7,
        "title": "Prepare sprint review",
        "description": "Collect demo notes from the team",
        "status": "in-progress",
        "dueDate": "2026-11-02",
        "createdAt": "2026-10-19T09:30:00Z",
        "createdById": 1,
        "assignedToId": 2,
        "assignee": {"id": 2, "email": "bob@example.com", "name": "Bob", "picture": None},
        "creator": {"id": 1, "email": "alice@example.com", "name": "Alice", "picture": None},
    },
    response_only=True,
)


def _task_service() -> TaskService:
    return TaskService(get_repositories())


class TaskViewListMixin:
    """Shared GET handling for the three visibility views."""

    task_view: TaskView

    def list_tasks(self, request: Request):
        actor = get_actor(request)
        query = GetTaskQueryParamsSerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        status_filter = query.validated_data.get("status")
        tasks = _task_service().get_tasks(
            actor, self.task_view, TaskStatus(status_filter) if status_filter else None
        )
        return Response(data=[task.model_dump(mode="json") for task in tasks], status=status.HTTP_200_OK)


class TaskListView(TaskViewListMixin, APIView):
    task_view = TaskView.OWNED

    @extend_schema(
        operation_id="get_owned_tasks",
        summary="Get tasks assigned to the current user",
        description="Tasks whose assignee is the current user, including self-tasks, newest first.",
        tags=["tasks"],
        parameters=[STATUS_QUERY_PARAMETER],
        responses={
            200: OpenApiResponse(response=TaskDTO, examples=[TASK_EXAMPLE]),
            400: OpenApiResponse(description="Invalid status filter"),
            401: OpenApiResponse(description="Not authenticated"),
        },
    )
    def get(self, request: Request):
        return self.list_tasks(request)

    @extend_schema(
        operation_id="create_task",
        summary="Create a new task",
        description="Creates a task authored by the current user and assigned to the given team member.",
        tags=["tasks"],
        request=CreateTaskSerializer,
        responses={
            201: OpenApiResponse(response=TaskDTO, description="Task created successfully", examples=[TASK_EXAMPLE]),
            400: OpenApiResponse(description="Bad request - validation error"),
            401: OpenApiResponse(description="Not authenticated"),
        },
    )
    def post(self, request: Request):
        actor = get_actor(request)
        serializer = CreateTaskSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        task = _task_service().create_task(actor, CreateTaskDTO(**serializer.validated_data))
        return Response(data=task.model_dump(mode="json"), status=status.HTTP_201_CREATED)


class DelegatedTaskListView(TaskViewListMixin, APIView):
    task_view = TaskView.DELEGATED

    @extend_schema(
        operation_id="get_delegated_tasks",
        summary="Get tasks the current user assigned to others",
        description="Tasks created by the current user for someone else, newest first. Self-tasks are excluded.",
        tags=["tasks"],
        parameters=[STATUS_QUERY_PARAMETER],
        responses={
            200: OpenApiResponse(response=TaskDTO, examples=[TASK_EXAMPLE]),
            400: OpenApiResponse(description="Invalid status filter"),
            401: OpenApiResponse(description="Not authenticated"),
        },
    )
    def get(self, request: Request):
        return self.list_tasks(request)


class TaskHistoryView(TaskViewListMixin, APIView):
    task_view = TaskView.HISTORY

    @extend_schema(
        operation_id="get_task_history",
        summary="Get completed tasks of the current user",
        description="Completed tasks assigned to the current user, newest first.",
        tags=["tasks"],
        parameters=[STATUS_QUERY_PARAMETER],
        responses={
            200: OpenApiResponse(response=TaskDTO, examples=[TASK_EXAMPLE]),
            401: OpenApiResponse(description="Not authenticated"),
        },
    )
    def get(self, request: Request):
        return self.list_tasks(request)


class TaskDetailView(APIView):
    @extend_schema(
        operation_id="update_task",
        summary="Update a task",
        description=(
            "Partially updates a task. Allowed for its creator and its assignee. "
            "Any status may be set from any other status."
        ),
        tags=["tasks"],
        parameters=[
            OpenApiParameter(
                name="task_id",
                type=OpenApiTypes.INT,
                location=OpenApiParameter.PATH,
                description="Unique identifier of the task",
                required=True,
            ),
        ],
        request=UpdateTaskSerializer,
        responses={
            200: OpenApiResponse(response=TaskDTO, description="Task updated successfully", examples=[TASK_EXAMPLE]),
            400: OpenApiResponse(description="Bad request - invalid id or body"),
            401: OpenApiResponse(description="Not authenticated"),
            403: OpenApiResponse(description="Forbidden - not the creator or assignee"),
            404: OpenApiResponse(description="Task not found"),
        },
    )
    def patch(self, request: Request, task_id: str):
        actor = get_actor(request)
        task_id = self._validate_task_id(task_id)

        serializer = UpdateTaskSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        task = _task_service().update_task(actor, task_id, UpdateTaskDTO(**serializer.validated_data))
        return Response(data=task.model_dump(mode="json"), status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="replace_task_fields",
        summary="Update a task (PUT)",
        description="Same semantics as PATCH: only the fields sent are changed.",
        tags=["tasks"],
        request=UpdateTaskSerializer,
        responses={
            200: OpenApiResponse(response=TaskDTO, description="Task updated successfully"),
            400: OpenApiResponse(description="Bad request - invalid id or body"),
            403: OpenApiResponse(description="Forbidden - not the creator or assignee"),
            404: OpenApiResponse(description="Task not found"),
        },
    )
    def put(self, request: Request, task_id: str):
        return self.patch(request, task_id)

    @extend_schema(
        operation_id="delete_task",
        summary="Delete a task",
        description="Deletes a task. Only its creator may do this.",
        tags=["tasks"],
        responses={
            200: OpenApiResponse(response=MessageResponse, description="Task deleted successfully"),
            400: OpenApiResponse(description="Bad request - invalid id"),
            401: OpenApiResponse(description="Not authenticated"),
            403: OpenApiResponse(description="Forbidden - not the creator"),
            404: OpenApiResponse(description="Task not found"),
        },
    )
    def delete(self, request: Request, task_id: str):
        actor = get_actor(request)
        task_id = self._validate_task_id(task_id)

        _task_service().delete_task(actor, task_id)
        return Response(
            data=MessageResponse(message=AppMessages.TASK_DELETED).model_dump(mode="json"),
            status=status.HTTP_200_OK,
        )

    def _validate_task_id(self, task_id: str) -> int:
        serializer = TaskIdSerializer(data={"task_id": task_id})
        serializer.is_valid(raise_exception=True)
        return serializer.validated_data["task_id"]
