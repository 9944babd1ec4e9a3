from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from taskshare.dto.user_dto import UserDTO
from taskshare.middlewares.jwt_auth import get_actor
from taskshare.repositories.registry import get_repositories
from taskshare.services.user_service import UserService


class TeamMembersView(APIView):
    @extend_schema(
        operation_id="get_team_members",
        summary="List team members",
        description="Every registered user, sorted by name. Used to pick an assignee.",
        tags=["team"],
        responses={
            200: OpenApiResponse(response=UserDTO, description="Team members"),
            401: OpenApiResponse(description="Not authenticated"),
        },
    )
    def get(self, request: Request):
        get_actor(request)
        members = UserService(get_repositories().users).get_team_members()
        return Response(data=[member.model_dump(mode="json") for member in members], status=status.HTTP_200_OK)
