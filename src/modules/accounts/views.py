"""Account API views: user registration."""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.accounts.dtos import RegisterUserDTO
from modules.accounts.exceptions import UsernameAlreadyTaken
from modules.accounts.repositories.django_repository import UserDjangoRepository
from modules.accounts.serializers import RegisterSerializer, UserSerializer
from modules.accounts.services import AccountService


class RegisterView(APIView):
    """POST /api/v1/auth/register/"""

    permission_classes = [AllowAny]
    throttle_scope = "registration"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = AccountService(repository=UserDjangoRepository())

    def post(self, request: Request) -> Response:
        input_serializer = RegisterSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        try:
            dto = RegisterUserDTO(**input_serializer.validated_data)
        except (PydanticValidationError, ValueError) as exc:
            return Response(
                {"detail": _first_error(exc)},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            user = self._service.register(dto)
        except UsernameAlreadyTaken as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)

        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


def _first_error(exc: Exception) -> str:
    if isinstance(exc, PydanticValidationError):
        return exc.errors()[0]["msg"]
    return str(exc)
