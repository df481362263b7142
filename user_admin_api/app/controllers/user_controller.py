"""
Request handlers for user management.

``UserController`` exposes ``list``, ``create``, ``update`` and
``remove``.  Each handler calls exactly one service function; on
success it writes the result (with 201 or 202 where the operation
defines one), on failure it logs a fixed diagnostic and writes a 500
with ``{"message": ...}``.  Errors never propagate past the handler.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional

from fastapi import status

from user_admin_api.app.controllers.http import ControllerRequest, ControllerResponse
from user_admin_api.app.schemas.user import QueryDescriptor, QueryField


LIST_ERROR_MESSAGE = "Ocorreu um erro ao listar usuários"
CREATE_ERROR_MESSAGE = "Ocorreu um erro ao criar usuário"
UPDATE_ERROR_MESSAGE = "Ocorreu um erro ao atualizar usuário"
REMOVE_ERROR_MESSAGE = "Ocorreu um erro ao remover usuário"

Finder = Callable[[Optional[str]], Awaitable[Any]]


class UserController:
    """Dispatch user requests to their service functions.

    Parameters
    ----------
    classify : callable
        Turns ``request.query`` into a ``QueryDescriptor``.
    finders : mapping
        One finder per ``QueryField``.  Missing members are rejected
        here rather than when a request arrives.
    create_user, update_user_by_uid, remove_user : coroutine functions
        Delegates for the mutating handlers.
    logger : logging.Logger, optional
        Receives one ``error`` call per failed request.
    """

    def __init__(
        self,
        classify: Callable[[Mapping[str, Any]], QueryDescriptor],
        finders: Mapping[QueryField, Finder],
        create_user: Callable[[Dict[str, Any]], Awaitable[Any]],
        update_user_by_uid: Callable[[Dict[str, Any]], Awaitable[Any]],
        remove_user: Callable[[Optional[str]], Awaitable[Any]],
        logger: Optional[logging.Logger] = None,
    ) -> None:
        missing = [field.value for field in QueryField if field not in finders]
        if missing:
            raise ValueError(f"No finder registered for: {', '.join(missing)}")
        self.classify = classify
        self.finders = dict(finders)
        self.create_user = create_user
        self.update_user_by_uid = update_user_by_uid
        self.remove_user = remove_user
        self.logger = logger or logging.getLogger(__name__)

    async def list(self, request: ControllerRequest, response: ControllerResponse) -> None:
        try:
            descriptor = self.classify(request.query)
            users = await self.finders[descriptor.by](descriptor.param)
        except Exception as e:
            self._fail(response, LIST_ERROR_MESSAGE, e)
            return
        response.json(users)

    async def create(self, request: ControllerRequest, response: ControllerResponse) -> None:
        try:
            user = await self.create_user(request.body)
        except Exception as e:
            self._fail(response, CREATE_ERROR_MESSAGE, e)
            return
        response.status(status.HTTP_201_CREATED).json(user)

    async def update(self, request: ControllerRequest, response: ControllerResponse) -> None:
        try:
            user = await self.update_user_by_uid(request.body)
        except Exception as e:
            self._fail(response, UPDATE_ERROR_MESSAGE, e)
            return
        response.status(status.HTTP_202_ACCEPTED).json(user)

    async def remove(self, request: ControllerRequest, response: ControllerResponse) -> None:
        try:
            user = await self.remove_user(request.body.get("uid"))
        except Exception as e:
            self._fail(response, REMOVE_ERROR_MESSAGE, e)
            return
        response.status(status.HTTP_202_ACCEPTED).json(user)

    def _fail(self, response: ControllerResponse, message: str, error: Exception) -> None:
        self.logger.error(message, exc_info=error)
        response.status(status.HTTP_500_INTERNAL_SERVER_ERROR).json({"message": str(error)})
