"""
User endpoints for API v1.

The routes only adapt FastAPI requests to the ``UserController``
interface; status codes and bodies are decided by the controller.
The controller is provided through ``get_user_controller`` so tests
can replace it with ``app.dependency_overrides``.
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import JSONResponse

from user_admin_api.app.controllers.http import ControllerRequest, ControllerResponse
from user_admin_api.app.controllers.user_controller import UserController
from user_admin_api.app.services.user_service import FIND_USER, UserService, based_on_query


router = APIRouter()

_controller = UserController(
    classify=based_on_query,
    finders=FIND_USER,
    create_user=UserService.create_user,
    update_user_by_uid=UserService.update_user_by_uid,
    remove_user=UserService.remove_user,
)


def get_user_controller() -> UserController:
    return _controller


@router.get("/")
async def list_users(
    request: Request,
    controller: UserController = Depends(get_user_controller),
) -> JSONResponse:
    """List users, optionally filtered by ``uid`` or ``email``."""
    response = ControllerResponse()
    await controller.list(ControllerRequest(query=dict(request.query_params)), response)
    return response.to_response()


@router.post("/")
async def create_user(
    body: Dict[str, Any] = Body(...),
    controller: UserController = Depends(get_user_controller),
) -> JSONResponse:
    """Create a user from the JSON body (201)."""
    response = ControllerResponse()
    await controller.create(ControllerRequest(body=body), response)
    return response.to_response()


@router.put("/")
async def update_user(
    body: Dict[str, Any] = Body(...),
    controller: UserController = Depends(get_user_controller),
) -> JSONResponse:
    """Update the user identified by ``uid`` in the body (202)."""
    response = ControllerResponse()
    await controller.update(ControllerRequest(body=body), response)
    return response.to_response()


@router.delete("/")
async def remove_user(
    body: Dict[str, Any] = Body(...),
    controller: UserController = Depends(get_user_controller),
) -> JSONResponse:
    """Remove the user whose ``uid`` is given in the body (202)."""
    response = ControllerResponse()
    await controller.remove(ControllerRequest(body=body), response)
    return response.to_response()
