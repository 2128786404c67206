"""
Account store endpoints.
"""
from fastapi import APIRouter, Depends, status

from chat_proxy.api.models import Account, AccountCreate, AccountDeleted, ErrorResponse
from chat_proxy.config.database import SupabaseClient
from chat_proxy.config.settings import Settings, get_settings
from chat_proxy.controllers.account_controller import AccountController


def get_account_controller(
    client: SupabaseClient,
    settings: Settings = Depends(get_settings),
) -> AccountController:
    """Dependency injection for AccountController."""
    return AccountController(client, table=settings.accounts_table)


router = APIRouter(prefix="/accounts")


@router.post(
    "",
    response_model=Account,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse, "description": "Username taken"}},
)
def create_account(
    payload: AccountCreate,
    controller: AccountController = Depends(get_account_controller),
):
    return controller.create_account(payload)


@router.get(
    "/{username}",
    response_model=Account,
    responses={404: {"model": ErrorResponse, "description": "Account not found"}},
)
def get_account(
    username: str,
    controller: AccountController = Depends(get_account_controller),
):
    return controller.get_account(username)


@router.delete(
    "/{username}",
    response_model=AccountDeleted,
    responses={404: {"model": ErrorResponse, "description": "Account not found"}},
)
def delete_account(
    username: str,
    controller: AccountController = Depends(get_account_controller),
):
    """Delete the account with the given username."""
    return controller.delete_account(username)
