"""
Users Router

Profile endpoints proxied to the backend's /user/{id}.
"""
from fastapi import APIRouter, Depends
from typing import Any, Dict

from ...core.services.account_service import AccountService
from ..dependencies import get_account_service, require_authenticated

router = APIRouter(
    prefix="/users",
    tags=["users"],
    dependencies=[Depends(require_authenticated)]
)


@router.get("/{user_id}")
async def get_user(user_id: int, service: AccountService = Depends(get_account_service)):
    return {"ok": True, "user": await service.get_user(user_id)}


@router.put("/{user_id}")
async def update_user(
    user_id: int,
    data: Dict[str, Any],
    service: AccountService = Depends(get_account_service)
):
    return {"ok": True, "user": await service.update_user(user_id, data)}


@router.delete("/{user_id}")
async def delete_user(user_id: int, service: AccountService = Depends(get_account_service)):
    await service.delete_user(user_id)
    return {"ok": True, "message": "User deleted"}
