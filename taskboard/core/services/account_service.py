"""
Account Service - registration and user profile calls
"""
from typing import Any, Dict
import logging

from ..backend_routes import BackendRoutes
from ..domain.user import UserRegistration
from ..exceptions import backend_fallback
from ..gateway import HttpGateway

logger = logging.getLogger(__name__)

ACCOUNT_CREATED = "Account created successfully! Please sign in to continue."


class AccountService:
    """Service xử lý account business logic"""

    def __init__(self, gateway: HttpGateway):
        self.gateway = gateway

    async def register(self, registration: UserRegistration) -> Any:
        """
        Create a new account. Does not sign in.

        Raises:
            ValidationError: Form checks failed (no call made)
        """
        registration.validate()
        logger.info(f"[REGISTER] Creating account for {registration.user_name}")
        with backend_fallback("Registration failed. Please try again."):
            created = await self.gateway.post(BackendRoutes.CREATE_USER, json=registration.to_api())
        logger.info(f"[OK] [REGISTER] Account created: {registration.user_name}")
        return created

    async def get_user(self, user_id: int) -> Any:
        """Get user by ID"""
        return await self.gateway.get(BackendRoutes.USER.format(user_id=user_id))

    async def update_user(self, user_id: int, data: Dict[str, Any]) -> Any:
        """Update user fields"""
        logger.info(f"[USER] Updating user {user_id}")
        return await self.gateway.put(BackendRoutes.USER.format(user_id=user_id), json=data)

    async def delete_user(self, user_id: int) -> Any:
        """Delete user"""
        logger.info(f"[USER] Deleting user {user_id}")
        return await self.gateway.delete(BackendRoutes.USER.format(user_id=user_id))
