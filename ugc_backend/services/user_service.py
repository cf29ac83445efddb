"""Profile edits and the admin role switcher for /api/users."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from ugc_backend.exceptions import NotFoundError, ValidationError
from ugc_backend.models.enums import UserRole
from ugc_backend.models.user import User
from ugc_backend.schemas.user import ProfileUpdateRequest, SwitchRoleRequest, UserResponse

logger = logging.getLogger(__name__)


class UserService:

    async def update_profile(
        self, db: AsyncSession, user: User, payload: ProfileUpdateRequest
    ) -> UserResponse:
        # Role is not a profile field; global roles change only via switch_role
        for field, value in payload.model_dump(exclude_unset=True).items():
            setattr(user, field, value)
        await db.flush()
        return UserResponse.model_validate(user)

    async def switch_role(
        self, db: AsyncSession, caller: User, payload: SwitchRoleRequest
    ) -> UserResponse:
        try:
            role = UserRole(payload.role)
        except ValueError:
            raise ValidationError(
                "Invalid role",
                field="role",
                context={"allowed": [r.value for r in UserRole]},
            )

        target = caller
        if payload.user_id and payload.user_id != caller.id:
            target = await db.get(User, payload.user_id)
            if target is None:
                raise NotFoundError("User", payload.user_id, message="User not found")

        logger.info("User %s switched role of %s to %s", caller.id, target.id, role.value)
        target.role = role
        await db.flush()
        return UserResponse.model_validate(target)


user_service = UserService()
