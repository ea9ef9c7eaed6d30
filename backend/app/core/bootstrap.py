# app/core/bootstrap.py
"""
Bootstrap module for application initialization.
Creates the first account on an empty database so the protected API can be reached.
"""
import os
import logging
from app.models.user import User
from app.core.security import hash_password
from app.services.common import fold_key

logger = logging.getLogger("uvicorn.error")

BOOTSTRAP_ROLES = ["Admin"]

async def ensure_default_admin() -> User | None:
    """
    If the user table is empty, create an admin based on environment variables.
    Only takes effect under the following conditions:
      - Currently no user at all
      - And ADMIN_PASSWORD is set (to avoid using default weak password)
    Environment variables:
      ADMIN_USERNAME (default: "admin")
      ADMIN_PASSWORD (required, otherwise won't create)

    Returns:
        The created user, or None when nothing was created
    """
    if await User.all().exists():
        return None

    # Get admin password from environment (required for security)
    admin_password = os.getenv("ADMIN_PASSWORD")
    if not admin_password:
        logger.warning("[bootstrap] No users present, but ADMIN_PASSWORD not set -> skip creating default admin.")
        return None

    admin_username = os.getenv("ADMIN_USERNAME", "admin")

    u = await User.create(
        username=admin_username,
        username_key=fold_key(admin_username),
        password_hash=hash_password(admin_password),  # Hash password before storing
        roles=BOOTSTRAP_ROLES,
    )
    logger.warning("[bootstrap] Created default admin -> username=%s id=%s", u.username, u.id)
    return u
