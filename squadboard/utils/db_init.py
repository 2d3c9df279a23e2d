from heliclockter import datetime_utc

from squadboard.config import config
from squadboard.models.db.account import UserAccountType
from squadboard.models.db.user import UserInsertable
from squadboard.sql.users import check_whether_email_is_in_use, create_user
from squadboard.utils.logging import logger
from squadboard.utils.security import hash_password


async def create_admin_user_if_configured() -> None:
    if config.admin_email is None or config.admin_password is None:
        return
    if await check_whether_email_is_in_use(config.admin_email):
        return

    admin = await create_user(
        UserInsertable(
            email=config.admin_email,
            name="admin",
            password_hash=hash_password(config.admin_password),
            created=datetime_utc.now(),
            account_type=UserAccountType.ADMIN,
        )
    )
    logger.info(f"Created admin user {admin.id}")
