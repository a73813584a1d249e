import logging
import os

from garment_erp.database import SessionLocal
from garment_erp.models.user import User, UserRole
from garment_erp.core.security import get_password_hash

logger = logging.getLogger(__name__)

def init_system_data():
    """
    Checks if the system needs initialization.
    If no user account exists, creates the factory admin login from
    ADMIN_EMAIL / ADMIN_PASSWORD (skipped when those are not set).
    """
    admin_email = os.getenv("ADMIN_EMAIL")
    admin_pwd = os.getenv("ADMIN_PASSWORD")
    if not admin_email or not admin_pwd:
        return

    db = SessionLocal()
    try:
        user_count = db.query(User).count()
        if user_count == 0:
            logger.info("Running startup initialization...")
            db.add(User(
                email=admin_email,
                hashed_password=get_password_hash(admin_pwd),
                role=UserRole.ADMIN,
                is_active=True
            ))
            db.commit()
            logger.info(f"✓ Created default Admin: {admin_email}")
        else:
            logger.info(f"System initialization check: {user_count} user(s) found.")

    except Exception as e:
        db.rollback()
        logger.error(f"Error during system initialization check: {str(e)}", exc_info=True)
    finally:
        db.close()
