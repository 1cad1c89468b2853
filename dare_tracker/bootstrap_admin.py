# dare_tracker/bootstrap_admin.py
"""
admin 역할이 존재하고 모든 (리소스, 동작) 권한을 갖도록 맞추는 스크립트입니다.
여러 번 실행해도 결과가 같습니다.

사용법:
    python -m dare_tracker.bootstrap_admin
"""
import logging
import sys

from dare_tracker import config
from dare_tracker.database.database import SessionLocal, Base, engine
from dare_tracker.repositories.sqlalchemy import (
    SqlalchemyRoleRepository, SqlalchemyPermissionRepository,
    SqlalchemyRolePermissionRepository, SqlalchemyUserRepository
)
from dare_tracker.services.access_control_service import AccessControlService

logger = logging.getLogger(__name__)


def run(session_factory=SessionLocal):
    db = session_factory()
    try:
        service = AccessControlService(
            SqlalchemyRoleRepository(db), SqlalchemyPermissionRepository(db),
            SqlalchemyRolePermissionRepository(db), SqlalchemyUserRepository(db)
        )
        result = service.reset_admin_permissions()
        logger.info(
            "Admin role %s: %d permissions before, %d assigned of %d total",
            result["role_id"], result["previous_count"], result["assigned_count"], result["total_permissions"]
        )
        return result
    finally:
        db.close()


def main():
    config.configure_logging()
    Base.metadata.create_all(bind=engine)
    try:
        run()
    except Exception:
        logger.exception("Fixing admin permissions failed")
        sys.exit(1)


if __name__ == '__main__':
    main()
