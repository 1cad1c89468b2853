import logging

from dare_tracker import config
from dare_tracker.repositories.sqlalchemy import (
    SqlalchemyRoleRepository, SqlalchemyPermissionRepository,
    SqlalchemyRolePermissionRepository, SqlalchemyUserRepository
)
from dare_tracker.services.access_control_service import AccessControlService
from dare_tracker.utils.passwords import hash_password
from .database import engine, SessionLocal, Base
from .choices import DEFAULT_ROLES, DEFAULT_ROLE_PERMISSIONS
from .models import *

logger = logging.getLogger(__name__)


def initialize_db(bind=None, session_factory=None):
    """
    DB와 테이블을 생성하고, 비어 있는 DB라면 기본 데이터를 삽입합니다.
    기본 데이터: 기본 역할, 권한 카탈로그, 기본 역할 권한, admin 전체 권한, 초기 관리자 계정.

    Args:
        bind: 테이블을 생성할 엔진. 기본값은 설정의 엔진입니다.
        session_factory: 세션 생성 함수. 기본값은 SessionLocal입니다.
    """
    logger.info("DB 초기화 중 (SQLAlchemy 사용)...")
    Base.metadata.create_all(bind=bind or engine)
    logger.info("테이블 생성 완료.")

    db = (session_factory or SessionLocal)()
    try:
        # 기본 데이터가 이미 있는지 확인
        if db.query(User).first():
            logger.info("기본 데이터가 이미 존재합니다. 초기화를 건너뜁니다.")
            return

        logger.info("기본 데이터 삽입 중...")

        # Roles
        for name, display_name, description, is_system in DEFAULT_ROLES:
            if not db.query(Role).filter(Role.name == name).first():
                db.add(Role(name=name, display_name=display_name, description=description,
                            is_system=is_system, is_editable=True, is_active=True))

        # Admin User
        db.add(User(
            username=config.ADMIN_USERNAME,
            password_hash=hash_password(config.ADMIN_PASSWORD),
            full_name="System Administrator",
            role="admin",
            is_active=True
        ))
        db.commit()

        # 권한 카탈로그와 admin 전체 권한
        user_repo = SqlalchemyUserRepository(db)
        access_service = AccessControlService(
            SqlalchemyRoleRepository(db), SqlalchemyPermissionRepository(db),
            SqlalchemyRolePermissionRepository(db), user_repo
        )
        result = access_service.reset_admin_permissions()

        # 기본 역할 권한
        for role_name, pairs in DEFAULT_ROLE_PERMISSIONS.items():
            for resource, action in pairs:
                access_service.grant_permission(role_name, resource, action)

        logger.info("DB 초기화 및 기본 데이터 삽입 완료. (admin 권한 %d개)", result["assigned_count"])

    except Exception:
        logger.exception("DB 초기화 중 오류 발생")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == '__main__':
    config.configure_logging()
    initialize_db()
