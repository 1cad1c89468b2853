from sqlalchemy import Column, Integer, String, Boolean, DateTime, func
from ..database import Base

class User(Base):
    """
    시스템에 로그인하는 사용자(관리자, 멘토, 검토자 등)를 나타냅니다.
    role 컬럼에는 역할(Role)의 이름이 저장되며, 권한 검사 시 이 이름으로
    role_permissions 테이블을 조회합니다.
    """
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    email = Column(String)
    full_name = Column(String, nullable=False)
    role = Column(String(50), nullable=False, default="mentee", index=True)
    district = Column(String)
    is_active = Column(Boolean, nullable=False, default=True)
    last_login = Column(DateTime)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())
