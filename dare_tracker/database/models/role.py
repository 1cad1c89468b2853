from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, func
from sqlalchemy.orm import relationship
from ..database import Base

class Role(Base):
    """
    사용자에게 부여되는 역할을 정의합니다. (예: 'admin', 'mentor').
    RBAC(역할 기반 접근 제어)의 핵심 요소이며, 역할이 가진 권한은
    RolePermission 행으로 표현됩니다.
    """
    __tablename__ = "roles"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), unique=True, nullable=False)
    display_name = Column(String(100))
    description = Column(Text)
    is_system = Column(Boolean, nullable=False, default=False)
    is_editable = Column(Boolean, nullable=False, default=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    permissions = relationship("RolePermission", back_populates="role", cascade="all, delete-orphan")
