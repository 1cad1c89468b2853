from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import relationship
from ..database import Base

class Permission(Base):
    """
    시스템이 알고 있는 (리소스, 동작) 쌍의 목록입니다.
    관리자 역할은 이 목록 전체를 권한으로 가집니다.
    """
    __tablename__ = "permissions"
    __table_args__ = (UniqueConstraint("resource", "action", name="uq_permissions_resource_action"),)

    id = Column(Integer, primary_key=True, index=True)
    resource = Column(String, nullable=False)
    action = Column(String, nullable=False)
    description = Column(Text)
    created_at = Column(DateTime, server_default=func.now())


class RolePermission(Base):
    """
    (역할, 리소스, 동작) 권한 부여 행입니다.
    행이 존재하면 해당 역할은 그 리소스에 대해 그 동작을 수행할 수 있습니다.
    """
    __tablename__ = "role_permissions"
    __table_args__ = (UniqueConstraint("role_id", "resource", "action", name="uq_role_permissions_triple"),)

    id = Column(Integer, primary_key=True, index=True)
    role_id = Column(Integer, ForeignKey("roles.id", ondelete="CASCADE"), nullable=False, index=True)
    resource = Column(String, nullable=False)
    action = Column(String, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    role = relationship("Role", back_populates="permissions")
