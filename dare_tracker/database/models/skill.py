from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, func
from sqlalchemy.orm import relationship
from ..database import Base

class Skill(Base):
    """청년에게 연결할 수 있는 기술 항목 카탈로그입니다."""
    __tablename__ = "skills"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False, index=True)
    description = Column(Text)
    category = Column(String)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    youth_associations = relationship("YouthSkill", back_populates="skill", cascade="all, delete-orphan")
