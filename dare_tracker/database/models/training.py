from sqlalchemy import Column, Integer, String, Text, Boolean, Date, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from ..database import Base

class TrainingProgram(Base):
    """청년이 등록할 수 있는 교육 훈련 프로그램입니다."""
    __tablename__ = "training_programs"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    category = Column(String)
    total_modules = Column(Integer, default=0)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    trainings = relationship("YouthTraining", back_populates="program", cascade="all, delete-orphan")


class YouthTraining(Base):
    """청년의 특정 훈련 프로그램 등록 및 진행 기록입니다."""
    __tablename__ = "youth_training"
    id = Column(Integer, primary_key=True, index=True)
    youth_id = Column(Integer, ForeignKey("youth_profiles.id"), nullable=False, index=True)
    program_id = Column(Integer, ForeignKey("training_programs.id"), nullable=False, index=True)
    start_date = Column(Date)
    completion_date = Column(Date)
    status = Column(String, default="In Progress")
    certification_received = Column(Boolean, default=False)
    notes = Column(Text)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    youth = relationship("YouthProfile", back_populates="training_records")
    program = relationship("TrainingProgram", back_populates="trainings")
