from sqlalchemy import Column, Integer, String, Text, Boolean, Date, DateTime, func
from sqlalchemy.orm import relationship
from ..database import Base

class YouthProfile(Base):
    """
    DARE 프로그램에 참여하는 청년 참가자의 프로필입니다.
    인적 사항, 연락처, 학력/기술, 프로그램 참여 상태를 담고 있으며
    교육 이력(Education), 훈련 이력(YouthTraining), 사업체 소속이 이 모델에 종속됩니다.
    삭제는 is_deleted 플래그로 처리합니다.
    """
    __tablename__ = "youth_profiles"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer)

    # 식별 정보
    participant_code = Column(String, unique=True, index=True)
    full_name = Column(String, nullable=False)
    preferred_name = Column(String)
    first_name = Column(String)
    middle_name = Column(String)
    last_name = Column(String)

    # 인적 사항
    date_of_birth = Column(Date)
    year_of_birth = Column(Integer)
    age = Column(Integer)
    age_group = Column(String)
    gender = Column(String)
    marital_status = Column(String)
    children_count = Column(Integer, default=0)
    dependents = Column(String)
    national_id = Column(String)
    pwd_status = Column(String)

    # 지역 및 연락처
    district = Column(String)
    town = Column(String)
    home_address = Column(String)
    country = Column(String, default="Ghana")
    phone_number = Column(String)
    additional_phone_number = Column(String)
    email = Column(String)

    # 학력 및 기술
    highest_education_level = Column(String)
    core_skills = Column(Text)
    digital_skills = Column(Text)
    digital_skills_2 = Column(Text)
    years_of_experience = Column(Integer)
    work_history = Column(Text)

    # 프로그램 참여
    business_interest = Column(String)
    employment_status = Column(String)
    specific_job = Column(String)
    training_status = Column(String)
    program_status = Column(String)
    transition_status = Column(String)
    onboarded_to_tracker = Column(Boolean, default=False)
    cohort = Column(String)
    dare_model = Column(String)

    # 마담/견습, 멘토, 보증인
    madam_name = Column(String)
    madam_phone = Column(String)
    local_mentor_name = Column(String)
    local_mentor_contact = Column(String)
    guarantor = Column(String)
    guarantor_phone = Column(String)

    # 파트너 및 난민 지원
    implementing_partner_name = Column(String)
    refugee_status = Column(Boolean, default=False)
    idp_status = Column(Boolean, default=False)

    is_deleted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    education_records = relationship("Education", back_populates="youth", cascade="all, delete-orphan")
    training_records = relationship("YouthTraining", back_populates="youth", cascade="all, delete-orphan")
    business_associations = relationship("BusinessYouthRelationship", back_populates="youth", cascade="all, delete-orphan")
    certifications = relationship("Certification", back_populates="youth", cascade="all, delete-orphan")
    skill_associations = relationship("YouthSkill", back_populates="youth", cascade="all, delete-orphan")
