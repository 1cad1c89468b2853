# tests/repositories/test_sqlalchemy_skill_repository.py
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from dare_tracker.database.database import Base
from dare_tracker.database import models
from dare_tracker.repositories.sqlalchemy import (
    SqlalchemySkillRepository, SqlalchemyYouthSkillRepository, SqlalchemyYouthProfileRepository
)
from dare_tracker.services.skill_service import SkillService

# ===================================================================
#  Fixture 설정 (인메모리 SQLite)
# ===================================================================

@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()
    engine.dispose()

@pytest.fixture
def youth_skill_repo(db_session) -> SqlalchemyYouthSkillRepository:
    return SqlalchemyYouthSkillRepository(db_session)

@pytest.fixture
def skill_service(db_session, youth_skill_repo) -> SkillService:
    return SkillService(
        SqlalchemySkillRepository(db_session), youth_skill_repo, SqlalchemyYouthProfileRepository(db_session)
    )

@pytest.fixture
def seeded(db_session):
    youth = models.YouthProfile(full_name="Esi Owusu", is_deleted=False)
    skills = [models.Skill(name=name, is_active=True) for name in ("Baking", "Carpentry", "Weaving")]
    db_session.add_all([youth] + skills)
    db_session.commit()
    return youth, skills

# ===================================================================
#  청년 기술 리포지토리 테스트
# ===================================================================
class TestYouthSkillRepository:
    def test_primary_skill_listed_first(self, skill_service, seeded):
        youth, (baking, carpentry, weaving) = seeded
        skill_service.add_youth_skill(youth.id, baking.id)
        skill_service.add_youth_skill(youth.id, weaving.id, is_primary=True)

        names = [s["name"] for s in skill_service.list_youth_skills(youth.id)]

        assert names == ["Weaving", "Baking"]

    def test_new_primary_clears_previous_in_one_commit(self, skill_service, youth_skill_repo, seeded):
        """새 주 기술을 저장할 때 이전 주 기술 표시가 함께 해제되는지 테스트합니다."""
        youth, (baking, carpentry, _) = seeded
        skill_service.add_youth_skill(youth.id, baking.id, is_primary=True)

        skill_service.add_youth_skill(youth.id, carpentry.id, is_primary=True)

        assert youth_skill_repo.find(youth.id, baking.id).is_primary is False
        assert youth_skill_repo.find(youth.id, carpentry.id).is_primary is True

    def test_add_existing_skill_updates_it(self, skill_service, youth_skill_repo, seeded):
        youth, (baking, _, _) = seeded
        skill_service.add_youth_skill(youth.id, baking.id, proficiency="Beginner")

        skill_service.add_youth_skill(youth.id, baking.id, proficiency="Expert", years_of_experience=6)

        skills = skill_service.list_youth_skills(youth.id)
        assert len(skills) == 1
        assert (skills[0]["proficiency"], skills[0]["years_of_experience"]) == ("Expert", 6)

    def test_replace_reinserts_same_keys(self, skill_service, youth_skill_repo, seeded):
        """기존과 같은 기본 키를 다시 넣는 교체도 충돌 없이 반영되는지 테스트합니다."""
        youth, (baking, carpentry, weaving) = seeded
        skill_service.add_youth_skill(youth.id, baking.id)
        skill_service.add_youth_skill(youth.id, carpentry.id)

        skill_service.replace_youth_skills(youth.id, [
            {"skill_id": baking.id, "proficiency": "Advanced"},
            {"skill_id": weaving.id, "is_primary": True},
        ])

        skills = {s["name"]: s for s in skill_service.list_youth_skills(youth.id)}
        assert set(skills) == {"Baking", "Weaving"}
        assert skills["Baking"]["proficiency"] == "Advanced"
        assert skills["Weaving"]["is_primary"] is True

    def test_deleting_skill_removes_it_from_youth(self, skill_service, youth_skill_repo, seeded):
        youth, (baking, carpentry, _) = seeded
        skill_service.add_youth_skill(youth.id, baking.id)
        skill_service.add_youth_skill(youth.id, carpentry.id)

        skill_service.delete_skill(baking.id)

        assert [s["name"] for s in skill_service.list_youth_skills(youth.id)] == ["Carpentry"]
