from .sqlalchemy_user_repository import SqlalchemyUserRepository
from .sqlalchemy_role_repository import SqlalchemyRoleRepository
from .sqlalchemy_permission_repository import SqlalchemyPermissionRepository, SqlalchemyRolePermissionRepository
from .sqlalchemy_youth_profile_repository import SqlalchemyYouthProfileRepository
from .sqlalchemy_education_repository import SqlalchemyEducationRepository
from .sqlalchemy_training_repository import SqlalchemyTrainingProgramRepository, SqlalchemyYouthTrainingRepository
from .sqlalchemy_business_repository import SqlalchemyBusinessRepository
from .sqlalchemy_business_tracking_repository import SqlalchemyBusinessTrackingRepository
from .sqlalchemy_mentor_repository import SqlalchemyMentorRepository
from .sqlalchemy_certification_repository import SqlalchemyCertificationRepository
from .sqlalchemy_skill_repository import SqlalchemySkillRepository, SqlalchemyYouthSkillRepository
from .sqlalchemy_makerspace_repository import SqlalchemyMakerspaceRepository, SqlalchemyMakerspaceAssignmentRepository
from .sqlalchemy_feasibility_repository import SqlalchemyFeasibilityAssessmentRepository
from .sqlalchemy_mentorship_repository import SqlalchemyMentorshipMessageRepository, SqlalchemyBusinessAdviceRepository
