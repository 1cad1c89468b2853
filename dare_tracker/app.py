# dare_tracker/app.py
from wsgiref.simple_server import make_server
from urllib.parse import parse_qs
import json
import logging
import re
import sys

# SQLAlchemy 및 의존성 임포트
from dare_tracker import config
from dare_tracker.database.database import SessionLocal
from dare_tracker.repositories.sqlalchemy import (
    SqlalchemyUserRepository, SqlalchemyRoleRepository, SqlalchemyPermissionRepository,
    SqlalchemyRolePermissionRepository, SqlalchemyYouthProfileRepository, SqlalchemyEducationRepository,
    SqlalchemyTrainingProgramRepository, SqlalchemyYouthTrainingRepository, SqlalchemyBusinessRepository,
    SqlalchemyBusinessTrackingRepository, SqlalchemyMentorRepository, SqlalchemyCertificationRepository,
    SqlalchemySkillRepository, SqlalchemyYouthSkillRepository, SqlalchemyMakerspaceRepository,
    SqlalchemyMakerspaceAssignmentRepository, SqlalchemyFeasibilityAssessmentRepository,
    SqlalchemyMentorshipMessageRepository, SqlalchemyBusinessAdviceRepository
)
from dare_tracker.services.identity_service import IdentityService
from dare_tracker.services.access_control_service import AccessControlService
from dare_tracker.services.youth_service import YouthService
from dare_tracker.services.training_service import TrainingService
from dare_tracker.services.business_service import BusinessService
from dare_tracker.services.mentor_service import MentorService
from dare_tracker.services.import_service import ImportService
from dare_tracker.services.certification_service import CertificationService
from dare_tracker.services.skill_service import SkillService
from dare_tracker.services.makerspace_service import MakerspaceService
from dare_tracker.services.feasibility_service import FeasibilityService
from dare_tracker.services.mentorship_service import MentorshipService
from dare_tracker.services.dashboard_service import DashboardService
from dare_tracker.services.exceptions import *

logger = logging.getLogger(__name__)

# 본문을 JSON 대신 원문 텍스트로 받는 가져오기 형식
IMPORT_CONTENT_TYPES = {
    "text/tab-separated-values": "tsv",
    "text/csv": "csv",
}

# --------------------------------------------------------------------------
## 요청 처리 유틸리티 함수
# --------------------------------------------------------------------------

def read_body(environ):
    try:
        content_length = int(environ.get("CONTENT_LENGTH") or 0)
    except ValueError:
        raise ValueError("Invalid Content-Length header.")
    return environ["wsgi.input"].read(content_length) if content_length > 0 else b""

def get_request_data(environ):
    body = read_body(environ)
    try:
        data = json.loads(body) if body else {}
    except (ValueError, json.JSONDecodeError):
        raise ValueError("Invalid or missing JSON body.")
    if not isinstance(data, dict):
        raise ValueError("JSON body must be an object.")
    return data

def get_query_params(environ):
    return {k: v[-1] for k, v in parse_qs(environ.get("QUERY_STRING", "")).items()}

def get_int_param(params, name):
    value = params.get(name)
    if value in (None, ""):
        return None
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Query parameter '{name}' must be an integer.")

def parse_flag(value):
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() in ("1", "true", "yes", "on")

def authorize(environ, resource, action):
    """
    토큰의 사용자를 조회하고, 그 사용자의 현재 역할이 (resource, action) 권한을 가지는지 검사합니다.
    통과하면 사용자 딕셔너리를 반환합니다.
    """
    auth_token = environ.get('HTTP_X_AUTH_TOKEN')
    if not auth_token:
        raise TokenInvalidError("Missing 'X-Auth-Token' header.")
    user = environ['services']['identity'].get_active_user(auth_token)
    environ['services']['access'].check_permission(user['role'], resource, action)
    return user

def handle_exception(e):
    error_map = {
        TokenInvalidError: "401 Unauthorized",
        AuthenticationError: "401 Unauthorized",
        PermissionDeniedError: "403 Forbidden",
        SystemRoleError: "403 Forbidden",
        UserNotFoundError: "404 Not Found",
        RoleNotFoundError: "404 Not Found",
        RolePermissionNotFoundError: "404 Not Found",
        YouthProfileNotFoundError: "404 Not Found",
        EducationNotFoundError: "404 Not Found",
        TrainingProgramNotFoundError: "404 Not Found",
        TrainingRecordNotFoundError: "404 Not Found",
        BusinessNotFoundError: "404 Not Found",
        BusinessTrackingNotFoundError: "404 Not Found",
        MentorNotFoundError: "404 Not Found",
        MembershipNotFoundError: "404 Not Found",
        CertificationNotFoundError: "404 Not Found",
        SkillNotFoundError: "404 Not Found",
        MakerspaceNotFoundError: "404 Not Found",
        MakerspaceAssignmentNotFoundError: "404 Not Found",
        FeasibilityAssessmentNotFoundError: "404 Not Found",
        MentorshipMessageNotFoundError: "404 Not Found",
        BusinessAdviceNotFoundError: "404 Not Found",
        RoleExistsError: "409 Conflict",
        RolePermissionExistsError: "409 Conflict",
        SkillExistsError: "409 Conflict",
        ValueError: "400 Bad Request",
        TypeError: "400 Bad Request",
        UserCreationError: "400 Bad Request",
        YouthProfileCreationError: "400 Bad Request",
        RoleInUseError: "400 Bad Request",
    }
    # 하위 예외(UnicodeDecodeError 등)도 가장 가까운 상위 타입의 상태 코드를 따릅니다.
    status = next(
        (error_map[cls] for cls in type(e).__mro__ if cls in error_map),
        "500 Internal Server Error"
    )
    if status.startswith("500"):
        logger.exception("Unhandled error while processing request")
    return status, json.dumps({"error": str(e)})

# --------------------------------------------------------------------------
## WSGI 애플리케이션 (의존성 주입 및 라우팅)
# --------------------------------------------------------------------------

def build_services(db_session):
    # Repositories -> Services
    user_repo = SqlalchemyUserRepository(db_session)
    role_repo = SqlalchemyRoleRepository(db_session)
    permission_repo = SqlalchemyPermissionRepository(db_session)
    role_permission_repo = SqlalchemyRolePermissionRepository(db_session)
    profile_repo = SqlalchemyYouthProfileRepository(db_session)
    education_repo = SqlalchemyEducationRepository(db_session)
    program_repo = SqlalchemyTrainingProgramRepository(db_session)
    training_repo = SqlalchemyYouthTrainingRepository(db_session)
    business_repo = SqlalchemyBusinessRepository(db_session)
    tracking_repo = SqlalchemyBusinessTrackingRepository(db_session)
    mentor_repo = SqlalchemyMentorRepository(db_session)
    message_repo = SqlalchemyMentorshipMessageRepository(db_session)

    youth_service = YouthService(profile_repo, education_repo)
    return {
        'identity': IdentityService(user_repo, role_repo),
        'access': AccessControlService(role_repo, permission_repo, role_permission_repo, user_repo),
        'youth': youth_service,
        'training': TrainingService(program_repo, training_repo, profile_repo),
        'business': BusinessService(business_repo, tracking_repo, profile_repo),
        'mentor': MentorService(mentor_repo, user_repo, business_repo),
        'import': ImportService(youth_service, profile_repo),
        'certification': CertificationService(SqlalchemyCertificationRepository(db_session), profile_repo),
        'skill': SkillService(
            SqlalchemySkillRepository(db_session), SqlalchemyYouthSkillRepository(db_session), profile_repo
        ),
        'makerspace': MakerspaceService(
            SqlalchemyMakerspaceRepository(db_session), SqlalchemyMakerspaceAssignmentRepository(db_session),
            business_repo
        ),
        'feasibility': FeasibilityService(
            SqlalchemyFeasibilityAssessmentRepository(db_session), business_repo, profile_repo
        ),
        'mentorship': MentorshipService(
            message_repo, SqlalchemyBusinessAdviceRepository(db_session), mentor_repo, business_repo
        ),
        'dashboard': DashboardService(profile_repo, business_repo, mentor_repo, message_repo),
    }

def application(environ, start_response):
    db_session = SessionLocal()
    try:
        # 1. 의존성 생성 후 environ을 통해 핸들러에 전달
        environ['services'] = build_services(db_session)

        # 2. 라우팅 및 핸들러 실행
        path = environ.get("PATH_INFO", "")
        method = environ.get("REQUEST_METHOD", "")

        handler, path_args = None, []
        for route_method, pattern, route_handler in routes:
            if method == route_method and (match := re.match(pattern, path)):
                handler, path_args = route_handler, match.groups()
                break

        if handler:
            status, response_body = handler(environ, *path_args)
        else:
            status, response_body = '404 Not Found', json.dumps({'error': 'Not Found'})

    except Exception as e:
        db_session.rollback()
        status, response_body = handle_exception(e)
    finally:
        db_session.close()

    start_response(status, [("Content-Type", "application/json")])
    return [response_body.encode("utf-8")]

# --------------------------------------------------------------------------
## 인증 / 사용자 / 역할 핸들러
# --------------------------------------------------------------------------

def auth_tokens_handler(environ, *args):
    data = get_request_data(environ)
    token = environ['services']['identity'].authenticate(data.get('username'), data.get('password'))
    return '201 Created', json.dumps(token)

def create_user_handler(environ, *args):
    authorize(environ, 'users', 'create')
    data = get_request_data(environ)
    user = environ['services']['identity'].create_user(**data)
    return '201 Created', json.dumps(user)

def list_users_handler(environ, *args):
    authorize(environ, 'users', 'view')
    users = environ['services']['identity'].list_users()
    return '200 OK', json.dumps({"users": users})

def get_user_handler(environ, user_id):
    authorize(environ, 'users', 'view')
    user = environ['services']['identity'].get_user(int(user_id))
    return '200 OK', json.dumps(user)

def update_user_handler(environ, user_id):
    authorize(environ, 'users', 'edit')
    data = get_request_data(environ)
    user = environ['services']['identity'].update_user(int(user_id), **data)
    return '200 OK', json.dumps(user)

def delete_user_handler(environ, user_id):
    current_user = authorize(environ, 'users', 'delete')
    if current_user['id'] == int(user_id):
        raise ValueError("You cannot delete your own account.")
    environ['services']['identity'].delete_user(int(user_id))
    return '204 No Content', ''

def create_role_handler(environ, *args):
    authorize(environ, 'roles', 'create')
    data = get_request_data(environ)
    role = environ['services']['access'].create_role(**data)
    return '201 Created', json.dumps(role)

def list_roles_handler(environ, *args):
    authorize(environ, 'roles', 'view')
    roles = environ['services']['access'].list_roles()
    return '200 OK', json.dumps({"roles": roles})

def get_role_handler(environ, role_id):
    authorize(environ, 'roles', 'view')
    role = environ['services']['access'].get_role(int(role_id))
    return '200 OK', json.dumps(role)

def update_role_handler(environ, role_id):
    authorize(environ, 'roles', 'edit')
    data = get_request_data(environ)
    role = environ['services']['access'].update_role(int(role_id), **data)
    return '200 OK', json.dumps(role)

def delete_role_handler(environ, role_id):
    authorize(environ, 'roles', 'delete')
    environ['services']['access'].delete_role(int(role_id))
    return '204 No Content', ''

# --------------------------------------------------------------------------
## 권한 / 관리자 핸들러
# --------------------------------------------------------------------------

def list_permissions_handler(environ, *args):
    authorize(environ, 'permissions', 'view')
    permissions = environ['services']['access'].list_permissions()
    return '200 OK', json.dumps({"permissions": permissions})

def resources_actions_handler(environ, *args):
    authorize(environ, 'permissions', 'view')
    return '200 OK', json.dumps(environ['services']['access'].list_resources_and_actions())

def permission_matrix_handler(environ, *args):
    authorize(environ, 'permissions', 'view')
    matrix = environ['services']['access'].permission_matrix()
    return '200 OK', json.dumps({"matrix": matrix})

def list_role_permissions_handler(environ, role_name):
    authorize(environ, 'permissions', 'view')
    permissions = environ['services']['access'].list_role_permissions(role_name)
    return '200 OK', json.dumps({"role": role_name, "permissions": permissions})

def check_role_permission_handler(environ, role_name, resource, action):
    authorize(environ, 'permissions', 'view')
    granted = environ['services']['access'].has_permission(role_name, resource, action)
    return '200 OK', json.dumps({"role": role_name, "resource": resource, "action": action, "granted": granted})

def grant_permission_handler(environ, *args):
    authorize(environ, 'permissions', 'create')
    data = get_request_data(environ)
    row = environ['services']['access'].grant_permission(data.get('role'), data.get('resource'), data.get('action'))
    return '201 Created', json.dumps(row)

def revoke_permission_handler(environ, *args):
    authorize(environ, 'permissions', 'delete')
    data = get_request_data(environ)
    environ['services']['access'].revoke_permission(data.get('role'), data.get('resource'), data.get('action'))
    return '204 No Content', ''

def reset_admin_permissions_handler(environ, *args):
    authorize(environ, 'system', 'manage')
    result = environ['services']['access'].reset_admin_permissions()
    return '200 OK', json.dumps(result)

def generate_missing_permissions_handler(environ, *args):
    authorize(environ, 'system', 'manage')
    result = environ['services']['access'].generate_missing_permissions()
    return '200 OK', json.dumps(result)

# --------------------------------------------------------------------------
## 청년 프로필 / 학력 / 가져오기 핸들러
# --------------------------------------------------------------------------

def create_profile_handler(environ, *args):
    authorize(environ, 'youth_profiles', 'create')
    data = get_request_data(environ)
    profile = environ['services']['youth'].create_profile(**data)
    return '201 Created', json.dumps(profile)

def list_profiles_handler(environ, *args):
    authorize(environ, 'youth_profiles', 'view')
    district = get_query_params(environ).get('district')
    profiles = environ['services']['youth'].list_profiles(district=district)
    return '200 OK', json.dumps({"youth_profiles": profiles})

def get_profile_handler(environ, profile_id):
    authorize(environ, 'youth_profiles', 'view')
    profile = environ['services']['youth'].get_profile(int(profile_id))
    return '200 OK', json.dumps(profile)

def update_profile_handler(environ, profile_id):
    authorize(environ, 'youth_profiles', 'edit')
    data = get_request_data(environ)
    profile = environ['services']['youth'].update_profile(int(profile_id), **data)
    return '200 OK', json.dumps(profile)

def delete_profile_handler(environ, profile_id):
    authorize(environ, 'youth_profiles', 'delete')
    environ['services']['youth'].delete_profile(int(profile_id))
    return '204 No Content', ''

def import_profiles_handler(environ, *args):
    authorize(environ, 'youth_profiles', 'manage')
    content_type = environ.get("CONTENT_TYPE", "").split(";")[0].strip().lower()
    if content_type in IMPORT_CONTENT_TYPES:
        params = get_query_params(environ)
        try:
            text = read_body(environ).decode("utf-8-sig")
        except UnicodeDecodeError:
            raise ValueError("Import data must be UTF-8.")
        file_format = IMPORT_CONTENT_TYPES[content_type]
        clear_existing = parse_flag(params.get('clear_existing'))
    else:
        data = get_request_data(environ)
        text = data.get('data')
        if text is not None and not isinstance(text, str):
            raise ValueError("'data' must be a string.")
        file_format = data.get('format')
        clear_existing = parse_flag(data.get('clear_existing'))
    result = environ['services']['import'].import_youth_profiles(
        text, file_format=file_format, clear_existing=clear_existing
    )
    return '200 OK', json.dumps(result)

def add_education_handler(environ, profile_id):
    authorize(environ, 'youth_education', 'create')
    data = get_request_data(environ)
    record = environ['services']['youth'].add_education(int(profile_id), **data)
    return '201 Created', json.dumps(record)

def list_education_handler(environ, profile_id):
    authorize(environ, 'youth_education', 'view')
    records = environ['services']['youth'].list_education(int(profile_id))
    return '200 OK', json.dumps({"education": records})

def update_education_handler(environ, education_id):
    authorize(environ, 'youth_education', 'edit')
    data = get_request_data(environ)
    record = environ['services']['youth'].update_education(int(education_id), **data)
    return '200 OK', json.dumps(record)

def delete_education_handler(environ, education_id):
    authorize(environ, 'youth_education', 'delete')
    environ['services']['youth'].delete_education(int(education_id))
    return '204 No Content', ''

# --------------------------------------------------------------------------
## 훈련 핸들러
# --------------------------------------------------------------------------

def create_program_handler(environ, *args):
    authorize(environ, 'training', 'create')
    data = get_request_data(environ)
    program = environ['services']['training'].create_program(**data)
    return '201 Created', json.dumps(program)

def list_programs_handler(environ, *args):
    authorize(environ, 'training', 'view')
    programs = environ['services']['training'].list_programs()
    return '200 OK', json.dumps({"training_programs": programs})

def get_program_handler(environ, program_id):
    authorize(environ, 'training', 'view')
    program = environ['services']['training'].get_program(int(program_id))
    return '200 OK', json.dumps(program)

def update_program_handler(environ, program_id):
    authorize(environ, 'training', 'edit')
    data = get_request_data(environ)
    program = environ['services']['training'].update_program(int(program_id), **data)
    return '200 OK', json.dumps(program)

def delete_program_handler(environ, program_id):
    authorize(environ, 'training', 'delete')
    environ['services']['training'].delete_program(int(program_id))
    return '204 No Content', ''

def enroll_youth_handler(environ, profile_id):
    authorize(environ, 'training', 'create')
    data = get_request_data(environ)
    program_id = data.pop('program_id', None)
    if program_id is None:
        raise ValueError("program_id is required.")
    record = environ['services']['training'].enroll_youth(int(profile_id), int(program_id), **data)
    return '201 Created', json.dumps(record)

def list_youth_training_handler(environ, profile_id):
    authorize(environ, 'training', 'view')
    records = environ['services']['training'].list_youth_training(int(profile_id))
    return '200 OK', json.dumps({"training": records})

def update_training_handler(environ, training_id):
    authorize(environ, 'training', 'edit')
    data = get_request_data(environ)
    record = environ['services']['training'].update_training(int(training_id), **data)
    return '200 OK', json.dumps(record)

def delete_training_handler(environ, training_id):
    authorize(environ, 'training', 'delete')
    environ['services']['training'].delete_training(int(training_id))
    return '204 No Content', ''

# --------------------------------------------------------------------------
## 사업체 / 구성원 / 추적 핸들러
# --------------------------------------------------------------------------

def create_business_handler(environ, *args):
    authorize(environ, 'businesses', 'create')
    data = get_request_data(environ)
    business = environ['services']['business'].create_business(**data)
    return '201 Created', json.dumps(business)

def list_businesses_handler(environ, *args):
    authorize(environ, 'businesses', 'view')
    district = get_query_params(environ).get('district')
    businesses = environ['services']['business'].list_businesses(district=district)
    return '200 OK', json.dumps({"businesses": businesses})

def get_business_handler(environ, business_id):
    authorize(environ, 'businesses', 'view')
    business = environ['services']['business'].get_business(int(business_id))
    return '200 OK', json.dumps(business)

def update_business_handler(environ, business_id):
    authorize(environ, 'businesses', 'edit')
    data = get_request_data(environ)
    business = environ['services']['business'].update_business(int(business_id), **data)
    return '200 OK', json.dumps(business)

def delete_business_handler(environ, business_id):
    authorize(environ, 'businesses', 'delete')
    environ['services']['business'].delete_business(int(business_id))
    return '204 No Content', ''

def list_members_handler(environ, business_id):
    authorize(environ, 'business_youth', 'view')
    members = environ['services']['business'].list_members(int(business_id))
    return '200 OK', json.dumps({"members": members})

def add_member_handler(environ, business_id):
    authorize(environ, 'business_youth', 'create')
    data = get_request_data(environ)
    youth_id = data.pop('youth_id', None)
    if youth_id is None:
        raise ValueError("youth_id is required.")
    members = environ['services']['business'].add_member(int(business_id), int(youth_id), **data)
    return '201 Created', json.dumps({"members": members})

def remove_member_handler(environ, business_id, youth_id):
    authorize(environ, 'business_youth', 'delete')
    environ['services']['business'].remove_member(int(business_id), int(youth_id))
    return '204 No Content', ''

def create_tracking_handler(environ, business_id):
    user = authorize(environ, 'business_tracking', 'create')
    data = get_request_data(environ)
    data.pop('recorded_by', None)
    record = environ['services']['business'].create_tracking(int(business_id), user['id'], **data)
    return '201 Created', json.dumps(record)

def list_tracking_handler(environ, business_id):
    authorize(environ, 'business_tracking', 'view')
    records = environ['services']['business'].list_tracking(int(business_id))
    return '200 OK', json.dumps({"tracking": records})

def update_tracking_handler(environ, tracking_id):
    authorize(environ, 'business_tracking', 'edit')
    data = get_request_data(environ)
    record = environ['services']['business'].update_tracking(int(tracking_id), **data)
    return '200 OK', json.dumps(record)

def verify_tracking_handler(environ, tracking_id):
    user = authorize(environ, 'business_tracking', 'manage')
    record = environ['services']['business'].verify_tracking(int(tracking_id), user['id'])
    return '200 OK', json.dumps(record)

def delete_tracking_handler(environ, tracking_id):
    authorize(environ, 'business_tracking', 'delete')
    environ['services']['business'].delete_tracking(int(tracking_id))
    return '204 No Content', ''

# --------------------------------------------------------------------------
## 멘토 핸들러
# --------------------------------------------------------------------------

def create_mentor_handler(environ, *args):
    authorize(environ, 'mentors', 'create')
    data = get_request_data(environ)
    mentor = environ['services']['mentor'].create_mentor(**data)
    return '201 Created', json.dumps(mentor)

def list_mentors_handler(environ, *args):
    authorize(environ, 'mentors', 'view')
    district = get_query_params(environ).get('district')
    mentors = environ['services']['mentor'].list_mentors(district=district)
    return '200 OK', json.dumps({"mentors": mentors})

def get_mentor_handler(environ, mentor_id):
    authorize(environ, 'mentors', 'view')
    mentor = environ['services']['mentor'].get_mentor(int(mentor_id))
    return '200 OK', json.dumps(mentor)

def update_mentor_handler(environ, mentor_id):
    authorize(environ, 'mentors', 'edit')
    data = get_request_data(environ)
    mentor = environ['services']['mentor'].update_mentor(int(mentor_id), **data)
    return '200 OK', json.dumps(mentor)

def delete_mentor_handler(environ, mentor_id):
    authorize(environ, 'mentors', 'delete')
    environ['services']['mentor'].delete_mentor(int(mentor_id))
    return '204 No Content', ''

def list_assignments_handler(environ, mentor_id):
    authorize(environ, 'mentor_assignments', 'view')
    assignments = environ['services']['mentor'].list_assignments(int(mentor_id))
    return '200 OK', json.dumps({"businesses": assignments})

def assign_business_handler(environ, mentor_id):
    authorize(environ, 'mentor_assignments', 'create')
    data = get_request_data(environ)
    business_id = data.pop('business_id', None)
    if business_id is None:
        raise ValueError("business_id is required.")
    assignments = environ['services']['mentor'].assign_business(int(mentor_id), int(business_id), **data)
    return '201 Created', json.dumps({"businesses": assignments})

def unassign_business_handler(environ, mentor_id, business_id):
    authorize(environ, 'mentor_assignments', 'delete')
    environ['services']['mentor'].unassign_business(int(mentor_id), int(business_id))
    return '204 No Content', ''

# --------------------------------------------------------------------------
## 자격증 / 기술 핸들러
# --------------------------------------------------------------------------

def create_certification_handler(environ, profile_id):
    authorize(environ, 'youth_certifications', 'create')
    data = get_request_data(environ)
    record = environ['services']['certification'].create_certification(int(profile_id), **data)
    return '201 Created', json.dumps(record)

def list_certifications_handler(environ, profile_id):
    authorize(environ, 'youth_certifications', 'view')
    records = environ['services']['certification'].list_certifications(int(profile_id))
    return '200 OK', json.dumps({"certifications": records})

def replace_certifications_handler(environ, profile_id):
    authorize(environ, 'youth_certifications', 'edit')
    data = get_request_data(environ)
    records = environ['services']['certification'].replace_certifications(
        int(profile_id), data.get('certifications')
    )
    return '200 OK', json.dumps({"certifications": records})

def get_certification_handler(environ, certification_id):
    authorize(environ, 'youth_certifications', 'view')
    record = environ['services']['certification'].get_certification(int(certification_id))
    return '200 OK', json.dumps(record)

def update_certification_handler(environ, certification_id):
    authorize(environ, 'youth_certifications', 'edit')
    data = get_request_data(environ)
    record = environ['services']['certification'].update_certification(int(certification_id), **data)
    return '200 OK', json.dumps(record)

def delete_certification_handler(environ, certification_id):
    authorize(environ, 'youth_certifications', 'delete')
    environ['services']['certification'].delete_certification(int(certification_id))
    return '204 No Content', ''

def create_skill_handler(environ, *args):
    authorize(environ, 'skills', 'create')
    data = get_request_data(environ)
    skill = environ['services']['skill'].create_skill(**data)
    return '201 Created', json.dumps(skill)

def list_skills_handler(environ, *args):
    authorize(environ, 'skills', 'view')
    params = get_query_params(environ)
    skills = environ['services']['skill'].list_skills(
        active_only=parse_flag(params.get('active_only')), category=params.get('category')
    )
    return '200 OK', json.dumps({"skills": skills})

def get_skill_handler(environ, skill_id):
    authorize(environ, 'skills', 'view')
    skill = environ['services']['skill'].get_skill(int(skill_id))
    return '200 OK', json.dumps(skill)

def update_skill_handler(environ, skill_id):
    authorize(environ, 'skills', 'edit')
    data = get_request_data(environ)
    skill = environ['services']['skill'].update_skill(int(skill_id), **data)
    return '200 OK', json.dumps(skill)

def delete_skill_handler(environ, skill_id):
    authorize(environ, 'skills', 'delete')
    environ['services']['skill'].delete_skill(int(skill_id))
    return '204 No Content', ''

def add_youth_skill_handler(environ, profile_id):
    authorize(environ, 'youth_skills', 'create')
    data = get_request_data(environ)
    skill_id = data.pop('skill_id', None)
    if skill_id is None:
        raise ValueError("skill_id is required.")
    skills = environ['services']['skill'].add_youth_skill(int(profile_id), int(skill_id), **data)
    return '201 Created', json.dumps({"skills": skills})

def list_youth_skills_handler(environ, profile_id):
    authorize(environ, 'youth_skills', 'view')
    skills = environ['services']['skill'].list_youth_skills(int(profile_id))
    return '200 OK', json.dumps({"skills": skills})

def replace_youth_skills_handler(environ, profile_id):
    authorize(environ, 'youth_skills', 'edit')
    data = get_request_data(environ)
    skills = environ['services']['skill'].replace_youth_skills(int(profile_id), data.get('skills'))
    return '200 OK', json.dumps({"skills": skills})

def update_youth_skill_handler(environ, profile_id, skill_id):
    authorize(environ, 'youth_skills', 'edit')
    data = get_request_data(environ)
    skills = environ['services']['skill'].update_youth_skill(int(profile_id), int(skill_id), **data)
    return '200 OK', json.dumps({"skills": skills})

def remove_youth_skill_handler(environ, profile_id, skill_id):
    authorize(environ, 'youth_skills', 'delete')
    environ['services']['skill'].remove_youth_skill(int(profile_id), int(skill_id))
    return '204 No Content', ''

# --------------------------------------------------------------------------
## 메이커스페이스 / 타당성 평가 핸들러
# --------------------------------------------------------------------------

def create_makerspace_handler(environ, *args):
    authorize(environ, 'makerspaces', 'create')
    data = get_request_data(environ)
    makerspace = environ['services']['makerspace'].create_makerspace(**data)
    return '201 Created', json.dumps(makerspace)

def list_makerspaces_handler(environ, *args):
    authorize(environ, 'makerspaces', 'view')
    district = get_query_params(environ).get('district')
    makerspaces = environ['services']['makerspace'].list_makerspaces(district=district)
    return '200 OK', json.dumps({"makerspaces": makerspaces})

def get_makerspace_handler(environ, makerspace_id):
    authorize(environ, 'makerspaces', 'view')
    makerspace = environ['services']['makerspace'].get_makerspace(int(makerspace_id))
    return '200 OK', json.dumps(makerspace)

def update_makerspace_handler(environ, makerspace_id):
    authorize(environ, 'makerspaces', 'edit')
    data = get_request_data(environ)
    makerspace = environ['services']['makerspace'].update_makerspace(int(makerspace_id), **data)
    return '200 OK', json.dumps(makerspace)

def delete_makerspace_handler(environ, makerspace_id):
    authorize(environ, 'makerspaces', 'delete')
    environ['services']['makerspace'].delete_makerspace(int(makerspace_id))
    return '204 No Content', ''

def list_makerspace_businesses_handler(environ, makerspace_id):
    authorize(environ, 'business_makerspace', 'view')
    businesses = environ['services']['makerspace'].list_makerspace_businesses(int(makerspace_id))
    return '200 OK', json.dumps({"businesses": businesses})

def assign_makerspace_handler(environ, business_id):
    user = authorize(environ, 'business_makerspace', 'create')
    data = get_request_data(environ)
    makerspace_id = data.get('makerspace_id')
    if makerspace_id is None:
        raise ValueError("makerspace_id is required.")
    assignment = environ['services']['makerspace'].assign_business(
        int(business_id), int(makerspace_id), assigned_by=user['id'], notes=data.get('notes')
    )
    return '201 Created', json.dumps(assignment)

def list_business_makerspaces_handler(environ, business_id):
    authorize(environ, 'business_makerspace', 'view')
    assignments = environ['services']['makerspace'].list_business_assignments(int(business_id))
    return '200 OK', json.dumps({"assignments": assignments})

def update_makerspace_assignment_handler(environ, assignment_id):
    authorize(environ, 'business_makerspace', 'edit')
    data = get_request_data(environ)
    assignment = environ['services']['makerspace'].update_assignment(int(assignment_id), **data)
    return '200 OK', json.dumps(assignment)

def remove_makerspace_assignment_handler(environ, assignment_id):
    authorize(environ, 'business_makerspace', 'delete')
    environ['services']['makerspace'].remove_assignment(int(assignment_id))
    return '204 No Content', ''

def create_assessment_handler(environ, *args):
    user = authorize(environ, 'feasibility_assessment', 'create')
    data = get_request_data(environ)
    business_id = data.pop('business_id', None)
    if business_id is None:
        raise ValueError("business_id is required.")
    data.pop('assessment_by', None)
    assessment = environ['services']['feasibility'].create_assessment(int(business_id), user['id'], **data)
    return '201 Created', json.dumps(assessment)

def list_assessments_handler(environ, *args):
    authorize(environ, 'feasibility_assessment', 'view')
    params = get_query_params(environ)
    assessments = environ['services']['feasibility'].list_assessments(
        business_id=get_int_param(params, 'business_id'),
        youth_id=get_int_param(params, 'youth_id'),
        status=params.get('status')
    )
    return '200 OK', json.dumps({"assessments": assessments})

def get_assessment_handler(environ, assessment_id):
    authorize(environ, 'feasibility_assessment', 'view')
    assessment = environ['services']['feasibility'].get_assessment(int(assessment_id))
    return '200 OK', json.dumps(assessment)

def update_assessment_handler(environ, assessment_id):
    authorize(environ, 'feasibility_assessment', 'edit')
    data = get_request_data(environ)
    assessment = environ['services']['feasibility'].update_assessment(int(assessment_id), **data)
    return '200 OK', json.dumps(assessment)

def submit_assessment_handler(environ, assessment_id):
    authorize(environ, 'feasibility_assessment', 'edit')
    assessment = environ['services']['feasibility'].submit_assessment(int(assessment_id))
    return '200 OK', json.dumps(assessment)

def review_assessment_handler(environ, assessment_id):
    user = authorize(environ, 'feasibility_assessment', 'manage')
    data = get_request_data(environ)
    data.pop('reviewed_by', None)
    assessment = environ['services']['feasibility'].review_assessment(int(assessment_id), user['id'], **data)
    return '200 OK', json.dumps(assessment)

def delete_assessment_handler(environ, assessment_id):
    authorize(environ, 'feasibility_assessment', 'delete')
    environ['services']['feasibility'].delete_assessment(int(assessment_id))
    return '204 No Content', ''

# --------------------------------------------------------------------------
## 멘토링 메시지 / 사업 조언 / 대시보드 핸들러
# --------------------------------------------------------------------------

def send_message_handler(environ, *args):
    authorize(environ, 'mentorship_messages', 'create')
    data = get_request_data(environ)
    if data.get('mentor_id') is None or data.get('business_id') is None:
        raise ValueError("mentor_id and business_id are required.")
    message = environ['services']['mentorship'].send_message(
        int(data['mentor_id']), int(data['business_id']),
        data.get('message'), data.get('sender'), category=data.get('category')
    )
    return '201 Created', json.dumps(message)

def list_messages_handler(environ, *args):
    authorize(environ, 'mentorship_messages', 'view')
    params = get_query_params(environ)
    messages = environ['services']['mentorship'].list_messages(
        mentor_id=get_int_param(params, 'mentor_id'), business_id=get_int_param(params, 'business_id')
    )
    return '200 OK', json.dumps({"messages": messages})

def mark_message_read_handler(environ, message_id):
    authorize(environ, 'mentorship_messages', 'edit')
    message = environ['services']['mentorship'].mark_message_read(int(message_id))
    return '200 OK', json.dumps(message)

def create_advice_handler(environ, *args):
    user = authorize(environ, 'business_advice', 'create')
    data = get_request_data(environ)
    mentor_id, business_id = data.pop('mentor_id', None), data.pop('business_id', None)
    if mentor_id is None or business_id is None:
        raise ValueError("mentor_id and business_id are required.")
    data.pop('created_by', None)
    advice = environ['services']['mentorship'].create_advice(
        int(mentor_id), int(business_id), created_by=user['id'], **data
    )
    return '201 Created', json.dumps(advice)

def list_advice_handler(environ, *args):
    authorize(environ, 'business_advice', 'view')
    params = get_query_params(environ)
    advice = environ['services']['mentorship'].list_advice(
        mentor_id=get_int_param(params, 'mentor_id'), business_id=get_int_param(params, 'business_id')
    )
    return '200 OK', json.dumps({"advice": advice})

def get_advice_handler(environ, advice_id):
    authorize(environ, 'business_advice', 'view')
    advice = environ['services']['mentorship'].get_advice(int(advice_id))
    return '200 OK', json.dumps(advice)

def update_advice_handler(environ, advice_id):
    user = authorize(environ, 'business_advice', 'edit')
    data = get_request_data(environ)
    data.pop('updated_by', None)
    advice = environ['services']['mentorship'].update_advice(int(advice_id), updated_by=user['id'], **data)
    return '200 OK', json.dumps(advice)

def delete_advice_handler(environ, advice_id):
    authorize(environ, 'business_advice', 'delete')
    environ['services']['mentorship'].delete_advice(int(advice_id))
    return '204 No Content', ''

def dashboard_stats_handler(environ, *args):
    authorize(environ, 'dashboard', 'view')
    return '200 OK', json.dumps(environ['services']['dashboard'].get_stats())

# --------------------------------------------------------------------------
## 라우팅 테이블
# --------------------------------------------------------------------------

routes = [
    ('POST', r'^/v1/auth/tokens$', auth_tokens_handler),

    ('POST', r'^/v1/users$', create_user_handler),
    ('GET', r'^/v1/users$', list_users_handler),
    ('GET', r'^/v1/users/([0-9]+)$', get_user_handler),
    ('PATCH', r'^/v1/users/([0-9]+)$', update_user_handler),
    ('DELETE', r'^/v1/users/([0-9]+)$', delete_user_handler),

    ('POST', r'^/v1/roles$', create_role_handler),
    ('GET', r'^/v1/roles$', list_roles_handler),
    ('GET', r'^/v1/roles/([0-9]+)$', get_role_handler),
    ('PATCH', r'^/v1/roles/([0-9]+)$', update_role_handler),
    ('DELETE', r'^/v1/roles/([0-9]+)$', delete_role_handler),

    ('GET', r'^/v1/permissions$', list_permissions_handler),
    ('GET', r'^/v1/permissions/resources-actions$', resources_actions_handler),
    ('GET', r'^/v1/permissions/matrix$', permission_matrix_handler),
    ('GET', r'^/v1/role-permissions/([a-zA-Z0-9_-]+)$', list_role_permissions_handler),
    ('GET', r'^/v1/role-permissions/([a-zA-Z0-9_-]+)/([a-z_]+)/([a-z_]+)$', check_role_permission_handler),
    ('POST', r'^/v1/role-permissions$', grant_permission_handler),
    ('DELETE', r'^/v1/role-permissions$', revoke_permission_handler),

    ('POST', r'^/v1/admin/reset-permissions$', reset_admin_permissions_handler),
    ('POST', r'^/v1/admin/generate-missing-permissions$', generate_missing_permissions_handler),

    ('POST', r'^/v1/youth-profiles$', create_profile_handler),
    ('GET', r'^/v1/youth-profiles$', list_profiles_handler),
    ('POST', r'^/v1/youth-profiles/import$', import_profiles_handler),
    ('GET', r'^/v1/youth-profiles/([0-9]+)$', get_profile_handler),
    ('PATCH', r'^/v1/youth-profiles/([0-9]+)$', update_profile_handler),
    ('DELETE', r'^/v1/youth-profiles/([0-9]+)$', delete_profile_handler),
    ('POST', r'^/v1/youth-profiles/([0-9]+)/education$', add_education_handler),
    ('GET', r'^/v1/youth-profiles/([0-9]+)/education$', list_education_handler),
    ('PATCH', r'^/v1/education/([0-9]+)$', update_education_handler),
    ('DELETE', r'^/v1/education/([0-9]+)$', delete_education_handler),

    ('POST', r'^/v1/training-programs$', create_program_handler),
    ('GET', r'^/v1/training-programs$', list_programs_handler),
    ('GET', r'^/v1/training-programs/([0-9]+)$', get_program_handler),
    ('PATCH', r'^/v1/training-programs/([0-9]+)$', update_program_handler),
    ('DELETE', r'^/v1/training-programs/([0-9]+)$', delete_program_handler),
    ('POST', r'^/v1/youth-profiles/([0-9]+)/training$', enroll_youth_handler),
    ('GET', r'^/v1/youth-profiles/([0-9]+)/training$', list_youth_training_handler),
    ('PATCH', r'^/v1/youth-training/([0-9]+)$', update_training_handler),
    ('DELETE', r'^/v1/youth-training/([0-9]+)$', delete_training_handler),

    ('POST', r'^/v1/businesses$', create_business_handler),
    ('GET', r'^/v1/businesses$', list_businesses_handler),
    ('GET', r'^/v1/businesses/([0-9]+)$', get_business_handler),
    ('PATCH', r'^/v1/businesses/([0-9]+)$', update_business_handler),
    ('DELETE', r'^/v1/businesses/([0-9]+)$', delete_business_handler),
    ('GET', r'^/v1/businesses/([0-9]+)/youth$', list_members_handler),
    ('POST', r'^/v1/businesses/([0-9]+)/youth$', add_member_handler),
    ('DELETE', r'^/v1/businesses/([0-9]+)/youth/([0-9]+)$', remove_member_handler),
    ('POST', r'^/v1/businesses/([0-9]+)/tracking$', create_tracking_handler),
    ('GET', r'^/v1/businesses/([0-9]+)/tracking$', list_tracking_handler),
    ('PATCH', r'^/v1/business-tracking/([0-9]+)$', update_tracking_handler),
    ('POST', r'^/v1/business-tracking/([0-9]+)/verify$', verify_tracking_handler),
    ('DELETE', r'^/v1/business-tracking/([0-9]+)$', delete_tracking_handler),

    ('POST', r'^/v1/mentors$', create_mentor_handler),
    ('GET', r'^/v1/mentors$', list_mentors_handler),
    ('GET', r'^/v1/mentors/([0-9]+)$', get_mentor_handler),
    ('PATCH', r'^/v1/mentors/([0-9]+)$', update_mentor_handler),
    ('DELETE', r'^/v1/mentors/([0-9]+)$', delete_mentor_handler),
    ('GET', r'^/v1/mentors/([0-9]+)/businesses$', list_assignments_handler),
    ('POST', r'^/v1/mentors/([0-9]+)/businesses$', assign_business_handler),
    ('DELETE', r'^/v1/mentors/([0-9]+)/businesses/([0-9]+)$', unassign_business_handler),

    ('POST', r'^/v1/youth-profiles/([0-9]+)/certifications$', create_certification_handler),
    ('GET', r'^/v1/youth-profiles/([0-9]+)/certifications$', list_certifications_handler),
    ('PUT', r'^/v1/youth-profiles/([0-9]+)/certifications$', replace_certifications_handler),
    ('GET', r'^/v1/certifications/([0-9]+)$', get_certification_handler),
    ('PATCH', r'^/v1/certifications/([0-9]+)$', update_certification_handler),
    ('DELETE', r'^/v1/certifications/([0-9]+)$', delete_certification_handler),

    ('POST', r'^/v1/skills$', create_skill_handler),
    ('GET', r'^/v1/skills$', list_skills_handler),
    ('GET', r'^/v1/skills/([0-9]+)$', get_skill_handler),
    ('PATCH', r'^/v1/skills/([0-9]+)$', update_skill_handler),
    ('DELETE', r'^/v1/skills/([0-9]+)$', delete_skill_handler),
    ('POST', r'^/v1/youth-profiles/([0-9]+)/skills$', add_youth_skill_handler),
    ('GET', r'^/v1/youth-profiles/([0-9]+)/skills$', list_youth_skills_handler),
    ('PUT', r'^/v1/youth-profiles/([0-9]+)/skills$', replace_youth_skills_handler),
    ('PATCH', r'^/v1/youth-profiles/([0-9]+)/skills/([0-9]+)$', update_youth_skill_handler),
    ('DELETE', r'^/v1/youth-profiles/([0-9]+)/skills/([0-9]+)$', remove_youth_skill_handler),

    ('POST', r'^/v1/makerspaces$', create_makerspace_handler),
    ('GET', r'^/v1/makerspaces$', list_makerspaces_handler),
    ('GET', r'^/v1/makerspaces/([0-9]+)$', get_makerspace_handler),
    ('PATCH', r'^/v1/makerspaces/([0-9]+)$', update_makerspace_handler),
    ('DELETE', r'^/v1/makerspaces/([0-9]+)$', delete_makerspace_handler),
    ('GET', r'^/v1/makerspaces/([0-9]+)/businesses$', list_makerspace_businesses_handler),
    ('POST', r'^/v1/businesses/([0-9]+)/makerspace-assignments$', assign_makerspace_handler),
    ('GET', r'^/v1/businesses/([0-9]+)/makerspace-assignments$', list_business_makerspaces_handler),
    ('PATCH', r'^/v1/makerspace-assignments/([0-9]+)$', update_makerspace_assignment_handler),
    ('DELETE', r'^/v1/makerspace-assignments/([0-9]+)$', remove_makerspace_assignment_handler),

    ('POST', r'^/v1/feasibility-assessments$', create_assessment_handler),
    ('GET', r'^/v1/feasibility-assessments$', list_assessments_handler),
    ('GET', r'^/v1/feasibility-assessments/([0-9]+)$', get_assessment_handler),
    ('PATCH', r'^/v1/feasibility-assessments/([0-9]+)$', update_assessment_handler),
    ('DELETE', r'^/v1/feasibility-assessments/([0-9]+)$', delete_assessment_handler),
    ('POST', r'^/v1/feasibility-assessments/([0-9]+)/submit$', submit_assessment_handler),
    ('POST', r'^/v1/feasibility-assessments/([0-9]+)/review$', review_assessment_handler),

    ('POST', r'^/v1/mentorship-messages$', send_message_handler),
    ('GET', r'^/v1/mentorship-messages$', list_messages_handler),
    ('POST', r'^/v1/mentorship-messages/([0-9]+)/read$', mark_message_read_handler),
    ('POST', r'^/v1/business-advice$', create_advice_handler),
    ('GET', r'^/v1/business-advice$', list_advice_handler),
    ('GET', r'^/v1/business-advice/([0-9]+)$', get_advice_handler),
    ('PATCH', r'^/v1/business-advice/([0-9]+)$', update_advice_handler),
    ('DELETE', r'^/v1/business-advice/([0-9]+)$', delete_advice_handler),

    ('GET', r'^/v1/dashboard/stats$', dashboard_stats_handler),
]

# --------------------------------------------------------------------------
## 서버 실행
# --------------------------------------------------------------------------

if __name__ == "__main__":
    config.configure_logging()
    try:
        with make_server(config.SERVER_HOST, config.SERVER_PORT, application) as httpd:
            logger.info("Serving DARE tracker on port %d...", config.SERVER_PORT)
            httpd.serve_forever()
    except Exception as e:
        print(f"Error starting server: {e}", file=sys.stderr)
