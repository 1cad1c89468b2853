import logging
import uuid
from datetime import datetime, timedelta
from typing import Dict, Any, List, Optional

from dare_tracker import config
from dare_tracker.database import models
from dare_tracker.database.choices import DEFAULT_USER_ROLE
from dare_tracker.repositories.interfaces import IUserRepository, IRoleRepository
from dare_tracker.services.exceptions import (
    UserCreationError, UserNotFoundError, RoleNotFoundError,
    AuthenticationError, TokenInvalidError
)
from dare_tracker.utils.model_utils import apply_fields
from dare_tracker.utils.passwords import hash_password, verify_password
from dare_tracker.utils.validation import normalize_district

logger = logging.getLogger(__name__)

USER_UPDATABLE_FIELDS = ("email", "full_name", "role", "district", "is_active")


def _user_to_dict(user: models.User) -> Dict[str, Any]:
    return {
        "id": user.id,
        "username": user.username,
        "full_name": user.full_name,
        "email": user.email,
        "role": user.role,
        "district": user.district,
        "is_active": user.is_active,
        "last_login": user.last_login.isoformat() if user.last_login else None,
    }


class IdentityService:
    """사용자 계정, 인증, 토큰 등 신원 관리 서비스를 제공합니다."""
    _token_cache = {}

    def __init__(self, user_repo: IUserRepository, role_repo: IRoleRepository):
        """
        IdentityService를 초기화합니다.

        Args:
            user_repo: 사용자 데이터에 접근하기 위한 리포지토리.
            role_repo: 역할 데이터에 접근하기 위한 리포지토리 (역할 할당 검증용).
        """
        self.user_repo = user_repo
        self.role_repo = role_repo

    def _require_role(self, role_name: str):
        if not self.role_repo.find_by_name(role_name):
            raise RoleNotFoundError(f"Role '{role_name}' not found.")

    def _get_user_model(self, user_id: int) -> models.User:
        user = self.user_repo.find_by_id(user_id)
        if not user:
            raise UserNotFoundError(f"User with id '{user_id}' not found.")
        return user

    def create_user(self, username: str, password: str, full_name: str, role: str = DEFAULT_USER_ROLE,
                    email: Optional[str] = None, district: Optional[str] = None) -> Dict[str, Any]:
        """
        새로운 사용자를 생성합니다. 비밀번호는 해시하여 저장합니다.

        Raises:
            ValueError: 필수 값이 비어 있거나 지역이 올바르지 않을 때.
            UserCreationError: 동일한 이름의 사용자가 이미 존재할 때.
            RoleNotFoundError: 할당하려는 역할이 존재하지 않을 때.
        """
        if not username or not password or not full_name:
            raise ValueError("username, password and full_name are required.")
        if self.user_repo.find_by_username(username):
            raise UserCreationError(f"User with username '{username}' already exists.")
        self._require_role(role)

        new_user = models.User(
            username=username,
            password_hash=hash_password(password),
            full_name=full_name,
            email=email,
            role=role,
            district=normalize_district(district),
            is_active=True
        )
        created_user = self.user_repo.create(new_user)
        logger.info("User '%s' created with role '%s'", username, role)
        return _user_to_dict(created_user)

    def list_users(self) -> List[Dict[str, Any]]:
        """모든 사용자의 목록을 조회합니다. (비밀번호 제외)"""
        return [_user_to_dict(u) for u in self.user_repo.list_all()]

    def get_user(self, user_id: int) -> Dict[str, Any]:
        """
        ID로 특정 사용자를 조회합니다. (비밀번호 제외)

        Raises:
            UserNotFoundError: 해당 ID의 사용자를 찾을 수 없을 때.
        """
        return _user_to_dict(self._get_user_model(user_id))

    def update_user(self, user_id: int, password: Optional[str] = None, **changes) -> Dict[str, Any]:
        """
        사용자 정보를 수정합니다. password가 주어지면 새로 해시하여 저장합니다.

        Raises:
            UserNotFoundError: 해당 ID의 사용자를 찾을 수 없을 때.
            RoleNotFoundError: 변경하려는 역할이 존재하지 않을 때.
            ValueError: 수정할 수 없는 필드가 포함되었을 때.
        """
        user = self._get_user_model(user_id)
        if "role" in changes:
            self._require_role(changes["role"])
        if "district" in changes:
            changes["district"] = normalize_district(changes["district"])

        apply_fields(user, changes, allowed=USER_UPDATABLE_FIELDS)
        if password:
            user.password_hash = hash_password(password)
        return _user_to_dict(self.user_repo.update(user))

    def delete_user(self, user_id: int) -> bool:
        """
        사용자를 삭제합니다.

        Raises:
            UserNotFoundError: 해당 ID의 사용자를 찾을 수 없을 때.
        """
        user = self._get_user_model(user_id)
        self.user_repo.delete(user)
        return True

    def authenticate(self, username: str, password: str) -> Dict[str, str]:
        """
        자격증명을 검증하고, 성공 시 인증 토큰을 발급합니다.

        Raises:
            AuthenticationError: 사용자가 없거나, 비밀번호가 틀리거나, 비활성 계정일 때.
        """
        user = self.user_repo.find_by_username(username)
        if not user or not verify_password(password or "", user.password_hash):
            logger.warning("Failed login attempt for '%s'", username)
            raise AuthenticationError("Invalid username or password.")

        if not user.is_active:
            raise AuthenticationError(f"User '{username}' is inactive.")

        user.last_login = datetime.now()
        self.user_repo.update(user)

        token = str(uuid.uuid4())
        expires_at = datetime.now() + timedelta(hours=config.TOKEN_TTL_HOURS)
        self._token_cache[token] = {
            'user_id': user.id,
            'expires_at': expires_at
        }
        return {"token": token, "expires_at": expires_at.isoformat(), "role": user.role}

    def validate_token(self, token: str) -> Dict[str, Any]:
        """
        인증 토큰의 유효성을 검증하고, 유효하면 토큰 데이터를 반환합니다.

        Raises:
            TokenInvalidError: 토큰을 찾을 수 없거나 만료되었을 때.
        """
        token_data = self._token_cache.get(token)
        if not token_data:
            raise TokenInvalidError("Token not found or invalid.")

        if datetime.now() > token_data['expires_at']:
            del self._token_cache[token]
            raise TokenInvalidError("Token has expired.")

        return token_data

    def get_active_user(self, token: str) -> Dict[str, Any]:
        """
        토큰의 사용자를 현재 DB 상태로 조회합니다.
        역할이 바뀌었거나 비활성화된 경우를 요청마다 반영하기 위함입니다.

        Raises:
            TokenInvalidError: 토큰이 유효하지 않거나, 사용자가 삭제/비활성화되었을 때.
        """
        token_data = self.validate_token(token)
        user = self.user_repo.find_by_id(token_data['user_id'])
        if not user or not user.is_active:
            self._token_cache.pop(token, None)
            raise TokenInvalidError("Token user no longer exists or is inactive.")
        return _user_to_dict(user)
