# dare_tracker/config.py
import logging
import os

from dotenv import load_dotenv

# 프로젝트 루트의 .env 파일이 있으면 환경 변수로 불러옵니다.
load_dotenv()

DATABASE_URL = os.environ.get("DARE_DATABASE_URL", "sqlite:///dare_tracker.db")

SERVER_HOST = os.environ.get("DARE_HOST", "")
SERVER_PORT = int(os.environ.get("DARE_PORT", "8000"))

# 인증 토큰 유효 시간 (시간 단위)
TOKEN_TTL_HOURS = int(os.environ.get("DARE_TOKEN_TTL_HOURS", "1"))

LOG_LEVEL = os.environ.get("DARE_LOG_LEVEL", "INFO").upper()

# 빈 DB 초기화 시 생성되는 관리자 계정
ADMIN_USERNAME = os.environ.get("DARE_ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.environ.get("DARE_ADMIN_PASSWORD", "admin")


def configure_logging(level: str = None):
    """루트 로거를 설정합니다. 서버와 스크립트의 진입점에서 한 번 호출합니다."""
    logging.basicConfig(
        level=getattr(logging, level or LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
