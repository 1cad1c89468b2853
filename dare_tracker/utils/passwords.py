# dare_tracker/utils/passwords.py
import hashlib
import hmac
import secrets

# scrypt 파라미터 (N=16384, r=8, p=1, 64바이트)
SCRYPT_N = 16384
SCRYPT_R = 8
SCRYPT_P = 1
KEY_LENGTH = 64


def _derive(password: str, salt: str) -> bytes:
    return hashlib.scrypt(
        password.encode('utf-8'),
        salt=salt.encode('utf-8'),
        n=SCRYPT_N, r=SCRYPT_R, p=SCRYPT_P, dklen=KEY_LENGTH,
    )


def hash_password(password: str) -> str:
    """
    비밀번호를 솔트와 함께 scrypt로 해시합니다.

    Returns:
        '<hex 해시>.<솔트>' 형식의 문자열.
    """
    salt = secrets.token_hex(16)
    return f"{_derive(password, salt).hex()}.{salt}"


def verify_password(password: str, stored: str) -> bool:
    """저장된 '<hex 해시>.<솔트>' 값과 비밀번호를 상수 시간에 비교합니다."""
    if not stored or '.' not in stored:
        return False
    hashed, salt = stored.split('.', 1)
    if not hashed or not salt:
        return False
    try:
        expected = bytes.fromhex(hashed)
    except ValueError:
        return False
    return hmac.compare_digest(expected, _derive(password, salt))
