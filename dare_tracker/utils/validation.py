# dare_tracker/utils/validation.py
from typing import Any, Dict, Iterable, Mapping, Optional

from dare_tracker.database.choices import DISTRICTS


def normalize_district(value: Optional[str]) -> Optional[str]:
    """', Ghana' 접미사를 제거하고 알려진 지역인지 확인합니다."""
    if value is None or value == "":
        return None
    district = value.replace(", Ghana", "").strip()
    if district not in DISTRICTS:
        raise ValueError(f"District must be one of: {', '.join(DISTRICTS)}")
    return district


def require_choice(field: str, value: Any, choices: Iterable[str]) -> Any:
    if value is None or value == "":
        return None
    if value not in choices:
        raise ValueError(f"Invalid {field} '{value}'. Expected one of: {', '.join(choices)}")
    return value


def validate_choices(data: Dict[str, Any], choice_fields: Mapping[str, Iterable[str]]) -> Dict[str, Any]:
    """
    data에 포함된 열거형 필드를 검증하고, district는 정규화합니다.
    원본 딕셔너리를 수정하지 않고 새 딕셔너리를 반환합니다.
    """
    cleaned = dict(data)
    if "district" in cleaned:
        cleaned["district"] = normalize_district(cleaned["district"])
    for field, choices in choice_fields.items():
        if field in cleaned:
            cleaned[field] = require_choice(field, cleaned[field], choices)
    return cleaned


def require_rating(field: str, value: Any) -> Optional[int]:
    """1~5 범위의 평가 점수를 검증합니다."""
    if value is None:
        return None
    rating = int(value)
    if not 1 <= rating <= 5:
        raise ValueError(f"{field} must be between 1 and 5.")
    return rating


def require_range(field: str, value: Any, low: int, high: Optional[int] = None) -> Optional[int]:
    """정수 값이 [low, high] 범위에 있는지 검증합니다. high가 없으면 하한만 검사합니다."""
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValueError(f"{field} must be a number.")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{field} must be a number.")
    if number < low or (high is not None and number > high):
        bounds = f"between {low} and {high}" if high is not None else f"at least {low}"
        raise ValueError(f"{field} must be {bounds}.")
    return number
