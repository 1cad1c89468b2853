# dare_tracker/utils/model_utils.py
from datetime import date, datetime
from typing import Any, Dict, Iterable, Optional

from sqlalchemy import Boolean, Date, DateTime, Integer


def model_to_dict(model, exclude: Iterable[str] = ()) -> Dict[str, Any]:
    """
    SQLAlchemy 모델 인스턴스를 JSON 직렬화 가능한 딕셔너리로 변환합니다.
    date/datetime 값은 ISO 8601 문자열로 바뀝니다.
    """
    result = {}
    for column in model.__table__.columns:
        if column.name in exclude:
            continue
        value = getattr(model, column.name)
        if isinstance(value, (date, datetime)):
            value = value.isoformat()
        result[column.name] = value
    return result


def coerce_value(column, value: Any) -> Any:
    """
    JSON에서 들어온 값을 컬럼 타입에 맞게 변환합니다.

    Raises:
        ValueError: 값이 컬럼 타입으로 변환될 수 없을 때.
    """
    if value is None or value == "":
        return None
    column_type = column.type
    if isinstance(column_type, (Date, DateTime)) and not isinstance(value, (str, date)):
        raise ValueError(f"Invalid value for '{column.name}': {value!r}")
    try:
        if isinstance(column_type, DateTime):
            if isinstance(value, str):
                return datetime.fromisoformat(value)
            if not isinstance(value, datetime):
                return datetime(value.year, value.month, value.day)
            return value
        if isinstance(column_type, Date):
            if isinstance(value, str):
                return date.fromisoformat(value[:10])
            return value.date() if isinstance(value, datetime) else value
        if isinstance(column_type, Boolean) and not isinstance(value, bool):
            if isinstance(value, str):
                return value.strip().lower() in ("true", "yes", "1", "y")
            return bool(value)
        if isinstance(column_type, Integer) and not isinstance(value, int):
            return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid value for '{column.name}': {value!r}")
    return value


def apply_fields(model, data: Dict[str, Any], allowed: Optional[Iterable[str]] = None):
    """
    딕셔너리의 값을 모델 속성에 반영합니다.

    Args:
        model: 값을 반영할 모델 인스턴스.
        data: 필드 이름과 값의 딕셔너리.
        allowed: 수정 가능한 필드 이름. None이면 id와 타임스탬프를 제외한 모든 컬럼.

    Raises:
        ValueError: 알 수 없거나 수정할 수 없는 필드가 포함되었을 때.
    """
    columns = {c.name: c for c in model.__table__.columns}
    if allowed is None:
        allowed = set(columns) - {"id", "created_at", "updated_at"}
    allowed = set(allowed)

    unknown = sorted(set(data) - allowed)
    if unknown:
        raise ValueError(f"Unknown or read-only fields: {', '.join(unknown)}")

    for name, value in data.items():
        setattr(model, name, coerce_value(columns[name], value))
    return model
