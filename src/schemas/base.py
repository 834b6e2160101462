from typing import Any, Mapping, Type, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from src.services.exceptions import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


class RequestModel(BaseModel):
    """요청 본문. JSON 키는 camelCase, 문자열은 앞뒤 공백을 제거합니다."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )


class ResponseModel(BaseModel):
    """응답 레코드. camelCase 키로 직렬화됩니다."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)


def parse_payload(model_cls: Type[ModelT], payload: Any) -> ModelT:
    """
    요청 본문을 스키마로 검증합니다. 이미 검증된 모델이면 그대로 반환합니다.

    Raises:
        ValidationError: 본문이 객체가 아니거나, 필수 필드가 없거나, 형식이 틀렸을 때.
    """
    if isinstance(payload, model_cls):
        return payload
    if payload is None:
        payload = {}
    if not isinstance(payload, Mapping):
        raise ValidationError("Request body must be a JSON object.")
    try:
        return model_cls.model_validate(payload)
    except PydanticValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'body'}: {err['msg']}"
            for err in e.errors()
        )
        raise ValidationError(f"Invalid request: {details}") from e
