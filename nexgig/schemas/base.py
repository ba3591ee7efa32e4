from datetime import datetime
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from nexgig.core.clock import as_utc


class CamelModel(BaseModel):
    """Snake case in Python, camelCase on the wire. Accepts either on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class OkResponse(BaseModel):
    ok: bool = True


def to_epoch_ms(value: datetime) -> int:
    return int(as_utc(value).timestamp() * 1000)
