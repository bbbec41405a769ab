from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ValueObject(BaseModel):
    model_config = ConfigDict(frozen=True)


class StoredModel(BaseModel):
    """Base for entities persisted as JSON documents in a slot.

    Attributes are snake_case in Python and camelCase in storage. Unknown keys
    found in storage are kept so they survive a load/persist cycle.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
        extra="allow",
    )

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
