"""Base class for MongoDB document models."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Document(BaseModel):
    """A MongoDB document with camelCase keys and snake_case attributes.

    ``model_validate`` accepts raw documents straight from the driver;
    ``to_mongo`` produces the dict to insert.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        arbitrary_types_allowed=True,
        use_enum_values=True,
    )

    def to_mongo(self) -> dict:
        return self.model_dump(by_alias=True)
