from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


# Bumped only for breaking changes to a response body
SCHEMA_VERSION = 1


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case accepted on input"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class VersionedResponse(CamelModel):
    schema_version: int = SCHEMA_VERSION
