from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema: camelCase aliases on the wire, snake_case attributes in code."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        # model_id / model_year are domain fields, not pydantic internals
        protected_namespaces=(),
    )
