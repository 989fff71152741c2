from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Attributes stay snake_case in Python; JSON in and out uses camelCase,
    which is also the shape stored in each collection.
    """

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
