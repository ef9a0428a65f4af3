import pydantic
import pydantic.fields


class BaseModel(pydantic.BaseModel): ...


class TypedBaseModel(BaseModel):
    type_name: str = pydantic.fields.Field(alias="type")

    model_config = pydantic.ConfigDict(populate_by_name=True)


__all__ = [
    "BaseModel",
    "TypedBaseModel",
]
