from .base import BaseModel, TypedBaseModel

__all__ = [
    "BaseModel",
    "TypedBaseModel",
]
