import typing

import ujson

type JsonScalar = str | int | float | bool | None
type JsonValue = JsonScalar | list[JsonValue] | dict[str, JsonValue]


def dumps_str(obj: typing.Any) -> str:
    # urls are stored unescaped
    return ujson.dumps(obj, escape_forward_slashes=False)


def loads_str(raw: str | bytes) -> JsonValue:
    return ujson.loads(raw)


__all__ = [
    "JsonScalar",
    "JsonValue",
    "dumps_str",
    "loads_str",
]
