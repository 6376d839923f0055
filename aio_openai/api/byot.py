"""
Bring-your-own-type support.

Resource methods are written once, against the library's own request and
response models, and decorated with ``@byot``. The decorator keeps the method
as the *concrete* variant and registers a generic twin named
``<method>_byot`` on the same class. Both variants run the same method body:

* the concrete variant validates mapping arguments into the annotated models
  and deserializes the response into the annotated return type;
* the generic twin passes arguments through untouched, checks them against
  the capability bounds given to the decorator, and deserializes the response
  into whatever ``response_model`` the caller supplies.

Example::

    class Models(Resource):
        @byot(T0=Display)
        async def retrieve(self, model: str, *, response_model: Any = None) -> Model:
            return await self._client.get(f"/models/{model}", self.request_options,
                                          response_model=response_model)

    await client.models.retrieve("gpt-4o")                           # -> Model
    await client.models.retrieve_byot("gpt-4o", response_model=dict)  # -> dict
"""

import collections.abc
import dataclasses
import functools
import inspect
import logging
import typing
import uuid
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Union

from pydantic import BaseModel, PydanticUserError, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from ..errors import InvalidArgumentError, map_deserialization_error

logger = logging.getLogger(__name__)

RESPONSE_MODEL_PARAM = "response_model"


class Capability:
    """A named runtime check standing in for a type bound."""

    def __init__(self, name: str, check: Callable[[Any], bool]):
        self.name = name
        self._check = check

    def __call__(self, value: Any) -> bool:
        return bool(self._check(value))

    def __repr__(self) -> str:
        return f"Capability({self.name})"


def _is_display(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, (str, int, float, uuid.UUID, Enum)):
        return True
    return type(value).__str__ is not object.__str__


def _is_serializable(value: Any) -> bool:
    if value is None or isinstance(value, (str, int, float, bool, Enum, BaseModel)):
        return True
    if isinstance(value, (Mapping, list, tuple)):
        return True
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return True
    return callable(getattr(value, "model_dump", None)) or callable(getattr(value, "to_dict", None))


def _is_form_convertible(value: Any) -> bool:
    return callable(getattr(value, "to_form", None)) or isinstance(value, Mapping)


def _is_deserializable(response_model: Any) -> bool:
    if response_model is None:
        return False
    try:
        _adapter(response_model)
    except InvalidArgumentError:
        return False
    return True


Display = Capability("Display", _is_display)
Serializable = Capability("Serializable", _is_serializable)
FormConvertible = Capability("FormConvertible", _is_form_convertible)
Deserializable = Capability("Deserializable", _is_deserializable)

Bound = Union[Capability, type, Callable[[Any], bool]]


def to_jsonable(value: Any) -> Any:
    """
    Convert a request object into JSON-compatible data.

    Pydantic models drop unset (None) fields; objects exposing ``to_dict()``
    are converted through it.

    Raises:
        InvalidArgumentError: If the value cannot be serialized
    """
    if not isinstance(value, BaseModel) and callable(getattr(value, "to_dict", None)):
        value = value.to_dict()
    try:
        return to_jsonable_python(value, by_alias=True, exclude_none=True)
    except PydanticSerializationError as e:
        raise InvalidArgumentError(f"cannot serialize {type(value).__name__}: {e}") from e


def _adapter(response_model: Any) -> TypeAdapter:
    try:
        return _cached_adapter(response_model)
    except TypeError:
        # unhashable type expression
        return _build_adapter(response_model)


@functools.lru_cache(maxsize=None)
def _cached_adapter(response_model: Any) -> TypeAdapter:
    return _build_adapter(response_model)


def _build_adapter(response_model: Any) -> TypeAdapter:
    try:
        return TypeAdapter(response_model)
    except (PydanticUserError, TypeError) as e:
        raise InvalidArgumentError(f"{response_model!r} cannot be used as a response type: {e}") from e


def deserialize(content: Union[bytes, str], response_model: Any) -> Any:
    """
    Deserialize a JSON document into ``response_model``.

    Raises:
        JSONDeserializeError: If the document does not match the type
        InvalidArgumentError: If pydantic cannot validate into the type
    """
    try:
        if isinstance(response_model, type) and issubclass(response_model, BaseModel):
            return response_model.model_validate_json(content)
        return _adapter(response_model).validate_json(content)
    except ValidationError as e:
        raise map_deserialization_error(e, content) from e


def response_type_of(annotation: Any) -> Any:
    """The type a response is deserialized into: the item type for async iterators."""
    origin = typing.get_origin(annotation)
    if isinstance(origin, type) and issubclass(origin, collections.abc.AsyncIterable):
        return typing.get_args(annotation)[0]
    return annotation


def byot(func: Optional[Callable] = None, **bounds: Bound):
    """
    Register a ``<name>_byot`` generic twin for a resource method.

    Bounds are keyed ``T0``, ``T1``, ... by the position of the parameter
    (receiver excluded) and ``R`` for the response type. A bound is a
    Capability, a type (isinstance check) or a predicate.

    The decorated method must accept a keyword-only ``response_model``
    parameter and use it for deserialization.
    """
    def decorate(method: Callable) -> "_ByotMethod":
        return _ByotMethod(method, bounds)

    if func is not None:
        return decorate(func)
    return decorate


class _ByotMethod:
    """Descriptor placing the concrete method and its generic twin on the owner class."""

    def __init__(self, func: Callable, bounds: Dict[str, Bound]):
        signature = inspect.signature(func)
        if RESPONSE_MODEL_PARAM not in signature.parameters:
            raise TypeError(f"{func.__qualname__} must accept a '{RESPONSE_MODEL_PARAM}' keyword argument")
        self.func = func
        self.bounds = bounds
        self.signature = signature

    def __set_name__(self, owner: type, name: str) -> None:
        setattr(owner, name, _make_concrete(self.func, self.signature))

        twin = _make_generic(self.func, self.signature, self.bounds)
        twin.__name__ = f"{name}_byot"
        twin.__qualname__ = f"{owner.__qualname__}.{name}_byot"
        setattr(owner, twin.__name__, twin)


def _make_concrete(func: Callable, signature: inspect.Signature) -> Callable:
    hints: Dict[str, Any] = {}

    def resolved_hints() -> Dict[str, Any]:
        if not hints:
            hints.update(typing.get_type_hints(func))
        return hints

    @functools.wraps(func)
    async def concrete(self, *args, **kwargs):
        bound = signature.bind(self, *args, **kwargs)
        annotations = resolved_hints()

        for name, value in list(bound.arguments.items())[1:]:
            if name == RESPONSE_MODEL_PARAM:
                continue
            bound.arguments[name] = _coerce_argument(func, name, value, annotations.get(name))

        if bound.arguments.get(RESPONSE_MODEL_PARAM) is None:
            bound.arguments[RESPONSE_MODEL_PARAM] = response_type_of(annotations["return"])

        return await func(*bound.args, **bound.kwargs)

    return concrete


def _make_generic(func: Callable, signature: inspect.Signature, bounds: Dict[str, Bound]) -> Callable:
    positional = [
        name for name in list(signature.parameters)[1:]
        if name != RESPONSE_MODEL_PARAM
    ]

    @functools.wraps(func)
    async def generic(self, *args, response_model: Any, **kwargs):
        bound = signature.bind(self, *args, **kwargs)

        for index, name in enumerate(positional):
            check = bounds.get(f"T{index}")
            if check is not None and name in bound.arguments:
                _check_bound(func, name, bound.arguments[name], check)

        _check_bound(func, RESPONSE_MODEL_PARAM, response_model, bounds.get("R", Deserializable))

        return await func(self, *args, response_model=response_model, **kwargs)

    return generic


def _coerce_argument(func: Callable, name: str, value: Any, annotation: Any) -> Any:
    if not (isinstance(annotation, type) and issubclass(annotation, BaseModel)):
        return value
    if isinstance(value, annotation):
        return value
    if isinstance(value, Mapping):
        try:
            return annotation.model_validate(value)
        except ValidationError as e:
            raise InvalidArgumentError(f"{name}: {e}") from e
    raise InvalidArgumentError(
        f"{func.__name__}() expects {annotation.__name__} for '{name}', got {type(value).__name__}; "
        f"use {func.__name__}_byot() for custom types"
    )


def _check_bound(func: Callable, name: str, value: Any, check: Bound) -> None:
    if isinstance(check, type):
        if name == RESPONSE_MODEL_PARAM:
            satisfied = isinstance(value, type) and issubclass(value, check)
        else:
            satisfied = isinstance(value, check)
        label = check.__name__
    else:
        satisfied = check(value)
        label = getattr(check, "name", getattr(check, "__name__", repr(check)))
    if not satisfied:
        raise InvalidArgumentError(f"{func.__name__}_byot(): '{name}' does not satisfy {label}")
