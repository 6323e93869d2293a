import collections
import dataclasses
from typing import Any

from stowage.core.codec.adapter import PriorityQueueOf, Queue, Stack
from stowage.core.codec.associative import FrozenSet, Map, MultiSet, Set
from stowage.core.codec.pair import Tuple
from stowage.core.codec.primitive import Bool, Bytes, Float64, Int64, Text
from stowage.core.codec.record import Custom, Record
from stowage.core.codec.sequence import Deque, Vector
from stowage.core.errors import ShapeError
from stowage.core.models.adapters import FifoQueue, LifoStack, PriorityQueue
from stowage.core.ports.shape import Serializable, Shape


def _first(value: Any, what: str) -> Any:
    for item in value:
        return item
    raise ShapeError(f"Cannot infer the element shape of an empty {what}; pass a shape")


def infer_shape(value: Any) -> Shape:
    """
    Guess a shape from a Python value.

    Integers map to Int64 and floats to Float64. A tuple becomes a `Tuple`
    of its components, one shape each, so `(1, "a")` encodes like a pair.
    Other container element shapes are inferred from their first element,
    which must therefore exist.
    Decoding always needs an explicit shape; inference only helps the
    encoding side.
    """
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return Bool
    if isinstance(value, int):
        return Int64
    if isinstance(value, float):
        return Float64
    if isinstance(value, str):
        return Text()
    if isinstance(value, (bytes, bytearray)):
        return Bytes()

    if isinstance(value, LifoStack):
        return Stack(infer_shape(_first(value.snapshot(), "stack")))
    if isinstance(value, FifoQueue):
        return Queue(infer_shape(_first(value.snapshot(), "queue")))
    if isinstance(value, PriorityQueue):
        return PriorityQueueOf(infer_shape(_first(value.snapshot(), "priority queue")))

    # Counter before dict: Counter is a dict subclass
    if isinstance(value, collections.Counter):
        return MultiSet(infer_shape(_first(value, "multiset")))
    if isinstance(value, dict):
        key, item = _first(value.items(), "map")
        return Map(infer_shape(key), infer_shape(item))
    if isinstance(value, frozenset):
        return FrozenSet(infer_shape(_first(value, "frozenset")))
    if isinstance(value, set):
        return Set(infer_shape(_first(value, "set")))
    if isinstance(value, collections.deque):
        return Deque(infer_shape(_first(value, "deque")))
    if isinstance(value, tuple):
        return Tuple(*(infer_shape(item) for item in value))
    if isinstance(value, list):
        return Vector(infer_shape(_first(value, "list")))

    if isinstance(value, Serializable):
        return Custom(type(value))
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return Record(type(value))

    raise ShapeError(f"No shape known for values of type {type(value).__name__}")
