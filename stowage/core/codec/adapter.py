"""
Single-ended adapters: stack, queue and priority queue.

All three are written as `[u64 count]` followed by their elements in pop
order. The elements are read through the adapter's `snapshot()`, so
encoding never pops anything and the source adapter is left exactly as it
was. Decoding rebuilds an adapter whose pop order matches the stream.
"""
from typing import Any

from stowage.core.buffer import ByteBuffer
from stowage.core.codec.primitive import read_count, write_count
from stowage.core.errors import ShapeError
from stowage.core.models.adapters import FifoQueue, LifoStack, PriorityQueue
from stowage.core.ports.shape import Shape


class _Adapter:
    kind: str
    container: type

    def __init__(self, element: Shape) -> None:
        self.element = element
        self.name = f"{self.kind}<{element.name}>"

    def encode(self, buffer: ByteBuffer, value: Any) -> None:
        if not isinstance(value, self.container):
            raise ShapeError(
                f"{self.name} expects a {self.container.__name__}, got {type(value).__name__}"
            )
        items = value.snapshot()
        buffer.log("write", self.name, f"data size: {len(items)}")
        write_count(buffer, len(items))
        for item in items:
            self.element.encode(buffer, item)

    def decode(self, buffer: ByteBuffer) -> Any:
        size = read_count(buffer)
        buffer.log("read", self.name, f"data size: {size}")
        items = [self.element.decode(buffer) for _ in range(size)]
        return self.rebuild(items)

    def rebuild(self, items: list[Any]) -> Any:
        result = self.container()
        for item in items:
            result.push(item)
        return result

    def __repr__(self) -> str:
        return self.name


class Stack(_Adapter):
    kind = "stack"
    container = LifoStack

    def rebuild(self, items: list[Any]) -> LifoStack:
        # Stream holds the top first; push bottom-up.
        result = LifoStack()
        for item in reversed(items):
            result.push(item)
        return result


class Queue(_Adapter):
    kind = "queue"
    container = FifoQueue


class PriorityQueueOf(_Adapter):
    kind = "priority_queue"
    container = PriorityQueue
