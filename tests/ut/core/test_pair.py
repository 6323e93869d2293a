import pytest

from stowage.core.codec.pair import Pair, Tuple
from stowage.core.codec.primitive import Bool, Text, UInt16, UInt32
from stowage.core.codec.sequence import Vector
from stowage.core.errors import ShapeError
from tests.utils import count, native


@pytest.mark.ut
def test_pair_writes_first_then_second(buffer):
    shape = Pair(UInt32, Text())
    shape.encode(buffer, (5, "five"))

    assert buffer.getvalue() == native("I", 5) + count(4) + b"five"
    assert shape.decode(buffer) == (5, "five")


@pytest.mark.ut
def test_pair_of_containers(buffer):
    shape = Pair(Vector(UInt16), Vector(Text()))
    value = ([1, 2], ["a"])
    shape.encode(buffer, value)

    assert shape.decode(buffer) == value


@pytest.mark.ut
def test_pair_accepts_list(buffer):
    Pair(UInt16, UInt16).encode(buffer, [1, 2])

    assert Pair(UInt16, UInt16).decode(buffer) == (1, 2)


@pytest.mark.ut
@pytest.mark.parametrize("value", [(1,), (1, 2, 3), 7])
def test_pair_rejects_wrong_arity(buffer, value):
    with pytest.raises(ShapeError):
        Pair(UInt16, UInt16).encode(buffer, value)


@pytest.mark.ut
def test_tuple_of_three(buffer):
    shape = Tuple(UInt32, Bool, Text())
    shape.encode(buffer, (1, False, "x"))

    assert shape.decode(buffer) == (1, False, "x")
    assert shape.name == "tuple<u32, bool, text>"


@pytest.mark.ut
def test_tuple_needs_components():
    with pytest.raises(ShapeError):
        Tuple()
