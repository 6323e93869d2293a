import collections

import pytest

from stowage.core.codec.primitive import Bool, Text, UInt8, UInt32, UInt64
from stowage.core.codec.sequence import BoolVector, Deque, FixedArray, Vector
from stowage.core.errors import BufferUnderflowError, ShapeError
from tests.utils import count, native


@pytest.mark.ut
def test_vector_scenario(buffer):
    shape = Vector(UInt32)
    shape.encode(buffer, [10, 20, 30])

    assert shape.decode(buffer) == [10, 20, 30]


@pytest.mark.ut
def test_vector_wire_layout(buffer):
    Vector(UInt32).encode(buffer, [10, 20, 30])

    assert buffer.getvalue() == count(3) + native("III", 10, 20, 30)


@pytest.mark.ut
@pytest.mark.parametrize("shape,width", [(UInt8, 1), (UInt32, 4), (UInt64, 8)])
@pytest.mark.parametrize("n", [0, 1, 7])
def test_count_prefix_law(buffer, shape, width, n):
    Vector(shape).encode(buffer, list(range(n)))

    assert len(buffer) == 8 + n * width


@pytest.mark.ut
def test_empty_vector(buffer):
    Vector(Text()).encode(buffer, [])

    assert buffer.getvalue() == count(0)
    assert Vector(Text()).decode(buffer) == []


@pytest.mark.ut
def test_vector_accepts_tuples_and_generators(buffer):
    shape = Vector(UInt8)
    shape.encode(buffer, (1, 2))
    shape.encode(buffer, (i for i in range(3)))

    assert shape.decode(buffer) == [1, 2]
    assert shape.decode(buffer) == [0, 1, 2]


@pytest.mark.ut
def test_vector_factory(buffer):
    shape = Vector(UInt8, factory=tuple)
    shape.encode(buffer, [4, 5])

    assert shape.decode(buffer) == (4, 5)


@pytest.mark.ut
def test_nested_vectors(buffer):
    shape = Vector(Vector(Text()))
    value = [["a", "b"], [], ["c"]]
    shape.encode(buffer, value)

    assert shape.decode(buffer) == value
    assert shape.name == "vector<vector<text>>"


@pytest.mark.ut
@pytest.mark.parametrize("value", ["abc", b"abc", 5, None])
def test_vector_rejects_non_sequences(buffer, value):
    with pytest.raises(ShapeError):
        Vector(UInt8).encode(buffer, value)


@pytest.mark.ut
def test_vector_truncated_elements(buffer):
    buffer.append(count(3) + native("I", 1))

    with pytest.raises(BufferUnderflowError):
        Vector(UInt32).decode(buffer)


@pytest.mark.ut
def test_bool_vector_is_one_byte_per_flag_with_single_count(buffer):
    flags = [True, False, True, True]
    BoolVector().encode(buffer, flags)

    assert buffer.getvalue() == count(4) + b"\x01\x00\x01\x01"
    assert BoolVector().decode(buffer) == flags


@pytest.mark.ut
def test_bool_vector_equals_generic_vector_of_bool(buffer):
    BoolVector().encode(buffer, [False, True])
    Vector(Bool).encode(buffer, [False, True])

    data = buffer.getvalue()
    assert data[:len(data) // 2] == data[len(data) // 2:]


@pytest.mark.ut
def test_deque_round_trip(buffer):
    value = collections.deque(["x", "y", "z"])
    Deque(Text()).encode(buffer, value)

    result = Deque(Text()).decode(buffer)

    assert isinstance(result, collections.deque)
    assert result == value


@pytest.mark.ut
def test_deque_and_vector_share_wire_format(buffer):
    Deque(UInt8).encode(buffer, collections.deque([1, 2]))

    assert Vector(UInt8).decode(buffer) == [1, 2]


@pytest.mark.ut
def test_fixed_array_has_no_count(buffer):
    shape = FixedArray(UInt32, 3)
    shape.encode(buffer, [7, 8, 9])

    assert buffer.getvalue() == native("III", 7, 8, 9)
    assert shape.decode(buffer) == [7, 8, 9]


@pytest.mark.ut
def test_fixed_array_of_text(buffer):
    shape = FixedArray(Text(), 2)
    shape.encode(buffer, ("left", "right"))

    assert shape.decode(buffer) == ["left", "right"]


@pytest.mark.ut
@pytest.mark.parametrize("value", [[1, 2], [1, 2, 3, 4]])
def test_fixed_array_rejects_wrong_length(buffer, value):
    with pytest.raises(ShapeError):
        FixedArray(UInt8, 3).encode(buffer, value)
    assert len(buffer) == 0


@pytest.mark.ut
def test_fixed_array_negative_length():
    with pytest.raises(ShapeError):
        FixedArray(UInt8, -1)
