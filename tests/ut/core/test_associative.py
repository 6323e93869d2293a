import collections

import pytest

from stowage.core.codec.associative import FrozenSet, Map, MultiMap, MultiSet, Set
from stowage.core.codec.pair import Pair
from stowage.core.codec.primitive import Text, UInt8, UInt32
from stowage.core.codec.sequence import Vector
from stowage.core.errors import ShapeError
from stowage.core.serializer import BinarySerializer
from tests.utils import count, native


@pytest.mark.ut
def test_set_round_trip(buffer):
    Set(UInt32).encode(buffer, {10, 20, 30})

    assert Set(UInt32).decode(buffer) == {10, 20, 30}


@pytest.mark.ut
def test_ordered_set_is_sorted_on_the_wire(buffer):
    Set(UInt32, ordered=True).encode(buffer, {30, 10, 20})

    assert buffer.getvalue() == count(3) + native("III", 10, 20, 30)


@pytest.mark.ut
def test_frozenset_round_trip(buffer):
    FrozenSet(Text()).encode(buffer, frozenset({"a", "b"}))

    result = FrozenSet(Text()).decode(buffer)
    assert isinstance(result, frozenset)
    assert result == {"a", "b"}


@pytest.mark.ut
def test_set_rejects_list(buffer):
    with pytest.raises(ShapeError):
        Set(UInt32).encode(buffer, [1, 2])


@pytest.mark.ut
def test_ordered_set_of_unorderable_values(buffer):
    with pytest.raises(ShapeError):
        Set(UInt32, ordered=True).encode(buffer, {1, "a"})


@pytest.mark.ut
def test_multiset_keeps_multiplicity(buffer):
    value = collections.Counter({10: 2, 20: 1})
    MultiSet(UInt32).encode(buffer, value)

    assert buffer.getvalue()[:8] == count(3)
    assert MultiSet(UInt32).decode(buffer) == value


@pytest.mark.ut
def test_multiset_ignores_non_positive_counts(buffer):
    value = collections.Counter({1: 2, 2: 0, 3: -1})
    MultiSet(UInt32, ordered=True).encode(buffer, value)

    assert buffer.getvalue() == count(2) + native("II", 1, 1)


@pytest.mark.ut
def test_multiset_requires_counter(buffer):
    with pytest.raises(ShapeError):
        MultiSet(UInt32).encode(buffer, {1, 2})


@pytest.mark.ut
def test_map_round_trip(buffer):
    shape = Map(Text(), Vector(UInt32))
    value = {"a": [1], "b": [], "c": [2, 3]}
    shape.encode(buffer, value)

    assert shape.decode(buffer) == value


@pytest.mark.ut
def test_map_entries_are_pairs(buffer):
    Map(UInt32, Text(), ordered=True).encode(buffer, {2: "b", 1: "a"})

    expected = count(2)
    expected += native("I", 1) + count(1) + b"a"
    expected += native("I", 2) + count(1) + b"b"
    assert buffer.getvalue() == expected


@pytest.mark.ut
def test_map_decode_keeps_first_duplicate_key(buffer):
    entry = Pair(UInt32, Text())
    buffer.append(count(2))
    entry.encode(buffer, (1, "first"))
    entry.encode(buffer, (1, "second"))

    assert Map(UInt32, Text()).decode(buffer) == {1: "first"}


@pytest.mark.ut
def test_map_rejects_non_mapping(buffer):
    with pytest.raises(ShapeError):
        Map(UInt32, UInt32).encode(buffer, [(1, 2)])


@pytest.mark.ut
def test_multimap_scenario(buffer):
    shape = MultiMap(UInt32, UInt32)
    value = {10: [1], 20: [2, 5], 30: [3]}
    shape.encode(buffer, value)

    assert buffer.getvalue()[:8] == count(4)

    result = shape.decode(buffer)
    pairs = sorted((k, v) for k, vs in result.items() for v in vs)
    assert pairs == [(10, 1), (20, 2), (20, 5), (30, 3)]
    assert len(pairs) == 4


@pytest.mark.ut
def test_multimap_keeps_duplicate_pairs(buffer):
    shape = MultiMap(Text(), UInt32, ordered=True)
    shape.encode(buffer, {"k": [7, 7]})

    assert shape.decode(buffer) == {"k": [7, 7]}


@pytest.mark.ut
@pytest.mark.parametrize("value", [{1: 2}, {1: "ab"}, [(1, [2])]])
def test_multimap_rejects_bad_groups(buffer, value):
    with pytest.raises(ShapeError):
        MultiMap(UInt32, UInt32).encode(buffer, value)


@pytest.mark.ut
def test_equal_maps_may_differ_on_the_wire_unless_ordered(buffer):
    first = {1: "a", 2: "b"}
    second = {2: "b", 1: "a"}

    Map(UInt32, Text()).encode(buffer, first)
    plain_first = buffer.getvalue()
    buffer.clear()
    Map(UInt32, Text()).encode(buffer, second)
    plain_second = buffer.getvalue()
    assert plain_first != plain_second

    buffer.clear()
    Map(UInt32, Text(), ordered=True).encode(buffer, first)
    ordered_first = buffer.getvalue()
    buffer.clear()
    Map(UInt32, Text(), ordered=True).encode(buffer, second)
    assert buffer.getvalue() == ordered_first


@pytest.mark.ut
def test_sequence_keys_round_trip_as_tuples(buffer):
    key = Vector(UInt8, factory=tuple)
    Set(key).encode(buffer, {(1, 2)})
    Map(key, UInt8).encode(buffer, {(1, 2): 3})

    assert Set(key).decode(buffer) == {(1, 2)}
    assert Map(key, UInt8).decode(buffer) == {(1, 2): 3}


@pytest.mark.ut
@pytest.mark.parametrize(
    "shape,value",
    [
        (Set(Vector(UInt8)), {(1, 2)}),
        (MultiSet(Vector(UInt8)), collections.Counter({(1, 2): 2})),
        (Map(Vector(UInt8), UInt8), {(1, 2): 3}),
        (MultiMap(Vector(UInt8), UInt8), {(1, 2): [3, 4]}),
    ],
)
def test_unhashable_decoded_keys_mark_buffer_unhealthy(shape, value):
    serializer = BinarySerializer()
    serializer.put(value, shape)

    with pytest.raises(ShapeError, match="unhashable"):
        serializer.get(shape)

    assert serializer.good is False
