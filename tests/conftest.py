import logging

import pytest

from stowage.core.buffer import ByteBuffer
from stowage.core.serializer import BinarySerializer
from tests.fake.fake_store import FakeBlobStore


@pytest.fixture
def buffer():
    return ByteBuffer()


@pytest.fixture
def serializer():
    return BinarySerializer()


@pytest.fixture
def traced(caplog):
    caplog.set_level(logging.DEBUG, logger="stowage.test")
    return BinarySerializer(trace=True, logger=logging.getLogger("stowage.test"))


@pytest.fixture
def store():
    return FakeBlobStore()
