import pytest
from fastapi.testclient import TestClient

from student_store.app import create_app
from student_store.record_store import RecordStore


@pytest.fixture
def store():
    return RecordStore()


@pytest.fixture
def client(store):
    return TestClient(create_app(store))
