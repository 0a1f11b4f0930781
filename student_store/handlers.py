"""Request handlers: each one turns a parsed request into a single store call.

POST and PUT both go through ``upsert``; there is no separate update path.
"""

from dataclasses import dataclass
from typing import Any

from student_store.models import Record, RecordId
from student_store.record_store import RecordStore

ADDED_MESSAGE = "Added items to the student list"
REMOVED_MESSAGE = "Removed item from student list"


@dataclass(frozen=True)
class Outcome:
    status_code: int
    body: Any


def upsert(store: RecordStore, record: Record) -> Outcome:
    store.put(record.name, record.branch)
    return Outcome(status_code=201, body=ADDED_MESSAGE)


def delete(store: RecordStore, record_id: RecordId) -> Outcome:
    # Absent names are still a success.
    store.delete(record_id.name)
    return Outcome(status_code=200, body=REMOVED_MESSAGE)


def list_records(store: RecordStore) -> Outcome:
    return Outcome(status_code=200, body=store.snapshot())
