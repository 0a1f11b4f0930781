import threading
import time
from concurrent.futures import ThreadPoolExecutor

from student_store.record_store import ReadWriteLock, RecordStore


def test_put_then_snapshot(store):
    store.put("alice", "cs")
    assert store.snapshot() == {"alice": "cs"}


def test_put_replaces_existing_name(store):
    store.put("alice", "cs")
    store.put("alice", "ee")
    assert store.snapshot() == {"alice": "ee"}
    assert len(store) == 1


def test_delete_present(store):
    store.put("alice", "cs")
    assert store.delete("alice") is True
    assert store.snapshot() == {}


def test_delete_absent_is_noop(store):
    store.put("alice", "cs")
    assert store.delete("bob") is False
    assert store.snapshot() == {"alice": "cs"}


def test_snapshot_is_independent_copy(store):
    store.put("alice", "cs")
    snap = store.snapshot()
    store.put("bob", "ee")
    store.delete("alice")
    assert snap == {"alice": "cs"}

    snap["carol"] = "me"
    assert "carol" not in store.snapshot()


def test_empty_store():
    store = RecordStore()
    assert store.snapshot() == {}
    assert len(store) == 0


def test_concurrent_writers_converge(store):
    names = [f"student-{i}" for i in range(200)]
    with ThreadPoolExecutor(max_workers=16) as pool:
        list(pool.map(lambda n: store.put(n, "branch-" + n), names))
    assert store.snapshot() == {n: "branch-" + n for n in names}


def test_concurrent_puts_and_deletes(store):
    for i in range(100):
        store.put(f"old-{i}", "x")
    with ThreadPoolExecutor(max_workers=8) as pool:
        for i in range(100):
            pool.submit(store.delete, f"old-{i}")
            pool.submit(store.put, f"new-{i}", "y")
    assert store.snapshot() == {f"new-{i}": "y" for i in range(100)}


def test_readers_share_the_lock():
    lock = ReadWriteLock()
    both_inside = threading.Barrier(2, timeout=5)

    def read():
        with lock.read_locked():
            both_inside.wait()

    threads = [threading.Thread(target=read) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)
    assert not both_inside.broken


def test_writer_waits_for_reader():
    lock = ReadWriteLock()
    order = []
    reader_in = threading.Event()

    def write():
        reader_in.wait(timeout=5)
        with lock.write_locked():
            order.append("write")

    writer = threading.Thread(target=write)
    writer.start()
    with lock.read_locked():
        reader_in.set()
        writer.join(timeout=0.2)
        order.append("read")
    writer.join(timeout=5)
    assert order == ["read", "write"]


def test_waiting_writer_goes_before_new_readers():
    lock = ReadWriteLock()
    order = []

    def write():
        with lock.write_locked():
            order.append("write")

    def read():
        with lock.read_locked():
            order.append("read")

    writer = threading.Thread(target=write)
    reader = threading.Thread(target=read)
    with lock.read_locked():
        writer.start()
        deadline = time.monotonic() + 5
        while lock._writers_waiting == 0 and time.monotonic() < deadline:
            time.sleep(0.01)
        reader.start()
        reader.join(timeout=0.2)
        assert reader.is_alive()
    writer.join(timeout=5)
    reader.join(timeout=5)
    assert order == ["write", "read"]
