from student_store.record_store import RecordStore

__version__ = "0.1.0"

__all__ = ["RecordStore", "__version__"]
