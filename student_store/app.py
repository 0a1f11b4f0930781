import logging
import os
from typing import Callable, Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.routing import APIRoute

from student_store import handlers
from student_store.handlers import Outcome
from student_store.models import Record, RecordId
from student_store.record_store import RecordStore

logger = logging.getLogger(__name__)

HOST = os.getenv("STUDENT_STORE_HOST", "127.0.0.1")
PORT = int(os.getenv("STUDENT_STORE_PORT", "3030"))

PREFIX = "/v1/student"
MAX_BODY_BYTES = 16 * 1024


def body_too_large(request: Request, size) -> HTTPException:
    logger.warning("Rejected %s %s: body of %s bytes", request.method, request.url.path, size)
    return HTTPException(status_code=413, detail="Request body too large")


class LimitedBodyRequest(Request):
    """Reads the body in chunks and stops once it passes MAX_BODY_BYTES."""

    async def body(self) -> bytes:
        if not hasattr(self, "_body"):
            chunks = []
            size = 0
            async for chunk in self.stream():
                size += len(chunk)
                if size > MAX_BODY_BYTES:
                    raise body_too_large(self, f"more than {MAX_BODY_BYTES}")
                chunks.append(chunk)
            self._body = b"".join(chunks)
        return self._body


class LimitedBodyRoute(APIRoute):
    """Enforces the body cap before FastAPI decodes the JSON body."""

    def get_route_handler(self) -> Callable:
        original_route_handler = super().get_route_handler()

        async def limited_route_handler(request: Request) -> Response:
            if request.method not in ("POST", "PUT", "DELETE"):
                return await original_route_handler(request)
            declared = request.headers.get("content-length")
            if declared is not None and declared.isdigit() and int(declared) > MAX_BODY_BYTES:
                raise body_too_large(request, declared)
            request = LimitedBodyRequest(request.scope, request.receive)
            await request.body()
            return await original_route_handler(request)

        return limited_route_handler


router = APIRouter(route_class=LimitedBodyRoute)


def get_store(request: Request) -> RecordStore:
    return request.app.state.store


def render(outcome: Outcome) -> Response:
    if isinstance(outcome.body, str):
        return PlainTextResponse(outcome.body, status_code=outcome.status_code)
    return JSONResponse(outcome.body, status_code=outcome.status_code)


@router.api_route(PREFIX, methods=["POST", "PUT"])
def upsert_student(record: Record, store: RecordStore = Depends(get_store)):
    return render(handlers.upsert(store, record))


@router.delete(PREFIX)
def delete_student(record_id: RecordId, store: RecordStore = Depends(get_store)):
    return render(handlers.delete(store, record_id))


@router.get(PREFIX)
def list_students(store: RecordStore = Depends(get_store)):
    return render(handlers.list_records(store))


@router.get("/health")
def health(store: RecordStore = Depends(get_store)):
    return {"status": "ok", "records": len(store)}


def create_app(store: Optional[RecordStore] = None) -> FastAPI:
    """Build the app around ``store``, or a fresh store when none is given.

    There is no module-level app; serve with ``python -m student_store`` or
    ``uvicorn --factory student_store.app:create_app``.
    """
    app = FastAPI(title="Student Store")
    app.state.store = store if store is not None else RecordStore()
    app.include_router(router)
    return app
