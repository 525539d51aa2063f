"""
vdisk.daemon
------------
REST API over one in-memory FileStorage, using FastAPI.

Clients open sessions; each session is a FileManager with its own current
folder, and all sessions share the same storage. Intended for local
development, testing and demonstration purposes.
"""
import json
import logging
import socket
import uuid

import uvicorn
from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from filestore import DeleteSummary, ErrorKind, FileContents, FileManager, FileStorage, FolderContents, Result

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.ALREADY_EXISTS: 409,
    ErrorKind.MALFORMED_PATH: 422,
    ErrorKind.INVALID_NAME: 422,
}


class ChangeDirectoryModel(BaseModel):
    path: str = ""
    relative: bool = True


class NewFolderModel(BaseModel):
    name: str


class NewFileModel(BaseModel):
    name: str
    content: str = ""


class FileUpdateModel(BaseModel):
    content: str


class SessionModel(BaseModel):
    session_id: str
    cwd: str = Field(default="/")


class OperationFailed(Exception):
    """A manager call returned a failed Result."""

    def __init__(self, result: Result):
        self.result = result
        super().__init__(result.message)


def _value(result: Result):
    if not result.ok:
        raise OperationFailed(result)
    return result.value


def create_app(storage: FileStorage | None = None) -> FastAPI:
    """Build the API around ``storage`` (a fresh one if not given)."""
    app = FastAPI(title="vdisk")
    app.state.storage = storage if storage is not None else FileStorage()
    app.state.sessions = {}

    @app.exception_handler(OperationFailed)
    async def operation_failed(request: Request, exc: OperationFailed) -> JSONResponse:
        result = exc.result
        logger.warning(f"{request.method} {request.url.path} failed: {result.message}")
        return JSONResponse(
            status_code=STATUS_BY_ERROR.get(result.error, 500),
            content={"detail": result.message, "error": result.error.value if result.error else None},
        )

    def get_manager(session_id: str) -> FileManager:
        manager = app.state.sessions.get(session_id)
        if manager is None:
            logger.warning(f"Session not found: {session_id}")
            raise HTTPException(status_code=404, detail="Session not found")
        return manager

    @app.get("/status")
    def status():
        """Health/status endpoint."""
        return {"status": "ok", "sessions": len(app.state.sessions)}

    @app.post("/sessions", response_model=SessionModel, status_code=201)
    def open_session() -> SessionModel:
        manager = FileManager(app.state.storage)
        session_id = str(uuid.uuid4())
        with app.state.storage.lock:
            app.state.sessions[session_id] = manager
        logger.info(f"Opened session {session_id}")
        return SessionModel(session_id=session_id, cwd=manager.current_path)

    @app.delete("/sessions/{session_id}", status_code=204)
    def close_session(session_id: str):
        with app.state.storage.lock:
            manager = app.state.sessions.pop(session_id, None)
        if manager is None:
            logger.warning(f"Session not found: {session_id}")
            raise HTTPException(status_code=404, detail="Session not found")
        logger.info(f"Closed session {session_id}")
        return Response(status_code=204)

    @app.get("/sessions/{session_id}/cwd")
    def get_cwd(session_id: str):
        return {"cwd": get_manager(session_id).current_path}

    @app.post("/sessions/{session_id}/cd")
    def change_directory(session_id: str, body: ChangeDirectoryModel):
        manager = get_manager(session_id)
        return {"cwd": _value(manager.change_directory(body.path, relative=body.relative))}

    @app.get("/sessions/{session_id}/folder", response_model=FolderContents)
    def read_folder(session_id: str) -> FolderContents:
        return _value(get_manager(session_id).read_folder_contents())

    @app.post("/sessions/{session_id}/folders", status_code=201)
    def create_folder(session_id: str, body: NewFolderModel):
        return {"path": _value(get_manager(session_id).create_folder(body.name))}

    @app.delete("/sessions/{session_id}/folders/{name}", response_model=DeleteSummary)
    def delete_folder(session_id: str, name: str) -> DeleteSummary:
        return _value(get_manager(session_id).delete_folder(name))

    @app.post("/sessions/{session_id}/files", response_model=FileContents, status_code=201)
    def create_file(session_id: str, body: NewFileModel) -> FileContents:
        return _value(get_manager(session_id).create_file(body.name, body.content))

    @app.get("/sessions/{session_id}/files/{name}", response_model=FileContents)
    def read_file(session_id: str, name: str) -> FileContents:
        return _value(get_manager(session_id).read_file_contents(name))

    @app.put("/sessions/{session_id}/files/{name}", response_model=FileContents)
    def update_file(session_id: str, name: str, body: FileUpdateModel) -> FileContents:
        return _value(get_manager(session_id).update_file(name, body.content))

    @app.delete("/sessions/{session_id}/files/{name}", response_model=DeleteSummary)
    def delete_file(session_id: str, name: str) -> DeleteSummary:
        return _value(get_manager(session_id).delete_file(name))

    return app


def pick_port(host: str, port: int) -> int:
    """Return ``port``, or a free port on ``host`` when it is 0."""
    if port:
        return port
    # Bind to port 0 to get a free port, then close and reuse
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind((host, 0))
        return s.getsockname()[1]


def run_server(host: str = "127.0.0.1", port: int = 8000, log_level: str = "info"):
    """Run the API with Uvicorn, reporting the port actually used."""
    port = pick_port(host, port)
    print(json.dumps({"event": "port_selected", "host": host, "port": port}), flush=True)
    logger.info(f"Starting Uvicorn server on {host}:{port}")
    uvicorn.run(create_app(), host=host, port=port, log_level=log_level.lower())
    logger.info("Server stopped")
