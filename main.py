"""LAN File Browser: authenticated directory listing and file downloads over HTTP"""

from fastapi import FastAPI, Depends, Request
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, RedirectResponse, Response
from typing import List
import logging
import time
from contextlib import asynccontextmanager

from config import Settings, settings, validate_settings
from credentials import CredentialStore, SessionGate
from directory_service import DirectoryEntry, DirectoryService, NotFound, ReadError
from file_service import FileTransferService, IoError
from frontend import INDEX_HTML

import sys

# Configure logging to write to stderr so it never mixes with response output
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    stream=sys.stderr
)
logger = logging.getLogger(__name__)

class NotAuthenticated(Exception):
    """Request did not carry the expected session cookie"""

# Dependencies
def get_credential_store(request: Request) -> CredentialStore:
    return request.app.state.credentials

def get_session_gate(request: Request) -> SessionGate:
    return request.app.state.session_gate

def get_directory_service(request: Request) -> DirectoryService:
    return request.app.state.directory_service

def get_file_service(request: Request) -> FileTransferService:
    return request.app.state.file_service

def require_session(request: Request, gate: SessionGate = Depends(get_session_gate)):
    if request.app.state.settings.auth_required and not gate.is_authenticated(request):
        raise NotAuthenticated()

def create_app(config: Settings = settings) -> FastAPI:
    """Build the application for one configuration profile"""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        validate_settings(config)
        logger.info(f"Serving {app.state.directory_service.root} "
                    f"(auth {'required' if config.auth_required else 'disabled'}, "
                    f"{len(app.state.credentials)} user(s), "
                    f"confined to root: {config.confine_to_root})")
        yield
        logger.info("Shutting down LAN File Browser")

    app = FastAPI(
        title=config.app_name,
        version=config.app_version,
        debug=config.debug,
        lifespan=lifespan
    )

    # Immutable per-process state shared by every request
    directory_service = DirectoryService.from_settings(config)
    app.state.settings = config
    app.state.credentials = CredentialStore.from_settings(config)
    app.state.session_gate = SessionGate.from_settings(config)
    app.state.directory_service = directory_service
    app.state.file_service = FileTransferService(directory_service)

    # Middleware for performance tracking
    @app.middleware("http")
    async def track_performance(request: Request, call_next):
        start_time = time.time()

        response = await call_next(request)

        processing_time = time.time() - start_time
        logger.debug(f"{request.method} {request.url.path} -> {response.status_code} "
                     f"in {processing_time:.3f}s")

        response.headers["X-Processing-Time"] = str(round(processing_time, 3))

        return response

    @app.get("/login/{username}/{password}")
    def login(
        username: str,
        password: str,
        credentials: CredentialStore = Depends(get_credential_store),
        gate: SessionGate = Depends(get_session_gate)
    ) -> Response:
        """Check static credentials and hand out the session cookie"""
        logger.info(f"Login attempt: {username}")

        if not credentials.authenticate(username, password):
            logger.warning(f"Rejected login for {username}")
            return PlainTextResponse("Invalid credentials", status_code=401)

        return gate.issue(RedirectResponse(url="/", status_code=303))

    @app.get("/", response_class=HTMLResponse)
    async def index():
        return HTMLResponse(INDEX_HTML)

    @app.get("/list/{path:path}", response_model=List[DirectoryEntry],
             dependencies=[Depends(require_session)])
    def list_directory(path: str, directories: DirectoryService = Depends(get_directory_service)):
        """List the immediate children of a directory under the root"""
        return directories.list_directory(path)

    @app.get("/{path:path}")
    def serve_file(path: str, files: FileTransferService = Depends(get_file_service)) -> Response:
        """Download a file or browse a directory index"""
        return files.serve(path)

    # Error handlers
    @app.exception_handler(NotAuthenticated)
    async def not_authenticated_handler(request: Request, exc: NotAuthenticated):
        return PlainTextResponse("Unauthorized", status_code=401)

    @app.exception_handler(NotFound)
    async def not_found_handler(request: Request, exc: NotFound):
        return JSONResponse(str(exc), status_code=404)

    @app.exception_handler(ReadError)
    async def read_error_handler(request: Request, exc: ReadError):
        return JSONResponse(str(exc), status_code=500)

    @app.exception_handler(IoError)
    async def io_error_handler(request: Request, exc: IoError):
        logger.error(f"I/O error serving {exc.path}: {exc}")
        return PlainTextResponse(str(exc), status_code=500)

    return app

app = create_app(settings)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level)
