from fastapi import FastAPI
import uvicorn
from fastapi.middleware.cors import CORSMiddleware
from api.routes.auth_routes import auth_routes
from api.routes.codegen_routes import codegen_routes
from api.routes.progress_routes import progress_routes
from api.routes.quiz_routes import quiz_routes
from api.config import create_db
from api.errors import ConflictError, NotFoundError, StorageError, ValidationError
from api.utils.logger import configure_logging, set_request_id, clear_request_id
from fastapi import Request
from starlette.responses import Response, JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_503_SERVICE_UNAVAILABLE,
)
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi import HTTPException

app = FastAPI(title="CodeMentor")
logger = configure_logging()
create_db()
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_logger(request: Request, call_next):
    rid = set_request_id(request.headers.get("x-request-id"))
    try:
        logger.info("request start method=%s path=%s", request.method, request.url.path)
        response: Response = await call_next(request)
        logger.info("request end status=%s method=%s path=%s", response.status_code, request.method, request.url.path)
        response.headers["x-request-id"] = rid
        return response
    except Exception:
        logger.exception("request error method=%s path=%s", request.method, request.url.path)
        raise
    finally:
        clear_request_id()


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("http error status=%s method=%s path=%s detail=%s", exc.status_code, request.method, request.url.path, exc.detail)
    else:
        logger.warning("http error status=%s method=%s path=%s detail=%s", exc.status_code, request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("validation error method=%s path=%s errors=%s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=422, content={"detail": jsonable_encoder(exc.errors())})


@app.exception_handler(ValidationError)
async def app_validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.warning("rejected input method=%s path=%s detail=%s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=HTTP_400_BAD_REQUEST, content={"detail": exc.message})


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.warning("not found method=%s path=%s detail=%s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=HTTP_404_NOT_FOUND, content={"detail": exc.message})


@app.exception_handler(ConflictError)
async def conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
    logger.warning("write conflict method=%s path=%s detail=%s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=HTTP_409_CONFLICT, content={"detail": exc.message})


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    logger.exception("storage error method=%s path=%s", request.method, request.url.path)
    return JSONResponse(status_code=HTTP_503_SERVICE_UNAVAILABLE, content={"detail": "Storage unavailable"})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # Never leak internal exception details to clients.
    logger.exception("unhandled error method=%s path=%s", request.method, request.url.path)
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal Server Error"},
    )


@app.get("/")
def read_root():
    return {"message": "CodeMentor is Healthy"}

app.include_router(auth_routes, prefix="/auth")
app.include_router(quiz_routes)
app.include_router(progress_routes)
app.include_router(codegen_routes)

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
