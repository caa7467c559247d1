import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from promptgen import config
from promptgen.api.routes import router
from promptgen.schemas import Result

logger = logging.getLogger(__name__)


def configure_logging(level: str = config.LOG_LEVEL) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error.get("loc", ())[1:]) or "body"
        parts.append(f"{location}: {error.get('msg')}")
    return "; ".join(parts)


def create_app() -> FastAPI:
    app = FastAPI(
        title="Prompt Generation Service",
        version="0.1.0",
    )

    # Middleware FIRST
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        message = f"参数校验失败: {describe_validation_errors(exc)}"
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, message)
        return JSONResponse(
            status_code=400,
            content=Result.error(message, code=400).model_dump(),
        )

    @app.get("/health")
    def health():
        return {"status": "ok"}

    # Routes AFTER middleware
    app.include_router(router)

    return app


configure_logging()
app = create_app()
