"""FastAPI application for qrisutil."""
from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, Header, HTTPException, Request, status
from fastapi.responses import JSONResponse, Response

from .config import settings
from .logging_conf import configure_logging
from .middleware import RequestLoggingMiddleware
from .monitoring import metrics_payload, record_service_error
from .schemas import (
    ExtractResponse,
    GenerateRequest,
    GenerateResponse,
    PayloadRequest,
    ValidateResponse,
)
from .services.codec import QrisCodec
from .services.errors import ServiceError

app = FastAPI(title="qrisutil", version="0.1.0")
app.add_middleware(RequestLoggingMiddleware)

logger = logging.getLogger("qrisutil.api")


def _warn_insecure_defaults() -> None:
    if settings.api_key == "dev-secret-key" and settings.environment != "development":
        logger.warning(
            "api key is still the default value",
            extra={"config_key": "api_key", "environment": settings.environment},
        )


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging()
    _warn_insecure_defaults()


async def require_api_key(x_api_key: str = Header(...)) -> None:
    if x_api_key != settings.api_key:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")


def get_codec() -> QrisCodec:
    return QrisCodec(settings.codec)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    route = request.scope.get("route")
    route_path = route.path if route else request.url.path
    logger.warning(
        "service error",
        extra={"code": exc.code, "path": route_path, "method": request.method},
    )
    record_service_error(exc.code, route_path)
    return JSONResponse(status_code=exc.status_code, content={"code": exc.code, "message": exc.message})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    route = request.scope.get("route")
    route_path = route.path if route else request.url.path
    logger.exception(
        "unhandled exception",
        extra={"path": route_path, "method": request.method},
    )
    return JSONResponse(status_code=500, content={"code": "ERR_INTERNAL", "message": "Internal server error"})


@app.get("/health", tags=["system"])
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metrics", tags=["system"])
async def metrics() -> Response:
    payload, content_type = metrics_payload()
    return Response(content=payload, media_type=content_type)


@app.post("/v1/qris/generate", response_model=GenerateResponse, tags=["qris"], dependencies=[Depends(require_api_key)])
async def generate_qris(payload: GenerateRequest, codec: QrisCodec = Depends(get_codec)) -> GenerateResponse:
    encoded = codec.generate(
        payload.base_payload,
        payload.amount,
        invoice=payload.invoice,
        description=payload.description,
    )
    return GenerateResponse(payload=encoded.payload, crc=encoded.crc)


@app.post("/v1/qris/validate", response_model=ValidateResponse, tags=["qris"], dependencies=[Depends(require_api_key)])
async def validate_qris(payload: PayloadRequest, codec: QrisCodec = Depends(get_codec)) -> ValidateResponse:
    return ValidateResponse(valid=codec.validate(payload.payload))


@app.post("/v1/qris/extract", response_model=ExtractResponse, tags=["qris"], dependencies=[Depends(require_api_key)])
async def extract_qris(payload: PayloadRequest, codec: QrisCodec = Depends(get_codec)) -> ExtractResponse:
    result = codec.extract(payload.payload)
    return ExtractResponse(valid=result.valid, fields=result.fields)
