"""
Fieldcrypt - Main Entry Point

A local FastAPI application exposing keyed hashing and field encryption.
Runs on http://127.0.0.1:18422 by default.
"""

import os
import logging
from typing import Optional
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse

from config import config, load_key_store, VERSION
from fieldcrypt import (
    CryptoService,
    CryptoServiceError,
    EncryptedEnvelope,
    UnknownDataType,
    DecryptionFailed,
    MalformedPayload,
    MalformedInput,
)

__version__ = VERSION

logger = logging.getLogger(__name__)


# Global state
class AppState:
    """Application state container."""
    crypto_service: Optional[CryptoService] = None

    def require_service(self) -> CryptoService:
        """Return the crypto service or fail if startup has not completed."""
        if self.crypto_service is None:
            raise HTTPException(status_code=503, detail="Crypto service not initialised")
        return self.crypto_service


app_state = AppState()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup - invalid keys abort here
    key_store = load_key_store(os.environ, config.KEY_ENV_PREFIX)
    app_state.crypto_service = CryptoService(key_store)
    logger.info(f"Fieldcrypt started with data types: {sorted(key_store.data_types)}")

    yield

    # Shutdown - drop key references
    app_state.crypto_service = None
    logger.info("Fieldcrypt stopped")


# Create FastAPI app
app = FastAPI(
    title="Fieldcrypt",
    description="Keyed hashing and field encryption for sensitive data",
    version=__version__,
    lifespan=lifespan,
)


@app.exception_handler(CryptoServiceError)
async def crypto_error_handler(request: Request, exc: CryptoServiceError):
    """Map service errors to HTTP responses."""
    if isinstance(exc, UnknownDataType):
        status_code = 404
    elif isinstance(exc, DecryptionFailed):
        status_code = 400
    elif isinstance(exc, MalformedPayload):
        status_code = 422
    elif isinstance(exc, MalformedInput):
        status_code = 400
    else:
        status_code = 500
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


async def _read_json(request: Request) -> dict:
    """Read a JSON object body."""
    try:
        data = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Request body must be JSON")
    if not isinstance(data, dict):
        raise HTTPException(status_code=400, detail="Request body must be a JSON object")
    return data


def _require_fields(data: dict, *names: str) -> list[str]:
    """Pick required string fields out of a JSON object."""
    values = []
    for name in names:
        value = data.get(name)
        if not isinstance(value, str):
            raise HTTPException(status_code=400, detail=f"Field '{name}' required")
        values.append(value)
    return values


# ============================================================================
# Hashing API
# ============================================================================

@app.post("/api/hash")
async def hash_data(request: Request):
    """Hash a value with the composition bound to its data type."""
    text, data_type = _require_fields(await _read_json(request), "text", "data_type")
    service = app_state.require_service()
    return {"hash": service.hash_data(text, data_type)}


# ============================================================================
# Encryption API
# ============================================================================

@app.post("/api/encrypt")
async def encrypt(request: Request):
    """Encrypt a value with AES-256-GCM."""
    plaintext, data_type = _require_fields(await _read_json(request), "plaintext", "data_type")
    service = app_state.require_service()
    return service.encrypt(plaintext, data_type).to_dict()


@app.post("/api/decrypt")
async def decrypt(request: Request):
    """Decrypt an AES-256-GCM envelope."""
    data = await _read_json(request)
    [data_type] = _require_fields(data, "data_type")
    envelope = EncryptedEnvelope.from_dict(data)
    service = app_state.require_service()
    return {"plaintext": service.decrypt_envelope(envelope, data_type)}


@app.post("/api/decrypt/front-cbc")
async def decrypt_front_cbc(request: Request):
    """Decrypt a frontend AES-256-CBC payload."""
    encrypted, iv, data_type = _require_fields(
        await _read_json(request), "encrypted", "iv", "data_type"
    )
    service = app_state.require_service()
    return {"payload": service.decrypt_front_cbc(encrypted, iv, data_type)}


# ============================================================================
# Info API
# ============================================================================

@app.get("/api/data-types")
async def get_data_types():
    """List data types with a registered key."""
    service = app_state.require_service()
    return {
        "encryption": sorted(service.data_types),
        "hashing": sorted(service.hashable_data_types),
    }


@app.get("/api/version")
async def get_version():
    """Get current application version."""
    return {
        "version": __version__,
        "app_name": "Fieldcrypt",
    }


# ============================================================================
# Main Entry Point
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=config.LOG_LEVEL.upper())

    # In Docker, bind to 0.0.0.0 to accept external connections
    in_docker = os.path.exists('/.dockerenv') or os.environ.get('DOCKER_CONTAINER', False)
    host = "0.0.0.0" if in_docker else config.HOST

    uvicorn.run(
        app,
        host=host,
        port=config.PORT,
        log_level=config.LOG_LEVEL,
    )
