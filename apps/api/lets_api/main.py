import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from lets_api.api.v1.router import api_router
from lets_api.core.config import settings
from lets_api.core.errors import DataCorruptionError, LetsApiError, NotFoundError, PermissionDeniedError

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
    NotFoundError: 404,
    PermissionDeniedError: 403,
    DataCorruptionError: 500,
}

app = FastAPI(title=settings.app_name)


@app.exception_handler(LetsApiError)
async def lets_api_error_handler(request: Request, exc: LetsApiError):
    status_code = ERROR_STATUS_CODES.get(type(exc), 400)
    if status_code >= 500:
        logger.error("request failed path=%s code=%s", request.url.path, exc.code)
    return JSONResponse(content={"code": exc.code, "detail": exc.message}, status_code=status_code)


@app.get("/health")
def health():
    return {"status": "ok", "env": settings.app_env}


app.include_router(api_router, prefix="/api/v1")


def run() -> None:
    uvicorn.run(app, host=settings.app_host, port=settings.app_port)


if __name__ == "__main__":
    run()
