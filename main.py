# Backend/main.py
import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from config import settings
from db import init_db
from routers import routers
from services.exceptions import (
    NoteFlowError, NotFoundError, InvalidHierarchyError, ConflictError, AuthenticationError,
)
from utils.logger import setup_logging

import uvicorn


logger = setup_logging()

app = FastAPI(title="NoteFlow API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 서비스 에러 → HTTP 상태 코드
ERROR_STATUS = {
    NotFoundError: 404,
    InvalidHierarchyError: 400,
    ConflictError: 409,
    AuthenticationError: 401,
}


@app.exception_handler(NoteFlowError)
async def noteflow_error_handler(request: Request, exc: NoteFlowError) -> JSONResponse:
    status_code = ERROR_STATUS.get(type(exc), 400)
    logging.getLogger("noteflow.api").info(
        "%s %s -> %d %s", request.method, request.url.path, status_code, exc.message
    )
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "error_code": exc.error_code.value},
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logging.getLogger("noteflow.api").error(
        "Database error on %s %s: %s", request.method, request.url.path, exc
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "Database error", "error_code": "DATABASE_ERROR"},
    )


# 라우터 등록
for r in routers:
    app.include_router(r)


@app.get("/healthcheck")
def healthcheck():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


# 앱 시작 시(uvicorn main:app) 한 번만 테이블 생성 (개발용)
init_db()
logger.info("NoteFlow API initialized")

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8080, reload=True)
