"""
Website Audit Tool - HTTP API

POST /api/audit with {"url": "https://example.com"} runs one audit and
returns the report as JSON.

Usage:
    python server.py
    uvicorn server:app --port 3000
"""

import logging
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from orchestrator.orchestrator import Orchestrator
from utils.config import AuditSettings, load_env_file
from utils.errors import AuditFailure, ValidationError

logger = logging.getLogger(__name__)

load_env_file()

app = FastAPI(title="Website Audit API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class AuditRequest(BaseModel):
    url: Optional[str] = None


def get_orchestrator() -> Orchestrator:
    """A fresh orchestrator per request; nothing is shared between audits."""
    return Orchestrator(settings=AuditSettings.from_env())


URL_REQUIRED = {"error": "URL is required"}


@app.exception_handler(RequestValidationError)
async def invalid_body_handler(request: Request, exc: RequestValidationError):
    # A body that is not {"url": "<string>"} carries no usable URL
    logger.debug("Rejected audit request body: %s", exc.errors())
    return JSONResponse(status_code=400, content=URL_REQUIRED)


@app.post("/api/audit")
async def run_audit(request: Optional[AuditRequest] = None, orchestrator: Orchestrator = Depends(get_orchestrator)):
    if request is None or not request.url or not request.url.strip():
        return JSONResponse(status_code=400, content=URL_REQUIRED)

    try:
        report = await orchestrator.run_audit(request.url)
    except ValidationError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})
    except AuditFailure as e:
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to complete the audit.", "details": e.detail},
        )

    return report.to_dict()


def main():
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    settings = AuditSettings.from_env()
    logger.info("Server is running on http://localhost:%d", settings.port)
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
