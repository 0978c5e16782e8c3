import json
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from challenge_solver.api.dependencies import RelayDep, lifespan
from challenge_solver.config import settings
from challenge_solver.dto import ErrorResponse, HealthCheckResponse

app = FastAPI(
    title="Challenge Solver Relay",
    description="Forwards chat-completion requests to the upstream model endpoint",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "Challenge Solver Relay",
        "version": "0.1.0",
        "endpoints": {
            "chat_completion": "/api/chat_completion",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse)
async def health(handler: RelayDep) -> HealthCheckResponse:
    """Health check endpoint."""
    return HealthCheckResponse(status="healthy", upstream_url=handler.upstream_url)


@app.post("/api/chat_completion")
async def chat_completion(request: Request, handler: RelayDep) -> JSONResponse:
    """Relay a chat-completion body upstream and return its answer verbatim."""
    try:
        body = await request.json()
    except json.JSONDecodeError:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ErrorResponse(error="Request body must be JSON").model_dump(),
        )

    status_code, payload = await handler.forward(body)
    return JSONResponse(status_code=status_code, content=payload)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "challenge_solver.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
