"""FastAPI application serving swap calldata preparation."""

import uvicorn
from fastapi import FastAPI

from psp_calldata import __version__
from psp_calldata.api.endpoints import router
from psp_calldata.cli import configure_logging
from psp_calldata.config import Settings

app = FastAPI(
    title="ParaSwap calldata preparation",
    description="Prepares Augustus calldata records for an on-chain swap adapter",
    version=__version__,
)

app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok"}


def run() -> None:
    """Run the API server.

    Configuration via environment variables:
    - PSP_HOST: Host to bind to (default: 0.0.0.0)
    - PSP_PORT: Port to bind to (default: 8000)
    - PSP_LOG_LEVEL: Minimum log level (default: WARNING)
    """
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    uvicorn.run("psp_calldata.api.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
