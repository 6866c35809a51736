"""Run the Inner Garden API with uvicorn."""

import uvicorn

from inner_garden.config import Settings

if __name__ == "__main__":
    settings = Settings()
    uvicorn.run(
        "inner_garden.api.asgi:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "local",
    )
