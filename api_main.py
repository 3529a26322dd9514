import os

import uvicorn

from app.api.fastapi_app import app

__all__ = ["app"]


if __name__ == "__main__":
    uvicorn.run(
        "api_main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8888")),
    )
