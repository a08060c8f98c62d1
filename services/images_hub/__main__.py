"""Run the image hub with uvicorn: ``python -m services.images_hub``."""

import uvicorn

from .config import get_settings

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "services.images_hub.main:app",
        host=settings.host,
        port=settings.port,
    )
