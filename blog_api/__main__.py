"""Run the API with uvicorn: ``python -m blog_api``."""

import uvicorn

from blog_api.core.config import get_settings

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run("blog_api.app:create_app", factory=True, host=settings.host, port=settings.port)
