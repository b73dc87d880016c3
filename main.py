import uvicorn

from shortener_service.app_factory import create_app
from shortener_service.config import get_settings

settings = get_settings()

app = create_app(settings)


if __name__ == "__main__":
    uvicorn.run(app, host=settings.host, port=settings.port)
