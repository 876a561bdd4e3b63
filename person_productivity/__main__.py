"""Run the service with uvicorn: ``python -m person_productivity``."""

import uvicorn

from .config import settings
from .main import create_app


def main() -> None:
    app = create_app(settings)
    uvicorn.run(app, host=settings.app_host, port=settings.app_port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
