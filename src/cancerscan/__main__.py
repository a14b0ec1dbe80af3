"""Run the service with uvicorn on the configured port."""
import uvicorn

from .config import settings
from .utils.logger import get_logger


def main() -> None:
    get_logger(__name__).info(f"Server running on port {settings.port}")
    uvicorn.run("cancerscan.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
