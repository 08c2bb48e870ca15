import uvicorn

from deckshare.core.config import settings
from deckshare.utils.logging import setup_logging

if __name__ == "__main__":
    setup_logging("deckshare.log", level="DEBUG" if settings.is_dev else "INFO")
    uvicorn.run(
        "deckshare.main:app",
        host="127.0.0.1",
        port=3011,
        reload=settings.is_dev,
        log_config=None,
        log_level=None,
    )
