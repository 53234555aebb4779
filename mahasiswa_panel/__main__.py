"""
Mahasiswa Panel — run with uvicorn
"""
import logging

import uvicorn

from mahasiswa_panel.core.config import configure_logging, get_settings

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    configure_logging()
    logger.info("Server berjalan di http://localhost:%d", settings.PORT)
    uvicorn.run(
        "mahasiswa_panel.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    main()
