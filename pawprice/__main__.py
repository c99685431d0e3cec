"""Run the API server with ``python -m pawprice``."""

import uvicorn

from pawprice.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "pawprice.main:create_default_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,
    )


if __name__ == "__main__":
    main()
