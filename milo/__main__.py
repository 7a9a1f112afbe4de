"""Run the API server: python -m milo"""

import uvicorn

from milo.core.config import settings


def main() -> None:
    uvicorn.run("milo.main:app", host="0.0.0.0", port=settings.PORT, reload=settings.DEBUG)


if __name__ == "__main__":
    main()
