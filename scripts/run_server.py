from __future__ import annotations

import argparse
import logging

import uvicorn

from addrverify.config import settings
from addrverify.entrypoints.fastapi_app import create_app
from addrverify.logs import quiet_logging


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args()

    quiet_logging()
    logging.getLogger(__name__).info("Starting proxy mode=%s", settings.ORACLE_MODE)

    # create_app checks GEMINI_API_KEY on startup; a missing key aborts here.
    uvicorn.run(create_app(settings), host=args.host, port=args.port)


if __name__ == "__main__":
    main()
