"""Gatekeep entrypoint.

Run with:
  python -m gatekeep
"""

import logging
import os

import uvicorn
from dotenv import load_dotenv


def main() -> None:
    load_dotenv()
    level = os.getenv("GATEKEEP_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    host = os.getenv("GATEKEEP_HOST", "0.0.0.0")
    port = int(os.getenv("GATEKEEP_PORT", "8088"))
    reload = os.getenv("GATEKEEP_RELOAD", "false").lower() in {"1", "true", "yes", "y"}
    uvicorn.run("gatekeep.app:app", host=host, port=port, reload=reload, log_level=level.lower())

if __name__ == "__main__":
    main()
