import logging
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: str = "INFO") -> None:
    # basicConfig is a no-op once the root logger has handlers (uvicorn, pytest)
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, stream=sys.stdout)
    logging.getLogger("nexgig").setLevel(level.upper())
