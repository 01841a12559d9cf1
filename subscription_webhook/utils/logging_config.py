import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def configure_logging(level: str = "INFO"):
    """Configure the root logger once, every module logs through logging.getLogger(__name__)"""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # uvicorn installs its own handlers on its loggers, leave those alone
    logging.getLogger("subscription_webhook").setLevel(level.upper())
