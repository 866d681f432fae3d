import logging
import socket
import time

from sqlalchemy.engine import make_url

logger = logging.getLogger(__name__)

DEFAULT_PORTS = {"mysql": 3306, "postgresql": 5432}


def setup_logging(service_name: str, level: str = "INFO") -> logging.Logger:
    """Configure root logging once and return the service logger"""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger = logging.getLogger(service_name)
    logger.setLevel(getattr(logging, level.upper()))
    return logger


def wait_for_tcp(
    host: str, port: int, timeout: int = 60, interval: float = 1.0
) -> bool:
    """Poll host:port until it accepts a connection or ``timeout`` seconds pass."""
    deadline = time.monotonic() + timeout
    attempts = 0
    while time.monotonic() < deadline:
        attempts += 1
        try:
            with socket.create_connection((host, port), timeout=2):
                logger.info(f"{host}:{port} reachable after {attempts} attempt(s)")
                return True
        except OSError as e:
            logger.debug(f"{host}:{port} not reachable yet: {e}")
            time.sleep(interval)
    logger.error(f"Gave up on {host}:{port} after {timeout}s")
    return False


def wait_for_database(db_url: str, timeout: int = 60) -> bool:
    """Block until the order database named by ``db_url`` listens.

    The engine URL is parsed with SQLAlchemy, so driver suffixes such as
    ``mysql+pymysql`` resolve to the backend's default port.
    """
    url = make_url(db_url)
    host = url.host or "localhost"
    port = url.port or DEFAULT_PORTS.get(url.get_backend_name(), 3306)
    logger.info(f"Waiting for {url.get_backend_name()} at {host}:{port}")
    return wait_for_tcp(host, port, timeout=timeout)
