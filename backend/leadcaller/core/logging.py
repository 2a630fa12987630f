"""
Logging Setup
"""
import logging


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the server process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
