"""Logging setup for games driven from a script or a service."""

import logging

AGENT_LOGGER: str = 'settlers.engine.agent'


class ObjectiveRequestFilter(logging.Filter):
    """Filter out the per-request chatter logged by player agents."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Return False to suppress 'waiting for' request entries."""
        return 'waiting for' not in record.getMessage()


def configure_logging(level: int = logging.INFO, quiet_requests: bool = True) -> None:
    """Configure root logging and optionally silence agent request chatter."""
    logging.basicConfig(level=level)
    if quiet_requests:
        logging.getLogger(AGENT_LOGGER).addFilter(ObjectiveRequestFilter())
