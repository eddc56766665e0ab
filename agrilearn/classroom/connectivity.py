"""
Connectivity probing for the offline cache.

The app probes on each rerun and feeds the result to
OfflineCache.set_online(), which reacts only to transitions.
"""

import logging
import socket


logger = logging.getLogger(__name__)


def probe_connectivity(host: str = "8.8.8.8", port: int = 53, timeout: float = 2.0) -> bool:
    """Return True if a TCP connection to host:port succeeds within timeout."""
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError as e:
        logger.debug(f"Connectivity probe to {host}:{port} failed: {e}")
        return False
