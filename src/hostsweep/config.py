import os
import sys
import logging
from requests.packages.urllib3.exceptions import InsecureRequestWarning
import requests

# Probes are sent to bare IPs, certificates never match them
requests.packages.urllib3.disable_warnings(InsecureRequestWarning)

USER_AGENT = 'Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/92.0.4515.107 Safari/537.36'

PROTOCOLS = ('http', 'https')

DEFAULT_THREADS = 5
DEFAULT_TIMEOUT = 10
DEFAULT_MATCH = '200'

# Upper bound for dashed ranges, guards against B < A wrapping around
MAX_RANGE_SIZE = 65536

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

logger = logging.getLogger('hostsweep')


class ConfigurationError(ValueError):
    """Raised for settings that make a scan impossible. Nothing is probed."""


def setup_logging(verbose=False):
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.handlers = [handler]
    logger.propagate = False
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return logger


def _env_int(name, default):
    value = os.getenv(name, '')
    if not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")


# Defaults (overridable from the environment)
def load_defaults():
    return {
        'threads': _env_int('HOSTSWEEP_THREADS', DEFAULT_THREADS),
        'timeout': _env_int('HOSTSWEEP_TIMEOUT', DEFAULT_TIMEOUT),
        'match': os.getenv('HOSTSWEEP_MATCH', DEFAULT_MATCH),
    }
