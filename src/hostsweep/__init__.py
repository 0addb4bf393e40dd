from .scanner import VhostScanner, check_host
from .results import ProbeUnit, ProbeResult, ResultSet

__version__ = "0.1.0"
