from .config import logger, PROTOCOLS, DEFAULT_THREADS, DEFAULT_TIMEOUT, ConfigurationError
from .results import ProbeUnit, ProbeResult, ResultSet
from .utils.http_utils import get_session
from .phases.probing import probe_vhost
from .phases.filtering import status_matches

from concurrent.futures import ThreadPoolExecutor, as_completed
import sys


class VhostScanner:
    def __init__(self, ips, domains, protocols=PROTOCOLS, threads=DEFAULT_THREADS, timeout=DEFAULT_TIMEOUT,
                 verify_tls=False, include=None, exclude=None, record_failures=False, verbose=False):
        self.ips = list(ips)
        self.domains = list(domains)
        self.protocols = tuple(protocols)
        self.threads = threads
        self.timeout = timeout
        self.verify_tls = verify_tls
        self.include = {200} if include is None else set(include)
        self.exclude = set(exclude) if exclude else set()
        self.record_failures = record_failures
        self.verbose = verbose

        self._validate()

        self.results = ResultSet()

    def _validate(self):
        if not isinstance(self.threads, int) or self.threads < 1:
            raise ConfigurationError(f"threads must be at least 1, got {self.threads!r}")
        if self.timeout is None or self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout!r}")
        if not self.ips:
            raise ConfigurationError("no target IPs to scan")
        if not self.domains:
            raise ConfigurationError("no domains to probe")
        if not self.protocols:
            raise ConfigurationError("no protocols selected")
        unknown = [p for p in self.protocols if p not in PROTOCOLS]
        if unknown:
            raise ConfigurationError(f"unsupported protocol(s): {', '.join(unknown)}")

    def work_units(self):
        """Yields every (ip, domain, protocol) combination, IP outermost."""
        for ip in self.ips:
            for domain in self.domains:
                for protocol in self.protocols:
                    yield ProbeUnit(ip, domain, protocol)

    @property
    def total_units(self):
        return len(self.ips) * len(self.domains) * len(self.protocols)

    def _probe_unit(self, unit):
        logger.debug(f"Checking {unit.protocol}://{unit.domain} (IP: {unit.ip})")
        with get_session(self) as session:
            result = probe_vhost(session, unit.ip, unit.domain, unit.protocol, self.timeout, self.verify_tls)

        if result.failed:
            if self.record_failures:
                self.results.append(result)
            return result

        if status_matches(result.status_code, self.include, self.exclude):
            self.results.append(result)
        return result

    def run(self):
        logger.info(f"[*] Scanning {len(self.ips)} IP(s) with {len(self.domains)} domain(s) over {'/'.join(self.protocols)}")
        logger.debug(f"Total requests: {self.total_units} with {self.threads} thread(s)")

        self.results = ResultSet()

        completed = 0
        failed = 0
        with ThreadPoolExecutor(max_workers=self.threads) as executor:
            futures = {executor.submit(self._probe_unit, unit): unit for unit in self.work_units()}

            for future in as_completed(futures):
                completed += 1
                try:
                    if future.result().failed:
                        failed += 1
                except Exception as e:
                    failed += 1
                    unit = futures[future]
                    logger.warning(f" [!] Unexpected error probing {unit.protocol}://{unit.domain} (IP: {unit.ip}): {e}")
                    if self.record_failures:
                        self.results.append(ProbeResult(unit.domain, unit.ip, unit.protocol, 0, str(e)))

                if self.verbose and completed % 50 == 0:
                    sys.stderr.write(f"\r [.] Progress: {completed}/{len(futures)} - Matched: {len(self.results)}")
                    sys.stderr.flush()

        if self.verbose and completed >= 50:
            sys.stderr.write("\n")
            sys.stderr.flush()

        logger.info(f"[*] Scan complete: {completed} request(s), {failed} failed, {len(self.results)} result(s) kept.")
        return self.results


def check_host(ips, hostname, protocol='https', threads=DEFAULT_THREADS, timeout=DEFAULT_TIMEOUT,
               verify_tls=False, include=(), exclude=(), verbose=False):
    """
    Checks one hostname against a list of IPs over a single protocol.

    Unlike a full scan, failed probes are kept as zero-status error rows and
    no status code is filtered out unless `include`/`exclude` say otherwise.
    """
    scanner = VhostScanner(
        ips=ips,
        domains=[hostname],
        protocols=(protocol,),
        threads=threads,
        timeout=timeout,
        verify_tls=verify_tls,
        include=include,
        exclude=exclude,
        record_failures=True,
        verbose=verbose
    )
    return scanner.run()
