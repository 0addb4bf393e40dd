import argparse
import sys
from .config import logger, setup_logging, load_defaults, ConfigurationError, PROTOCOLS
from .scanner import VhostScanner
from .utils.ip_utils import expand_targets, expand_target_list, TargetError
from .utils.input_utils import read_lines, combine_wordlist_with_domains, parse_status_codes
from .utils.output_utils import format_results, write_output

EPILOG = """examples:
  hostsweep -i 192.168.1.100 -d example.com
  hostsweep -i 192.168.1.1-192.168.1.50 -D domains.txt
  hostsweep -i 10.0.0.0/24 -d example.com -w subdomains.txt
  hostsweep -i 172.16.0.0/24 -D domains.txt -w subs.txt -t 20 --timeout 5 -m 200,301,302 -f json -o results.json -v
  hostsweep --ip-list ips.txt -d admin.example.com --protocol https --show-errors -m ""

IP formats:
  Single IP:    192.168.1.100
  IP Range:     192.168.1.1-192.168.1.254 or 192.168.1.1-254
  CIDR:         192.168.1.0/24
"""


def build_parser(defaults):
    parser = argparse.ArgumentParser(prog="hostsweep",
                                     description="Virtual host discovery: probes IPs over HTTP/HTTPS with candidate Host headers "
                                                 "and reports the status codes that come back.",
                                     epilog=EPILOG,
                                     formatter_class=argparse.RawTextHelpFormatter)

    targets = parser.add_mutually_exclusive_group(required=True)
    targets.add_argument("-i", "--ip", help="Target IP, IP range, or CIDR (e.g. 192.168.1.1, 192.168.1.1-10, 192.168.1.0/24).")
    targets.add_argument("--ip-list", help="Path to a file of targets, one IP, range or CIDR per line.")

    domains = parser.add_mutually_exclusive_group(required=True)
    domains.add_argument("-d", "--domain", help="Single domain to test.")
    domains.add_argument("-D", "--domains", help="Path to a file containing domains, one per line.")

    parser.add_argument("-w", "--wordlist", help="Path to a wordlist; each word is prefixed to every domain (www -> www.example.com).")
    parser.add_argument("-t", "--threads", type=int, default=defaults['threads'],
                        help=f"Number of concurrent requests (default: {defaults['threads']}).")
    parser.add_argument("--timeout", type=int, default=defaults['timeout'],
                        help=f"Request timeout in seconds (default: {defaults['timeout']}).")
    parser.add_argument("-m", "--match", default=defaults['match'],
                        help=f"Comma-separated status codes to keep (default: {defaults['match']}). An empty value keeps every code.")
    parser.add_argument("-x", "--exclude", default="", help="Comma-separated status codes to drop, even when matched.")

    certs = parser.add_mutually_exclusive_group()
    certs.add_argument("--ignore-cert", action="store_false", dest="verify_cert", default=False,
                       help="Skip TLS certificate verification (default).")
    certs.add_argument("--verify-cert", action="store_true", dest="verify_cert", help="Verify TLS certificates.")

    parser.add_argument("--protocol", choices=["http", "https", "both"], default="both", help="Protocol(s) to probe (default: both).")
    parser.add_argument("--show-errors", action="store_true", dest="record_failures",
                        help="Report failed requests as status 0 rows instead of dropping them.")
    parser.add_argument("-f", "--format", choices=["text", "json", "csv"], default="text", help="Output format (default: text).")
    parser.add_argument("-o", "--output", help="Output file path (default: stdout).")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show every request and scan progress.")
    return parser


def load_targets(args):
    if args.ip:
        return expand_targets(args.ip)
    return expand_target_list(read_lines(args.ip_list))


def load_domains(args):
    domains = [args.domain.strip()] if args.domain else read_lines(args.domains)
    if args.wordlist:
        domains = combine_wordlist_with_domains(domains, read_lines(args.wordlist))
    return domains


def main(argv=None):
    try:
        defaults = load_defaults()
    except ConfigurationError as e:
        setup_logging()
        logger.error(f"ERROR: {e}")
        return 1

    args = build_parser(defaults).parse_args(argv)
    setup_logging(args.verbose)

    protocols = PROTOCOLS if args.protocol == "both" else (args.protocol,)

    try:
        ips = load_targets(args)
        domains = load_domains(args)
        scanner = VhostScanner(
            ips=ips,
            domains=domains,
            protocols=protocols,
            threads=args.threads,
            timeout=args.timeout,
            verify_tls=args.verify_cert,
            include=parse_status_codes(args.match),
            exclude=parse_status_codes(args.exclude),
            record_failures=args.record_failures,
            verbose=args.verbose
        )
    except TargetError as e:
        logger.error(f"ERROR: Invalid IP format: {e}")
        logger.error("Supported formats: 192.168.1.1, 192.168.1.1-192.168.1.10, 192.168.1.0/24")
        return 1
    except (ConfigurationError, OSError) as e:
        logger.error(f"ERROR: {e}")
        return 1

    results = scanner.run()

    try:
        write_output(format_results(results, args.format), args.output)
    except OSError as e:
        logger.error(f"Error writing to output file: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
