import ipaddress
from ..config import logger, MAX_RANGE_SIZE


class TargetError(ValueError):
    """Base class for target specifications that cannot be expanded."""


class InvalidIPError(TargetError):
    pass


class InvalidCIDRError(TargetError):
    pass


class InvalidRangeError(TargetError):
    pass


def expand_targets(target):
    """
    Expands a target specification into a list of IP address strings.

    Accepted forms:
        192.168.1.1                   single address
        192.168.1.1-192.168.1.10      dashed range, both ends inclusive
        192.168.1.1-10                dashed range, bare final octet
        192.168.1.0/24                CIDR block
    """
    target = target.strip()

    if '/' in target:
        return expand_cidr(target)

    if '-' in target:
        return expand_range(target)

    try:
        return [str(ipaddress.ip_address(target))]
    except ValueError:
        raise InvalidIPError(f"invalid IP address: {target}")


def expand_cidr(cidr):
    try:
        network = ipaddress.ip_network(cidr.strip(), strict=False)
    except ValueError as e:
        raise InvalidCIDRError(f"invalid CIDR notation: {e}")

    if network.num_addresses > MAX_RANGE_SIZE:
        raise InvalidCIDRError(f"CIDR block too large ({network.num_addresses} addresses, max {MAX_RANGE_SIZE})")

    addresses = [str(ip) for ip in network]
    # Network and broadcast addresses are not hosts
    if len(addresses) > 2:
        return addresses[1:-1]
    return addresses


def expand_range(ip_range):
    parts = ip_range.split('-')
    if len(parts) != 2:
        raise InvalidRangeError("invalid IP range format")

    start_part = parts[0].strip()
    end_part = parts[1].strip()

    try:
        start_ip = ipaddress.ip_address(start_part)
    except ValueError:
        raise InvalidRangeError("invalid start IP in range")

    if end_part.isdigit():
        octets = start_part.split('.')
        if len(octets) != 4:
            raise InvalidRangeError("invalid IP format")
        end_part = '.'.join(octets[:3] + [end_part])

    try:
        end_ip = ipaddress.ip_address(end_part)
    except ValueError:
        raise InvalidRangeError("invalid end IP in range")

    if start_ip.version != end_ip.version:
        raise InvalidRangeError("start and end of range are different address families")

    start = int(start_ip)
    count = int(end_ip) - start + 1
    # B < A would wrap through the whole address space
    if count < 1 or count > MAX_RANGE_SIZE:
        raise InvalidRangeError(f"IP range too large (max {MAX_RANGE_SIZE} IPs)")

    address_class = type(start_ip)
    return [str(address_class(start + offset)) for offset in range(count)]


def expand_target_list(targets):
    """Expands every target in order, keeping the first occurrence of each address."""
    seen = set()
    ips = []
    for target in targets:
        for ip in expand_targets(target):
            if ip in seen:
                logger.debug(f" [.] Skipping duplicate target {ip} from {target}")
                continue
            seen.add(ip)
            ips.append(ip)
    return ips
