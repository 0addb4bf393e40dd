from ..config import logger


def read_lines(path):
    """Reads a line-delimited file, trimming whitespace and skipping blank lines."""
    with open(path, 'r') as f:
        lines = [line.strip() for line in f if line.strip()]
    logger.debug(f"Loaded {len(lines)} entries from {path}.")
    return lines


def combine_wordlist_with_domains(domains, wordlist):
    if not wordlist:
        return list(domains)
    return [f"{word}.{domain}" for domain in domains for word in wordlist]


def parse_status_codes(text):
    codes = set()
    if not text:
        return codes
    for part in text.split(','):
        part = part.strip()
        if not part:
            continue
        try:
            codes.add(int(part))
        except ValueError:
            logger.warning(f" [!] Ignoring invalid status code {part!r}")
    return codes
