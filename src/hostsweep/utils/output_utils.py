import io
import os
import json
import csv
from ..config import logger

CSV_HEADERS = ['domain', 'ip', 'protocol', 'status_code', 'error']


def format_json(results):
    return json.dumps([r.to_dict() for r in results], indent=2)


def format_csv(results):
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=CSV_HEADERS, lineterminator='\n')
    writer.writeheader()
    for r in results:
        writer.writerow({
            'domain': r.domain,
            'ip': r.ip,
            'protocol': r.protocol,
            'status_code': r.status_code,
            'error': r.error or '',
        })
    return buffer.getvalue().rstrip('\n')


def format_text(results):
    lines = []
    for r in results:
        if r.error:
            lines.append(f"{r.protocol}://{r.domain} (IP: {r.ip}) - Error: {r.error}")
        else:
            lines.append(f"{r.protocol}://{r.domain} (IP: {r.ip}) - Status: {r.status_code}")
    return '\n'.join(lines)


FORMATTERS = {
    'json': format_json,
    'csv': format_csv,
    'text': format_text,
}


def format_results(results, output_format='text'):
    try:
        formatter = FORMATTERS[output_format]
    except KeyError:
        raise ValueError(f"unknown output format: {output_format}")
    return formatter(list(results))


def write_output(text, output_path=None):
    if not output_path:
        print(text)
        return

    directory = os.path.dirname(output_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(output_path, 'w') as f:
        f.write(text)
    logger.info(f"[*] Results saved to: {output_path}")
