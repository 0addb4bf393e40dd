from collections import namedtuple
import threading

ProbeUnit = namedtuple('ProbeUnit', ['ip', 'domain', 'protocol'])


class ProbeResult(namedtuple('ProbeResult', ['domain', 'ip', 'protocol', 'status_code', 'error'])):
    """Outcome of one probe. status_code is 0 when no response was received."""

    __slots__ = ()

    @property
    def failed(self):
        return self.error is not None

    @property
    def unit(self):
        return ProbeUnit(self.ip, self.domain, self.protocol)

    def to_dict(self):
        data = {}
        if self.domain:
            data['domain'] = self.domain
        data['ip'] = self.ip
        data['protocol'] = self.protocol
        data['status_code'] = self.status_code
        if self.error:
            data['error'] = self.error
        return data


class ResultSet:
    """
    Append-only result collection shared by all probe workers.
    Entries keep completion order; a unit can only be recorded once.
    """

    def __init__(self):
        self._results = []
        self._seen_units = set()
        self._lock = threading.Lock()

    def append(self, result):
        unit = result.unit
        with self._lock:
            if unit in self._seen_units:
                return False
            self._seen_units.add(unit)
            self._results.append(result)
            return True

    def to_list(self):
        with self._lock:
            return list(self._results)

    def __iter__(self):
        return iter(self.to_list())

    def __len__(self):
        with self._lock:
            return len(self._results)

    def __bool__(self):
        return len(self) > 0
