import pytest

from snmp_client import SnmpError


class FakeSnmpClient:
    """Answers GET and WALK requests from a dict of oid -> value."""

    def __init__(self, data=None, error=None):
        self.data = dict(data or {})
        self.error = error
        self.requests = []

    def get(self, oids):
        oids = list(oids)
        self.requests.append(('get', oids))
        if self.error:
            raise SnmpError(self.error)
        return dict((oid, self.data.get(oid)) for oid in oids)

    def get_value(self, oid):
        return self.get([oid])[oid]

    def walk(self, oid):
        self.requests.append(('walk', oid))
        if self.error:
            raise SnmpError(self.error)
        prefix = oid + '.'
        return dict((key, value) for key, value in self.data.items()
                    if key.startswith(prefix) and value is not None)


@pytest.fixture
def fake_snmp():
    return FakeSnmpClient
