import pytest

from check_cisco_ce_alarms import CheckCiscoCeAlarms, parse_criticity_list
from check_plugin import ConfigurationError
from verdict import Severity

HOST = ['-H', '192.0.2.3', '-C', 'public']

CRITICAL = '1.3.6.1.4.1.9.9.178.1.6.2.1.0'
MAJOR = '1.3.6.1.4.1.9.9.178.1.6.2.2.0'
MINOR = '1.3.6.1.4.1.9.9.178.1.6.2.3.0'


def counters(critical=0, major=0, minor=0):
    return {CRITICAL: critical, MAJOR: major, MINOR: minor}


def test_parse_criticity_list():
    assert parse_criticity_list('C,M', '-c') == {'C', 'M'}
    assert parse_criticity_list(None, '-c') == set()
    for text in ('', 'X', 'C,', 'C;M', 'c'):
        with pytest.raises(ConfigurationError):
            parse_criticity_list(text, '-w')


def test_defaults_to_snmp_v1():
    assert CheckCiscoCeAlarms().snmp_version == 1


def test_no_active_alarms(fake_snmp):
    verdict = CheckCiscoCeAlarms().execute(HOST + ['-w', 'N', '-c', 'C,M'], snmp=fake_snmp(counters()))
    assert verdict.output() == ('OK: No active alarms | CriticalAlarms=0;;;0; MajorAlarms=0;;;0; '
                                'MinorAlarms=0;;;0;')


@pytest.mark.parametrize('data, severity, message', [
    (counters(minor=2), Severity.WARNING, 'Minor active alarms: 2'),
    (counters(major=1, minor=3), Severity.CRITICAL, 'Major active alarms: 1, Minor active alarms: 3'),
    (counters(critical=1), Severity.CRITICAL, 'Critical active alarms: 1'),
])
def test_active_alarms(data, severity, message, fake_snmp):
    verdict = CheckCiscoCeAlarms().execute(HOST + ['-w', 'N', '-c', 'C,M'], snmp=fake_snmp(data))
    assert verdict.severity == severity
    assert verdict.message == message


def test_alarms_without_lists(fake_snmp):
    verdict = CheckCiscoCeAlarms().execute(HOST, snmp=fake_snmp(counters(critical=1)))
    assert verdict.severity == Severity.OK
    assert verdict.message == 'Critical active alarms: 1'


def test_unreadable_counters(fake_snmp):
    verdict = CheckCiscoCeAlarms().execute(HOST, snmp=fake_snmp({CRITICAL: 0}))
    assert verdict.output() == 'UNKNOWN: Error recovering content engine alarm counters'


def test_invalid_list(fake_snmp):
    verdict = CheckCiscoCeAlarms().execute(HOST + ['-c', 'C,X'], snmp=fake_snmp(counters()))
    assert verdict.severity == Severity.UNKNOWN
    assert verdict.message.startswith('-c: must be a comma separated alarm criticity id')
