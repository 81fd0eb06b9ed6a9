import logging

import pytest

import check_plugin
from check_plugin import (CheckPlugin, ConfigurationError, parse_id_list, parse_positive_int, split_thresholds,
                          state_verdict)
from nagios_range import NO_RANGE, parse_range
from snmp_client import SnmpClient
from verdict import Severity, Verdict

HOST = ['-H', '192.0.2.10']


class EchoPlugin(CheckPlugin):
    name = 'check_echo'
    help = 'Usage: check_echo'

    def performCheck(self, snmp):
        return Verdict(Severity.OK, 'value is %s' % snmp.get_value('1.3.6.1.2.1.1.3.0'))


class ListingPlugin(EchoPlugin):
    supports_test_mode = True

    def listDevice(self, snmp):
        return Verdict(Severity.OK, 'TEST MODE')


@pytest.mark.parametrize('text, expected', [
    ('1', [1]),
    ('1..4,11', [1, 2, 3, 4, 11]),
    ('5..10', [5, 6, 7, 8, 9, 10]),
    ('3,1,3', [1, 3]),
    ('7..7', [7]),
    ('0,65535', [0, 65535]),
])
def test_parse_id_list(text, expected):
    assert parse_id_list(text, '-w') == expected


@pytest.mark.parametrize('text', ['', 'a', '1,', ',1', '1...4', '1-4', '4..1', '65536', '1;2', ' 1'])
def test_parse_id_list_rejects(text):
    with pytest.raises(ConfigurationError):
        parse_id_list(text, '-w')


def test_parse_id_list_bounds():
    assert parse_id_list('1..5', '-c', 1, 5) == [1, 2, 3, 4, 5]
    with pytest.raises(ConfigurationError, match='out of range'):
        parse_id_list('6', '-c', 1, 5)
    with pytest.raises(ConfigurationError, match='out of range'):
        parse_id_list('0', '-c', 1, 5)


def test_split_thresholds():
    ranges = split_thresholds('210:240,,~:40', 3, '-w')
    assert ranges == [parse_range('210:240'), NO_RANGE, parse_range('~:40')]
    assert split_thresholds(None, 4, '-w') == [NO_RANGE] * 4


@pytest.mark.parametrize('text', ['210:240,~:40', '1,2,3,4', 'abc,,'])
def test_split_thresholds_rejects(text):
    with pytest.raises(ConfigurationError, match='-c'):
        split_thresholds(text, 3, '-c')


def test_parse_positive_int():
    assert parse_positive_int('161', '-P') == 161
    with pytest.raises(ConfigurationError, match='integer'):
        parse_positive_int('x', '-P')
    with pytest.raises(ConfigurationError, match='greater than 0'):
        parse_positive_int('0', '-P')


def test_state_verdict():
    entries = [('Fan 1: Powered on', 2), ('Fan 2: Powered down', 3), ('Fan 3: Partial failure', 4)]
    critical = state_verdict(entries, [4], [3], 'all fine')
    assert critical.severity == Severity.CRITICAL
    assert critical.message == 'Fan 2: Powered down'
    warning = state_verdict(entries, [1, 4], [], 'all fine')
    assert warning.severity == Severity.WARNING
    assert warning.message == 'Fan 3: Partial failure'
    ok = state_verdict(entries, [1], [5], 'all fine')
    assert (ok.severity, ok.message) == (Severity.OK, 'all fine')


def test_common_options(fake_snmp):
    plugin = EchoPlugin()
    verdict = plugin.execute(['-H', 'ups1', '-C', 'secret', '-E', '2c', '-P', '1161', '-t', '3'],
                             snmp=fake_snmp({'1.3.6.1.2.1.1.3.0': 42}))
    assert verdict.output() == 'OK: value is 42'
    assert (plugin.snmp_host, plugin.snmp_community, plugin.snmp_version) == ('ups1', 'secret', 2)
    assert (plugin.snmp_port, plugin.snmp_timeout) == (1161, 3)


@pytest.mark.parametrize('argv, message', [
    ([], 'snmp_host -H is not defined'),
    (HOST + ['-P', '0'], '-P must be greater than 0'),
    (HOST + ['-t', 'soon'], '-t must be an integer'),
    (HOST + ['-E', '4'], "unsupported SNMP version '4'"),
    (HOST + ['-Z'], 'option -Z not recognized'),
    (HOST + ['-C'], 'option -C requires argument'),
    (HOST + ['extra'], 'Unexpected arguments: extra'),
])
def test_configuration_errors(argv, message, fake_snmp):
    snmp = fake_snmp()
    verdict = EchoPlugin().execute(argv, snmp=snmp)
    assert verdict.severity == Severity.UNKNOWN
    assert message in verdict.message
    assert snmp.requests == []


@pytest.mark.parametrize('argv, message', [
    (['-E', '3'], 'security name -U'),
    (['-E', '3', '-U', 'monitor', '-a', 'SHA'], 'pass phrase -A'),
    (['-E', '3', '-U', 'monitor', '-a', 'SHA512', '-A', 'secret12'], '-a must be one of MD5, SHA'),
    (['-E', '3', '-U', 'monitor', '-x', 'AES', '-X', 'secret12'], 'requires authentication'),
    (['-E', '3', '-U', 'monitor', '-a', 'md5', '-A', 'secret12', '-x', '3DES', '-X', 'p'], '-x must be one of'),
    (['-E', '3', '-U', 'monitor', '-a', 'md5', '-A', 'secret12', '-x', 'aes'], 'pass phrase -X'),
])
def test_usm_errors(argv, message, fake_snmp):
    verdict = EchoPlugin().execute(HOST + argv, snmp=fake_snmp())
    assert verdict.severity == Severity.UNKNOWN
    assert message in verdict.message


def test_usm_connect(monkeypatch):
    recorded = {}

    def fake_usm_credentials(*args):
        recorded['usm'] = args
        return 'usm'

    monkeypatch.setattr(check_plugin, 'usm_credentials', fake_usm_credentials)
    plugin = EchoPlugin()
    plugin.setup(HOST + ['-E', '3', '-U', 'monitor', '-a', 'sha', '-A', 'secret12', '-x', 'aes', '-X', 'secret34'])
    plugin.checkArguments()
    snmp = plugin.connect()
    assert isinstance(snmp, SnmpClient)
    assert snmp.credentials == 'usm'
    assert recorded['usm'] == ('monitor', 'SHA', 'secret12', 'AES', 'secret34')


def test_help_and_version(fake_snmp):
    verdict = EchoPlugin().execute(['-h'], snmp=fake_snmp())
    assert verdict.severity == Severity.UNKNOWN
    assert 'Usage: check_echo' in verdict.message
    assert '-H  Address or hostname' in verdict.message

    verdict = EchoPlugin().execute(['-V'], snmp=fake_snmp())
    assert verdict.output() == 'OK: check_echo %s' % check_plugin.__version__


def test_snmp_error_is_unknown(fake_snmp):
    verdict = EchoPlugin().execute(HOST + ['-C', 'secret'], snmp=fake_snmp(error='requestTimedOut'))
    assert verdict.severity == Severity.UNKNOWN
    assert verdict.message == "Error 'requestTimedOut' retrieving info from agent 192.0.2.10:161"
    assert 'secret' not in verdict.output()


def test_test_mode(fake_snmp):
    assert ListingPlugin().execute(HOST, snmp=fake_snmp()).message == 'TEST MODE'
    assert ListingPlugin().execute(HOST + ['-w', '1', '-c', '2'],
                                   snmp=fake_snmp({'1.3.6.1.2.1.1.3.0': 7})).message == 'value is 7'
    verdict = ListingPlugin().execute(HOST + ['-w', '1'], snmp=fake_snmp())
    assert verdict.severity == Severity.UNKNOWN
    assert verdict.message == 'Both warning -w and critical -c must be defined'


def test_verbose_enables_debug_logging(monkeypatch, fake_snmp):
    calls = []
    monkeypatch.setattr(logging, 'basicConfig', lambda **kwargs: calls.append(kwargs))
    EchoPlugin().execute(HOST + ['-v'], snmp=fake_snmp())
    assert calls and calls[0]['level'] == logging.DEBUG


def test_run_exits_with_severity(monkeypatch, capsys, fake_snmp):
    monkeypatch.setattr('sys.argv', ['check_echo'])
    with pytest.raises(SystemExit) as exit_info:
        EchoPlugin().run()
    assert exit_info.value.code == 3
    assert capsys.readouterr().out == 'UNKNOWN: snmp_host -H is not defined\n'
