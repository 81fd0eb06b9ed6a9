import pytest

from check_ups_mode import CheckUpsMode
from verdict import Severity

HOST = ['-H', '192.0.2.10', '-C', 'public']
MODES = ['-w', '2,3', '-c', '4,5']

OUTPUT_SOURCE = '1.3.6.1.2.1.33.1.4.1.0'
BATTERY_STATUS = '1.3.6.1.2.1.33.1.2.1.0'
MINUTES_REMAINING = '1.3.6.1.2.1.33.1.2.3.0'
CHARGE_REMAINING = '1.3.6.1.2.1.33.1.2.4.0'


def ups(source, status=2, minutes=45, charge=100):
    return {OUTPUT_SOURCE: source, BATTERY_STATUS: status, MINUTES_REMAINING: minutes, CHARGE_REMAINING: charge}


def test_online(fake_snmp):
    verdict = CheckUpsMode().execute(HOST + MODES, snmp=fake_snmp(ups(3)))
    assert verdict.output() == ('OK: UPS online (battery charged at 100%, 45 minutes of backup) | '
                                'BatteryCharge=100%;;;0;100 BatteryBackup=45min;;;0;')


def test_bypass_reports_zero_battery(fake_snmp):
    verdict = CheckUpsMode().execute(HOST + MODES, snmp=fake_snmp(ups(4)))
    assert verdict.severity == Severity.CRITICAL
    assert verdict.message.startswith('UPS in bypass mode: output NOT protected')
    assert verdict.performance_data == ['BatteryCharge=0%;;;0;100', 'BatteryBackup=0min;;;0;']


@pytest.mark.parametrize('data, options, severity, message', [
    (ups(5), [], Severity.WARNING, 'UPS offline'),
    (ups(5, status=3), [], Severity.WARNING, 'UPS offline, battery LOW'),
    (ups(5, status=4), [], Severity.CRITICAL, 'UPS offline, battery DEPLETED'),
    (ups(5, minutes=12), ['-l', '15', '-d', '5'], Severity.WARNING, 'UPS offline, battery LOW'),
    (ups(5, minutes=4), ['-l', '15', '-d', '5'], Severity.CRITICAL, 'UPS offline, battery DEPLETED'),
    (ups(5, minutes=30), ['-l', '15', '-d', '5'], Severity.WARNING, 'UPS offline'),
    (ups(5, charge=20), ['-l', '25%'], Severity.WARNING, 'UPS offline, battery LOW'),
    (ups(5, charge=20), ['-d', '20%'], Severity.CRITICAL, 'UPS offline, battery DEPLETED'),
    (ups(5, status=3, charge=5), ['-d', '10%'], Severity.CRITICAL, 'UPS offline, battery DEPLETED'),
])
def test_on_battery(data, options, severity, message, fake_snmp):
    verdict = CheckUpsMode().execute(HOST + MODES + options, snmp=fake_snmp(data))
    assert verdict.severity == severity
    assert verdict.message.split(' (')[0] == message


def test_low_threshold_does_not_deplete(fake_snmp):
    verdict = CheckUpsMode().execute(HOST + ['-w', '3', '-c', '4', '-l', '50%', '-d', '10%'],
                                     snmp=fake_snmp(ups(5, charge=40)))
    assert verdict.severity == Severity.WARNING


def test_threshold_without_value(fake_snmp):
    data = ups(5)
    data[MINUTES_REMAINING] = None
    verdict = CheckUpsMode().execute(HOST + MODES + ['-d', '5'], snmp=fake_snmp(data))
    assert verdict.output() == 'UNKNOWN: Depleted threshold set but unable to get battery backup time'


def test_unknown_output_source(fake_snmp):
    verdict = CheckUpsMode().execute(HOST + MODES, snmp=fake_snmp(ups(2)))
    assert verdict.output() == 'UNKNOWN: Unknown UPS output source 2'


def test_missing_battery_data(fake_snmp):
    verdict = CheckUpsMode().execute(HOST + MODES, snmp=fake_snmp({OUTPUT_SOURCE: 3}))
    assert verdict.output() == 'OK: UPS online (unknown battery charge, unknown backup time)'


@pytest.mark.parametrize('options, message', [
    (['-l', '5', '-d', '10'], 'Battery low threshold 5 is below depleted threshold 10'),
    (['-l', 'ten'], "-l: invalid battery threshold 'ten'"),
    (['-w', '6', '-c', '4'], '-w: id 6 out of range 1..5'),
])
def test_invalid_arguments(options, message, fake_snmp):
    argv = HOST + options
    if '-w' not in options:
        argv += MODES
    verdict = CheckUpsMode().execute(argv, snmp=fake_snmp())
    assert verdict.severity == Severity.UNKNOWN
    assert verdict.message.startswith(message)


def test_modes_are_required(fake_snmp):
    verdict = CheckUpsMode().execute(HOST + ['-w', '2'], snmp=fake_snmp(ups(3)))
    assert verdict.output() == 'UNKNOWN: Both warning -w and critical -c must be defined'
