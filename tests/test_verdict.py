import pytest

from nagios_range import parse_range
from verdict import Metric, Severity, Verdict, evaluate, perfdata


def metric(label, value, warning='', critical='', unit='', **kwargs):
    return Metric(label, value, unit, parse_range(warning), parse_range(critical), **kwargs)


def test_voltage_outside_warning_range():
    verdict = evaluate([metric('Voltage', 205, '210:240', '200:250')])
    assert verdict.severity == Severity.WARNING
    assert 'Voltage' in verdict.message
    assert verdict.message == 'Voltage = 205 (valid range is >=210 and <=240)'


def test_undefined_load_is_unknown():
    verdict = evaluate([metric('Load', None, '~:70', '~:90')])
    assert verdict.severity == Severity.UNKNOWN
    assert verdict.message == 'Load value not available'
    assert verdict.performance_data == ['Load=U;~:70;~:90;;']


def test_temperature_above_critical():
    verdict = evaluate([metric('Temp', 95, '~:40', '~:50', 'C')])
    assert verdict.severity == Severity.CRITICAL
    assert verdict.message == 'Temp = 95C (valid range is <=50)'


def test_evaluate_nothing():
    verdict = evaluate([])
    assert verdict.severity == Severity.OK
    assert verdict.message == ''
    assert verdict.performance_data == []


def test_critical_hides_warning_messages():
    verdict = evaluate([
        metric('Voltage', 205, '210:240', '200:250'),
        metric('Temp', 95, '~:40', '~:50'),
    ])
    assert verdict.severity == Severity.CRITICAL
    assert verdict.message == 'Temp = 95 (valid range is <=50)'


def test_all_violations_are_reported():
    verdict = evaluate([
        metric('Input #1: Voltage', 180, '210:240', '200:250'),
        metric('Input #2: Voltage', 230, '210:240', '200:250'),
        metric('Input #3: Voltage', 260, '210:240', '200:250'),
    ])
    assert verdict.severity == Severity.CRITICAL
    assert verdict.message == ('Input #1: Voltage = 180 (valid range is >=200 and <=250); '
                               'Input #3: Voltage = 260 (valid range is >=200 and <=250)')


def test_unknown_dominates():
    verdict = evaluate([
        metric('Temp', 95, '~:40', '~:50'),
        metric('Load', None, '~:70', '~:90'),
        metric('Voltage', 230, '210:240', '200:250'),
    ])
    assert verdict.severity == Severity.UNKNOWN
    assert verdict.message == 'Load value not available'


def test_unconfigured_metrics_are_ignored():
    verdict = evaluate([
        metric('Current', None),
        metric('Power', 1200),
        metric('Voltage', 230, '210:240', '200:250', 'V'),
    ])
    assert verdict.severity == Severity.OK
    assert verdict.message == 'Voltage = 230V'
    assert verdict.performance_data == ['Voltage=230V;210:240;200:250;;']


def test_perfdata_in_metric_order_regardless_of_severity():
    verdict = evaluate([
        metric('Frequency', 50, '49:51', unit='Hz', perf_label='In1Frequency'),
        metric('Voltage', 199, '210:240', '200:250', 'V', perf_label='In1Voltage'),
    ])
    assert verdict.severity == Severity.CRITICAL
    assert verdict.performance_data == [
        'In1Frequency=50Hz;49:51;;;',
        'In1Voltage=199V;210:240;200:250;;',
    ]


@pytest.mark.parametrize('args, kwargs, expected', [
    (('Load1min', 12, '%'), {'minimum': 0, 'maximum': 100}, 'Load1min=12%;;;0;100'),
    (('Battery Voltage', 27.3, 'V'), {}, "'Battery Voltage'=27.3V;;;;"),
    (("it's", 1), {}, "'it''s'=1;;;;"),
    (('BatteryCharge', None, '%'), {}, 'BatteryCharge=U;;;;'),
    (('Load', 80.0, '%'), {'warning': parse_range('~:70'), 'critical': parse_range('@90:')},
     'Load=80%;~:70;@90:;;'),
])
def test_perfdata(args, kwargs, expected):
    assert perfdata(*args, **kwargs) == expected


def test_verdict_output():
    assert Verdict(Severity.OK).output() == 'OK'
    assert Verdict(Severity.WARNING, 'UPS offline').output() == 'WARNING: UPS offline'
    verdict = Verdict(Severity.CRITICAL, 'Temp = 95C', ['Temp=95C;40;50;;', 'Fan=1;;;;'])
    assert verdict.output() == 'CRITICAL: Temp = 95C | Temp=95C;40;50;; Fan=1;;;;'
    assert verdict.exit_code == 2


def test_verdict_worst():
    ok = Verdict(Severity.OK, 'fine', ['a=1;;;;'])
    warning = Verdict(Severity.WARNING, 'weak battery', ['b=2;;;;'])
    combined = ok.worst(warning)
    assert combined.severity == Severity.WARNING
    assert combined.message == 'weak battery'
    assert combined.performance_data == ['a=1;;;;', 'b=2;;;;']
    assert warning.worst(ok).message == 'weak battery'
    assert warning.worst(Verdict(Severity.WARNING, 'hot')).message == 'weak battery; hot'


def test_severity_order():
    assert Severity.OK < Severity.WARNING < Severity.CRITICAL < Severity.UNKNOWN
    assert [int(s) for s in Severity] == [0, 1, 2, 3]
