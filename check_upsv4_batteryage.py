#! /usr/bin/python3

import datetime

from check_plugin import CheckPlugin, parse_threshold
from verdict import Metric, Severity, Verdict, evaluate

# DeltaUPS-MIB dupsBattery group
MIB_UPS_BATTERY = "1.3.6.1.4.1.2254.2.4.7"

OID_BATTERY_CONDITION = MIB_UPS_BATTERY + '.1.0'
OID_NEXT_REPLACE_DATE = MIB_UPS_BATTERY + '.11.0'

CONDITION_GOOD = 0
CONDITION_WEAK = 1
CONDITION_REPLACE = 2

CONDITION_NAMES = {CONDITION_GOOD: 'good', CONDITION_WEAK: 'weak', CONDITION_REPLACE: 'replace'}
CONDITION_SEVERITY = {
    CONDITION_GOOD: Severity.OK,
    CONDITION_WEAK: Severity.WARNING,
    CONDITION_REPLACE: Severity.CRITICAL,
}


def parse_replace_date(value):
    text = str(value).strip()
    try:
        return datetime.datetime.strptime(text, '%Y%m%d').date()
    except ValueError:
        return None


class CheckUpsv4BatteryAge(CheckPlugin):
    name = 'check_upsv4_batteryage'
    help = """ Usage:
            -w  Warning range of days past the battery replace date, e.g. ~:5 (required)
            -c  Critical range of days past the battery replace date, e.g. ~:10 (required)

            A weak battery condition is at least WARNING, a replace condition is CRITICAL.

            Example:
            ./check_upsv4_batteryage.py -H 10.0.0.20 -C public -w ~:5 -c ~:10
            """
    thresholds_required = True

    def __init__(self):
        super().__init__()
        self.warning_range = None
        self.critical_range = None

    def checkArguments(self):
        super().checkArguments()
        self.warning_range = parse_threshold(self.warnings, '-w')
        self.critical_range = parse_threshold(self.critical, '-c')

    def today(self):
        return datetime.date.today()

    def performCheck(self, snmp):
        values = snmp.get([OID_BATTERY_CONDITION, OID_NEXT_REPLACE_DATE])
        condition = values[OID_BATTERY_CONDITION]
        if condition not in CONDITION_NAMES:
            return Verdict(Severity.UNKNOWN, 'Error recovering battery condition (%s)' % OID_BATTERY_CONDITION)
        if values[OID_NEXT_REPLACE_DATE] is None:
            return Verdict(Severity.UNKNOWN, 'Error recovering battery replace date (%s)' % OID_NEXT_REPLACE_DATE)
        replace_date = parse_replace_date(values[OID_NEXT_REPLACE_DATE])
        if replace_date is None:
            return Verdict(Severity.UNKNOWN, "Invalid battery replace date '%s'" % values[OID_NEXT_REPLACE_DATE])

        expired_days = (self.today() - replace_date).days
        verdict = evaluate([Metric('Battery expired days', expired_days, 'd', self.warning_range,
                                   self.critical_range, perf_label='BatteryExpiredDays')])

        if expired_days > 0:
            when = '%d days ago' % expired_days
        else:
            when = '%d days remaining' % -expired_days
        message = 'Battery replace date %s (%s), device reports battery condition as \'%s\'' % (
            replace_date.strftime('%d/%m/%Y'), when, CONDITION_NAMES[condition])

        verdict = verdict.worst(Verdict(CONDITION_SEVERITY[condition]))
        return Verdict(verdict.severity, message, verdict.performance_data)


def main():
    CheckUpsv4BatteryAge().run()


if __name__ == "__main__":
    main()
