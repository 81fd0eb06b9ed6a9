#! /usr/bin/python3

import re

from check_plugin import CheckPlugin, ConfigurationError
from verdict import Severity, Verdict, perfdata

# CISCO-CONTENT-ENGINE-MIB ceAlarmGroup
CONTENT_ENGINE_MIB = "1.3.6.1.4.1.9.9.178"

# criticity id: (name, active alarm counter)
ALARM_COUNTERS = (
    ('C', 'Critical', CONTENT_ENGINE_MIB + '.1.6.2.1.0'),
    ('M', 'Major', CONTENT_ENGINE_MIB + '.1.6.2.2.0'),
    ('N', 'Minor', CONTENT_ENGINE_MIB + '.1.6.2.3.0'),
)

CRITICITY_LIST_PATTERN = re.compile(r'^([CMN],)*[CMN]$')


def parse_criticity_list(text, option):
    if text is None:
        return set()
    if not CRITICITY_LIST_PATTERN.match(text):
        raise ConfigurationError('%s: must be a comma separated alarm criticity id (C, M or N) list' % option)
    return set(text.split(','))


class CheckCiscoCeAlarms(CheckPlugin):
    name = 'check_cisco_ce_alarms'
    help = """ Usage:
            -w  Alarm criticities raising WARNING when active, e.g. N
            -c  Alarm criticities raising CRITICAL when active, e.g. C,M

            Criticity ids: C (critical), M (major), N (minor)

            Example:
            ./check_cisco_ce_alarms.py -H 10.0.0.3 -C public -w N -c C,M
            """
    default_snmp_version = 1

    def __init__(self):
        super().__init__()
        self.warning_criticities = None
        self.critical_criticities = None

    def checkArguments(self):
        super().checkArguments()
        self.warning_criticities = parse_criticity_list(self.warnings, '-w')
        self.critical_criticities = parse_criticity_list(self.critical, '-c')

    def performCheck(self, snmp):
        values = snmp.get([oid for criticity, name, oid in ALARM_COUNTERS])
        if any(values[oid] is None for criticity, name, oid in ALARM_COUNTERS):
            return Verdict(Severity.UNKNOWN, 'Error recovering content engine alarm counters')

        active = [(criticity, name, values[oid]) for criticity, name, oid in ALARM_COUNTERS if values[oid] > 0]
        performance_data = [perfdata('%sAlarms' % name, values[oid], minimum=0)
                            for criticity, name, oid in ALARM_COUNTERS]
        if not active:
            return Verdict(Severity.OK, 'No active alarms', performance_data)

        if any(criticity in self.critical_criticities for criticity, name, count in active):
            severity = Severity.CRITICAL
        elif any(criticity in self.warning_criticities for criticity, name, count in active):
            severity = Severity.WARNING
        else:
            severity = Severity.OK
        message = ', '.join('%s active alarms: %d' % (name, count) for criticity, name, count in active)
        return Verdict(severity, message, performance_data)


def main():
    CheckCiscoCeAlarms().run()


if __name__ == "__main__":
    main()
