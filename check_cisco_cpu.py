#! /usr/bin/python3

from check_plugin import CheckPlugin, ConfigurationError, parse_positive_int, parse_threshold, table_column
from verdict import Metric, Severity, Verdict, evaluate

OLD_CISCO_CPU_MIB = "1.3.6.1.4.1.9.2.1"
CISCO_PROCESS_MIB = "1.3.6.1.4.1.9.9.109"
ENT_PHYSICAL_DESCR = "1.3.6.1.2.1.47.1.1.1.1.2"

OID_CPM_CPU_TOTAL_ENTRY = CISCO_PROCESS_MIB + '.1.1.1.1'
OID_CPM_CPU_TOTAL_PHYSICAL_INDEX = OID_CPM_CPU_TOTAL_ENTRY + '.2'

# interval: (label, perf label, avgBusy oid, deprecated column, revised column)
INTERVALS = {
    '5s': ('5 seconds', 'Load5sec', None, 3, 6),
    '1m': ('1 minute', 'Load1min', OLD_CISCO_CPU_MIB + '.57.0', 4, 7),
    '5m': ('5 minutes', 'Load5min', OLD_CISCO_CPU_MIB + '.58.0', 5, 8),
}


class CheckCiscoCpu(CheckPlugin):
    name = 'check_cisco_cpu'
    help = """ Usage:
            -r  CPU resource id (cpmCPUTotalIndex), without it the OLD-CISCO-CPU-MIB averages are used
            -i  Interval 5s, 1m or 5m (defaults to 1m, 5s needs -r)
            -d  Use the deprecated cpmCPUTotal5sec/1min/5min columns
            -w  Warning range of CPU busy percentage
            -c  Critical range of CPU busy percentage

            Without -w and -c the plugin runs in test mode and lists the CPUs of the device.

            Example:
            ./check_cisco_cpu.py -H 10.0.0.1 -C public -r 1 -i 5m -w 80 -c 90
            """
    options = 'r:i:d'
    supports_test_mode = True

    def __init__(self):
        super().__init__()
        self.resource_id = None
        self.interval = '1m'
        self.deprecated = False
        self.warning_range = None
        self.critical_range = None

    def handleOption(self, opt, arg):
        if opt == '-r':
            self.resource_id = parse_positive_int(arg, '-r')
        elif opt == '-i':
            if arg not in INTERVALS:
                raise ConfigurationError("-i: invalid interval '%s', use one of 5s, 1m, 5m" % arg)
            self.interval = arg
        elif opt == '-d':
            self.deprecated = True
        else:
            super().handleOption(opt, arg)

    def checkArguments(self):
        super().checkArguments()
        if self.interval == '5s' and self.resource_id is None:
            raise ConfigurationError('-i 5s is only available with a CPU resource id -r')
        if not self.test_mode:
            self.warning_range = parse_threshold(self.warnings, '-w')
            self.critical_range = parse_threshold(self.critical, '-c')

    def column(self, interval):
        label, perf_label, old_oid, deprecated_column, revised_column = INTERVALS[interval]
        return deprecated_column if self.deprecated else revised_column

    def performCheck(self, snmp):
        label, perf_label, old_oid, deprecated_column, revised_column = INTERVALS[self.interval]

        if self.resource_id is None:
            value = snmp.get_value(old_oid)
            metric_label = '%s average of CPU busy percentage' % label
        else:
            value_oid = '%s.%d.%d' % (OID_CPM_CPU_TOTAL_ENTRY, self.column(self.interval), self.resource_id)
            index_oid = '%s.%d' % (OID_CPM_CPU_TOTAL_PHYSICAL_INDEX, self.resource_id)
            values = snmp.get([index_oid, value_oid])
            value = values[value_oid]
            if value is None:
                return Verdict(Severity.UNKNOWN, "CPU with id %d doesn't exist" % self.resource_id)
            description = ''
            if values[index_oid]:
                description = snmp.get_value('%s.%d' % (ENT_PHYSICAL_DESCR, values[index_oid])) or ''
            metric_label = '%s CPU load (%s)' % (label, description)

        return evaluate([Metric(metric_label, value, '%', self.warning_range, self.critical_range,
                                minimum=0, maximum=100, perf_label=perf_label)])

    def listDevice(self, snmp):
        lines = []
        old_values = snmp.get([INTERVALS['1m'][2], INTERVALS['5m'][2]])
        if any(value is not None for value in old_values.values()):
            lines.append('OLD-CISCO-CPU-MIB: 1 minute %s%%, 5 minutes %s%%' % tuple(
                '-' if value is None else value for value in (old_values[INTERVALS['1m'][2]],
                                                             old_values[INTERVALS['5m'][2]])))

        table = snmp.walk(OID_CPM_CPU_TOTAL_ENTRY)
        physical_indexes = table_column(snmp, OID_CPM_CPU_TOTAL_PHYSICAL_INDEX)
        descriptions = table_column(snmp, ENT_PHYSICAL_DESCR) if physical_indexes else {}
        for cpu_id, physical_index in sorted(physical_indexes.items()):
            loads = []
            for interval in ('5s', '1m', '5m'):
                load = table.get('%s.%d.%d' % (OID_CPM_CPU_TOTAL_ENTRY, self.column(interval), cpu_id))
                loads.append('%s %s%%' % (interval, '-' if load is None else load))
            lines.append('CPU id: %d, description: %s, load: %s' % (
                cpu_id, descriptions.get(physical_index, ''), ', '.join(loads)))

        if not lines:
            return Verdict(Severity.UNKNOWN, 'TEST MODE: no CPU usage info found')
        return Verdict(Severity.OK, 'TEST MODE\n' + '\n'.join(lines))


def main():
    CheckCiscoCpu().run()


if __name__ == "__main__":
    main()
