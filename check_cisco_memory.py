#! /usr/bin/python3

from check_plugin import CheckPlugin, parse_positive_int, split_thresholds, table_column
from verdict import Metric, Severity, Verdict, evaluate

# CISCO-MEMORY-POOL-MIB ciscoMemoryPoolEntry
CISCO_MEMORY_POOL_ENTRY = "1.3.6.1.4.1.9.9.48.1.1.1"

OID_MEMORY_POOL_NAME = CISCO_MEMORY_POOL_ENTRY + '.2'
OID_MEMORY_POOL_USED = CISCO_MEMORY_POOL_ENTRY + '.5'
OID_MEMORY_POOL_FREE = CISCO_MEMORY_POOL_ENTRY + '.6'
OID_MEMORY_POOL_LARGEST_FREE = CISCO_MEMORY_POOL_ENTRY + '.7'


def usage_percent(used, free):
    return round(used * 100.0 / (used + free), 1)


def fragmentation_percent(free, largest_free):
    if not free:
        return 0.0
    return round((1 - largest_free / free) * 100, 1)


class CheckCiscoMemory(CheckPlugin):
    name = 'check_cisco_memory'
    help = """ Usage:
            -p  Memory pool id (defaults to 1, the processor pool)
            -w  Warning ranges <used percent>,<fragmentation percent>
            -c  Critical ranges <used percent>,<fragmentation percent>

            Without -w and -c the plugin runs in test mode and lists the memory pools.

            Example:
            ./check_cisco_memory.py -H 10.0.0.1 -C public -p 1 -w 80,90 -c 90,95
            """
    options = 'p:'
    supports_test_mode = True

    def __init__(self):
        super().__init__()
        self.pool_id = 1
        self.warning_ranges = None
        self.critical_ranges = None

    def handleOption(self, opt, arg):
        if opt == '-p':
            self.pool_id = parse_positive_int(arg, '-p')
        else:
            super().handleOption(opt, arg)

    def checkArguments(self):
        super().checkArguments()
        if not self.test_mode:
            self.warning_ranges = split_thresholds(self.warnings, 2, '-w')
            self.critical_ranges = split_thresholds(self.critical, 2, '-c')

    def performCheck(self, snmp):
        oids = ['%s.%d' % (oid, self.pool_id) for oid in (
            OID_MEMORY_POOL_NAME, OID_MEMORY_POOL_USED, OID_MEMORY_POOL_FREE, OID_MEMORY_POOL_LARGEST_FREE)]
        values = snmp.get(oids)
        name, used, free, largest_free = [values[oid] for oid in oids]
        if used is None or free is None or not used + free:
            return Verdict(Severity.UNKNOWN, "No data found for pool '%d'" % self.pool_id)

        fragmentation = None if largest_free is None else fragmentation_percent(free, largest_free)
        return evaluate([
            Metric("'%s' memory usage" % name, usage_percent(used, free), '%',
                   self.warning_ranges[0], self.critical_ranges[0], 0, 100, perf_label='MemUsed'),
            Metric("'%s' fragmented memory" % name, fragmentation, '%',
                   self.warning_ranges[1], self.critical_ranges[1], 0, 100, perf_label='Fragmentation'),
        ])

    def listDevice(self, snmp):
        names = table_column(snmp, OID_MEMORY_POOL_NAME)
        if not names:
            return Verdict(Severity.UNKNOWN, 'TEST MODE: no memory pools found')

        used = table_column(snmp, OID_MEMORY_POOL_USED)
        free = table_column(snmp, OID_MEMORY_POOL_FREE)
        largest_free = table_column(snmp, OID_MEMORY_POOL_LARGEST_FREE)
        lines = ['TEST MODE']
        for pool_id in sorted(names):
            lines.append('Memory pool id: %d, name: %s, used: %s, free: %s, largest free block: %s' % (
                pool_id, names[pool_id], used.get(pool_id), free.get(pool_id), largest_free.get(pool_id)))
        return Verdict(Severity.OK, '\n'.join(lines))


def main():
    CheckCiscoMemory().run()


if __name__ == "__main__":
    main()
