#! /usr/bin/python3

from check_plugin import CheckPlugin, parse_id_list, state_verdict
from verdict import Severity, Verdict, perfdata

# CISCO-ENVMON-MIB ciscoEnvMonObjects
ENVMON_MIB = "1.3.6.1.4.1.9.9.13.1"

ENVMON_STATES = {
    1: ('Normal', 'The environment is good, such as low temperature'),
    2: ('Warning', 'The environment is bad, such as temperature above normal operation range but not too high'),
    3: ('Critical', 'The environment is very bad, such as temperature much higher than normal operation limit'),
    4: ('Shutdown', 'The environment is the worst, the system should be shutdown immediately'),
    5: ('NotPresent', 'The environmental monitor is not present, such as temperature sensors do not exist'),
    6: ('NotFunctioning', 'The environmental monitor does not function properly'),
}


class SensorKind:
    def __init__(self, option, name, entry_oid, state_column, value_column=None, unit=''):
        self.option = option
        self.name = name
        self.entry_oid = entry_oid
        self.state_column = state_column
        self.value_column = value_column
        self.unit = unit

    def column(self, table, column, sensor_id):
        return table.get('%s.%d.%d' % (self.entry_oid, column, sensor_id))

    def value(self, table, sensor_id):
        if self.value_column is None:
            return None
        return self.column(table, self.value_column, sensor_id)

    def perfdata(self, table, sensor_id, label):
        return None


class VoltageKind(SensorKind):
    def value(self, table, sensor_id):
        millivolts = super().value(table, sensor_id)
        return None if millivolts is None else millivolts / 1000

    def perfdata(self, table, sensor_id, label):
        value = self.value(table, sensor_id)
        if value is None:
            return None
        low = self.column(table, 4, sensor_id)
        high = self.column(table, 5, sensor_id)
        return perfdata(label, value, 'V', minimum=None if low is None else low / 1000,
                        maximum=None if high is None else high / 1000)


class TemperatureKind(SensorKind):
    def perfdata(self, table, sensor_id, label):
        value = self.value(table, sensor_id)
        if value is None:
            return None
        return perfdata(label, value, 'C', maximum=self.column(table, 4, sensor_id))


SENSOR_KINDS = (
    VoltageKind('-g', 'Voltage', ENVMON_MIB + '.2.1', 7, 3, 'V'),
    TemperatureKind('-T', 'Temperature', ENVMON_MIB + '.3.1', 6, 3, 'C'),
    SensorKind('-f', 'Fan', ENVMON_MIB + '.4.1', 3),
    SensorKind('-s', 'Supply', ENVMON_MIB + '.5.1', 3),
)


class CheckCiscoEnvmon(CheckPlugin):
    name = 'check_cisco_envmon'
    help = """ Usage:
            -g  Voltage sensor ids, e.g. 1,2 or all
            -T  Temperature sensor ids, e.g. 1..3 or all
            -f  Fan ids or all
            -s  Power supply ids or all
            -w  Warning states, comma separated list of state ids
            -c  Critical states, comma separated list of state ids

            Without -g, -T, -f and -s every sensor is checked.
            Without -w and -c the plugin runs in test mode and lists the sensors of the device.

            States:
                1  Normal
                2  Warning
                3  Critical
                4  Shutdown
                5  NotPresent
                6  NotFunctioning

            Example:
            ./check_cisco_envmon.py -H 10.0.0.1 -C public -T all -f 1,2 -w 2 -c 3,4,6
            """
    options = 'g:T:f:s:'
    supports_test_mode = True

    def __init__(self):
        super().__init__()
        # sensor kind name: list of ids, or 'all'
        self.selected = {}
        self.warning_states = None
        self.critical_states = None

    def handleOption(self, opt, arg):
        for kind in SENSOR_KINDS:
            if opt == kind.option:
                if arg.lower() == 'all':
                    self.selected[kind.name] = 'all'
                else:
                    # ENVMON table indexes are Integer32
                    self.selected[kind.name] = parse_id_list(arg, opt, maximum=2 ** 31 - 1)
                return
        super().handleOption(opt, arg)

    def checkArguments(self):
        super().checkArguments()
        if not self.selected:
            self.selected = dict((kind.name, 'all') for kind in SENSOR_KINDS)
        if not self.test_mode:
            self.warning_states = parse_id_list(self.warnings, '-w', 1, len(ENVMON_STATES))
            self.critical_states = parse_id_list(self.critical, '-c', 1, len(ENVMON_STATES))

    def describe(self, kind, table, sensor_id, state):
        text = "%s sensor '%s'" % (kind.name, kind.column(table, 2, sensor_id) or sensor_id)
        value = kind.value(table, sensor_id)
        if value is not None:
            text += ' with value = %s%s' % (value, kind.unit)
        name, description = ENVMON_STATES.get(state, ('Unknown', 'unknown state %s' % state))
        return '%s is in %s state (%s)' % (text, name, description)

    def performCheck(self, snmp):
        entries = []
        performance_data = []
        for kind in SENSOR_KINDS:
            if kind.name not in self.selected:
                continue
            table = snmp.walk(kind.entry_oid)
            states = self.stateColumn(kind, table)
            sensor_ids = sorted(states) if self.selected[kind.name] == 'all' else self.selected[kind.name]
            for sensor_id in sensor_ids:
                state = states.get(sensor_id)
                if state is None:
                    return Verdict(Severity.UNKNOWN, 'Error recovering %s state with id %d' % (
                        kind.name.lower(), sensor_id))
                entries.append((self.describe(kind, table, sensor_id, state), state))
                token = kind.perfdata(table, sensor_id, kind.column(table, 2, sensor_id) or
                                      '%s sensor %d' % (kind.name, sensor_id))
                if token:
                    performance_data.append(token)

        if not entries:
            return Verdict(Severity.UNKNOWN, 'No environmental sensors found')
        verdict = state_verdict(entries, self.warning_states, self.critical_states,
                                'Checked environmental sensor(s) return OK state(s)')
        verdict.performance_data = performance_data
        return verdict

    @staticmethod
    def stateColumn(kind, table):
        prefix = '%s.%d.' % (kind.entry_oid, kind.state_column)
        return dict((int(oid[len(prefix):]), value) for oid, value in table.items() if oid.startswith(prefix))

    def listDevice(self, snmp):
        lines = ['TEST MODE']
        for kind in SENSOR_KINDS:
            if kind.name not in self.selected:
                continue
            table = snmp.walk(kind.entry_oid)
            states = self.stateColumn(kind, table)
            if not states:
                continue
            lines.append('EnvMon%sStatus' % kind.name)
            for sensor_id in sorted(states):
                lines.append('%s id: %d, %s' % (kind.name, sensor_id,
                                                self.describe(kind, table, sensor_id, states[sensor_id])))
        if len(lines) == 1:
            return Verdict(Severity.UNKNOWN, 'TEST MODE: no environmental sensors found')
        return Verdict(Severity.OK, '\n'.join(lines))


def main():
    CheckCiscoEnvmon().run()


if __name__ == "__main__":
    main()
