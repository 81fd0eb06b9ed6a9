#! /usr/bin/python3

from check_plugin import CheckPlugin, ConfigurationError, parse_positive_int, parse_threshold, table_column
from verdict import Metric, Severity, Verdict, evaluate

# CISCO-ENTITY-SENSOR-MIB entSensorValueEntry
ENT_SENSOR_VALUE_ENTRY = "1.3.6.1.4.1.9.9.91.1.1.1.1"
ENT_PHYSICAL_DESCR = "1.3.6.1.2.1.47.1.1.1.1.2"

OID_SENSOR_TYPE = ENT_SENSOR_VALUE_ENTRY + '.1'
OID_SENSOR_SCALE = ENT_SENSOR_VALUE_ENTRY + '.2'
OID_SENSOR_PRECISION = ENT_SENSOR_VALUE_ENTRY + '.3'
OID_SENSOR_VALUE = ENT_SENSOR_VALUE_ENTRY + '.4'
OID_SENSOR_STATUS = ENT_SENSOR_VALUE_ENTRY + '.5'

SENSOR_STATUS_OK = 1
SENSOR_STATUS = {
    1: ('Ok', 'The agent can read the sensor value'),
    2: ('Unavailable', 'Agent presently can not report the sensor value'),
    3: ('Nonoperational', 'Agent believes the sensor is broken'),
}

# SensorDataType: (name, unit)
SENSOR_TYPES = {
    1: ('Other', ''),
    2: ('Unknown', ''),
    3: ('VoltsAC', 'V'),
    4: ('VoltsDC', 'V'),
    5: ('Amperes', 'A'),
    6: ('Watts', 'W'),
    7: ('Hertz', 'Hz'),
    8: ('Celsius', 'C'),
    9: ('PercentRH', '%'),
    10: ('Rpm', 'rpm'),
    11: ('Cmm', 'cmm'),
    12: ('Truthvalue', ''),
    13: ('SpecialEnum', ''),
    14: ('Dbm', 'dBm'),
}

# SensorDataScale: (name, power of ten)
SENSOR_SCALES = {
    1: ('Yocto', -24),
    2: ('Zepto', -21),
    3: ('Atto', -18),
    4: ('Femto', -15),
    5: ('Pico', -12),
    6: ('Nano', -9),
    7: ('Micro', -6),
    8: ('Milli', -3),
    9: ('Units', 0),
    10: ('Kilo', 3),
    11: ('Mega', 6),
    12: ('Giga', 9),
    13: ('Tera', 12),
    14: ('Exa', 18),
    15: ('Peta', 15),
    16: ('Zetta', 21),
    17: ('Yotta', 24),
}


def normalize(value, scale, precision):
    exponent = SENSOR_SCALES.get(scale, ('Units', 0))[1] - (precision or 0)
    if exponent >= 0:
        return value * 10 ** exponent
    return value / 10 ** -exponent


class CheckCiscoSensor(CheckPlugin):
    name = 'check_cisco_sensor'
    help = """ Usage:
            -e  Sensor id (entPhysicalIndex)
            -l  Sensor label (defaults to the entPhysicalDescr of the sensor)
            -w  Warning range of the sensor value
            -c  Critical range of the sensor value

            Without -e the plugin runs in test mode and lists the sensors of the device.

            Example:
            ./check_cisco_sensor.py -H 10.0.0.1 -C public -e 1008 -w 40 -c 50
            """
    options = 'e:l:'
    supports_test_mode = True

    def __init__(self):
        super().__init__()
        self.sensor_id = None
        self.label = None
        self.warning_range = None
        self.critical_range = None

    def handleOption(self, opt, arg):
        if opt == '-e':
            self.sensor_id = parse_positive_int(arg, '-e')
        elif opt == '-l':
            self.label = arg
        else:
            super().handleOption(opt, arg)

    def checkArguments(self):
        super().checkArguments()
        if self.sensor_id is None:
            if not self.test_mode:
                raise ConfigurationError('Sensor id -e is required to check thresholds')
            return
        self.test_mode = False
        self.warning_range = parse_threshold(self.warnings, '-w')
        self.critical_range = parse_threshold(self.critical, '-c')

    def performCheck(self, snmp):
        columns = (OID_SENSOR_STATUS, OID_SENSOR_VALUE, OID_SENSOR_TYPE, OID_SENSOR_PRECISION, OID_SENSOR_SCALE)
        oids = ['%s.%d' % (column, self.sensor_id) for column in columns]
        if self.label is None:
            oids.append('%s.%d' % (ENT_PHYSICAL_DESCR, self.sensor_id))
        values = snmp.get(oids)
        status, value, sensor_type, precision, scale = [values[oid] for oid in oids[:5]]

        if status is None:
            return Verdict(Severity.UNKNOWN, 'No Such Instance (%d) currently exists at this OID' % self.sensor_id)
        if status != SENSOR_STATUS_OK:
            name, description = SENSOR_STATUS.get(status, ('Unknown', 'unknown status %s' % status))
            return Verdict(Severity.UNKNOWN, 'Sensor with id %d is not ok. It is %s: %s' % (
                self.sensor_id, name, description))

        if value is None:
            return Verdict(Severity.UNKNOWN, 'Error recovering sensor value with id %d' % self.sensor_id)

        label = self.label
        if label is None:
            label = values[oids[5]] or 'Sensor %d' % self.sensor_id
        value = normalize(value, scale, precision)
        unit = SENSOR_TYPES.get(sensor_type, ('Unknown', ''))[1]

        metric = Metric('Sensor "%s"' % label, value, unit, self.warning_range, self.critical_range,
                        perf_label=label)
        verdict = evaluate([metric])
        if verdict.severity == Severity.OK:
            verdict.message = metric.describe(Severity.OK)
            verdict.performance_data = [metric.perfdata()]
        return verdict

    def listDevice(self, snmp):
        statuses = table_column(snmp, OID_SENSOR_STATUS)
        if not statuses:
            return Verdict(Severity.UNKNOWN, 'TEST MODE: no sensors found')

        descriptions = table_column(snmp, ENT_PHYSICAL_DESCR)
        types = table_column(snmp, OID_SENSOR_TYPE)
        scales = table_column(snmp, OID_SENSOR_SCALE)
        precisions = table_column(snmp, OID_SENSOR_PRECISION)
        values = table_column(snmp, OID_SENSOR_VALUE)
        lines = ['TEST MODE']
        for sensor_id in sorted(statuses):
            value = values.get(sensor_id)
            if value is not None:
                value = normalize(value, scales.get(sensor_id), precisions.get(sensor_id))
            type_name, unit = SENSOR_TYPES.get(types.get(sensor_id), ('Unknown', ''))
            lines.append('Sensor id: %d, description: %s, type: %s, status: %s, value: %s%s' % (
                sensor_id, descriptions.get(sensor_id, ''), type_name,
                SENSOR_STATUS.get(statuses[sensor_id], ('Unknown', ''))[0], value, unit))
        return Verdict(Severity.OK, '\n'.join(lines))


def main():
    CheckCiscoSensor().run()


if __name__ == "__main__":
    main()
