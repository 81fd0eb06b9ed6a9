#! /usr/bin/python3

from check_plugin import CheckPlugin, split_thresholds
from verdict import Metric, evaluate

# UPS-MIB (RFC 1628) upsBattery group
MIB_UPS_BATTERY = "1.3.6.1.2.1.33.1.2"

# label, oid, unit, divisor
BATTERY_VALUES = (
    ('Battery Voltage', MIB_UPS_BATTERY + '.5.0', 'V', 1),
    ('Battery Current', MIB_UPS_BATTERY + '.6.0', 'A', 10),
    ('Battery Temperature', MIB_UPS_BATTERY + '.7.0', 'C', 1),
)


class CheckUpsBatteryValues(CheckPlugin):
    name = 'check_ups_battery_values'
    help = """ Usage:
            -w  Warning ranges <voltage>,<current>,<temperature>
            -c  Critical ranges <voltage>,<current>,<temperature>

            An empty field leaves that value unchecked.

            Example:
            ./check_ups_battery_values.py -H 10.0.0.10 -C public -w 210:240,,~:35 -c 200:250,,~:40
            """

    def __init__(self):
        super().__init__()
        self.warning_ranges = None
        self.critical_ranges = None

    def checkArguments(self):
        super().checkArguments()
        self.warning_ranges = split_thresholds(self.warnings, len(BATTERY_VALUES), '-w')
        self.critical_ranges = split_thresholds(self.critical, len(BATTERY_VALUES), '-c')

    def performCheck(self, snmp):
        checked = [i for i in range(len(BATTERY_VALUES))
                   if self.warning_ranges[i].configured or self.critical_ranges[i].configured]
        values = snmp.get([BATTERY_VALUES[i][1] for i in checked]) if checked else {}

        metrics = []
        for i in checked:
            label, oid, unit, divisor = BATTERY_VALUES[i]
            value = values.get(oid)
            if value is not None and divisor != 1:
                value = value / divisor
            metrics.append(Metric(label, value, unit, self.warning_ranges[i], self.critical_ranges[i]))
        return evaluate(metrics)


def main():
    CheckUpsBatteryValues().run()


if __name__ == "__main__":
    main()
