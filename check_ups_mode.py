#! /usr/bin/python3

import logging
import re

from check_plugin import CheckPlugin, ConfigurationError, parse_id_list
from verdict import Severity, Verdict, perfdata

log = logging.getLogger(__name__)

# UPS-MIB (RFC 1628)
MIB_UPS_BATTERY = "1.3.6.1.2.1.33.1.2"
MIB_UPS_OUTPUT = "1.3.6.1.2.1.33.1.4"

OID_UPS_OUTPUT_SOURCE = MIB_UPS_OUTPUT + '.1.0'
OID_UPS_BATTERY_STATUS = MIB_UPS_BATTERY + '.1.0'
OID_UPS_MINUTES_REMAINING = MIB_UPS_BATTERY + '.3.0'
OID_UPS_CHARGE_REMAINING = MIB_UPS_BATTERY + '.4.0'

UPS_MODE_ONLINE = 1
UPS_MODE_OFFLINE = 2
UPS_MODE_OFFLINE_LOWBATT = 3
UPS_MODE_OFFLINE_NOBATT = 4
UPS_MODE_BYPASSED = 5

MODE_MESSAGES = {
    UPS_MODE_ONLINE: 'UPS online',
    UPS_MODE_OFFLINE: 'UPS offline',
    UPS_MODE_OFFLINE_LOWBATT: 'UPS offline, battery LOW',
    UPS_MODE_OFFLINE_NOBATT: 'UPS offline, battery DEPLETED',
    UPS_MODE_BYPASSED: 'UPS in bypass mode: output NOT protected',
}

# upsOutputSource values
OUTPUT_SOURCE_NORMAL = 3
OUTPUT_SOURCE_BYPASS = 4
OUTPUT_SOURCE_BATTERY = 5

# upsBatteryStatus values
BATTERY_STATUS_LOW = 3
BATTERY_STATUS_DEPLETED = 4

BATTERY_THRESHOLD_PATTERN = re.compile(r'^(\d+)(%?)$')


class BatteryThreshold:
    """Battery level given as minutes of backup ('10') or charge percent ('25%')."""

    def __init__(self, text, option):
        match = BATTERY_THRESHOLD_PATTERN.match(text)
        if not match:
            raise ConfigurationError("%s: invalid battery threshold '%s', expected <minutes> or <percent>%%"
                                     % (option, text))
        self.limit = int(match.group(1))
        self.percent = match.group(2) == '%'

    def __str__(self):
        return '%d%s' % (self.limit, '%' if self.percent else '')

    @property
    def source(self):
        return 'battery charge percent' if self.percent else 'battery backup time'

    def reached(self, charge, backup):
        value = charge if self.percent else backup
        if value is None:
            return None
        return value <= self.limit


class CheckUpsMode(CheckPlugin):
    name = 'check_ups_mode'
    help = """ Usage:
            -w  Warning modes, comma separated list of mode ids (required)
            -c  Critical modes, comma separated list of mode ids (required)
            -l  Battery low threshold, minutes of backup <n> or charge percent <n>%
            -d  Battery depleted threshold, minutes of backup <n> or charge percent <n>%

            Modes:
                1  Online
                2  Offline
                3  Offline, battery low
                4  Offline, battery depleted
                5  Bypassed

            Example:
            ./check_ups_mode.py -H 10.0.0.10 -C public -w 2,3 -c 4,5 -l 15 -d 5
            """
    options = 'l:d:'
    thresholds_required = True

    def __init__(self):
        super().__init__()
        self.low_threshold = None
        self.depleted_threshold = None
        self.warning_modes = None
        self.critical_modes = None

    def handleOption(self, opt, arg):
        if opt == '-l':
            self.low_threshold = BatteryThreshold(arg, opt)
        elif opt == '-d':
            self.depleted_threshold = BatteryThreshold(arg, opt)
        else:
            super().handleOption(opt, arg)

    def checkArguments(self):
        super().checkArguments()
        self.warning_modes = parse_id_list(self.warnings, '-w', UPS_MODE_ONLINE, UPS_MODE_BYPASSED)
        self.critical_modes = parse_id_list(self.critical, '-c', UPS_MODE_ONLINE, UPS_MODE_BYPASSED)

        low, depleted = self.low_threshold, self.depleted_threshold
        if low and depleted and low.percent == depleted.percent and low.limit < depleted.limit:
            raise ConfigurationError('Battery low threshold %s is below depleted threshold %s' % (low, depleted))

    def batteryMode(self, snmp, charge, backup):
        mode = UPS_MODE_OFFLINE
        status = snmp.get_value(OID_UPS_BATTERY_STATUS)
        if status is None:
            return None, 'Unable to get UPS battery status'
        if status == BATTERY_STATUS_LOW:
            mode = UPS_MODE_OFFLINE_LOWBATT
        elif status == BATTERY_STATUS_DEPLETED:
            mode = UPS_MODE_OFFLINE_NOBATT

        for threshold, name, level in ((self.depleted_threshold, 'Depleted', UPS_MODE_OFFLINE_NOBATT),
                                       (self.low_threshold, 'Low', UPS_MODE_OFFLINE_LOWBATT)):
            if threshold is None or mode >= level:
                continue
            reached = threshold.reached(charge, backup)
            if reached is None:
                return None, '%s threshold set but unable to get %s' % (name, threshold.source)
            if reached:
                mode = level
        return mode, None

    def performCheck(self, snmp):
        values = snmp.get([OID_UPS_OUTPUT_SOURCE, OID_UPS_CHARGE_REMAINING, OID_UPS_MINUTES_REMAINING])
        source = values[OID_UPS_OUTPUT_SOURCE]
        charge = values[OID_UPS_CHARGE_REMAINING]
        backup = values[OID_UPS_MINUTES_REMAINING]
        log.debug('output source %s, charge %s, backup %s', source, charge, backup)

        if source == OUTPUT_SOURCE_NORMAL:
            mode = UPS_MODE_ONLINE
        elif source == OUTPUT_SOURCE_BYPASS:
            mode = UPS_MODE_BYPASSED
        elif source == OUTPUT_SOURCE_BATTERY:
            mode, error = self.batteryMode(snmp, charge, backup)
            if error:
                return Verdict(Severity.UNKNOWN, error)
        else:
            return Verdict(Severity.UNKNOWN, 'Unknown UPS output source %s' % source)

        if mode in self.critical_modes:
            severity = Severity.CRITICAL
        elif mode in self.warning_modes:
            severity = Severity.WARNING
        else:
            severity = Severity.OK

        details = []
        details.append('unknown battery charge' if charge is None else 'battery charged at %s%%' % charge)
        details.append('unknown backup time' if backup is None else '%s minutes of backup' % backup)
        message = '%s (%s)' % (MODE_MESSAGES[mode], ', '.join(details))

        if mode == UPS_MODE_BYPASSED:
            charge = backup = 0
        performance_data = []
        if charge is not None:
            performance_data.append(perfdata('BatteryCharge', charge, '%', minimum=0, maximum=100))
        if backup is not None:
            performance_data.append(perfdata('BatteryBackup', backup, 'min', minimum=0))
        return Verdict(severity, message, performance_data)


def main():
    CheckUpsMode().run()


if __name__ == "__main__":
    main()
