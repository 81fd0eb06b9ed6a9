#! /usr/bin/python3

from check_plugin import AlarmListPlugin

# DeltaUPS-MIB dupsAlarm group, one scalar per alarm
MIB_UPS_ALARMS = "1.3.6.1.4.1.2254.2.4.9"

ALARM_ACTIVE = 1

ALARM_DESCRIPTIONS = {
    1: "UPS is disconnected",
    2: "Input power has failed",
    3: "UPS batteries low",
    4: "Load percent is over the load warning value",
    5: "Load percent is over the load severity value",
    6: "UPS load is on bypass",
    7: "General failure",
    8: "Battery ground is faulted",
    9: "UPS test is in progress",
    10: "UPS test has failed",
    11: "UPS fuse failure",
    12: "UPS output is overloaded",
    13: "UPS output is overcurrented",
    14: "UPS inverter is abnormal",
    15: "UPS rectifier is abnormal",
    16: "UPS reserve is abnormal",
    17: "UPS load is on reserve",
    18: "UPS over heat",
    19: "UPS output is abnormal",
    20: "UPS bypass is bad",
    21: "UPS is in standby mode",
    22: "UPS charger has failed",
    23: "UPS fan has failed",
    24: "UPS is in the economic mode",
    25: "UPS output is turned off",
    26: "Smart Shutdown is in progress",
    27: "UPS emergency power off",
}


class CheckUpsv4Alarms(AlarmListPlugin):
    name = 'check_upsv4_alarms'
    help = """ Usage:
            -w  Warning alarm ids, e.g. 9,21,24 (required)
            -c  Critical alarm ids, e.g. 1..8,10..20 (required)

            Example:
            ./check_upsv4_alarms.py -H 10.0.0.20 -C public -w 9,21,24 -c 1..8,10..20,22,23,25..27
            """
    descriptions = ALARM_DESCRIPTIONS

    def activeAlarms(self, snmp):
        oids = ['%s.%d.0' % (MIB_UPS_ALARMS, i) for i in sorted(ALARM_DESCRIPTIONS)]
        states = snmp.get(oids)
        return [i for i, oid in zip(sorted(ALARM_DESCRIPTIONS), oids) if states.get(oid) == ALARM_ACTIVE]


def main():
    CheckUpsv4Alarms().run()


if __name__ == "__main__":
    main()
