#! /usr/bin/python3

from check_plugin import AlarmListPlugin

# UPS-MIB (RFC 1628) upsAlarm group
MIB_UPS_ALARMS = "1.3.6.1.2.1.33.1.6"

OID_UPS_ALARMS_PRESENT = MIB_UPS_ALARMS + '.1.0'
OID_UPS_ALARM_DESCR = MIB_UPS_ALARMS + '.2.1.2'
OID_UPS_WELL_KNOWN_ALARMS = MIB_UPS_ALARMS + '.3'

# upsWellKnownAlarms
ALARM_DESCRIPTIONS = {
    1: "One or more batteries have been determined to require replacement",
    2: "The UPS is drawing power from the batteries",
    3: "The remaining battery run-time is less than or equal to upsConfigLowBattTime",
    4: "The UPS will be unable to sustain the present load when and if the utility power is lost",
    5: "A temperature is out of tolerance",
    6: "An input condition is out of tolerance",
    7: "An output condition (other than OutputOverload) is out of tolerance",
    8: "The output load exceeds the UPS output capacity",
    9: "The Bypass is presently engaged on the UPS",
    10: "The Bypass is out of tolerance",
    11: "The UPS has shutdown as requested, i.e., the output is off",
    12: "The entire UPS has shutdown as commanded",
    13: "An uncorrected problem has been detected within the UPS charger subsystem",
    14: "The output of the UPS is in the off state",
    15: "The UPS system is in the off state",
    16: "The failure of one or more fans in the UPS has been detected",
    17: "The failure of one or more fuses has been detected",
    18: "A general fault in the UPS has been detected",
    19: "The result of the last diagnostic test indicates a failure",
    20: "A problem has been encountered in the communications between the agent and the UPS",
    21: "The UPS output is off and the UPS is awaiting the return of input power",
    22: "A upsShutdownAfterDelay countdown is underway",
    23: "The UPS will turn off power to the load in less than 5 seconds",
}


def alarm_id(description_oid):
    """Return the id of a upsWellKnownAlarms OID, None for anything else."""
    description = str(description_oid)
    if not description.startswith(OID_UPS_WELL_KNOWN_ALARMS + '.'):
        return None
    return int(description.rsplit('.', 1)[-1])


class CheckUpsAlarms(AlarmListPlugin):
    name = 'check_ups_alarms'
    help = """ Usage:
            -w  Warning alarm ids, e.g. 1..4,11 (required)
            -c  Critical alarm ids, e.g. 5..10 (required)

            Example:
            ./check_ups_alarms.py -H 10.0.0.10 -C public -w 1..4,11 -c 5..10
            """
    descriptions = ALARM_DESCRIPTIONS

    def activeAlarms(self, snmp):
        present = snmp.get_value(OID_UPS_ALARMS_PRESENT)
        if not present:
            return []
        table = snmp.walk(OID_UPS_ALARM_DESCR)
        rows = sorted(table, key=lambda oid: int(oid.rsplit('.', 1)[-1]))
        active = [alarm_id(table[oid]) for oid in rows]
        return [i for i in active if i is not None]


def main():
    CheckUpsAlarms().run()


if __name__ == "__main__":
    main()
