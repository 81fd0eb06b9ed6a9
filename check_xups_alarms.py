#! /usr/bin/python3

from check_plugin import AlarmListPlugin

# Define oids
MIB_UPS_ALARMS = "1.3.6.1.4.1.534.1.7"

OID_UPS_ALARMS_PRESENT = MIB_UPS_ALARMS + '.1.0'
OID_UPS_ALARM_DESCR = MIB_UPS_ALARMS + '.2.1.2'

# Extracted from XUPS-MIB
ALARM_DESCRIPTIONS = {3: "UPS On Battery", 4: "LowBattery", 5: "UtilityPowerRestored",
                      6: "ReturnFromLowBattery", 7: "OutputOverload", 8: "Power Supply Fault",
                      9: "BatteryDischarged", 10: "InverterFailure", 11: "OnBypass",
                      12: "BypassNotAvailable", 13: "OutputOff", 14: "Input power Fault",
                      15: "BuildingAlarm", 16: "ShutdownImminent", 17: "OnInverter",
                      20: "BreakerOpen", 21: "AlarmEntryAdded", 22: "AlarmEntryRemoved",
                      23: "BatteryNeedService", 24: "OutputOffAsRequested", 25: "DiagnosticTestFailed",
                      26: "CommunicationsLost", 27: "UpsShutdownPending", 28: "AlarmTestInProgress",
                      29: "Temperature Fault", 30: "LossOfRedundancy", 31: "InternalTempBad",
                      32: "ChargerFailed", 33: "FanFailure", 34: "FuseFailure", 35: "PowerSwitchBad",
                      36: "ModuleFailure", 37: "OnAlternatePowerSource", 38: "AltPowerNotAvailable",
                      39: "UPS Fault", 40: "RemoteTempBad", 41: "RemoteHumidityBad"}


class CheckXUPS(AlarmListPlugin):
    name = 'check_xups_alarms'
    help = """ Usage:
            -w  Warning alarms, e.g. 1..4,11 (required)
            -c  Critical alarms, e.g. 5..10 (required)

            Example:
            ./check_xups_alarms.py -H 10.xxx.xxxx.xx -C pass -w 1..4,11 -c 5..10
            """
    descriptions = ALARM_DESCRIPTIONS

    def activeAlarms(self, snmp):
        presentAlarm = snmp.get_value(OID_UPS_ALARMS_PRESENT)
        if not presentAlarm:
            # If no alarms presents everything is ok
            return []

        alarmsTable = snmp.walk(OID_UPS_ALARM_DESCR)
        active = []
        for row in sorted(alarmsTable, key=lambda oid: int(oid.rsplit('.', 1)[-1])):
            # xupsAlarmDescr holds the well known alarm OID, MIB_UPS_ALARMS.<alarm id>
            description = str(alarmsTable[row])
            if description.startswith(MIB_UPS_ALARMS + '.'):
                active.append(int(description.rsplit('.', 1)[-1]))
        return active


def main():
    CheckXUPS().run()


if __name__ == "__main__":
    main()
