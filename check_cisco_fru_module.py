#! /usr/bin/python3

from cisco_fru import FruStatePlugin

# CISCO-ENTITY-FRU-CONTROL-MIB cefcModuleOperStatus
FRU_MODULE_OPER_STATUS = "1.3.6.1.4.1.9.9.117.1.2.1.1.2"

MODULE_STATES = {
    1: ('Unknown', 'Module is not in one of other states'),
    2: ('Ok', 'Module is operational'),
    3: ('Disabled', 'Module is administratively disabled'),
    4: ('OkButDiagFailed', 'Module is operational but there is some diagnostic information available'),
    5: ('Boot', 'Module is currently in the process of bringing up image'),
    6: ('SelfTest', 'Module is performing selfTest'),
    7: ('Failed', 'Module has failed due to some condition not stated above'),
    8: ('Missing', 'Module has been provisioned, but it is missing'),
    9: ('MismatchWithParent', 'Module is not compatible with parent entity'),
    10: ('MismatchConfig', 'Module is not compatible with the current configuration'),
    11: ('DiagFailed', 'Module diagnostic test failed due to some hardware failure'),
    12: ('Dormant', 'Module is waiting for an external or internal event to become operational'),
    13: ('OutOfServiceAdmin', 'Module is administratively set to be powered on but out of service'),
    14: ('OutOfServiceEnvTemp', 'Module is powered on but out of service, due to environmental temperature problem'),
    15: ('PoweredDown', 'Module is in powered down state'),
    16: ('PoweredUp', 'Module is in powered up state'),
    17: ('PowerDenied', 'System does not have enough power in power budget to power on this module'),
    18: ('PowerCycled', 'Module is being power cycled'),
    19: ('OkButPowerOverWarning', 'Module is drawing more power than allocated to this module'),
    20: ('OkButPowerOverCritical', 'Module is drawing more power than this module is designed to handle'),
    21: ('SyncInProgress', 'Synchronization in progress'),
    22: ('Upgrading', 'Module is upgrading'),
    23: ('OkButAuthFailed', 'Module is operational but did not pass hardware integrity verification'),
}


class CheckCiscoFruModule(FruStatePlugin):
    name = 'check_cisco_fru_module'
    help = """ Usage:
            -e  Module ids (entPhysicalIndex), e.g. 1,2 (defaults to every module)
            -w  Warning states, comma separated list of state ids, e.g. 4..6,21,22
            -c  Critical states, comma separated list of state ids, e.g. 7..11,14,17,20

            Without -w and -c the plugin runs in test mode and lists the modules of the device
            with their states.

            Example:
            ./check_cisco_fru_module.py -H 10.0.0.1 -C public -e 1 -w 4..6,21,22 -c 7..11,14,17,20
            """
    kind = 'Module'
    status_oid = FRU_MODULE_OPER_STATUS
    states = MODULE_STATES


def main():
    CheckCiscoFruModule().run()


if __name__ == "__main__":
    main()
