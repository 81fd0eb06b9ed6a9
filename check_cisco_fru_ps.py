#! /usr/bin/python3

from cisco_fru import FruStatePlugin

# CISCO-ENTITY-FRU-CONTROL-MIB cefcFRUPowerOperStatus
FRU_POWER_OPER_STATUS = "1.3.6.1.4.1.9.9.117.1.1.2.1.2"

POWER_STATES = {
    1: ('OffEnvOther', 'FRU is powered off because of a problem not listed below'),
    2: ('On', 'FRU is powered on'),
    3: ('OffAdmin', 'Administratively off'),
    4: ('OffDenied', 'FRU is powered off because available system power is insufficient'),
    5: ('OffEnvPower', 'FRU is powered off because of power problem in the FRU'),
    6: ('OffEnvTemp', 'FRU is powered off because of temperature problem'),
    7: ('OffEnvFan', 'FRU is powered off because of fan problems'),
    8: ('Failed', 'FRU is in failed state'),
    9: ('OnButFanFail', 'FRU is on, but fan has failed'),
    10: ('OffCooling', "FRU is powered off because of the system's insufficient cooling capacity"),
    11: ('OffConnectorRating', "FRU is powered off because of the system's connector rating exceeded"),
    12: ('OnButInlinePowerFail', 'FRU is on, but no inline power is being delivered'),
}


class CheckCiscoFruPs(FruStatePlugin):
    name = 'check_cisco_fru_ps'
    help = """ Usage:
            -e  Power supply ids (entPhysicalIndex), e.g. 470,471 (defaults to every power supply)
            -w  Warning states, comma separated list of state ids
            -c  Critical states, comma separated list of state ids

            Without -w and -c the plugin runs in test mode and lists the power supplies of the device.

            States:
                1  OffEnvOther         7  OffEnvFan
                2  On                  8  Failed
                3  OffAdmin            9  OnButFanFail
                4  OffDenied          10  OffCooling
                5  OffEnvPower        11  OffConnectorRating
                6  OffEnvTemp         12  OnButInlinePowerFail

            Example:
            ./check_cisco_fru_ps.py -H 10.0.0.1 -C public -w 3,9 -c 1,4..8,10..12
            """
    kind = 'Power supply'
    status_oid = FRU_POWER_OPER_STATUS
    states = POWER_STATES


def main():
    CheckCiscoFruPs().run()


if __name__ == "__main__":
    main()
