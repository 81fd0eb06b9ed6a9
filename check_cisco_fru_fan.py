#! /usr/bin/python3

from cisco_fru import FruStatePlugin

# CISCO-ENTITY-FRU-CONTROL-MIB cefcFanTrayOperStatus
FRU_FAN_TRAY_OPER_STATUS = "1.3.6.1.4.1.9.9.117.1.4.1.1.1"

FAN_STATES = {
    1: ('Unknown', 'Unknown'),
    2: ('Up', 'Powered on'),
    3: ('Down', 'Powered down'),
    4: ('Warning', 'Partial failure, needs replacement as soon as possible'),
}


class CheckCiscoFruFan(FruStatePlugin):
    name = 'check_cisco_fru_fan'
    help = """ Usage:
            -e  Fan ids (entPhysicalIndex), e.g. 534,535 (defaults to every fan)
            -w  Warning states, comma separated list of state ids
            -c  Critical states, comma separated list of state ids

            Without -w and -c the plugin runs in test mode and lists the fans of the device.

            States:
                1  Unknown
                2  Up
                3  Down
                4  Warning

            Example:
            ./check_cisco_fru_fan.py -H 10.0.0.1 -C public -e 534 -w 1,4 -c 3
            """
    kind = 'Fan'
    status_oid = FRU_FAN_TRAY_OPER_STATUS
    states = FAN_STATES


def main():
    CheckCiscoFruFan().run()


if __name__ == "__main__":
    main()
