#! /usr/bin/python3

from check_plugin import LineTablePlugin

# UPS-MIB (RFC 1628) upsInput group
MIB_UPS_INPUT = "1.3.6.1.2.1.33.1.3"


class CheckUpsInputs(LineTablePlugin):
    name = 'check_ups_inputs'
    help = """ Usage:
            -i  Input lines to check, e.g. 1,2 or 1..3 (optional, defaults to all lines)
            -w  Warning ranges <frequency>,<voltage>,<current>,<true power>
            -c  Critical ranges <frequency>,<voltage>,<current>,<true power>

            An empty field leaves that value unchecked.

            Example:
            ./check_ups_inputs.py -H 10.0.0.10 -C public -i 1 -w 49:51,210:240,, -c 48:52,200:250,,
            """
    options = 'i:'
    kind = 'input'
    perf_prefix = 'In'
    line_option = '-i'
    num_lines_oid = MIB_UPS_INPUT + '.2.0'
    entry_oid = MIB_UPS_INPUT + '.3.1'
    columns = (
        ('Frequency', 2, 'Hz', 10, None, None),
        ('Voltage', 3, 'V', 1, None, None),
        ('Current', 4, 'A', 10, None, None),
        ('True power', 5, 'W', 1, None, None),
    )


def main():
    CheckUpsInputs().run()


if __name__ == "__main__":
    main()
