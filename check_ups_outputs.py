#! /usr/bin/python3

from check_plugin import LineTablePlugin, parse_positive_int

# UPS-MIB (RFC 1628) upsOutput group
MIB_UPS_OUTPUT = "1.3.6.1.2.1.33.1.4"


class CheckUpsOutputs(LineTablePlugin):
    name = 'check_ups_outputs'
    help = """ Usage:
            -o  Output lines to check, e.g. 1,2 or 1..3 (optional, defaults to all lines)
            -p  Power rating of the UPS in watts; percent load is then computed from the true power
            -w  Warning ranges <voltage>,<current>,<true power>,<percent load>
            -c  Critical ranges <voltage>,<current>,<true power>,<percent load>

            An empty field leaves that value unchecked.

            Example:
            ./check_ups_outputs.py -H 10.0.0.10 -C public -w 210:240,,,~:80 -c 200:250,,,~:90
            """
    options = 'o:p:'
    kind = 'output'
    perf_prefix = 'Out'
    line_option = '-o'
    num_lines_oid = MIB_UPS_OUTPUT + '.3.0'
    entry_oid = MIB_UPS_OUTPUT + '.4.1'
    columns = (
        ('Voltage', 2, 'V', 1, None, None),
        ('Current', 3, 'A', 10, None, None),
        ('True power', 4, 'W', 1, None, None),
        ('Percent Load', 5, '%', 1, 0, 100),
    )

    def __init__(self):
        super().__init__()
        self.power_rating = None

    def handleOption(self, opt, arg):
        if opt == '-p':
            self.power_rating = parse_positive_int(arg, '-p')
        else:
            super().handleOption(opt, arg)

    def lineValues(self, table, line):
        values = super().lineValues(table, line)
        if self.power_rating:
            power = values[2]
            values[3] = None if power is None else int(power * 100.0 / self.power_rating + 0.5)
        return values


def main():
    CheckUpsOutputs().run()


if __name__ == "__main__":
    main()
