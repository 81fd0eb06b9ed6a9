#! /usr/bin/python3

from check_plugin import CheckPlugin, ConfigurationError, parse_threshold
from verdict import Metric, Severity, Verdict, evaluate

# CISCO-REMOTE-ACCESS-MONITOR-MIB
OID_MAX_SESSIONS_SUPPORTABLE = "1.3.6.1.4.1.9.9.392.1.1.1.0"
OID_CRAS_ACTIVITY = "1.3.6.1.4.1.9.9.392.1.3"

# short name: (display name, active session counter)
SESSION_TYPES = {
    'email': ('Email', OID_CRAS_ACTIVITY + '.23.0'),
    'ipsec': ('IPSec', OID_CRAS_ACTIVITY + '.26.0'),
    'l2l': ('LAN to LAN', OID_CRAS_ACTIVITY + '.29.0'),
    'lb': ('Load Balancing', OID_CRAS_ACTIVITY + '.32.0'),
    'svc': ('SSL VPN Client', OID_CRAS_ACTIVITY + '.35.0'),
    'webvpn': ('Web VPN', OID_CRAS_ACTIVITY + '.38.0'),
}
SESSION_ORDER = ('email', 'ipsec', 'l2l', 'lb', 'svc', 'webvpn')


class CheckCiscoCrasSessions(CheckPlugin):
    name = 'check_cisco_cras_sessions'
    help = """ Usage:
            -s  Session type to check, repeatable: email, ipsec, l2l, lb, svc, webvpn (defaults to all)
            -T  Check the sum of the selected session types
            -p  Check sessions as percent of the device max supportable sessions
            -w  Warning range of sessions
            -c  Critical range of sessions

            Example:
            ./check_cisco_cras_sessions.py -H 10.0.0.2 -C public -s ipsec -s svc -T -w 80 -c 95 -p
            """
    options = 's:Tp'

    def __init__(self):
        super().__init__()
        self.session_types = []
        self.total = False
        self.percent = False
        self.warning_range = None
        self.critical_range = None

    def handleOption(self, opt, arg):
        if opt == '-s':
            if arg not in SESSION_TYPES:
                raise ConfigurationError("-s: unknown session type '%s', use one of %s" % (
                    arg, ', '.join(SESSION_ORDER)))
            if arg not in self.session_types:
                self.session_types.append(arg)
        elif opt == '-T':
            self.total = True
        elif opt == '-p':
            self.percent = True
        else:
            super().handleOption(opt, arg)

    def checkArguments(self):
        super().checkArguments()
        if not self.session_types:
            self.session_types = list(SESSION_ORDER)
        self.warning_range = parse_threshold(self.warnings, '-w')
        self.critical_range = parse_threshold(self.critical, '-c')

    def performCheck(self, snmp):
        oids = [SESSION_TYPES[session_type][1] for session_type in self.session_types]
        if self.percent:
            oids.append(OID_MAX_SESSIONS_SUPPORTABLE)
        values = snmp.get(oids)

        counters = [(SESSION_TYPES[session_type][0], values[SESSION_TYPES[session_type][1]])
                    for session_type in self.session_types]
        if self.total:
            values = [value for name, value in counters]
            counters = [('Total', None if None in values else sum(values))]

        unit = ''
        if self.percent:
            maximum = values[OID_MAX_SESSIONS_SUPPORTABLE]
            if not maximum:
                return Verdict(Severity.UNKNOWN, 'Unable to get max supportable sessions of the device')
            unit = '%'
            counters = [(name, None if value is None else round(value * 100.0 / maximum, 1))
                        for name, value in counters]

        metrics = [Metric('%s sessions' % name, value, unit, self.warning_range, self.critical_range,
                          minimum=0, perf_label=name) for name, value in counters]
        verdict = evaluate(metrics)
        if verdict.severity == Severity.OK:
            verdict.message = ', '.join(metric.describe(Severity.OK) for metric in metrics
                                        if metric.value is not None)
        verdict.performance_data = [metric.perfdata() for metric in metrics]
        return verdict


def main():
    CheckCiscoCrasSessions().run()


if __name__ == "__main__":
    main()
