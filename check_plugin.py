import getopt
import logging
import re
import sys

from nagios_range import RangeError, parse_range
from snmp_client import AUTH_PROTOCOLS, PRIV_PROTOCOLS, SnmpClient, SnmpError, community_credentials, usm_credentials
from verdict import Metric, Severity, Verdict, evaluate

__version__ = '1.0.0'

log = logging.getLogger(__name__)

COMMON_OPTIONS = 'H:C:E:P:t:U:a:A:x:X:w:c:hVv'

ID_LIST_PATTERN = re.compile(r'^(\d+|\d+\.\.\d+)(,(\d+|\d+\.\.\d+))*$')


class ConfigurationError(Exception):
    pass


def parse_threshold(text, option):
    try:
        return parse_range(text)
    except RangeError as err:
        raise ConfigurationError('%s: %s' % (option, err)) from err


def split_thresholds(text, count, option):
    """Split '-w 210:240,,~:40' style arguments into one Range per field."""
    if text is None:
        text = ',' * (count - 1)
    fields = text.split(',')
    if len(fields) != count:
        raise ConfigurationError('%s requires %d comma separated ranges, got %d' % (option, count, len(fields)))
    return [parse_threshold(field, option) for field in fields]


def parse_id_list(text, option, minimum=0, maximum=65535):
    """Parse id lists like '1..4,11' into a sorted list of ids."""
    if not ID_LIST_PATTERN.match(text):
        raise ConfigurationError("%s: invalid id list '%s'" % (option, text))

    ids = set()
    for element in text.split(','):
        bounds = [int(number) for number in element.split('..')]
        if bounds[0] > bounds[-1]:
            raise ConfigurationError('%s: invalid range %s, the first number must not be greater than the second'
                                     % (option, element))
        for bound in bounds:
            if bound < minimum or bound > maximum:
                raise ConfigurationError('%s: id %d out of range %d..%d' % (option, bound, minimum, maximum))
        ids.update(range(bounds[0], bounds[-1] + 1))
    return sorted(ids)


def parse_positive_int(text, option):
    try:
        value = int(text)
    except ValueError:
        raise ConfigurationError('%s must be an integer' % option) from None
    if value <= 0:
        raise ConfigurationError('%s must be greater than 0' % option)
    return value


def table_column(snmp, column_oid):
    """Walk one table column and key the values by row index."""
    prefix = column_oid + '.'
    column = {}
    for oid, value in snmp.walk(column_oid).items():
        if oid.startswith(prefix):
            column[int(oid[len(prefix):])] = value
    return column


def state_verdict(entries, warning_states, critical_states, ok_message):
    """Report every (description, state) entry whose state is in the critical, else the warning list."""
    critical = [text for text, state in entries if state in critical_states]
    if critical:
        return Verdict(Severity.CRITICAL, '; '.join(critical))
    warning = [text for text, state in entries if state in warning_states]
    if warning:
        return Verdict(Severity.WARNING, '; '.join(warning))
    return Verdict(Severity.OK, ok_message)


class CheckPlugin:
    name = 'check_plugin'
    help = ''
    common_help = """
            Common options:
            -H  Address or hostname of the SNMP agent (required)
            -C  SNMP community string (defaults to public)
            -E  SNMP version 1, 2 or 3 (defaults to 2)
            -P  SNMP port (defaults to 161)
            -t  SNMP timeout in seconds (defaults to 10)
            -U  SNMPv3 security name
            -a  SNMPv3 authentication protocol (MD5|SHA)
            -A  SNMPv3 authentication pass phrase
            -x  SNMPv3 privacy protocol (DES|AES)
            -X  SNMPv3 privacy pass phrase
            -v  Debug output on stderr
            -V  Print version
            -h  Print this help
            """
    # getopt letters handled by handleOption
    options = ''
    default_snmp_version = 2
    thresholds_required = False
    supports_test_mode = False

    def __init__(self):
        self.snmp_host = None
        self.snmp_community = 'public'
        self.snmp_version = self.default_snmp_version
        self.snmp_port = 161
        self.snmp_timeout = 10
        self.snmp_user = None
        self.auth_protocol = None
        self.auth_key = None
        self.priv_protocol = None
        self.priv_key = None

        self.warnings = None
        self.critical = None

        self.test_mode = False
        self.show_help = False
        self.show_version = False

    def setup(self, argv):
        try:
            opts, args = getopt.getopt(argv, COMMON_OPTIONS + self.options)
        except getopt.GetoptError as err:
            raise ConfigurationError(str(err)) from err
        if args:
            raise ConfigurationError('Unexpected arguments: %s' % ' '.join(args))

        for opt, arg in opts:
            if opt == '-H':
                self.snmp_host = arg
            elif opt == '-C':
                self.snmp_community = arg
            elif opt == '-E':
                self.snmp_version = self.parseVersion(arg)
            elif opt == '-P':
                self.snmp_port = parse_positive_int(arg, '-P')
            elif opt == '-t':
                self.snmp_timeout = parse_positive_int(arg, '-t')
            elif opt == '-U':
                self.snmp_user = arg
            elif opt == '-a':
                self.auth_protocol = arg.upper()
            elif opt == '-A':
                self.auth_key = arg
            elif opt == '-x':
                self.priv_protocol = arg.upper()
            elif opt == '-X':
                self.priv_key = arg
            elif opt == '-w':
                self.warnings = arg
            elif opt == '-c':
                self.critical = arg
            elif opt == '-h':
                self.show_help = True
            elif opt == '-V':
                self.show_version = True
            elif opt == '-v':
                logging.basicConfig(level=logging.DEBUG, stream=sys.stderr,
                                    format='%(name)s %(levelname)s %(message)s')
            else:
                self.handleOption(opt, arg)

    @staticmethod
    def parseVersion(arg):
        versions = {'1': 1, '2': 2, '2c': 2, '3': 3}
        if arg.lower() not in versions:
            raise ConfigurationError("-E: unsupported SNMP version '%s'" % arg)
        return versions[arg.lower()]

    def handleOption(self, opt, arg):
        raise ConfigurationError('Unsupported option %s' % opt)

    def checkArguments(self):
        if not self.snmp_host:
            raise ConfigurationError('snmp_host -H is not defined')

        if self.snmp_version == 3:
            self.checkUsmArguments()

        if self.supports_test_mode and self.warnings is None and self.critical is None:
            self.test_mode = True
        elif (self.thresholds_required or self.supports_test_mode) and (self.warnings is None or self.critical is None):
            raise ConfigurationError('Both warning -w and critical -c must be defined')

    def checkUsmArguments(self):
        if not self.snmp_user:
            raise ConfigurationError('SNMPv3 requires a security name -U')
        if self.auth_protocol or self.auth_key:
            if self.auth_protocol not in AUTH_PROTOCOLS:
                raise ConfigurationError('-a must be one of %s' % ', '.join(sorted(AUTH_PROTOCOLS)))
            if not self.auth_key:
                raise ConfigurationError('SNMPv3 authentication requires a pass phrase -A')
        if self.priv_protocol or self.priv_key:
            if not self.auth_protocol:
                raise ConfigurationError('SNMPv3 privacy requires authentication -a/-A')
            if self.priv_protocol not in PRIV_PROTOCOLS:
                raise ConfigurationError('-x must be one of %s' % ', '.join(sorted(PRIV_PROTOCOLS)))
            if not self.priv_key:
                raise ConfigurationError('SNMPv3 privacy requires a pass phrase -X')

    def connect(self):
        if self.snmp_version == 3:
            credentials = usm_credentials(self.snmp_user, self.auth_protocol, self.auth_key,
                                          self.priv_protocol, self.priv_key)
        else:
            credentials = community_credentials(self.snmp_community, self.snmp_version)
        return SnmpClient(self.snmp_host, credentials, self.snmp_port, self.snmp_timeout)

    def performCheck(self, snmp):
        raise NotImplementedError

    def listDevice(self, snmp):
        raise NotImplementedError

    def execute(self, argv, snmp=None):
        try:
            self.setup(argv)
            if self.show_help:
                return Verdict(Severity.UNKNOWN, self.help + self.common_help)
            if self.show_version:
                return Verdict(Severity.OK, '%s %s' % (self.name, __version__))
            self.checkArguments()
        except ConfigurationError as err:
            return Verdict(Severity.UNKNOWN, str(err))

        if snmp is None:
            snmp = self.connect()

        try:
            if self.test_mode:
                return self.listDevice(snmp)
            return self.performCheck(snmp)
        except SnmpError as err:
            log.debug('SNMP failure', exc_info=True)
            return Verdict(Severity.UNKNOWN, "Error '%s' retrieving info from agent %s:%s" % (
                err, self.snmp_host, self.snmp_port))

    def run(self):
        verdict = self.execute(sys.argv[1:])
        print(verdict.output())
        sys.exit(verdict.exit_code)


class LineTablePlugin(CheckPlugin):
    """Per-line range checks over a UPS-MIB input or output table."""
    kind = 'line'
    perf_prefix = ''
    line_option = '-l'
    num_lines_oid = None
    entry_oid = None
    # field, column, unit, divisor, minimum, maximum
    columns = ()

    def __init__(self):
        super().__init__()
        self.lines = None
        self.warning_ranges = None
        self.critical_ranges = None

    def handleOption(self, opt, arg):
        if opt == self.line_option:
            self.lines = parse_id_list(arg, opt, minimum=1)
        else:
            super().handleOption(opt, arg)

    def checkArguments(self):
        super().checkArguments()
        self.warning_ranges = split_thresholds(self.warnings, len(self.columns), '-w')
        self.critical_ranges = split_thresholds(self.critical, len(self.columns), '-c')

    def lineValues(self, table, line):
        values = []
        for field, column, unit, divisor, minimum, maximum in self.columns:
            value = table.get('%s.%d.%d' % (self.entry_oid, column, line))
            if value is not None and divisor != 1:
                value = value / divisor
            values.append(value)
        return values

    def performCheck(self, snmp):
        lines = self.lines
        if lines is None:
            count = snmp.get_value(self.num_lines_oid)
            if not isinstance(count, int) or count <= 0:
                return Verdict(Severity.UNKNOWN, 'No %s lines' % self.kind)
            lines = range(1, count + 1)

        table = snmp.walk(self.entry_oid)
        metrics = []
        for line in lines:
            values = self.lineValues(table, line)
            if all(value is None for value in values):
                return Verdict(Severity.UNKNOWN, 'Error. %s %d not found' % (self.kind.capitalize(), line))
            for (field, column, unit, divisor, minimum, maximum), value, warning, critical in zip(
                    self.columns, values, self.warning_ranges, self.critical_ranges):
                metrics.append(Metric('%s #%d: %s' % (self.kind.capitalize(), line, field), value, unit,
                                      warning, critical, minimum, maximum,
                                      perf_label='%s%d%s' % (self.perf_prefix, line, field)))

        verdict = evaluate(metrics)
        if verdict.severity == Severity.OK:
            verdict.message = 'All values in all %ss are in range' % self.kind
        return verdict


class AlarmListPlugin(CheckPlugin):
    """Match the active alarm ids of a device against the -w / -c id lists."""
    thresholds_required = True
    # alarm id: description
    descriptions = {}

    def __init__(self):
        super().__init__()
        self.warning_alarms = None
        self.critical_alarms = None

    def checkArguments(self):
        super().checkArguments()
        self.warning_alarms = parse_id_list(self.warnings, '-w')
        self.critical_alarms = parse_id_list(self.critical, '-c')

    def activeAlarms(self, snmp):
        raise NotImplementedError

    def describeAlarm(self, alarm_id):
        description = self.descriptions.get(alarm_id)
        if description:
            return '#Alarm %d (%s) is active' % (alarm_id, description)
        return '#Alarm %d is active' % alarm_id

    def performCheck(self, snmp):
        active = self.activeAlarms(snmp)
        log.debug('active alarms: %s', active)
        if not active:
            return Verdict(Severity.OK, 'No active alarms')

        critical = [alarm_id for alarm_id in active if alarm_id in self.critical_alarms]
        warning = [alarm_id for alarm_id in active if alarm_id in self.warning_alarms]
        if critical:
            return Verdict(Severity.CRITICAL, '; '.join(self.describeAlarm(i) for i in critical))
        if warning:
            return Verdict(Severity.WARNING, '; '.join(self.describeAlarm(i) for i in warning))
        return Verdict(Severity.OK, 'Alarms active (%s) but not set in check lists' % ', '.join(
            str(i) for i in active))
