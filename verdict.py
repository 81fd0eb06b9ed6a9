import enum
import logging

from nagios_range import NO_RANGE, explain, format_number, is_alarmed, render_range

log = logging.getLogger(__name__)


class Severity(enum.IntEnum):
    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3


def perfdata(label, value, unit='', warning=NO_RANGE, critical=NO_RANGE, minimum=None, maximum=None):
    """Format one performance token: 'label'=value[unit];warn;crit;min;max"""
    if any(char in label for char in " '="):
        label = "'%s'" % label.replace("'", "''")
    if value is None:
        value, unit = 'U', ''

    fields = [
        '%s=%s%s' % (label, format_number(value), unit),
        render_range(warning),
        render_range(critical),
        '' if minimum is None else format_number(minimum),
        '' if maximum is None else format_number(maximum),
    ]
    return ';'.join(fields)


class Metric:
    def __init__(self, label, value, unit='', warning=NO_RANGE, critical=NO_RANGE, minimum=None, maximum=None,
                 perf_label=None):
        self.label = label
        self.value = value
        self.unit = unit
        self.warning = warning
        self.critical = critical
        self.minimum = minimum
        self.maximum = maximum
        self.perf_label = perf_label or label

    def __repr__(self):
        return 'Metric(%r, %r)' % (self.label, self.value)

    @property
    def configured(self):
        return self.warning.configured or self.critical.configured

    def severity(self):
        if not self.configured:
            return Severity.OK
        if self.value is None:
            return Severity.UNKNOWN
        if is_alarmed(self.value, self.critical):
            return Severity.CRITICAL
        if is_alarmed(self.value, self.warning):
            return Severity.WARNING
        return Severity.OK

    def describe(self, severity):
        if severity == Severity.UNKNOWN:
            return '%s value not available' % self.label
        if severity == Severity.CRITICAL:
            return explain(self.label, self.value, self.unit, self.critical)
        if severity == Severity.WARNING:
            return explain(self.label, self.value, self.unit, self.warning)
        return '%s = %s%s' % (self.label, format_number(self.value), self.unit)

    def perfdata(self):
        return perfdata(self.perf_label, self.value, self.unit, self.warning, self.critical,
                        self.minimum, self.maximum)


class Verdict:
    def __init__(self, severity, message='', performance_data=()):
        self.severity = Severity(severity)
        self.message = message
        self.performance_data = list(performance_data)

    def __repr__(self):
        return 'Verdict(%s, %r)' % (self.severity.name, self.message)

    @property
    def exit_code(self):
        return int(self.severity)

    def worst(self, other):
        if other.severity > self.severity:
            message = other.message
        elif other.severity < self.severity:
            message = self.message
        else:
            message = '; '.join(text for text in (self.message, other.message) if text)
        return Verdict(max(self.severity, other.severity), message,
                       self.performance_data + other.performance_data)

    def output(self):
        line = self.severity.name
        if self.message:
            line += ': ' + self.message
        if self.performance_data:
            line += ' | ' + ' '.join(self.performance_data)
        return line


def evaluate(metrics):
    """Fold per-metric checks into one Verdict.

    Critical beats warning beats ok, and a configured metric without a value
    turns the whole verdict UNKNOWN. The message lists every metric sharing
    the overall severity.
    """
    metrics = list(metrics)
    severities = [metric.severity() for metric in metrics]
    overall = max(severities, default=Severity.OK)

    messages = []
    for metric, severity in zip(metrics, severities):
        log.debug('%s = %s -> %s', metric.label, metric.value, severity.name)
        if severity == overall and metric.configured:
            messages.append(metric.describe(severity))

    performance_data = [metric.perfdata() for metric in metrics if metric.configured]
    return Verdict(overall, '; '.join(messages), performance_data)
