import collections
import math
import re

NUMBER = r'-?(?:\d+(?:\.\d*)?|\.\d+)'

# [@]end | [@]start:[end] with "~" as start for negative infinity
RANGE_PATTERN = re.compile(
    r'^(?P<inverted>@)?(?:(?P<single>%s)|(?P<start>%s|~):(?P<end>%s)?)$' % (NUMBER, NUMBER, NUMBER))


class RangeError(ValueError):
    pass


class UnknownMetricError(ValueError):
    pass


class Range(collections.namedtuple('Range', 'start end inverted configured')):
    __slots__ = ()

    def __str__(self):
        return render_range(self)


NO_RANGE = Range(-math.inf, math.inf, False, False)


def parse_range(spec):
    """Parse a Nagios threshold such as ``10``, ``~:5``, ``10:`` or ``@10:20``.

    An empty (or None) spec means the threshold is not configured and never alarms.
    """
    if spec is None or spec == '':
        return NO_RANGE

    match = RANGE_PATTERN.match(spec)
    if not match:
        raise RangeError("Invalid range '%s'" % spec)

    if match.group('single') is not None:
        start = 0.0
        end = float(match.group('single'))
    else:
        if match.group('start') == '~':
            start = -math.inf
        else:
            start = float(match.group('start'))
        if match.group('end') is None:
            end = math.inf
        else:
            end = float(match.group('end'))

    if start > end:
        raise RangeError("Invalid range '%s': start %s is greater than end %s" % (
            spec, format_number(start), format_number(end)))

    return Range(start, end, match.group('inverted') is not None, True)


def is_alarmed(value, threshold):
    if not threshold.configured:
        return False
    if value is None:
        raise UnknownMetricError('Cannot check an unavailable value against %s' % render_range(threshold))

    inside = threshold.start <= value <= threshold.end
    return inside == threshold.inverted


def format_number(value):
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def valid_range_text(threshold):
    if threshold.inverted:
        clauses = []
        if threshold.start != -math.inf:
            clauses.append('<' + format_number(threshold.start))
        if threshold.end != math.inf:
            clauses.append('>' + format_number(threshold.end))
        return ' or '.join(clauses) or 'no value'

    clauses = []
    if threshold.start != -math.inf:
        clauses.append('>=' + format_number(threshold.start))
    if threshold.end != math.inf:
        clauses.append('<=' + format_number(threshold.end))
    return ' and '.join(clauses) or 'any value'


def explain(label, value, unit, threshold):
    return '%s = %s%s (valid range is %s)' % (label, format_number(value), unit, valid_range_text(threshold))


def render_range(threshold):
    if not threshold.configured:
        return ''

    prefix = '@' if threshold.inverted else ''
    end = '' if threshold.end == math.inf else format_number(threshold.end)
    if threshold.start == 0 and end:
        return prefix + end

    start = '~' if threshold.start == -math.inf else format_number(threshold.start)
    return '%s%s:%s' % (prefix, start, end)
