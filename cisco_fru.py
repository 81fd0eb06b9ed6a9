import logging

from check_plugin import CheckPlugin, parse_id_list, state_verdict, table_column
from verdict import Severity, Verdict

log = logging.getLogger(__name__)

ENT_PHYSICAL_DESCR = "1.3.6.1.2.1.47.1.1.1.1.2"


class FruStatePlugin(CheckPlugin):
    """State check over one CISCO-ENTITY-FRU-CONTROL-MIB status column."""
    kind = 'FRU'
    status_oid = None
    # state id: (name, description)
    states = {}
    supports_test_mode = True
    options = 'e:'

    def __init__(self):
        super().__init__()
        self.ids = None
        self.warning_states = None
        self.critical_states = None

    def handleOption(self, opt, arg):
        if opt == '-e':
            self.ids = parse_id_list(arg, opt, minimum=1, maximum=2 ** 31 - 1)
        else:
            super().handleOption(opt, arg)

    def checkArguments(self):
        super().checkArguments()
        if not self.test_mode:
            self.warning_states = parse_id_list(self.warnings, '-w', 1, max(self.states))
            self.critical_states = parse_id_list(self.critical, '-c', 1, max(self.states))

    def stateName(self, state):
        return self.states.get(state, ('Unknown', 'Unknown state %s' % state))[0]

    def stateDescription(self, state):
        return self.states.get(state, ('Unknown', 'Unknown state %s' % state))[1]

    def fetch(self, snmp):
        statuses = table_column(snmp, self.status_oid)
        log.debug('%s statuses: %s', self.kind, statuses)
        names = table_column(snmp, ENT_PHYSICAL_DESCR) if statuses else {}
        return statuses, names

    def performCheck(self, snmp):
        statuses, names = self.fetch(snmp)
        ids = self.ids if self.ids is not None else sorted(statuses)
        if not ids:
            return Verdict(Severity.UNKNOWN, 'No %s devices found' % self.kind.lower())

        entries = []
        for fru_id in ids:
            if fru_id not in statuses:
                return Verdict(Severity.UNKNOWN, '%s device with id %d not found' % (self.kind, fru_id))
            name = names.get(fru_id, '%s %d' % (self.kind, fru_id))
            entries.append(('%s: %s' % (name, self.stateDescription(statuses[fru_id])), statuses[fru_id]))

        if len(ids) == 1:
            ok_message = "%s device '%s' status is %s" % (
                self.kind, names.get(ids[0], ids[0]), self.stateName(statuses[ids[0]]))
        else:
            ok_message = 'All checked %s devices are OK' % self.kind.lower()
        return state_verdict(entries, self.warning_states, self.critical_states, ok_message)

    def listDevice(self, snmp):
        statuses, names = self.fetch(snmp)
        if not statuses:
            return Verdict(Severity.UNKNOWN, 'TEST MODE: no %s devices found' % self.kind.lower())
        lines = ['TEST MODE']
        for fru_id in sorted(statuses):
            lines.append('%s id: %d, description: %s, status: %s (%s)' % (
                self.kind, fru_id, names.get(fru_id, ''), self.stateName(statuses[fru_id]),
                self.stateDescription(statuses[fru_id])))
        return Verdict(Severity.OK, '\n'.join(lines))
