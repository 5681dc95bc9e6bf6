import re

from textfix.constants import Constants
from textfix.diagnostics import Reporter
from textfix.quote_tracker import NarrativeState, QuoteTracker
from textfix.rule_catalog import RuleCatalog
from textfix.text_utils import TextUtils
from textfix.typography import Typography


class BranchKind:
    NONE = 0
    IF = 1
    IF_ELSE = 2


class BranchSnapshot:
    """
    State saved around one @if ... [@else ...] @endif block.
    `before` is taken at @if, `end_of_if` at @else.
    """

    def __init__(self, before):
        self.kind = BranchKind.IF
        self.before = before
        self.end_of_if = None

    def reference(self):
        # The state the closing branch has to agree with
        if self.kind == BranchKind.IF_ELSE:
            return self.end_of_if
        return self.before

    def label(self):
        return "if/else" if self.kind == BranchKind.IF_ELSE else "if"


class ScenarioProcessor:
    """
    Single forward pass over a scenario file.

    Lines are classified as:
        ; comment           ignored
        *page<id>|...       page marker
        @directive ...      interpreted for a handful of directives
        (blank)             skipped
        anything else       text, run through the fixers and trackers
    """

    # @say storage=<speaker identifier>
    TALKER_REGEX = re.compile(r"[a-z\d]+_[a-z\d]+(_[0-9a-z]+)+")

    PAGE_MARKER = '*page'
    STORAGE_KEY = 'storage='

    def __init__(self, filename, sink, rule_catalog=None):
        self._report = Reporter(filename, sink, paged=True)
        self._rule_catalog = rule_catalog or RuleCatalog()
        self._state = NarrativeState()
        self._branches = []
        self._wait_text_report = None

    @property
    def state(self):
        return self._state

    def process(self, text):
        if not text:
            return ''

        # Keep the byte-order marker out of line classification, and put it
        # back (or add it) in front of the output
        prefix = ''
        first = ord(text[0])
        if first == ord(Constants.BOM):
            prefix = Constants.BOM
            text = text[1:]
        elif 32 <= first < 128:
            prefix = Constants.BOM
        else:
            self._report.file_error(
                f"unexpected character, code : {first:x}")

        output = []
        # Scenario lines are numbered from 0, like the script engine does
        for line_number, line in enumerate(TextUtils.split_lines(text)):
            self._report.line = line
            self._report.line_number = line_number
            output.append(self.process_line(line))

        if self._state.talking:
            self._report("unterminated dialogue at end of file")
        if self._state.in_quote:
            self._report("unterminated citation at end of file")

        return prefix + ''.join(line + '\n' for line in output)

    def process_line(self, line):
        if line.startswith(';'):
            return line
        if line.startswith(self.PAGE_MARKER):
            self.process_page_marker(line)
            return line
        if line.startswith('@'):
            self.process_directive(line)
            return line
        if TextUtils.is_blank(line):
            return line
        return self.process_text(line)

    def process_page_marker(self, line):
        # *page12|title, or just *page12
        start = len(self.PAGE_MARKER)
        end = line.find('|')
        if end == -1:
            end = start
            while end < len(line) and line[end].isdecimal():
                end += 1

        page_id = line[start:end]
        if not page_id.isdecimal():
            self._report("malformed page marker")
            return
        self._report.page_number = int(page_id) + 1

    def process_directive(self, line):
        if TextUtils.is_whitespace(line[-1]):
            self._report("trailing whitespace after @command")

        name = line[1:].split(None, 1)[0] if line[1:].strip() else ''
        if name in ('r', 'lr'):
            self._state.need_alinea = True
        elif name == 'pg':
            self._state.need_alinea = True
            self._wait_text_report = None
            if self._state.talking:
                self._report("unterminated dialogue at end of page")
            if self._state.in_quote:
                self._report("unterminated citation at end of page")
        elif name == 'say':
            self.check_say(line)
        elif name == 'if':
            self._branches.append(BranchSnapshot(self._state.copy()))
        elif name == 'else':
            self.enter_else()
        elif name == 'endif':
            self.close_branch()

    def check_say(self, line):
        key_index = line.find(self.STORAGE_KEY)
        if key_index == -1:
            self._report("@say without \"storage=\"")
            return

        value_start = key_index + len(self.STORAGE_KEY)
        value_end = line.find(' ', value_start)
        if value_end == -1:
            value_end = len(line)
        speaker = line[value_start:value_end]
        if not self.TALKER_REGEX.fullmatch(speaker):
            self._report("malformed @say identifier")

    def enter_else(self):
        if not self._branches:
            self._report("@else without @if")
            return

        # The else branch starts from where the if branch started
        branch = self._branches[-1]
        branch.end_of_if = self._state.copy()
        branch.kind = BranchKind.IF_ELSE
        self._state.restore(branch.before)

    def close_branch(self):
        if not self._branches:
            self._report("@endif without @if")
            return

        # Whatever state the branch ends in is kept
        branch = self._branches.pop()
        reference = branch.reference()
        label = branch.label()
        if self._state.talking != reference.talking:
            self._report(f"dialogue mismatch across {label}")
        if self._state.in_quote != reference.in_quote:
            self._report(f"citation mismatch across {label}")
        if self._state.need_alinea != reference.need_alinea:
            # Only meaningful once text resumes
            self._wait_text_report = f"paragraph mismatch across previous {label}"

    def process_text(self, line):
        if self._wait_text_report is not None:
            self._report(self._wait_text_report)
            self._wait_text_report = None

        report = self._report
        state = self._state

        line = Typography.fix_nbsp(line, report)
        line = Typography.fix_apostrophes(line, report)
        line = Typography.fix_suspension_points(line, report)
        report.line = line

        needed = Typography.required_alinea(
            state.need_alinea, state.talking, state.in_quote)
        line = Typography.fix_alinea(line, needed, report)
        report.line = line

        line = QuoteTracker.fix_quotes(line, state.in_quote, report)
        report.line = line
        QuoteTracker.track(line, state, report)

        self._rule_catalog.report(line, report)

        state.need_alinea = line.endswith('r]')
        return line


def fix_scenario_file(filename, text, sink, rule_catalog=None):
    return ScenarioProcessor(filename, sink, rule_catalog).process(text)
