import re

from textfix.diagnostics import Reporter
from textfix.rule_catalog import RuleCatalog
from textfix.text_utils import TextUtils
from textfix.typography import Typography


class ParseStep:
    NONE = 0
    LOCATION = 1
    CONTEXT = 2
    ID = 3
    TRANSLATION = 4


class TranslationEntry:
    """
    One catalog record:

        #: file.txt:12
        msgctxt ""
        msgid "hello"
        msgstr "bonjour"

    Plural records are recognized so that they don't trip the ordering
    checks, but their forms are neither stored nor normalized.
    """

    def __init__(self, location):
        self.location = location
        self.context = None
        self.msgid = None
        self.msgstr = None
        self.msgstr_line_number = -1
        self.is_plural = False

    def __repr__(self):
        return (
            f"TranslationEntry({self.location!r}, {self.context!r}, "
            f"{self.msgid!r}, {self.msgstr!r})"
        )


class CatalogProcessor:

    KEYWORD = re.compile(r"msg\w*(\[\d+\])?")
    PLURAL_TRANSLATION = re.compile(r"msgstr(_plural|\[\d+\])")

    def __init__(self, filename, sink, rule_catalog=None):
        self._report = Reporter(filename, sink)
        self._rule_catalog = rule_catalog or RuleCatalog()
        self._step = ParseStep.NONE
        self._entry = None
        self._plural_field = False

    @property
    def step(self):
        return self._step

    @property
    def entry(self):
        return self._entry

    @staticmethod
    def unescape(text):
        return text.replace('\\n', '\n')

    @staticmethod
    def escape(text):
        return text.replace('\n', '\\n')

    def process(self, text):
        output = []
        for line in TextUtils.split_lines(text):
            self._report.line = line
            self._report.line_number += 1
            output.append(self.process_line(line))

        # The last record has no following '#:' to close it
        self.finish_entry()

        return ''.join(line + '\n' for line in output).rstrip()

    def process_line(self, line):
        if line.startswith('#:'):
            self.start_entry(line)
            return line
        if line.startswith('#'):
            # Translator comments, flags, previous (#|) and obsolete (#~)
            # entries
            return line

        quote_index = line.find('"')
        text = None
        if quote_index >= 0:
            text = self.unescape(line[quote_index + 1:line.rfind('"')])

        if line.startswith('msg'):
            return self.process_keyword(line, quote_index, text)
        if quote_index >= 0 and TextUtils.is_blank(line[:quote_index]):
            return self.process_continuation(line, quote_index, text)
        return line

    def start_entry(self, line):
        # Several '#:' lines in a row all belong to the same record
        if self._step == ParseStep.LOCATION:
            self._entry.location += line[2:]
            return

        self.finish_entry()
        self._entry = TranslationEntry(line)
        self._step = ParseStep.LOCATION
        self._plural_field = False

    def finish_entry(self):
        if self._step in (ParseStep.CONTEXT, ParseStep.ID):
            self._report("entry not finished")
        elif self._step == ParseStep.TRANSLATION:
            self.check_translation(self._entry)

    def check_translation(self, entry):
        # Lint the finished translation, one physical line at a time, but
        # point at the line the msgstr started on
        if not entry.msgstr:
            return

        saved_line = self._report.line
        saved_line_number = self._report.line_number
        self._report.line_number = entry.msgstr_line_number
        for str_line in TextUtils.split_lines(entry.msgstr):
            self._report.line = str_line
            self._rule_catalog.report(str_line, self._report)
        self._report.line = saved_line
        self._report.line_number = saved_line_number

    def normalize_translation(self, text):
        # Columns and excerpts refer to the string content, not the line
        self._report.line = text
        text = Typography.fix_nbsp(text, self._report)
        text = Typography.fix_apostrophes(text, self._report)
        text = Typography.fix_suspension_points(text, self._report)
        return text

    def splice(self, line, quote_index, text):
        # Put the normalized content back between the original quotes
        return (
            line[:quote_index] +
            '"' + self.escape(text) + '"' +
            line[line.rfind('"') + 1:]
        )

    def process_keyword(self, line, quote_index, text):
        if self._step == ParseStep.NONE:
            # e.g. the catalog header, which has no location
            return line

        match = self.KEYWORD.match(line)
        keyword = match.group(0)
        entry = self._entry
        is_plural_translation = bool(
            self.PLURAL_TRANSLATION.fullmatch(keyword))
        self._plural_field = False

        if self._step == ParseStep.LOCATION:
            if keyword == 'msgctxt':
                self._step = ParseStep.CONTEXT
                entry.context = text
            elif keyword == 'msgid':
                self._step = ParseStep.ID
                entry.msgid = text
            else:
                self._report(
                    "line should start with '#:', 'msgctxt' or 'msgid'")

        elif self._step == ParseStep.CONTEXT:
            if keyword == 'msgid':
                self._step = ParseStep.ID
                entry.msgid = text
            else:
                self._report("line should be text or start with 'msgid'")

        elif self._step == ParseStep.ID:
            if keyword == 'msgstr' and quote_index >= 0:
                self._step = ParseStep.TRANSLATION
                entry.msgstr_line_number = self._report.line_number
                text = self.normalize_translation(text)
                entry.msgstr = text
                line = self.splice(line, quote_index, text)
            elif keyword == 'msgstr':
                self._step = ParseStep.TRANSLATION
                entry.msgstr_line_number = self._report.line_number
                entry.msgstr = ''
            elif keyword == 'msgid_plural':
                entry.is_plural = True
                self._plural_field = True
            elif is_plural_translation:
                entry.is_plural = True
                self._plural_field = True
                self._step = ParseStep.TRANSLATION
            else:
                self._report("line should be text or start with 'msgstr'")

        elif self._step == ParseStep.TRANSLATION:
            if entry.is_plural and is_plural_translation:
                # Next plural form
                self._plural_field = True
            else:
                self._report("current entry not finished")

        return line

    def process_continuation(self, line, quote_index, text):
        if self._step == ParseStep.NONE or self._plural_field:
            return line

        entry = self._entry
        if self._step == ParseStep.LOCATION:
            self._report("unexpected quote in a file location", quote_index)
            entry.location += text
        elif self._step == ParseStep.CONTEXT:
            entry.context = (entry.context or '') + text
        elif self._step == ParseStep.ID:
            entry.msgid = (entry.msgid or '') + text
        elif self._step == ParseStep.TRANSLATION:
            text = self.normalize_translation(text)
            entry.msgstr = (entry.msgstr or '') + text
            line = self.splice(line, quote_index, text)

        return line


def fix_translation_file(filename, text, sink, rule_catalog=None):
    return CatalogProcessor(filename, sink, rule_catalog).process(text)
