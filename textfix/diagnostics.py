from textfix.constants import Constants


class Color:
    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    BLUE = '\033[34m'
    MAGENTA = '\033[35m'
    CYAN = '\033[36m'
    ENDC = '\033[0m'

    def __init__(self, color, enabled=True):
        self.color = color
        self.enabled = enabled

    def __call__(self, text):
        if not self.enabled:
            return text
        return f"{self.color}{text}{Color.ENDC}"


class Severity:
    # Style and consistency findings, reported line by line
    SYNTAX = 'syntax'
    # File-level problems that may mean the input is not what we expect
    ERROR = 'error'


class Diagnostic:
    """
    One finding, ready to be shown to a translator.

    Scenario diagnostics carry a page number, translation diagnostics don't.
    File-level diagnostics carry neither a line number nor an excerpt.
    """

    def __init__(self, filename, line_number, message, excerpt='',
                 column=-1, page_number=None):
        self.filename = filename
        self.line_number = line_number
        self.page_number = page_number
        self.message = message
        self.excerpt = excerpt
        self.column = column

    @staticmethod
    def make_excerpt(line, column):
        # Center long lines on the reported column, shifting the caret along
        width = Constants.EXCERPT_WIDTH
        if len(line) <= width:
            return line, column

        start = max(0, column - width // 2)
        end = min(len(line), start + width)
        start = end - width
        return line[start:end], column - start

    def header(self):
        if self.line_number is None:
            return f"{self.filename} : {self.message}"
        if self.page_number is None:
            return f"{self.filename}:{self.line_number}: {self.message}"
        return (
            f"{self.filename} : #{self.line_number} "
            f"@ page {self.page_number} : {self.message}"
        )

    def caret(self):
        return " " * self.column + "*" if self.column >= 0 else ""

    def __str__(self):
        if self.line_number is None:
            return self.header()
        text = f"{self.header()}\n{self.excerpt}"
        if self.column >= 0:
            text += f"\n{self.caret()}"
        return text

    def __repr__(self):
        return (
            f"Diagnostic({self.filename}, {self.line_number}, "
            f"{self.page_number}, '{self.message}', {self.column})"
        )


class Reporter:
    """
    Processing context for one file.

    The processors keep `line`, `line_number` and `page_number` current while
    they scan; calling the reporter turns a (message, column) pair into a
    Diagnostic located on that context and hands it to the sink.
    """

    def __init__(self, filename, sink, paged=False):
        self.filename = filename
        self.sink = sink
        self.paged = paged
        self.line = ''
        self.line_number = 0
        self.page_number = 0

    def __call__(self, message, column=-1):
        excerpt, column = Diagnostic.make_excerpt(self.line, column)
        self.sink(
            Diagnostic(
                self.filename,
                self.line_number,
                message,
                excerpt,
                column,
                self.page_number if self.paged else None,
            ),
            Severity.SYNTAX
        )

    def file_error(self, message):
        self.sink(Diagnostic(self.filename, None, message), Severity.ERROR)


class DiagnosticCollector:

    def __init__(self):
        self.diagnostics = []

    def __call__(self, diagnostic, severity):
        self.diagnostics.append((diagnostic, severity))

    def __len__(self):
        return len(self.diagnostics)

    def messages(self):
        return [diag.message for diag, _severity in self.diagnostics]

    def columns(self):
        return [diag.column for diag, _severity in self.diagnostics]

    def clear(self):
        self.diagnostics = []


class ConsoleSink:
    """
    Prints diagnostics as they arrive and keeps per-message totals for the
    summary at the end of a run.
    """

    def __init__(self, use_color=True):
        self._use_color = use_color
        self.hits = {}

    def __call__(self, diagnostic, severity):
        self.hits[diagnostic.message] = \
            self.hits.get(diagnostic.message, 0) + 1

        header_color = Color.RED if severity == Severity.ERROR else Color.BLUE
        if diagnostic.line_number is None:
            print(Color(header_color, self._use_color)(diagnostic.header()))
            return

        text = (
            Color(header_color, self._use_color)(diagnostic.header()) +
            "\n" + Color(Color.YELLOW, self._use_color)(diagnostic.excerpt)
        )
        if diagnostic.column >= 0:
            text += "\n" + Color(Color.CYAN, self._use_color)(
                diagnostic.caret())
        print(text)

    def total(self):
        return sum(self.hits.values())

    def report_totals(self):
        if not self.hits:
            return

        print("Total stats:")
        for message, hits in sorted(self.hits.items()):
            print(f"\t{message}: {hits}")
