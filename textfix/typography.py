import re

from textfix.constants import Constants
from textfix.text_utils import TextUtils


class Typography:
    """
    Line-local typographic fixers. Each takes a line and a report callable
    `report(message, column)` and returns the corrected line.
    """

    # A space right after « or right before », :, ;, ? or !
    MISSING_NBSP = re.compile(r"(?<=«) | (?=[»:;?!])")

    # A straight apostrophe between two letters
    STRAIGHT_APOSTROPHE = re.compile(r"(?<=[A-Za-zÀ-ÿ])'(?=[A-Za-zÀ-ÿŒœ])")

    @classmethod
    def fix_nbsp(cls, line, report=None):
        # Purely mechanical, nothing worth reporting
        return cls.MISSING_NBSP.sub(Constants.NBSP, line)

    @classmethod
    def fix_apostrophes(cls, line, report):
        for match in cls.STRAIGHT_APOSTROPHE.finditer(line):
            report("straight apostrophe (auto-fixed)", match.start())

        return cls.STRAIGHT_APOSTROPHE.sub(Constants.RIGHT_SINGLE_QUOTE, line)

    @staticmethod
    def fix_suspension_points(line, report):
        index = line.find('..')
        while index != -1:
            # Measure the whole run of dots starting here
            run_end = index
            while run_end < len(line) and line[run_end] == '.':
                run_end += 1

            if run_end - index == 3:
                report("bad ellipsis (auto-fixed)", index)
                line = line[:index] + Constants.ELLIPSIS + line[run_end:]
                index += 1
            else:
                # Two dots, or four and more: can't guess the intent
                report("consecutive dots", index)
                index = run_end

            index = line.find('..', index)

        return line

    @staticmethod
    def required_alinea(need_alinea, talking, in_quote):
        if not need_alinea:
            return 0
        if talking or in_quote:
            return Constants.DIALOGUE_ALINEA
        return Constants.NARRATOR_ALINEA

    @staticmethod
    def fix_alinea(line, needed_alinea, report=None):
        # Only a 2 <-> 3 swap is unambiguous. Anything else is left alone,
        # and so is any indent where none is expected. The swap is silent.
        alinea = TextUtils.leading_whitespace(line)
        if alinea == needed_alinea or needed_alinea == 0:
            return line

        if alinea in (Constants.NARRATOR_ALINEA, Constants.DIALOGUE_ALINEA):
            line = " " * needed_alinea + line[alinea:]

        return line
