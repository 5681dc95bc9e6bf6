import re

from textfix.constants import Constants
from textfix.text_utils import TextUtils


class NarrativeState:
    """
    Cross-line state of a scenario file:
        - talking: a dialogue (“ ”) is open
        - in_quote: a citation (« ») is open
        - need_alinea: the next text line opens a paragraph
    """

    def __init__(self, talking=False, in_quote=False, need_alinea=True):
        self.talking = talking
        self.in_quote = in_quote
        self.need_alinea = need_alinea

    def copy(self):
        return NarrativeState(self.talking, self.in_quote, self.need_alinea)

    def restore(self, other):
        self.talking = other.talking
        self.in_quote = other.in_quote
        self.need_alinea = other.need_alinea

    def __eq__(self, other):
        if not isinstance(other, NarrativeState):
            return NotImplemented
        return (
            self.talking == other.talking
            and self.in_quote == other.in_quote
            and self.need_alinea == other.need_alinea
        )

    def __repr__(self):
        return (
            f"NarrativeState(talking={self.talking}, "
            f"in_quote={self.in_quote}, need_alinea={self.need_alinea})"
        )


class QuoteTracker:

    @staticmethod
    def count_unescaped(text, token):
        return len(re.findall(r'(?<!\\)' + re.escape(token), text))

    @classmethod
    def is_in_block(cls, line, index, start_str, end_str):
        # Is `index` inside a start_str ... end_str span opened earlier on
        # this line? Identical delimiters pair up, so parity decides.
        before = line[:index]
        starts_before = cls.count_unescaped(before, start_str)

        if start_str == end_str:
            return starts_before % 2 == 1
        if starts_before == 0:
            return False
        return starts_before > cls.count_unescaped(before, end_str)

    @staticmethod
    def _in_citation(line, index, in_quote):
        # When a citation is already open, a « and a » that are both missing
        # still leave us inside it, hence the non-strict comparison
        last_left = line.rfind(Constants.LEFT_GUILLEMET, 0, index)
        last_right = line.rfind(Constants.RIGHT_GUILLEMET, 0, index)
        if in_quote:
            return last_left >= last_right
        return last_left > last_right

    @staticmethod
    def _whitespace_at(line, index):
        # The line boundaries count as whitespace
        if index < 0 or index >= len(line):
            return True
        return TextUtils.is_whitespace(line[index])

    @classmethod
    def fix_double_quotes(cls, line, report):
        alinea = TextUtils.leading_whitespace(line)
        index = line.find('"')
        while index >= 0:
            if cls.is_in_block(line, index, '[', ']'):
                # Formula inside a script marker, leave it be
                pass
            elif index == alinea:
                report("bad quotes (auto-fixed)", index)
                line = (
                    line[:index] + Constants.LEFT_DOUBLE_QUOTE +
                    line[index + 1:]
                )
            elif TextUtils.is_blank(line[index + 1:]):
                report("bad quotes (auto-fixed)", index)
                line = (
                    line[:index] + Constants.RIGHT_DOUBLE_QUOTE +
                    line[index + 1:]
                )
            else:
                report("bad quotes", index)
            index = line.find('"', index + 1)

        return line

    @classmethod
    def fix_single_quotes(cls, line, in_quote, report):
        index = line.find("'")
        while index >= 0:
            if cls.is_in_block(line, index, '[', ']'):
                # Fine in a formula, unless it sits inside a "..." string
                if cls.is_in_block(line, index, '"', '"'):
                    report("bad quotes", index)
            elif not cls._in_citation(line, index, in_quote):
                report("bad quotes", index)
            else:
                replacement = None
                if cls._whitespace_at(line, index - 1):
                    replacement = Constants.LEFT_SINGLE_QUOTE
                elif cls._whitespace_at(line, index + 1):
                    replacement = Constants.RIGHT_SINGLE_QUOTE
                else:
                    report("bad apostrophe", index)

                if replacement:
                    report("bad apostrophe (auto-fixed)", index)
                    line = line[:index] + replacement + line[index + 1:]
            index = line.find("'", index + 1)

        return line

    @classmethod
    def fix_quotes(cls, line, in_quote, report):
        line = cls.fix_double_quotes(line, report)
        return cls.fix_single_quotes(line, in_quote, report)

    @staticmethod
    def track_dialogue(line, state, report):
        start = line.find(Constants.LEFT_DOUBLE_QUOTE)
        end = line.rfind(Constants.RIGHT_DOUBLE_QUOTE)

        if start >= 0:
            if not TextUtils.is_blank(line[:start]):
                report("bad quotes", start)
            if state.talking:
                report("previous dialogue unterminated", start)
                if end >= 0:
                    state.talking = False
            else:
                if end < start:
                    state.talking = True
                if state.in_quote:
                    report("dialogue inside a citation", start)
                    state.in_quote = False
        elif end >= 0:
            if state.talking:
                state.talking = False
            else:
                report("no dialogue to end", end)

    @staticmethod
    def track_citation(line, state, report):
        left_count = line.count(Constants.LEFT_GUILLEMET)
        right_count = line.count(Constants.RIGHT_GUILLEMET)

        if left_count != right_count:
            if abs(left_count - right_count) > 1:
                report("unbalanced guillemets « »")
            elif left_count == 0 and not state.in_quote:
                report("no citation (« ») to end")
            elif right_count == 0 and state.in_quote:
                report("citation (« ») already open")
            else:
                # Anything subtler is easy to spot when reading
                state.in_quote = not state.in_quote
            return

        # Same count: pair them up in order and make sure each pair closes
        # what the previous one opened
        left = right = -1
        while True:
            left = line.find(Constants.LEFT_GUILLEMET, left + 1)
            right = line.find(Constants.RIGHT_GUILLEMET, right + 1)
            if left < 0 or right < 0:
                break
            if state.in_quote != (right < left):
                break

        if left >= 0 or right >= 0:
            where = "inside" if state.in_quote else "outside"
            report(
                f"guillemets « » out of order, line starts {where} a citation")

    @classmethod
    def track(cls, line, state, report):
        cls.track_dialogue(line, state, report)
        cls.track_citation(line, state, report)
