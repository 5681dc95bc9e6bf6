import re


class TextUtils:

    # Same terminators as java.lang.String.lines()
    LINE_BREAK = re.compile(r'\r\n|\r|\n')

    # str.isspace() accepts these, but they are glyphs as far as indentation
    # and quote placement are concerned
    NON_BREAKING_SPACES = '\u00a0\u2007\u202f'

    @classmethod
    def split_lines(cls, text):
        # A trailing terminator does not open an extra empty line
        if not text:
            return []
        lines = cls.LINE_BREAK.split(text)
        if lines[-1] == '':
            lines.pop()
        return lines

    @classmethod
    def is_whitespace(cls, c):
        return c.isspace() and c not in cls.NON_BREAKING_SPACES

    @classmethod
    def is_blank(cls, text):
        return all(cls.is_whitespace(c) for c in text)

    @classmethod
    def leading_whitespace(cls, line):
        width = 0
        while width < len(line) and cls.is_whitespace(line[width]):
            width += 1
        return width
