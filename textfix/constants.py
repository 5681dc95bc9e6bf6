class Constants:
    # Typographic glyphs the fixers emit or track
    BOM = '\ufeff'
    NBSP = '\u00a0'
    ELLIPSIS = '…'
    LEFT_DOUBLE_QUOTE = '“'
    RIGHT_DOUBLE_QUOTE = '”'
    LEFT_SINGLE_QUOTE = '‘'
    RIGHT_SINGLE_QUOTE = '’'
    LEFT_GUILLEMET = '«'
    RIGHT_GUILLEMET = '»'

    # Diagnostics show at most this many characters of the offending line
    EXCERPT_WIDTH = 70

    # Paragraph indents: narrator paragraph vs. same speaker continuing
    NARRATOR_ALINEA = 2
    DIALOGUE_ALINEA = 3

    # Driver defaults, overridable from the config file
    CONFIG_PATH = 'textfix.ini'
    SCENARIO_EXTENSIONS = ('.ks',)
    TRANSLATION_EXTENSIONS = ('.po',)
    ENCODING = 'utf-8'
