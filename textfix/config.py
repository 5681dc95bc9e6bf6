import os

from textfix.constants import Constants


class Config:
    """
    Settings file made of key=value lines, e.g.

        scenario_extensions=.ks
        translation_extensions=.po,.pot
        color=1
        check_names=0
        encoding=utf-8

    Blank lines and lines starting with '#' or ';' are ignored.
    """

    class ConfigError(Exception):
        def __init__(self, *args, **kwargs):
            super(Config.ConfigError, self).__init__(*args, **kwargs)

    def __init__(self):
        self.scenario_extensions = Constants.SCENARIO_EXTENSIONS
        self.translation_extensions = Constants.TRANSLATION_EXTENSIONS
        self.color = True
        self.check_names = False
        self.encoding = Constants.ENCODING

    @staticmethod
    def parse_flag(key, value):
        if value not in ('0', '1'):
            raise Config.ConfigError(
                f"Invalid value '{value}' for '{key}', expected 0 or 1")
        return value == '1'

    @staticmethod
    def parse_extensions(value):
        extensions = []
        for ext in value.split(','):
            ext = ext.strip().lower()
            if not ext:
                continue
            extensions.append(ext if ext.startswith('.') else '.' + ext)
        return tuple(extensions)

    @classmethod
    def from_text(cls, text):
        config = cls()
        unknown_keys = []
        for line_number, line in enumerate(text.split('\n'), start=1):
            line = line.strip()
            if not line or line[0] in '#;':
                continue

            if '=' not in line:
                raise cls.ConfigError(
                    f"Expected key=value on line {line_number}, got '{line}'")

            key, value = [part.strip() for part in line.split('=', 1)]
            if key == 'scenario_extensions':
                config.scenario_extensions = cls.parse_extensions(value)
            elif key == 'translation_extensions':
                config.translation_extensions = cls.parse_extensions(value)
            elif key == 'color':
                config.color = cls.parse_flag(key, value)
            elif key == 'check_names':
                config.check_names = cls.parse_flag(key, value)
            elif key == 'encoding':
                config.encoding = value
            else:
                unknown_keys.append(key)

        if unknown_keys:
            print(f"Ignoring unknown config keys: {', '.join(unknown_keys)}")

        return config

    @classmethod
    def from_file(cls, path):
        # A missing config file just means defaults
        if not os.path.exists(path):
            return cls()

        with open(path, 'r', encoding='utf-8') as config_file:
            return cls.from_text(config_file.read())

    def file_kind(self, filename):
        lower = filename.lower()
        if lower.endswith(self.scenario_extensions):
            return 'scenario'
        if lower.endswith(self.translation_extensions):
            return 'translation'
        return None
