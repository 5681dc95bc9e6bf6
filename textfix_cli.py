#!/usr/bin/env python3
import argparse
import os
import sys

from textfix.catalog_processor import fix_translation_file
from textfix.config import Config
from textfix.constants import Constants
from textfix.diagnostics import Color, ConsoleSink
from textfix.rule_catalog import RuleCatalog
from textfix.scenario_processor import fix_scenario_file


def parse_args(argv):
    parser = argparse.ArgumentParser(
        description="Typographic fixer and style linter for scenario and "
                    "translation files"
    )

    parser.add_argument(
        'paths',
        nargs='+',
        help="Files or directories to process"
    )
    parser.add_argument(
        '--config',
        dest='config_path',
        action='store',
        help="Path to the key=value settings file",
        default=Constants.CONFIG_PATH
    )
    parser.add_argument(
        '--check',
        dest='check',
        action='store_true',
        help="Only report, don't write anything. Exit with 1 on findings"
    )
    parser.add_argument(
        '--output',
        dest='output_dir',
        action='store',
        help="Write fixed files under this directory instead of in place"
    )
    parser.add_argument(
        '--check-names',
        dest='check_names',
        action='store_true',
        help="Also report near-misses of canonical character names"
    )
    parser.add_argument(
        '--no-color',
        dest='no_color',
        action='store_true',
        help="Disable colored output"
    )
    parser.add_argument(
        '--encoding',
        dest='encoding',
        action='store',
        help="Text encoding of the processed files"
    )

    return parser.parse_args(argv)


def collect_files(paths, config):
    # Returns (path, relative path, kind) for every file we know how to fix
    candidate_files = []
    for path in paths:
        if os.path.isfile(path):
            kind = config.file_kind(path)
            if kind:
                candidate_files.append((path, os.path.basename(path), kind))
            continue

        for basedir, dirs, files in os.walk(path):
            for filename in sorted(files):
                kind = config.file_kind(filename)
                if not kind:
                    continue

                full_path = os.path.join(basedir, filename)
                candidate_files.append(
                    (full_path, os.path.relpath(full_path, path), kind))

    return candidate_files


def process_file(path, kind, sink, rule_catalog, encoding):
    with open(path, 'rb') as input_file:
        text = input_file.read().decode(encoding)

    filename = os.path.basename(path)
    if kind == 'scenario':
        fixed = fix_scenario_file(filename, text, sink, rule_catalog)
    else:
        fixed = fix_translation_file(filename, text, sink, rule_catalog)

    return text, fixed


def write_file(path, text, encoding):
    output_dir = os.path.dirname(path)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)

    with open(path, 'wb+') as output_file:
        output_file.write(text.encode(encoding))


def main(argv=None):
    args = parse_args(sys.argv[1:] if argv is None else argv)

    try:
        config = Config.from_file(args.config_path)
    except (Config.ConfigError, OSError) as e:
        print(Color(Color.RED)(f"Failed to load {args.config_path}: {e}"))
        return 2

    # Command line wins over the config file
    use_color = config.color and not args.no_color
    encoding = args.encoding or config.encoding
    rule_catalog = (
        RuleCatalog.with_name_check()
        if args.check_names or config.check_names
        else RuleCatalog()
    )

    sink = ConsoleSink(use_color)
    written = 0
    failed = 0
    for path, relative_path, kind in collect_files(args.paths, config):
        try:
            text, fixed = process_file(
                path, kind, sink, rule_catalog, encoding)
        except (OSError, UnicodeDecodeError) as e:
            sys.stderr.write(f"Failed to process {path}: {e}\n")
            failed += 1
            continue

        if args.check:
            continue

        output_path = (
            os.path.join(args.output_dir, relative_path)
            if args.output_dir else path
        )
        if fixed != text or output_path != path:
            write_file(output_path, fixed, encoding)
            written += 1

    sink.report_totals()
    if not args.check:
        print(Color(Color.GREEN, use_color)(f"Wrote {written} file(s)"))

    if failed:
        return 2
    if args.check and sink.total():
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
