import unittest

from textfix.diagnostics import DiagnosticCollector, Reporter
from textfix.typography import Typography


NBSP = '\u00a0'


class TypographyTests(unittest.TestCase):

    def setUp(self):
        self.sink = DiagnosticCollector()
        self.report = Reporter('test.ks', self.sink, paged=True)

    def test_nbsp_inside_guillemets(self):
        self.assertEqual(
            Typography.fix_nbsp("« Bonjour »", self.report),
            f"«{NBSP}Bonjour{NBSP}»"
        )
        self.assertEqual(len(self.sink), 0)

    def test_nbsp_before_punctuation(self):
        self.assertEqual(
            Typography.fix_nbsp("Il dit : non ; quoi ? oui !"),
            f"Il dit{NBSP}: non{NBSP}; quoi{NBSP}? oui{NBSP}!"
        )

    def test_nbsp_never_before_whitespace(self):
        # Only the space touching the colon is replaced
        self.assertEqual(Typography.fix_nbsp("a  :"), f"a {NBSP}:")

    def test_nbsp_untouched_line(self):
        self.assertEqual(Typography.fix_nbsp("Bonjour."), "Bonjour.")

    def test_apostrophes_between_letters(self):
        self.assertEqual(
            Typography.fix_apostrophes("l'ami d'Arthur", self.report),
            "l’ami d’Arthur"
        )
        self.assertEqual(
            self.sink.messages(),
            ["straight apostrophe (auto-fixed)"] * 2
        )
        self.assertEqual(self.sink.columns(), [1, 7])

    def test_apostrophe_next_to_space_left_alone(self):
        line = " 'ami' "
        self.assertEqual(Typography.fix_apostrophes(line, self.report), line)
        self.assertEqual(len(self.sink), 0)

    def test_apostrophe_accented_letters(self):
        self.assertEqual(
            Typography.fix_apostrophes("jusqu'à l'Œuvre", self.report),
            "jusqu’à l’Œuvre"
        )

    def test_single_ellipsis(self):
        self.assertEqual(
            Typography.fix_suspension_points("Bonjour...", self.report),
            "Bonjour…"
        )
        self.assertEqual(self.sink.messages(), ["bad ellipsis (auto-fixed)"])
        self.assertEqual(self.sink.columns(), [7])

    def test_multiple_ellipses(self):
        self.assertEqual(
            Typography.fix_suspension_points("a... b... c", self.report),
            "a… b… c"
        )
        self.assertEqual(self.sink.columns(), [1, 4])

    def test_four_dots_left_alone(self):
        line = "Quoi.... non"
        self.assertEqual(
            Typography.fix_suspension_points(line, self.report), line)
        self.assertEqual(self.sink.messages(), ["consecutive dots"])
        self.assertEqual(self.sink.columns(), [4])

    def test_long_run_reported_once(self):
        self.assertEqual(
            Typography.fix_suspension_points("a.....b...", self.report),
            "a.....b…"
        )
        self.assertEqual(
            self.sink.messages(),
            ["consecutive dots", "bad ellipsis (auto-fixed)"]
        )
        self.assertEqual(self.sink.columns(), [1, 7])

    def test_two_dots(self):
        self.assertEqual(
            Typography.fix_suspension_points("Hum..", self.report), "Hum..")
        self.assertEqual(self.sink.messages(), ["consecutive dots"])

    def test_ellipsis_glyph_untouched(self):
        self.assertEqual(
            Typography.fix_suspension_points("Hum…", self.report), "Hum…")
        self.assertEqual(len(self.sink), 0)

    def test_alinea_two_to_three(self):
        self.assertEqual(
            Typography.fix_alinea("  Texte", 3, self.report), "   Texte")

    def test_alinea_three_to_two(self):
        self.assertEqual(
            Typography.fix_alinea("   Texte", 2, self.report), "  Texte")

    def test_alinea_other_widths_untouched(self):
        for line in ["Texte", " Texte", "    Texte", "      Texte"]:
            for needed in [2, 3]:
                self.assertEqual(
                    Typography.fix_alinea(line, needed, self.report), line)

    def test_alinea_never_removed(self):
        self.assertEqual(
            Typography.fix_alinea("  Texte", 0, self.report), "  Texte")
        self.assertEqual(
            Typography.fix_alinea("   Texte", 0, self.report), "   Texte")

    def test_alinea_correction_is_silent(self):
        Typography.fix_alinea("  Texte", 3, self.report)
        Typography.fix_alinea("Texte", 3, self.report)
        self.assertEqual(len(self.sink), 0)

    def test_required_alinea(self):
        self.assertEqual(Typography.required_alinea(False, True, True), 0)
        self.assertEqual(Typography.required_alinea(True, False, False), 2)
        self.assertEqual(Typography.required_alinea(True, True, False), 3)
        self.assertEqual(Typography.required_alinea(True, False, True), 3)
