import unittest

from textfix.diagnostics import DiagnosticCollector, Reporter
from textfix.quote_tracker import NarrativeState, QuoteTracker


class BlockTests(unittest.TestCase):

    def test_inside_brackets(self):
        line = '[eval exp="b"]'
        self.assertTrue(
            QuoteTracker.is_in_block(line, line.find('"'), '[', ']'))

    def test_after_closed_brackets(self):
        line = 'a [b] "c"'
        self.assertFalse(
            QuoteTracker.is_in_block(line, line.find('"'), '[', ']'))

    def test_escaped_bracket_ignored(self):
        line = '\\[a "b"'
        self.assertFalse(
            QuoteTracker.is_in_block(line, line.find('"'), '[', ']'))

    def test_same_delimiter_parity(self):
        line = '"a" b "c d"'
        self.assertFalse(QuoteTracker.is_in_block(line, 4, '"', '"'))
        self.assertTrue(QuoteTracker.is_in_block(line, 8, '"', '"'))


class QuoteFixTests(unittest.TestCase):

    def setUp(self):
        self.sink = DiagnosticCollector()
        self.report = Reporter('test.ks', self.sink, paged=True)

    def test_opening_double_quote(self):
        self.assertEqual(
            QuoteTracker.fix_double_quotes('  "Bonjour', self.report),
            '  “Bonjour'
        )
        self.assertEqual(self.sink.messages(), ["bad quotes (auto-fixed)"])
        self.assertEqual(self.sink.columns(), [2])

    def test_closing_double_quote(self):
        self.assertEqual(
            QuoteTracker.fix_double_quotes('Au revoir."  ', self.report),
            'Au revoir.”  '
        )
        self.assertEqual(self.sink.messages(), ["bad quotes (auto-fixed)"])

    def test_whole_line_dialogue(self):
        self.assertEqual(
            QuoteTracker.fix_double_quotes('  "Oui."', self.report),
            '  “Oui.”'
        )
        self.assertEqual(len(self.sink), 2)

    def test_ambiguous_double_quotes(self):
        line = 'Il dit "oui" et part'
        self.assertEqual(
            QuoteTracker.fix_double_quotes(line, self.report), line)
        self.assertEqual(self.sink.messages(), ["bad quotes"] * 2)
        self.assertEqual(self.sink.columns(), [7, 11])

    def test_double_quotes_in_brackets(self):
        line = '[eval exp="f.a=1"]'
        self.assertEqual(
            QuoteTracker.fix_double_quotes(line, self.report), line)
        self.assertEqual(len(self.sink), 0)

    def test_single_quotes_outside_citation(self):
        line = "Il a dit 'non'"
        self.assertEqual(
            QuoteTracker.fix_single_quotes(line, False, self.report), line)
        self.assertEqual(self.sink.messages(), ["bad quotes"] * 2)

    def test_single_quotes_in_citation(self):
        self.assertEqual(
            QuoteTracker.fix_single_quotes(
                "« Il a dit 'non' »", False, self.report),
            "« Il a dit ‘non’ »"
        )
        self.assertEqual(
            self.sink.messages(), ["bad apostrophe (auto-fixed)"] * 2)
        self.assertEqual(self.sink.columns(), [11, 15])

    def test_single_quote_in_open_citation(self):
        # The citation was opened on a previous line
        self.assertEqual(
            QuoteTracker.fix_single_quotes("dit 'oui'", True, self.report),
            "dit ‘oui’"
        )

    def test_single_quote_after_closed_citation(self):
        line = "« a » 'b'"
        self.assertEqual(
            QuoteTracker.fix_single_quotes(line, True, self.report), line)
        self.assertEqual(self.sink.messages(), ["bad quotes"] * 2)

    def test_single_quote_between_letters_in_citation(self):
        line = "«a'b»"
        self.assertEqual(
            QuoteTracker.fix_single_quotes(line, False, self.report), line)
        self.assertEqual(self.sink.messages(), ["bad apostrophe"])
        self.assertEqual(self.sink.columns(), [2])

    def test_single_quote_at_end_of_line(self):
        self.assertEqual(
            QuoteTracker.fix_single_quotes("« dit 'oui'", False, self.report),
            "« dit ‘oui’"
        )

    def test_single_quotes_in_formula_string(self):
        line = "[eval exp=\"f.name='x'\"]"
        self.assertEqual(
            QuoteTracker.fix_single_quotes(line, False, self.report), line)
        self.assertEqual(self.sink.messages(), ["bad quotes"] * 2)

    def test_single_quotes_in_formula(self):
        line = "[eval exp='x']"
        self.assertEqual(
            QuoteTracker.fix_single_quotes(line, False, self.report), line)
        self.assertEqual(len(self.sink), 0)


class DialogueTrackingTests(unittest.TestCase):

    def setUp(self):
        self.sink = DiagnosticCollector()
        self.report = Reporter('test.ks', self.sink, paged=True)

    def track(self, line, state):
        QuoteTracker.track(line, state, self.report)
        return state

    def test_closed_dialogue(self):
        state = self.track("  “Bonjour.”", NarrativeState())
        self.assertFalse(state.talking)
        self.assertEqual(len(self.sink), 0)

    def test_open_dialogue(self):
        state = self.track("  “Bonjour,", NarrativeState())
        self.assertTrue(state.talking)
        self.assertEqual(len(self.sink), 0)

    def test_previous_dialogue_unterminated(self):
        state = self.track("  “Encore", NarrativeState(talking=True))
        self.assertTrue(state.talking)
        self.assertEqual(
            self.sink.messages(), ["previous dialogue unterminated"])
        self.assertEqual(self.sink.columns(), [2])

    def test_dialogue_ends(self):
        state = self.track("fin.”", NarrativeState(talking=True))
        self.assertFalse(state.talking)
        self.assertEqual(len(self.sink), 0)

    def test_no_dialogue_to_end(self):
        self.track("fin.”", NarrativeState())
        self.assertEqual(self.sink.messages(), ["no dialogue to end"])

    def test_opening_mark_mid_line(self):
        state = self.track("Il dit “oui", NarrativeState())
        self.assertTrue(state.talking)
        self.assertEqual(self.sink.messages(), ["bad quotes"])
        self.assertEqual(self.sink.columns(), [7])

    def test_dialogue_inside_citation(self):
        state = self.track("  “Oui.”", NarrativeState(in_quote=True))
        self.assertFalse(state.in_quote)
        self.assertEqual(self.sink.messages(), ["dialogue inside a citation"])

    def test_citation_opens(self):
        state = self.track("« a » « b", NarrativeState())
        self.assertTrue(state.in_quote)
        self.assertEqual(len(self.sink), 0)

    def test_citation_closes(self):
        state = self.track("fin »", NarrativeState(in_quote=True))
        self.assertFalse(state.in_quote)
        self.assertEqual(len(self.sink), 0)

    def test_unbalanced_guillemets(self):
        state = self.track("« « «", NarrativeState())
        self.assertFalse(state.in_quote)
        self.assertEqual(self.sink.messages(), ["unbalanced guillemets « »"])
        self.assertEqual(self.sink.columns(), [-1])

    def test_no_citation_to_end(self):
        state = self.track("» fin", NarrativeState())
        self.assertFalse(state.in_quote)
        self.assertEqual(self.sink.messages(), ["no citation (« ») to end"])

    def test_citation_already_open(self):
        state = self.track("« début", NarrativeState(in_quote=True))
        self.assertTrue(state.in_quote)
        self.assertEqual(
            self.sink.messages(), ["citation (« ») already open"])

    def test_guillemets_out_of_order(self):
        self.track("» a «", NarrativeState())
        self.assertEqual(
            self.sink.messages(),
            ["guillemets « » out of order, line starts outside a citation"]
        )

    def test_guillemets_out_of_order_in_citation(self):
        self.track("« a »", NarrativeState(in_quote=True))
        self.assertEqual(
            self.sink.messages(),
            ["guillemets « » out of order, line starts inside a citation"]
        )

    def test_guillemets_in_order_in_citation(self):
        state = self.track("» a «", NarrativeState(in_quote=True))
        self.assertTrue(state.in_quote)
        self.assertEqual(len(self.sink), 0)


class NarrativeStateTests(unittest.TestCase):

    def test_copy_is_independent(self):
        state = NarrativeState(talking=True)
        snapshot = state.copy()
        state.talking = False
        self.assertTrue(snapshot.talking)
        self.assertNotEqual(state, snapshot)

    def test_restore(self):
        state = NarrativeState()
        state.restore(NarrativeState(True, True, False))
        self.assertEqual(state, NarrativeState(True, True, False))
