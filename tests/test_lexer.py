"""
magicalc Test Suite: Lexer
==========================
Usage:
    python -m pytest tests/test_lexer.py -v
    python tests/test_lexer.py
"""
import math
import sys
import os
import unittest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from magicalc.lexer import Lexer, TokenType, classify
from magicalc.magic import MagicType


class TestClassify(unittest.TestCase):

    def test_keywords(self):
        expected = {
            "register": TokenType.REGISTER,
            "rank": TokenType.RANK,
            "type": TokenType.TYPE,
            "always_def": TokenType.ALWAYS_DEF,
            "table_addon": TokenType.TABLE_ADDON,
            "race_mult": TokenType.RACE_MULT,
            "{": TokenType.LBRACE,
            "}": TokenType.RBRACE,
        }
        for word, token_type in expected.items():
            token = classify(word)
            self.assertEqual(token.type, token_type, word)

    def test_keywords_are_case_sensitive(self):
        self.assertEqual(classify("Register").type, TokenType.NAME)
        self.assertEqual(classify("RANK").type, TokenType.NAME)

    def test_custom_identifiers(self):
        self.assertEqual(classify("ORDER").value, MagicType.ORDER)
        self.assertEqual(classify("CHAOS").value, MagicType.CHAOS)
        self.assertEqual(classify("CHAOS").type, TokenType.IDENTIFIER)
        self.assertEqual(classify("chaos").type, TokenType.NAME)

    def test_booleans(self):
        self.assertIs(classify("true").value, True)
        self.assertIs(classify("false").value, False)
        self.assertEqual(classify("TRUE").type, TokenType.NAME)

    def test_integers(self):
        self.assertEqual(classify("42").value, 42)
        self.assertEqual(classify("-3").value, -3)
        self.assertEqual(classify("+7").value, 7)
        self.assertEqual(classify("42").type, TokenType.INTEGER)

    def test_integer_overflow_falls_back_to_float(self):
        token = classify("9223372036854775808")
        self.assertEqual(token.type, TokenType.FLOAT)
        self.assertEqual(classify("9223372036854775807").type, TokenType.INTEGER)

    def test_floats(self):
        for word, value in [("1.5", 1.5), ("-0.25", -0.25), ("2.", 2.0), (".5", 0.5), ("1e3", 1000.0)]:
            token = classify(word)
            self.assertEqual(token.type, TokenType.FLOAT, word)
            self.assertEqual(token.value, value)

    def test_special_floats(self):
        self.assertTrue(math.isinf(classify("inf").value))
        self.assertTrue(math.isnan(classify("NaN").value))

    def test_underscored_number_is_name(self):
        self.assertEqual(classify("1_000").type, TokenType.NAME)

    def test_fallback_name(self):
        token = classify("fire_bolt")
        self.assertEqual(token.type, TokenType.NAME)
        self.assertEqual(token.value, "fire_bolt")


class TestLexer(unittest.TestCase):

    def test_splits_on_any_whitespace(self):
        tokens = Lexer("register\tFire\n\n  rank   2 ").tokenize()
        self.assertEqual([t.word for t in tokens], ["register", "Fire", "rank", "2"])

    def test_empty_source(self):
        self.assertEqual(Lexer("").tokenize(), [])
        self.assertEqual(Lexer("   \n\t ").tokenize(), [])

    def test_tracks_lines(self):
        tokens = Lexer("register Fire\n\nrank 2").tokenize()
        self.assertEqual([t.line for t in tokens], [1, 1, 3, 3])

    def test_no_punctuation_splitting(self):
        tokens = Lexer("register a{b}").tokenize()
        self.assertEqual(tokens[1].type, TokenType.NAME)
        self.assertEqual(tokens[1].value, "a{b}")


if __name__ == "__main__":
    unittest.main()
