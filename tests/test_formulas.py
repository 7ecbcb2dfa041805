"""
magicalc Test Suite: Formulas
=============================
Usage:
    python -m pytest tests/test_formulas.py -v
    python tests/test_formulas.py
"""
import math
import sys
import os
import unittest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from magicalc.formulas import (
    FormulaError, accuracy_factor, defense_life, effective_damage,
    multiplier, total_damage,
)
from magicalc.magic import MagicRank, MagicType

ORDER, CHAOS = MagicType.ORDER, MagicType.CHAOS


class TestMultiplier(unittest.TestCase):

    TABLE = {
        MagicRank.COMMON: (4.0, 5.5),
        MagicRank.UNCOMMON: (6.0, 7.5),
        MagicRank.EPIC: (9.0, 10.5),
        MagicRank.LEGENDARY: (13.0, 14.5),
        MagicRank.MYTHIC: (18.0, 19.5),
        MagicRank.DIVINE: (24.0, 25.5),
    }

    def test_table(self):
        for rank, (order, chaos) in self.TABLE.items():
            self.assertEqual(multiplier(rank, ORDER), order)
            self.assertEqual(multiplier(rank, CHAOS), chaos)

    def test_chaos_offset(self):
        for rank in MagicRank:
            self.assertEqual(multiplier(rank, CHAOS) - multiplier(rank, ORDER), 1.5)

    def test_increasing_with_rank(self):
        for typ in MagicType:
            values = [multiplier(rank, typ) for rank in MagicRank]
            self.assertEqual(values, sorted(values))

    def test_total_damage_floors_multiplier(self):
        self.assertEqual(total_damage(10, MagicRank.COMMON, CHAOS), 50)
        self.assertEqual(total_damage(10, MagicRank.EPIC, CHAOS), 100)
        self.assertEqual(total_damage(10, MagicRank.EPIC, ORDER), 90)


class TestAccuracy(unittest.TestCase):

    def test_order(self):
        self.assertAlmostEqual(accuracy_factor(10, ORDER), 0.75)
        self.assertAlmostEqual(accuracy_factor(11, ORDER), 0.775)

    def test_chaos_even_matches_order(self):
        self.assertEqual(accuracy_factor(10, CHAOS), accuracy_factor(10, ORDER))

    def test_chaos_odd(self):
        self.assertEqual(accuracy_factor(11, CHAOS), 0.5 + 11 * 0.18 / 8.0)
        self.assertNotEqual(accuracy_factor(11, CHAOS), accuracy_factor(11, ORDER))

    def test_chaos_negative_odd(self):
        self.assertEqual(accuracy_factor(-3, CHAOS), 0.5 + -3 * 0.18 / 8.0)


class TestEffectiveDamage(unittest.TestCase):

    def test_order_common(self):
        self.assertEqual(effective_damage(10, 10, MagicRank.COMMON, ORDER, 1.0), 30)

    def test_chaos_odd_accuracy(self):
        # 50 * 0.7475 = 37.375
        self.assertEqual(effective_damage(11, 10, MagicRank.COMMON, CHAOS, 1.0), 37)

    def test_truncates(self):
        # 9 * 0.775 = 6.975
        result = effective_damage(11, 1, MagicRank.EPIC, ORDER, 1.0)
        self.assertEqual(result, 6)
        self.assertIsInstance(result, int)

    def test_race_mult(self):
        self.assertEqual(effective_damage(10, 10, MagicRank.COMMON, ORDER, 1.5), 45)

    def test_non_negative(self):
        for accr in range(0, 30):
            for mana in range(0, 30, 7):
                for rank in MagicRank:
                    self.assertGreaterEqual(effective_damage(accr, mana, rank, CHAOS, 1.0), 0)

    def test_non_finite_raises(self):
        with self.assertRaises(FormulaError):
            effective_damage(10, 10, MagicRank.COMMON, ORDER, math.inf)
        with self.assertRaises(FormulaError):
            effective_damage(10, 10, MagicRank.COMMON, ORDER, math.nan)

    def test_oversized_inputs_raise(self):
        with self.assertRaises(FormulaError):
            effective_damage(10, 10**400, MagicRank.COMMON, ORDER, 1.0)
        with self.assertRaises(FormulaError):
            effective_damage(10**400, 10, MagicRank.COMMON, CHAOS, 1.0)
        with self.assertRaises(FormulaError):
            defense_life(10, 10**400, MagicRank.COMMON, CHAOS, 1.0)


class TestDefenseLife(unittest.TestCase):

    def test_order(self):
        self.assertEqual(defense_life(10, 10, MagicRank.COMMON, ORDER, 1.0), 39)

    def test_chaos_subtracts_log(self):
        # r = 37, 1.3 * 37 - ln(37) = 44.49
        self.assertEqual(defense_life(11, 10, MagicRank.COMMON, CHAOS, 1.0), 44)

    def test_chaos_zero_damage(self):
        self.assertEqual(defense_life(10, 0, MagicRank.COMMON, CHAOS, 1.0), 0)

    def test_chaos_negative_damage(self):
        self.assertEqual(defense_life(10, -1, MagicRank.COMMON, CHAOS, 1.0), math.floor(1.3 * -4))

    def test_non_finite_raises(self):
        with self.assertRaises(FormulaError):
            defense_life(10, 10, MagicRank.COMMON, CHAOS, math.inf)


if __name__ == "__main__":
    unittest.main()
