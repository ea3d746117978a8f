import unittest
import numpy as np

from weave_permute.patterns.registry import get_pattern, get_permutation, inverse_permutation, list_patterns
from weave_permute.validation import ValidatedPattern


class TestPresetPatterns(unittest.TestCase):
    def test_presets_bijective(self):
        for size in (2, 3, 6, 7, 24):
            for name in list_patterns():
                with self.subTest(name=name, size=size):
                    perm = get_permutation(size, name)
                    self.assertEqual(len(perm), size)
                    self.assertTrue(np.array_equal(np.sort(perm), np.arange(size)))

    def test_get_pattern_is_validated(self):
        pattern = get_pattern(4, "reverse")
        self.assertIsInstance(pattern, ValidatedPattern)
        self.assertEqual(pattern.pattern, (4, 3, 2, 1))

    def test_known_orderings(self):
        self.assertEqual(get_pattern(6, "interleave").pattern, (1, 3, 5, 2, 4, 6))
        self.assertEqual(get_pattern(5, "pair_swap").pattern, (2, 1, 4, 3, 5))
        self.assertEqual(get_pattern(5, "center_out").pattern, (3, 2, 4, 1, 5))
        self.assertEqual(get_pattern(4, "rotate").pattern, (2, 3, 4, 1))

    def test_aliases_and_default(self):
        self.assertEqual(get_pattern(3, "mirror"), get_pattern(3, "reverse"))
        self.assertEqual(get_pattern(4, "weave"), get_pattern(4, "interleave"))
        self.assertTrue(get_pattern(5, None).is_identity)

    def test_unknown_pattern(self):
        with self.assertRaises(ValueError) as ctx:
            get_permutation(4, "herringbone")
        self.assertIn("Available patterns", str(ctx.exception))

    def test_non_positive_size(self):
        for name in list_patterns():
            with self.subTest(name=name):
                with self.assertRaises(ValueError):
                    get_permutation(0, name)

    def test_inverse_permutation(self):
        perm = get_permutation(7, "center_out")
        inv = inverse_permutation(perm)
        self.assertTrue(np.array_equal(perm[inv], np.arange(7)))


if __name__ == "__main__":
    unittest.main()
