import unittest

from blockdedup.options import SimilarityAlgorithm
from blockdedup.similarity import (
    calculate_similarity,
    cosine_similarity,
    jaccard_similarity,
    levenshtein_distance,
    levenshtein_similarity,
)


class TestJaccard(unittest.TestCase):
    def test_identical(self):
        self.assertEqual(jaccard_similarity("a b c", "a b c"), 1.0)

    def test_partial(self):
        # {a,b,c} vs {b,c,d}: 2 / 4
        self.assertAlmostEqual(jaccard_similarity("a b c", "b c d"), 0.5)

    def test_duplicates_collapse(self):
        self.assertEqual(jaccard_similarity("a a a b", "a b"), 1.0)

    def test_disjoint(self):
        self.assertEqual(jaccard_similarity("cats purr", "dogs bark"), 0.0)


class TestCosine(unittest.TestCase):
    def test_identical_is_exactly_one(self):
        self.assertEqual(cosine_similarity("the cat the hat", "the cat the hat"), 1.0)

    def test_frequency_weighting(self):
        # a=(2,1) over {x,y}, b=(1,1): 3 / (sqrt(5)*sqrt(2))
        self.assertAlmostEqual(cosine_similarity("x x y", "x y"), 3 / (5 ** 0.5 * 2 ** 0.5))

    def test_disjoint(self):
        self.assertEqual(cosine_similarity("red green", "blue yellow"), 0.0)


class TestLevenshtein(unittest.TestCase):
    def test_distance(self):
        self.assertEqual(levenshtein_distance("kitten", "sitting"), 3)
        self.assertEqual(levenshtein_distance("", "abc"), 3)
        self.assertEqual(levenshtein_distance("abc", ""), 3)
        self.assertEqual(levenshtein_distance("flaw", "lawn"), 2)

    def test_similarity(self):
        self.assertAlmostEqual(levenshtein_similarity("kitten", "sitting"), 1 - 3 / 7)
        self.assertEqual(levenshtein_similarity("same", "same"), 1.0)

    def test_both_empty_is_one(self):
        self.assertEqual(levenshtein_similarity("", ""), 1.0)


class TestCalculateSimilarity(unittest.TestCase):
    PAIRS = [
        ("the quick brown fox", "the quick brown fox"),
        ("the quick brown fox", "a slow green turtle"),
        ("abc", "abd abc abc"),
        ("x", "xyz xyz xyz xyz"),
    ]

    def test_bounds_for_all_algorithms(self):
        for algo in SimilarityAlgorithm:
            for a, b in self.PAIRS:
                s = calculate_similarity(a, b, algo)
                self.assertGreaterEqual(s, 0.0, (algo, a, b))
                self.assertLessEqual(s, 1.0, (algo, a, b))

    def test_self_similarity(self):
        for algo in SimilarityAlgorithm:
            self.assertEqual(calculate_similarity("hello world", "hello world", algo), 1.0)

    def test_string_selector(self):
        self.assertEqual(calculate_similarity("ab", "ac", "levenshtein"), 0.5)

    def test_unknown_algorithm_falls_back_to_jaccard(self):
        a, b = "a b c", "b c d"
        self.assertEqual(calculate_similarity(a, b, "soundex"), jaccard_similarity(a, b))


if __name__ == "__main__":
    unittest.main()
