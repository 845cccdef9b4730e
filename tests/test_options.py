import math
import unittest

from blockdedup.errors import ConfigurationError
from blockdedup.options import (
    BlockSplitMethod,
    DedupConfig,
    SimilarityAlgorithm,
    build_dedup_config,
    check_preserve_patterns,
    validate_cli_options,
)


class TestDedupConfig(unittest.TestCase):
    def test_defaults(self):
        cfg = DedupConfig()
        self.assertEqual(cfg.similarity_threshold, 0.7)
        self.assertEqual(cfg.min_block_size, 30)
        self.assertIs(cfg.algorithm, SimilarityAlgorithm.jaccard)
        self.assertIs(cfg.split_method, BlockSplitMethod.paragraph)
        self.assertEqual(cfg.preserve_patterns, ())

    def test_threshold_clamped(self):
        self.assertEqual(DedupConfig(similarity_threshold=1.5).similarity_threshold, 1.0)
        self.assertEqual(DedupConfig(similarity_threshold=-0.2).similarity_threshold, 0.0)

    def test_nan_threshold_rejected(self):
        with self.assertRaises(ConfigurationError):
            DedupConfig(similarity_threshold=math.nan)
        with self.assertRaises(ConfigurationError):
            DedupConfig(similarity_threshold="high")

    def test_min_block_size(self):
        self.assertEqual(DedupConfig(min_block_size=-5).min_block_size, 0)
        self.assertEqual(DedupConfig(min_block_size=12.0).min_block_size, 12)
        with self.assertRaises(ConfigurationError):
            DedupConfig(min_block_size=2.5)

    def test_names_coerced(self):
        cfg = DedupConfig(algorithm="Cosine", split_method="sized_chunks")
        self.assertIs(cfg.algorithm, SimilarityAlgorithm.cosine)
        self.assertIs(cfg.split_method, BlockSplitMethod.sized)

    def test_unknown_names_fall_back(self):
        cfg = DedupConfig(algorithm="soundex", split_method="words")
        self.assertIs(cfg.algorithm, SimilarityAlgorithm.jaccard)
        self.assertIs(cfg.split_method, BlockSplitMethod.paragraph)

    def test_patterns_trimmed(self):
        cfg = DedupConfig(preserve_patterns=(" ^Chapter ", "", "footer"))
        self.assertEqual(cfg.preserve_patterns, ("^Chapter", "footer"))
        self.assertEqual(DedupConfig(preserve_patterns="a\nb").preserve_patterns, ("a", "b"))

    def test_frozen(self):
        with self.assertRaises(Exception):
            DedupConfig().similarity_threshold = 0.1  # type: ignore[misc]

    def test_build_overlays(self):
        base = DedupConfig(similarity_threshold=0.9, algorithm="levenshtein")
        cfg = build_dedup_config(base=base, min_block_size=5, algorithm=None)
        self.assertEqual(cfg.similarity_threshold, 0.9)
        self.assertEqual(cfg.min_block_size, 5)
        self.assertIs(cfg.algorithm, SimilarityAlgorithm.levenshtein)
        self.assertIs(build_dedup_config(base=base), base)

    def test_to_dict(self):
        d = DedupConfig(preserve_patterns=("x",)).to_dict()
        self.assertEqual(d["algorithm"], "jaccard")
        self.assertEqual(d["preserve_patterns"], ["x"])


class TestValidation(unittest.TestCase):
    def test_clean_passthrough(self):
        out = validate_cli_options({
            "similarity_threshold": 0.8,
            "min_block_size": 10,
            "algorithm": " COSINE ",
            "split_method": "sized-chunks",
            "preserve_patterns": ["^Chapter", "  "],
        })
        self.assertEqual(out["similarity_threshold"], 0.8)
        self.assertEqual(out["algorithm"], "cosine")
        self.assertEqual(out["split_method"], "sized")
        self.assertEqual(out["preserve_patterns"], ["^Chapter"])

    def test_missing_values_are_none(self):
        out = validate_cli_options({})
        self.assertTrue(all(v is None for v in out.values()))

    def test_out_of_range_rejected_without_fixup(self):
        with self.assertRaises(ValueError):
            validate_cli_options({"similarity_threshold": 1.2})
        with self.assertRaises(ValueError):
            validate_cli_options({"min_block_size": -1})
        with self.assertRaises(ValueError):
            validate_cli_options({"algorithm": "soundex"})

    def test_fixup_clamps(self):
        out = validate_cli_options({"similarity_threshold": 1.2, "min_block_size": -1, "algorithm": "soundex"}, fixup=True)
        self.assertEqual(out["similarity_threshold"], 1.0)
        self.assertEqual(out["min_block_size"], 0)
        self.assertIsNone(out["algorithm"])

    def test_bad_pattern_rejected_even_with_fixup(self):
        with self.assertRaises(ValueError) as ctx:
            validate_cli_options({"preserve_patterns": ["ok", "(", "[x"]}, fixup=True)
        self.assertIn("#1", str(ctx.exception))
        self.assertIn("#2", str(ctx.exception))

    def test_check_preserve_patterns(self):
        issues = check_preserve_patterns(["^fine$", "(unclosed", "also fine"])
        self.assertEqual(len(issues), 1)
        self.assertEqual(issues[0].index, 1)
        self.assertEqual(issues[0].pattern, "(unclosed")
        self.assertTrue(issues[0].error)
        self.assertEqual(check_preserve_patterns(None), [])


if __name__ == "__main__":
    unittest.main()
