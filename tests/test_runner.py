import unittest
from concurrent.futures import ThreadPoolExecutor

from blockdedup.errors import ConfigurationError
from blockdedup.options import DedupConfig
from blockdedup.pipeline import dedup_text, schedule_dedup


TEXT = "\n\n".join(
    ["Repeated legal disclaimer text that appears on every single page."] * 30
    + ["Actual content about the history of lighthouses on the northern coast."]
)


class TestScheduleDedup(unittest.TestCase):
    def test_small_input_runs_inline(self):
        fut = schedule_dedup(TEXT, DedupConfig(), large_input_threshold=len(TEXT) + 1)
        self.assertTrue(fut.done())
        self.assertEqual(fut.result().text, dedup_text(TEXT, DedupConfig()).text)

    def test_large_input_same_result(self):
        cfg = DedupConfig(algorithm="levenshtein")
        inline = dedup_text(TEXT, cfg)
        with ThreadPoolExecutor(max_workers=1) as ex:
            bg = schedule_dedup(TEXT, cfg, large_input_threshold=10, executor=ex).result(timeout=30)
        self.assertEqual(bg.text, inline.text)
        self.assertEqual(bg.stats, inline.stats)
        self.assertEqual(bg.stats.duplicates_found, 29)

    def test_shared_background_pool(self):
        res = schedule_dedup(TEXT, DedupConfig(), large_input_threshold=0).result(timeout=30)
        self.assertEqual(res.stats.duplicates_found, 29)

    def test_configuration_error_on_future(self):
        fut = schedule_dedup(TEXT, DedupConfig(preserve_patterns=("(",)))
        self.assertIsInstance(fut.exception(), ConfigurationError)


if __name__ == "__main__":
    unittest.main()
