import contextlib
import io
import tempfile
from pathlib import Path
import unittest

from tools.bench_dedup import main


class TestBenchDedup(unittest.TestCase):
    def test_reports_throughput(self):
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "page.txt"
            p.write_text(
                "A paragraph long enough to be compared with others.\n\n"
                "A paragraph long enough to be compared with others.",
                encoding="utf-8",
            )
            out = io.StringIO()
            with contextlib.redirect_stdout(out):
                code = main([str(p), "--repeat", "2"])
        self.assertEqual(code, 0)
        self.assertIn("(2 duplicate blocks)", out.getvalue())

    def test_no_files(self):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            code = main(["/nonexistent/definitely_missing.txt"])
        self.assertEqual(code, 0)
        self.assertIn("No files found.", out.getvalue())


if __name__ == "__main__":
    unittest.main()
