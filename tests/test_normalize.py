"""Test normalize."""

import unittest

from .context import cotester  # noqa: F401

from cotester.logparser import normalize  # noqa: I100


class TestNormalize(unittest.TestCase):
    """Test normalize."""

    def test_windows1252_char(self):
        self.assertEqual('€', normalize.windows1252_char(0x80))
        self.assertEqual('œ', normalize.windows1252_char(0x9c))
        self.assertEqual('A', normalize.windows1252_char(0x41))
        # Undefined in cp1252
        self.assertEqual('\x90', normalize.windows1252_char(0x90))
        self.assertEqual('\x8f', normalize.windows1252_char(0x8f))

    def test_mojibake_table(self):
        self.assertEqual('✓', normalize.MOJIBAKE['âœ“'])
        self.assertEqual('✓', normalize.MOJIBAKE['â\x9c\x93'])
        self.assertEqual('🌐', normalize.MOJIBAKE['ðŸŒ\x90'])
        self.assertEqual('ü', normalize.MOJIBAKE['Ã¼'])
        self.assertEqual('\ufe0f', normalize.MOJIBAKE['ï¸\x8f'])
        for garbled in normalize.MOJIBAKE:
            self.assertGreater(len(garbled), 1)

    def test_strip_ansi(self):
        self.assertEqual('✓ passed', normalize.strip_ansi('\x1b[32m✓ passed\x1b[0m'))
        self.assertEqual('bold', normalize.strip_ansi('\x1b[1;31mbold\x1b[m'))
        self.assertEqual('text', normalize.strip_ansi('\x1b]0;window title\x07text'))
        self.assertEqual('charset', normalize.strip_ansi('\x1b(Bcharset'))
        # 8-bit controls are part of mis-decoded text and must survive
        self.assertEqual('â\x9c\x93', normalize.strip_ansi('â\x9c\x93'))

    def test_repair_mojibake(self):
        self.assertEqual('✓ page opened', normalize.repair_mojibake('âœ“ page opened'))
        self.assertEqual('✓ page opened', normalize.repair_mojibake('â\x9c\x93 page opened'))
        self.assertEqual('❌ STEP FAIL', normalize.repair_mojibake('â\x9dŒ STEP FAIL'))
        self.assertEqual('🌐 Browser: chromium', normalize.repair_mojibake('ðŸŒ\x90 Browser: chromium'))
        self.assertEqual('🌐 Browser: chromium',
                         normalize.repair_mojibake('ð\x9f\x8c\x90 Browser: chromium'))
        self.assertEqual('🎥 Video kaydedildi', normalize.repair_mojibake('ðŸŽ¥ Video kaydedildi'))
        self.assertEqual('✔\ufe0f done', normalize.repair_mojibake('âœ”ï¸\x8f done'))
        self.assertEqual('Ekran görüntüsü', normalize.repair_mojibake('Ekran gÃ¶rÃ¼ntÃ¼sÃ¼'))

    def test_unknown_passthrough(self):
        for line in ['Ã¢Å“â€œ not a known sequence',
                     'naïve café',
                     'plain ASCII line',
                     '✓ already fine']:
            with self.subTest(line=line):
                self.assertEqual(line, normalize.repair_mojibake(line))

    def test_normalize_line(self):
        self.assertEqual('✓ passed', normalize.normalize_line('  \x1b[32mâœ“ passed\x1b[0m \r'))
        self.assertEqual('', normalize.normalize_line(' \t '))
        # A trailing mis-decoded glyph is repaired before whitespace is stripped
        self.assertEqual('done ✅', normalize.normalize_line('done â\x9c\x85'))

    def test_idempotent(self):
        for line in ['  \x1b[32mâœ“ passed\x1b[0m',
                     'ðŸŒ\x90 Browser: webkit | Headless: true',
                     'done â\x9c\x85',
                     'Ã¢Å“â€œ unknown',
                     '[Login] ➡ STEP START: open page',
                     '']:
            with self.subTest(line=line):
                once = normalize.normalize_line(line)
                self.assertEqual(once, normalize.normalize_line(once))
