"""
Tests for output file naming and index continuation
"""
import os
import tempfile
import unittest

from silence_splitter.core import OutputNamer, next_free_index


class TestOutputNamer(unittest.TestCase):

    def test_zero_padded_names(self):
        namer = OutputNamer('/out', 'talk', 'mp3')
        self.assertEqual(namer.filename(1), 'talk_001.mp3')
        self.assertEqual(namer.filename(12), 'talk_012.mp3')
        self.assertEqual(namer(3), os.path.join('/out', 'talk_003.mp3'))

    def test_start_index_offsets_numbers(self):
        namer = OutputNamer('/out', 'talk', '.flac', start_index=8)
        self.assertEqual(namer.filename(1), 'talk_008.flac')
        self.assertEqual(namer.filename(3), 'talk_010.flac')

    def test_wide_indexes_are_not_truncated(self):
        self.assertEqual(OutputNamer('/out', 'a', 'wav').filename(1234), 'a_1234.wav')

    def test_missing_extension(self):
        self.assertEqual(OutputNamer('/out', 'raw', '').filename(1), 'raw_001')

    def test_invalid_start_index(self):
        with self.assertRaises(ValueError):
            OutputNamer('/out', 'talk', 'mp3', start_index=0)


class TestNextFreeIndex(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = self.tmp.name

    def tearDown(self):
        self.tmp.cleanup()

    def _touch(self, name):
        with open(os.path.join(self.dir, name), 'w') as f:
            f.write('')

    def test_empty_or_missing_directory(self):
        self.assertEqual(next_free_index(self.dir, 'talk', 'mp3'), 1)
        self.assertEqual(next_free_index(os.path.join(self.dir, 'nope'), 'talk', 'mp3'), 1)

    def test_continues_after_highest_matching_file(self):
        for name in ('talk_001.mp3', 'talk_007.mp3', 'talk_010.wav', 'other_050.mp3', 'talk_01.mp3'):
            self._touch(name)
        self.assertEqual(next_free_index(self.dir, 'talk', '.mp3'), 8)

    def test_prefix_with_regex_characters(self):
        self._touch('ep.1 (live)_002.mp3')
        self.assertEqual(next_free_index(self.dir, 'ep.1 (live)', 'mp3'), 3)

    def test_for_source_uses_stem_and_extension(self):
        self._touch('lecture_004.m4a')
        namer = OutputNamer.for_source('/music/lecture.m4a', self.dir)
        self.assertEqual(namer(1), os.path.join(self.dir, 'lecture_005.m4a'))

        fresh = OutputNamer.for_source('/music/lecture.m4a', self.dir, continue_numbering=False)
        self.assertEqual(fresh.filename(1), 'lecture_001.m4a')


if __name__ == "__main__":
    unittest.main()
