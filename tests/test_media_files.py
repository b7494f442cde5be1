import os
import tempfile
import unittest

from silence_splitter.services import media_files


class TestMediaFiles(unittest.TestCase):

    def test_find_audio_files_filters_and_sorts(self):
        with tempfile.TemporaryDirectory() as d:
            for name in ('b.MP3', 'a.wav', 'c.flac', 'readme.txt', 'cover.jpg'):
                with open(os.path.join(d, name), 'w') as f:
                    f.write('')
            os.makedirs(os.path.join(d, 'nested.mp3'))

            found = media_files.find_audio_files(d)

            self.assertEqual([os.path.basename(p) for p in found], ['a.wav', 'b.MP3', 'c.flac'])

    def test_find_audio_files_custom_extensions(self):
        with tempfile.TemporaryDirectory() as d:
            for name in ('a.opus', 'b.mp3'):
                with open(os.path.join(d, name), 'w') as f:
                    f.write('')
            found = media_files.find_audio_files(d, ['.opus'])
            self.assertEqual([os.path.basename(p) for p in found], ['a.opus'])

    def test_create_output_dir(self):
        with tempfile.TemporaryDirectory() as d:
            target = os.path.join(d, 'x', 'y')
            self.assertEqual(media_files.create_output_dir(target), target)
            self.assertTrue(os.path.isdir(target))
            # existing directory is fine
            media_files.create_output_dir(target)


if __name__ == "__main__":
    unittest.main()
