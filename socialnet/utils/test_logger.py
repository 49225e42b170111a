import unittest
import tempfile
import shutil
import os
import logging
from unittest import mock
from socialnet.utils.logger import setup_logger

class TestSetupLogger(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.logger = None

    def tearDown(self):
        if self.logger is not None:
            for handler in list(self.logger.handlers):
                handler.close()
                self.logger.removeHandler(handler)
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_log_file_follows_logger_name(self):
        with mock.patch.dict(os.environ, {"SOCIALNET_LOG_DIR": self.temp_dir}):
            self.logger = setup_logger("socialnet.logtest")
        self.logger.debug("written to file only")
        for handler in self.logger.handlers:
            handler.flush()
        path = os.path.join(self.temp_dir, "socialnet.logtest.log")
        self.assertTrue(os.path.exists(path))
        with open(path, "r", encoding="utf-8") as f:
            self.assertIn("written to file only", f.read())

    def test_handlers_attached_once(self):
        with mock.patch.dict(os.environ, {"SOCIALNET_LOG_DIR": self.temp_dir}):
            self.logger = setup_logger("socialnet.logtest.twice")
            again = setup_logger("socialnet.logtest.twice")
        self.assertIs(again, self.logger)
        self.assertEqual(len(self.logger.handlers), 2)
        self.assertEqual(self.logger.level, logging.DEBUG)

if __name__ == '__main__':
    unittest.main()
