"""Unit tests for common/settings.py."""

import importlib
import os
import unittest

import common.settings

_ENV_VARS = (
    'LOG_LEVEL',
    'CATAN_NUMBER_ATTEMPTS',
    'CATAN_RECOMMENDATION_COUNT',
    'CATAN_EXPLANATION_MODE',
)


class TestSettings(unittest.TestCase):
    """Tests for shared advisor settings."""

    def setUp(self) -> None:
        self.env_backup = {name: os.environ.pop(name, None) for name in _ENV_VARS}

    def tearDown(self) -> None:
        for name, value in self.env_backup.items():
            os.environ.pop(name, None)
            if value is not None:
                os.environ[name] = value
        importlib.reload(common.settings)

    def test_defaults(self) -> None:
        """Settings fall back to their defaults when no env vars are set."""
        importlib.reload(common.settings)
        self.assertEqual(common.settings.LOG_LEVEL, 'INFO')
        self.assertEqual(common.settings.NUMBER_ASSIGNMENT_ATTEMPTS, 500)
        self.assertEqual(common.settings.RECOMMENDATION_COUNT, 5)
        self.assertEqual(common.settings.EXPLANATION_MODE, 'guide')

    def test_number_attempts_reads_from_env(self) -> None:
        """CATAN_NUMBER_ATTEMPTS is parsed as an integer."""
        os.environ['CATAN_NUMBER_ATTEMPTS'] = '25'
        importlib.reload(common.settings)
        self.assertEqual(common.settings.NUMBER_ASSIGNMENT_ATTEMPTS, 25)

    def test_log_level_is_upper_cased(self) -> None:
        """LOG_LEVEL is normalised to upper case."""
        os.environ['LOG_LEVEL'] = 'debug'
        importlib.reload(common.settings)
        self.assertEqual(common.settings.LOG_LEVEL, 'DEBUG')

    def test_recommendation_count_reads_from_env(self) -> None:
        """CATAN_RECOMMENDATION_COUNT is parsed as an integer."""
        os.environ['CATAN_RECOMMENDATION_COUNT'] = '3'
        importlib.reload(common.settings)
        self.assertEqual(common.settings.RECOMMENDATION_COUNT, 3)

    def test_explanation_mode_reads_from_env(self) -> None:
        """CATAN_EXPLANATION_MODE is read verbatim."""
        os.environ['CATAN_EXPLANATION_MODE'] = 'scholar'
        importlib.reload(common.settings)
        self.assertEqual(common.settings.EXPLANATION_MODE, 'scholar')


if __name__ == '__main__':
    unittest.main()
