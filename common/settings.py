"""Shared advisor settings read from environment variables."""

import os

LOG_LEVEL: str = os.environ.get('LOG_LEVEL', 'INFO').upper()

# Shuffle-and-validate budget for constrained number-token assignment.
NUMBER_ASSIGNMENT_ATTEMPTS: int = int(os.environ.get('CATAN_NUMBER_ATTEMPTS', '500'))

RECOMMENDATION_COUNT: int = int(os.environ.get('CATAN_RECOMMENDATION_COUNT', '5'))
EXPLANATION_MODE: str = os.environ.get('CATAN_EXPLANATION_MODE', 'guide')
