import logging

import pytest

from mezr.logger import logger

logger.setLevel(logging.DEBUG)


@pytest.fixture
def game_distance():
    """A custom measurement type with a median reference unit and a restricted format unit list."""
    from mezr import create_measurement_type
    return create_measurement_type({
        'map_units': 1,
        'metres': 1 / 64,
        'player_steps': 1 / 24,
    }, format_options={
        'units': ['map_units'],
        'suffices': {
            'map_units': 'u',
            'metres': 'm',
        },
    }, name='GameDistance')
