# SPDX-License-Identifier: MIT-0
# SPDX-FileCopyrightText:  2023 Istvan Pasztor

"""Shared fixtures for the CRC engine tests."""

import random

import pytest

from crc_engine import CATALOGUE


@pytest.fixture
def rng():
    """Deterministic random source."""
    return random.Random(0x5eed)


@pytest.fixture(params=CATALOGUE, ids=lambda v: v.name)
def variant(request):
    """Every algorithm of the builtin catalogue."""
    return request.param
