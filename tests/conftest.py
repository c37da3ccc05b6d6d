"""Shared pytest fixtures for the pegcomb test suite."""

from __future__ import annotations

import pytest

from pegcomb import token, transform


@pytest.fixture
def digits():
    return token(r"\d+")


@pytest.fixture
def number(digits):
    return transform(digits, int)


@pytest.fixture
def ws():
    return token(r"\s*")
