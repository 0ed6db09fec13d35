"""Pytest fixtures for pygame UI tests."""

import os

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def pygame_headless():
    """Initialise pygame once without opening a real window."""
    pygame.init()
    yield
    pygame.quit()
