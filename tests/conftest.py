"""Pytest configuration for fireball tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu)
    yield


@pytest.fixture
def small_settings():
    """Render settings for a 64x48 frame with all scene constants fixed."""
    from fireball.config import RenderSettings

    return RenderSettings(width=64, height=48)
