"""Pytest configuration for ray tracer tests.

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
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture(autouse=True)
def clear_all_scene_data():
    """Clear GPU-side scene data before and after each test.

    This ensures tests are isolated from each other.
    """
    # Import here so Taichi fields are allocated after ti.init()
    from src.phongtrace.core.integrator import clear_render_target
    from src.phongtrace.scene.manager import clear_scene

    def _clear_all():
        clear_scene()
        clear_render_target()

    _clear_all()

    yield

    _clear_all()


@pytest.fixture
def default_world():
    """The two-sphere test world."""
    from src.phongtrace.scene.world import default_world as make_default_world

    return make_default_world()
