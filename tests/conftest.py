"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Global registry and configuration isolation so generators registered by one
  test never leak into another.
- A recording console fixture for asserting on log output.
"""

import sys
from pathlib import Path

import pytest
from rich.console import Console

# Add src to path so we can import 'fixture_forge' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))
sys.path.insert(0, str(Path(__file__).parent))

from fixture_forge.config import ForgeConfig, reset_config, set_config
from fixture_forge.registry import clear_registry
from fixture_forge.utils.console import reset_console, set_console

RANDOM_GENERATION_RUNS = 1000


@pytest.fixture(autouse=True)
def isolate_generator_registry():
  """
  Starts every test with an empty registry and default configuration.
  """
  clear_registry()
  set_config(ForgeConfig())
  yield
  clear_registry()
  reset_config()


@pytest.fixture
def recorded_console():
  """
  Redirects package logging to a recording console for the duration of a test.
  """
  capture = Console(record=True, width=200)
  set_console(capture)
  yield capture
  reset_console()
