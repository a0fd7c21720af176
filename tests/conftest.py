"""
Global pytest fixtures for kmeanspp tests.

- Seeds the Python, NumPy and PyTorch global RNGs used by the data generators.
- Pins torch to one thread so the default worker count is 1; tests that
  exercise the pool pass ``n_workers`` explicitly.
- Provides small point sets and a seeded torch.Generator for the clusterizer.
"""

from __future__ import annotations

import os
import random
import sys
from typing import Generator, List
from pathlib import Path

import numpy as np
import pytest
import torch

# Add the project's src directory to the Python path so tests can import the code
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if SRC.exists():
    sys.path.insert(0, str(SRC))
TESTS = Path(__file__).resolve().parent
if str(TESTS) not in sys.path:
    sys.path.insert(0, str(TESTS))

from kmeanspp import Point  # noqa: E402


def _get_seed() -> int:
    """Resolve the test seed from env or default."""
    env = os.getenv("TEST_RANDOM_SEED", "1337")
    try:
        return int(env)
    except ValueError:
        return 1337


@pytest.fixture(scope="session", autouse=True)
def seed_all() -> None:
    """
    Seed the global RNGs once per session.

    The clusterizer draws only from its own generator; global seeding pins
    the synthetic data and nothing else.
    """
    seed = _get_seed()
    random.seed(seed)
    np.random.seed(seed)
    torch.manual_seed(seed)


@pytest.fixture(scope="session", autouse=True)
def set_torch_threads() -> None:
    torch.set_num_threads(1)


@pytest.fixture(scope="function")
def rng(seed_all: None) -> Generator[np.random.Generator, None, None]:
    """Per-test NumPy Generator seeded from the session seed."""
    gen = np.random.default_rng(_get_seed())
    yield gen


@pytest.fixture(scope="function")
def generator() -> torch.Generator:
    """Fresh torch.Generator for seeding, seeded from the session seed."""
    g = torch.Generator()
    g.manual_seed(_get_seed())
    return g


@pytest.fixture(scope="function")
def two_groups() -> List[Point]:
    """Three points at 0 and three at 10 (1-D); new Point objects per test."""
    return [Point([x]) for x in (0.0, 0.0, 0.0, 10.0, 10.0, 10.0)]
