from __future__ import annotations

import array
import os
from typing import TYPE_CHECKING, Any

import numpy as np
import pytest
from hypothesis import HealthCheck, Verbosity, settings

from ndslice import config

if TYPE_CHECKING:
    from collections.abc import Callable, Generator


@pytest.fixture(autouse=True)
def reset_config() -> Generator[None, None, None]:
    config.reset()
    yield
    config.reset()


@pytest.fixture
def arr8() -> list[int]:
    return [1, 2, 3, 4, 5, 6, 7, 8]


def make_buffer(kind: str, values: list[int]) -> object:
    if kind == "list":
        return list(values)
    if kind == "array":
        return array.array("q", values)
    if kind == "bytearray":
        return bytearray(values)
    if kind == "numpy":
        return np.array(values, dtype=np.int64)
    raise ValueError(f"unknown buffer kind {kind}")


@pytest.fixture(params=["list", "array", "bytearray", "numpy"])
def buffer_factory(request: pytest.FixtureRequest) -> Callable[[list[int]], Any]:
    """Fixture to parametrize over the flat, writeable buffer types a view accepts"""
    kind = request.param
    return lambda values: make_buffer(kind, values)


settings.register_profile(
    "default",
    parent=settings.get_profile("default"),
    max_examples=300,
    suppress_health_check=[HealthCheck.filter_too_much, HealthCheck.too_slow],
    deadline=None,
    verbosity=Verbosity.normal,
)
settings.register_profile(
    "ci",
    parent=settings.get_profile("ci"),
    max_examples=300,
    derandomize=True,  # more like regression testing
    deadline=None,
    suppress_health_check=[HealthCheck.filter_too_much, HealthCheck.too_slow],
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "default"))
