"""Driver test fixtures."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from modelscope_store.drivers._modelscope import ModelScopeDriver

if TYPE_CHECKING:
    from collections.abc import Iterator

    from modelscope_store._driver import Driver


@pytest.fixture()
def model_driver(session: object) -> Iterator[ModelScopeDriver]:
    """Driver for the ``org/model`` model repository on a fake session."""
    d = ModelScopeDriver("org/model", session=session)  # type: ignore[arg-type]
    yield d
    d.close()


@pytest.fixture()
def dataset_driver(session: object) -> Iterator[ModelScopeDriver]:
    """Driver for the ``org/data`` dataset repository on a fake session."""
    d = ModelScopeDriver("org/data", resource_type="dataset", session=session)  # type: ignore[arg-type]
    yield d
    d.close()


@pytest.fixture(params=["model", "dataset"])
def driver(request: pytest.FixtureRequest, session: object) -> Iterator[Driver]:
    """Parameterized driver fixture used by the conformance suite."""
    d = ModelScopeDriver("org/repo", resource_type=request.param, session=session)  # type: ignore[arg-type]
    yield d
    d.close()
