"""Pytest configuration and fixtures."""

import pytest
import structlog

from psp_calldata.cache import MemoryCacheStore, ResponseCache
from psp_calldata.orchestrator import RouteOrchestrator
from psp_calldata.paraswap import MockParaSwap
from tests.helpers import AUGUSTUS_V5, V5_MULTI_SWAP, make_calldata, make_route


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo logging configuration done by CLI entry points."""
    yield
    structlog.reset_defaults()


def multiswap_calldata(build_args: dict) -> str:
    """V5 multiSwap-shaped calldata carrying the built source amount at offset 68."""
    return make_calldata(V5_MULTI_SWAP, int(build_args["src_amount"]), slot=2)


@pytest.fixture
def route():
    """Quote of 1000 DAI -> 2000 wei WETH."""
    return make_route(src_amount="1000", dest_amount="2000")


@pytest.fixture
def mock_paraswap(route) -> MockParaSwap:
    """Mock aggregator returning ``route`` and multiSwap calldata."""
    return MockParaSwap(route=route, router=AUGUSTUS_V5, calldata=multiswap_calldata)


@pytest.fixture
def memory_store() -> MemoryCacheStore:
    return MemoryCacheStore()


@pytest.fixture
def orchestrator(mock_paraswap, memory_store) -> RouteOrchestrator:
    """Orchestrator wired to the mock aggregator and an in-memory cache."""
    return RouteOrchestrator(mock_paraswap, mock_paraswap, ResponseCache(memory_store))
