"""End-to-end preparation through the CLI with a file-backed cache.

The aggregator is mocked at the HTTP layer, so the REST client, the
orchestrator, the offset tables and the cache all run for real.
"""

import io
import json

import httpx
import pytest

from psp_calldata.cache import FileCacheStore, ResponseCache, compute_cache_key
from psp_calldata.cli import main
from psp_calldata.config import Settings
from psp_calldata.encoding import SwapCalldata
from psp_calldata.orchestrator import RouteOrchestrator
from psp_calldata.paraswap import ParaSwapClient
from tests.helpers import (
    AUGUSTUS_V5,
    DAI,
    UNKNOWN_SELECTOR,
    USER,
    V5_BUY,
    V5_MULTI_SWAP,
    WETH,
    make_calldata,
    read_word,
)

QUOTED_SRC = 1000
QUOTED_DEST = 123_456_789_012_345_678


class FakeParaSwapApi:
    """Answers /prices and /transactions like the ParaSwap API.

    Built calldata carries the amount being patched at the slot the router
    method defines, so offsets can be checked against real content.
    """

    def __init__(self, selector_override: str | None = None) -> None:
        self.selector_override = selector_override
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/prices":
            side = request.url.params["side"]
            amount = request.url.params["amount"]
            route = {
                "srcToken": request.url.params["srcToken"],
                "destToken": request.url.params["destToken"],
                "srcAmount": amount if side == "SELL" else str(QUOTED_SRC),
                "destAmount": str(QUOTED_DEST) if side == "SELL" else amount,
                "side": side,
                "contractMethod": "multiSwap" if side == "SELL" else "buy",
            }
            return httpx.Response(200, json={"priceRoute": route})

        body = json.loads(request.content)
        if body["priceRoute"]["side"] == "SELL":
            data = make_calldata(V5_MULTI_SWAP, int(body["srcAmount"]), slot=2)
        else:
            data = make_calldata(V5_BUY, int(body["destAmount"]), slot=5)
        if self.selector_override:
            data = self.selector_override + data[10:]
        return httpx.Response(200, json={"from": USER, "to": AUGUSTUS_V5, "data": data})


@pytest.fixture
def cache_dir(tmp_path):
    return tmp_path / "src" / "tests" / ".pspcache"


def make_orchestrator(api: FakeParaSwapApi, cache_dir) -> RouteOrchestrator:
    client = ParaSwapClient(
        client=httpx.Client(transport=httpx.MockTransport(api), base_url="https://api.test")
    )
    return RouteOrchestrator(client, client, ResponseCache(FileCacheStore(cache_dir)))


def invoke(argv, api, cache_dir) -> tuple[int, bytes]:
    stdout = io.BytesIO()
    status = main(
        argv,
        settings=Settings(cache_dir=cache_dir),
        orchestrator=make_orchestrator(api, cache_dir),
        stdout=stdout,
    )
    return status, stdout.getvalue()


class TestSellScenario:
    """SELL 1000 DAI for WETH with 3% slippage and offset patching."""

    ARGV = ["1", DAI, WETH, "1000", USER, "SELL", "3", "true", "18", "18", "17000000"]

    def test_record(self, cache_dir):
        api = FakeParaSwapApi()

        status, output = invoke(self.ARGV, api, cache_dir)

        assert status == 0
        record = SwapCalldata.from_output(output)
        assert record.to == AUGUSTUS_V5
        assert record.src_amount == 1000
        assert record.dest_amount == QUOTED_DEST * 97 // 100
        assert record.offset == 68
        assert read_word(record.data, record.offset) == 1000

    def test_idempotent_and_cached(self, cache_dir):
        """The second run is byte-identical and makes no API request."""
        api = FakeParaSwapApi()
        _, first = invoke(self.ARGV, api, cache_dir)
        requests_after_first = len(api.requests)

        _, second = invoke(self.ARGV, api, cache_dir)

        assert second == first
        assert requests_after_first == 2
        assert len(api.requests) == 2
        assert (cache_dir / compute_cache_key(self.ARGV)).read_bytes() == first

    def test_cache_write_disabled(self, cache_dir):
        api = FakeParaSwapApi()
        status, _ = invoke([*self.ARGV, "false"], api, cache_dir)
        assert status == 0
        assert not cache_dir.exists() or not any(cache_dir.iterdir())

    def test_unpatched_sends_no_method_filter(self, cache_dir):
        api = FakeParaSwapApi()
        argv = list(self.ARGV)
        argv[7] = "false"

        _, output = invoke(argv, api, cache_dir)

        assert SwapCalldata.from_output(output).offset == 0
        assert "includeContractMethods" not in api.requests[0].url.params


class TestBuyScenario:
    """BUY exactly 500 base units of WETH with DAI and 2% slippage."""

    ARGV = ["1", DAI, WETH, "500", USER, "BUY", "2", "true", "18", "18", "17000000"]

    def test_record(self, cache_dir):
        api = FakeParaSwapApi()

        status, output = invoke(self.ARGV, api, cache_dir)

        assert status == 0
        record = SwapCalldata.from_output(output)
        assert record.src_amount == QUOTED_SRC * 102 // 100
        assert record.dest_amount == 500
        assert record.offset == 164
        assert read_word(record.data, record.offset) == 500
        assert api.requests[0].url.params["includeContractMethods"] == "buy"


class TestFailureScenario:
    def test_unsupported_selector(self, cache_dir, capsys):
        """Unknown router method: non-zero exit, no output, nothing cached."""
        api = FakeParaSwapApi(selector_override=UNKNOWN_SELECTOR)

        status, output = invoke(TestSellScenario.ARGV, api, cache_dir)

        assert status == 1
        assert output == b""
        assert "error:" in capsys.readouterr().err
        assert not cache_dir.exists() or not any(cache_dir.iterdir())
