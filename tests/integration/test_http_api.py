"""Integration tests for the HTTP API."""

from collections.abc import Iterator
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from balancer_sdk import __version__
from balancer_sdk.api.endpoints import get_network
from balancer_sdk.api.main import app
from balancer_sdk.config import Network, NetworkConfig, get_network_config
from balancer_sdk.constants import BALANCER_VAULT
from tests.helpers import DAI, EURS, ONE, SENDER, USDC, WETH
from tests.helpers.constants import FX_POOL, FX_POOL_ID, WEIGHTED_POOL, WEIGHTED_POOL_ID

pytestmark = pytest.mark.integration

CUSTOM_VAULT = "0x3333333333333333333333333333333333333333"


def weighted_pool_json(**overrides: object) -> dict:
    """Fee-less 50/50 WETH/DAI pool, 1000 of each, 2000 BPT."""
    pool: dict = {
        "id": WEIGHTED_POOL_ID,
        "address": WEIGHTED_POOL,
        "poolType": "Weighted",
        "tokens": [
            {"address": WETH, "balance": str(1000 * ONE), "weight": "0.5"},
            {"address": DAI, "balance": str(1000 * ONE), "weight": "0.5"},
        ],
        "swapFee": "0",
        "totalShares": str(2000 * ONE),
    }
    pool.update(overrides)
    return pool


def route_json() -> dict:
    return {
        "tokenIn": WETH,
        "tokenOut": DAI,
        "tokenAddresses": [WETH, DAI],
        "swaps": [
            {"poolId": WEIGHTED_POOL_ID, "assetInIndex": 0, "assetOutIndex": 1, "amount": "1000"}
        ],
        "swapAmount": "1000",
        "returnAmount": "500",
    }


@pytest.fixture
def client() -> Iterator[TestClient]:
    """Create a test client for the API."""
    # Ensure dependency overrides are cleared after test
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "version": __version__}


class TestJoinExit:
    def test_proportional_join(self, client: TestClient) -> None:
        response = client.post(
            "/pools/join",
            json={"pool": weighted_pool_json(), "bptAmount": str(20 * ONE), "sender": SENDER},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["kind"] == "ALL_TOKENS_IN_FOR_EXACT_BPT_OUT"
        assert data["functionName"] == "joinPool"
        assert data["to"] == BALANCER_VAULT
        assert data["bptOut"] == str(20 * ONE)
        assert data["amountsIn"] == [str(10 * ONE), str(10 * ONE)]
        assert data["priceImpact"] == "0"
        assert data["value"] == "0"
        assert data["data"].startswith("0xb95cac28")

    def test_single_token_exit(self, client: TestClient) -> None:
        response = client.post(
            "/pools/exit",
            json={
                "pool": weighted_pool_json(),
                "bptAmount": str(20 * ONE),
                "tokenIndex": 1,
                "slippageBps": 50,
                "sender": SENDER,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["kind"] == "EXACT_BPT_IN_FOR_ONE_TOKEN_OUT"
        assert data["amountsOut"][0] == "0"
        assert int(data["minAmountsOut"][1]) < int(data["amountsOut"][1])
        assert Decimal(data["priceImpact"]) > 0

    def test_unknown_pool_type(self, client: TestClient) -> None:
        response = client.post(
            "/pools/join",
            json={
                "pool": weighted_pool_json(poolType="Mystery"),
                "bptAmount": str(ONE),
                "sender": SENDER,
            },
        )
        assert response.status_code == 400
        assert response.json()["error"] == "UNSUPPORTED_POOL_TYPE"

    def test_paused_pool(self, client: TestClient) -> None:
        response = client.post(
            "/pools/join",
            json={
                "pool": weighted_pool_json(paused=True),
                "bptAmount": str(ONE),
                "sender": SENDER,
            },
        )
        assert response.status_code == 400
        assert response.json()["error"] == "POOL_PAUSED"

    def test_wrong_amount_count(self, client: TestClient) -> None:
        response = client.post(
            "/pools/join",
            json={"pool": weighted_pool_json(), "amounts": [str(ONE)], "sender": SENDER},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_REQUEST"

    def test_missing_sender(self, client: TestClient) -> None:
        response = client.post("/pools/join", json={"pool": weighted_pool_json()})
        assert response.status_code == 422

    def test_negative_amount_rejected(self, client: TestClient) -> None:
        response = client.post(
            "/pools/join",
            json={"pool": weighted_pool_json(), "amounts": ["-1", "1"], "sender": SENDER},
        )
        assert response.status_code == 422


class TestPrices:
    def test_spot_price(self, client: TestClient) -> None:
        response = client.post(
            "/pools/spot-price",
            json={"pool": weighted_pool_json(), "tokenIn": WETH, "tokenOut": DAI},
        )
        assert response.status_code == 200
        assert Decimal(response.json()["spotPrice"]) == 1

    def test_fx_spot_price(self, client: TestClient) -> None:
        pool = {
            "id": FX_POOL_ID,
            "address": FX_POOL,
            "poolType": "FX",
            "tokens": [
                {
                    "address": USDC,
                    "balance": str(1_000_000 * 10**6),
                    "decimals": 6,
                    "tokenRate": "1",
                },
                {
                    "address": EURS,
                    "balance": str(925_000 * 10**2),
                    "decimals": 2,
                    "tokenRate": "1.08",
                },
            ],
            "swapFee": "0",
            "totalShares": str(2_000_000 * ONE),
        }
        response = client.post(
            "/pools/spot-price", json={"pool": pool, "tokenIn": USDC, "tokenOut": EURS}
        )
        assert response.status_code == 200
        assert Decimal(response.json()["spotPrice"]) == Decimal("1.08")

    def test_token_not_in_pool(self, client: TestClient) -> None:
        response = client.post(
            "/pools/spot-price",
            json={"pool": weighted_pool_json(), "tokenIn": WETH, "tokenOut": USDC},
        )
        assert response.status_code == 400

    def test_price_impact(self, client: TestClient) -> None:
        response = client.post(
            "/pools/price-impact",
            json={
                "pool": weighted_pool_json(),
                "amounts": [str(100 * ONE), "0"],
                "bptAmount": str(95 * ONE),
            },
        )
        assert response.status_code == 200
        assert Decimal(response.json()["priceImpact"]) == Decimal("0.05")


class TestSwaps:
    def test_build_single_swap(self, client: TestClient) -> None:
        response = client.post(
            "/swaps/build",
            json={
                "route": route_json(),
                "sender": SENDER,
                "deadline": "1700000000",
                "slippageBps": 100,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["functionName"] == "swap"
        assert data["to"] == BALANCER_VAULT
        assert data["limits"] == ["1000", "-495"]
        assert data["data"].startswith("0x52bbbe29")

    def test_network_query_parameter(self, client: TestClient) -> None:
        response = client.post(
            "/swaps/build?network=fantom",
            json={"route": route_json(), "sender": SENDER, "deadline": "1"},
        )
        assert response.status_code == 200
        assert response.json()["to"] == get_network_config(Network.FANTOM).vault

    def test_unknown_network(self, client: TestClient) -> None:
        response = client.post(
            "/swaps/build?network=nowhere",
            json={"route": route_json(), "sender": SENDER, "deadline": "1"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_REQUEST"

    def test_injected_network(self, client: TestClient) -> None:
        custom = NetworkConfig(chain_id=31337, vault=CUSTOM_VAULT, wrapped_native_asset=WETH)
        app.dependency_overrides[get_network] = lambda: custom
        response = client.post(
            "/swaps/build", json={"route": route_json(), "sender": SENDER, "deadline": "1"}
        )
        assert response.status_code == 200
        assert response.json()["to"] == CUSTOM_VAULT

    def test_asset_index_out_of_range(self, client: TestClient) -> None:
        route = route_json()
        route["swaps"][0]["assetOutIndex"] = 5
        response = client.post(
            "/swaps/build", json={"route": route, "sender": SENDER, "deadline": "1"}
        )
        assert response.status_code == 400

    def test_join_exit_route_rejected(self, client: TestClient) -> None:
        route = route_json()
        route["tokenOut"] = WEIGHTED_POOL
        route["tokenAddresses"] = [WETH, WEIGHTED_POOL]
        response = client.post(
            "/swaps/build", json={"route": route, "sender": SENDER, "deadline": "1"}
        )
        assert response.status_code == 400
        assert response.json()["error"] == "JOIN_EXIT_PATH_UNSUPPORTED"


class TestLimits:
    def test_all_deltas_scaled(self, client: TestClient) -> None:
        response = client.post(
            "/swaps/limits", json={"deltas": ["1000", "-500", "0"], "slippageBps": 100}
        )
        assert response.status_code == 200
        assert response.json() == {"limits": ["1010", "-495", "0"]}

    def test_fixed_side(self, client: TestClient) -> None:
        response = client.post(
            "/swaps/limits",
            json={
                "deltas": ["1000", "-500"],
                "slippageBps": 100,
                "assets": [WETH, DAI],
                "kind": 1,
                "tokensIn": [WETH],
                "tokensOut": [DAI],
            },
        )
        assert response.status_code == 200
        assert response.json() == {"limits": ["1010", "-500"]}

    def test_invalid_tolerance(self, client: TestClient) -> None:
        response = client.post("/swaps/limits", json={"deltas": ["1"], "slippageBps": 20_000})
        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_TOLERANCE"


class TestRequestSize:
    def test_oversized_request_returns_413(self, client: TestClient) -> None:
        response = client.post(
            "/swaps/limits",
            json={"deltas": [], "slippageBps": 0},
            headers={"Content-Length": str(20 * 1024 * 1024)},
        )
        assert response.status_code == 413
        assert response.json()["detail"] == "Request too large"
