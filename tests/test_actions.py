import asyncio

from fakes import JTK, MTK, TX_HASH, FakeEngine, FakeWallet

from dex_trader.actions import ACTIONS, TradeActionArgs, invoke_action


def test_registry_exposes_trade_action_metadata() -> None:
    spec = ACTIONS["testnet_trade"]

    schema = spec.input_schema()

    assert spec.description == "Trade tokens on Base Sepolia testnet using Uniswap V3"
    assert set(schema["required"]) == {"amount", "fromAssetId", "toAssetId"}
    assert "fromAssetTicker" in schema["properties"]


def test_args_accept_camel_case_and_snake_case() -> None:
    camel = TradeActionArgs.model_validate(
        {"amount": "1", "fromAssetId": JTK, "toAssetId": MTK, "toAssetTicker": "MTK"}
    )
    snake = TradeActionArgs.model_validate({"amount": "1", "from_asset_id": JTK, "to_asset_id": MTK})

    assert camel.to_request().to_token.ticker == "MTK"
    assert snake.to_request().from_token.address == JTK
    assert snake.to_request().from_token.ticker is None


def test_invoke_action_runs_trade() -> None:
    wallet = FakeWallet(decimals={JTK: 18, MTK: 18})

    message = asyncio.run(
        invoke_action(
            "testnet_trade",
            wallet,
            {
                "amount": "10",
                "fromAssetId": JTK,
                "toAssetId": MTK,
                "fromAssetTicker": "JTK",
                "toAssetTicker": "MTK",
            },
            engine_factory=lambda network: FakeEngine(),
        )
    )

    assert message.endswith(f"Transaction hash: {TX_HASH}")


def test_invoke_action_reports_bad_arguments_as_text() -> None:
    message = asyncio.run(invoke_action("testnet_trade", FakeWallet(), {"amount": "1"}))

    assert message.startswith("Invalid arguments for testnet_trade:")
    assert "fromAssetId" in message


def test_invoke_unknown_action() -> None:
    assert asyncio.run(invoke_action("bridge", FakeWallet(), {})) == "Unknown action: bridge"
