import json
import logging

from dex_trader.logging_utils import JsonFormatter


def test_json_formatter_includes_trade_fields() -> None:
    record = logging.LogRecord(
        name="dex_trader.pipeline",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="trade_succeeded",
        args=(),
        exc_info=None,
    )
    record.tx_hash = "0xabc"
    record.stage = "succeeded"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["msg"] == "trade_succeeded"
    assert payload["logger"] == "dex_trader.pipeline"
    assert payload["tx_hash"] == "0xabc"
    assert payload["stage"] == "succeeded"
    assert "code" not in payload
