from __future__ import annotations

import pytest

ENGINE_ENV_VARS = (
    "MATTERGRAPH_COMPANY_TOKENS",
    "MATTERGRAPH_ADDRESS_ID_LENGTH",
    "MATTERGRAPH_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_engine_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENGINE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
