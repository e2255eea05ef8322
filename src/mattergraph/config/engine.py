"""Resolution engine configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

from .env import env_int, env_list, env_str

DEFAULT_COMPANY_TOKENS: Final[tuple[str, ...]] = (
    "pty",
    "ltd",
    "limited",
    "inc",
    "corporation",
    "corp",
)
DEFAULT_COLLATERAL_LABELS: Final[dict[str, str]] = {
    "Motor Vehicle": "MOTOR VEHICLE",
    "Other Goods": "OTHER GOODS",
    "All Pap No Except": "BLANKET SECURITY",
    "Account": "ACCOUNT SECURITY",
}
DEFAULT_ADDRESS_ID_LENGTH: Final[int] = 50


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Tunables for one resolution run."""

    company_tokens: tuple[str, ...] = DEFAULT_COMPANY_TOKENS
    collateral_labels: dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_COLLATERAL_LABELS)
    )
    address_id_length: int = DEFAULT_ADDRESS_ID_LENGTH


def get_engine_config() -> EngineConfig:
    return EngineConfig(
        company_tokens=env_list("MATTERGRAPH_COMPANY_TOKENS", DEFAULT_COMPANY_TOKENS),
        address_id_length=env_int(
            "MATTERGRAPH_ADDRESS_ID_LENGTH", DEFAULT_ADDRESS_ID_LENGTH, minimum=8
        ),
    )


def get_log_level() -> str:
    return env_str("MATTERGRAPH_LOG_LEVEL", "INFO").upper()
