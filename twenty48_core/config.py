from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

TOKEN_POLICY_PAD = 'pad'
TOKEN_POLICY_STRICT = 'strict'
TOKEN_POLICIES = (TOKEN_POLICY_PAD, TOKEN_POLICY_STRICT)

DEFAULT_SIZE = 4
MAX_SIDE = 255


@dataclass(frozen=True)
class Settings:
    """Runtime knobs shared by the web app and the CLI."""
    width: int
    height: int
    token_policy: str
    seed: Optional[int]
    debug: bool


def parse_flag(value: object, default: bool = False) -> bool:
    """Booleans pass through; strings count as true when 1/true/yes/on."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in ('1', 'true', 'yes', 'on')
    if isinstance(value, int):
        return value != 0
    return default


def env_flag(name: str, default: bool = False) -> bool:
    return parse_flag(os.getenv(name), default)


def env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def clamp_side(value: int) -> int:
    return max(1, min(MAX_SIDE, int(value)))


def debug_enabled() -> bool:
    return env_flag('TWENTY48_DEBUG')


def default_token_policy() -> str:
    policy = (os.getenv('TWENTY48_TOKEN_POLICY') or TOKEN_POLICY_PAD).strip().lower()
    return policy if policy in TOKEN_POLICIES else TOKEN_POLICY_PAD


def load_settings() -> Settings:
    """Read settings from the environment. Bad values fall back to defaults."""
    return Settings(
        width=clamp_side(env_int('TWENTY48_WIDTH', DEFAULT_SIZE) or DEFAULT_SIZE),
        height=clamp_side(env_int('TWENTY48_HEIGHT', DEFAULT_SIZE) or DEFAULT_SIZE),
        token_policy=default_token_policy(),
        seed=env_int('TWENTY48_SEED', None),
        debug=debug_enabled(),
    )
