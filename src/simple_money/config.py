"""Environment driven defaults.

Settings are read from a `.env` file and the process environment, e.g.:

    SIMPLE_MONEY_DEFAULT_MODE=decimal
    SIMPLE_MONEY_DEFAULT_ROUNDING_METHOD=bankers
    SIMPLE_MONEY_DEFAULT_CURRENCY=EUR

Apply them with `set_default_context(MoneyContext.from_settings(load_settings()))`.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

from dotenv import dotenv_values, find_dotenv

logger = logging.getLogger(__name__)

ENV_DEFAULT_MODE = "SIMPLE_MONEY_DEFAULT_MODE"
ENV_DEFAULT_ROUNDING_METHOD = "SIMPLE_MONEY_DEFAULT_ROUNDING_METHOD"
ENV_DEFAULT_CURRENCY = "SIMPLE_MONEY_DEFAULT_CURRENCY"
ENV_PREFIX = "SIMPLE_MONEY_"


@dataclass(frozen=True)
class MoneySettings:
    """Raw default values; validated when turned into a `MoneyContext`."""

    default_mode: str = "cents"
    default_rounding_method: str = "bankers"
    default_currency: str = "USD"


def load_settings(dotenv_path: str | os.PathLike | None = None, environ: Mapping[str, str] | None = None) -> MoneySettings:
    """Load settings from a `.env` file overlaid by the environment.

    Args:
        dotenv_path: Path of the `.env` file. When None, a `.env` is searched for
            starting in the current working directory.
        environ: Environment mapping; `os.environ` when None. Its values win over
            the file's.

    Returns:
        MoneySettings: Loaded settings, with defaults for missing keys.
    """
    if dotenv_path is None:
        dotenv_path = find_dotenv(usecwd=True)
    environ = os.environ if environ is None else environ

    values = {key: value for key, value in dotenv_values(dotenv_path).items() if value is not None}
    values.update({key: value for key, value in environ.items() if key.startswith(ENV_PREFIX)})

    defaults = MoneySettings()
    settings = MoneySettings(
        default_mode=values.get(ENV_DEFAULT_MODE, defaults.default_mode).strip(),
        default_rounding_method=values.get(ENV_DEFAULT_ROUNDING_METHOD, defaults.default_rounding_method).strip(),
        default_currency=values.get(ENV_DEFAULT_CURRENCY, defaults.default_currency).strip(),
    )
    logger.debug(f"Loaded {settings} from $dotenv_path '{dotenv_path}'")
    return settings
