from __future__ import annotations

import pathlib
import tomllib

from typing import NamedTuple

from .types import Style


CONFIG_DIRECTORY = pathlib.Path("~/.bwords").expanduser()
CONFIG_PATH = CONFIG_DIRECTORY / "config.toml"

DEFAULT_STYLE: Style = "standard"
DEFAULT_STRICT = False


class Config(NamedTuple):
    style: Style
    strict: bool


def load(path: pathlib.Path = CONFIG_PATH) -> Config:
    """Load the configuration from the given configuration file."""
    with open(path, "rb") as f:
        style = DEFAULT_STYLE
        strict = DEFAULT_STRICT

        for key, value in tomllib.load(f).items():
            if key != "default":
                raise ValueError(f"Invalid configuration key {key!r}.")
            if not isinstance(value, dict):
                raise ValueError(f"Error in configuration file near [{key}].")

            for subkey, value in value.items():
                if subkey == "style":
                    if value not in Style.__args__:
                        raise ValueError(f"Invalid style {value!r}.")
                    style = value
                elif subkey == "strict":
                    if not isinstance(value, bool):
                        raise ValueError(f"Invalid value {value!r} for 'strict', expected true or false.")
                    strict = value
                else:
                    raise ValueError(f"Invalid configuration key {subkey!r}.")

        return Config(style, strict)


DEFAULT_CONFIG = Config(DEFAULT_STYLE, DEFAULT_STRICT)
