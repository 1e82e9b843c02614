from __future__ import annotations

import pathlib
from typing import Dict, Iterable, List, Mapping, Optional

import yaml

from ifscaster.errors import ConfigError

COMMANDS = (
    "delete_active",
    "scale_up",
    "scale_down",
    "rotate_up",
    "rotate_down",
    "depth_up",
    "depth_down",
    "reset",
    "toggle_help",
    "quit",
)


def _bindings_path() -> pathlib.Path:
    return pathlib.Path(__file__).resolve().parent / "keybindings.yaml"


def load_default_bindings(path: Optional[pathlib.Path] = None) -> Dict[str, List[str]]:
    """Read command -> key names from the shipped keybindings.yaml."""
    path = path or _bindings_path()
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping of command -> keys")
    out: Dict[str, List[str]] = {}
    for cmd, keys in data.items():
        if isinstance(keys, str):
            keys = [keys]
        out[str(cmd)] = [str(k).lower() for k in (keys or [])]
    return out


def build_keymap(
    bindings: Mapping[str, Iterable[str]],
    overrides: Optional[Mapping[str, Iterable[str]]] = None,
) -> Dict[str, str]:
    """
    Invert command bindings into key name -> command.

    Overrides replace a command's keys wholesale and take their keys away
    from any other command. Unknown commands and keys claimed by two
    commands are rejected.
    """
    merged: Dict[str, List[str]] = {cmd: [k.lower() for k in keys] for cmd, keys in bindings.items()}
    for cmd, keys in (overrides or {}).items():
        claimed = [k.lower() for k in keys]
        for other, other_keys in merged.items():
            if other != cmd:
                merged[other] = [k for k in other_keys if k not in claimed]
        merged[cmd] = claimed

    keymap: Dict[str, str] = {}
    for cmd, keys in merged.items():
        if cmd not in COMMANDS:
            raise ConfigError(f"unknown command in key bindings: {cmd!r}")
        for key in keys:
            if key in keymap and keymap[key] != cmd:
                raise ConfigError(f"key {key!r} bound to both {keymap[key]!r} and {cmd!r}")
            keymap[key] = cmd
    return keymap


def default_keymap() -> Dict[str, str]:
    return build_keymap(load_default_bindings())
