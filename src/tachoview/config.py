"""Runtime configuration sourced from environment variables."""

from __future__ import annotations

import importlib
import os
import pathlib
from dataclasses import dataclass
from typing import Any, Callable, Mapping

_PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[2]
_DEFAULT_ERCA_DIR = _PROJECT_ROOT / "data" / "erca"

INLINE_INDENT = 2
EXPORT_INDENT = 4


def _int_setting(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}.") from exc
    if value < 0:
        raise ValueError(f"{name} must not be negative.")
    return value


@dataclass(slots=True, frozen=True)
class Settings:
    """Viewer settings; see :meth:`from_env` for the variable names."""

    erca_gen1_key: pathlib.Path
    erca_gen2_key: pathlib.Path
    parser: str | None = None
    verifier: str | None = None
    display_indent: int = INLINE_INDENT
    export_indent: int = EXPORT_INDENT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            erca_gen1_key=pathlib.Path(
                env.get("TACHOVIEW_ERCA_GEN1_KEY", _DEFAULT_ERCA_DIR / "EC_PK.bin")
            ),
            erca_gen2_key=pathlib.Path(
                env.get("TACHOVIEW_ERCA_GEN2_KEY", _DEFAULT_ERCA_DIR / "ERCA_Gen2_Root.bin")
            ),
            parser=env.get("TACHOVIEW_PARSER") or None,
            verifier=env.get("TACHOVIEW_VERIFIER") or None,
            display_indent=_int_setting(env, "TACHOVIEW_DISPLAY_INDENT", INLINE_INDENT),
            export_indent=_int_setting(env, "TACHOVIEW_EXPORT_INDENT", EXPORT_INDENT),
            log_level=(env.get("TACHOVIEW_LOG_LEVEL") or "INFO").upper(),
        )


def load_callable(path: str) -> Callable[..., Any]:
    """Resolve a ``package.module:function`` reference to a callable."""

    module_name, sep, attribute = path.partition(":")
    if not sep or not module_name or not attribute:
        raise ValueError(f"Expected 'module:function', got {path!r}.")

    module = importlib.import_module(module_name)
    target: Any = module
    for part in attribute.split("."):
        target = getattr(target, part)
    if not callable(target):
        raise ValueError(f"{path!r} does not reference a callable.")
    return target


__all__ = ["EXPORT_INDENT", "INLINE_INDENT", "Settings", "load_callable"]
