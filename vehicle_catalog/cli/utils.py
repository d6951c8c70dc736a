"""Utility helpers shared across CLI commands."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import asdict, is_dataclass
from typing import Any

import typer

from vehicle_catalog.core.config import CatalogSettings


def get_settings(ctx: typer.Context) -> CatalogSettings:
    """Return the settings resolved by the application callback."""

    ctx.ensure_object(dict)
    settings = (ctx.obj or {}).get("settings")
    if settings is None:
        settings = CatalogSettings()
        ctx.obj["settings"] = settings
    return settings


def emit_json(payload: Any) -> None:
    """Print one JSON document per line on stdout."""

    if is_dataclass(payload) and not isinstance(payload, type):
        payload = asdict(payload)
    typer.echo(json.dumps(payload, ensure_ascii=False, default=str))


def emit_error(message: str, code: str, *, details: Mapping[str, object] | None = None) -> None:
    """Print a structured error payload to stderr."""

    payload: dict[str, object] = {"code": code, "message": message}
    if details:
        payload["details"] = _sanitize_details(details)
    typer.echo(json.dumps(payload, ensure_ascii=False, default=str), err=True)


def _sanitize_details(details: Mapping[str, object]) -> Mapping[str, object]:
    sanitized: dict[str, object] = {}
    for key, value in details.items():
        if isinstance(value, (str, int, float, bool)) or value is None:
            sanitized[key] = value
        elif isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
            sanitized[key] = [str(item) for item in value]
        else:
            sanitized[key] = str(value)
    return sanitized


__all__ = ["emit_error", "emit_json", "get_settings"]
