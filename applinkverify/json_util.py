"""Parsing of ``applinking.json`` asset documents."""

from __future__ import annotations

import json
from typing import Any

from .models import (
    APP_IDENTIFIER,
    APP_LINKING,
    APPS,
    BUNDLE_NAME,
    FINGERPRINT,
    AppVerifyBaseInfo,
    AssetJsonObj,
)


class AssetJsonError(ValueError):
    """Raised when an asset document is not valid."""


def _reject_constant(name: str) -> Any:
    raise AssetJsonError(f"invalid JSON constant {name}")


def _string_field(item: Any, key: str) -> str:
    if isinstance(item, dict):
        value = item.get(key)
        if isinstance(value, str):
            return value
    return ""


def parse_asset_json(text: str) -> AssetJsonObj:
    """Parse an asset document into an :class:`AssetJsonObj`.

    Raises :class:`AssetJsonError` if the text is empty, is not JSON, is not an
    object, lacks an ``applinking`` object, or lacks an ``apps`` array.
    Fields of an app entry that are missing or not strings become empty strings.
    """
    if not text:
        raise AssetJsonError("asset document is empty")
    try:
        document = json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        raise AssetJsonError("asset document can not be parsed") from exc
    if not isinstance(document, dict):
        raise AssetJsonError("asset document is not an object")
    applinking = document.get(APP_LINKING)
    if not isinstance(applinking, dict):
        raise AssetJsonError(f"'{APP_LINKING}' is missing or not an object")
    apps = applinking.get(APPS)
    if not isinstance(apps, list):
        raise AssetJsonError(f"'{APPS}' is missing or not an array")

    result = AssetJsonObj()
    result.applinking.apps.extend(
        AppVerifyBaseInfo(
            app_identifier=_string_field(item, APP_IDENTIFIER),
            bundle_name=_string_field(item, BUNDLE_NAME),
            fingerprint=_string_field(item, FINGERPRINT),
        )
        for item in apps
    )
    return result