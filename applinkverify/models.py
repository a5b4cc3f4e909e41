"""Data types shared by the verifier: statuses, app identities and asset documents."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

APP_LINKING = "applinking"
APPS = "apps"
BUNDLE_NAME = "bundleName"
APP_IDENTIFIER = "appIdentifier"
FINGERPRINT = "fingerprint"
ASSET_PATH = "/.well-known/"
ASSET_NAME = "applinking.json"


class InnerVerifyStatus(enum.IntEnum):
    """Outcome of verifying one host."""

    UNKNOWN = 0
    STATE_SUCCESS = 1
    STATE_FAIL = 2
    FAILURE_REDIRECT = 3
    FAILURE_CLIENT_ERROR = 4
    FAILURE_REJECTED_BY_SERVER = 5
    FAILURE_HTTP_UNKNOWN = 6
    FORBIDDEN_FOREVER = 7


class TaskType(enum.IntEnum):
    """Why a verification task was started."""

    IMMEDIATE_TASK = 0
    BACKGROUND_TASK = 1


@dataclass
class AppVerifyBaseInfo:
    """Identity of an application, either local or declared by a host."""

    app_identifier: str = ""
    bundle_name: str = ""
    fingerprint: str = ""


@dataclass
class ApplinkingObj:
    """The ``applinking`` section of an asset document."""

    apps: list[AppVerifyBaseInfo] = field(default_factory=list)


@dataclass
class AssetJsonObj:
    """A parsed ``applinking.json`` document."""

    applinking: ApplinkingObj = field(default_factory=ApplinkingObj)


@dataclass
class VerifyResultInfo:
    """Verification results of an app, keyed by host.

    Each value is a tuple of (status, verify time in epoch seconds as text, retry count).
    """

    app_identifier: str = ""
    host_verify_status_map: dict[str, tuple[InnerVerifyStatus, str, int]] = field(
        default_factory=dict
    )


def asset_url(uri: str) -> str:
    """Return the URL of the asset document published under ``uri``."""
    return uri + ASSET_PATH + ASSET_NAME