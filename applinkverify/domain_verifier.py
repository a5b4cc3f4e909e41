"""Decides whether a host's asset document vouches for an application."""

from __future__ import annotations

from http import HTTPStatus

from .json_util import AssetJsonError, parse_asset_json
from .models import AppVerifyBaseInfo, AssetJsonObj, InnerVerifyStatus


def verify_host(
    response_code: int, asset_json: str, base_info: AppVerifyBaseInfo
) -> InnerVerifyStatus:
    """Verify an app against the asset document a host returned."""
    if response_code != HTTPStatus.OK:
        return status_from_http_error(response_code)
    try:
        asset = parse_asset_json(asset_json)
    except AssetJsonError:
        return InnerVerifyStatus.STATE_FAIL
    status = verify_with_app_identifier(asset, base_info)
    if status is InnerVerifyStatus.UNKNOWN:
        return verify_with_bundle_name(asset, base_info)
    return status


def status_from_http_error(response_code: int) -> InnerVerifyStatus:
    """Map a non-OK HTTP response code to a verification status."""
    if HTTPStatus.MULTIPLE_CHOICES <= response_code < HTTPStatus.BAD_REQUEST:
        return InnerVerifyStatus.FAILURE_REDIRECT
    if HTTPStatus.BAD_REQUEST <= response_code < HTTPStatus.INTERNAL_SERVER_ERROR:
        return InnerVerifyStatus.FAILURE_CLIENT_ERROR
    if response_code >= HTTPStatus.INTERNAL_SERVER_ERROR:
        return InnerVerifyStatus.FAILURE_REJECTED_BY_SERVER
    return InnerVerifyStatus.FAILURE_HTTP_UNKNOWN


def _conflicts(mine: str, theirs: str) -> bool:
    return bool(mine) and bool(theirs) and mine != theirs


def verify_with_app_identifier(
    asset: AssetJsonObj, base_info: AppVerifyBaseInfo
) -> InnerVerifyStatus:
    """Match by app identifier; ``UNKNOWN`` means no decision could be made."""
    if not base_info.app_identifier:
        return InnerVerifyStatus.UNKNOWN
    for app in asset.applinking.apps:
        if not app.app_identifier:
            continue
        if app.app_identifier == base_info.app_identifier:
            if _conflicts(base_info.bundle_name, app.bundle_name):
                return InnerVerifyStatus.STATE_FAIL
            if _conflicts(base_info.fingerprint, app.fingerprint):
                return InnerVerifyStatus.STATE_FAIL
            return InnerVerifyStatus.STATE_SUCCESS
        # A different identifier may not claim the same bundle name.
        if base_info.bundle_name and base_info.bundle_name == app.bundle_name:
            return InnerVerifyStatus.STATE_FAIL
    return InnerVerifyStatus.UNKNOWN


def verify_with_bundle_name(
    asset: AssetJsonObj, base_info: AppVerifyBaseInfo
) -> InnerVerifyStatus:
    """Match by bundle name and fingerprint."""
    if not base_info.bundle_name or not base_info.fingerprint:
        return InnerVerifyStatus.STATE_FAIL
    for app in asset.applinking.apps:
        if app.bundle_name == base_info.bundle_name:
            if app.fingerprint == base_info.fingerprint:
                return InnerVerifyStatus.STATE_SUCCESS
            return InnerVerifyStatus.STATE_FAIL
    return InnerVerifyStatus.STATE_FAIL