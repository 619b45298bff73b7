# Copyright 2016-2026, Pulumi Corporation.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""
Shared access signatures for Azure Blob storage, computed locally from the storage account key.
"""
import base64
import hashlib
import hmac
from datetime import date, datetime, timezone
from typing import Optional, Union
from urllib.parse import quote

from ..output import Input, Output

SAS_VERSION = "2019-12-12"

Instant = Union[date, datetime]


def _as_datetime(value: Instant) -> datetime:
    if isinstance(value, datetime):
        return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)
    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)


def _format_instant(value: Instant) -> str:
    if isinstance(value, datetime):
        return _as_datetime(value).astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    return value.isoformat()


class SasWindow:
    """
    The validity window of a signature, the half-open interval [start, expiry).
    """

    start: Instant
    expiry: Instant

    def __init__(self, start: Instant, expiry: Instant) -> None:
        if _as_datetime(start) >= _as_datetime(expiry):
            raise ValueError(f"SAS window start {start} must be before its expiry {expiry}")
        self.start = start
        self.expiry = expiry

    def contains(self, instant: Instant) -> bool:
        moment = _as_datetime(instant)
        return _as_datetime(self.start) <= moment < _as_datetime(self.expiry)

    def __repr__(self) -> str:
        return f"SasWindow({_format_instant(self.start)}, {_format_instant(self.expiry)})"


class ContentHeaders:
    """Response headers the signature overrides when the blob is read."""

    def __init__(
        self,
        content_type: Optional[str] = None,
        cache_control: Optional[str] = None,
        content_disposition: Optional[str] = None,
        content_encoding: Optional[str] = None,
        content_language: Optional[str] = None,
    ) -> None:
        self.content_type = content_type
        self.cache_control = cache_control
        self.content_disposition = content_disposition
        self.content_encoding = content_encoding
        self.content_language = content_language


def service_sas_token(
    account_name: str,
    account_key: str,
    canonicalized_resource: str,
    permissions: str,
    window: SasWindow,
    resource: str = "c",
    protocol: str = "https",
    headers: Optional[ContentHeaders] = None,
    version: str = SAS_VERSION,
    identifier: str = "",
    ip: str = "",
) -> str:
    """
    Computes a service SAS token (the query string of a signed URL, without the leading '?').

    :param account_name: The storage account; it is part of `canonicalized_resource` already and only
           checked for consistency.
    :param account_key: The base64-encoded storage account key.
    :param canonicalized_resource: e.g. `/blob/{account}/{container}`.
    """
    if f"/{account_name}/" not in canonicalized_resource + "/":
        raise ValueError(f"resource {canonicalized_resource} is not in account {account_name}")
    headers = headers or ContentHeaders()
    start = _format_instant(window.start)
    expiry = _format_instant(window.expiry)

    string_to_sign = "\n".join(
        [
            permissions,
            start,
            expiry,
            canonicalized_resource,
            identifier,
            ip,
            protocol,
            version,
            resource,
            "",  # snapshot time
            headers.cache_control or "",
            headers.content_disposition or "",
            headers.content_encoding or "",
            headers.content_language or "",
            headers.content_type or "",
        ]
    )
    key = base64.b64decode(account_key)
    digest = hmac.new(key, string_to_sign.encode("utf-8"), hashlib.sha256).digest()
    signature = base64.b64encode(digest).decode("utf-8")

    query = [
        ("sv", version),
        ("st", start),
        ("se", expiry),
        ("sr", resource),
        ("sp", permissions),
        ("si", identifier),
        ("sip", ip),
        ("spr", protocol),
        ("rscc", headers.cache_control),
        ("rscd", headers.content_disposition),
        ("rsce", headers.content_encoding),
        ("rscl", headers.content_language),
        ("rsct", headers.content_type),
        ("sig", signature),
    ]
    return "&".join(f"{k}={quote(v, safe='')}" for k, v in query if v)


def blob_read_url(
    account_name: str,
    container_name: str,
    blob_name: str,
    account_key: str,
    window: SasWindow,
    headers: Optional[ContentHeaders] = None,
) -> str:
    """
    Returns `https://{account}.blob.core.windows.net/{container}/{blob}?{token}` where the token grants read
    access to the container during `window`.
    """
    token = service_sas_token(
        account_name,
        account_key,
        f"/blob/{account_name}/{container_name}",
        "r",
        window,
        resource="c",
        headers=headers,
    )
    return f"https://{account_name}.blob.core.windows.net/{container_name}/{blob_name}?{token}"


def signed_blob_read_url(
    account_name: Input[str],
    container_name: Input[str],
    blob_name: Input[str],
    account_key: Input[str],
    window: SasWindow,
    headers: Optional[ContentHeaders] = None,
) -> Output[str]:
    """
    The Output form of `blob_read_url`. The result is secret, since it embeds a signature made with the
    account key.
    """
    return Output.all(
        account_name, container_name, blob_name, Output.secret(account_key)
    ).apply(lambda args: blob_read_url(args[0], args[1], args[2], args[3], window, headers))
