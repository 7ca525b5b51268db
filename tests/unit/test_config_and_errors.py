# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import logging
import socket
import ssl

import httpx
import pytest

from conftest import CountingStream
from nylas_client import config
from nylas_client.config import DEFAULT_USER_AGENT, HTTP_1_1, HTTP_2
from nylas_client.errors import (
    DecodingError,
    EncodingError,
    ErrorCategory,
    NylasClientError,
    RequestFailedError,
    TransportError,
    categorize_exception,
    classify,
    error_category_to_reason,
)
from nylas_client.log import resolve_log_level


def test_client_settings_defaults():
    settings = config.ClientSettings()
    assert settings.base_url == "https://api.nylas.com"
    assert settings.connect_timeout == settings.read_timeout == settings.write_timeout == 60.0
    assert settings.protocol_version == HTTP_1_1
    assert settings.user_agent == DEFAULT_USER_AGENT


def test_client_settings_env_overrides(monkeypatch):
    monkeypatch.setenv("NYLAS_BASE_URL", "https://eu.api.example.test")
    monkeypatch.setenv("NYLAS_HTTP_CONNECT_TIMEOUT", "5.5")
    monkeypatch.setenv("NYLAS_HTTP_READ_TIMEOUT", "30")
    monkeypatch.setenv("NYLAS_HTTP_WRITE_TIMEOUT", "12")
    monkeypatch.setenv("NYLAS_HTTP_PROTOCOL", "h2")
    monkeypatch.setenv("NYLAS_USER_AGENT", "CustomAgent/1.0")
    monkeypatch.setenv("NYLAS_HTTP_LOG_HEADERS", "yes")
    monkeypatch.setenv("NYLAS_HTTP_VERIFY_SSL", "0")

    settings = config.load_client_settings()

    assert settings.base_url == "https://eu.api.example.test"
    assert settings.connect_timeout == 5.5
    assert settings.read_timeout == 30.0
    assert settings.write_timeout == 12.0
    assert settings.protocol_version == HTTP_2
    assert settings.user_agent == "CustomAgent/1.0"
    assert settings.log_headers is True
    assert settings.verify_ssl is False


def test_client_settings_invalid_env_fall_back(monkeypatch):
    monkeypatch.setenv("NYLAS_HTTP_CONNECT_TIMEOUT", "not-a-number")
    monkeypatch.setenv("NYLAS_HTTP_READ_TIMEOUT", "")
    monkeypatch.setenv("NYLAS_HTTP_PROTOCOL", "spdy")

    settings = config.load_client_settings()

    assert settings.connect_timeout == config.ClientSettings.connect_timeout
    assert settings.read_timeout == config.ClientSettings.read_timeout
    assert settings.protocol_version == HTTP_1_1


def test_load_client_settings_reads_env_at_call_time(monkeypatch):
    monkeypatch.setenv("NYLAS_HTTP_READ_TIMEOUT", "7.7")
    assert config.load_client_settings().read_timeout == 7.7
    monkeypatch.setenv("NYLAS_HTTP_READ_TIMEOUT", "8.8")
    assert config.load_client_settings().read_timeout == 8.8


def test_error_hierarchy():
    for error_type in (TransportError, RequestFailedError, EncodingError, DecodingError):
        assert issubclass(error_type, NylasClientError)
    assert issubclass(EncodingError, ValueError)
    assert issubclass(DecodingError, ValueError)


def test_request_failed_error_fields():
    err = RequestFailedError(502, "bad gateway")
    assert err.status_code == 502
    assert err.body_text == "bad gateway"
    assert err.is_server_error and not err.is_client_error
    assert "502" in str(err)
    assert repr(err) == "RequestFailedError(status_code=502, body_text='bad gateway')"


@pytest.mark.parametrize(
    ("exc", "category"),
    [
        (httpx.ConnectTimeout("slow"), ErrorCategory.TIMEOUT),
        (httpx.ReadTimeout("slow"), ErrorCategory.TIMEOUT),
        (httpx.ConnectError("refused"), ErrorCategory.CONNECTION_ERROR),
        (httpx.ReadError("reset"), ErrorCategory.CONNECTION_ERROR),
        (httpx.RemoteProtocolError("garbage"), ErrorCategory.PROTOCOL_ERROR),
        (httpx.TooManyRedirects("loop"), ErrorCategory.PROTOCOL_ERROR),
        (httpx.DecodingError("bad gzip"), ErrorCategory.PROTOCOL_ERROR),
        (ssl.SSLError("bad cert"), ErrorCategory.SSL_ERROR),
        (socket.gaierror("no such host"), ErrorCategory.DNS_ERROR),
        (ConnectionResetError("reset"), ErrorCategory.CONNECTION_ERROR),
        (RuntimeError("other"), ErrorCategory.UNKNOWN_ERROR),
    ],
)
def test_categorize_exception(exc, category):
    assert categorize_exception(exc) is category


def test_categorize_exception_follows_cause():
    try:
        try:
            raise ssl.SSLCertVerificationError("certificate verify failed")
        except ssl.SSLError as inner:
            raise httpx.ConnectError("tls handshake failed") from inner
    except httpx.ConnectError as exc:
        assert categorize_exception(exc) is ErrorCategory.SSL_ERROR


def test_transport_error_from_exception():
    err = TransportError.from_exception(httpx.ReadTimeout("read timed out"))
    assert err.category is ErrorCategory.TIMEOUT
    assert str(err) == f"{error_category_to_reason(ErrorCategory.TIMEOUT)}: read timed out"


def test_classify_reads_body_and_closes():
    stream = CountingStream([b"rate ", b"limited"])
    response = httpx.Response(429, stream=stream, request=httpx.Request("GET", "https://api.example.test/x"))

    failure = classify(response)

    assert failure.status_code == 429
    assert failure.body_text == "rate limited"
    assert response.is_closed
    assert stream.close_calls == 1


def test_classify_closes_even_when_read_fails():
    class BrokenStream(CountingStream):
        def __iter__(self):
            raise httpx.ReadError("reset")

    stream = BrokenStream([])
    response = httpx.Response(500, stream=stream, request=httpx.Request("GET", "https://api.example.test/x"))

    with pytest.raises(TransportError):
        classify(response)

    assert stream.close_calls == 1


def test_classify_undecodable_body_becomes_transport_error():
    stream = CountingStream([b"not gzip"])
    response = httpx.Response(
        502,
        headers={"Content-Encoding": "gzip"},
        stream=stream,
        request=httpx.Request("GET", "https://api.example.test/x"),
    )

    with pytest.raises(TransportError) as excinfo:
        classify(response)

    assert excinfo.value.category is ErrorCategory.PROTOCOL_ERROR
    assert stream.close_calls == 1


@pytest.mark.parametrize(
    ("explicit", "env", "expected"),
    [
        (None, None, logging.WARNING),
        (None, "debug", logging.DEBUG),
        ("error", "debug", logging.ERROR),
        ("nonsense", None, logging.WARNING),
    ],
)
def test_resolve_log_level_reads_env_at_call_time(monkeypatch, explicit, env, expected):
    if env is None:
        monkeypatch.delenv("NYLAS_LOG_LEVEL", raising=False)
    else:
        monkeypatch.setenv("NYLAS_LOG_LEVEL", env)
    assert resolve_log_level(explicit) == expected
