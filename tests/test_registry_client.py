"""Tests for the package registry client."""

from unittest.mock import MagicMock

import pytest
import requests

from patchkit.core.exceptions import RegistryResolutionFailed
from patchkit.registry import PackageRegistryClient


def _client(payload=None, **session_kwargs):
    session = MagicMock()
    response = MagicMock()
    response.json.return_value = payload
    session.get.return_value = response
    for name, value in session_kwargs.items():
        setattr(session.get, name, value)
    return PackageRegistryClient(registry_url="https://registry.example/", session=session), session, response


class TestResolveLatest:
    def test_uses_first_release(self):
        client, session, _ = _client({"releases": [{"version": "3.4.1"}, {"version": "3.4.0"}]})

        assert client.resolve_latest("ash") == "~> 3.4"
        session.get.assert_called_once_with(
            "https://registry.example/api/packages/ash",
            headers={"User-Agent": "patchkit-installer"},
            timeout=30,
        )

    def test_zero_major_keeps_patch(self):
        client, _, _ = _client({"releases": [{"version": "0.2.10"}]})
        assert client.resolve_latest("igniter") == "~> 0.2.10"

    def test_latest_version(self):
        client, _, _ = _client({"releases": [{"version": "2.0.0-rc.1"}]})
        assert client.latest_version("ash") == "2.0.0-rc.1"
        assert client.resolve_latest("ash") == "== 2.0.0-rc.1"


class TestResolutionFailures:
    def test_bad_status(self):
        client, _, response = _client({})
        response.raise_for_status.side_effect = requests.HTTPError("404 Client Error")

        with pytest.raises(RegistryResolutionFailed, match="Could not determine source for requested package `ash`"):
            client.resolve_latest("ash")

    def test_timeout(self):
        client, _, _ = _client(side_effect=requests.Timeout())

        with pytest.raises(RegistryResolutionFailed, match="timed out"):
            client.resolve_latest("ash")

    def test_connection_error(self):
        client, _, _ = _client(side_effect=requests.ConnectionError("refused"))

        with pytest.raises(RegistryResolutionFailed, match="request failed"):
            client.resolve_latest("ash")

    def test_malformed_json(self):
        client, _, response = _client()
        response.json.side_effect = ValueError("Expecting value")

        with pytest.raises(RegistryResolutionFailed, match="malformed JSON"):
            client.resolve_latest("ash")

    @pytest.mark.parametrize("payload", [{"releases": []}, {}, [], {"releases": "3.0.0"}])
    def test_no_releases(self, payload):
        client, _, _ = _client(payload)

        with pytest.raises(RegistryResolutionFailed, match="no releases"):
            client.resolve_latest("ash")

    def test_release_without_version(self):
        client, _, _ = _client({"releases": [{"inserted_at": "2024-01-01"}]})

        with pytest.raises(RegistryResolutionFailed, match="no version"):
            client.resolve_latest("ash")

    def test_invalid_version(self):
        client, _, _ = _client({"releases": [{"version": "nightly"}]})

        with pytest.raises(RegistryResolutionFailed, match="invalid version"):
            client.resolve_latest("ash")


class TestConfiguration:
    def test_registry_url_from_environment(self, monkeypatch):
        monkeypatch.setenv("PATCHKIT_REGISTRY_URL", "https://mirror.example/")
        client = PackageRegistryClient(session=MagicMock())
        assert client.registry_url == "https://mirror.example"

    def test_defaults(self):
        client = PackageRegistryClient(session=MagicMock())
        assert client.registry_url == "https://hex.pm"
        assert client.user_agent == "patchkit-installer"
        assert client.timeout == 30

    def test_explicit_settings(self):
        client = PackageRegistryClient("https://r.example", user_agent="ua", timeout=5, session=MagicMock())
        assert (client.registry_url, client.user_agent, client.timeout) == ("https://r.example", "ua", 5)
