# -*- coding: utf-8 -*-

import re
from unittest import mock

import pytest
import requests

import shapeval
from shapeval import remote

Person = shapeval.object_({"name": shapeval.string()})


def test_unit__fetch__ok__nominal_case() -> None:
    with mock.patch("requests.get") as mock_get:
        mock_get.return_value.status_code = 200
        mock_get.return_value.content = b'{"name": "Luke", "height": "172"}'

        person = remote.fetch("https://swapi.dev/api/people/1", Person)
        assert {"name": "Luke"} == person

    mock_get.assert_called_once_with(
        "https://swapi.dev/api/people/1", timeout=remote.DEFAULT_TIMEOUT
    )


def test_unit__fetch__ok__with_session() -> None:
    session = mock.Mock(spec=requests.Session)
    session.get.return_value.content = b'{"name": "Luke"}'

    assert {"name": "Luke"} == remote.fetch("https://x.io", Person, session, timeout=2)
    session.get.assert_called_once_with("https://x.io", timeout=2)


def test_unit__fetch__err__http_error() -> None:
    with mock.patch("requests.get") as mock_get:
        mock_get.return_value.raise_for_status.side_effect = (
            requests.exceptions.HTTPError("404 Client Error")
        )

        with pytest.raises(requests.exceptions.HTTPError):
            remote.fetch("https://x.io", Person)


def test_unit__fetch__err__network_error() -> None:
    with mock.patch("requests.get", side_effect=requests.exceptions.ConnectionError):
        with pytest.raises(requests.exceptions.ConnectionError):
            remote.fetch("https://x.io", Person)


def test_unit__fetch__err__invalid_payload() -> None:
    with mock.patch("requests.get") as mock_get:
        mock_get.return_value.content = b'{"results": []}'

        with pytest.raises(shapeval.ValidationError, match="Required"):
            remote.fetch("https://x.io", Person)


def test_unit__fetch__err__not_json() -> None:
    with mock.patch("requests.get") as mock_get:
        mock_get.return_value.content = b"<html>Bad Gateway</html>"

        with pytest.raises(
            shapeval.ValidationError, match=re.escape("Invalid JSON")
        ) as exc_info:
            remote.fetch("https://x.io", Person)

    assert 1 == len(exc_info.value.errors)
    assert shapeval.ErrorKind.INVALID_JSON == exc_info.value.errors[0].kind
    assert () == exc_info.value.errors[0].path
