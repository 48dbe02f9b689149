import logging
import typing

import requests

from shapeval.schema import Schema

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


def fetch(
    url: str,
    schema: Schema,
    session: typing.Optional[requests.Session] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> typing.Any:
    """
    Gets the JSON document at url and parses it with schema.

    Network errors and HTTP error statuses are raised as requests exceptions.
    A body which is not JSON is raised as a ValidationError of kind
    INVALID_JSON, a document not matching schema as a ValidationError
    listing its failures.

    :param url: the URL to get
    :param schema: schema the decoded document must conform to
    :param session: session to use, a new connection is made if None
    :param timeout: seconds to wait for the server
    """
    getter = session.get if session is not None else requests.get
    logger.debug("GET %s", url)
    response = getter(url, timeout=timeout)
    logger.debug("GET %s returned %s", url, response.status_code)
    response.raise_for_status()
    return schema.parse_json(response.content)
