"""mysms SMS gateway client."""

from __future__ import annotations

import json
import logging

from .base import BaseClient
from .exceptions import ClientResponseError, GatewayRejectedError

logger = logging.getLogger(__name__)


class MysmsClient(BaseClient):
    """Client for the mysms REST API message send call.

    API Details:
        Endpoint: https://api.mysms.com/json/message/send
        Method: GET
        Authentication: api_key, msisdn and password query parameters
        Response: JSON object with an integer 'errorCode' (0 = success)
    """

    SERVICE_NAME = "mysms"
    DEFAULT_ENDPOINT = "https://api.mysms.com/json/message/send"

    def __init__(self, endpoint: str = DEFAULT_ENDPOINT, **kwargs) -> None:
        super().__init__(endpoint, **kwargs)

    def send(
        self,
        api_key: str,
        sender_id: str,
        password: str,
        recipient: str,
        message: str,
    ) -> None:
        """Send one text message.

        Args:
            api_key: mysms API key
            sender_id: Sender account phone number (msisdn)
            password: Sender account password
            recipient: Destination phone number
            message: Message text

        Raises:
            ClientHTTPError: On transport failure or non-200 status
            ClientTimeoutError: On request timeout
            ClientResponseError: If the response body is not the expected JSON envelope
            GatewayRejectedError: If the gateway answered with a non-zero errorCode
        """
        params = {
            "api_key": api_key,
            "msisdn": sender_id,
            "password": password,
            "recipient": recipient,
            "message": message,
        }

        # Query string carries credentials, so only the endpoint is logged
        response = self._get(self.endpoint, params=params, log_url=self.endpoint)
        body = self._read_body(response)

        error_code = self._parse_error_code(body)
        if error_code != 0:
            logger.error(
                f"mysms rejected message to {recipient} with error {error_code}",
                extra={
                    "event": "client.gateway.rejected",
                    "recipient": recipient,
                    "error_code": error_code,
                },
            )
            raise GatewayRejectedError(
                f"Send message request failed with error: {error_code}",
                error_code=error_code,
                recipient=recipient,
            )

        logger.debug(
            f"mysms accepted message to {recipient}",
            extra={"event": "client.gateway.accepted", "recipient": recipient},
        )

    @staticmethod
    def _parse_error_code(body: str) -> int:
        """Extract errorCode from the gateway's JSON envelope."""
        try:
            envelope = json.loads(body)
        except ValueError as e:
            raise ClientResponseError(f"Failed to parse mysms response as JSON: {e}") from e

        if not isinstance(envelope, dict) or "errorCode" not in envelope:
            raise ClientResponseError(
                f"mysms response has no errorCode field: {body[:200]!r}"
            )

        try:
            return int(envelope["errorCode"])
        except (TypeError, ValueError) as e:
            raise ClientResponseError(
                f"mysms errorCode is not an integer: {envelope['errorCode']!r}"
            ) from e
