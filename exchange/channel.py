"""
Trade Channel
Signed calls to the private trading endpoint and public data fetches
"""

from typing import Mapping

from .errors import ExchangeError
from .response import ResponseTree
from .signer import RequestSigner


class TradeChannel:
    """
    Authenticated RPC channel

    Every private call is a form-encoded POST to a single endpoint, the
    remote operation being selected by the 'method' parameter.
    """

    def __init__(self, config, logger, transport, signer: RequestSigner):
        """
        Args:
            config: Configuration object
            logger: Logger instance
            transport: Object with get(path) and post(path, headers, body)
            signer: Request signer holding the API secret and nonce
        """
        self.config = config
        self.logger = logger
        self.transport = transport
        self.signer = signer
        self.api_key = config.WEX_API_KEY
        self.trade_path = config.WEX_TRADE_API_PATH
        self.public_path = config.WEX_PUBLIC_API_PATH

    def _headers(self, signature: str):
        return {
            'Content-Type': 'application/x-www-form-urlencoded',
            'Key': self.api_key,
            'Sign': signature,
        }

    def post(self, params: Mapping[str, str]) -> ResponseTree:
        """
        Sign and send params, returning the decoded response as-is

        The caller inspects response.error itself.
        """
        if 'method' not in params:
            raise ValueError("Private call parameters must include 'method'")

        body, signature = self.signer.sign(params)
        self.logger.debug(f"Signed request: {body}")
        text = self.transport.post(self.trade_path, self._headers(signature), body)
        return ResponseTree.parse(text)

    def call(self, params: Mapping[str, str]) -> ResponseTree:
        """
        Sign and send params, raising ExchangeError on a reported error

        Args:
            params: Request parameters including 'method'

        Returns:
            Decoded response tree
        """
        response = self.post(params)
        if response.error:
            self.logger.error(
                f"Exchange error: {response.error}",
                method=params['method']
            )
            raise ExchangeError(response.error, params['method'])
        return response

    def public_get(self, resource: str) -> ResponseTree:
        """Fetch a public API resource such as 'info' or 'ticker/ltc_btc'"""
        text = self.transport.get(f"{self.public_path}/{resource}")
        return ResponseTree.parse(text)
