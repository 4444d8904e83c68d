import logging
from typing import Any, Optional, Union

from eth_typing import URI
from web3 import AsyncHTTPProvider
from web3.types import RPCEndpoint, RPCResponse


class LoggingAsyncHTTPProvider(AsyncHTTPProvider):
    logger = logging.getLogger("ContractProvider")

    def __init__(self, url: Optional[Union[URI, str]], request_timeout: float = 1000):
        super(LoggingAsyncHTTPProvider, self).__init__(url, request_kwargs={'timeout': request_timeout})

    async def make_request(self, method: RPCEndpoint, params: Any) -> RPCResponse:
        self.logger.debug(f"make_request: {method}, params : {params}")
        response = await AsyncHTTPProvider.make_request(self, method, params)
        return response
