from typing import Any, Union

from eth_typing import URI
from web3 import AsyncWeb3

from contract_binding.module.provider import LoggingAsyncHTTPProvider
from contract_binding.module.transport import Transport
from contract_binding.module.web3_transport import Web3Transport


class TransportBuilder:
    @classmethod
    def build(cls, url: Union[URI, str]) -> Web3Transport:
        provider = LoggingAsyncHTTPProvider(url)
        return Web3Transport(AsyncWeb3(provider))

    @classmethod
    def from_provider(cls, provider: Any) -> Transport:
        """Accepts a transport, an RPC url or any async web3 provider."""
        if isinstance(provider, Transport):
            return provider
        if isinstance(provider, AsyncWeb3):
            return Web3Transport(provider)
        if isinstance(provider, str):
            return cls.build(provider)
        return Web3Transport(AsyncWeb3(provider))
