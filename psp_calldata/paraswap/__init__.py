"""ParaSwap aggregator collaborators: quoting and transaction building."""

from psp_calldata.paraswap.base import RateProvider, TransactionBuilder
from psp_calldata.paraswap.client import ParaSwapClient
from psp_calldata.paraswap.mock import MockParaSwap

__all__ = ["MockParaSwap", "ParaSwapClient", "RateProvider", "TransactionBuilder"]
