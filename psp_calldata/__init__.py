"""ParaSwap calldata preparation for on-chain swap adapters."""

from psp_calldata.encoding import SwapCalldata
from psp_calldata.models import SwapRequest, SwapSide
from psp_calldata.orchestrator import RouteOrchestrator

__version__ = "0.1.0"
__all__ = ["RouteOrchestrator", "SwapCalldata", "SwapRequest", "SwapSide", "__version__"]
