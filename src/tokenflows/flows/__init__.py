"""Client credentials token flows.

Classes:
    :class:`TokenFlows` -- blocking flows backed by :class:`httpx.Client`.
    :class:`AsyncTokenFlows` -- asyncio flows backed by :class:`httpx.AsyncClient`.

Both are constructed once per identity and share endpoint resolution,
parameter assembly and response validation through
:class:`~tokenflows.flows.base.BaseTokenFlows`.
"""

from tokenflows.flows.async_flows import AsyncTokenFlows
from tokenflows.flows.sync_flows import TokenFlows

__all__ = ["TokenFlows", "AsyncTokenFlows"]
