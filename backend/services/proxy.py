"""Generic pass-through handler: one inbound request, one upstream request."""

import logging
from typing import Any, Mapping
from urllib.parse import quote

from errors import MissingParameterError
from services.endpoints import ProxyEndpoint, template_fields
from services.upstream import UpstreamClient

logger = logging.getLogger(__name__)


class PassThroughProxy:
    def __init__(self, upstream: UpstreamClient):
        self._upstream = upstream

    def collect_params(
        self,
        endpoint: ProxyEndpoint,
        path_params: Mapping[str, str],
        query_params: Mapping[str, str] | None = None,
    ) -> dict[str, str]:
        """Pick the endpoint's known params, path params winning over query."""
        merged = {**(query_params or {}), **path_params}
        params = {}
        for name in endpoint.params:
            value = str(merged.get(name, "")).strip()
            if value:
                params[name] = value
            elif name in endpoint.required:
                raise MissingParameterError(name)
        return params

    async def forward(
        self,
        endpoint: ProxyEndpoint,
        path_params: Mapping[str, str],
        query_params: Mapping[str, str] | None = None,
    ) -> tuple[int, Any]:
        """Forward to the upstream and return (status_code, JSON body).

        Missing required params raise before any network call.
        """
        params = self.collect_params(endpoint, path_params, query_params)

        in_path = template_fields(endpoint.upstream_path)
        path = endpoint.upstream_path.format(**{name: quote(params[name], safe="") for name in in_path})
        rest = {k: v for k, v in params.items() if k not in in_path}

        logger.debug("Forwarding %s to %s %s", endpoint.name, endpoint.method, path)
        if endpoint.method == "POST":
            return await self._upstream.request_json("POST", path, form=rest)
        return await self._upstream.request_json(endpoint.method, path, params=rest)
