"""Node discovery and ping dispatch."""

from typing import Dict, List
from loguru import logger
from pydantic import ValidationError
from .client import ApiClient, ApiError
from .models import Node


def auth_headers(token: str) -> Dict[str, str]:
    return {
        "Authorization": f"Bearer {token}",
        "Accept": "application/json",
    }


class NodeManager:
    """Resolves a token's nodes and pings them."""

    def __init__(self, api_client: ApiClient):
        self.api_client = api_client

    def get_nodes(self, token: str) -> List[Node]:
        """Get the nodes registered to `token`. Request failures yield []."""
        try:
            data = self.api_client.request("get", "/api/v1/nodes", None, auth_headers(token))
        except ApiError as e:
            logger.error(f"Failed to get nodes: {e}")
            return []
        if data is None:
            return []
        if not isinstance(data, list):
            raise ValueError(f"Unexpected node list payload: {data!r}")
        nodes = []
        for item in data:
            try:
                nodes.append(Node.model_validate(item))
            except ValidationError as e:
                logger.error(f"Skipping malformed node entry {item!r}: {e.error_count()} validation error(s)")
        return nodes

    def ping_node(self, token: str, node_id: str) -> bool:
        """Ping a single node. Returns True iff the service answers 'ok'."""
        try:
            response = self.api_client.request(
                "post", f"/api/v1/nodes/{node_id}/ping", {}, auth_headers(token)
            )
        except ApiError as e:
            logger.error(f"Failed to ping node: {e}")
            return False
        return isinstance(response, dict) and response.get("status") == "ok"
