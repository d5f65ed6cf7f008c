"""Request boundary: JSON parameters in, JSON density out.

Framework independent; a web or function-as-a-service runtime passes the raw
body to :func:`handle_request` and relays the returned :class:`Response`.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Union

from .config import DensityConfig
from .engine import DensityEngine
from .schemas import InvalidParametersError, dump_density_elements, parse_parameters

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Credentials": "true",
}


@dataclass
class Response:
    """Status, headers and body to hand back to the caller."""
    status_code: int
    body: str
    headers: Dict[str, str] = field(default_factory=dict)

    def json(self):
        """Decoded body."""
        return json.loads(self.body)


def build_response(status_code: int, body: str) -> Response:
    """Response with CORS and JSON content-type headers."""
    headers = dict(CORS_HEADERS)
    headers["Content-Type"] = "application/json"
    return Response(status_code=status_code, body=body, headers=headers)


def construct_error(message: str) -> str:
    """JSON error payload."""
    return json.dumps({"err": message})


def handle_request(body: Union[str, bytes, None],
                   config: Optional[DensityConfig] = None) -> Response:
    """Compute the loss density for a JSON request body.

    Malformed parameters give a 400 response with an error payload;
    numerically degenerate but well-formed parameters still succeed.
    """
    try:
        parameters = parse_parameters(body)
    except InvalidParametersError as exc:
        logger.warning("Rejected density request: %s", exc)
        return build_response(400, construct_error(str(exc)))

    result = DensityEngine(config).compute(parameters)
    return build_response(200, dump_density_elements(result.to_elements()))
