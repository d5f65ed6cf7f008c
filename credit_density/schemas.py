"""Request and response schemas for density estimation."""

from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError


class InvalidParametersError(ValueError):
    """Request parameters could not be parsed."""


class PortfolioParameters(BaseModel):
    """Portfolio-level inputs of a density request.

    External names are camelCase; ``lambda`` is exposed as ``lambda_``.
    Only the types are checked, numeric ranges are not. Non-finite values
    (``NaN``, ``Infinity``) are not valid JSON and are rejected.
    """

    model_config = ConfigDict(frozen=True, strict=True, populate_by_name=True,
                              allow_inf_nan=False)

    lambda_: float = Field(..., alias="lambda", description="Liquidity cost scale")
    q: float = Field(..., description="Liquidation intensity")
    num_u: int = Field(..., alias="numU", ge=0, description="Number of frequency samples")
    pd: float = Field(..., description="Default probability of one loan")
    num_loans: float = Field(..., alias="numLoans", description="Number of loans")
    volatility: float = Field(..., description="Volatility of the systemic factor")


class DensityElement(BaseModel):
    """One point of the loss density."""

    model_config = ConfigDict(frozen=True, ser_json_inf_nan='null')

    density: float
    at_point: float = Field(..., serialization_alias="atPoint")


_density_elements = TypeAdapter(List[DensityElement])


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    field = ".".join(str(part) for part in first["loc"])
    if first["type"] == "missing":
        return f"missing field `{field}`"
    if not field:
        return first["msg"]
    return f"invalid field `{field}`: {first['msg']}"


def parse_parameters(body: Union[str, bytes, None]) -> PortfolioParameters:
    """Parse a JSON request body into PortfolioParameters.

    Raises:
        InvalidParametersError: If the body is empty, not JSON, or a field is
            missing or mistyped
    """
    if not body:
        raise InvalidParametersError("empty request body")
    try:
        return PortfolioParameters.model_validate_json(body)
    except ValidationError as exc:
        raise InvalidParametersError(_describe(exc)) from exc


def dump_density_elements(elements: List[DensityElement]) -> str:
    """Serialize density elements to a JSON array (non-finite values as null)."""
    return _density_elements.dump_json(elements, by_alias=True).decode()
