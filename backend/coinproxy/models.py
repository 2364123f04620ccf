"""Inbound request bodies for the proxy endpoints."""

from typing import Type, TypeVar

from pydantic import BaseModel, Field, ValidationError

from coinproxy.errors import BadRequest

ModelT = TypeVar("ModelT", bound=BaseModel)


class BalancesRequest(BaseModel):
    chain_id: int
    address: str = Field(..., min_length=1)


class TransactionRequest(BaseModel):
    chain_id: int
    transaction_id: str = Field(..., min_length=1)


class TransactionsRequest(BaseModel):
    contract: str = Field(..., min_length=1)
    wallet: str = Field(..., min_length=1)


class PriceRequest(BaseModel):
    code: str = Field(..., min_length=1)
    # Milliseconds since the epoch; 0 asks for the current price.
    timestamp: int = Field(default=0, ge=0)


class CurrentPriceRequest(BaseModel):
    code: str = Field(..., min_length=1)


def parse_body(raw: bytes, model: Type[ModelT]) -> ModelT:
    """Validate a raw JSON body against *model*, raising :class:`BadRequest`."""
    try:
        return model.model_validate_json(raw or b"")
    except ValidationError as exc:
        raise BadRequest(
            f"{model.__name__}: {exc.error_count()} validation error(s): "
            + "; ".join(f"{'.'.join(map(str, err['loc'])) or 'body'} {err['msg']}" for err in exc.errors())
        ) from exc
