from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, AliasChoices, ValidationError, field_validator, model_validator

from acb_tracker.exceptions import InvalidTransactionError
from acb_tracker.models import TransactionType, TRANSACTION_CLASSES
from acb_tracker.models.domain import Transaction


class TransactionRecord(BaseModel):
    """
    Raw transaction as supplied by a caller or a ledger file.

    Accepts snake_case keys as well as the camelCase keys of exported ledgers
    (numShares, totalPriceCents, commissionFeeCents, amountPerShare,
    transactionType, sortOrder).
    """
    model_config = ConfigDict(extra="ignore", frozen=True, allow_inf_nan=False)

    transaction_id: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("transaction_id", "transactionId", "id", "_id")
    )
    date: datetime
    type: TransactionType = Field(
        validation_alias=AliasChoices("type", "transaction_type", "transactionType")
    )
    num_shares: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("num_shares", "numShares")
    )
    total_amount_cents: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("total_amount_cents", "total_price_cents", "totalPriceCents"),
    )
    amount_per_share: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("amount_per_share", "amountPerShare")
    )
    commission_fee_cents: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("commission_fee_cents", "commissionFeeCents")
    )
    sort_order: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("sort_order", "sortOrder")
    )

    @field_validator("date")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @model_validator(mode="after")
    def check_shape(self) -> "TransactionRecord":
        if self.num_shares is not None and self.num_shares == 0:
            raise ValueError("Number of shares cannot be zero")
        if self.type != TransactionType.RETURN_OF_CAPITAL:
            if self.num_shares is None:
                raise ValueError("Number of shares is required for this transaction type")
            if self.total_amount_cents is None:
                raise ValueError("Total price is required for this transaction type")
        if self.total_amount_cents is not None and self.total_amount_cents < 0:
            raise ValueError("Total price cannot be negative")
        if self.commission_fee_cents is not None and self.commission_fee_cents < 0:
            raise ValueError("Commission fee cannot be negative")
        if self.type == TransactionType.RETURN_OF_CAPITAL:
            if self.amount_per_share is None:
                raise ValueError(
                    "Return of capital per share is required for return of capital transactions"
                )
            if self.amount_per_share < 0:
                raise ValueError("Return of capital per share cannot be negative")
        return self

    def to_transaction(self, transaction_id: str, sort_order: int) -> Transaction:
        """Build the typed transaction, dropping fields the kind does not carry."""
        cls = TRANSACTION_CLASSES[self.type]
        fee = self.commission_fee_cents or 0

        if self.type == TransactionType.RETURN_OF_CAPITAL:
            return cls(
                transaction_id=transaction_id,
                date=self.date,
                sort_order=sort_order,
                amount_per_share=self.amount_per_share,
                commission_fee_cents=fee,
            )
        return cls(
            transaction_id=transaction_id,
            date=self.date,
            sort_order=sort_order,
            num_shares=self.num_shares,
            total_amount_cents=self.total_amount_cents,
            commission_fee_cents=fee,
        )


def parse_record(raw: Any) -> TransactionRecord:
    """Validate a raw mapping, raising InvalidTransactionError on any problem."""
    if isinstance(raw, TransactionRecord):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidTransactionError(f"Expected a mapping, got {type(raw).__name__}")
    try:
        return TransactionRecord.model_validate(raw)
    except ValidationError as e:
        messages = "; ".join(_format_error(err) for err in e.errors())
        raise InvalidTransactionError(messages) from e


def _format_error(err: dict) -> str:
    loc = ".".join(str(part) for part in err.get("loc", ()))
    msg = err.get("msg", "invalid value")
    # Model-level checks have no location
    return f"{loc}: {msg}" if loc else msg
