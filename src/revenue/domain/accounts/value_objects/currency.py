"""Currency value object for account billing currencies."""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

# ISO 4217 currency codes accepted for billing
SUPPORTED_CURRENCIES: set[str] = {
    "USD",
    "EUR",
    "GBP",
    "CHF",
    "JPY",
    "CAD",
    "AUD",
    "SEK",
    "NOK",
    "DKK",
    "PLN",
    "CNY",
    "INR",
    "BRL",
}

DEFAULT_CURRENCY = "USD"


class Currency(BaseModel):
    """Value object representing a billing currency."""

    code: str

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
    )

    # positional construction: Currency("USD")
    def __init__(self, code: str | None = None, **data: Any):
        if "code" not in data:
            data["code"] = code
        super().__init__(**data)

    @field_validator("code")
    @classmethod
    def validate_and_normalize_code(cls, v: Any) -> str:
        if not v or len(str(v).strip()) == 0:
            msg = "Currency code cannot be empty"
            raise ValueError(msg)

        normalized_code = str(v).upper().strip()

        if len(normalized_code) != 3 or not normalized_code.isalpha():
            msg = f"Currency code must be 3 letters: {normalized_code}"
            raise ValueError(msg)

        if normalized_code not in SUPPORTED_CURRENCIES:
            supported = sorted(SUPPORTED_CURRENCIES)
            msg = (
                f"Unsupported currency code: {normalized_code}. Supported: {supported}"
            )
            raise ValueError(msg)

        return normalized_code

    @classmethod
    def default(cls) -> "Currency":
        return cls(DEFAULT_CURRENCY)

    def __str__(self) -> str:
        return self.code

    def __eq__(self, other) -> bool:
        if isinstance(other, Currency):
            return self.code == other.code
        if isinstance(other, str):
            return self.code == other.upper()
        return False

    def __hash__(self) -> int:
        return hash(self.code)
