from __future__ import annotations
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field

class CryptoCurrency(str, Enum):
    MONERO = "XMR"
    LITECOIN = "LTC"
    ETHEREUM = "ETH"
    DASH = "DASH"
    BITCOIN_LIGHTNING = "BTCLN"
    BITCOIN = "BTC"
    USDC_ERC20 = "USDC"
    TETHER_ERC20 = "USDT"
    DAI = "DAI"

# Codes inconnus conservés tels quels
Currency = Annotated[Union[CryptoCurrency, str], Field(union_mode="left_to_right")]

class OrderOptions(BaseModel):
    """Optional parameters of a create-order call.

    refund_address: refund destination if the exchange fails (REFUND_REQUEST state).
    rate_mode: "flat" or "dynamic" (server default: dynamic).
    referrer_id: referral identifier, sent as ``ref``.
    fee_option: network fee, "s" slow, "m" medium, "f" quick (server default: f).
    aggregation: BTC aggregation; True aggregated, False mixed, None server default.
    """
    refund_address: str | None = None
    rate_mode: Literal["flat", "dynamic"] | None = None
    referrer_id: str | None = None
    fee_option: Literal["s", "m", "f"] | None = None
    aggregation: bool | None = None

    def to_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.refund_address:
            params["refund_address"] = self.refund_address
        if self.rate_mode:
            params["rate_mode"] = self.rate_mode
        if self.referrer_id:
            params["ref"] = self.referrer_id
        if self.fee_option:
            params["fee_option"] = self.fee_option
        if self.aggregation is not None:
            params["aggregation"] = "yes" if self.aggregation else "no"
        return params

class CreateOrderResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    order_id: str = Field(alias="orderid")

class Volume(BaseModel):
    volume: str

class VolumeResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    bitcoin: Optional[Volume] = Field(default=None, alias="BTC")
    bitcoin_lightning: Optional[Volume] = Field(default=None, alias="BTCLN")
    dai: Optional[Volume] = Field(default=None, alias="DAI")
    dash: Optional[Volume] = Field(default=None, alias="DASH")
    ethereum: Optional[Volume] = Field(default=None, alias="ETH")
    litecoin: Optional[Volume] = Field(default=None, alias="LTC")
    usdc: Optional[Volume] = Field(default=None, alias="USDC")
    usdt: Optional[Volume] = Field(default=None, alias="USDT")
    monero: Optional[Volume] = Field(default=None, alias="XMR")

    def get(self, currency: Currency) -> Optional[Volume]:
        code = currency.value if isinstance(currency, CryptoCurrency) else str(currency).upper()
        for name, field in type(self).model_fields.items():
            if field.alias == code:
                return getattr(self, name)
        return None

class OrderResponse(BaseModel):
    created: int
    from_addr: str = ""
    from_amount_received: Optional[str] = None
    from_currency: Currency
    max_input: str = ""
    min_input: str = ""
    network_fee: int = 0
    orderid: str
    rate: str = ""
    rate_mode: str = ""
    state: str
    svc_fee: str = ""
    to_address: str = ""
    to_amount: Optional[str] = None
    to_currency: Currency
    transaction_id_received: Optional[str] = None
    transaction_id_sent: Optional[str] = None

    @property
    def date(self) -> datetime:
        return datetime.fromtimestamp(self.created, tz=timezone.utc)

class ResultResponse(BaseModel):
    error: str = ""
    result: bool = False
