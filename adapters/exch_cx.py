from __future__ import annotations
"""exch.cx API client.

Every call goes through HttpClient.request, which consults the client's
admission policy first: a denied call raises RateLimitExceeded and sends nothing.
"""
import logging, httpx
from datetime import timedelta
from typing import Any, Dict, Optional, Type, TypeVar
from pydantic import BaseModel, ValidationError
from core.config import Settings
from core.errors import DecodeError, InvalidRequest
from core.http import HttpClient
from core.ratelimit import Admission, NoLimit, configure
from interfaces.exchange import (
	CreateOrderResponse, Currency, CryptoCurrency, OrderOptions, OrderResponse, ResultResponse, VolumeResponse,
)

EXCH_API = "https://exch.cx/api"

logger = logging.getLogger("ExchClient")

M = TypeVar("M", bound=BaseModel)

def _code(currency: Currency) -> str:
	return currency.value if isinstance(currency, CryptoCurrency) else str(currency)

class ExchClient:
	name = "exch_cx"
	def __init__(self, api_key: str = "", *, base_url: str = EXCH_API, http_client: Optional[httpx.Client] = None,
				 limiter: Optional[Admission] = None, timeout: float = 15.0) -> None:
		self.http = HttpClient(base_url, timeout=timeout, limiter=limiter, api_key=api_key, client=http_client)

	@classmethod
	def from_settings(cls, settings: Settings) -> "ExchClient":
		return cls(settings.API_KEY, base_url=settings.BASE_URL, limiter=settings.limiter(), timeout=settings.TIMEOUT)

	# -------------------- configuration -------------------- #
	@property
	def limiter(self) -> Admission:
		return self.http.limiter

	def set_rate_limiter(self, capacity: int, refill_interval: float | timedelta) -> None:
		self.http.limiter = configure(capacity, refill_interval)

	def disable_rate_limiter(self) -> None:
		self.http.limiter = NoLimit()

	def use_http_client(self, client: httpx.Client) -> None:
		self.http.use_client(client)

	def close(self) -> None:
		self.http.close()

	def __enter__(self) -> "ExchClient":
		return self

	def __exit__(self, *exc) -> None:
		self.close()

	# -------------------- plumbing -------------------- #
	def _get(self, path: str, model: Type[M], params: Optional[Dict[str, str]] = None) -> M:
		data = self.http.get_json(path, params)
		try:
			return model.model_validate(data)
		except ValidationError as e:
			raise DecodeError(path, str(e)) from e

	@staticmethod
	def _require_id(order_id: str) -> Dict[str, str]:
		if not order_id:
			raise InvalidRequest("order id is required")
		return {"orderid": order_id}

	# -------------------- endpoints -------------------- #
	def volume(self) -> VolumeResponse:
		"""24h volume per currency."""
		return self._get("volume", VolumeResponse)

	def status(self) -> Dict[str, Any]:
		"""Network statuses, returned as decoded JSON."""
		data = self.http.get_json("status")
		if not isinstance(data, dict):
			raise DecodeError("status", f"expected an object, got {type(data).__name__}")
		return data

	def order(self, from_: Currency, to: Currency, address: str, opts: Optional[OrderOptions] = None) -> CreateOrderResponse:
		if not from_ or not to or not address:
			raise InvalidRequest("from, to, and address are required")
		params = {"from_currency": _code(from_), "to_currency": _code(to), "to_address": address}
		if opts is not None:
			params.update(opts.to_params())
		res = self._get("create", CreateOrderResponse, params)
		logger.info(f"✅ Order created {res.order_id}: {_code(from_)} -> {_code(to)}")
		return res

	def get_order(self, order_id: str) -> OrderResponse:
		return self._get("order", OrderResponse, self._require_id(order_id))

	def refund(self, order_id: str) -> ResultResponse:
		return self._get("order/refund", ResultResponse, self._require_id(order_id))

	def confirm_refund(self, order_id: str) -> ResultResponse:
		return self._get("order/refund_confirm", ResultResponse, self._require_id(order_id))

	def revalidate_address(self, order_id: str, address: str) -> ResultResponse:
		if not order_id or not address:
			raise InvalidRequest("id and address are required")
		return self._get("order/revalidate_address", ResultResponse, {"orderid": order_id, "to_address": address})

	def remove(self, order_id: str) -> ResultResponse:
		"""Delete order data on the exchange side."""
		return self._get("order/remove", ResultResponse, self._require_id(order_id))
