import math
from decimal import ROUND_HALF_UP, Decimal, localcontext

from domain.exceptions.currency import ConversionError, ConversionErrorReason
from domain.models.rates import ConversionResult, RateSnapshot

CENTS = Decimal('0.01')


def round_amount(value: float) -> float:
	"""Round to 2 decimal places, halves away from zero (2.675 -> 2.68)."""
	amount = Decimal(str(value))
	with localcontext() as ctx:
		# quantize needs every integer digit plus the two cents digits
		ctx.prec = max(28, amount.adjusted() + 3)
		return float(amount.quantize(CENTS, rounding=ROUND_HALF_UP))


class Converter:
	"""Stateless conversion through the snapshot's base currency."""

	def convert_raw(self, snapshot: RateSnapshot, from_code: str, to_code: str, amount: float) -> float:
		if isinstance(amount, bool) or not isinstance(amount, int | float) or not math.isfinite(amount):
			raise ConversionError(ConversionErrorReason.INVALID_AMOUNT, f'Amount must be a finite number, got {amount!r}')
		if amount < 0:
			raise ConversionError(ConversionErrorReason.INVALID_AMOUNT, f'Amount must not be negative, got {amount}')

		for code in (from_code, to_code):
			if not snapshot.has_currency(code):
				raise ConversionError(ConversionErrorReason.UNKNOWN_CURRENCY, f'Currency {code} is not available')

		base_amount = amount / snapshot.rate_for(from_code)
		return base_amount * snapshot.rate_for(to_code)

	def convert(self, snapshot: RateSnapshot, from_code: str, to_code: str, amount: float) -> ConversionResult:
		raw_value = self.convert_raw(snapshot, from_code, to_code, amount)
		return ConversionResult(
			from_currency=from_code,
			to_currency=to_code,
			amount=amount,
			raw_value=raw_value,
			value=round_amount(raw_value),
			rate=snapshot.rate_for(to_code) / snapshot.rate_for(from_code),
			base=snapshot.base,
			fetched_at=snapshot.fetched_at,
			as_of=snapshot.as_of,
		)
