"""Pricer for FX non-deliverable forwards (CIP-based valuation)."""

from __future__ import annotations

from riskcalc.basics import CurrencyAmount, FxRate, MultiCurrencyAmount
from riskcalc.lookup import RatesMarketData
from riskcalc.products.fx import ResolvedFxNdf


class DiscountingFxNdfPricer:
    """
    Pricer for NDFs by discounting.

    With N the settlement notional, K the agreed rate and F the forward rate
    (both as units of the non-deliverable currency per settlement unit):
    PV (settlement currency) = N * (1 - K / F) * DF_settle(payment).
    F comes from covered interest rate parity, F = spot * DF_settle / DF_other,
    until the fixing is known.
    """

    def forward_fx_rate(self, ndf: ResolvedFxNdf, provider: RatesMarketData) -> FxRate:
        settle = ndf.settlement_currency
        other = ndf.non_deliverable_currency
        rate = provider.fx_index_rate(ndf.index, ndf.fixing_date, ndf.payment_date, settle)
        return FxRate.of(settle, other, rate)

    def present_value(self, ndf: ResolvedFxNdf, provider: RatesMarketData) -> CurrencyAmount:
        settle = ndf.settlement_currency
        if ndf.payment_date < provider.valuation_date:
            return CurrencyAmount.zero(settle)
        notional = ndf.settlement_currency_notional.amount
        agreed = ndf.agreed_fx_rate.fx_rate(settle, ndf.non_deliverable_currency)
        forward = self.forward_fx_rate(ndf, provider).rate
        df_settle = provider.discount_factor(settle, ndf.payment_date)
        return CurrencyAmount(settle, notional * (1.0 - agreed / forward) * df_settle)

    def currency_exposure(self, ndf: ResolvedFxNdf, provider: RatesMarketData) -> MultiCurrencyAmount:
        """
        Exposure by currency. Before fixing the trade is long N * DF_settle in the
        settlement currency and short N * K * DF_other in the other currency;
        converting at spot gives the present value. Once fixed, all of the value
        sits in the settlement currency.
        """
        settle = ndf.settlement_currency
        other = ndf.non_deliverable_currency
        if ndf.payment_date < provider.valuation_date:
            return MultiCurrencyAmount()
        if ndf.fixing_date < provider.valuation_date:
            return MultiCurrencyAmount.of(self.present_value(ndf, provider))
        notional = ndf.settlement_currency_notional.amount
        agreed = ndf.agreed_fx_rate.fx_rate(settle, other)
        df_settle = provider.discount_factor(settle, ndf.payment_date)
        df_other = provider.discount_factor(other, ndf.payment_date)
        return MultiCurrencyAmount.of(
            CurrencyAmount(settle, notional * df_settle),
            CurrencyAmount(other, -notional * agreed * df_other),
        )

    def current_cash(self, ndf: ResolvedFxNdf, provider: RatesMarketData) -> CurrencyAmount:
        """Settlement amount if paid on the valuation date, zero otherwise."""
        settle = ndf.settlement_currency
        if ndf.payment_date != provider.valuation_date:
            return CurrencyAmount.zero(settle)
        notional = ndf.settlement_currency_notional.amount
        agreed = ndf.agreed_fx_rate.fx_rate(settle, ndf.non_deliverable_currency)
        forward = self.forward_fx_rate(ndf, provider).rate
        return CurrencyAmount(settle, notional * (1.0 - agreed / forward))
