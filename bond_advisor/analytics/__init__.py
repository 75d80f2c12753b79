"""
Portfolio analytics shared by the recommendation engine and the reports.

Modules
-------
valuation : market_value() + total_market_value() + weighted_average()
            + approximate_ytm(): pure functions over FixedIncomeAsset.
cashflow  : MonthlyCashFlow + build_monthly_cash_flows(): month buckets of
            maturities vs. planned outflows with a running position.
summary   : PortfolioSummary + summarize_portfolio(): headline statistics.
"""
