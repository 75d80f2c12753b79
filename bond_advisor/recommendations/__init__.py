"""
Recommendation engine: turns a user's profile, holdings and planned
outflows into display-ready advice.

Modules
-------
market_tables    : static rate / allocation tables + ordered fallback lookups.
rollover         : analyze_rollovers(): reinvestment of assets maturing <= 90d.
diversification  : analyze_diversification(): allocation ranges, regional
                   and currency concentration.
laddering        : analyze_laddering(): maturity clustering and year gaps.
liquidity        : project_liquidity() + analyze_liquidity(): 24-month
                   shortfall / surplus projection and sale suggestions.
yield_commentary : analyze_yield(): regional weighted-YTM thresholds.
engine           : generate_recommendations(): runs all of the above.

Every analysis is a pure function with no I/O.
"""

from bond_advisor.recommendations.engine import generate_recommendations

__all__ = ["generate_recommendations"]
