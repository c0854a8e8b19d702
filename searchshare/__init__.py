"""
Search Share Insights Engine

Turns ranked keyword and brand keyword data into SEO recommendations:
1. Visibility metrics (Share of Search, Share of Voice, Growth Gap)
2. Opportunity detection (quick wins, hidden gems, content gaps)
3. Risk detection (keyword cannibalization, competitor strength)
4. A prioritized action list
"""

__version__ = "0.1.0"
