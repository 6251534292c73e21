"""
Wholesale Store Package

Quoting and pricing engine for a wholesale/retail store.
Resolves unit prices using Customer Type → Best Rule → Discount pipeline,
commits orders against catalog stock, and ranks products for free-text search.
"""

__version__ = "1.0.0"
